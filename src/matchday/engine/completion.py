"""Tournament completion detection."""

# Matchday
# Copyright (C) 2025  Matchday developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from matchday.constants import STATUS_COMPLETED, TYPE_LEAGUE
from matchday.models import Tournament
from matchday.utils import setup_logger

logger = setup_logger(__name__)


def is_finished(tournament: Tournament) -> bool:
    """Have the terminal conditions of the tournament's format been met?

    - League: at least one fixture and every fixture played.
    - Bracket phase: the highest round is the final (the round the bracket
      narrows to a single tie, one or two legs) and all of its matches are
      played.
    - Hybrid group stage: never.
    """
    if not tournament.fixtures:
        return False

    if tournament.type == TYPE_LEAGUE:
        return all(m.is_played for m in tournament.fixtures)

    if not tournament.is_bracket_phase:
        return False

    last_round = tournament.rounds[-1]
    if tournament.bracket_tie_count(last_round.round_order) != 1:
        return False
    return last_round.is_complete


def check_completion(tournament: Tournament) -> Tournament:
    """Return a snapshot marked COMPLETED when the tournament is over.

    A completed tournament is returned as is; its status never reverts.
    """
    updated = tournament.copy()
    if updated.is_completed:
        return updated

    if is_finished(updated):
        updated.status = STATUS_COMPLETED
        logger.info("%s is complete", updated.name)
    return updated
