"""Knockout progression.

Once both ties feeding the same next-round slot are decided, the two winners
are drawn against each other in the next round. Ties are located by their
slot index: the ties in slots ``2k`` and ``2k + 1`` feed slot ``k``.
"""

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

from typing import List, Optional

from matchday.constants import FIRST_KNOCKOUT_ROUND_ORDER
from matchday.engine.fixtures import knockout_round_name, tie_matches
from matchday.models import Match, Tie, Tournament
from matchday.utils import setup_logger

logger = setup_logger(__name__)


def tie_winner(tie: Tie) -> Optional[str]:
    """Winner of a completed tie.

    Higher aggregate wins; a level two-legged tie goes to away goals; a tie
    that is still level falls back to the first-encountered participant.
    """
    winner = tie.winner_id()
    if winner is not None and tie.is_level:
        logger.warning(
            "Tie %s vs %s is level after %d match(es); advancing %s",
            tie.first_id,
            tie.second_id,
            len(tie.matches),
            winner,
        )
    return winner


def _advance_in_place(tournament: Tournament, completed_match: Match) -> List[Match]:
    """Append next-round matches to ``tournament`` if ``completed_match`` unlocks them."""
    round_order = completed_match.round_order
    if round_order < FIRST_KNOCKOUT_ROUND_ORDER:
        return []

    round_data = tournament.get_round(round_order)
    tie = round_data.tie_for(completed_match.id) if round_data else None
    if tie is None:
        logger.debug("Match %s is not part of round %d", completed_match.id, round_order)
        return []
    if not tie.is_complete:
        return []

    neighbour = round_data.tie_in_slot(tie.slot ^ 1)
    if neighbour is None:
        # Final
        return []
    if not neighbour.is_complete:
        return []

    upper, lower = (tie, neighbour) if tie.slot < neighbour.slot else (neighbour, tie)
    upper_winner = tie_winner(upper)
    lower_winner = tie_winner(lower)
    if upper_winner is None or lower_winner is None:
        return []

    next_order = round_order + 1
    next_slot = upper.slot // 2
    next_round = tournament.get_round(next_order)
    if next_round is not None and next_round.tie_in_slot(next_slot) is not None:
        return []

    round_name = knockout_round_name(tournament.bracket_tie_count(next_order))
    new_matches = tie_matches(
        tournament.id,
        upper_winner,
        lower_winner,
        round_name,
        next_order,
        next_slot,
        tournament.has_two_legs,
    )
    tournament.fixtures.extend(new_matches)

    logger.info(
        "%s: %s vs %s drawn in %s",
        tournament.name,
        tournament.participant_name(upper_winner),
        tournament.participant_name(lower_winner),
        round_name,
    )
    return new_matches


def progress_knockout(tournament: Tournament, completed_match: Match) -> Tournament:
    """Advance the bracket after ``completed_match`` was played.

    Safe to call any number of times: a next-round match between the same
    two winners is never created twice.

    Args:
        tournament: Current snapshot (not modified)
        completed_match: The match whose result was just recorded

    Returns:
        A new snapshot, with next-round matches appended when both feeding
        ties are complete
    """
    updated = tournament.copy()
    if not updated.is_bracket_phase:
        return updated

    _advance_in_place(updated, completed_match)
    return updated


def advance_all(tournament: Tournament) -> Tournament:
    """Run progression for every played bracket match, round by round.

    Used after a bracket is created so that rounds decided entirely by byes
    resolve without user input.
    """
    updated = tournament.copy()
    if not updated.is_bracket_phase:
        return updated

    round_order = FIRST_KNOCKOUT_ROUND_ORDER
    while any(m.round_order == round_order for m in updated.fixtures):
        for match in [m for m in updated.fixtures if m.round_order == round_order]:
            if match.is_played:
                _advance_in_place(updated, match)
        round_order += 1
    return updated
