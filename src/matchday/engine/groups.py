"""Group stage allocation and the group-to-knockout transition."""

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

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from matchday.constants import (
    DEFAULT_QUALIFIERS_PER_GROUP,
    GROUP_COUNT_THRESHOLDS,
    GROUP_LABELS,
    GROUP_ROUND_PREFIX,
    GROUP_STAGE_ROUND_ORDER,
    MIN_GROUP_COUNT,
    STAGE_GROUP,
    STAGE_KNOCKOUT,
    TYPE_GROUPS_KNOCKOUT,
)
from matchday.engine.fixtures import generate_knockout_fixtures, generate_league_fixtures
from matchday.engine.progression import advance_all
from matchday.engine.standings import calculate_standings, group_matches
from matchday.models import Match, Participant, Tournament
from matchday.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class GroupAllocation:
    """Output of the group stage allocator.

    Attributes
    ----------
    fixtures : list of Match
        Group-stage matches of every group (round order 0).
    participants : list of Participant
        Copies of the input participants with ``group_id`` set, listed
        group by group.
    """

    fixtures: List[Match] = field(default_factory=list)
    participants: List[Participant] = field(default_factory=list)


def group_count_for(participant_count: int) -> int:
    """Number of groups for a field of the given size."""
    for minimum, groups in GROUP_COUNT_THRESHOLDS:
        if participant_count >= minimum:
            return groups
    return MIN_GROUP_COUNT


def generate_group_fixtures(
    participants: Sequence[Participant],
    tournament_id: str,
    rng: Optional[random.Random] = None,
) -> GroupAllocation:
    """Shuffle participants into groups and schedule a round robin in each.

    Args:
        participants: Entrants (not modified)
        tournament_id: ID of the owning tournament
        rng: Random source for the shuffle (module RNG if omitted)

    Returns:
        GroupAllocation with the fixtures and the grouped participants
    """
    shuffled = list(participants)
    (rng or random).shuffle(shuffled)

    group_count = group_count_for(len(shuffled))
    seats: List[List[Participant]] = [[] for _ in range(group_count)]
    for index, participant in enumerate(shuffled):
        seats[index % group_count].append(participant)

    allocation = GroupAllocation()
    for index, members in enumerate(seats):
        label = GROUP_LABELS[index]
        grouped = [Participant(id=p.id, name=p.name, group_id=label) for p in members]
        allocation.participants.extend(grouped)

        for match in generate_league_fixtures(grouped, tournament_id):
            match.round_name = GROUP_ROUND_PREFIX.format(group=label) + match.round_name
            match.round_order = GROUP_STAGE_ROUND_ORDER
            allocation.fixtures.append(match)

        logger.debug("Group %s: %s", label, ", ".join(p.name for p in grouped))

    logger.info(
        "Allocated %d participants into %d groups (%d group matches)",
        len(shuffled),
        group_count,
        len(allocation.fixtures),
    )
    return allocation


def select_qualifiers(
    tournament: Tournament, qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP
) -> List[Participant]:
    """Top finishers of every group, group A first."""
    qualifiers: List[Participant] = []
    for group_id in tournament.group_ids:
        members = [p for p in tournament.participants if p.group_id == group_id]
        table = calculate_standings(members, group_matches(tournament, group_id))
        qualifiers.extend(table[:qualifiers_per_group])
    return qualifiers


def advance_group_to_knockout(
    tournament: Tournament,
    qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP,
) -> Optional[Tournament]:
    """Build the knockout bracket once every group match is played.

    Args:
        tournament: Current snapshot (not modified)
        qualifiers_per_group: Finishers taken from each group

    Returns:
        A new snapshot in the knockout stage, or ``None`` when the
        tournament is not a hybrid in its group stage or matches remain
    """
    if tournament.type != TYPE_GROUPS_KNOCKOUT or tournament.stage != STAGE_GROUP:
        return None
    if not all(m.is_played for m in tournament.fixtures):
        return None

    qualifiers = select_qualifiers(tournament, qualifiers_per_group)
    bracket = generate_knockout_fixtures(qualifiers, tournament.id)

    updated = tournament.copy()
    updated.fixtures.extend(bracket)
    updated.stage = STAGE_KNOCKOUT

    logger.info(
        "%s: group stage complete, %d qualifiers enter the knockout stage",
        tournament.name,
        len(qualifiers),
    )
    return advance_all(updated)
