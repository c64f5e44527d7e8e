"""Data models for tournament rounds and knockout ties."""

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

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from matchday.constants import GROUP_STAGE_NAME, GROUP_STAGE_ROUND_ORDER
from matchday.models.match import Match
from matchday.type_hints import Aggregate, TieKey

_LEG_SUFFIX_RE = re.compile(r" - Leg \d+$")


def tie_key(match: Match) -> TieKey:
    """Unordered pair of participant ids, independent of home/away."""
    return frozenset((match.home_team_id, match.away_team_id))


@dataclass
class Tie:
    """One knockout pairing, played over one or two legs.

    Attributes
    ----------
    round_order : int
        Round the tie belongs to.
    slot : int
        Position of the tie in its round.
    first_id, second_id : str
        The two participants, in the order they were first encountered
        (home then away of the earliest match).
    matches : list of Match
        The legs of the tie in insertion order.
    """

    round_order: int
    slot: int
    first_id: str
    second_id: str
    matches: List[Match] = field(default_factory=list)

    @property
    def key(self) -> TieKey:
        return frozenset((self.first_id, self.second_id))

    @property
    def is_complete(self) -> bool:
        return bool(self.matches) and all(m.is_played for m in self.matches)

    def contains(self, match_id: str) -> bool:
        return any(m.id == match_id for m in self.matches)

    def aggregate(self) -> Aggregate:
        """Total goals over all played legs as ``(first, second)``."""
        first = sum(m.goals_for(self.first_id) for m in self.matches)
        second = sum(m.goals_for(self.second_id) for m in self.matches)
        return first, second

    def away_goals(self) -> Aggregate:
        """Goals scored away from home as ``(first, second)``."""
        first = sum(
            m.goals_for(self.first_id)
            for m in self.matches
            if m.away_team_id == self.first_id
        )
        second = sum(
            m.goals_for(self.second_id)
            for m in self.matches
            if m.away_team_id == self.second_id
        )
        return first, second

    def _decided_winner(self) -> Optional[str]:
        first, second = self.aggregate()
        if first != second:
            return self.first_id if first > second else self.second_id

        # Away goals only mean something when both sides had a home leg
        if len(self.matches) == 2:
            first_away, second_away = self.away_goals()
            if first_away != second_away:
                return self.first_id if first_away > second_away else self.second_id

        return None

    @property
    def is_level(self) -> bool:
        """Complete but not decided by aggregate or away goals."""
        return self.is_complete and self._decided_winner() is None

    def winner_id(self) -> Optional[str]:
        """Participant advancing from this tie, ``None`` while it is incomplete.

        A level tie falls back to the first-encountered participant.
        """
        if not self.is_complete:
            return None
        return self._decided_winner() or self.first_id


def build_ties(matches: Iterable[Match]) -> List[Tie]:
    """Group the matches of one round into ties.

    Matches between the same unordered pair form one tie. Ties come back in
    first-encountered order. A tie takes the slot stored on its matches; if
    the matches carry no slot, its encounter index is used instead.
    """
    ties: Dict[TieKey, Tie] = {}
    for match in matches:
        key = tie_key(match)
        tie = ties.get(key)
        if tie is None:
            slot = match.slot if match.slot is not None else len(ties)
            tie = Tie(
                round_order=match.round_order,
                slot=slot,
                first_id=match.home_team_id,
                second_id=match.away_team_id,
            )
            ties[key] = tie
        tie.matches.append(match)
    return list(ties.values())


@dataclass
class Round:
    """All matches sharing one ``round_order``.

    Attributes
    ----------
    round_order : int
        Round sort key.
    matches : list of Match
        Matches of the round, in fixture order.
    """

    round_order: int
    matches: List[Match] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Display name of the round, without any leg suffix."""
        if self.round_order == GROUP_STAGE_ROUND_ORDER:
            return GROUP_STAGE_NAME
        if not self.matches:
            return ""
        return _LEG_SUFFIX_RE.sub("", self.matches[0].round_name)

    @property
    def ties(self) -> List[Tie]:
        return build_ties(self.matches)

    @property
    def is_complete(self) -> bool:
        return bool(self.matches) and all(m.is_played for m in self.matches)

    def tie_for(self, match_id: str) -> Optional[Tie]:
        """Return the tie containing ``match_id``."""
        for tie in self.ties:
            if tie.contains(match_id):
                return tie
        return None

    def tie_in_slot(self, slot: int) -> Optional[Tie]:
        for tie in self.ties:
            if tie.slot == slot:
                return tie
        return None


def group_rounds(fixtures: Iterable[Match]) -> List[Round]:
    """Partition fixtures into rounds ordered by ``round_order``."""
    rounds: Dict[int, Round] = {}
    for match in fixtures:
        rounds.setdefault(match.round_order, Round(round_order=match.round_order))
        rounds[match.round_order].matches.append(match)
    return [rounds[order] for order in sorted(rounds)]
