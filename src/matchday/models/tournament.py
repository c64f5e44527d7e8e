"""Tournament data class - the unit that is created, mutated and persisted."""

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

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from matchday.constants import (
    BYE_NAME,
    FIRST_KNOCKOUT_ROUND_ORDER,
    STAGE_KNOCKOUT,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
    TYPE_GROUPS_KNOCKOUT,
    TYPE_KNOCKOUT,
)
from matchday.models.match import Match
from matchday.models.participant import Participant
from matchday.models.round_data import Round, group_rounds
from matchday.type_hints import TournamentStage, TournamentStatus, TournamentType


def _now() -> datetime:
    return datetime.now(timezone.utc)


def parse_created_at(value: Union[str, int, float, None]) -> datetime:
    """Parse a stored creation timestamp.

    ISO-8601 strings are parsed with dateutil. Numbers are treated as epoch
    milliseconds. Naive values are assumed to be UTC.
    """
    if value is None:
        return _now()
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)

    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Tournament:
    """A tournament with its participants and full fixture list.

    Attributes
    ----------
    id : str
        Unique identifier.
    name : str
        Tournament name.
    type : str
        LEAGUE, KNOCKOUT or GROUPS_KNOCKOUT.
    participants : list of Participant
        Entrants in entry order. Byes are never stored here.
    fixtures : list of Match
        Every match of the tournament. Only ever appended to.
    status : str
        ACTIVE or COMPLETED. Never reverts once COMPLETED.
    stage : str or None
        GROUP_STAGE or KNOCKOUT_STAGE for hybrid tournaments, else None.
    has_two_legs : bool
        Knockout ties are played home and away.
    created_at : datetime
        Creation time (timezone aware).
    revision : int
        Persistence revision, bumped by the store on every save.
    """

    id: str
    name: str
    type: TournamentType
    participants: List[Participant] = field(default_factory=list)
    fixtures: List[Match] = field(default_factory=list)
    status: TournamentStatus = STATUS_ACTIVE
    stage: Optional[TournamentStage] = None
    has_two_legs: bool = False
    created_at: datetime = field(default_factory=_now)
    revision: int = 0

    # ========== Lookups ==========

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.fixtures:
            if match.id == match_id:
                return match
        return None

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def participant_name(self, participant_id: str) -> str:
        """Display name for an id; bye entries and unknown ids map to 'Bye'."""
        participant = self.get_participant(participant_id)
        return participant.name if participant else BYE_NAME

    @property
    def group_ids(self) -> List[str]:
        """Distinct group labels, sorted."""
        return sorted({p.group_id for p in self.participants if p.group_id})

    # ========== State ==========

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_bracket_phase(self) -> bool:
        """Is the tournament currently playing knockout ties?"""
        if self.type == TYPE_KNOCKOUT:
            return True
        return self.type == TYPE_GROUPS_KNOCKOUT and self.stage == STAGE_KNOCKOUT

    @property
    def rounds(self) -> List[Round]:
        """Fixtures grouped into rounds, ordered by round order."""
        return group_rounds(self.fixtures)

    def get_round(self, round_order: int) -> Optional[Round]:
        for round_data in self.rounds:
            if round_data.round_order == round_order:
                return round_data
        return None

    def bracket_tie_count(self, round_order: int) -> int:
        """Number of ties a knockout round holds once fully drawn.

        The first knockout round is drawn in full (walkovers included), so
        every later round holds half the ties of the one before it.
        Returns 0 for rounds outside the bracket.
        """
        if round_order < FIRST_KNOCKOUT_ROUND_ORDER:
            return 0
        first_round = self.get_round(FIRST_KNOCKOUT_ROUND_ORDER)
        if first_round is None:
            return 0
        return len(first_round.ties) >> (round_order - FIRST_KNOCKOUT_ROUND_ORDER)

    def copy(self) -> "Tournament":
        """Return an independent snapshot of this tournament."""
        return copy.deepcopy(self)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "participants": [p.to_dict() for p in self.participants],
            "fixtures": [m.to_dict() for m in self.fixtures],
            "status": self.status,
            "stage": self.stage,
            "has_two_legs": self.has_two_legs,
            "created_at": self.created_at.isoformat(),
            "revision": self.revision,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled Tournament"),
            type=data["type"],
            participants=[Participant.from_dict(p) for p in data.get("participants", [])],
            fixtures=[Match.from_dict(m) for m in data.get("fixtures", [])],
            status=data.get("status", STATUS_ACTIVE),
            stage=data.get("stage"),
            has_two_legs=data.get("has_two_legs", False),
            created_at=parse_created_at(data.get("created_at")),
            revision=data.get("revision", 0),
        )
