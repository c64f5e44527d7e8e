"""Participant data classes and bracket entries."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from matchday.constants import BYE_ID_TEMPLATE, BYE_NAME


@dataclass
class ParticipantStats:
    """Aggregated record of a participant, derived from match history.

    Attributes
    ----------
    played : int
        Matches played.
    won, drawn, lost : int
        Outcome counters.
    goals_for, goals_against : int
        Goals scored and conceded.
    points : int
        League points (3 per win, 1 per draw).
    """

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        """Serialize stats to dictionary."""
        return {
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantStats":
        """Deserialize stats from dictionary."""
        return cls(
            played=data.get("played", 0),
            won=data.get("won", 0),
            drawn=data.get("drawn", 0),
            lost=data.get("lost", 0),
            goals_for=data.get("goals_for", 0),
            goals_against=data.get("goals_against", 0),
            points=data.get("points", 0),
        )


@dataclass
class Participant:
    """A tournament entrant (a person or a team).

    Attributes
    ----------
    id : str
        Unique identifier, stable for the lifetime of the tournament.
    name : str
        Display name.
    group_id : str or None
        Group label ('A', 'B', ...) during a hybrid group stage.
    stats : ParticipantStats
        Last snapshot computed by the standings calculator. Never edited
        by hand.
    """

    id: str
    name: str
    group_id: Optional[str] = None
    stats: ParticipantStats = field(default_factory=ParticipantStats)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "group_id": self.group_id,
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            group_id=data.get("group_id"),
            stats=ParticipantStats.from_dict(data.get("stats", {})),
        )


# ========== Bracket entries ==========


@dataclass(frozen=True)
class RealEntry:
    """A bracket seat occupied by a real participant."""

    participant: Participant

    @property
    def entry_id(self) -> str:
        return self.participant.id

    @property
    def name(self) -> str:
        return self.participant.name


@dataclass(frozen=True)
class Bye:
    """An empty bracket seat used to pad a draw to a power of two.

    Byes only exist while fixtures are generated. They are never added to
    a tournament's participant list.
    """

    index: int

    @property
    def entry_id(self) -> str:
        return BYE_ID_TEMPLATE.format(index=self.index)

    @property
    def name(self) -> str:
        return BYE_NAME


BracketEntry = Union[RealEntry, Bye]
