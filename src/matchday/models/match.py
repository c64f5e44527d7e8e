"""Match data class."""

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
from typing import Any, Dict, List, Optional

from matchday.constants import GROUP_STAGE_ROUND_ORDER
from matchday.type_hints import Leg


@dataclass
class ScorerEntry:
    """Goals credited to one participant in one match.

    Attributes
    ----------
    participant_id : str
        ID of the participant who scored.
    goals : int
        Number of goals, always greater than zero.
    """

    participant_id: str
    goals: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scorer entry to dictionary."""
        return {"participant_id": self.participant_id, "goals": self.goals}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScorerEntry":
        """Deserialize scorer entry from dictionary."""
        return cls(participant_id=data["participant_id"], goals=data["goals"])


@dataclass
class Match:
    """A scheduled fixture between two participants.

    Attributes
    ----------
    id : str
        Unique match identifier.
    tournament_id : str
        ID of the owning tournament.
    home_team_id, away_team_id : str
        Participant IDs. For a walkover one side holds a bye entry id.
    home_score, away_score : int or None
        Final score. Both are ``None`` until the match is played.
    is_played : bool
        Whether a result has been recorded.
    round_name : str
        Human label, e.g. "Matchday 1" or "Semi-Final - Leg 2".
    round_order : int
        Sort key of the round. Group stage matches use 0, knockout rounds
        count up from 1.
    scorers : list of ScorerEntry
        Goal breakdown used by the scorer leaderboard.
    slot : int or None
        Position of the tie within its knockout round. The tie fed by
        slots ``2k`` and ``2k + 1`` sits in slot ``k`` of the next round.
    leg : int or None
        1 or 2 for two-legged ties.
    is_bye : bool
        Match was resolved automatically against a bye.
    """

    id: str
    tournament_id: str
    home_team_id: str
    away_team_id: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    is_played: bool = False
    round_name: str = ""
    round_order: int = GROUP_STAGE_ROUND_ORDER
    scorers: List[ScorerEntry] = field(default_factory=list)
    slot: Optional[int] = None
    leg: Optional[Leg] = None
    is_bye: bool = False

    def involves(self, participant_id: str) -> bool:
        """Does this match feature the given participant?"""
        return participant_id in (self.home_team_id, self.away_team_id)

    def goals_for(self, participant_id: str) -> int:
        """Goals scored by ``participant_id`` in this match (0 if unplayed)."""
        if not self.is_played:
            return 0
        if participant_id == self.home_team_id:
            return self.home_score or 0
        if participant_id == self.away_team_id:
            return self.away_score or 0
        return 0

    def goals_against(self, participant_id: str) -> int:
        """Goals conceded by ``participant_id`` in this match (0 if unplayed)."""
        if not self.is_played:
            return 0
        if participant_id == self.home_team_id:
            return self.away_score or 0
        if participant_id == self.away_team_id:
            return self.home_score or 0
        return 0

    @property
    def winner_id(self) -> Optional[str]:
        """ID of the winner of this single match, ``None`` if drawn or unplayed."""
        if not self.is_played or self.home_score == self.away_score:
            return None
        if self.home_score > self.away_score:
            return self.home_team_id
        return self.away_team_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_played": self.is_played,
            "round_name": self.round_name,
            "round_order": self.round_order,
            "scorers": [s.to_dict() for s in self.scorers],
            "slot": self.slot,
            "leg": self.leg,
            "is_bye": self.is_bye,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            tournament_id=data["tournament_id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            is_played=data.get("is_played", False),
            round_name=data.get("round_name", ""),
            round_order=data.get("round_order", GROUP_STAGE_ROUND_ORDER),
            scorers=[ScorerEntry.from_dict(s) for s in data.get("scorers", [])],
            slot=data.get("slot"),
            leg=data.get("leg"),
            is_bye=data.get("is_bye", False),
        )
