from matchday.models.match import Match, ScorerEntry
from matchday.models.participant import (
    BracketEntry,
    Bye,
    Participant,
    ParticipantStats,
    RealEntry,
)
from matchday.models.round_data import Round, Tie, build_ties, group_rounds, tie_key
from matchday.models.tournament import Tournament

__all__ = [
    "Match",
    "ScorerEntry",
    "Participant",
    "ParticipantStats",
    "BracketEntry",
    "RealEntry",
    "Bye",
    "Round",
    "Tie",
    "build_ties",
    "group_rounds",
    "tie_key",
    "Tournament",
]
