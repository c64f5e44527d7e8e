"""Type hints used in Matchday."""

from typing import Dict, Literal, Optional, Tuple

# Tournament format literals
TournamentType = Literal["LEAGUE", "KNOCKOUT", "GROUPS_KNOCKOUT"]
TournamentStatus = Literal["ACTIVE", "COMPLETED"]
TournamentStage = Literal["GROUP_STAGE", "KNOCKOUT_STAGE"]

# Leg number of a two-legged tie
Leg = Literal[1, 2]

# Unordered pair of participant ids identifying a tie
TieKey = frozenset
# (first, second) goals of a tie, in encounter order
Aggregate = Tuple[int, int]
# participant id -> goals, as submitted with a result
ScorerBreakdown = Optional[Dict[str, int]]

#  LocalWords:  TieKey
