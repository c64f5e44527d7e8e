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

# --- Constants ---
APP_NAME = "Matchday"
SAVE_FILE_VERSION = 1
DEFAULT_DATA_FILE = "~/.matchday/tournaments.json"

# Environment variables
ENV_DATA_FILE = "MATCHDAY_DATA_FILE"
ENV_LOG_LEVEL = "MATCHDAY_LOG_LEVEL"
ENV_QUALIFIERS_PER_GROUP = "MATCHDAY_QUALIFIERS_PER_GROUP"
DEFAULT_LOG_LEVEL = "WARNING"

# Match outcome points
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Walkover score given to a real participant drawn against a bye
BYE_WIN_SCORE = 1
BYE_LOSS_SCORE = 0

# Tournament types
TYPE_LEAGUE = "LEAGUE"
TYPE_KNOCKOUT = "KNOCKOUT"
TYPE_GROUPS_KNOCKOUT = "GROUPS_KNOCKOUT"
TOURNAMENT_TYPES = (TYPE_LEAGUE, TYPE_KNOCKOUT, TYPE_GROUPS_KNOCKOUT)

# Tournament status (monotonic: ACTIVE -> COMPLETED)
STATUS_ACTIVE = "ACTIVE"
STATUS_COMPLETED = "COMPLETED"

# Hybrid stages (one-way: GROUP_STAGE -> KNOCKOUT_STAGE)
STAGE_GROUP = "GROUP_STAGE"
STAGE_KNOCKOUT = "KNOCKOUT_STAGE"

# Round ordering
GROUP_STAGE_ROUND_ORDER = 0
FIRST_KNOCKOUT_ROUND_ORDER = 1

# Round names
GROUP_STAGE_NAME = "Group Stage"
MATCHDAY_NAME = "Matchday {round}"
GROUP_ROUND_PREFIX = "Group {group} - "
LEG_SUFFIX = " - Leg {leg}"
FINAL_NAME = "Final"
SEMI_FINAL_NAME = "Semi-Final"
QUARTER_FINAL_NAME = "Quarter-Final"
ROUND_OF_NAME = "Round of {size}"

# Group stage allocation: (minimum participants, number of groups), highest first
GROUP_COUNT_THRESHOLDS = [
    (32, 8),
    (24, 6),
    (12, 4),
    (6, 2),
]
MIN_GROUP_COUNT = 2
GROUP_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_QUALIFIERS_PER_GROUP = 2

# Creation rules
MIN_PARTICIPANTS = 2

# Bracket entries
BYE_NAME = "Bye"
BYE_ID_TEMPLATE = "bye-{index}"
