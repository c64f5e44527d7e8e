"""Scheduling and progression engine.

Every function here is synchronous and works on in-memory data only. Steps
that change a tournament return a new snapshot and leave their input alone.
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

from matchday.engine.completion import check_completion, is_finished
from matchday.engine.fixtures import (
    generate_knockout_fixtures,
    generate_league_fixtures,
    knockout_round_name,
    next_power_of_two,
)
from matchday.engine.groups import (
    GroupAllocation,
    advance_group_to_knockout,
    generate_group_fixtures,
    group_count_for,
)
from matchday.engine.progression import advance_all, progress_knockout
from matchday.engine.standings import (
    ScorerRanking,
    calculate_standings,
    calculate_top_scorers,
    group_standings,
    refresh_participant_stats,
)

__all__ = [
    "check_completion",
    "is_finished",
    "generate_league_fixtures",
    "generate_knockout_fixtures",
    "knockout_round_name",
    "next_power_of_two",
    "GroupAllocation",
    "generate_group_fixtures",
    "advance_group_to_knockout",
    "group_count_for",
    "progress_knockout",
    "advance_all",
    "ScorerRanking",
    "calculate_standings",
    "calculate_top_scorers",
    "group_standings",
    "refresh_participant_stats",
]
