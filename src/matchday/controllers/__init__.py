"""Tournament controllers for Matchday.

This package provides the operations front-ends call: building tournaments,
recording results and the persisted service around them.
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

from matchday.controllers.result_recorder import (
    ResultRecorder,
    record_result,
    submit_result,
)
from matchday.controllers.service import TournamentService
from matchday.controllers.tournament_builder import TournamentBuilder, create_tournament

__all__ = [
    "ResultRecorder",
    "record_result",
    "submit_result",
    "TournamentBuilder",
    "create_tournament",
    "TournamentService",
]
