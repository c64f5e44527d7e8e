"""Tournament service - the load, mutate, persist boundary used by front-ends."""

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
from typing import Any, List, Optional, Sequence

from matchday.constants import DEFAULT_QUALIFIERS_PER_GROUP
from matchday.controllers.result_recorder import ResultRecorder
from matchday.controllers.tournament_builder import TournamentBuilder
from matchday.engine import ScorerRanking, calculate_standings, calculate_top_scorers
from matchday.engine.standings import group_matches
from matchday.exceptions import MatchNotFoundException, TournamentNotFoundException
from matchday.models import Participant, Tournament
from matchday.storage import TournamentStore
from matchday.type_hints import ScorerBreakdown
from matchday.utils import setup_logger

logger = setup_logger(__name__)


class TournamentService:
    """Main entry point for front-ends.

    Each mutating call loads the tournament, runs the engine on an in-memory
    snapshot and saves the final snapshot once. The store's revision check
    refuses a save that would overwrite a concurrent edit.
    """

    def __init__(
        self,
        store: TournamentStore,
        qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.builder = TournamentBuilder(qualifiers_per_group=qualifiers_per_group, rng=rng)
        self.result_recorder = ResultRecorder(qualifiers_per_group=qualifiers_per_group)

    # ========== Tournament Management ==========

    def create(
        self,
        name: str,
        tournament_type: str,
        participant_names: Sequence[str],
        has_two_legs: bool = False,
    ) -> Tournament:
        """Create and store a new tournament."""
        tournament = self.builder.create(
            name, tournament_type, participant_names, has_two_legs
        )
        return self.store.save(tournament)

    def list(self) -> List[Tournament]:
        """All stored tournaments, newest first."""
        return sorted(self.store.load_all(), key=lambda t: t.created_at, reverse=True)

    def get(self, tournament_id: str) -> Tournament:
        """Load a tournament.

        Raises:
            TournamentNotFoundException: If no tournament has this id
        """
        tournament = self.store.load(tournament_id)
        if tournament is None:
            logger.error("Tournament %s not found", tournament_id)
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        return tournament

    def delete(self, tournament_id: str) -> None:
        """Delete a tournament.

        Raises:
            TournamentNotFoundException: If no tournament has this id
        """
        if not self.store.delete(tournament_id):
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")

    # ========== Result Management ==========

    def submit_result(
        self,
        tournament_id: str,
        match_id: str,
        home_score: Any,
        away_score: Any,
        scorers: ScorerBreakdown = None,
    ) -> Tournament:
        """Record a match result and persist the resulting tournament.

        Returns:
            The stored snapshot

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            MatchNotFoundException: If the match is not in the tournament
        """
        tournament = self.get(tournament_id)
        if tournament.get_match(match_id) is None:
            logger.error("Match %s not found in tournament %s", match_id, tournament_id)
            raise MatchNotFoundException(f"Match {match_id} not found")

        updated = self.result_recorder.submit_result(
            tournament, match_id, home_score, away_score, scorers
        )
        return self.store.save(updated)

    # ========== Standings ==========

    def standings(
        self, tournament_id: str, group_id: Optional[str] = None
    ) -> List[Participant]:
        """League table of a tournament, or of one group of a hybrid."""
        tournament = self.get(tournament_id)
        if group_id is None:
            return calculate_standings(tournament.participants, tournament.fixtures)

        members = [p for p in tournament.participants if p.group_id == group_id]
        return calculate_standings(members, group_matches(tournament, group_id))

    def top_scorers(self, tournament_id: str) -> List[ScorerRanking]:
        """Goal-scorer leaderboard of a tournament."""
        tournament = self.get(tournament_id)
        return calculate_top_scorers(tournament.participants, tournament.fixtures)
