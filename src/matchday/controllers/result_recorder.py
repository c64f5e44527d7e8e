"""Result recording and the post-result pipeline.

This module writes a match score onto a tournament snapshot and then runs
knockout progression, the hybrid stage transition and completion detection,
each step producing a new snapshot.
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

from typing import Any, List

from matchday.constants import DEFAULT_QUALIFIERS_PER_GROUP, FIRST_KNOCKOUT_ROUND_ORDER
from matchday.engine import (
    advance_group_to_knockout,
    check_completion,
    progress_knockout,
    refresh_participant_stats,
)
from matchday.exceptions import (
    DrawnTieException,
    InvalidResultException,
    MatchNotFoundException,
    TournamentStateException,
)
from matchday.models import Match, ScorerEntry, Tournament
from matchday.type_hints import ScorerBreakdown
from matchday.utils import setup_logger
from matchday.utils.validation import validate_goal_count_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating a submitted score and goal breakdown
    - Writing the result onto a fresh tournament snapshot
    - Rejecting knockout ties that would end level
    - Running progression, stage transition and completion afterwards
    """

    def __init__(self, qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP):
        """Initialize the recorder.

        Args:
            qualifiers_per_group: Finishers per group who reach the knockout stage
        """
        self.qualifiers_per_group = qualifiers_per_group

    def record_result(
        self,
        tournament: Tournament,
        match_id: str,
        home_score: Any,
        away_score: Any,
        scorers: ScorerBreakdown = None,
    ) -> Tournament:
        """Write a final score onto one match.

        Args:
            tournament: Current snapshot (not modified)
            match_id: ID of the match to record
            home_score: Goals of the home side
            away_score: Goals of the away side
            scorers: Optional participant id -> goals breakdown. Defaults to
                crediting each side with its own score.

        Returns:
            A new snapshot with the match marked played

        Raises:
            MatchNotFoundException: If the match is not in this tournament
            TournamentStateException: If the tournament is completed, or the
                match is a walkover or already played
            InvalidResultException: If a score or the breakdown is invalid
            DrawnTieException: If the result leaves a knockout tie level
        """
        if tournament.is_completed:
            logger.warning("Rejected result for completed tournament %s", tournament.id)
            raise TournamentStateException(f"Tournament '{tournament.name}' is completed")

        if tournament.get_match(match_id) is None:
            logger.error("Match %s not found in tournament %s", match_id, tournament.id)
            raise MatchNotFoundException(f"Match {match_id} not found")

        updated = tournament.copy()
        match = updated.get_match(match_id)

        if match.is_bye:
            raise TournamentStateException("Walkover matches cannot be edited")
        if match.is_played:
            raise TournamentStateException(
                f"{match.round_name} match has already been played"
            )

        home_goals = validate_goal_count_strict(home_score, "Home score")
        away_goals = validate_goal_count_strict(away_score, "Away score")
        scorer_entries = self._build_scorers(match, home_goals, away_goals, scorers)

        match.home_score = home_goals
        match.away_score = away_goals
        match.scorers = scorer_entries
        match.is_played = True

        self._reject_level_tie(updated, match)

        logger.debug(
            "Recorded: %s %d-%d %s (%s)",
            updated.participant_name(match.home_team_id),
            home_goals,
            away_goals,
            updated.participant_name(match.away_team_id),
            match.round_name,
        )
        return updated

    def _build_scorers(
        self,
        match: Match,
        home_goals: int,
        away_goals: int,
        scorers: ScorerBreakdown,
    ) -> List[ScorerEntry]:
        """Turn the submitted breakdown into scorer entries (zero counts dropped)."""
        if scorers is None:
            scorers = {match.home_team_id: home_goals, match.away_team_id: away_goals}

        limits = {match.home_team_id: home_goals, match.away_team_id: away_goals}
        entries: List[ScorerEntry] = []
        for participant_id, goals in scorers.items():
            if participant_id not in limits:
                raise InvalidResultException(
                    f"Scorer {participant_id} did not play in this match"
                )
            count = validate_goal_count_strict(goals, "Scorer goals")
            if count > limits[participant_id]:
                raise InvalidResultException(
                    f"Scorer {participant_id} credited with {count} goals "
                    f"but the side only scored {limits[participant_id]}"
                )
            if count > 0:
                entries.append(ScorerEntry(participant_id=participant_id, goals=count))
        return entries

    def _reject_level_tie(self, tournament: Tournament, match: Match) -> None:
        """Knockout ties must produce a winner on aggregate or away goals."""
        if not tournament.is_bracket_phase:
            return
        if match.round_order < FIRST_KNOCKOUT_ROUND_ORDER:
            return

        round_data = tournament.get_round(match.round_order)
        tie = round_data.tie_for(match.id) if round_data else None
        if tie is not None and tie.is_level:
            first, second = tie.aggregate()
            logger.warning(
                "Rejected level knockout tie %s (%d-%d on aggregate)",
                match.round_name,
                first,
                second,
            )
            raise DrawnTieException(
                f"{match.round_name} cannot end level ({first}-{second} on "
                "aggregate); enter the score including the decider"
            )

    def submit_result(
        self,
        tournament: Tournament,
        match_id: str,
        home_score: Any,
        away_score: Any,
        scorers: ScorerBreakdown = None,
    ) -> Tournament:
        """Record a result and run everything that follows from it.

        Pipeline: record -> knockout progression -> group-to-knockout
        transition -> completion check -> stats snapshot.

        Returns:
            The final snapshot, ready to be persisted
        """
        recorded = self.record_result(
            tournament, match_id, home_score, away_score, scorers
        )
        progressed = progress_knockout(recorded, recorded.get_match(match_id))

        transitioned = advance_group_to_knockout(progressed, self.qualifiers_per_group)
        if transitioned is None:
            transitioned = progressed

        completed = check_completion(transitioned)
        return refresh_participant_stats(completed)


_default_recorder = ResultRecorder()


def record_result(
    tournament: Tournament,
    match_id: str,
    home_score: Any,
    away_score: Any,
    scorers: ScorerBreakdown = None,
) -> Tournament:
    """Module-level shortcut for :meth:`ResultRecorder.record_result`."""
    return _default_recorder.record_result(
        tournament, match_id, home_score, away_score, scorers
    )


def submit_result(
    tournament: Tournament,
    match_id: str,
    home_score: Any,
    away_score: Any,
    scorers: ScorerBreakdown = None,
) -> Tournament:
    """Module-level shortcut for :meth:`ResultRecorder.submit_result`."""
    return _default_recorder.submit_result(
        tournament, match_id, home_score, away_score, scorers
    )
