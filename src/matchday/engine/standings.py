"""Standings and top-scorer calculation.

Both calculators are pure: they read participants and matches and return new
objects, so they can be called any number of times on the same data.
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

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from matchday.constants import (
    DRAW_POINTS,
    GROUP_STAGE_ROUND_ORDER,
    LOSS_POINTS,
    WIN_POINTS,
)
from matchday.models import Match, Participant, ParticipantStats, Tournament
from matchday.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class ScorerRanking:
    """One line of the top-scorer leaderboard."""

    participant: Participant
    goals: int


def _apply_result(stats: ParticipantStats, scored: int, conceded: int) -> None:
    stats.played += 1
    stats.goals_for += scored
    stats.goals_against += conceded

    if scored > conceded:
        stats.won += 1
        stats.points += WIN_POINTS
    elif scored < conceded:
        stats.lost += 1
        stats.points += LOSS_POINTS
    else:
        stats.drawn += 1
        stats.points += DRAW_POINTS


def standings_sort_key(participant: Participant):
    """Sort key: points, then goal difference, then goals scored (all descending)."""
    stats = participant.stats
    return (-stats.points, -stats.goal_difference, -stats.goals_for)


def calculate_standings(
    participants: Sequence[Participant], matches: Iterable[Match]
) -> List[Participant]:
    """Rank participants from scratch using the played matches.

    Args:
        participants: Participants to rank (not modified)
        matches: Any matches; unplayed ones, walkovers and matches involving
            someone outside ``participants`` are ignored

    Returns:
        New Participant objects with fresh stats, best first. Ties beyond
        goals scored keep input order.
    """
    table: Dict[str, Participant] = {
        p.id: Participant(id=p.id, name=p.name, group_id=p.group_id)
        for p in participants
    }

    for match in matches:
        if not match.is_played or match.is_bye:
            continue
        if match.home_score is None or match.away_score is None:
            logger.warning("Match %s is marked played without a score", match.id)
            continue

        home = table.get(match.home_team_id)
        away = table.get(match.away_team_id)
        if home is None or away is None:
            continue

        _apply_result(home.stats, match.home_score, match.away_score)
        _apply_result(away.stats, match.away_score, match.home_score)

    return sorted(table.values(), key=standings_sort_key)


def refresh_participant_stats(tournament: Tournament) -> Tournament:
    """Return a snapshot whose participants carry freshly computed stats.

    Participant order is left untouched.
    """
    updated = tournament.copy()
    computed = {
        p.id: p.stats for p in calculate_standings(updated.participants, updated.fixtures)
    }
    for participant in updated.participants:
        participant.stats = computed[participant.id]
    return updated


def group_standings(tournament: Tournament) -> Dict[str, List[Participant]]:
    """Standings of every group of a hybrid tournament, keyed by group label."""
    tables: Dict[str, List[Participant]] = {}
    for group_id in tournament.group_ids:
        members = [p for p in tournament.participants if p.group_id == group_id]
        tables[group_id] = calculate_standings(members, group_matches(tournament, group_id))
    return tables


def group_matches(tournament: Tournament, group_id: str) -> List[Match]:
    """Group-stage matches of one group (matches whose home side is a member)."""
    members = {p.id for p in tournament.participants if p.group_id == group_id}
    return [
        m
        for m in tournament.fixtures
        if m.round_order == GROUP_STAGE_ROUND_ORDER and m.home_team_id in members
    ]


def calculate_top_scorers(
    participants: Sequence[Participant], matches: Iterable[Match]
) -> List[ScorerRanking]:
    """Aggregate goals from the scorer breakdown of played matches.

    Args:
        participants: Known participants; scorer ids outside this list are skipped
        matches: Matches to read

    Returns:
        Leaderboard sorted by goals (descending). Participants without goals
        are left out. Equal totals keep participant order.
    """
    totals: Dict[str, int] = {}
    for match in matches:
        if not match.is_played:
            continue
        for scorer in match.scorers:
            totals[scorer.participant_id] = (
                totals.get(scorer.participant_id, 0) + scorer.goals
            )

    leaderboard = [
        ScorerRanking(participant=p, goals=totals[p.id])
        for p in participants
        if totals.get(p.id, 0) > 0
    ]
    leaderboard.sort(key=lambda entry: -entry.goals)
    return leaderboard
