"""Fixture generation for league and knockout formats.

League fixtures use the circle (Berger) method for a single round robin.
Knockout fixtures pad the field with byes up to a power of two and pair
adjacent entries. Walkovers against a bye are resolved on the spot.
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

from typing import List, Optional, Sequence

from matchday.constants import (
    BYE_LOSS_SCORE,
    BYE_WIN_SCORE,
    FINAL_NAME,
    FIRST_KNOCKOUT_ROUND_ORDER,
    LEG_SUFFIX,
    MATCHDAY_NAME,
    QUARTER_FINAL_NAME,
    ROUND_OF_NAME,
    SEMI_FINAL_NAME,
)
from matchday.models import BracketEntry, Bye, Match, Participant, RealEntry
from matchday.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is >= n (1 for n <= 1)."""
    size = 1
    while size < n:
        size *= 2
    return size


def knockout_round_name(tie_count: int) -> str:
    """Name a knockout round from the number of ties it holds."""
    if tie_count == 1:
        return FINAL_NAME
    if tie_count == 2:
        return SEMI_FINAL_NAME
    if tie_count == 4:
        return QUARTER_FINAL_NAME
    return ROUND_OF_NAME.format(size=tie_count * 2)


def leg_round_name(base_name: str, leg: Optional[int]) -> str:
    if leg is None:
        return base_name
    return base_name + LEG_SUFFIX.format(leg=leg)


def new_match(
    tournament_id: str,
    home_id: str,
    away_id: str,
    round_name: str,
    round_order: int,
    slot: Optional[int] = None,
    leg: Optional[int] = None,
) -> Match:
    """Create an unplayed match with a fresh id."""
    return Match(
        id=generate_id("match"),
        tournament_id=tournament_id,
        home_team_id=home_id,
        away_team_id=away_id,
        round_name=round_name,
        round_order=round_order,
        slot=slot,
        leg=leg,
    )


def tie_matches(
    tournament_id: str,
    first_id: str,
    second_id: str,
    base_name: str,
    round_order: int,
    slot: int,
    has_two_legs: bool,
) -> List[Match]:
    """Matches of one knockout tie: a single match, or two legs with venues swapped."""
    if not has_two_legs:
        return [
            new_match(tournament_id, first_id, second_id, base_name, round_order, slot)
        ]
    return [
        new_match(
            tournament_id,
            first_id,
            second_id,
            leg_round_name(base_name, 1),
            round_order,
            slot,
            leg=1,
        ),
        new_match(
            tournament_id,
            second_id,
            first_id,
            leg_round_name(base_name, 2),
            round_order,
            slot,
            leg=2,
        ),
    ]


# ========== League ==========


def generate_league_fixtures(
    participants: Sequence[Participant], tournament_id: str
) -> List[Match]:
    """Generate a single round robin using the circle method.

    Args:
        participants: Entrants in seat order
        tournament_id: ID of the owning tournament

    Returns:
        n*(n-1)/2 matches spread over n-1 matchdays (n rounded up to even)
    """
    seats: List[BracketEntry] = [RealEntry(p) for p in participants]
    if len(seats) % 2 != 0:
        # Whoever faces the ghost sits the round out
        seats.append(Bye(0))

    n = len(seats)
    fixtures: List[Match] = []

    for r in range(n - 1):
        round_number = r + 1
        for i in range(n // 2):
            home = seats[i]
            away = seats[n - 1 - i]
            if isinstance(home, Bye) or isinstance(away, Bye):
                continue

            # Alternate the fixed seat's venue every round
            seat_is_home = (i == 0) if r % 2 == 0 else (i != 0)
            if not seat_is_home:
                home, away = away, home

            fixtures.append(
                new_match(
                    tournament_id,
                    home.entry_id,
                    away.entry_id,
                    MATCHDAY_NAME.format(round=round_number),
                    round_number,
                )
            )

        # Seat 0 stays put, everyone else moves one seat clockwise
        seats.insert(1, seats.pop())

    logger.debug(
        "Generated %d league fixtures for %d participants",
        len(fixtures),
        len(participants),
    )
    return fixtures


# ========== Knockout ==========


def pad_with_byes(participants: Sequence[Participant]) -> List[BracketEntry]:
    """Pad the field to a power of two.

    Each bye is seated next to one of the last entrants so that no tie is
    ever bye against bye. Entry order is otherwise kept.
    """
    size = next_power_of_two(max(len(participants), 2))
    bye_count = size - len(participants)
    cut = len(participants) - bye_count

    entries: List[BracketEntry] = [RealEntry(p) for p in participants[:cut]]
    for index, participant in enumerate(participants[cut:]):
        entries.append(RealEntry(participant))
        entries.append(Bye(index))
    return entries


def walkover_match(
    tournament_id: str,
    home: BracketEntry,
    away: BracketEntry,
    round_name: str,
    slot: int,
) -> Match:
    """A match against a bye, already played and won 1-0 by the real side."""
    match = new_match(
        tournament_id,
        home.entry_id,
        away.entry_id,
        round_name,
        FIRST_KNOCKOUT_ROUND_ORDER,
        slot,
    )
    home_wins = isinstance(away, Bye)
    match.home_score = BYE_WIN_SCORE if home_wins else BYE_LOSS_SCORE
    match.away_score = BYE_LOSS_SCORE if home_wins else BYE_WIN_SCORE
    match.is_played = True
    match.is_bye = True
    return match


def generate_knockout_fixtures(
    participants: Sequence[Participant],
    tournament_id: str,
    has_two_legs: bool = False,
) -> List[Match]:
    """Generate the first round of a single-elimination bracket.

    Args:
        participants: Entrants in bracket order (no seeding is applied)
        tournament_id: ID of the owning tournament
        has_two_legs: Play each tie home and away

    Returns:
        Round-1 matches with ``round_order`` 1 and slot indices 0..k-1
    """
    if not participants:
        return []

    entries = pad_with_byes(participants)
    tie_count = len(entries) // 2
    base_name = knockout_round_name(tie_count)
    fixtures: List[Match] = []

    for slot in range(tie_count):
        home = entries[2 * slot]
        away = entries[2 * slot + 1]

        if isinstance(home, Bye) or isinstance(away, Bye):
            fixtures.append(walkover_match(tournament_id, home, away, base_name, slot))
            logger.debug("%s receives a bye in slot %d", home.name, slot)
            continue

        fixtures.extend(
            tie_matches(
                tournament_id,
                home.entry_id,
                away.entry_id,
                base_name,
                FIRST_KNOCKOUT_ROUND_ORDER,
                slot,
                has_two_legs,
            )
        )

    logger.debug(
        "Generated %s with %d ties (%d matches, two legs: %s)",
        base_name,
        tie_count,
        len(fixtures),
        has_two_legs,
    )
    return fixtures
