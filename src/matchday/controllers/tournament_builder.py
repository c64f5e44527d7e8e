"""Tournament creation.

Validates the creation form and produces a fully initialized tournament with
its opening fixtures.
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

import random
from typing import Optional, Sequence

from matchday.constants import (
    DEFAULT_QUALIFIERS_PER_GROUP,
    STAGE_GROUP,
    STATUS_ACTIVE,
    TYPE_GROUPS_KNOCKOUT,
    TYPE_KNOCKOUT,
    TYPE_LEAGUE,
)
from matchday.engine import (
    advance_all,
    advance_group_to_knockout,
    check_completion,
    generate_group_fixtures,
    generate_knockout_fixtures,
    generate_league_fixtures,
)
from matchday.models import Participant, Tournament
from matchday.utils import generate_id, setup_logger
from matchday.utils.validation import (
    validate_participant_names_strict,
    validate_tournament_name_strict,
    validate_tournament_type_strict,
)

logger = setup_logger(__name__)


class TournamentBuilder:
    """Builds new tournaments from the creation form."""

    def __init__(
        self,
        qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the builder.

        Args:
            qualifiers_per_group: Finishers per group who reach the knockout stage
            rng: Random source for the group draw (module RNG if omitted)
        """
        self.qualifiers_per_group = qualifiers_per_group
        self.rng = rng

    def create(
        self,
        name: str,
        tournament_type: str,
        participant_names: Sequence[str],
        has_two_legs: bool = False,
    ) -> Tournament:
        """Create a tournament with its opening fixtures.

        Args:
            name: Tournament name
            tournament_type: LEAGUE, KNOCKOUT or GROUPS_KNOCKOUT
            participant_names: Names in entry order (at least two, none blank)
            has_two_legs: Two-legged ties (KNOCKOUT only)

        Returns:
            An ACTIVE tournament. Leagues and knockouts get their full opening
            schedule; hybrids get the group stage only.

        Raises:
            TournamentNameValidationException: If the name is blank
            ParticipantValidationException: If the participant list is invalid
            InvalidConfigurationException: If the type or options are invalid
        """
        clean_name = validate_tournament_name_strict(name)
        clean_type = validate_tournament_type_strict(tournament_type, has_two_legs)
        names = validate_participant_names_strict(participant_names)

        tournament_id = generate_id("tournament")
        participants = [Participant(id=generate_id("participant"), name=n) for n in names]

        tournament = Tournament(
            id=tournament_id,
            name=clean_name,
            type=clean_type,
            participants=participants,
            status=STATUS_ACTIVE,
            has_two_legs=has_two_legs,
        )

        if clean_type == TYPE_LEAGUE:
            tournament.fixtures = generate_league_fixtures(participants, tournament_id)
        elif clean_type == TYPE_KNOCKOUT:
            tournament.fixtures = generate_knockout_fixtures(
                participants, tournament_id, has_two_legs
            )
            # Rounds decided by byes alone need no user input
            tournament = advance_all(tournament)
        elif clean_type == TYPE_GROUPS_KNOCKOUT:
            allocation = generate_group_fixtures(participants, tournament_id, self.rng)
            tournament.participants = allocation.participants
            tournament.fixtures = allocation.fixtures
            tournament.stage = STAGE_GROUP
            # Single-member groups produce no group matches at all
            transitioned = advance_group_to_knockout(
                tournament, self.qualifiers_per_group
            )
            if transitioned is not None:
                tournament = transitioned

        tournament = check_completion(tournament)

        logger.info(
            "Created %s tournament '%s' with %d participants and %d fixtures",
            clean_type,
            clean_name,
            len(participants),
            len(tournament.fixtures),
        )
        return tournament


def create_tournament(
    name: str,
    tournament_type: str,
    participant_names: Sequence[str],
    has_two_legs: bool = False,
    rng: Optional[random.Random] = None,
) -> Tournament:
    """Module-level shortcut for :meth:`TournamentBuilder.create`."""
    return TournamentBuilder(rng=rng).create(
        name, tournament_type, participant_names, has_two_legs
    )
