"""Command-line interface for Matchday.

This module provides the ``matchday`` command: creating tournaments, viewing
fixtures and tables, and entering results.
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

import argparse
import sys
from typing import Dict, List, Optional, Sequence

from matchday.config import AppConfig
from matchday.constants import APP_NAME, TOURNAMENT_TYPES, TYPE_LEAGUE
from matchday.controllers import TournamentService
from matchday.engine import ScorerRanking, group_standings
from matchday.exceptions import MatchdayException
from matchday.models import Match, Participant, Tournament
from matchday.storage import JsonTournamentStore
from matchday.utils import configure_logging, setup_logger

logger = setup_logger(__name__)

VIEWS = ["fixtures", "standings", "groups", "scorers", "all"]


def parse_scorer(value: str) -> Dict[str, int]:
    """Parse a ``PARTICIPANT_ID=GOALS`` scorer option.

    Raises:
        argparse.ArgumentTypeError: If format is invalid
    """
    participant_id, sep, goals = value.partition("=")
    if not sep or not participant_id.strip():
        raise argparse.ArgumentTypeError(
            f"Invalid scorer '{value}'. Use 'PARTICIPANT_ID=GOALS'"
        )
    try:
        return {participant_id.strip(): int(goals)}
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid scorer '{value}'. Goals must be an integer"
        )


# ========== Formatting ==========


def format_match(tournament: Tournament, match: Match) -> str:
    home = tournament.participant_name(match.home_team_id)
    away = tournament.participant_name(match.away_team_id)
    if match.is_played:
        score = f"{match.home_score} - {match.away_score}"
    else:
        score = "vs"
    line = f"  {match.id}  {home} {score} {away}"
    if match.is_bye:
        line += "  (bye)"
    return line


def format_fixtures(tournament: Tournament) -> str:
    """Fixture list grouped by round, in round order."""
    lines: List[str] = []
    for round_data in tournament.rounds:
        lines.append(f"{round_data.name}:")
        for match in round_data.matches:
            prefix = ""
            if match.round_name != round_data.name:
                prefix = f"[{match.round_name}]"
            text = format_match(tournament, match)
            lines.append(f"{text}  {prefix}".rstrip())
    if not lines:
        return "No fixtures."
    return "\n".join(lines)


def format_standings(standings: Sequence[Participant]) -> str:
    """League table as fixed-width text."""
    lines = [
        f"{'#':>3}  {'Name':<20} {'P':>3} {'W':>3} {'D':>3} {'L':>3} "
        f"{'GF':>4} {'GA':>4} {'GD':>4} {'Pts':>4}"
    ]
    for position, participant in enumerate(standings, 1):
        s = participant.stats
        lines.append(
            f"{position:>3}  {participant.name:<20} {s.played:>3} {s.won:>3} "
            f"{s.drawn:>3} {s.lost:>3} {s.goals_for:>4} {s.goals_against:>4} "
            f"{s.goal_difference:>+4} {s.points:>4}"
        )
    return "\n".join(lines)


def format_scorers(leaderboard: Sequence[ScorerRanking]) -> str:
    if not leaderboard:
        return "No goals recorded."
    return "\n".join(
        f"{position:>3}  {entry.participant.name:<20} {entry.goals:>3}"
        for position, entry in enumerate(leaderboard, 1)
    )


def format_summary(tournament: Tournament) -> str:
    """One-line description used by ``list``."""
    played = sum(1 for m in tournament.fixtures if m.is_played)
    stage = f" {tournament.stage}" if tournament.stage else ""
    return (
        f"{tournament.id}  {tournament.name}  [{tournament.type}{stage}] "
        f"{tournament.status}  {played}/{len(tournament.fixtures)} played"
    )


def format_tournament(
    service: TournamentService, tournament: Tournament, view: str = "all"
) -> str:
    """Render one tournament for the ``show`` command."""
    sections = [format_summary(tournament)]

    if view in ("fixtures", "all"):
        sections.append("Fixtures\n" + format_fixtures(tournament))

    show_table = view == "standings" or (view == "all" and tournament.type == TYPE_LEAGUE)
    if show_table and not tournament.group_ids:
        sections.append(
            "Standings\n" + format_standings(service.standings(tournament.id))
        )

    # Grouped tournaments have no overall table
    if view in ("groups", "standings", "all") and tournament.group_ids:
        for group_id, table in group_standings(tournament).items():
            sections.append(f"Group {group_id}\n" + format_standings(table))

    if view in ("scorers", "all"):
        sections.append(
            "Top scorers\n" + format_scorers(service.top_scorers(tournament.id))
        )

    return "\n\n".join(sections)


# ========== Commands ==========


def cmd_create(service: TournamentService, args: argparse.Namespace) -> int:
    tournament = service.create(
        args.name, args.type, args.participants, has_two_legs=args.two_legs
    )
    print(f"Created tournament {tournament.id}")
    print(format_fixtures(tournament))
    return 0


def cmd_list(service: TournamentService, args: argparse.Namespace) -> int:
    tournaments = service.list()
    if not tournaments:
        print("No tournaments.")
        return 0
    for tournament in tournaments:
        print(format_summary(tournament))
    return 0


def cmd_show(service: TournamentService, args: argparse.Namespace) -> int:
    tournament = service.get(args.tournament_id)
    print(format_tournament(service, tournament, args.view))
    return 0


def cmd_result(service: TournamentService, args: argparse.Namespace) -> int:
    scorers: Optional[Dict[str, int]] = None
    if args.scorer:
        scorers = {}
        for entry in args.scorer:
            for participant_id, goals in entry.items():
                scorers[participant_id] = scorers.get(participant_id, 0) + goals

    tournament = service.submit_result(
        args.tournament_id, args.match_id, args.home, args.away, scorers
    )
    match = tournament.get_match(args.match_id)
    print("Recorded:" + format_match(tournament, match))
    if tournament.is_completed:
        print(f"Tournament '{tournament.name}' is complete.")
    return 0


def cmd_delete(service: TournamentService, args: argparse.Namespace) -> int:
    service.delete(args.tournament_id)
    print(f"Deleted tournament {args.tournament_id}")
    return 0


def cmd_shell(service: TournamentService, args: argparse.Namespace) -> int:
    from matchday.shell import run_shell

    return run_shell(service)


def add_commands(parser: argparse.ArgumentParser, include_shell: bool = True) -> None:
    """Register the tournament subcommands on ``parser``."""
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    create = subparsers.add_parser("create", help="Create a tournament")
    create.add_argument("name", help="Tournament name")
    create.add_argument(
        "--type",
        choices=TOURNAMENT_TYPES,
        default=TYPE_LEAGUE,
        help="Tournament format (default: %(default)s)",
    )
    create.add_argument(
        "--participants",
        nargs="+",
        required=True,
        metavar="NAME",
        help="Participant names in entry order",
    )
    create.add_argument(
        "--two-legs",
        action="store_true",
        help="Play knockout ties home and away (KNOCKOUT only)",
    )
    create.set_defaults(func=cmd_create)

    list_parser = subparsers.add_parser("list", help="List tournaments")
    list_parser.set_defaults(func=cmd_list)

    show = subparsers.add_parser("show", help="Show fixtures, tables and scorers")
    show.add_argument("tournament_id", help="Tournament ID")
    show.add_argument(
        "--view", choices=VIEWS, default="all", help="What to show (default: all)"
    )
    show.set_defaults(func=cmd_show)

    result = subparsers.add_parser("result", help="Enter a match result")
    result.add_argument("tournament_id", help="Tournament ID")
    result.add_argument("match_id", help="Match ID")
    result.add_argument("home", type=int, help="Home goals")
    result.add_argument("away", type=int, help="Away goals")
    result.add_argument(
        "--scorer",
        type=parse_scorer,
        action="append",
        metavar="PARTICIPANT_ID=GOALS",
        help="Goal breakdown entry (repeatable). Defaults to each side's score",
    )
    result.set_defaults(func=cmd_result)

    delete = subparsers.add_parser("delete", help="Delete a tournament")
    delete.add_argument("tournament_id", help="Tournament ID")
    delete.set_defaults(func=cmd_delete)

    if include_shell:
        shell = subparsers.add_parser("shell", help="Interactive mode")
        shell.set_defaults(func=cmd_shell)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="matchday",
        description=f"{APP_NAME} - league, knockout and group tournament manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Round-robin league
  matchday create "Sunday League" --type LEAGUE --participants Ajax Benfica Celtic Dynamo

  # Two-legged knockout
  matchday create "Cup" --type KNOCKOUT --two-legs --participants A B C D E

  # Enter a result with a goal breakdown
  matchday result <tournament-id> <match-id> 2 1 --scorer <participant-id>=2
        """,
    )
    parser.add_argument(
        "--data", help="Tournament data file (default: $MATCHDAY_DATA_FILE or ~/.matchday)"
    )
    parser.add_argument(
        "--log-level", help="Log level (default: $MATCHDAY_LOG_LEVEL or WARNING)"
    )
    parser.add_argument(
        "--qualifiers",
        type=int,
        metavar="N",
        help="Finishers per group who reach the knockout stage "
        "(default: $MATCHDAY_QUALIFIERS_PER_GROUP or 2)",
    )
    add_commands(parser)
    return parser


def build_service(config: AppConfig) -> TournamentService:
    store = JsonTournamentStore(config.data_file)
    return TournamentService(store, qualifiers_per_group=config.qualifiers_per_group)


def run_command(service: TournamentService, args: argparse.Namespace) -> int:
    """Execute a parsed subcommand, reporting domain errors on stderr.

    Returns:
        Exit code
    """
    try:
        return args.func(service, args)
    except MatchdayException as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_env()
        if args.data:
            config.data_file = AppConfig(data_file=args.data).data_file
        if args.log_level:
            config.log_level = args.log_level.upper()
        if args.qualifiers is not None:
            config.qualifiers_per_group = AppConfig(
                qualifiers_per_group=args.qualifiers
            ).qualifiers_per_group
    except MatchdayException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(config.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        return run_command(build_service(config), args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
