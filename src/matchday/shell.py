"""Interactive Matchday shell.

Runs the same commands as the ``matchday`` CLI inside a prompt_toolkit
session with history and tab completion of command names and tournament ids.
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
import shlex
from typing import List

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from matchday.cli import VIEWS, add_commands, run_command
from matchday.constants import TOURNAMENT_TYPES
from matchday.controllers import TournamentService
from matchday.exceptions import MatchdayException
from matchday.utils import setup_logger

logger = setup_logger(__name__)

PROMPT = "matchday> "

COMMANDS = {
    "create": "Create a tournament: create NAME --type TYPE --participants A B ...",
    "list": "List tournaments",
    "show": "Show a tournament: show TOURNAMENT_ID [--view VIEW]",
    "result": "Enter a result: result TOURNAMENT_ID MATCH_ID HOME AWAY",
    "delete": "Delete a tournament: delete TOURNAMENT_ID",
    "help": "Show this list",
    "exit": "Leave the shell",
}

EXIT_WORDS = ("exit", "quit", "q")


def create_shell_parser() -> argparse.ArgumentParser:
    """Parser for commands typed at the prompt."""
    parser = argparse.ArgumentParser(prog="", add_help=False)
    add_commands(parser, include_shell=False)
    return parser


def known_tournament_ids(service: TournamentService) -> List[str]:
    try:
        return [t.id for t in service.list()]
    except MatchdayException as e:
        logger.warning("Could not list tournaments for completion: %s", e)
        return []


def create_completer(tournament_ids: List[str]) -> WordCompleter:
    """Completer for command names, options and tournament ids."""
    words = list(COMMANDS)
    words += [f"/{cmd}" for cmd in COMMANDS]
    words += ["--type", "--participants", "--two-legs", "--view", "--scorer"]
    words += list(TOURNAMENT_TYPES) + VIEWS + tournament_ids
    return WordCompleter(words, ignore_case=True, WORD=True)


def print_commands_list() -> None:
    print("\nAvailable commands:")
    for cmd, description in COMMANDS.items():
        print(f"  {cmd:<8} {description}")
    print()


def run_shell(service: TournamentService, session=None) -> int:
    """Run the interactive loop until the user exits.

    Args:
        service: Service the commands run against
        session: Prompt session; a new PromptSession if omitted

    Returns:
        Exit code
    """
    if session is None:
        session = PromptSession(
            history=InMemoryHistory(),
            style=Style.from_dict({"prompt": "#00aa00 bold"}),
        )
    parser = create_shell_parser()

    print("Matchday interactive mode. Type 'help' for commands, 'exit' to leave.")

    while True:
        try:
            completer = create_completer(known_tournament_ids(service))
            user_input = session.prompt(PROMPT, completer=completer).strip()
        except KeyboardInterrupt:
            print("Use 'exit' or 'quit' to leave")
            continue
        except EOFError:
            break

        if not user_input:
            continue

        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            print(f"Error: {e}")
            continue

        command = parts[0].lstrip("/")
        if command in EXIT_WORDS:
            break
        if command in ("help", "?"):
            print_commands_list()
            continue
        if command not in COMMANDS:
            print(f"Unknown command: {command}")
            print("Type 'help' to see available commands")
            continue

        try:
            args = parser.parse_args([command] + parts[1:])
        except SystemExit:
            # argparse already printed the usage error
            continue

        run_command(service, args)

    print("Goodbye!")
    return 0
