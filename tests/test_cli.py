import argparse

import pytest

from matchday import cli
from matchday.cli import create_parser, format_standings, main, parse_scorer
from matchday.controllers import TournamentService
from matchday.engine import calculate_standings
from matchday.models import Match, Participant
from matchday.shell import create_completer, run_shell
from matchday.storage import InMemoryTournamentStore, JsonTournamentStore


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "tournaments.json"


def _run(data_file, *argv):
    return main(["--data", str(data_file), *argv])


def _only_tournament(data_file):
    (tournament,) = JsonTournamentStore(data_file).load_all()
    return tournament


def test_create_and_list(data_file, capsys):
    code = _run(
        data_file, "create", "Sunday League", "--participants", "Ann", "Bob", "Cat"
    )
    assert code == 0
    tournament = _only_tournament(data_file)
    assert tournament.type == "LEAGUE"
    assert len(tournament.fixtures) == 3

    assert _run(data_file, "list") == 0
    out = capsys.readouterr().out
    assert tournament.id in out
    assert "Sunday League" in out


def test_result_and_show(data_file, capsys):
    _run(data_file, "create", "Cup", "--type", "KNOCKOUT", "--participants", "Ann", "Bob")
    tournament = _only_tournament(data_file)
    final = tournament.fixtures[0]

    assert _run(data_file, "result", tournament.id, final.id, "2", "1") == 0
    out = capsys.readouterr().out
    assert "Ann 2 - 1 Bob" in out
    assert "is complete" in out

    assert _run(data_file, "show", tournament.id) == 0
    out = capsys.readouterr().out
    assert "Final:" in out
    assert "COMPLETED" in out
    assert "Top scorers" in out


def test_scorer_option(data_file):
    _run(data_file, "create", "League", "--participants", "Ann", "Bob")
    tournament = _only_tournament(data_file)
    match = tournament.fixtures[0]

    _run(
        data_file,
        "result",
        tournament.id,
        match.id,
        "2",
        "0",
        "--scorer",
        f"{match.home_team_id}=1",
    )

    scorers = _only_tournament(data_file).fixtures[0].scorers
    assert [(s.participant_id, s.goals) for s in scorers] == [(match.home_team_id, 1)]


def test_domain_errors_exit_with_one(data_file, capsys):
    assert _run(data_file, "show", "nope") == 1
    assert "not found" in capsys.readouterr().err

    assert _run(data_file, "create", "Solo", "--participants", "Ann") == 1
    assert _run(data_file, "create", "L", "--two-legs", "--participants", "A", "B") == 1


def test_delete(data_file):
    _run(data_file, "create", "League", "--participants", "Ann", "Bob")
    tournament = _only_tournament(data_file)

    assert _run(data_file, "delete", tournament.id) == 0
    assert JsonTournamentStore(data_file).load_all() == []
    assert _run(data_file, "delete", tournament.id) == 1


def test_no_command_prints_help(data_file, capsys):
    assert _run(data_file) == 0
    assert "usage" in capsys.readouterr().out


def test_standings_view_of_a_grouped_tournament_shows_group_tables(data_file, capsys):
    _run(
        data_file,
        "create",
        "World Cup",
        "--type",
        "GROUPS_KNOCKOUT",
        "--participants",
        *[f"T{i}" for i in range(8)],
    )
    tournament = _only_tournament(data_file)
    capsys.readouterr()

    assert _run(data_file, "show", tournament.id, "--view", "standings") == 0

    out = capsys.readouterr().out
    for group_id in tournament.group_ids:
        assert f"Group {group_id}" in out
    assert "Pts" in out


def test_qualifiers_option_reaches_the_service(data_file, monkeypatch):
    seen = []
    real_build_service = cli.build_service

    def capture(config):
        seen.append(config.qualifiers_per_group)
        return real_build_service(config)

    monkeypatch.setattr(cli, "build_service", capture)

    assert _run(data_file, "--qualifiers", "1", "list") == 0
    assert seen == [1]


def test_invalid_qualifiers_exit_with_one(data_file, monkeypatch, capsys):
    assert _run(data_file, "--qualifiers", "0", "list") == 1
    assert "qualifiers_per_group" in capsys.readouterr().err

    monkeypatch.setenv("MATCHDAY_QUALIFIERS_PER_GROUP", "many")
    assert _run(data_file, "list") == 1


def test_parse_scorer():
    assert parse_scorer("p1=2") == {"p1": 2}
    with pytest.raises(argparse.ArgumentTypeError):
        parse_scorer("p1")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_scorer("p1=two")


def test_parser_rejects_unknown_type():
    with pytest.raises(SystemExit):
        create_parser().parse_args(
            ["create", "X", "--type", "SWISS", "--participants", "A", "B"]
        )


def test_format_standings_columns():
    participants = [Participant("a", "Ann"), Participant("b", "Bob")]
    match = Match(
        id="m1",
        tournament_id="t1",
        home_team_id="a",
        away_team_id="b",
        home_score=3,
        away_score=1,
        is_played=True,
    )

    lines = format_standings(calculate_standings(participants, [match])).splitlines()

    assert lines[0].split() == ["#", "Name", "P", "W", "D", "L", "GF", "GA", "GD", "Pts"]
    assert lines[1].split() == ["1", "Ann", "1", "1", "0", "0", "3", "1", "+2", "3"]


class FakeSession:
    """Feeds scripted lines to the shell loop."""

    def __init__(self, lines):
        self.lines = list(lines)

    def prompt(self, message, **kwargs):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def test_shell_runs_commands_until_exit(capsys):
    service = TournamentService(InMemoryTournamentStore())
    session = FakeSession(
        [
            "",
            "help",
            'create "Shell Cup" --participants Ann Bob',
            "/list",
            "bogus",
            "show",
            "exit",
            "list",
        ]
    )

    assert run_shell(service, session) == 0

    out = capsys.readouterr().out
    assert "Available commands" in out
    assert "Shell Cup" in out
    assert "Unknown command: bogus" in out
    assert "Goodbye!" in out
    # Input after 'exit' is never read
    assert session.lines == ["list"]
    assert len(service.list()) == 1


def test_shell_stops_on_eof():
    service = TournamentService(InMemoryTournamentStore())

    assert run_shell(service, FakeSession([])) == 0


def test_shell_completer_offers_commands_and_ids():
    completer = create_completer(["tournament-abc"])

    assert "result" in completer.words
    assert "/show" in completer.words
    assert "tournament-abc" in completer.words
    assert "GROUPS_KNOCKOUT" in completer.words
