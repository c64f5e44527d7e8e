from matchday.constants import STATUS_ACTIVE, STATUS_COMPLETED
from matchday.controllers import ResultRecorder, create_tournament
from matchday.engine import check_completion, is_finished
from matchday.models import Match, Participant, Tournament


def _league(count=4):
    return create_tournament("League", "LEAGUE", [f"T{i}" for i in range(count)])


def test_league_completes_when_every_fixture_is_played():
    tournament = _league()
    recorder = ResultRecorder()
    matches = list(tournament.fixtures)

    for match in matches[:-1]:
        tournament = recorder.submit_result(tournament, match.id, 1, 1)
        assert tournament.status == STATUS_ACTIVE

    tournament = recorder.submit_result(tournament, matches[-1].id, 0, 0)
    assert tournament.status == STATUS_COMPLETED


def test_league_without_fixtures_is_not_finished():
    tournament = Tournament(id="t1", name="Empty", type="LEAGUE")

    assert not is_finished(tournament)
    assert check_completion(tournament).status == STATUS_ACTIVE


def test_knockout_completes_with_the_final():
    tournament = create_tournament("Cup", "KNOCKOUT", ["A", "B"])
    assert not is_finished(tournament)

    tournament = ResultRecorder().submit_result(tournament, tournament.fixtures[0].id, 2, 1)

    assert tournament.status == STATUS_COMPLETED
    assert tournament.is_completed


def test_hybrid_group_stage_never_completes():
    tournament = Tournament(
        id="t1",
        name="Hybrid",
        type="GROUPS_KNOCKOUT",
        stage="GROUP_STAGE",
        participants=[Participant(id="a", name="A", group_id="A")],
        fixtures=[
            Match(
                id="m1",
                tournament_id="t1",
                home_team_id="a",
                away_team_id="b",
                home_score=1,
                away_score=0,
                is_played=True,
            )
        ],
    )

    assert not is_finished(tournament)


def test_completion_is_monotonic():
    tournament = Tournament(
        id="t1",
        name="Done",
        type="LEAGUE",
        status=STATUS_COMPLETED,
        fixtures=[Match(id="m1", tournament_id="t1", home_team_id="a", away_team_id="b")],
    )

    assert check_completion(tournament).status == STATUS_COMPLETED


def test_check_completion_returns_a_copy():
    tournament = _league(2)
    played = ResultRecorder().record_result(tournament, tournament.fixtures[0].id, 1, 0)

    completed = check_completion(played)

    assert completed.status == STATUS_COMPLETED
    assert played.status == STATUS_ACTIVE


def test_lone_tie_in_an_early_round_is_not_the_final():
    tournament = create_tournament("Cup", "KNOCKOUT", [f"T{i}" for i in range(8)])
    recorder = ResultRecorder()
    upper = sorted(tournament.fixtures, key=lambda m: m.slot)[:2]
    for match in upper:
        tournament = recorder.submit_result(tournament, match.id, 1, 0)

    semi = next(m for m in tournament.fixtures if m.round_order == 2)
    played = recorder.record_result(tournament, semi.id, 3, 2)

    assert len(played.rounds[-1].ties) == 1
    assert not is_finished(played)
    assert check_completion(played).status == STATUS_ACTIVE
