import pytest

from matchday.constants import STATUS_ACTIVE, STATUS_COMPLETED
from matchday.controllers import ResultRecorder, create_tournament
from matchday.engine import advance_all, progress_knockout
from matchday.engine.progression import tie_winner
from matchday.models import Match, Tie


@pytest.fixture
def recorder():
    return ResultRecorder()


def _knockout(names, two_legs=False):
    return create_tournament("Cup", "KNOCKOUT", names, has_two_legs=two_legs)


def _pid(tournament, name):
    return next(p.id for p in tournament.participants if p.name == name)


def _round(tournament, order):
    return [m for m in tournament.fixtures if m.round_order == order]


def _by_slot(tournament, order):
    return sorted(_round(tournament, order), key=lambda m: m.slot)


def _between(tournament, home, away, order=None):
    home_id, away_id = _pid(tournament, home), _pid(tournament, away)
    return next(
        m
        for m in tournament.fixtures
        if m.home_team_id == home_id
        and m.away_team_id == away_id
        and (order is None or m.round_order == order)
    )


def test_three_entrants_bye_goes_straight_to_the_final(recorder):
    tournament = _knockout(["A", "B", "C"])

    first_round = _round(tournament, 1)
    assert len(first_round) == 2
    assert _round(tournament, 2) == []

    semi = _between(tournament, "A", "B")
    tournament = recorder.submit_result(tournament, semi.id, 2, 1)

    final = _round(tournament, 2)
    assert len(final) == 1
    assert final[0].round_name == "Final"
    assert final[0].home_team_id == _pid(tournament, "A")
    assert final[0].away_team_id == _pid(tournament, "C")
    assert final[0].slot == 0
    assert tournament.status == STATUS_ACTIVE

    tournament = recorder.submit_result(tournament, final[0].id, 0, 1)
    assert tournament.status == STATUS_COMPLETED


def test_progression_is_idempotent(recorder):
    tournament = _knockout(["A", "B", "C", "D"])
    for match in _round(tournament, 1):
        tournament = recorder.submit_result(tournament, match.id, 1, 0)

    assert len(_round(tournament, 2)) == 1
    for match in _round(tournament, 1):
        tournament = progress_knockout(tournament, match)
    tournament = advance_all(tournament)

    assert len(_round(tournament, 2)) == 1
    assert len(tournament.fixtures) == 3


def test_progress_knockout_returns_a_new_snapshot(recorder):
    tournament = _knockout(["A", "B", "C", "D"])
    for match in _round(tournament, 1):
        tournament = recorder.record_result(tournament, match.id, 1, 0)

    progressed = progress_knockout(tournament, _round(tournament, 1)[-1])

    assert len(progressed.fixtures) == 3
    assert len(tournament.fixtures) == 2


def test_final_waits_for_the_neighbouring_tie(recorder):
    tournament = _knockout(["A", "B", "C", "D"])
    first = _between(tournament, "A", "B")

    tournament = recorder.submit_result(tournament, first.id, 3, 0)

    assert _round(tournament, 2) == []


def test_eight_entrants_play_four_two_one(recorder):
    tournament = _knockout([f"T{i}" for i in range(8)])
    assert [m.round_name for m in _round(tournament, 1)] == ["Quarter-Final"] * 4

    for order, expected_name in [(1, "Semi-Final"), (2, "Final")]:
        for match in _round(tournament, order):
            tournament = recorder.submit_result(tournament, match.id, 2, 0)
        next_round = _round(tournament, order + 1)
        assert all(m.round_name == expected_name for m in next_round)

    assert [len(_round(tournament, order)) for order in (1, 2, 3)] == [4, 2, 1]

    final = _round(tournament, 3)[0]
    tournament = recorder.submit_result(tournament, final.id, 1, 0)
    assert tournament.status == STATUS_COMPLETED
    # Home side won every match, so T0 takes the title
    assert final.home_team_id == _pid(tournament, "T0")


def test_slots_keep_bracket_halves_apart(recorder):
    tournament = _knockout([f"T{i}" for i in range(8)])

    # Finish the lower half first
    for match in reversed(_round(tournament, 1)):
        tournament = recorder.submit_result(tournament, match.id, 1, 0)

    semis = sorted(_round(tournament, 2), key=lambda m: m.slot)
    assert [m.slot for m in semis] == [0, 1]
    assert semis[0].home_team_id == _pid(tournament, "T0")
    assert semis[0].away_team_id == _pid(tournament, "T2")
    assert semis[1].home_team_id == _pid(tournament, "T4")
    assert semis[1].away_team_id == _pid(tournament, "T6")


def test_upper_half_played_first_does_not_finish_the_cup(recorder):
    tournament = _knockout([f"T{i}" for i in range(8)])
    upper = _by_slot(tournament, 1)[:2]
    lower = _by_slot(tournament, 1)[2:]

    for match in upper:
        tournament = recorder.submit_result(tournament, match.id, 1, 0)
    (semi,) = _round(tournament, 2)
    assert semi.round_name == "Semi-Final"

    tournament = recorder.submit_result(tournament, semi.id, 1, 0)
    assert tournament.status == STATUS_ACTIVE
    assert _round(tournament, 3) == []

    # The rest of the bracket can still be played
    for match in lower:
        tournament = recorder.submit_result(tournament, match.id, 1, 0)
    other_semi = _by_slot(tournament, 2)[1]
    tournament = recorder.submit_result(tournament, other_semi.id, 0, 1)

    (final,) = _round(tournament, 3)
    assert final.round_name == "Final"
    assert final.home_team_id == _pid(tournament, "T0")
    assert final.away_team_id == _pid(tournament, "T6")

    tournament = recorder.submit_result(tournament, final.id, 2, 1)
    assert tournament.status == STATUS_COMPLETED


def test_sixteen_entrants_name_rounds_by_bracket_size(recorder):
    tournament = _knockout([f"T{i}" for i in range(16)])
    assert {m.round_name for m in _round(tournament, 1)} == {"Round of 16"}

    for match in _by_slot(tournament, 1)[:4]:
        tournament = recorder.submit_result(tournament, match.id, 1, 0)
    quarters = _by_slot(tournament, 2)
    assert [m.round_name for m in quarters] == ["Quarter-Final"] * 2

    for match in quarters:
        tournament = recorder.submit_result(tournament, match.id, 1, 0)
    (semi,) = _round(tournament, 3)
    assert semi.round_name == "Semi-Final"
    assert semi.slot == 0

    tournament = recorder.submit_result(tournament, semi.id, 1, 0)
    assert tournament.status == STATUS_ACTIVE
    assert _round(tournament, 4) == []


def test_two_legged_semi_final_named_from_bracket_size(recorder):
    tournament = _knockout([f"T{i}" for i in range(8)], two_legs=True)
    first_two_ties = [m for m in _round(tournament, 1) if m.slot in (0, 1)]
    assert len(first_two_ties) == 4

    for match in first_two_ties:
        home, away = (2, 0) if match.leg == 1 else (1, 1)
        tournament = recorder.submit_result(tournament, match.id, home, away)

    legs = _round(tournament, 2)
    assert [m.round_name for m in legs] == ["Semi-Final - Leg 1", "Semi-Final - Leg 2"]


def test_five_entrants_resolve_bye_only_ties_at_creation(recorder):
    tournament = _knockout(["A", "B", "C", "D", "E"])

    semis = _round(tournament, 2)
    assert len(semis) == 1
    assert semis[0].round_name == "Semi-Final"
    assert semis[0].slot == 1
    assert {semis[0].home_team_id, semis[0].away_team_id} == {
        _pid(tournament, "D"),
        _pid(tournament, "E"),
    }

    opener = _between(tournament, "A", "B")
    tournament = recorder.submit_result(tournament, opener.id, 0, 2)

    semis = sorted(_round(tournament, 2), key=lambda m: m.slot)
    assert len(semis) == 2
    assert semis[0].home_team_id == _pid(tournament, "B")
    assert semis[0].away_team_id == _pid(tournament, "C")


def test_two_legged_tie_goes_to_aggregate(recorder):
    tournament = _knockout(["A", "B", "C", "D"], two_legs=True)
    assert len(_round(tournament, 1)) == 4

    tournament = recorder.submit_result(tournament, _between(tournament, "A", "B").id, 2, 0)
    tournament = recorder.submit_result(tournament, _between(tournament, "B", "A").id, 1, 0)
    tournament = recorder.submit_result(tournament, _between(tournament, "C", "D").id, 0, 1)
    tournament = recorder.submit_result(tournament, _between(tournament, "D", "C").id, 0, 2)

    final = _round(tournament, 2)
    assert [m.round_name for m in final] == ["Final - Leg 1", "Final - Leg 2"]
    assert final[0].home_team_id == _pid(tournament, "A")
    assert final[0].away_team_id == _pid(tournament, "C")
    assert final[1].home_team_id == _pid(tournament, "C")


def test_first_leg_alone_does_not_progress(recorder):
    tournament = _knockout(["A", "B"], two_legs=True)

    tournament = recorder.submit_result(tournament, _between(tournament, "A", "B").id, 3, 0)

    assert tournament.status == STATUS_ACTIVE
    assert len(tournament.fixtures) == 2


def test_level_aggregate_goes_to_away_goals(recorder):
    tournament = _knockout(["A", "B", "C", "D"], two_legs=True)

    tournament = recorder.submit_result(tournament, _between(tournament, "A", "B").id, 1, 2)
    tournament = recorder.submit_result(tournament, _between(tournament, "B", "A").id, 0, 1)
    tournament = recorder.submit_result(tournament, _between(tournament, "C", "D").id, 1, 0)
    tournament = recorder.submit_result(tournament, _between(tournament, "D", "C").id, 0, 0)

    final = _round(tournament, 2)
    # 2-2 on aggregate, B scored twice away and A once
    assert final[0].home_team_id == _pid(tournament, "B")
    assert final[0].away_team_id == _pid(tournament, "C")


def test_two_legged_final_completes_after_second_leg(recorder):
    tournament = _knockout(["A", "B"], two_legs=True)

    tournament = recorder.submit_result(tournament, _between(tournament, "A", "B").id, 1, 0)
    assert tournament.status == STATUS_ACTIVE

    tournament = recorder.submit_result(tournament, _between(tournament, "B", "A").id, 0, 2)
    assert tournament.status == STATUS_COMPLETED
    assert len(tournament.fixtures) == 2


def _match(match_id, home, away, home_score, away_score, leg=None):
    return Match(
        id=match_id,
        tournament_id="t1",
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
        is_played=True,
        round_order=1,
        slot=0,
        leg=leg,
    )


def test_level_tie_falls_back_to_first_participant():
    tie = Tie(
        round_order=1,
        slot=0,
        first_id="a",
        second_id="b",
        matches=[_match("m1", "a", "b", 1, 1)],
    )

    assert tie.is_level
    assert tie_winner(tie) == "a"


def test_incomplete_tie_has_no_winner():
    unplayed = Match(id="m2", tournament_id="t1", home_team_id="b", away_team_id="a")
    tie = Tie(
        round_order=1,
        slot=0,
        first_id="a",
        second_id="b",
        matches=[_match("m1", "a", "b", 4, 0, leg=1), unplayed],
    )

    assert not tie.is_complete
    assert tie_winner(tie) is None
