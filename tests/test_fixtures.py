import pytest

from matchday.engine import (
    generate_knockout_fixtures,
    generate_league_fixtures,
    knockout_round_name,
    next_power_of_two,
)
from matchday.engine.fixtures import pad_with_byes
from matchday.models import Bye, Participant, build_ties


def _participants(count):
    return [Participant(id=f"p{i}", name=f"Team {i}") for i in range(count)]


@pytest.mark.parametrize("count", [2, 3, 4, 5, 6, 7, 8, 10])
def test_league_every_pair_meets_exactly_once(count):
    participants = _participants(count)
    fixtures = generate_league_fixtures(participants, "t1")

    assert len(fixtures) == count * (count - 1) // 2
    pairs = {frozenset((m.home_team_id, m.away_team_id)) for m in fixtures}
    assert len(pairs) == len(fixtures)
    for match in fixtures:
        assert match.home_team_id != match.away_team_id
        assert not match.is_played
        assert match.tournament_id == "t1"


@pytest.mark.parametrize("count", [4, 5, 6, 9])
def test_league_nobody_plays_twice_in_a_matchday(count):
    fixtures = generate_league_fixtures(_participants(count), "t1")
    seats = count + count % 2

    rounds = {}
    for match in fixtures:
        rounds.setdefault(match.round_order, []).append(match)

    assert sorted(rounds) == list(range(1, seats))
    for order, matches in rounds.items():
        seen = set()
        for match in matches:
            assert match.home_team_id not in seen
            assert match.away_team_id not in seen
            seen.update((match.home_team_id, match.away_team_id))
            assert match.round_name == f"Matchday {order}"


def test_league_odd_field_has_no_bye_matches():
    fixtures = generate_league_fixtures(_participants(5), "t1")
    ids = {f"p{i}" for i in range(5)}

    assert len(fixtures) == 10
    for match in fixtures:
        assert match.home_team_id in ids
        assert match.away_team_id in ids
        assert not match.is_bye


def test_next_power_of_two():
    assert next_power_of_two(1) == 1
    assert next_power_of_two(2) == 2
    assert next_power_of_two(3) == 4
    assert next_power_of_two(5) == 8
    assert next_power_of_two(16) == 16
    assert next_power_of_two(17) == 32


def test_knockout_round_names():
    assert knockout_round_name(1) == "Final"
    assert knockout_round_name(2) == "Semi-Final"
    assert knockout_round_name(4) == "Quarter-Final"
    assert knockout_round_name(8) == "Round of 16"


def test_knockout_power_of_two_field():
    fixtures = generate_knockout_fixtures(_participants(8), "t1")

    assert len(fixtures) == 4
    assert [m.slot for m in fixtures] == [0, 1, 2, 3]
    assert all(m.round_order == 1 for m in fixtures)
    assert all(m.round_name == "Quarter-Final" for m in fixtures)
    assert not any(m.is_played for m in fixtures)


def test_knockout_byes_are_walkovers():
    fixtures = generate_knockout_fixtures(_participants(3), "t1")

    assert len(fixtures) == 2
    regular, walkover = fixtures
    assert {regular.home_team_id, regular.away_team_id} == {"p0", "p1"}
    assert not regular.is_played

    assert walkover.is_bye
    assert walkover.is_played
    assert walkover.home_team_id == "p2"
    assert walkover.away_team_id == "bye-0"
    assert (walkover.home_score, walkover.away_score) == (1, 0)
    assert walkover.winner_id == "p2"


def test_knockout_five_entrants_never_pairs_two_byes():
    fixtures = generate_knockout_fixtures(_participants(5), "t1")
    ties = build_ties(fixtures)

    assert len(ties) == 4
    for tie in ties:
        assert not (tie.first_id.startswith("bye-") and tie.second_id.startswith("bye-"))
    assert sum(1 for m in fixtures if m.is_bye) == 3


def test_pad_with_byes_keeps_entry_order():
    entries = pad_with_byes(_participants(6))

    assert len(entries) == 8
    real = [e.entry_id for e in entries if not isinstance(e, Bye)]
    assert real == [f"p{i}" for i in range(6)]
    assert isinstance(entries[5], Bye)
    assert isinstance(entries[7], Bye)


def test_knockout_two_legs_swap_venues():
    fixtures = generate_knockout_fixtures(_participants(4), "t1", has_two_legs=True)

    assert len(fixtures) == 4
    first_leg, second_leg = fixtures[0], fixtures[1]
    assert first_leg.leg == 1 and second_leg.leg == 2
    assert first_leg.home_team_id == second_leg.away_team_id
    assert first_leg.away_team_id == second_leg.home_team_id
    assert first_leg.slot == second_leg.slot == 0
    assert first_leg.round_name == "Semi-Final - Leg 1"
    assert second_leg.round_name == "Semi-Final - Leg 2"


def test_knockout_empty_field():
    assert generate_knockout_fixtures([], "t1") == []
