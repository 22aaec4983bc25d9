import pytest

from sizeable.services.games.errors import (
    DuplicateName,
    EmptyName,
    InvalidTargetScore,
    PlayerCountOutOfRange,
    ValidationError,
)
from sizeable.services.games.roster import (
    Player,
    reset_scores,
    validate_roster,
    validate_target_score,
)


def test_valid_roster_keeps_order_and_trims():
    roster = validate_roster(3, [' Alice', 'Bob ', 'Carol'])
    assert roster == (Player('Alice', 0), Player('Bob', 0), Player('Carol', 0))


def test_scenario_c_case_insensitive_duplicate():
    with pytest.raises(DuplicateName) as exc:
        validate_roster(3, ['a', 'A', 'b'])
    assert exc.value.seats == (0, 1)
    assert isinstance(exc.value, ValidationError)


def test_duplicate_after_trimming():
    with pytest.raises(DuplicateName):
        validate_roster(3, ['Bob', 'Carol', '  bob  '])


@pytest.mark.parametrize('names', [['Alice', '', 'Carol'], ['Alice', '   ', 'Carol'], ['Alice', None, 'Carol']])
def test_empty_name(names):
    with pytest.raises(EmptyName) as exc:
        validate_roster(3, names)
    assert exc.value.seat == 1


def test_missing_seat_counts_as_empty():
    with pytest.raises(EmptyName) as exc:
        validate_roster(4, ['A', 'B', 'C'])
    assert exc.value.seat == 3


def test_names_past_the_seat_count_are_ignored():
    roster = validate_roster(3, ['A', 'B', 'C', 'a'])
    assert [p.name for p in roster] == ['A', 'B', 'C']


def test_empty_name_is_reported_before_duplicates():
    with pytest.raises(EmptyName):
        validate_roster(3, ['a', 'A', ''])


@pytest.mark.parametrize('count', [2, 11, 0, '3'])
def test_player_count_bounds(count):
    with pytest.raises(PlayerCountOutOfRange):
        validate_roster(count, ['A', 'B', 'C', 'D'] * 3)


def test_configured_bounds_never_go_below_two():
    assert len(validate_roster(2, ['A', 'B'], min_players=2)) == 2
    with pytest.raises(PlayerCountOutOfRange):
        validate_roster(1, ['A'], min_players=1)
    assert len(validate_roster(20, [f'P{i}' for i in range(20)], max_players=20)) == 20


def test_target_score():
    assert validate_target_score(1) == 1
    assert validate_target_score(10, max_target=10) == 10
    for bad in (0, -2, 11, True, '3'):
        with pytest.raises(InvalidTargetScore):
            validate_target_score(bad, max_target=10)


def test_reset_scores():
    roster = (Player('A', 4), Player('B', 0))
    assert reset_scores(roster) == (Player('A', 0), Player('B', 0))
    assert Player('A', 1).scored() == Player('A', 2)
