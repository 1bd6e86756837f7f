import pytest

from gzclp_tracker.rounding import (
    format_weight,
    kg_to_lbs,
    lbs_to_kg,
    round_to_increment,
    round_to_nearest_5,
)


@pytest.mark.parametrize(
    "value,expected",
    [(22.5, 25), (27, 25), (36, 35), (12, 10), (2.5, 5), (-2.5, -5), (0, 0), (161.5, 160)],
)
def test_round_to_nearest_5(value, expected):
    assert round_to_nearest_5(value) == expected


def test_round_to_nearest_5_is_idempotent_on_multiples():
    for w in range(-50, 300, 5):
        assert round_to_nearest_5(w) == w


def test_halves_round_away_from_zero_not_to_even():
    # built-in round(12.5) == 12; here 12.5 -> 15 at increment 5 and 2.5 -> 3 at 1
    assert round_to_nearest_5(12.5) == 15
    assert round_to_increment(2.5, 1) == 3


def test_round_to_increment_fractional():
    assert round_to_increment(137, 2.5) == 137.5
    assert round_to_increment(136, 2.5) == 135


def test_round_to_increment_rejects_non_positive():
    with pytest.raises(ValueError):
        round_to_increment(10, 0)


def test_whole_results_are_ints():
    assert isinstance(round_to_nearest_5(144.0), int)


def test_unit_conversion():
    assert lbs_to_kg(100) == 45.4
    assert kg_to_lbs(100) == 220.5


def test_format_weight():
    assert format_weight(145.0) == "145"
    assert format_weight(137.5) == "137.5"
