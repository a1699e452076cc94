import pytest

from SequenceGenerator.SequenceGenerator import (
    POPULATIONS,
    START,
    describe_modes,
    discover,
    generate_sequence,
    metadata,
)

from conftest import is_prime


def test_all_odds_from_nine(small_table):
    sequence = generate_sequence("all-odds", small_table)
    assert sequence[0] == START == 9
    assert sequence[-1] == 3_001
    assert all(n % 2 == 1 for n in sequence)
    assert len(sequence) == (3_001 - 9) // 2 + 1


def test_primes_and_composites_partition_the_odds(small_table):
    primes = generate_sequence("primes", small_table)
    composites = generate_sequence("composites", small_table)
    odds = generate_sequence("all-odds", small_table)

    assert primes[:4] == (11, 13, 17, 19)
    assert composites[:4] == (9, 15, 21, 25)
    assert all(is_prime(n) for n in primes)
    assert not any(is_prime(n) for n in composites)
    assert tuple(sorted(primes + composites)) == odds


def test_even_start_is_bumped(small_table):
    assert generate_sequence("all-odds", small_table, start=10, end=15) == (11, 13, 15)


def test_full_range_ends_below_one_million(full_table):
    odds = generate_sequence("all-odds", full_table)
    assert odds[-1] == 999_999
    assert len(odds) == 499_996


@pytest.mark.parametrize("kwargs", [
    {"population": "evens"},
    {"population": "primes", "start": 7},
    {"population": "primes", "start": 101, "end": 99},
    {"population": "primes", "end": 5_000},
])
def test_invalid_arguments(small_table, kwargs):
    population = kwargs.pop("population")
    with pytest.raises(ValueError):
        generate_sequence(population, small_table, **kwargs)


def test_component_introspection():
    assert discover() == {"component": "SequenceGenerator"}
    assert set(describe_modes()) == set(POPULATIONS)
    assert metadata()["populations"] == ["primes", "composites", "all-odds"]
