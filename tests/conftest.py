import pytest

from RepresentationCounter.RepresentationCounter import build_representation_table
from SieveEngine.SieveEngine import LIMIT, build_prime_table


def is_prime(n):
    if n < 2:
        return False
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True


def brute_force_pairs(target):
    return sum(1 for p in range(2, target // 2 + 1) if is_prime(p) and is_prime(target - p))


@pytest.fixture(scope="session")
def small_table():
    return build_prime_table(3_001)


@pytest.fixture(scope="session")
def full_table():
    return build_prime_table(LIMIT)


@pytest.fixture(scope="session")
def full_representations(full_table):
    return build_representation_table(full_table)
