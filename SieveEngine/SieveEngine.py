"""
GoldbachX SieveEngine - Base primes and segmented sieving for the prime table.
"""

import argparse
import json
import math
import sys
import time
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, FrozenSet, List, Sequence, Tuple

import numpy as np

# Constants
LIMIT = 1_000_000
GROUND_TRUTH_PRIMES = [
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71
]


def _log_telemetry(event: str, data: Dict[str, Any]) -> None:
    """Log telemetry data as JSONL to stderr."""
    record = {"event": event, "timestamp": time.time(), **data}
    print(json.dumps(record), file=sys.stderr)


def _validate_limit(limit: int) -> None:
    """Validate the limit parameter."""
    if limit < 0:
        raise ValueError(f"Limit must be ≥ 0, got {limit}")


def _validate_primes(primes: Sequence[int]) -> None:
    """Validate that primes are strictly increasing and agree with the known small primes."""
    for i in range(len(primes) - 1):
        if primes[i] >= primes[i + 1]:
            raise ValueError(f"Primes not strictly increasing at index {i}")

    for i, p in enumerate(primes[:len(GROUND_TRUTH_PRIMES)]):
        if p != GROUND_TRUTH_PRIMES[i]:
            raise ValueError(f"Prime mismatch at index {i}: expected {GROUND_TRUTH_PRIMES[i]}, got {p}")


def _validate_coverage(high: int, base: Sequence[int]) -> None:
    """Base primes must reach √high, otherwise composites slip through the sieve."""
    needed = math.isqrt(high)
    if [p for p in base if p <= needed] != base_primes_upto(needed):
        raise ValueError(f"Base primes must contain every prime ≤ {needed} to sieve up to {high}")


def base_primes_upto(root: int) -> List[int]:
    """Plain Eratosthenes over [0, root]."""
    if root < 2:
        return []

    sieve = bytearray([1]) * (root + 1)
    sieve[0:2] = b"\x00\x00"

    i = 2
    while i * i <= root:
        if sieve[i]:
            sieve[i*i::i] = b"\x00" * ((root - i*i) // i + 1)
        i += 1

    return [i for i, is_prime in enumerate(sieve) if is_prime]


def base_primes(limit: int) -> List[int]:
    """
    Small primes used to sieve every segment up to limit.

    Args:
        limit: Upper bound of the range that will be sieved later

    Returns:
        Ascending primes ≤ floor(√limit) + 1
    """
    _validate_limit(limit)
    root = math.isqrt(limit) + 1
    primes = base_primes_upto(root)
    _validate_primes(primes)
    _log_telemetry("base_primes_built", {"limit": limit, "root": root, "count": len(primes)})
    return primes


def segmented_sieve(low: int, high: int, base: Sequence[int]) -> List[int]:
    """
    Primes in the inclusive interval [low, high].

    Args:
        low: First number of the segment (≥ 2)
        high: Last number of the segment
        base: Ascending base primes covering every prime ≤ √high

    Returns:
        Ascending primes in [low, high]
    """
    if low < 2:
        raise ValueError(f"low must be ≥ 2, got {low}")
    if high < low:
        return []
    _validate_coverage(high, base)

    start_time = time.perf_counter()
    is_prime = np.ones(high - low + 1, dtype=bool)

    for p in base:
        start = max(p * p, ((low + p - 1) // p) * p)
        if start > high:
            continue
        is_prime[start - low::p] = False

    primes = (np.flatnonzero(is_prime) + low).tolist()
    _log_telemetry("segment_sieved", {
        "low": low,
        "high": high,
        "count": len(primes),
        "time_ms": int((time.perf_counter() - start_time) * 1000),
    })
    return primes


@dataclass(frozen=True, eq=False)
class PrimeTable:
    """Read-only primality data for [0, limit]."""

    limit: int
    primes: np.ndarray = field(repr=False)
    prime_set: FrozenSet[int] = field(repr=False)
    mask: np.ndarray = field(repr=False)

    def __contains__(self, n: int) -> bool:
        return n in self.prime_set

    def __len__(self) -> int:
        return len(self.prime_set)

    @cached_property
    def ascending(self) -> Tuple[int, ...]:
        """Primes in explicit ascending order, as Python ints."""
        return tuple(self.primes.tolist())


def build_prime_table(limit: int = LIMIT) -> PrimeTable:
    """Sieve [2, limit] in one segment and freeze the result."""
    _validate_limit(limit)
    start_time = time.perf_counter()

    primes = segmented_sieve(2, limit, base_primes(limit)) if limit >= 2 else []

    arr = np.asarray(primes, dtype=np.int64)
    arr.setflags(write=False)
    mask = np.zeros(limit + 1, dtype=bool)
    mask[arr] = True
    mask.setflags(write=False)

    table = PrimeTable(limit=limit, primes=arr, prime_set=frozenset(primes), mask=mask)
    _log_telemetry("prime_table_built", {
        "limit": limit,
        "count": len(primes),
        "time_ms": int((time.perf_counter() - start_time) * 1000),
    })
    return table


def metadata() -> Dict[str, Any]:
    """Return metadata about this engine."""
    return {
        "component": "SieveEngine",
        "version": "1.0.0",
        "algorithms": ["eratosthenes", "segmented"],
        "dependencies": {"numpy": np.__version__},
        "default_limit": LIMIT,
    }


def discover() -> Dict[str, str]:
    """Discovery function for component registration."""
    return {"component": "SieveEngine"}


def _cli() -> None:
    """Command line interface for SieveEngine."""
    parser = argparse.ArgumentParser(description="Base and segmented prime sieve")
    parser.add_argument("--limit", type=int, default=LIMIT, help="Upper limit for primes")
    parser.add_argument("--low", type=int, default=2, help="First number of the segment")

    args = parser.parse_args()

    try:
        start_time = time.perf_counter()
        primes = segmented_sieve(args.low, args.limit, base_primes(args.limit))
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        summary = {
            "low": args.low,
            "limit": args.limit,
            "count": len(primes),
            "first_10": primes[:10],
            "last_10": primes[-10:],
            "time_ms": elapsed_ms,
        }
        print(json.dumps(summary, indent=2))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    _cli()
