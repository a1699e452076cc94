#!/usr/bin/env python3
"""
GoldbachX Representation Counter - Counts prime pairs summing to n - c.
"""

import argparse
import json
import sys
import time
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from SieveEngine.SieveEngine import PrimeTable, build_prime_table

CONSTANTS: Tuple[int, ...] = (3, 5, 7, 11)


def discover() -> Dict[str, str]:
    """Component discovery."""
    return {"component": "RepresentationCounter"}


def metadata() -> Dict[str, object]:
    """Return metadata about this component."""
    return {
        "version": "1.0.0",
        "author": "GoldbachX Team",
        "description": "Counts unordered prime pairs summing to n - c",
        "constants": list(CONSTANTS),
        "dependencies": {"numpy": "required"},
    }


def _log_telemetry(event: str, **data) -> None:
    """Log telemetry as JSONL to stderr."""
    print(json.dumps({"event": event, "timestamp": time.time(), **data}), file=sys.stderr)


def _validate_input(n: int, table: PrimeTable) -> None:
    """Validate input parameters."""
    if n > table.limit:
        raise ValueError(f"n={n} exceeds the prime table limit {table.limit}")


def _scan(target: int, table: PrimeTable):
    """Yield p for every pair (p, target - p), p ascending and p ≤ target - p."""
    prime_set = table.prime_set
    for p in table.ascending:
        if 2 * p > target:
            break
        if target - p in prime_set:
            yield p


def count_representations(n: int, c: int, table: PrimeTable) -> int:
    """
    Count unordered prime pairs {p, q}, p ≤ q, with p + q = n - c.

    Args:
        n: Target number (≤ table.limit)
        c: Constant subtracted from n
        table: Prime table covering [0, n]

    Returns:
        Number of representations r_c(n)
    """
    _validate_input(n, table)
    return sum(1 for _ in _scan(n - c, table))


def enumerate_representations(n: int, c: int, table: PrimeTable) -> List[Tuple[int, int]]:
    """All pairs (p, q) with p ≤ q and p + q = n - c, ordered by p."""
    _validate_input(n, table)
    target = n - c
    return [(p, target - p) for p in _scan(target, table)]


@dataclass(frozen=True, eq=False)
class RepresentationTable:
    """Unordered prime pair counts for every target in [0, limit]."""

    limit: int
    pairs: np.ndarray = field(repr=False)

    def count(self, n: int, c: int) -> int:
        target = n - c
        if target < 0:
            return 0
        if target > self.limit:
            raise ValueError(f"target {target} exceeds the representation table limit {self.limit}")
        return int(self.pairs[target])

    def counts_for(self, n: int) -> Tuple[int, ...]:
        """(r3, r5, r7, r11) for n."""
        return tuple(self.count(n, c) for c in CONSTANTS)


def build_representation_table(table: PrimeTable) -> RepresentationTable:
    """
    Pair counts for all targets at once.

    Self-convolution of the primality mask gives the ordered pair count for
    every m; adding the p = q term and halving makes it unordered.
    """
    start_time = time.perf_counter()
    limit = table.limit

    indicator = table.mask.astype(np.float64)
    size = 1 << (2 * limit + 1).bit_length()
    spectrum = np.fft.rfft(indicator, size)
    ordered = np.rint(np.fft.irfft(spectrum * spectrum, size)[:limit + 1]).astype(np.int64)

    squares = np.zeros(limit + 1, dtype=np.int64)
    squares[0::2] = table.mask[:limit // 2 + 1]

    pairs = (ordered + squares) // 2
    pairs.setflags(write=False)

    _log_telemetry(
        "representation_table_built",
        limit=limit,
        fft_size=size,
        time_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return RepresentationTable(limit=limit, pairs=pairs)


def _self_test() -> bool:
    """Cross-check the scanning counter against the bulk table and a brute force."""
    table = build_prime_table(2_000)
    bulk = build_representation_table(table)

    for n in range(9, 2_001, 2):
        for c in CONSTANTS:
            target = n - c
            expected = sum(
                1 for p in range(2, target // 2 + 1)
                if p in table and (target - p) in table
            )
            if count_representations(n, c, table) != expected or bulk.count(n, c) != expected:
                print(f"Self-test failed for n={n}, c={c}", file=sys.stderr)
                return False
    return True


def _cli():
    """Command line interface."""
    parser = argparse.ArgumentParser(description="Constrained Goldbach representation counter")
    parser.add_argument("--n", type=int, help="Target odd number")
    parser.add_argument("--c", type=int, choices=CONSTANTS, default=None,
                        help="Single constant (default: all of 3, 5, 7, 11)")
    parser.add_argument("--pairs", action="store_true", help="List the pairs as well")
    parser.add_argument("--self-test", action="store_true", help="Run self-tests")
    args = parser.parse_args()

    if args.self_test:
        ok = _self_test()
        print("All self-tests passed" if ok else "Some self-tests failed", file=sys.stderr)
        sys.exit(0 if ok else 1)
    if args.n is None:
        parser.error("--n is required unless --self-test is given")

    start_time = time.time()
    try:
        table = build_prime_table(max(args.n, 2))
        constants = (args.c,) if args.c is not None else CONSTANTS
        output = {"n": args.n, "counts": {}}
        for c in constants:
            output["counts"][str(c)] = count_representations(args.n, c, table)
            if args.pairs:
                output.setdefault("pairs", {})[str(c)] = enumerate_representations(args.n, c, table)
        output["metrics"] = {
            "primes_count": len(table),
            "elapsed_ms": int((time.time() - start_time) * 1000),
        }
        print(json.dumps(output))
    except ValueError as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    _cli()
