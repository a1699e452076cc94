"""
GoldbachX Sequence Generator - Produces the odd number populations under analysis.
"""

import argparse
import json
import sys
import time
from typing import Dict, Optional, Tuple

from SieveEngine.SieveEngine import LIMIT, PrimeTable, build_prime_table

START = 9
POPULATIONS = ("primes", "composites", "all-odds")


def metadata() -> Dict:
    """Return component metadata."""
    return {
        "component": "SequenceGenerator",
        "version": "1.0",
        "author": "GoldbachX Team",
        "populations": list(POPULATIONS),
    }


def describe_modes() -> Dict:
    """Documentation for all supported populations."""
    return {
        "primes": "Odd primes in [start, end]",
        "composites": "Odd composites in [start, end]",
        "all-odds": "Every odd number in [start, end]",
    }


def generate_sequence(
    population: str,
    table: PrimeTable,
    *,
    start: int = START,
    end: Optional[int] = None,
) -> Tuple[int, ...]:
    """
    Generate the odd numbers of a population.

    Args:
        population: One of describe_modes()
        table: Prime table used for membership tests
        start: First number (inclusive, must be ≥9, bumped to odd)
        end: Last number (inclusive, defaults to table.limit)

    Returns:
        Ascending tuple of odd integers
    """
    if end is None:
        end = table.limit
    if population not in POPULATIONS:
        raise ValueError(f"Unknown population: {population}. Available: {list(POPULATIONS)}")
    if start < START:
        raise ValueError(f"Start must be ≥{START}")
    if end < start:
        raise ValueError("End must be ≥ start")
    if end > table.limit:
        raise ValueError(f"End {end} exceeds the prime table limit {table.limit}")

    if start % 2 == 0:
        start += 1

    start_time = time.time()

    odds = range(start, end + 1, 2)
    if population == "primes":
        sequence = tuple(n for n in odds if n in table)
    elif population == "composites":
        sequence = tuple(n for n in odds if n not in table)
    else:
        sequence = tuple(odds)

    duration_ms = int((time.time() - start_time) * 1000)
    _log_telemetry(population, len(sequence), duration_ms)

    return sequence


def _log_telemetry(population: str, count: int, time_ms: int) -> None:
    """Log generation telemetry in JSONL format."""
    log_entry = {
        "event": "sequence_generated",
        "timestamp": time.time(),
        "population": population,
        "count": count,
        "time_ms": time_ms,
    }
    print(json.dumps(log_entry), file=sys.stderr)


def discover() -> Dict:
    """Discovery function for component registration."""
    return {"component": "SequenceGenerator"}


def main() -> None:
    """Command line interface for sequence generation."""
    parser = argparse.ArgumentParser(
        description="GoldbachX Sequence Generator - Odd number populations"
    )
    parser.add_argument("--population", type=str, default="all-odds",
                        choices=describe_modes().keys(), help="Population to generate")
    parser.add_argument("--start", type=int, default=START, help="First number (inclusive, ≥9)")
    parser.add_argument("--end", type=int, default=LIMIT, help="Last number (inclusive)")
    parser.add_argument("--list-modes", action="store_true",
                        help="List available populations and exit")

    args = parser.parse_args()

    if args.list_modes:
        print("Available populations:")
        for mode, desc in describe_modes().items():
            print(f"  {mode}: {desc}")
        return

    try:
        table = build_prime_table(max(args.end, 2))
        sequence = generate_sequence(args.population, table, start=args.start, end=args.end)

        print(f"Generated {len(sequence)} numbers in {args.population} population:")
        if len(sequence) <= 20:
            print(list(sequence))
        elif sequence:
            print(f"First 10: {list(sequence[:10])}")
            print(f"Last 10: {list(sequence[-10:])}")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
