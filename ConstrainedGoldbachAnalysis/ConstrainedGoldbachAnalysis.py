#!/usr/bin/env python3
"""
GoldbachX Constrained Goldbach Analysis - Representation statistics for odd n ≤ 10^6.

For every odd n and c in (3, 5, 7, 11) counts the prime pairs summing to
n - c, aggregates them over a population of odd numbers and prints the
exclusive first-hit and total density tables. Runs interactively (two
prompts) or headless with --mode/--choice.
"""

import argparse
import json
import sys
import time
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from rich.console import Console
from rich.panel import Panel

from RepresentationCounter.RepresentationCounter import build_representation_table
from RepresentationReport.RepresentationReport import case_header, format_report
from RepresentationStats.RepresentationStats import AnalysisState, analyze
from SequenceGenerator.SequenceGenerator import POPULATIONS, START, generate_sequence
from SieveEngine.SieveEngine import LIMIT, PrimeTable, build_prime_table

__VERSION__ = "1.0.0"

# Type Definitions
AnalysisMode = Literal["single", "all"]
Population = Literal["primes", "composites", "all-odds"]

MODE_CHOICES = {1: "single", 2: "all"}
POPULATION_CHOICES = {1: "primes", 2: "composites", 3: "all-odds"}

MODE_PROMPT = (
    "Select analysis mode:\n"
    "1 - Development mode (choose one case)\n"
    "2 - Final mode (show all cases)\n"
    "Your choice: "
)
POPULATION_PROMPT = (
    "Select number type:\n"
    "1 - Odd primes only\n"
    "2 - Odd composites only\n"
    "3 - All odd numbers\n"
    "Your choice: "
)


class AnalysisConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: AnalysisMode
    population: Optional[Population] = None
    limit: int = Field(LIMIT, ge=START)

    @model_validator(mode="after")
    def _population_required_for_single(self) -> "AnalysisConfig":
        if self.mode == "single" and self.population is None:
            raise ValueError("single mode requires a population")
        return self

    def populations(self) -> Tuple[str, ...]:
        if self.mode == "single":
            return (self.population,)
        return POPULATIONS


@dataclass(frozen=True)
class CaseResult:
    population: str
    numbers: int
    state: AnalysisState


def _log_telemetry(event: str, **data) -> None:
    """Emit JSON-line telemetry to stderr."""
    print(json.dumps({"event": event, "timestamp": time.time(), **data}), file=sys.stderr)


def run_analysis(config: AnalysisConfig, table: Optional[PrimeTable] = None) -> List[CaseResult]:
    """
    Sieve once, then aggregate every population the config selects.

    Args:
        config: Validated analysis configuration
        table: Optional prebuilt prime table covering config.limit

    Returns:
        One CaseResult per population, in primes/composites/all-odds order
    """
    start_time = time.perf_counter()
    _log_telemetry("run_started", mode=config.mode, population=config.population, limit=config.limit)

    if table is None:
        table = build_prime_table(config.limit)
    elif table.limit < config.limit:
        raise ValueError(f"Prime table covers {table.limit}, analysis needs {config.limit}")

    representations = build_representation_table(table)

    results = []
    for population in config.populations():
        numbers = generate_sequence(population, table, end=config.limit)
        state = analyze(numbers, representations.counts_for)
        results.append(CaseResult(population=population, numbers=len(numbers), state=state))

    _log_telemetry(
        "run_finished",
        cases=len(results),
        time_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return results


def render(results: Sequence[CaseResult], mode: AnalysisMode) -> str:
    """Report text; case headers only appear when all cases are shown."""
    parts = []
    for result in results:
        if mode == "all":
            parts.append(case_header(result.population))
        parts.append(format_report(result.state))
    return "".join(parts)


def _read_choice(input_fn: Callable[[str], str], prompt: str, choices: dict, name: str) -> str:
    raw = input_fn(prompt)
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {value}")
    return choices[value]


def prompt_config(input_fn: Callable[[str], str] = input) -> AnalysisConfig:
    """Ask for the mode and, in development mode, the number type."""
    mode = _read_choice(input_fn, MODE_PROMPT, MODE_CHOICES, "mode")
    population = None
    if mode == "single":
        population = _read_choice(input_fn, POPULATION_PROMPT, POPULATION_CHOICES, "choice")
    return AnalysisConfig(mode=mode, population=population)


def run_self_tests(console: Console) -> bool:
    """Small-range pipeline checks."""
    passed = True
    table = build_prime_table(2_000)
    config = AnalysisConfig(mode="all", limit=2_000)

    first = render(run_analysis(config, table), config.mode)
    second = render(run_analysis(config, table), config.mode)
    checks = [
        ("Deterministic output", first == second),
        ("All three cases", first.count("=== Case:") == 3),
        ("Two tables per case", first.count("--- ") == 6),
    ]

    for name, ok in checks:
        passed = passed and ok
        console.print(Panel.fit(f"{name}: {'PASS' if ok else 'FAIL'}", title="Test"))
    return passed


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GoldbachX constrained representation statistics")
    parser.add_argument("--mode", type=int, choices=sorted(MODE_CHOICES),
                        help="1 = one case, 2 = all cases (prompted when omitted)")
    parser.add_argument("--choice", type=int, choices=sorted(POPULATION_CHOICES),
                        help="1 = odd primes, 2 = odd composites, 3 = all odds (mode 1 only)")
    parser.add_argument("--self-test", action="store_true", help="Run self-tests")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> AnalysisConfig:
    """Config from CLI flags, falling back to the interactive prompts."""
    if args.mode is None:
        return prompt_config(input_fn)

    mode = MODE_CHOICES[args.mode]
    population = None
    if mode == "single":
        if args.choice is None:
            population = _read_choice(input_fn, POPULATION_PROMPT, POPULATION_CHOICES, "choice")
        else:
            population = POPULATION_CHOICES[args.choice]
    return AnalysisConfig(mode=mode, population=population)


def main(argv: Optional[Sequence[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    args = parse_cli_args(argv)
    console = Console(highlight=False, emoji=False, soft_wrap=True)

    if args.self_test:
        ok = run_self_tests(console)
        print("All self-tests passed" if ok else "Some self-tests failed", file=sys.stderr)
        return 0 if ok else 1

    try:
        config = build_config(args, input_fn)
        results = run_analysis(config)
    except (ValueError, ValidationError, EOFError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console.print(render(results, config.mode), markup=False, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
