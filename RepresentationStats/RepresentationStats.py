"""
GoldbachX Representation Stats - Exclusive first-hit and total density aggregation.

Each number contributes (r3, r5, r7, r11). The exclusive policy credits only
the first constant with a positive count; the total policy credits all four.
Ratios are always taken against r5 and only when r5 > 0.
"""

import json
import sys
import time
from dataclasses import dataclass, field
from functools import reduce
from typing import Callable, Dict, Iterable, Mapping, Tuple

import pandas as pd

from RepresentationCounter.RepresentationCounter import CONSTANTS

Counts = Tuple[int, ...]
Records = Dict[int, "StatsRecord"]


@dataclass(frozen=True)
class StatsRecord:
    count: int = 0
    total: int = 0
    ratio_to_r5_sum: float = 0.0
    ratio_count: int = 0

    @property
    def average(self) -> float:
        return self.total / self.count if self.count > 0 else 0.0

    @property
    def average_ratio(self) -> float:
        return self.ratio_to_r5_sum / self.ratio_count if self.ratio_count > 0 else 0.0


def _ratio_terms(record: StatsRecord, rc: int, r5: int) -> Tuple[float, int]:
    if r5 > 0:
        return record.ratio_to_r5_sum + rc / r5, record.ratio_count + 1
    return record.ratio_to_r5_sum, record.ratio_count


def update_exclusive(record: StatsRecord, rc: int, r5: int) -> StatsRecord:
    """Credit the winning constant: count always, ratio only when r5 > 0."""
    return StatsRecord(record.count + 1, record.total + rc, *_ratio_terms(record, rc, r5))


def update_total(record: StatsRecord, rc: int, r5: int) -> StatsRecord:
    """Count only a positive rc, but add rc (even 0) to the total."""
    count = record.count + 1 if rc > 0 else record.count
    return StatsRecord(count, record.total + rc, *_ratio_terms(record, rc, r5))


def _empty_records() -> Records:
    return {c: StatsRecord() for c in CONSTANTS}


@dataclass(frozen=True)
class AnalysisState:
    exclusive: Records = field(default_factory=_empty_records)
    total: Records = field(default_factory=_empty_records)


def first_hit(counts: Counts) -> int:
    """Index of the first positive count, or -1."""
    for i, rc in enumerate(counts):
        if rc > 0:
            return i
    return -1


def accumulate(state: AnalysisState, counts: Counts) -> AnalysisState:
    """Fold one number's (r3, r5, r7, r11) into a new state."""
    if len(counts) != len(CONSTANTS):
        raise ValueError(f"Expected {len(CONSTANTS)} counts, got {len(counts)}")
    r5 = counts[CONSTANTS.index(5)]

    exclusive = state.exclusive
    hit = first_hit(counts)
    if hit >= 0:
        c = CONSTANTS[hit]
        exclusive = {**exclusive, c: update_exclusive(exclusive[c], counts[hit], r5)}

    total = {
        c: update_total(state.total[c], rc, r5)
        for c, rc in zip(CONSTANTS, counts)
    }
    return AnalysisState(exclusive=exclusive, total=total)


def analyze(numbers: Iterable[int], counts_for: Callable[[int], Counts]) -> AnalysisState:
    """
    Aggregate both policies over a number sequence.

    Args:
        numbers: The population, usually from SequenceGenerator
        counts_for: n -> (r3, r5, r7, r11)

    Returns:
        Final AnalysisState
    """
    start_time = time.time()
    numbers = tuple(numbers)
    state = reduce(accumulate, (counts_for(n) for n in numbers), AnalysisState())

    _log_telemetry(
        "analysis_done",
        numbers=len(numbers),
        exclusive_hits=sum(r.count for r in state.exclusive.values()),
        time_ms=int((time.time() - start_time) * 1000),
    )
    return state


def summary_frame(records: Mapping[int, StatsRecord]) -> pd.DataFrame:
    """One row per constant with count and the two averages."""
    rows = [
        {
            "c": c,
            "count": record.count,
            "avg_rc": record.average,
            "avg_ratio": record.average_ratio,
        }
        for c, record in sorted(records.items())
    ]
    return pd.DataFrame(rows, columns=["c", "count", "avg_rc", "avg_ratio"])


def _log_telemetry(event: str, **data) -> None:
    """Emit JSON-line telemetry to stderr."""
    print(json.dumps({"event": event, "timestamp": time.time(), **data}), file=sys.stderr)


def discover() -> Dict[str, str]:
    """Component discovery endpoint."""
    return {"component": "RepresentationStats"}


def metadata() -> Dict[str, object]:
    """Return component metadata."""
    return {
        "component": "RepresentationStats",
        "version": "1.0.0",
        "policies": ["exclusive", "total"],
        "dependencies": {"pandas": pd.__version__},
    }
