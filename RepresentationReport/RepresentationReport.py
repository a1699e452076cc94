"""
GoldbachX Representation Report - Fixed-width tables for accumulated statistics.
"""

from typing import Dict, List, Mapping

from RepresentationStats.RepresentationStats import AnalysisState, StatsRecord, summary_frame

EXCLUSIVE_TITLE = "Exclusive First-Hit Representation Table"
TOTAL_TITLE = "Total Density Representation Table"
CASE_TITLES = {
    "primes": "Odd Prime Numbers",
    "composites": "Odd Composite Numbers",
    "all-odds": "All Odd Numbers",
}

HEADER = "| c     | Count | Avg r_c | Avg r_c / r_5 |"
RULE = "|-------|--------|----------|----------------|"


def format_row(c: int, count: int, avg_rc: float, avg_ratio: float) -> str:
    return f"| {c:>5} | {count:>6} | {avg_rc:>8.4f} | {avg_ratio:>14.4f} |"


def format_table(title: str, records: Mapping[int, StatsRecord]) -> str:
    """
    Render one policy's records as a table.

    Averages are total/count and ratio_sum/ratio_count, both 0 when the
    divisor is 0.
    """
    lines: List[str] = ["", f"--- {title} ---", HEADER, RULE]
    for c, count, avg_rc, avg_ratio in summary_frame(records).itertuples(index=False, name=None):
        lines.append(format_row(int(c), int(count), float(avg_rc), float(avg_ratio)))
    return "\n".join(lines) + "\n"


def format_report(state: AnalysisState) -> str:
    """Exclusive table followed by the total density table."""
    return format_table(EXCLUSIVE_TITLE, state.exclusive) + format_table(TOTAL_TITLE, state.total)


def case_header(population: str) -> str:
    if population not in CASE_TITLES:
        raise ValueError(f"Unknown population: {population}")
    return f"\n=== Case: {CASE_TITLES[population]} ==="


def discover() -> Dict[str, str]:
    """Component discovery endpoint."""
    return {"component": "RepresentationReport"}


def metadata() -> Dict[str, object]:
    """Return component metadata."""
    return {
        "component": "RepresentationReport",
        "version": "1.0.0",
        "tables": [EXCLUSIVE_TITLE, TOTAL_TITLE],
        "precision": 4,
    }
