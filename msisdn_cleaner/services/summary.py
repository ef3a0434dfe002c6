from __future__ import annotations

from ..models.results import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={total} valid={valid} invalid={invalid} duplicates={duplicates}
warnings={warnings} autofix_attempted={n} autofix_fixed={n} suggestions={n}
exported={n} elapsed_sec={elapsed}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Render seconds without scientific notation; integers without a decimal point."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the single-line run summary.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from msisdn_cleaner.models.results import DatasetStats
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(RunResult(DatasetStats(3, 2, 1, 0, 0), t, t, 0.0))
        'SUMMARY rows=3 valid=2 invalid=1 duplicates=0 warnings=0 autofix_attempted=0 autofix_fixed=0 suggestions=0 exported=0 elapsed_sec=0'
    """
    stats = result.stats
    attempted = result.autofix.attempted if result.autofix is not None else 0
    fixed = result.autofix.fixed if result.autofix is not None else 0
    return (
        f"SUMMARY rows={stats.total} "
        f"valid={stats.valid} "
        f"invalid={stats.invalid} "
        f"duplicates={stats.duplicates} "
        f"warnings={stats.warnings} "
        f"autofix_attempted={attempted} "
        f"autofix_fixed={fixed} "
        f"suggestions={result.suggestions} "
        f"exported={result.exported_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
