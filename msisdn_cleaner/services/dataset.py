from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..exceptions import RowNotFoundError
from ..models.config_models import CleanerConfig, DuplicatePolicy
from ..models.results import AutofixReport, DatasetStats
from ..models.row import Carrier, Row, RowStatus
from ..models.verdict import ValidationVerdict
from ..models.view import ALL, ViewFilter, ViewTab
from ..phone import autofix, classify_carrier, normalize, validate
from ..tabular.reader import extract_field, read_table
from .progress import ProgressTracker

"""Dataset processor.

Applies the phone pipeline (normalize -> validate -> classify) to a batch of
records, runs the dataset-wide duplicate pass, and keeps row state consistent
across edits, autofix and deletion.

Rows are never mutated in place: every change swaps in a new frozen Row with
the same ``row_id``, so any filtered view taken from ``Dataset.rows`` is a
consistent snapshot of one state.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "PHONE_FIELD",
    "BUNDLE_FIELD",
    "evaluate_phone",
    "status_for",
    "build_row",
    "mark_duplicates",
    "parse_bundle_size",
    "sort_by_bundle_size",
    "compute_stats",
    "filter_rows",
    "Dataset",
]

PHONE_FIELD = "phone_number"
BUNDLE_FIELD = "bundle_size"

_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Every ViewTab must appear here; None means no status restriction.
_TAB_STATUS: Mapping[ViewTab, RowStatus | None] = {
    ViewTab.ALL: None,
    ViewTab.VALID: RowStatus.VALID,
    ViewTab.INVALID: RowStatus.INVALID,
    ViewTab.DUPLICATES: RowStatus.DUPLICATE,
}


def status_for(verdict: ValidationVerdict) -> RowStatus:
    """Per-row status before the duplicate pass."""
    return RowStatus.VALID if verdict.is_valid else RowStatus.INVALID


def evaluate_phone(raw: Any) -> tuple[str, ValidationVerdict, Carrier]:
    """Run normalize -> validate -> classify on one phone value.

    Returns:
        (stored text, verdict, carrier). The stored text is the normalized number,
        or the raw text when normalization left nothing (e.g. ``"n/a"``).
    """
    text = "" if raw is None else str(raw)
    cleaned = normalize(text)
    verdict = validate(cleaned)
    carrier = classify_carrier(cleaned)
    return (cleaned or text), verdict, carrier


def build_row(
    index: int,
    record: Mapping[str, Any],
    phone_columns: Iterable[str],
    bundle_columns: Iterable[str],
) -> Row:
    """Build the initial Row for a source record at position ``index``."""
    phone_raw = extract_field(record, phone_columns)
    bundle_size = extract_field(record, bundle_columns)
    phone, verdict, carrier = evaluate_phone(phone_raw)
    return Row(
        row_id=f"row-{index}",
        phone_number=phone,
        bundle_size=bundle_size,
        carrier=carrier,
        status=status_for(verdict),
        errors=verdict.errors,
        original_data=dict(record),
    )


def mark_duplicates(rows: Sequence[Row]) -> list[Row]:
    """Promote VALID rows whose phone text occurs more than once to DUPLICATE.

    INVALID rows are never relabeled, even when they collide with other rows.
    Running the pass twice yields the same result.
    """
    counts = Counter(r.phone_number for r in rows)
    return [
        replace(r, status=RowStatus.DUPLICATE)
        if r.status is RowStatus.VALID and counts[r.phone_number] > 1
        else r
        for r in rows
    ]


def _reset_duplicates(rows: Sequence[Row]) -> list[Row]:
    """Undo the duplicate pass: each row's status from its own verdict only."""
    out: list[Row] = []
    for r in rows:
        if r.status is RowStatus.DUPLICATE:
            out.append(replace(r, status=RowStatus.VALID if not r.errors else RowStatus.INVALID))
        else:
            out.append(r)
    return out


def parse_bundle_size(text: Any) -> float:
    """Leading numeric value of a bundle size cell; 0.0 when there is none.

    ``"10"`` -> 10.0, ``"2.5GB"`` -> 2.5, ``""`` / ``"unlimited"`` -> 0.0.
    Only used as a sort key; the stored text is never coerced.
    """
    if text is None:
        return 0.0
    m = _LEADING_NUMBER_RE.match(str(text))
    if m is None:
        return 0.0
    try:
        return float(m.group(1))
    except (ValueError, OverflowError):  # pragma: no cover (regex guarantees a float literal)
        return 0.0


def sort_by_bundle_size(rows: Iterable[Row]) -> list[Row]:
    """Stable sort, largest bundle first."""
    return sorted(rows, key=lambda r: parse_bundle_size(r.bundle_size), reverse=True)


def compute_stats(rows: Sequence[Row]) -> DatasetStats:
    """Count rows per status plus repeated phone occurrences.

    ``duplicates`` is the number of rows whose phone text was already seen
    earlier in the sequence, independent of status.
    """
    by_status = Counter(r.status for r in rows)
    seen: set[str] = set()
    repeated = 0
    for r in rows:
        if r.phone_number in seen:
            repeated += 1
        seen.add(r.phone_number)
    return DatasetStats(
        total=len(rows),
        valid=by_status[RowStatus.VALID],
        invalid=by_status[RowStatus.INVALID],
        duplicates=repeated,
        warnings=by_status[RowStatus.WARNING],
    )


def filter_rows(rows: Iterable[Row], view: ViewFilter) -> list[Row]:
    """Apply tab, search, telco and bundle size filters in that order."""
    wanted_status = _TAB_STATUS[view.tab]
    needle = view.search.lower()
    out: list[Row] = []
    for r in rows:
        if wanted_status is not None and r.status is not wanted_status:
            continue
        if needle and needle not in r.phone_number.lower():
            continue
        if view.telco != ALL and r.carrier.value != view.telco:
            continue
        if view.bundle_size != ALL and r.bundle_size != view.bundle_size:
            continue
        out.append(r)
    return out


class Dataset:
    """Ordered collection of Rows with the operations an operator can apply.

    The instance is the single writer of its rows. Duplicate status is computed on
    ``load``; with ``DuplicatePolicy.RESCAN_ON_EDIT`` it is also recomputed after
    every mutation.
    """

    def __init__(
        self,
        config: CleanerConfig | None = None,
        *,
        duplicate_policy: DuplicatePolicy | None = None,
    ) -> None:
        self.config = config if config is not None else CleanerConfig()
        self.duplicate_policy = (
            duplicate_policy if duplicate_policy is not None else self.config.duplicate_policy
        )
        self.source_name: str | None = None
        self._rows: list[Row] = []

    # -- read access ---------------------------------------------------------

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(tuple(self._rows))

    def get(self, row_id: str) -> Row:
        return self._rows[self._index_of(row_id)]

    def stats(self) -> DatasetStats:
        return compute_stats(self._rows)

    def view(self, view: ViewFilter | None = None) -> list[Row]:
        return filter_rows(self._rows, view if view is not None else ViewFilter())

    def unique_telcos(self) -> list[str]:
        return sorted({r.carrier.value for r in self._rows})

    def unique_bundle_sizes(self) -> list[str]:
        sizes = {r.bundle_size for r in self._rows if r.bundle_size}
        return sorted(sizes, key=lambda s: (parse_bundle_size(s), s))

    # -- lifecycle -----------------------------------------------------------

    def load(self, records: Sequence[Mapping[str, Any]], source_name: str | None = None) -> DatasetStats:
        """Replace the dataset with rows built from ``records``."""
        built: list[Row] = []
        with ProgressTracker(len(records), description="Validating rows") as progress:
            for index, record in enumerate(records):
                built.append(
                    build_row(index, record, self.config.phone_columns, self.config.bundle_columns)
                )
                progress.advance()

        self._rows = sort_by_bundle_size(mark_duplicates(built))
        self.source_name = source_name
        stats = self.stats()
        logger.info(f"Processed {stats.total} rows" + (f" from {source_name}" if source_name else ""))
        return stats

    def ingest_file(self, path: Path) -> DatasetStats:
        """Parse ``path`` and load it.

        The file is fully parsed before any state changes, so a SourceFileError
        leaves the current rows untouched.
        """
        table = read_table(path)
        logger.debug(f"{table.name}: columns={table.columns} records={len(table.rows)}")
        return self.load(table.rows, source_name=table.name)

    def clear(self) -> None:
        """Drop every row (start of a new upload)."""
        self._rows = []
        self.source_name = None

    # -- mutations -----------------------------------------------------------

    def update_row(self, row_id: str, field: str, value: str) -> Row:
        """Edit one field of one row.

        Editing ``phone_number`` re-runs normalize/validate/classify for that row
        only. Editing ``bundle_size`` stores the text as given.

        Raises:
            RowNotFoundError: unknown ``row_id``
            ValueError: ``field`` is not editable
        """
        row = self.get(row_id)
        if field == PHONE_FIELD:
            phone, verdict, carrier = evaluate_phone(value)
            updated = replace(
                row,
                phone_number=phone,
                carrier=carrier,
                status=status_for(verdict),
                errors=verdict.errors,
            )
        elif field == BUNDLE_FIELD:
            updated = replace(row, bundle_size="" if value is None else str(value))
        else:
            raise ValueError(f"field not editable: {field!r} (expected {PHONE_FIELD!r} or {BUNDLE_FIELD!r})")
        return self._replace(updated)

    def autofix_row(self, row_id: str) -> Row:
        """Autofix one row's phone text and re-validate it."""
        return self._replace(self._autofixed(self.get(row_id)))

    def batch_autofix(self) -> AutofixReport:
        """Autofix every INVALID row; other rows are left as they are."""
        attempted = 0
        fixed = 0
        new_rows: list[Row] = []
        with ProgressTracker(len(self._rows), description="Auto-fixing rows") as progress:
            for row in self._rows:
                progress.advance()
                if row.status is not RowStatus.INVALID:
                    new_rows.append(row)
                    continue
                attempted += 1
                repaired = self._autofixed(row)
                if repaired.status is RowStatus.VALID:
                    fixed += 1
                new_rows.append(repaired)
                progress.set_postfix(fixed=fixed)

        self._rows = new_rows
        self._after_mutation()
        logger.info(f"Successfully fixed {fixed} out of {attempted} invalid records")
        return AutofixReport(attempted=attempted, fixed=fixed)

    def delete_row(self, row_id: str) -> Row:
        """Remove a row by identity and return it."""
        index = self._index_of(row_id)
        removed = self._rows.pop(index)
        self._after_mutation()
        logger.debug(f"Row deleted: {row_id}")
        return removed

    def merge_suggestion(self, row_id: str, suggestion: str | None) -> bool:
        """Attach an external suggestion to a row.

        Returns False (and changes nothing) when the row no longer exists, e.g.
        it was deleted while the suggestion was being fetched.
        """
        try:
            row = self.get(row_id)
        except RowNotFoundError:
            logger.debug(f"suggestion for {row_id} dropped: row no longer exists")
            return False
        self._rows[self._index_of(row_id)] = replace(row, suggestion=suggestion)
        return True

    def accept_suggestion(self, row_id: str) -> Row:
        """Replace a row's phone text with its suggestion via the normal edit path."""
        row = self.get(row_id)
        if not row.suggestion:
            raise ValueError(f"{row_id} has no suggestion")
        return self.update_row(row_id, PHONE_FIELD, row.suggestion)

    # -- internals -----------------------------------------------------------

    def _index_of(self, row_id: str) -> int:
        for i, r in enumerate(self._rows):
            if r.row_id == row_id:
                return i
        raise RowNotFoundError(f"row not found: {row_id}")

    @staticmethod
    def _autofixed(row: Row) -> Row:
        fixed = autofix(row.phone_number)
        verdict = validate(fixed)
        return replace(
            row,
            phone_number=fixed,
            carrier=classify_carrier(fixed),
            status=status_for(verdict),
            errors=verdict.errors,
        )

    def _replace(self, updated: Row) -> Row:
        self._rows[self._index_of(updated.row_id)] = updated
        self._after_mutation()
        return self.get(updated.row_id)

    def _after_mutation(self) -> None:
        if self.duplicate_policy is DuplicatePolicy.RESCAN_ON_EDIT:
            self._rows = mark_duplicates(_reset_duplicates(self._rows))
