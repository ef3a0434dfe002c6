from __future__ import annotations

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..exceptions import ExportError, SourceFileError
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import CleanerConfig, DuplicatePolicy
from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.results import AutofixReport, RunResult
from ..models.row import Row, RowStatus
from ..models.view import ALL, ViewFilter, ViewTab
from ..phone import autofix, was_fixed
from ..services.dataset import Dataset
from ..services.suggestion import SuggestionClient, request_suggestions
from ..services.summary import render_summary_line
from ..tabular.reader import read_table
from ..tabular.writer import default_export_path, export_valid_rows

"""CLI entrypoint.

Flow:
- Load .env and config
- Ingest the source file (CSV / xlsx) into a Dataset
- Optionally batch autofix, fetch suggestions, list and export
- Log rejected rows as JSON Lines and print the SUMMARY line

Exit codes: 0 every row valid or duplicate, 2 invalid rows remain, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

ERROR_INVALID_NUMBER = "INVALID_NUMBER"
ERROR_SOURCE_FILE = "SOURCE_FILE_ERROR"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env with python-dotenv so API keys can live next to the data."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="msisdn-cleaner",
        description="Validate, classify, deduplicate and clean +254 phone number lists",
    )
    p.add_argument("source", help="CSV or .xlsx file with phone number and bundle size columns")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default: config/cleaner.yml if present)")
    p.add_argument("--autofix", action="store_true", help="Auto-fix every invalid row after loading")
    p.add_argument("--suggest", action="store_true", help="Ask the external suggestion service about invalid rows")
    p.add_argument(
        "--rescan-duplicates",
        action="store_true",
        help="Recompute duplicates after every change instead of only at load time",
    )
    p.add_argument(
        "--export",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Export valid rows of the current view (default: cleaned_<source>.csv)",
    )
    p.add_argument("--list", action="store_true", help="Print the rows of the current view")
    p.add_argument("--tab", choices=[t.value for t in ViewTab], default=ViewTab.ALL.value)
    p.add_argument("--search", default="", help="Substring filter on phone number")
    p.add_argument("--telco", default=ALL, help="Carrier filter (Safaricom, Airtel, Telkom, Unknown)")
    p.add_argument("--bundle-size", default=ALL, help="Exact bundle size filter")
    p.add_argument("--inspect-data", action="store_true", help="Print detected columns & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _format_row(row: Row) -> str:
    parts = [
        row.row_id,
        row.phone_number,
        row.bundle_size,
        row.carrier.value,
        row.status.value,
    ]
    if row.errors:
        parts.append("; ".join(row.errors))
    if row.status is RowStatus.INVALID:
        proposed = autofix(row.phone_number)
        if was_fixed(row.phone_number, proposed):
            parts.append(f"autofix={proposed}")
        if row.suggestion:
            parts.append(f"suggestion={row.suggestion}")
    return "\t".join(parts)


def _inspect_data(source: Path, cfg: CleanerConfig) -> int:
    try:
        table = read_table(source)
    except SourceFileError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {table.name} cols={table.columns} rows={len(table.rows)}")
    print("  sample_rows=", table.rows[:3])
    dataset = Dataset(cfg)
    dataset.load(table.rows, source_name=table.name)
    print(f"  telcos={dataset.unique_telcos()}")
    print(f"  bundle_sizes={dataset.unique_bundle_sizes()}")
    return EXIT_SUCCESS_ALL


def _log_rejected_rows(dataset: Dataset, error_log: ErrorLogBuffer) -> None:
    name = dataset.source_name or ""
    for row in dataset.rows:
        if row.status is RowStatus.INVALID:
            error_log.append(
                ErrorRecord.create(
                    file=name,
                    row_id=row.row_id,
                    phone_number=row.phone_number,
                    error_type=ERROR_INVALID_NUMBER,
                    message="; ".join(row.errors),
                )
            )


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only fall back to sys.argv when argv is None; [] is a valid (test) value.
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    _load_env_file(Path(".env"))

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    source = Path(args.source)

    if args.inspect_data:
        return _inspect_data(source, cfg)

    policy = DuplicatePolicy.RESCAN_ON_EDIT if args.rescan_duplicates else cfg.duplicate_policy
    dataset = Dataset(cfg, duplicate_policy=policy)
    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))
    start_time = datetime.now(UTC)

    logger.info(f"Processing file: {source}")
    try:
        dataset.ingest_file(source)
    except SourceFileError as e:
        logger.error(f"source: {e}")
        error_log.append(
            ErrorRecord.create(
                file=source.name,
                row_id=FILE_LEVEL_ROW,
                phone_number="",
                error_type=ERROR_SOURCE_FILE,
                message=str(e),
            )
        )
        error_log.flush()
        return EXIT_FATAL

    report: AutofixReport | None = None
    if args.autofix:
        report = dataset.batch_autofix()

    suggestions = 0
    if args.suggest or cfg.suggestion.enabled:
        client = SuggestionClient.from_config(cfg.suggestion)
        if client is not None:
            suggestions = request_suggestions(dataset, client)

    view = ViewFilter(
        tab=ViewTab(args.tab),
        search=args.search,
        telco=args.telco,
        bundle_size=args.bundle_size,
    )
    visible = dataset.view(view)

    if args.list:
        for row in visible:
            print(_format_row(row))

    exported = 0
    if args.export is not None:
        out_path = Path(args.export) if args.export else default_export_path(dataset.source_name)
        try:
            exported = export_valid_rows(visible, out_path)
        except ExportError as e:
            logger.error(f"export: {e} (fix validation errors or adjust filters)")
            _log_rejected_rows(dataset, error_log)
            error_log.flush()
            return EXIT_FATAL
        logger.info(f"Exported {exported} valid records to {out_path}")

    _log_rejected_rows(dataset, error_log)
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"rejected rows logged to {log_path}")

    end_time = datetime.now(UTC)
    result = RunResult(
        stats=dataset.stats(),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        autofix=report,
        exported_rows=exported,
        suggestions=suggestions,
    )
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.stats.invalid > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
