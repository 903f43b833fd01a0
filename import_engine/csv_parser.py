"""
import_engine.csv_parser - CSV reading, structural checks and per-row
validation.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping, required-column check
  • Strict syntax: unterminated quotes and ragged rows are fatal
  • Row-by-row validation; bad rows are reported, good rows kept
"""

from __future__ import annotations

import csv
import io
import logging

from import_engine.field_map import FIRST_DATA_ROW, REQUIRED_COLUMNS
from import_engine.report import ParseResult
from import_engine.row_validator import normalize_row, validate_row

logger = logging.getLogger(__name__)


class CSVStructureError(Exception):
    """The file as a whole cannot be read as a question table."""
    pass


def parse_csv(raw: str | bytes) -> ParseResult:
    """
    Parse and validate a CSV blob.

    Structural problems short-circuit with a single row-0 error and no
    rows.  Otherwise every record is validated independently; a record
    with violations contributes one RowError per violation and is left
    out of ``rows``.
    """
    result = ParseResult()

    try:
        header, records = _read_records(raw)
        if not records:
            raise CSVStructureError("CSV file is empty or contains only headers")

        missing = [col for col in REQUIRED_COLUMNS if col not in header]
        if missing:
            raise CSVStructureError(f"Missing required columns: {', '.join(missing)}")
    except CSVStructureError as exc:
        logger.warning("CSV rejected: %s", exc)
        result.add_error(0, str(exc))
        return result

    for idx, values in enumerate(records):
        row_number = idx + FIRST_DATA_ROW
        record = dict(zip(header, values))
        violations = validate_row(record)
        if violations:
            for message in violations:
                result.add_error(row_number, message)
            continue
        result.rows.append(normalize_row(record))

    logger.debug("Parsed %d records: %d valid, %d errors",
                 len(records), len(result.rows), len(result.errors))
    return result


def _read_records(raw: str | bytes) -> tuple[list[str], list[list[str]]]:
    """
    Return (header, records).  Blank lines are dropped.
    Raises CSVStructureError on malformed syntax.
    """
    text = _decode(raw)
    if not text or not text.strip():
        return [], []

    # No single field can be longer than the whole file
    csv.field_size_limit(max(csv.field_size_limit(), len(text)))

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    records: list[list[str]] = []

    try:
        for values in reader:
            if _is_blank(values):
                continue
            if header is None:
                # Strip whitespace from every header
                header = [h.strip() for h in values]
                continue
            if len(values) != len(header):
                raise CSVStructureError(
                    f"CSV parsing error: Invalid Record Length: expected "
                    f"{len(header)} columns, got {len(values)} on line {reader.line_num}"
                )
            records.append(values)
    except csv.Error as exc:
        raise CSVStructureError(
            f"CSV parsing error: {exc} (line {reader.line_num})"
        ) from exc

    return header or [], records


def _is_blank(values: list[str]) -> bool:
    return not values or (len(values) == 1 and not values[0].strip())


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
