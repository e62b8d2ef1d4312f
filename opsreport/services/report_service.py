"""Operational report export: query target resolution and output encodings."""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Literal, Sequence

import structlog

from opsreport.services.store_client import ReportRow, ReportStore

logger = structlog.get_logger()

ReportType = Literal[
    "daily_worker_summary",
    "machine_utilization",
    "production_efficiency",
    "exception_report",
]

REPORT_QUERY_TARGETS: dict[ReportType, str] = {
    "daily_worker_summary": "daily_worker_summary",
    "machine_utilization": "machine_utilization_summary",
    "production_efficiency": "production_efficiency_summary",
    "exception_report": "exception_report",
}

ALLOWED_REPORT_TYPES = frozenset(REPORT_QUERY_TARGETS)

# Surrogate key and production log reference; never exported.
INTERNAL_COLUMNS = frozenset({"id", "log_id"})

JSON_FORMAT = "json"


class InvalidReportType(ValueError):
    def __init__(self, message: str = "Invalid report type"):
        super().__init__(message)


def resolve_query_target(report_type: Any) -> str:
    if not isinstance(report_type, str) or report_type not in ALLOWED_REPORT_TYPES:
        raise InvalidReportType()
    return REPORT_QUERY_TARGETS[report_type]


def wants_json(output_format: Any) -> bool:
    """Anything other than an explicit ``json`` falls back to CSV."""
    return output_format == JSON_FORMAT


async def fetch_report_rows(
    store: ReportStore,
    target: str,
    org_code: str,
    date_start: str,
    date_end: str,
) -> list[ReportRow]:
    rows = await store.fetch_rows(target, org_code, date_start, date_end)
    logger.info(
        "report.rows_fetched",
        target=target,
        org_code=org_code,
        date_start=date_start,
        date_end=date_end,
        row_count=len(rows),
    )
    return rows


def strip_internal_columns(row: ReportRow) -> ReportRow:
    return {key: value for key, value in row.items() if key not in INTERNAL_COLUMNS}


def export_json_rows(rows: Sequence[ReportRow]) -> list[ReportRow]:
    return [strip_internal_columns(row) for row in rows]


def csv_columns(rows: Sequence[ReportRow]) -> list[str]:
    """Columns of the first row, in order, without the internal ones."""
    if not rows:
        return []
    return [key for key in rows[0] if key not in INTERNAL_COLUMNS]


def format_header(column: str) -> str:
    return column.replace("_", " ").upper()


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def render_csv(rows: Sequence[ReportRow]) -> str:
    """Render rows as a header line plus one line per row, joined by newlines.

    Columns come from the first row; a later row missing one of them gets an
    empty field. Fields holding a comma, quote or line break are quoted with
    embedded quotes doubled.
    """
    columns = csv_columns(rows)
    lines = [_csv_line([format_header(column) for column in columns])]
    for row in rows:
        lines.append(_csv_line([format_cell(row.get(column)) for column in columns]))
    return "\n".join(lines)


def _csv_line(fields: list[str]) -> str:
    # csv.writer emits "" for a lone empty field; an empty line is wanted here.
    if fields == [""]:
        return ""
    output = io.StringIO()
    csv.writer(output, lineterminator="\n").writerow(fields)
    return output.getvalue().removesuffix("\n")


def report_filename(report_type: str, date_start: str, date_end: str) -> str:
    return f"{report_type}_{date_start}_{date_end}.csv"
