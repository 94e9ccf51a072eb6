"""CSV race report."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from starlette.responses import Response

from racetracker.shared.formatters import format_date, format_distance, format_price
from .models import Race
from .stats import summarize
from .status import status_label

REPORT_HEADER = [
    "Name",
    "Date",
    "Time",
    "Distance (km)",
    "Price",
    "Status",
    "Completion time",
    "Registration URL",
]


def build_report(races: Sequence[Race]) -> str:
    """One row per race, then a blank row and a totals row."""
    buf = StringIO()
    w = csv.writer(buf)
    w.writerow(REPORT_HEADER)
    for r in races:
        w.writerow([
            r.name,
            format_date(r.date),
            r.time,
            format_distance(r.distance),
            format_price(r.price),
            status_label(r.status),
            r.completion_time or "N/A",
            r.registration_url or "N/A",
        ])

    summary = summarize(races)
    w.writerow([])
    w.writerow([
        f"Total: {summary.total_races} races",
        "",
        "",
        format_distance(summary.total_distance),
        format_price(summary.total_cost),
        "",
        "",
        "",
    ])
    return buf.getvalue()


def csv_response(filename: str, text: str) -> Response:
    return Response(
        content=text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
