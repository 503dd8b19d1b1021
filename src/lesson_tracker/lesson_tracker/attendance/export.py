from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from ..common.datetime_utils import normalize_date, today_local
from .grid import RenderableGrid


def grid_to_csv(grid: RenderableGrid) -> str:
    """Serialize the rendered grid's visible text, every field quoted.

    Note: Header labels are exported as displayed ("Jan 5" or the raw fallback),
    not as canonical dates.
    """

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(grid.text_rows())
    return out.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    return f"attendance_{normalize_date(today or today_local())}.csv"
