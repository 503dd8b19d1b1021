"""Dense student x date display structure for the attendance matrix.

The API returns a sparse ``{"<studentId>-<date>": status}`` map; the grid
renders a cell for every (student, date) pair so missing records can still be
clicked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import format_column_header, normalize_date, today_local
from ..core.constants import NAME_COLUMN_TITLE, OTHER_SECTION_TITLE, REGULAR_SECTION_TITLE
from ..students.model import Student
from .model import CellUpdate
from .state_machine import css_class_for

ROW_SECTION = "section"
ROW_STUDENT = "student"


@dataclass(frozen=True)
class GridColumn:
    key: str
    raw: str
    label: str


@dataclass
class GridCell:
    student_id: int
    class_id: int
    date: str
    text: str = ""
    css_class: str = ""

    def apply(self, update: CellUpdate) -> None:
        self.text = update.text
        self.css_class = update.css_class


@dataclass
class GridRow:
    kind: str
    title: str
    css_class: str = ""
    student: Optional[Student] = None
    cells: List[GridCell] = field(default_factory=list)


@dataclass
class RenderableGrid:
    class_id: int
    columns: List[GridColumn]
    rows: List[GridRow]
    synthetic_dates: bool = False

    @property
    def column_count(self) -> int:
        """Table width including the name column (used for section header colspan)."""
        return len(self.columns) + 1

    @property
    def is_empty(self) -> bool:
        return not self.student_rows()

    def student_rows(self) -> List[GridRow]:
        return [r for r in self.rows if r.kind == ROW_STUDENT]

    def cells(self) -> Iterator[GridCell]:
        for row in self.student_rows():
            yield from row.cells

    def cell(self, student_id: int, day: str) -> Optional[GridCell]:
        key = normalize_date(day) or day
        for c in self.cells():
            if c.student_id == int(student_id) and c.date == key:
                return c
        return None

    def apply(self, update: CellUpdate) -> bool:
        """Update one cell in place; False when the cell is not on screen."""
        target = self.cell(update.student_id, update.date)
        if target is None:
            return False
        target.apply(update)
        return True

    def text_rows(self) -> List[List[str]]:
        """Visible text of every table row, exactly as the template renders it."""
        out = [[NAME_COLUMN_TITLE] + [c.label for c in self.columns]]
        for row in self.rows:
            if row.kind == ROW_SECTION:
                out.append([row.title])
            else:
                out.append([row.title] + [c.text.strip() for c in row.cells])
        return out


def _status_lookup(attendance: Mapping[str, str]) -> Dict[Tuple[str, str], str]:
    """Re-key ``"<studentId>-<date>"`` with canonical dates; later keys win on collision."""
    lookup: Dict[Tuple[str, str], str] = {}
    for key, status in attendance.items():
        student_part, sep, date_part = str(key).partition("-")
        if not sep:
            continue
        day = normalize_date(date_part) or date_part
        lookup[(student_part.strip(), day)] = str(status or "")
    return lookup


def _columns(dates: Sequence[str]) -> List[GridColumn]:
    columns = []
    for raw in dates:
        raw = str(raw)
        columns.append(GridColumn(key=normalize_date(raw) or raw, raw=raw, label=format_column_header(raw)))
    return columns


def _student_row(student: Student, *, class_id: int, columns: Sequence[GridColumn], lookup) -> GridRow:
    if student.is_regular:
        css = f"student-row-{student.color_code}" if student.color_code else ""
    else:
        css = "student-row-trial"

    cells = []
    for col in columns:
        status = lookup.get((str(student.student_id), col.key), "")
        cells.append(
            GridCell(
                student_id=student.student_id,
                class_id=class_id,
                date=col.key,
                text=status,
                css_class=css_class_for(status),
            )
        )
    return GridRow(kind=ROW_STUDENT, title=student.name, css_class=css, student=student, cells=cells)


def build_grid(
    students: Sequence[Student],
    dates: Sequence[str],
    attendance: Mapping[str, str],
    *,
    class_id: int,
    today: Optional[date] = None,
) -> RenderableGrid:
    synthetic = not dates
    if synthetic:
        dates = [normalize_date(today or today_local())]

    columns = _columns(dates)
    lookup = _status_lookup(attendance)

    regular = [s for s in students if s.is_regular]
    others = [s for s in students if not s.is_regular]

    rows: List[GridRow] = []
    for title, group in ((REGULAR_SECTION_TITLE, regular), (OTHER_SECTION_TITLE, others)):
        if not group:
            continue
        rows.append(GridRow(kind=ROW_SECTION, title=title, css_class="student-type-header"))
        rows.extend(_student_row(s, class_id=class_id, columns=columns, lookup=lookup) for s in group)

    return RenderableGrid(class_id=class_id, columns=columns, rows=rows, synthetic_dates=synthetic)
