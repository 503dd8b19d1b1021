"""Attendance page orchestration, independent of Flask.

``ViewState`` holds everything the page shows (selected class, date range,
rendered grid, pending notifications). It is owned by one
``AttendanceViewController`` and handed explicitly to the grid builder and the
service. ``dispatch`` maps action names to the handler methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..common.datetime_utils import normalize_date
from ..common.validators import optional_date, require_class_id
from ..core.enums import NotificationLevel
from ..core.exceptions import ApiError, DomainError, ValidationError
from .export import grid_to_csv
from .grid import RenderableGrid, build_grid
from .model import CellUpdate, DateRange, MatrixData, ScheduleResolution
from .service import AttendanceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


@dataclass
class ViewState:
    class_id: Optional[int] = None
    date_range: DateRange = field(default_factory=DateRange)
    load_seq: int = 0
    grid: Optional[RenderableGrid] = None
    notifications: List[Notification] = field(default_factory=list)
    shown_range: Optional[DateRange] = None


PostRenderHook = Callable[[ViewState], None]


def record_shown_range(state: ViewState) -> None:
    """Remember the span of the rendered columns for display.

    ``date_range`` is left alone: an open range must keep meaning every
    recorded date on the next load.
    """
    grid = state.grid
    if grid is None or grid.synthetic_dates:
        state.shown_range = None
        return
    state.shown_range = DateRange.bounding([c.key for c in grid.columns])


DEFAULT_POST_RENDER_HOOKS: Sequence[PostRenderHook] = (record_shown_range,)


class AttendanceViewController:
    def __init__(
        self,
        service: AttendanceService,
        *,
        state: Optional[ViewState] = None,
        post_render_hooks: Optional[Sequence[PostRenderHook]] = None,
        today: Optional[date] = None,
    ):
        self._service = service
        self.state = state or ViewState()
        self._hooks = list(DEFAULT_POST_RENDER_HOOKS if post_render_hooks is None else post_render_hooks)
        self._today = today
        self.last_error: Optional[DomainError] = None

        self._actions: Dict[str, Callable[..., Any]] = {
            "load": self.load,
            "select_class": self.select_class,
            "set_range": self.set_range,
            "toggle": self.toggle,
            "create_sheet": self.create_sheet,
            "move": self.move_records,
            "resolve_schedule": self.resolve_schedule,
            "export": self.export_csv,
        }

    # -- plumbing ---------------------------------------------------------

    def dispatch(self, action: str, **params) -> Any:
        handler = self._actions.get(action)
        if handler is None:
            raise ValueError(f"Unknown attendance action: {action!r}")
        return handler(**params)

    def notify(self, level: NotificationLevel, message: str) -> None:
        self.state.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> List[Notification]:
        pending, self.state.notifications = self.state.notifications, []
        return pending

    def _guarded(self, fn: Callable[[], Any]) -> Any:
        """Run ``fn``; turn domain errors into notifications and return ``None``."""
        self.last_error = None
        try:
            return fn()
        except ValidationError as e:
            self.last_error = e
            self.notify(NotificationLevel.WARNING, str(e))
        except ApiError as e:
            self.last_error = e
            self.notify(NotificationLevel.DANGER, e.message)
        return None

    # -- loading ----------------------------------------------------------

    def begin_load(self) -> int:
        self.state.load_seq += 1
        return self.state.load_seq

    def complete_load(self, token: int, data: MatrixData) -> bool:
        """Render ``data`` unless a newer load was issued after ``token``."""
        if token != self.state.load_seq:
            logger.info("Dropping stale matrix response (token=%s latest=%s)", token, self.state.load_seq)
            return False

        grid = build_grid(
            data.students,
            data.dates,
            data.attendance,
            class_id=int(self.state.class_id),
            today=self._today,
        )
        self.state.grid = grid

        if not data.students:
            self.notify(NotificationLevel.INFO, "No students in this class")
        elif grid.synthetic_dates:
            self.notify(NotificationLevel.INFO, "No attendance records found. Click on cells to mark attendance.")

        for hook in self._hooks:
            hook(self.state)
        return True

    def load(self) -> Optional[RenderableGrid]:
        if self.state.class_id is None:
            self.notify(NotificationLevel.WARNING, "Please select a class")
            return None

        token = self.begin_load()
        data = self._guarded(
            lambda: self._service.load_matrix(class_id=self.state.class_id, date_range=self.state.date_range)
        )
        if data is None:
            return None
        self.complete_load(token, data)
        return self.state.grid

    def select_class(self, class_id) -> Optional[RenderableGrid]:
        selected = self._guarded(lambda: require_class_id(class_id))
        if selected is None:
            return None
        self.state.class_id = selected
        return self.load()

    def set_range(self, start=None, end=None, *, reload: bool = True) -> Optional[RenderableGrid]:
        def _validate() -> DateRange:
            return DateRange(start=optional_date(start, "Start date"), end=optional_date(end, "End date"))

        new_range = self._guarded(_validate)
        if new_range is None:
            return None
        self.state.date_range = new_range
        return self.load() if reload else None

    # -- cell edits -------------------------------------------------------

    def toggle(self, student_id, day, current_text: Optional[str] = None) -> Optional[CellUpdate]:
        """Cycle one cell; the held grid is only touched after the API confirmed."""
        if current_text is None and self.state.grid is not None:
            cell = self.state.grid.cell(int(student_id), str(day))
            current_text = cell.text if cell else ""

        update = self._guarded(
            lambda: self._service.toggle_cell(
                student_id=int(student_id),
                class_id=self.state.class_id,
                day=day,
                current_text=current_text,
            )
        )
        if update is not None and self.state.grid is not None:
            self.state.grid.apply(update)
        return update

    # -- bulk operations --------------------------------------------------

    def create_sheet(self, class_id, day, *, reload: bool = True) -> Optional[int]:
        count = self._guarded(lambda: self._service.create_sheet(class_id=class_id, day=day))
        if count is None:
            return None

        self.notify(NotificationLevel.SUCCESS, f"Attendance sheet created for {count} students")
        if reload and self.state.class_id is not None and self.state.class_id == int(class_id):
            self.load()
        return count

    def move_records(self, from_date, to_date, class_id=None, *, reload: bool = True) -> Optional[int]:
        target_class = self.state.class_id if class_id is None else class_id
        moved = self._guarded(
            lambda: self._service.move_records(class_id=target_class, from_date=from_date, to_date=to_date)
        )
        if moved is None:
            return None

        self.notify(NotificationLevel.SUCCESS, f"Moved {moved} attendance records")
        if reload:
            self.load()
        return moved

    def resolve_schedule(self, *, reload: bool = True) -> Optional[ScheduleResolution]:
        resolution = self._guarded(
            lambda: self._service.resolve_schedule_range(
                class_id=self.state.class_id,
                requested=self.state.date_range,
                today=self._today,
            )
        )
        if resolution is None:
            return None

        if not resolution.found:
            self.notify(NotificationLevel.INFO, "No scheduled dates found for this class")
            return resolution

        # blank inputs were sent as the lookback defaults; take the server's ends for them
        current = self.state.date_range
        merged = DateRange(
            start=current.start or resolution.range.start,
            end=current.end or resolution.range.end,
        ).widen_to(resolution.range)
        self.state.date_range = merged
        self.notify(
            NotificationLevel.SUCCESS,
            f"Found {len(resolution.dates)} scheduled dates ({merged.start} to {merged.end})",
        )
        if reload:
            self.load()
        return resolution

    # -- export -----------------------------------------------------------

    def export_csv(self) -> Optional[str]:
        def _export() -> str:
            if self.state.grid is None or self.state.grid.is_empty:
                raise ValidationError("No attendance data to export")
            return grid_to_csv(self.state.grid)

        return self._guarded(_export)


def default_range(today: date, days: int) -> DateRange:
    """Range shown on a first visit: the last ``days`` days ending today."""
    return DateRange(start=normalize_date(today - timedelta(days=days)), end=normalize_date(today))
