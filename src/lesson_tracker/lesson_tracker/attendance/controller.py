from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_RANGE_DAYS
from ..core.exceptions import ApiError, ApiUnavailableError, ValidationError
from ..container import Container
from .export import export_filename
from .view_controller import AttendanceViewController, ViewState, default_range

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _controller_from(args) -> AttendanceViewController:
        """Controller for one request; view state travels in the query string/form."""
        ctrl = AttendanceViewController(container.attendance_service, state=ViewState())

        start_s = args.get("start")
        end_s = args.get("end")
        if start_s is None and end_s is None:
            ctrl.state.date_range = default_range(today_local(), DEFAULT_RANGE_DAYS)
        else:
            ctrl.set_range(start_s, end_s, reload=False)

        class_s = (args.get("class_id") or "").strip()
        if class_s.isdigit():
            ctrl.state.class_id = int(class_s)
        return ctrl

    def _flash_all(ctrl: AttendanceViewController) -> None:
        for n in ctrl.drain_notifications():
            flash(n.message, n.level.value)

    def _back_to_matrix(ctrl: AttendanceViewController):
        rng = ctrl.state.date_range
        return redirect(
            url_for(
                "attendance",
                class_id=ctrl.state.class_id or "",
                start=rng.start or "",
                end=rng.end or "",
            )
        )

    def _list_classes():
        try:
            return container.classes_repo.list_all()
        except ApiError as e:
            flash(e.message, "danger")
            return []

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("attendance"))

    @app.route("/attendance", methods=["GET"], endpoint="attendance")
    def attendance():
        ctrl = _controller_from(request.args)
        classes = _list_classes()

        if ctrl.state.class_id is not None:
            ctrl.load()

        notifications = ctrl.drain_notifications()
        rng = ctrl.state.date_range
        return render_template(
            "attendance.html",
            classes=classes,
            selected_class_id=ctrl.state.class_id,
            start=rng.start or "",
            end=rng.end or "",
            grid=ctrl.state.grid,
            shown_range=ctrl.state.shown_range,
            notifications=notifications,
            active_page="attendance",
        )

    @app.route("/attendance/cells/toggle", methods=["POST"], endpoint="attendance_toggle")
    def attendance_toggle():
        data = request.get_json(silent=True) or {}
        try:
            student_id = int(data.get("student_id"))
        except (TypeError, ValueError):
            return jsonify({"success": False, "message": "Invalid student"}), 400

        ctrl = AttendanceViewController(container.attendance_service)
        ctrl.state.class_id = data.get("class_id")
        try:
            update = ctrl.toggle(student_id, data.get("date"), current_text=data.get("current") or "")
        except Exception:
            logger.exception("Unexpected error while toggling attendance")
            return jsonify({"success": False, "message": "Failed to update attendance"}), 500

        if update is None:
            err = ctrl.last_error
            if isinstance(err, ValidationError):
                code = 400
            elif isinstance(err, ApiUnavailableError):
                code = 503
            else:
                code = 502
            message = str(err) if err else "Failed to update attendance"
            return jsonify({"success": False, "message": message}), code

        return jsonify(
            {
                "success": True,
                "student_id": update.student_id,
                "date": update.date,
                "status": update.text,
                "css_class": update.css_class,
            }
        ), 200

    @app.route("/attendance/sheet", methods=["POST"], endpoint="attendance_sheet")
    def attendance_sheet():
        ctrl = _controller_from(request.form)
        try:
            ctrl.create_sheet(request.form.get("sheet_class_id") or request.form.get("class_id"),
                              request.form.get("sheet_date"), reload=False)
        except Exception:
            logger.exception("Unexpected error while creating attendance sheet")
            flash("Failed to create attendance sheet", "danger")
        _flash_all(ctrl)
        return _back_to_matrix(ctrl)

    @app.route("/attendance/move", methods=["POST"], endpoint="attendance_move")
    def attendance_move():
        ctrl = _controller_from(request.form)
        try:
            ctrl.move_records(request.form.get("from_date"), request.form.get("to_date"), reload=False)
        except Exception:
            logger.exception("Unexpected error while moving attendance records")
            flash("Failed to move attendance records", "danger")
        _flash_all(ctrl)
        return _back_to_matrix(ctrl)

    @app.route("/attendance/schedule-range", methods=["POST"], endpoint="attendance_schedule_range")
    def attendance_schedule_range():
        ctrl = _controller_from(request.form)
        try:
            ctrl.resolve_schedule(reload=False)
        except Exception:
            logger.exception("Unexpected error while resolving schedule dates")
            flash("Failed to load schedule dates", "danger")
        _flash_all(ctrl)
        return _back_to_matrix(ctrl)

    @app.route("/attendance/export.csv", methods=["GET"], endpoint="attendance_export_csv")
    def attendance_export_csv():
        """Download the matrix for the class and range the page was showing.

        The grid is rebuilt from the same query the page rendered from. Cells only
        change on screen after the API confirmed the write, so the rebuilt text is
        the text the user sees.
        """
        ctrl = _controller_from(request.args)
        if ctrl.state.class_id is not None:
            ctrl.load()

        content = ctrl.export_csv()
        if content is None:
            _flash_all(ctrl)
            return _back_to_matrix(ctrl)

        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
        )
