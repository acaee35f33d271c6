from __future__ import annotations

import logging

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/timesheets", methods=["GET"], endpoint="timesheets")
    def timesheets():
        search = (request.args.get("q") or "").strip()
        employee_id_s = request.args.get("employee_id")
        employee_id = int(employee_id_s) if employee_id_s and employee_id_s.isdecimal() else None
        view = "calendar" if request.args.get("view") == "calendar" else "table"

        overview = container.timesheet_service.list_overview(search=search, employee_id=employee_id)
        return render_template(
            "timesheets/list.html",
            overview=overview,
            search=search,
            selected_employee_id=employee_id,
            view=view,
            active_page="timesheets",
        )

    @app.route("/timesheets/new", methods=["GET", "POST"], endpoint="timesheet_new")
    def timesheet_new():
        form: dict = {}
        if request.method == "POST":
            # RequestEntityTooLarge is raised here, outside the try, for the 413 handler
            submitted = {name: request.form.get(name, "") for name in ("employee_id", "start_time", "end_time", "summary")}
            try:
                container.timesheet_service.create_timesheet(**submitted)
                flash("Timesheet created.", "success")
                return redirect(url_for("timesheets"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Creating timesheet failed")
                flash("System error while saving the timesheet.", "danger")
            form = submitted

        employees = container.employee_service.list_options()
        return render_template("timesheets/new.html", employees=employees, form=form, active_page="timesheet_new")

    @app.route("/timesheets/<int:timesheet_id>", methods=["GET", "POST"], endpoint="timesheet_edit")
    def timesheet_edit(timesheet_id: int):
        try:
            ts = container.timesheet_service.get_view(timesheet_id)
        except NotFoundError:
            abort(404)

        form = {"start_time": ts.start_time, "end_time": ts.end_time, "summary": ts.summary}

        if request.method == "POST":
            submitted = {name: request.form.get(name, "") for name in ("start_time", "end_time", "summary")}
            try:
                container.timesheet_service.update_timesheet(timesheet_id=timesheet_id, **submitted)
                flash("Timesheet updated.", "success")
                return redirect(url_for("timesheets"))
            except NotFoundError:
                abort(404)
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating timesheet id=%s failed", timesheet_id)
                flash("System error while saving the timesheet.", "danger")
            form = submitted

        return render_template("timesheets/edit.html", ts=ts, form=form, active_page="timesheets")

    @app.route("/timesheets/view/<int:timesheet_id>", methods=["GET"], endpoint="timesheet_view")
    def timesheet_view(timesheet_id: int):
        try:
            ts = container.timesheet_service.get_view(timesheet_id)
        except NotFoundError:
            abort(404)
        return render_template("timesheets/view.html", ts=ts, active_page="timesheets")
