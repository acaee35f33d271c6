from __future__ import annotations

import io
import logging
from typing import Optional

from flask import Flask, abort, flash, redirect, render_template, request, send_file, url_for

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .listing import EmployeeListQuery
from .model import Employee, EmployeeInput

logger = logging.getLogger(__name__)

_TEXT_FIELDS = (
    "full_name",
    "email",
    "phone",
    "position",
    "department",
    "salary",
    "hire_date",
    "date_of_birth",
    "address",
)


def _form_from_employee(employee: Employee) -> dict:
    return {
        "id": str(employee.employee_id),
        "full_name": employee.full_name or "",
        "email": employee.email or "",
        "phone": employee.phone or "",
        "position": employee.position or "",
        "department": employee.department or "",
        "salary": str(employee.salary) if employee.salary is not None else "",
        "hire_date": employee.hire_date.isoformat() if employee.hire_date else "",
        "date_of_birth": employee.date_of_birth.isoformat() if employee.date_of_birth else "",
        "address": employee.address or "",
    }


def _read_upload(field: str) -> Optional[bytes]:
    upload = request.files.get(field)
    if upload is None or not upload.filename:
        return None
    return upload.read() or None


def _input_from_request(employee_id: Optional[int]) -> EmployeeInput:
    values = {name: request.form.get(name, "") for name in _TEXT_FIELDS}
    return EmployeeInput(
        employee_id=employee_id,
        photo=_read_upload("photo"),
        document=_read_upload("document"),
        **values,
    )


def register(app: Flask, container: Container) -> None:
    def _save(data: EmployeeInput, *, success_message: str):
        """Run the write path; returns a redirect on success, ``None`` when the form must be re-rendered."""
        try:
            container.employee_service.save_employee(data)
            flash(success_message, "success")
            return redirect(url_for("employees"))
        except NotFoundError:
            abort(404)
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Saving employee id=%s failed", data.employee_id)
            flash("System error while saving the employee.", "danger")
        return None

    @app.route("/employees", methods=["GET"], endpoint="employees")
    def employees():
        query = EmployeeListQuery.from_args(
            search=request.args.get("q"),
            position=request.args.get("position"),
            sort=request.args.get("sort"),
            order=request.args.get("order"),
            page=request.args.get("page"),
        )
        page = container.employee_service.list_page(query)
        return render_template("employees/list.html", page=page, query=query, active_page="employees")

    @app.route("/employees/new", methods=["GET", "POST"], endpoint="employee_new")
    def employee_new():
        if request.method == "POST":
            id_s = (request.form.get("id") or "").strip()
            employee_id = int(id_s) if id_s.isdecimal() else None
            response = _save(
                _input_from_request(employee_id),
                success_message="Employee updated." if employee_id else "Employee created.",
            )
            if response is not None:
                return response
            return render_template("employees/form.html", form=request.form, view=None, active_page="employee_new")

        return render_template("employees/form.html", form={}, view=None, active_page="employee_new")

    @app.route("/employees/<int:employee_id>", methods=["GET", "POST"], endpoint="employee_edit")
    def employee_edit(employee_id: int):
        try:
            view = container.employee_service.get_view(employee_id)
        except NotFoundError:
            abort(404)

        if request.method == "POST":
            response = _save(_input_from_request(employee_id), success_message="Employee updated.")
            if response is not None:
                return response
            return render_template("employees/form.html", form=request.form, view=view, active_page="employees")

        return render_template(
            "employees/form.html",
            form=_form_from_employee(view.employee),
            view=view,
            active_page="employees",
        )

    @app.route("/employees/view/<int:employee_id>", methods=["GET"], endpoint="employee_view")
    def employee_view(employee_id: int):
        try:
            view = container.employee_service.get_view(employee_id)
        except NotFoundError:
            abort(404)
        return render_template("employees/view.html", view=view, active_page="employees")

    @app.route("/employees/<int:employee_id>/document", methods=["GET"], endpoint="employee_document")
    def employee_document(employee_id: int):
        try:
            doc = container.employee_service.get_document(employee_id)
        except NotFoundError:
            abort(404)
        return send_file(
            io.BytesIO(doc.data),
            mimetype=doc.mimetype,
            as_attachment=True,
            download_name=doc.filename,
        )
