"""Tasks JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import now, today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error
from rhythm.domains.tasks import services as task_services
from rhythm.domains.tasks.mappers import map_task
from rhythm.domains.tasks.schemas.task_schemas import TaskCreate, TaskUpdate

task_api_bp = Blueprint("task_api", __name__)


def _service_error(exc: ValueError):
    code = str(exc)
    if code == "identity_not_found":
        return error("not_found", 404)
    return error(code, 400)


@task_api_bp.get("")
@login_required
def list_tasks():
    tasks = task_services.list_tasks(current_user.id, today())
    return jsonify({"ok": True, "tasks": [map_task(t) for t in tasks]})


@task_api_bp.post("")
@login_required
@csrf_protected
def create_task():
    try:
        data = TaskCreate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        task = task_services.create_task(current_user.id, **data.model_dump())
    except ValueError as exc:
        return _service_error(exc)
    return jsonify({"ok": True, "task": map_task(task)}), 201


@task_api_bp.patch("/<int:task_id>")
@login_required
@csrf_protected
def update_task(task_id: int):
    try:
        data = TaskUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        task = task_services.update_task(
            current_user.id, task_id, at=now(), **data.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        return _service_error(exc)
    if not task:
        return error("not_found", 404)
    return jsonify({"ok": True, "task": map_task(task)})


@task_api_bp.post("/<int:task_id>/complete")
@login_required
@csrf_protected
def toggle_task(task_id: int):
    task = task_services.toggle_task(current_user.id, task_id, at=now())
    if not task:
        return error("not_found", 404)
    return jsonify({"ok": True, "completed": task.completed, "task": map_task(task)})


@task_api_bp.delete("/<int:task_id>")
@login_required
@csrf_protected
def delete_task(task_id: int):
    if not task_services.delete_task(current_user.id, task_id):
        return error("not_found", 404)
    return jsonify({"ok": True})
