# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from taskmaster.application.use_cases.tasks.create_task import CreateTaskUseCase
from taskmaster.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from taskmaster.application.use_cases.tasks.list_tasks import ListTasksUseCase
from taskmaster.application.use_cases.tasks.update_task import UpdateTaskUseCase
from taskmaster.domain.tasks import TaskNotFoundError, TitleRequiredError
from taskmaster.infrastructure.auth import AuthGate, authed_request
from taskmaster.interfaces.http.dto.auth import OkDTO
from taskmaster.interfaces.http.dto.tasks import CreateTaskRequestDTO, UpdateTaskRequestDTO
from taskmaster.shared.errors import AppError, InfrastructureError
from taskmaster.shared.errors import ValidationError as RequestValidationError
from taskmaster.shared.errors.validation import raise_validation_error
from taskmaster.shared.logging import logger


def _parse_task_id(raw: str) -> int:
    # Identifiers that cannot name a row are reported as not found.
    if not raw.isdigit():
        raise TaskNotFoundError(raw)
    return int(raw)


class TasksController:
    def __init__(
        self,
        *,
        gate: AuthGate,
        list_use_case: ListTasksUseCase,
        create_use_case: CreateTaskUseCase,
        update_use_case: UpdateTaskUseCase,
        delete_use_case: DeleteTaskUseCase,
    ) -> None:
        self._gate = gate
        self._list = list_use_case
        self._create = create_use_case
        self._update = update_use_case
        self._delete = delete_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("tasks", __name__, url_prefix="/api")
        guard = self._gate.api_required
        bp.add_url_rule("/tasks", view_func=guard(self.list_tasks), methods=["GET"])
        bp.add_url_rule("/tasks", view_func=guard(self.create), methods=["POST"])
        bp.add_url_rule("/tasks/<task_id>", view_func=guard(self.update), methods=["PATCH"])
        bp.add_url_rule("/tasks/<task_id>", view_func=guard(self.delete), methods=["DELETE"])
        return bp

    def list_tasks(self):
        t0 = perf_counter()
        user_id = authed_request().user_id
        try:
            items = [task.to_payload() for task in self._list.execute(user_id)]
        except Exception as exc:
            logger.exception(f"tasks.list: err (user_id={user_id})")
            raise InfrastructureError(code="tasks_list_failed") from exc
        dt = (perf_counter() - t0) * 1000
        logger.info(f"tasks.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify(items)

    def create(self):
        t0 = perf_counter()
        user_id = authed_request().user_id
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            logger.info(f"task.create: bad_body (user_id={user_id})")
            raise RequestValidationError(context={"fields": ["body"]})
        title = payload.get("title")
        if not isinstance(title, str) or not title.strip():
            logger.info(f"task.create: title_required (user_id={user_id})")
            raise TitleRequiredError()
        try:
            dto = CreateTaskRequestDTO.model_validate(payload)
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            task = self._create.execute(
                user_id,
                title=dto.title,
                priority=dto.priority,
                status=dto.status,
                assignee=dto.assignee,
                starred=dto.starred,
                deadline=dto.deadline,
            )
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"task.create: err (user_id={user_id})")
            raise InfrastructureError(code="task_create_failed") from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(f"task.create: ok (user_id={user_id}, task_id={task.id}, dt_ms={dt:.0f})")
        return jsonify(task.to_payload()), 201

    def update(self, task_id: str):
        t0 = perf_counter()
        user_id = authed_request().user_id
        ident = _parse_task_id(task_id)
        try:
            dto = UpdateTaskRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            task = self._update.execute(user_id, ident, dto.changes())
        except TaskNotFoundError:
            logger.info(f"task.update: not_found (user_id={user_id}, task_id={ident})")
            raise
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"task.update: err (user_id={user_id}, task_id={ident})")
            raise InfrastructureError(code="task_update_failed") from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"task.update: ok (user_id={user_id}, task_id={ident}, "
            f"fields={sorted(dto.changes())}, dt_ms={dt:.0f})"
        )
        return jsonify(task.to_payload())

    def delete(self, task_id: str):
        user_id = authed_request().user_id
        ident = _parse_task_id(task_id)
        try:
            self._delete.execute(user_id, ident)
        except TaskNotFoundError:
            logger.info(f"task.delete: not_found (user_id={user_id}, task_id={ident})")
            raise
        except Exception as exc:
            logger.exception(f"task.delete: err (user_id={user_id}, task_id={ident})")
            raise InfrastructureError(code="task_delete_failed") from exc

        logger.info(f"task.delete: ok (user_id={user_id}, task_id={ident})")
        return jsonify(OkDTO().model_dump())
