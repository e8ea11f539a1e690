# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import ScryptPasswordHasher
from .services.sessions import SessionManager
from .use_cases.tasks.create_task import CreateTaskUseCase
from .use_cases.tasks.delete_task import DeleteTaskUseCase
from .use_cases.tasks.list_tasks import ListTasksUseCase
from .use_cases.tasks.update_task import UpdateTaskUseCase

__all__ = [
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "ListTasksUseCase",
    "ScryptPasswordHasher",
    "SessionManager",
    "UpdateTaskUseCase",
]
