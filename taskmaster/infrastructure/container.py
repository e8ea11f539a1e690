# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from taskmaster.application.services.password_hashing import ScryptPasswordHasher
from taskmaster.application.services.sessions import SessionManager
from taskmaster.application.use_cases.tasks.create_task import CreateTaskUseCase
from taskmaster.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from taskmaster.application.use_cases.tasks.list_tasks import ListTasksUseCase
from taskmaster.application.use_cases.tasks.update_task import UpdateTaskUseCase
from taskmaster.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from taskmaster.application.use_cases.users.login_user import LoginUserUseCase
from taskmaster.application.use_cases.users.logout_user import LogoutUserUseCase
from taskmaster.application.use_cases.users.register_user import RegisterUserUseCase
from taskmaster.infrastructure.auth import AuthGate
from taskmaster.infrastructure.db import SessionLocal
from taskmaster.infrastructure.repositories.tasks.sqlalchemy_task_repository import (
    SqlAlchemyTaskRepository,
)
from taskmaster.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from taskmaster.interfaces.http.controllers.auth_controller import AuthController
from taskmaster.interfaces.http.controllers.misc_controller import MiscController
from taskmaster.interfaces.http.controllers.pages_controller import PagesController
from taskmaster.interfaces.http.controllers.tasks_controller import TasksController
from taskmaster.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> ScryptPasswordHasher:
        return ScryptPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(SessionLocal)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            tokens=self.session_token_repository,
            lifetime=timedelta(days=self.config.session.lifetime_days),
        )

    @cached_property
    def auth_gate(self) -> AuthGate:
        return AuthGate(
            sessions=self.session_manager,
            cookie_name=self.config.session.cookie_name,
        )

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    @cached_property
    def current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository)

    # Task use cases

    @cached_property
    def list_tasks_use_case(self) -> ListTasksUseCase:
        return ListTasksUseCase(tasks=self.task_repository)

    @cached_property
    def create_task_use_case(self) -> CreateTaskUseCase:
        return CreateTaskUseCase(
            tasks=self.task_repository,
            display_timezone=self.config.display_timezone,
        )

    @cached_property
    def update_task_use_case(self) -> UpdateTaskUseCase:
        return UpdateTaskUseCase(
            tasks=self.task_repository,
            display_timezone=self.config.display_timezone,
        )

    @cached_property
    def delete_task_use_case(self) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(tasks=self.task_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            gate=self.auth_gate,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            current_user_use_case=self.current_user_use_case,
        )

    @cached_property
    def tasks_controller(self) -> TasksController:
        return TasksController(
            gate=self.auth_gate,
            list_use_case=self.list_tasks_use_case,
            create_use_case=self.create_task_use_case,
            update_use_case=self.update_task_use_case,
            delete_use_case=self.delete_task_use_case,
        )

    @cached_property
    def pages_controller(self) -> PagesController:
        return PagesController(gate=self.auth_gate, static_dir=self.config.static_dir)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
