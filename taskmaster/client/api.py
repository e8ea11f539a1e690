# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP client for the task API."""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskmaster.shared.config import load_config
from taskmaster.shared.logging import correlation_scope, logger

from .schemas import TASK_LIST, AuthSchema, OkSchema, TaskSchema, UserSchema

M = TypeVar("M", bound=BaseModel)

NETWORK_ERROR = "network_error"
BAD_RESPONSE = "bad_response"


class ApiError(Exception):
    """A failed API call; ``status`` is 0 when no response was received."""

    def __init__(self, status: int, code: str) -> None:
        super().__init__(f"{status} {code}")
        self.status = status
        self.code = code


class TaskApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        config = load_config().client
        self.token = token
        self._http = httpx.AsyncClient(
            base_url=base_url or config.base_url,
            timeout=timeout or config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(
        self, method: str, path: str, *, json: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        request_id = secrets.token_hex(6)
        headers = {**self._headers(), "X-Request-ID": request_id}
        with correlation_scope(request_id):
            try:
                response = await self._http.request(method, path, json=json, headers=headers)
            except httpx.HTTPError as exc:
                logger.warning(f"api: {method} {path} network error ({type(exc).__name__})")
                raise ApiError(0, NETWORK_ERROR) from exc
            if response.is_success:
                logger.debug(f"api: {method} {path} -> {response.status_code}")
                return response
            try:
                code = str(response.json().get("error") or "http_error")
            except (ValueError, AttributeError):
                code = "http_error"
            logger.info(f"api: {method} {path} -> {response.status_code} {code}")
            raise ApiError(response.status_code, code)

    @staticmethod
    def _parse(response: httpx.Response, adapter: type[M] | TypeAdapter) -> Any:
        try:
            if isinstance(adapter, TypeAdapter):
                return adapter.validate_python(response.json())
            return adapter.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning(f"api: unexpected response body from {response.request.url.path}")
            raise ApiError(response.status_code, BAD_RESPONSE) from exc

    # Auth

    async def signup(self, name: str, email: str, password: str) -> AuthSchema:
        response = await self._request(
            "POST", "/api/auth/signup", json={"name": name, "email": email, "password": password}
        )
        auth = self._parse(response, AuthSchema)
        self.token = auth.token
        return auth

    async def login(self, email: str, password: str) -> AuthSchema:
        response = await self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        auth = self._parse(response, AuthSchema)
        self.token = auth.token
        return auth

    async def me(self) -> UserSchema:
        return self._parse(await self._request("GET", "/api/auth/me"), UserSchema)

    async def logout(self) -> None:
        self._parse(await self._request("POST", "/api/auth/logout"), OkSchema)
        self.token = None

    # Tasks

    async def list_tasks(self) -> list[TaskSchema]:
        return self._parse(await self._request("GET", "/api/tasks"), TASK_LIST)

    async def create_task(self, payload: Mapping[str, Any]) -> TaskSchema:
        return self._parse(await self._request("POST", "/api/tasks", json=payload), TaskSchema)

    async def update_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskSchema:
        response = await self._request("PATCH", f"/api/tasks/{task_id}", json=fields)
        return self._parse(response, TaskSchema)

    async def delete_task(self, task_id: int) -> None:
        self._parse(await self._request("DELETE", f"/api/tasks/{task_id}"), OkSchema)


__all__ = ["ApiError", "BAD_RESPONSE", "NETWORK_ERROR", "TaskApiClient"]
