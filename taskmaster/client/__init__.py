# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .api import ApiError, TaskApiClient
from .schemas import AuthSchema, OkSchema, TaskSchema, UserSchema
from .state import ClientState, ClientTask, Notice, NoticeKind, StatusSummary, Views
from .sync import TaskSyncClient

__all__ = [
    "ApiError",
    "AuthSchema",
    "ClientState",
    "ClientTask",
    "Notice",
    "NoticeKind",
    "OkSchema",
    "StatusSummary",
    "TaskApiClient",
    "TaskSchema",
    "TaskSyncClient",
    "UserSchema",
    "Views",
]
