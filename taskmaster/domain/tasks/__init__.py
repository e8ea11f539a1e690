# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    BOARD_COLUMNS,
    MUTABLE_FIELDS,
    Task,
    TaskChanges,
    TaskDraft,
    TaskPriority,
    TaskStatus,
)
from .exceptions import TaskNotFoundError, TitleRequiredError
from .repositories import TaskRepository
from .timestamps import DeadlineState, classify_deadline, format_display, parse_deadline

__all__ = [
    "BOARD_COLUMNS",
    "DeadlineState",
    "MUTABLE_FIELDS",
    "Task",
    "TaskChanges",
    "TaskDraft",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskRepository",
    "TaskStatus",
    "TitleRequiredError",
    "classify_deadline",
    "format_display",
    "parse_deadline",
]
