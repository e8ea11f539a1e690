# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrub credentials from log messages before any sink sees them."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Session tokens in Authorization headers, cookies and key=value pairs.
    (re.compile(r"(bearer\s+)[\w\-.~+/]{16,}=*", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"\b(token\s*[:=]\s*['\"]?)[\w\-.~+/]{16,}=*", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(secret[_-]?key\s*[:=]\s*['\"]?)[^'\"\s,)]+", re.IGNORECASE), rf"\1{REDACTED}"),
    # Plaintext passwords and stored "<salt>:<scrypt key>" hashes.
    (re.compile(r"(password\s*[:=]\s*['\"]?)[^'\"\s,)]+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"\b[0-9a-f]{32}:[0-9a-f]{128}\b"), REDACTED),
    # Credentials embedded in database URLs.
    (re.compile(r"(\w+(?:\+\w+)?://[^:/\s]+:)[^@\s]+@"), rf"\1{REDACTED}@"),
    # Keep the domain of an email address, drop the mailbox.
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: rewrites the message in place and never drops the record."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
