# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, ClientConfig, LoggingConfig, load_config

__all__ = ["AppConfig", "ClientConfig", "LoggingConfig", "load_config"]
