from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Configuration is read once at import time, so the test environment has to be in
# place before any taskmaster module is imported.
_tmp = Path(tempfile.mkdtemp(prefix="taskmaster-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_tmp / 'test.db'}")
os.environ.setdefault("LOG_FILE", str(_tmp / "taskmaster.log"))
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["APP_ENV"] = "test"
