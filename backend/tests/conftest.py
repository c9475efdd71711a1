"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or the real reference API
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("REFERENCE_API_BASE_URL", "http://reference.test")
os.environ.setdefault("LOG_FORMAT", "text")
