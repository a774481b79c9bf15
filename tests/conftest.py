"""Root conftest — shared test configuration."""

import os

# Never point the suite at a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
