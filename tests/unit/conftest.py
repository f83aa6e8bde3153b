"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import aiosqlite
import pytest

from promptlib.store import PromptStore


@pytest.fixture()
async def store():
    """In-memory SQLite prompt store for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        s = PromptStore(db)
        await s.init_db()
        yield s
