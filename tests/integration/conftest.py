"""Integration test fixtures.

Wires a PromptLibrary over the bundled dataset together with an in-memory
SQLite mirror. The small hand-written dataset fixtures come from
tests/conftest.py.
"""

from __future__ import annotations

import aiosqlite
import pytest

from promptlib.config import _BUNDLED_DATASET
from promptlib.library import PromptLibrary
from promptlib.store import PromptStore


@pytest.fixture()
def bundled_library() -> PromptLibrary:
    return PromptLibrary.from_file(_BUNDLED_DATASET)


@pytest.fixture()
async def mirrored(bundled_library: PromptLibrary):
    """Bundled library plus a store already holding its records."""
    async with aiosqlite.connect(":memory:") as db:
        store = PromptStore(db)
        await store.init_db()
        await store.replace_all(bundled_library.get_all())
        yield bundled_library, store
