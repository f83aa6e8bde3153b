"""SQLite mirror of the prompt corpus.

Mirrors the ``prompts`` table the web app persists. The library never reads
from it, so infrastructure failures are contained here: read failures return
``None`` or an empty list, write failures return ``False``. Errors are still
logged with ``exc_info=True``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from promptlib.models.prompt import PromptRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

log = structlog.get_logger()

_CREATE_PROMPTS_TABLE = """
CREATE TABLE IF NOT EXISTS prompts (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    description TEXT NOT NULL,
    content     TEXT NOT NULL,
    category    TEXT NOT NULL,
    component   TEXT NOT NULL,
    sdlc_stage  TEXT NOT NULL,
    tags        TEXT NOT NULL,
    context     TEXT NOT NULL,
    position    INTEGER NOT NULL
)
"""

_CREATE_CATEGORY_INDEX = "CREATE INDEX IF NOT EXISTS idx_prompts_category ON prompts(category)"

_SELECT_COLUMNS = (
    "SELECT id, title, description, content, category, component, sdlc_stage, tags, context "
    "FROM prompts"
)


def _row_to_record(row: aiosqlite.Row | tuple) -> PromptRecord:
    return PromptRecord(
        id=row[0],
        title=row[1],
        description=row[2],
        prompt_text=row[3],
        category=row[4],
        component_key=row[5],
        stage_key=row[6],
        tags=tuple(json.loads(row[7])),
        context_note=row[8],
    )


class PromptStore:
    """Relational copy of the corpus, one row per PromptRecord."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_PROMPTS_TABLE)
        await self._db.execute(_CREATE_CATEGORY_INDEX)
        await self._db.commit()

    async def replace_all(self, records: Iterable[PromptRecord]) -> bool:
        """Swap the table contents for ``records`` in one transaction."""
        rows = [
            (
                r.id,
                r.title,
                r.description,
                r.prompt_text,
                r.category,
                r.component_key,
                r.stage_key,
                json.dumps(list(r.tags)),
                r.context_note,
                position,
            )
            for position, r in enumerate(records)
        ]
        try:
            await self._db.execute("DELETE FROM prompts")
            await self._db.executemany(
                "INSERT INTO prompts "
                "(id, title, description, content, category, component, sdlc_stage, "
                "tags, context, position) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                rows,
            )
            await self._db.commit()
        except aiosqlite.Error:
            await self._db.rollback()
            log.warning("store_write_error", rows=len(rows), exc_info=True)
            return False
        log.info("store_replaced", rows=len(rows))
        return True

    async def get_prompt(self, prompt_id: str) -> PromptRecord | None:
        """Read one row. Returns ``None`` when absent or on read failure."""
        try:
            cursor = await self._db.execute(f"{_SELECT_COLUMNS} WHERE id = ?", (prompt_id,))
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("store_read_error", key=f"prompt:{prompt_id}", exc_info=True)
            return None
        if row is None:
            return None
        return _row_to_record(row)

    async def list_by_category(self, category: str) -> list[PromptRecord]:
        try:
            cursor = await self._db.execute(
                f"{_SELECT_COLUMNS} WHERE category = ? ORDER BY position", (category,)
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error:
            log.warning("store_read_error", key=f"category:{category}", exc_info=True)
            return []
        return [_row_to_record(row) for row in rows]

    async def count(self) -> int:
        try:
            cursor = await self._db.execute("SELECT COUNT(*) FROM prompts")
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("store_read_error", key="count", exc_info=True)
            return 0
        return row[0] if row else 0
