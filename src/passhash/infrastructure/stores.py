"""File-backed master key and per-tag option stores.

Layout of the data directory::

    <data_dir>/masterkey   the stored master key (mode 0600)
    <data_dir>/tags.json   {tag: {"bump": int | null, "hash": {...} | null}}

Per-tag hash options are keyed by the full tag text (``site`` or
``site:3``); the remembered version lives on the unversioned base entry.
Every save re-reads the file and rewrites it whole, so concurrent
sessions resolve by last writer wins.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from passhash.config.models import HashParams
from passhash.infrastructure.filesystem import (
    KEY_FILENAME,
    TAGS_FILENAME,
    read_json,
    read_text,
    write_json,
    write_private_text,
)

logger = logging.getLogger(__name__)


class FileKeyStore:
    """Single-slot master key storage in the data directory."""

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / KEY_FILENAME

    async def get(self) -> str | None:
        value = await asyncio.to_thread(read_text, self._path)
        return value or None

    async def set(self, value: str) -> None:
        await asyncio.to_thread(write_private_text, self._path, value)
        logger.debug("Stored master key in %s", self._path)

    def clear(self) -> bool:
        """Delete the stored key; returns whether one existed."""
        if not self._path.exists():
            return False
        self._path.unlink()
        return True


class TagEntry(BaseModel):
    """Saved options for one tag."""

    model_config = {"frozen": True}

    bump: int | None = Field(default=None, ge=0)
    hash: HashParams | None = None


class TagOptionsStore:
    """Per-tag options persisted as one JSON document."""

    def __init__(self, data_dir: Path) -> None:
        self.path = data_dir / TAGS_FILENAME

    def load(self) -> dict[str, TagEntry]:
        raw = read_json(self.path)
        return {tag: TagEntry.model_validate(entry) for tag, entry in raw.items()}

    def save(self, entries: dict[str, TagEntry]) -> None:
        payload = {
            tag: entry.model_dump(mode="json")
            for tag, entry in sorted(entries.items())
            if entry.bump is not None or entry.hash is not None
        }
        write_json(self.path, payload)
        logger.debug("Saved %d tag entries to %s", len(payload), self.path)
