"""StoredConfiguration — session options backed by settings and the tag store.

``load_tag`` swaps in the hash parameters saved for the loaded tag (falling
back to the configured defaults) and remembers which tag is current, so
``save_tag_specific`` knows what to write after a fill.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from passhash.config.models import (
    HashParams,
    SessionSection,
    StoreKeyPolicy,
    StoreTagPolicy,
)
from passhash.config.settings import PassHashSettings
from passhash.domain.guess import GuessMode
from passhash.domain.tags import format_tag
from passhash.infrastructure.stores import TagEntry, TagOptionsStore

logger = logging.getLogger(__name__)


class StoredConfiguration:
    """Concrete session configuration over a :class:`TagOptionsStore`."""

    def __init__(
        self,
        section: SessionSection,
        defaults: HashParams,
        store: TagOptionsStore,
        entries: dict[str, TagEntry] | None = None,
    ) -> None:
        self._section = section
        self._defaults = defaults
        self._store = store
        self._entries = dict(entries or {})
        self._params = defaults
        self._current: tuple[str, int | None] | None = None

    @property
    def guess_tag(self) -> GuessMode:
        return self._section.guess_tag

    @property
    def store_key(self) -> StoreKeyPolicy:
        return self._section.store_key

    @property
    def store_tag(self) -> StoreTagPolicy:
        return self._section.store_tag

    @property
    def display_tag_as_text(self) -> bool:
        return self._section.display_tag

    @property
    def display_hash_as_text(self) -> bool:
        return self._section.display_hash

    @property
    def hash_params(self) -> HashParams:
        return self._params

    def update_hash_params(self, **changes: Any) -> HashParams:
        """Apply per-tag option edits; validated against :class:`HashParams`."""
        self._params = HashParams.model_validate({**self._params.model_dump(), **changes})
        return self._params

    def load_tag(self, base: str, version: int | None = None) -> int | None:
        """Select *base* (and *version*) as the current tag.

        Returns the remembered version of *base* when *version* is omitted.
        """
        self._current = (base, version)
        entry = self._entries.get(format_tag(base, version))
        self._params = entry.hash if entry and entry.hash else self._defaults
        if version is not None:
            return None
        base_entry = self._entries.get(base)
        return base_entry.bump if base_entry else None

    def save_tag_specific(self, changed_only: bool) -> None:
        """Persist the current tag's hash parameters and version.

        With *changed_only*, parameters equal to the defaults are not stored
        (and a previously stored override for the tag is dropped).
        """
        if self._current is None:
            return
        base, version = self._current
        tag = format_tag(base, version)
        entries = self._store.load()

        params = self._params
        if changed_only and params == self._defaults:
            params = None
        entry = entries.get(tag, TagEntry())
        entries[tag] = entry.model_copy(update={"hash": params})

        base_entry = entries.get(base, TagEntry())
        entries[base] = base_entry.model_copy(update={"bump": version})

        self._store.save(entries)
        self._entries = entries
        logger.debug("Saved tag-specific options (changed_only=%s)", changed_only)


class StoredConfigurationLoader:
    """Resolves a :class:`StoredConfiguration` from settings, off the event loop."""

    def __init__(self, settings: PassHashSettings) -> None:
        self._settings = settings
        self.store = TagOptionsStore(settings.data_dir)
        self.configuration: StoredConfiguration | None = None

    async def load(self) -> StoredConfiguration:
        entries = await asyncio.to_thread(self.store.load)
        self.configuration = StoredConfiguration(
            self._settings.session,
            self._settings.hash,
            self.store,
            entries,
        )
        return self.configuration
