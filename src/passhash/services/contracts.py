"""Collaborator contracts consumed by the session services.

The session never touches storage or the hash algorithm directly.
Each is injected as one of these protocols so tests can substitute
in-memory fakes and shells can plug in their own implementations.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel

from passhash.config.models import HashParams, StoreKeyPolicy, StoreTagPolicy
from passhash.domain.guess import GuessMode


class TargetHandle(BaseModel):
    """The document a derived password is delivered to."""

    model_config = {"frozen": True}

    id: str
    url: str = ""


class KeyStore(Protocol):
    """Single-slot storage for the master key."""

    async def get(self) -> str | None: ...

    async def set(self, value: str) -> None: ...


class SessionConfiguration(Protocol):
    """Options resolved once per session, plus per-tag load/save.

    ``load_tag`` returns the remembered version for an unversioned base and
    None otherwise.  What it loads beyond that is opaque to the session;
    implementations may adjust ``hash_params`` for the loaded tag.
    """

    @property
    def guess_tag(self) -> GuessMode: ...

    @property
    def store_key(self) -> StoreKeyPolicy: ...

    @property
    def store_tag(self) -> StoreTagPolicy: ...

    @property
    def display_tag_as_text(self) -> bool: ...

    @property
    def display_hash_as_text(self) -> bool: ...

    @property
    def hash_params(self) -> HashParams: ...

    def load_tag(self, base: str, version: int | None = None) -> int | None: ...

    def save_tag_specific(self, changed_only: bool) -> None: ...


class ConfigurationLoader(Protocol):
    async def load(self) -> SessionConfiguration: ...


class TargetLookup(Protocol):
    async def get_active_target(self) -> TargetHandle | None: ...


class SecretInjector(Protocol):
    """Overwrites every password field of *target* with *value*.

    Fire-and-forget: the caller does not learn how many fields changed.
    """

    def inject(self, target: TargetHandle, value: str) -> None: ...


class HashFunction(Protocol):
    """Pure, deterministic password generator."""

    def __call__(
        self,
        tag: str,
        key: str,
        length: int,
        digit_count: int,
        punctuation: bool,
        mixed_case: bool,
        no_special: bool,
        digits_only: bool,
    ) -> str: ...
