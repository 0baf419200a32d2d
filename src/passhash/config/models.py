"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, passhash.toml only contains overrides.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from passhash.domain.guess import GuessMode


class StoreKeyPolicy(StrEnum):
    """Whether the master key outlives the session."""

    NEVER = "never"
    FOREVER = "forever"


class StoreTagPolicy(StrEnum):
    """When per-tag options are written back after a fill."""

    NEVER = "never"
    CHANGED = "changed"
    ALWAYS = "always"


# --- passhash.toml sections ---


class HashParams(BaseModel):
    """[hash] section — shape of the generated password."""

    model_config = {"frozen": True}

    length: int = Field(default=8, ge=4, le=26)
    digit_count: int = Field(default=1, ge=0)
    punctuation: bool = True
    mixed_case: bool = True
    no_special: bool = False
    digits_only: bool = False


class SessionSection(BaseModel):
    """[session] section."""

    model_config = {"frozen": True}

    guess_tag: GuessMode = GuessMode.DOMAIN
    store_key: StoreKeyPolicy = StoreKeyPolicy.NEVER
    store_tag: StoreTagPolicy = StoreTagPolicy.CHANGED
    display_tag: bool = False
    display_hash: bool = False
