"""Shared pytest fixtures and in-memory collaborators for passhash tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from passhash.config.models import HashParams, StoreKeyPolicy, StoreTagPolicy
from passhash.domain.guess import GuessMode
from passhash.services.contracts import TargetHandle
from passhash.services.session import PopupSession


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory for the key and tag stores."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory with no inherited passhash config.

    Use via ``@pytest.mark.usefixtures("_isolated_env")`` on command test classes.
    """
    for name in ("PASSHASH_CONFIG", "PASSHASH_DATA_DIR", "PASSHASH_SUFFIX_LIST"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------


class FakeKeyStore:
    def __init__(self, value: str | None = None) -> None:
        self.value = value
        self.writes: list[str] = []

    async def get(self) -> str | None:
        return self.value

    async def set(self, value: str) -> None:
        self.value = value
        self.writes.append(value)


@dataclass
class FakeConfiguration:
    guess_tag: GuessMode = GuessMode.DOMAIN
    store_key: StoreKeyPolicy = StoreKeyPolicy.NEVER
    store_tag: StoreTagPolicy = StoreTagPolicy.NEVER
    display_tag_as_text: bool = False
    display_hash_as_text: bool = False
    hash_params: HashParams = field(default_factory=HashParams)
    remembered: dict[str, int] = field(default_factory=dict)
    loads: list[tuple[str, int | None]] = field(default_factory=list)
    saves: list[bool] = field(default_factory=list)

    def load_tag(self, base: str, version: int | None = None) -> int | None:
        self.loads.append((base, version))
        if version is not None:
            return None
        return self.remembered.get(base)

    def save_tag_specific(self, changed_only: bool) -> None:
        self.saves.append(changed_only)


class FakeLoader:
    def __init__(self, config: FakeConfiguration) -> None:
        self.config = config

    async def load(self) -> FakeConfiguration:
        return self.config


class FakeTargets:
    def __init__(self, url: str | None = None) -> None:
        self.url = url
        self.lookups = 0

    async def get_active_target(self) -> TargetHandle | None:
        self.lookups += 1
        if self.url is None:
            return None
        return TargetHandle(id="tab-1", url=self.url)


class RecordingInjector:
    def __init__(self) -> None:
        self.calls: list[tuple[TargetHandle, str]] = []

    def inject(self, target: TargetHandle, value: str) -> None:
        self.calls.append((target, value))


class RecordingHash:
    """Deterministic stand-in for the hash function that records its calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

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
    ) -> str:
        self.calls.append(
            (tag, key, length, digit_count, punctuation, mixed_case, no_special, digits_only)
        )
        return f"{tag}|{key}|{length}"


@dataclass
class SessionKit:
    """A PopupSession together with the fakes it was built from."""

    session: PopupSession
    key_store: FakeKeyStore
    config: FakeConfiguration
    targets: FakeTargets
    injector: RecordingInjector
    hash_fn: RecordingHash


@pytest.fixture
def make_session() -> Callable[..., SessionKit]:
    """Factory for sessions over fakes.

    Keyword arguments: ``key`` (stored master key), ``url`` (active target),
    and any :class:`FakeConfiguration` field.
    """

    def factory(*, key: str | None = None, url: str | None = None, **config: Any) -> SessionKit:
        kit_config = FakeConfiguration(**config)
        key_store = FakeKeyStore(key)
        targets = FakeTargets(url)
        injector = RecordingInjector()
        hash_fn = RecordingHash()
        session = PopupSession(
            key_store=key_store,
            config_loader=FakeLoader(kit_config),
            targets=targets,
            injector=injector,
            hash_fn=hash_fn,
        )
        return SessionKit(session, key_store, kit_config, targets, injector, hash_fn)

    return factory
