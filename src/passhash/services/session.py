"""PopupSession — the interaction controller for one password session.

A session mirrors a small form: tag, key and hash fields, an options panel,
and focus.  Shells feed it user events (typing, Enter, buttons) and render
``session.state``; every event returns a ServiceResult with a snapshot.

Startup: LOAD KEY -> LOAD CONFIGURATION -> GUESS TAG -> RECONCILE -> FOCUS KEY

INVARIANT: Once closed, a session ignores events, and results of awaits
that complete after closing are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from passhash.domain.guess import GuessMode, guess_tag
from passhash.domain.suffix import SuffixRules
from passhash.domain.tags import bump_tag, format_tag, parse_tag
from passhash.services.contracts import (
    ConfigurationLoader,
    HashFunction,
    KeyStore,
    SecretInjector,
    SessionConfiguration,
    TargetHandle,
    TargetLookup,
)
from passhash.services.fill import fill_target
from passhash.services.recalc import recalculate
from passhash.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)


class Focus(StrEnum):
    """Which field has input focus."""

    IDLE = "idle"
    TAG = "tag"
    KEY = "key"


@dataclass
class SessionState:
    """Everything a shell needs to render the form."""

    tag: str = ""
    key: str = ""
    hash: str = ""
    focus: Focus = Focus.IDLE
    options_visible: bool = False
    tag_masked: bool = True
    hash_masked: bool = True
    closed: bool = False

    def snapshot(self) -> dict[str, Any]:
        """Visible state; the master key is reported only as present or not."""
        return {
            "tag": self.tag,
            "has_key": bool(self.key),
            "hash": self.hash,
            "focus": str(self.focus),
            "options_visible": self.options_visible,
            "tag_masked": self.tag_masked,
            "hash_masked": self.hash_masked,
            "closed": self.closed,
        }


class PopupSession:
    """Binds user events to tag reconciliation, recalculation and fill."""

    def __init__(
        self,
        *,
        key_store: KeyStore,
        config_loader: ConfigurationLoader,
        targets: TargetLookup,
        injector: SecretInjector,
        hash_fn: HashFunction,
        rules: SuffixRules | None = None,
    ) -> None:
        self._key_store = key_store
        self._config_loader = config_loader
        self._targets = targets
        self._injector = injector
        self._hash_fn = hash_fn
        self._rules = rules or SuffixRules.default()
        self._config: SessionConfiguration | None = None
        self._warnings: list[str] = []
        self.state = SessionState()

    @property
    def config(self) -> SessionConfiguration | None:
        return self._config

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _result(self, op: str, **extra: Any) -> ServiceResult:
        warnings, self._warnings = self._warnings, []
        return ServiceResult(
            ok=True,
            op=op,
            data={**self.state.snapshot(), **extra},
            warnings=warnings,
        )

    @staticmethod
    def _closed(op: str) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="SESSION_CLOSED", message="Session has ended"),
        )

    def _not_ready(self, op: str) -> ServiceResult | None:
        if self.state.closed:
            return self._closed(op)
        if self._config is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="SESSION_NOT_READY",
                    message="Session configuration has not been loaded",
                ),
            )
        return None

    def _load_tag(self, base: str, version: int | None = None) -> int | None:
        assert self._config is not None
        try:
            return self._config.load_tag(base, version)
        except Exception:
            log.warning("tag.load_failed", exc_info=True)
            self._warnings.append("Loading tag options failed")
            return None

    async def _active_target(self) -> TargetHandle | None:
        try:
            return await self._targets.get_active_target()
        except Exception:
            log.warning("target.lookup_failed", exc_info=True)
            self._warnings.append("Active target lookup failed")
            return None

    def _recalculate(self) -> None:
        assert self._config is not None
        try:
            self.state.hash = recalculate(
                self.state.tag, self.state.key, self._config.hash_params, self._hash_fn
            )
        except Exception:
            log.warning("hash.failed", exc_info=True)
            self._warnings.append("Hash generation failed")
            self.state.hash = ""

    def _tag_changed(self, *, from_guess: bool = False) -> None:
        """Reconcile per-tag options after the tag changed, then recalculate.

        Versioned tags are taken as written.  An unversioned tag that was just
        guessed picks up the version remembered for its base, if any.
        """
        parsed = parse_tag(self.state.tag)
        if parsed.is_versioned:
            self._load_tag(parsed.base, parsed.version)
        else:
            remembered = self._load_tag(parsed.base)
            if from_guess and remembered is not None:
                self.state.tag = format_tag(parsed.base, remembered)
                log.debug("tag.recalled", version=remembered)
                self._tag_changed(from_guess=False)
                return
        self._recalculate()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def start(self) -> ServiceResult:
        """Load the stored key and configuration, then guess a tag if enabled."""
        op = "start"
        if self.state.closed:
            return self._closed(op)

        try:
            stored_key = await self._key_store.get()
        except Exception:
            log.warning("key.load_failed", exc_info=True)
            self._warnings.append("Loading the stored key failed")
            stored_key = None
        if self.state.closed:
            return self._closed(op)
        if stored_key:
            self.state.key = stored_key

        try:
            config = await self._config_loader.load()
        except Exception:
            log.warning("config.load_failed", exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CONFIG_UNAVAILABLE",
                    message="Session configuration could not be loaded",
                ),
            )
        if self.state.closed:
            return self._closed(op)

        self._config = config
        self.state.tag_masked = not config.display_tag_as_text
        self.state.hash_masked = not config.display_hash_as_text
        self.state.focus = Focus.TAG

        guessed = None
        if config.guess_tag != GuessMode.NO:
            target = await self._active_target()
            if self.state.closed:
                return self._closed(op)
            if target is not None:
                guessed = guess_tag(target.url, config.guess_tag, self._rules)
            if guessed:
                self.state.tag = guessed
                self._tag_changed(from_guess=True)
                self.state.focus = Focus.KEY
        log.debug("session.started", guessed=bool(guessed), has_key=bool(self.state.key))
        return self._result(op, guessed=bool(guessed))

    def edit_tag(self, value: str) -> ServiceResult:
        op = "edit_tag"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        self.state.tag = value
        self._tag_changed()
        return self._result(op)

    def edit_key(self, value: str) -> ServiceResult:
        op = "edit_key"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        self.state.key = value
        self._recalculate()
        return self._result(op)

    def bump(self) -> ServiceResult:
        """Move the tag to its next version and reconcile as if typed."""
        op = "bump"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        if not self.state.tag:
            return self._result(op, bumped=False)
        self.state.tag = bump_tag(self.state.tag)
        self._tag_changed()
        return self._result(op, bumped=True)

    def options_changed(self) -> ServiceResult:
        """Recalculate after a shell edited the per-tag hash options."""
        op = "options_changed"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        self._recalculate()
        return self._result(op)

    def toggle_options(self) -> ServiceResult:
        op = "toggle_options"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        self.state.options_visible = not self.state.options_visible
        return self._result(op)

    async def press_enter(self) -> ServiceResult:
        """Guide focus to the first empty field, or fill when both are set."""
        op = "enter"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        if not self.state.tag:
            self.state.focus = Focus.TAG
            return self._result(op)
        if not self.state.key:
            self.state.focus = Focus.KEY
            return self._result(op)
        return await self.fill()

    async def fill(self) -> ServiceResult:
        """Deliver the current hash to the active target and end the session."""
        op = "fill"
        if (blocked := self._not_ready(op)) is not None:
            return blocked
        if not self.state.tag or not self.state.key:
            self._warnings.append("Tag and key are required to fill")
            return self._result(op, filled=False)
        assert self._config is not None

        filled = await fill_target(
            secret=self.state.hash,
            key=self.state.key,
            config=self._config,
            targets=self._targets,
            injector=self._injector,
            key_store=self._key_store,
        )
        if self.state.closed:
            return self._closed(op)
        self._warnings.extend(filled.warnings)
        if filled.data.get("filled"):
            self.close()
        return self._result(op, **filled.data)

    def close(self) -> None:
        """End the session; later events and pending results are dropped."""
        if not self.state.closed:
            self.state.closed = True
            log.debug("session.closed")
