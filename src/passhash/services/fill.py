"""Fill — deliver the derived secret to the active target and persist state.

Pipeline: LOOKUP TARGET -> ESCAPE -> INJECT -> STORE KEY -> STORE TAG

INVARIANT: Collaborator failures are warnings, never errors. Nothing after
the lookup is retried, and a missing target skips the whole pipeline.
"""

from __future__ import annotations

import structlog

from passhash.config.models import StoreKeyPolicy, StoreTagPolicy
from passhash.services.contracts import (
    KeyStore,
    SecretInjector,
    SessionConfiguration,
    TargetLookup,
)
from passhash.services.result import ServiceResult

log = structlog.get_logger(__name__)


def escape_secret(value: str) -> str:
    """Escape *value* for interpolation into a single-quoted script string.

    Backslashes are doubled first, then single quotes are backslash-escaped.
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


async def fill_target(
    *,
    secret: str,
    key: str,
    config: SessionConfiguration,
    targets: TargetLookup,
    injector: SecretInjector,
    key_store: KeyStore,
) -> ServiceResult:
    """Push *secret* into the active target, then persist per the policies.

    ``data["filled"]`` tells the caller whether the session should end.
    """
    op = "fill"
    warnings: list[str] = []
    try:
        target = await targets.get_active_target()
    except Exception:
        log.warning("fill.lookup_failed", exc_info=True)
        warnings.append("Active target lookup failed")
        target = None
    if target is None:
        log.info("fill.skipped", reason="no_active_target")
        warnings.append("No active target; fill skipped")
        return ServiceResult(ok=True, op=op, data={"filled": False}, warnings=warnings)

    escaped = escape_secret(secret)
    try:
        injector.inject(target, escaped)
    except Exception:
        log.warning("fill.inject_failed", target=target.id, exc_info=True)
        warnings.append(f"Injection into {target.id} failed")

    key_stored = False
    if config.store_key == StoreKeyPolicy.FOREVER:
        try:
            await key_store.set(key)
            key_stored = True
        except Exception:
            log.warning("fill.store_key_failed", exc_info=True)
            warnings.append("Storing the master key failed")

    tag_saved = False
    if config.store_tag != StoreTagPolicy.NEVER:
        try:
            config.save_tag_specific(config.store_tag == StoreTagPolicy.CHANGED)
            tag_saved = True
        except Exception:
            log.warning("fill.save_tag_failed", exc_info=True)
            warnings.append("Saving tag options failed")

    log.debug("fill.done", target=target.id, key_stored=key_stored, tag_saved=tag_saved)
    return ServiceResult(
        ok=True,
        op=op,
        data={
            "filled": True,
            "target": target.id,
            "key_stored": key_stored,
            "tag_saved": tag_saved,
        },
        warnings=warnings,
    )
