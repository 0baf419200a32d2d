"""What every PopupSession operation hands back to the CLI.

Session operations do not raise.  A missing tag or key, a closed session
and a failed config load all come back as a ServiceResult; a failed key
write or a skipped fill is reported in ``warnings`` on an otherwise
successful result.  ``data`` mirrors the visible popup state and never
includes the master key.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a session operation did not run (``SESSION_CLOSED``, ``CONFIG_UNAVAILABLE``, ...)."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one session operation.

    Attributes:
        ok: Whether the operation ran.
        op: Operation name, e.g. ``"start"``, ``"bump"`` or ``"fill"``.
        data: Tag, derived hash, focus and flags after the operation.
        warnings: Fire-and-forget failures and skipped fills.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
