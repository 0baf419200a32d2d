"""Commands: inspect stored per-tag options and forget the stored key."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from passhash.commands._base import PassHashCommand

if TYPE_CHECKING:
    from passhash.commands._context import AppContext


@click.command(
    cls=PassHashCommand,
    examples="""\
  passhash tags
  passhash --json tags""",
)
@click.pass_obj
def tags(app: AppContext) -> None:
    """List tags with saved options or a remembered version."""
    from passhash.infrastructure.stores import TagOptionsStore
    from passhash.services.result import ServiceError, ServiceResult

    store = TagOptionsStore(app.settings.data_dir)
    try:
        entries = store.load()
    except (ValueError, OSError) as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op="tags",
                error=ServiceError(
                    code="STORE_INVALID",
                    message=f"Cannot read {store.path}",
                    detail={"reason": str(exc)},
                ),
            )
        )
        return
    items = [
        {"tag": tag, **entry.model_dump(mode="json")} for tag, entry in sorted(entries.items())
    ]
    app.emit(ServiceResult(ok=True, op="tags", data={"count": len(items), "items": items}))


@click.command(cls=PassHashCommand)
@click.pass_obj
def forget(app: AppContext) -> None:
    """Delete the stored master key."""
    from passhash.infrastructure.stores import FileKeyStore
    from passhash.services.result import ServiceResult

    removed = FileKeyStore(app.settings.data_dir).clear()
    warnings = [] if removed else ["No stored master key"]
    app.emit(ServiceResult(ok=True, op="forget", data={"removed": removed}, warnings=warnings))
