"""Command: compute the next version of a tag."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from passhash.commands._base import PassHashCommand

if TYPE_CHECKING:
    from passhash.commands._context import AppContext


@click.command(
    cls=PassHashCommand,
    examples="""\
  passhash bump example.com        # example.com:1
  passhash bump example.com:4      # example.com:5""",
)
@click.argument("tag")
@click.pass_obj
def bump(app: AppContext, tag: str) -> None:
    """Print TAG with its version number incremented."""
    from passhash.domain.tags import bump_tag
    from passhash.services.result import ServiceResult

    app.emit(
        ServiceResult(
            ok=True,
            op="bump",
            data={"previous": tag, "tag": bump_tag(tag)},
        )
    )
