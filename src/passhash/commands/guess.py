"""Command: guess a site tag from a URL."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from passhash.commands._base import PassHashCommand

if TYPE_CHECKING:
    from passhash.commands._context import AppContext


@click.command(
    cls=PassHashCommand,
    examples="""\
  passhash guess https://www.example.co.uk/login
  passhash guess --mode name https://mail.google.com/
  passhash guess --mode full http://localhost:8080/""",
)
@click.argument("url")
@click.option(
    "--mode",
    type=click.Choice(["no", "full", "name", "domain"]),
    default=None,
    help="Guess mode (defaults to session.guess_tag).",
)
@click.pass_obj
def guess(app: AppContext, url: str, mode: str | None) -> None:
    """Print the tag guessed for URL."""
    from passhash.domain.guess import GuessMode, guess_tag
    from passhash.services.result import ServiceResult

    resolved = GuessMode(mode) if mode else app.settings.session.guess_tag
    tag = guess_tag(url, resolved, app.rules)
    warnings = [] if tag is not None else [f"No tag guessed for {url!r} in {resolved} mode"]
    app.emit(
        ServiceResult(
            ok=True,
            op="guess",
            data={"url": url, "mode": str(resolved), "tag": tag},
            warnings=warnings,
        )
    )
