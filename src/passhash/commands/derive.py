"""Commands: derive a site password, or fill it into a page via a script.

Both commands drive a full PopupSession the way a popup would: load the
stored key and options, guess the tag from ``--url``, apply ``--tag`` and
``--bump`` as edits, prompt for a missing key, then apply per-tag options.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from passhash.commands._base import PassHashCommand

if TYPE_CHECKING:
    from passhash.commands._context import AppContext
    from passhash.services.result import ServiceResult
    from passhash.services.session import PopupSession


def _session_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared --url/--tag/--bump and per-tag hash option flags."""
    options = [
        click.option("--url", default=None, help="Page URL; used to guess the tag and as target."),
        click.option("--tag", default=None, help="Site tag (overrides the guess)."),
        click.option("--bump", "bump_tag", is_flag=True, help="Bump the tag version once."),
        click.option("--length", type=click.IntRange(4, 26), default=None, help="Size."),
        click.option("--digits", "digit_count", type=click.IntRange(0), default=None),
        click.option("--punctuation/--no-punctuation", default=None),
        click.option("--mixed-case/--no-mixed-case", default=None),
        click.option("--no-special/--allow-special", default=None),
        click.option("--digits-only/--any-chars", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


async def _prepare(
    app: AppContext,
    *,
    url: str | None,
    tag: str | None,
    bump_tag: bool,
    overrides: dict[str, Any],
    write: Callable[[str], None],
) -> tuple[PopupSession, ServiceResult, list[str]]:
    session, loader = app.open_session(url, write)
    warnings: list[str] = []

    result = await session.start()
    warnings.extend(result.warnings)
    if not result.ok:
        return session, result, warnings

    def run(step: Callable[[], ServiceResult]) -> ServiceResult:
        outcome = step()
        warnings.extend(outcome.warnings)
        return outcome

    if tag is not None:
        result = run(lambda: session.edit_tag(tag))
    if bump_tag:
        result = run(session.bump)
    # Without a tag there is nothing to derive; the caller reports NO_TAG.
    if not session.state.tag:
        return session, result, warnings
    if not session.state.key:
        key = click.prompt("Master key", hide_input=True, err=True)
        result = run(lambda: session.edit_key(key))
    configuration = loader.configuration
    if overrides and configuration is not None:
        configuration.update_hash_params(**overrides)
        result = run(session.options_changed)
    return session, result, warnings


def _missing_tag(op: str) -> ServiceResult:
    from passhash.services.result import ServiceError, ServiceResult

    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="NO_TAG",
            message="No tag: pass --tag, or --url with guessing enabled",
        ),
    )


@click.command(
    "hash",
    cls=PassHashCommand,
    examples="""\
  passhash hash --tag example.com
  passhash hash --url https://www.example.co.uk/login
  passhash hash --url https://example.com --bump --length 12 --no-special""",
)
@_session_options
@click.pass_obj
def hash_cmd(
    app: AppContext,
    url: str | None,
    tag: str | None,
    bump_tag: bool,
    **hash_options: Any,
) -> None:
    """Print the derived password for a site."""
    overrides = {k: v for k, v in hash_options.items() if v is not None}
    session, result, warnings = asyncio.run(
        _prepare(app, url=url, tag=tag, bump_tag=bump_tag, overrides=overrides, write=click.echo)
    )
    if not result.ok:
        app.emit(result)
        return
    if not session.state.tag:
        app.emit(_missing_tag("hash"))
        return
    app.emit(result.model_copy(update={"op": "hash", "warnings": warnings}))


@click.command(
    cls=PassHashCommand,
    examples="""\
  passhash fill --url https://www.example.co.uk/login
  passhash fill --url https://example.com --tag example.com:2""",
)
@_session_options
@click.pass_obj
def fill(
    app: AppContext,
    url: str | None,
    tag: str | None,
    bump_tag: bool,
    **hash_options: Any,
) -> None:
    """Print a script that fills the password fields of the page at --url.

    Stores the master key and per-tag options according to the configured
    policies.
    """
    overrides = {k: v for k, v in hash_options.items() if v is not None}
    scripts: list[str] = []

    async def run() -> tuple[PopupSession, ServiceResult, list[str]]:
        session, result, warnings = await _prepare(
            app,
            url=url,
            tag=tag,
            bump_tag=bump_tag,
            overrides=overrides,
            write=scripts.append,
        )
        if result.ok and session.state.tag:
            result = await session.press_enter()
            warnings.extend(result.warnings)
        return session, result, warnings

    session, result, warnings = asyncio.run(run())
    if not result.ok:
        app.emit(result)
        return
    if not session.state.tag:
        app.emit(_missing_tag("fill"))
        return
    data = dict(result.data)
    if scripts:
        data["script"] = scripts[-1]
    app.emit(result.model_copy(update={"op": "fill", "data": data, "warnings": warnings}))
