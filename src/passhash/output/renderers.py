"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.  Secrets and
scripts are printed as plain Text with soft wrapping so they can be
copied verbatim.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from passhash.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from passhash.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ph.ok")
    op = Text(f"  {result.op}", style="ph.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ph.key")
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    style = "ph.tag" if key in ("tag", "bumped") else ""
    console.print(k, Text("" if value is None else str(value), style=style), sep="", end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ph.error")
    op = Text(f"  {result.op}", style="ph.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_secret(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """``hash``: the derived secret alone on stdout, details when verbose."""
    console.print(Text(result.data.get("hash", ""), style="ph.secret"), soft_wrap=True)
    if verbose:
        for key in ("tag", "focus", "tag_masked", "hash_masked"):
            if key in result.data:
                _field(console, key, result.data[key])


def _render_fill(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    script = result.data.get("script")
    if script:
        console.print(Text(script, style="ph.script"), soft_wrap=True)
    _status_line(console, result)
    for key in ("filled", "target", "key_stored", "tag_saved"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _field(console, "tag", result.data.get("tag"))


def _render_tag(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """``guess`` / ``bump``: the resulting tag on one line."""
    tag = result.data.get("tag")
    if tag is not None:
        console.print(Text(tag, style="ph.tag"), soft_wrap=True)
    if verbose:
        for key, value in result.data.items():
            if key != "tag":
                _field(console, key, value)


def _render_tags(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    _status_line(console, result)
    _field(console, "count", result.data.get("count", len(items)))
    if not items:
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Tag", style="ph.tag", no_wrap=True)
    table.add_column("Bump", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Digits", justify="right")
    table.add_column("Punct")
    table.add_column("Mixed")
    table.add_column("No special")
    table.add_column("Digits only")
    for item in items:
        params = item.get("hash") or {}
        table.add_row(
            Text(item["tag"]),
            "" if item.get("bump") is None else str(item["bump"]),
            str(params.get("length", "")),
            str(params.get("digit_count", "")),
            str(params.get("punctuation", "")),
            str(params.get("mixed_case", "")),
            str(params.get("no_special", "")),
            str(params.get("digits_only", "")),
        )
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "hash": _render_secret,
    "fill": _render_fill,
    "guess": _render_tag,
    "bump": _render_tag,
    "tags": _render_tags,
}
