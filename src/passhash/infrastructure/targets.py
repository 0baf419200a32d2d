"""Script-based target adapters for shells without a live browser tab.

The active target is a URL supplied by the user.  Injection renders a
JavaScript snippet that overwrites every password input on the page; the
escaped secret is interpolated into its single-quoted string literal.
"""

from __future__ import annotations

from collections.abc import Callable

from passhash.services.contracts import TargetHandle

SCRIPT_TEMPLATE = (
    "document.querySelectorAll('input[type=password]')"
    ".forEach(function (e) {{ e.value = '{value}'; }});"
)


class UrlTargetLookup:
    """Reports a fixed URL as the active target, or no target at all."""

    def __init__(self, url: str | None) -> None:
        self._url = url

    async def get_active_target(self) -> TargetHandle | None:
        if not self._url:
            return None
        return TargetHandle(id=self._url, url=self._url)


def render_fill_script(escaped: str) -> str:
    return SCRIPT_TEMPLATE.format(value=escaped)


class ScriptInjector:
    """Hands the fill script for a target to *write* (e.g. ``click.echo``)."""

    def __init__(self, write: Callable[[str], None]) -> None:
        self._write = write

    def inject(self, target: TargetHandle, value: str) -> None:
        self._write(render_fill_script(value))
