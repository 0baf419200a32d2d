"""Locate the passhash.toml that holds default hash options and store policies.

``PASSHASH_CONFIG`` names the file outright.  Otherwise the nearest
``passhash.toml`` in the working directory or one of its parents is used,
so a project checkout can pin its own defaults.  ``--config`` bypasses this
module entirely.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "passhash.toml"
CONFIG_ENV_VAR = "PASSHASH_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the passhash.toml that applies at *start* (default: cwd).

    An env var pointing at a missing file yields None rather than falling
    back to the walk, so a typo never silently picks up another file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        named = Path(env_path)
        return named if named.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
