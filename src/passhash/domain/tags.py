"""Tag domain logic — the ``base[:N]`` version grammar and bumping.

A tag is ``Base [":" Version]`` where Version is one or more ASCII digits
after the last colon.  Any string is a valid tag: without a numeric tail the
whole text is the base.

INVARIANT: ``str(parse_tag(text)) == text`` for every string.
"""

from __future__ import annotations

from dataclasses import dataclass

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class ParsedTag:
    """A tag split into its base and optional version.

    The version digits are kept as written so re-serializing is exact
    (``site:07`` stays ``site:07``).
    """

    base: str
    digits: str | None = None

    @classmethod
    def of(cls, base: str, version: int | None = None) -> ParsedTag:
        if version is None:
            return cls(base)
        if version < 0:
            msg = f"Tag version must be non-negative, got {version}"
            raise ValueError(msg)
        return cls(base, str(version))

    @property
    def version(self) -> int | None:
        if self.digits is None:
            return None
        return int(self.digits)

    @property
    def is_versioned(self) -> bool:
        return self.digits is not None

    def __str__(self) -> str:
        if self.digits is None:
            return self.base
        return f"{self.base}:{self.digits}"


def parse_tag(text: str) -> ParsedTag:
    """Split *text* on its last colon when a digit run follows it.

    Examples:
        >>> parse_tag("site:4")
        ParsedTag(base='site', digits='4')
        >>> parse_tag("a:b:12").base
        'a:b'
        >>> parse_tag("site:").version is None
        True
    """
    base, sep, tail = text.rpartition(":")
    if sep and tail and all(ch in _DIGITS for ch in tail):
        return ParsedTag(base, tail)
    return ParsedTag(text)


def format_tag(base: str, version: int | None = None) -> str:
    """Serialize *base* and *version* back into tag text."""
    return str(ParsedTag.of(base, version))


def bump_tag(text: str) -> str:
    """Return the next version of *text*.

    ``site:4`` becomes ``site:5``; an unversioned ``site`` becomes ``site:1``.
    An empty tag is returned unchanged.
    """
    if not text:
        return text
    parsed = parse_tag(text)
    if parsed.version is None:
        return f"{text}:1"
    return format_tag(parsed.base, parsed.version + 1)
