"""Tag guessing — propose a site tag from the URL of the page being viewed."""

from __future__ import annotations

from enum import StrEnum
from urllib.parse import urlsplit

from passhash.domain.suffix import SuffixRules, split_host

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


class GuessMode(StrEnum):
    """How a tag is derived from the current URL."""

    NO = "no"
    FULL = "full"
    NAME = "name"
    DOMAIN = "domain"


def url_host(url: str) -> tuple[str, str]:
    """Return ``(hostname, host)`` for *url*.

    *hostname* is the lowercased name without port; *host* is what a browser
    reports as ``location.host``, with the port only when it differs from the
    scheme's default.  Internationalized names are returned in their ASCII
    (punycode) form, as browsers report them.  Both are empty when the URL has
    no usable host.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname or ""
    except ValueError:
        return "", ""
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return "", ""
    if not hostname:
        return "", ""
    host = f"[{hostname}]" if ":" in hostname else hostname
    try:
        port = parts.port
    except ValueError:
        port = None
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{port}"
    return hostname, host


def guess_tag(url: str, mode: GuessMode | str, rules: SuffixRules) -> str | None:
    """Guess a tag for *url*, or None if nothing can be guessed.

    Examples:
        >>> rules = SuffixRules.default()
        >>> guess_tag("https://www.example.co.uk/login", "domain", rules)
        'example.co.uk'
        >>> guess_tag("https://mail.google.com/", "name", rules)
        'google'
        >>> guess_tag("https://mail.google.com/", "no", rules) is None
        True
    """
    mode = GuessMode(mode)
    if mode is GuessMode.NO:
        return None
    hostname, host = url_host(url)
    if not host:
        return None
    if mode is GuessMode.FULL:
        return host

    prefix, suffix = split_host(hostname, rules)
    if prefix:
        if mode is GuessMode.NAME:
            return prefix[-1]
        return ".".join((prefix[-1], *suffix))
    if suffix:
        if mode is GuessMode.NAME:
            return suffix[0]
        return ".".join(suffix)
    return None
