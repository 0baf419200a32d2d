"""Public-suffix aware host splitting.

A host is split into ``(prefix, suffix)`` where *suffix* holds the labels of
the longest matching public suffix and *prefix* everything before it.  Rules
use the public suffix list text format: one rule per line, ``//`` comments,
``*.`` wildcards and ``!`` exceptions.

INVARIANT: ``".".join(prefix + suffix) == host`` for every host.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

# Small built-in ruleset used when no list file is configured.
DEFAULT_RULES = """\
// generic
com
net
org
edu
gov
info
io
dev
app
// United Kingdom
uk
co.uk
org.uk
ac.uk
gov.uk
// Japan
jp
co.jp
ne.jp
// Australia
au
com.au
net.au
// assorted
de
fr
ca
github.io
*.ck
!www.ck
"""


class SplitResult(NamedTuple):
    """Host labels before and within the public suffix, left to right."""

    prefix: tuple[str, ...]
    suffix: tuple[str, ...]


@dataclass(frozen=True)
class SuffixRules:
    """Immutable public-suffix ruleset.

    Attributes:
        exact: Plain rules, e.g. ``co.uk``.
        wildcards: Parents of wildcard rules (``*.ck`` is stored as ``ck``).
        exceptions: Exception rules without the ``!`` (``www.ck``).
    """

    exact: frozenset[str] = frozenset()
    wildcards: frozenset[str] = frozenset()
    exceptions: frozenset[str] = frozenset()

    @classmethod
    def from_text(cls, text: str) -> SuffixRules:
        """Parse rules in public suffix list format."""
        exact: set[str] = set()
        wildcards: set[str] = set()
        exceptions: set[str] = set()
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("//"):
                continue
            rule = line.split()[0].lower()
            if rule.startswith("!"):
                exceptions.add(rule[1:])
            elif rule.startswith("*."):
                wildcards.add(rule[2:])
            else:
                exact.add(rule)
        return cls(frozenset(exact), frozenset(wildcards), frozenset(exceptions))

    @classmethod
    def from_file(cls, path: Path) -> SuffixRules:
        return cls.from_text(path.read_text(encoding="utf-8"))

    @classmethod
    def default(cls) -> SuffixRules:
        return cls.from_text(DEFAULT_RULES)

    def suffix_length(self, labels: list[str]) -> int:
        """Return how many trailing *labels* form the longest matching suffix.

        Returns 0 when no rule matches.
        """
        lowered = [label.lower() for label in labels]
        count = len(lowered)
        # Longest candidate first; an exception always outranks its wildcard.
        for i in range(count):
            tail = ".".join(lowered[i:])
            if tail in self.exceptions:
                return count - i - 1
            if tail in self.exact:
                return count - i
            if i + 1 < count and ".".join(lowered[i + 1 :]) in self.wildcards:
                return count - i
        return 0


def split_host(host: str, rules: SuffixRules) -> SplitResult:
    """Split *host* into prefix and public-suffix labels.

    When nothing matches, or the host is itself a public suffix, the prefix is
    empty and the suffix holds every label.

    Examples:
        >>> split_host("www.example.co.uk", SuffixRules.default())
        SplitResult(prefix=('www', 'example'), suffix=('co', 'uk'))
        >>> split_host("localhost", SuffixRules.default())
        SplitResult(prefix=(), suffix=('localhost',))
    """
    if not host:
        return SplitResult((), ())
    labels = host.split(".")
    matched = rules.suffix_length(labels)
    if matched == 0 or matched >= len(labels):
        return SplitResult((), tuple(labels))
    cut = len(labels) - matched
    return SplitResult(tuple(labels[:cut]), tuple(labels[cut:]))
