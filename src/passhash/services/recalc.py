"""Recalculation — derive the displayed secret from tag, key and parameters."""

from __future__ import annotations

from passhash.config.models import HashParams
from passhash.services.contracts import HashFunction


def recalculate(tag: str, key: str, params: HashParams, hash_fn: HashFunction) -> str:
    """Return the derived secret, or an empty string while input is incomplete.

    Missing input is a normal state: nothing is computed and nothing raised.
    """
    if not tag or not key:
        return ""
    return hash_fn(
        tag,
        key,
        params.length,
        params.digit_count,
        params.punctuation,
        params.mixed_case,
        params.no_special,
        params.digits_only,
    )
