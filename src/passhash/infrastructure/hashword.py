"""Reference hash-word generator (Password Hasher algorithm).

The password is the unpadded base64 HMAC-SHA1 of the site tag keyed by the
master key.  A seed (sum of the base64 character codes) then picks positions
where a digit, punctuation, upper and lower case letter are injected when
required, special characters are optionally replaced by letters, or the
whole word is folded to digits.  The result is truncated to *length*.

Each input string is hashed from the low byte of its UTF-16 code units,
which keeps output identical to the browser extensions using this scheme.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

_RESERVED = 4
_ALNUM = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")
_DIGITS = frozenset("0123456789")


def _low_bytes(text: str) -> bytes:
    units = text.encode("utf-16-le")
    return bytes(units[i] for i in range(0, len(units), 2))


def _b64_hmac_sha1(key: str, data: str) -> str:
    digest = hmac.new(_low_bytes(key), _low_bytes(data), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii").rstrip("=")


def _inject(word: str, offset: int, seed: int, length: int, start: int, span: int) -> str:
    """Place one character from ``[start, start + span)`` unless already present.

    Positions ``seed % length`` onward hold a reserved block of four slots,
    one per character class; the presence check skips that block.
    """
    pos0 = seed % length
    pos = (pos0 + offset) % length
    for i in range(length - _RESERVED):
        code = ord(word[(pos0 + _RESERVED + i) % length])
        if start <= code < start + span:
            return word
    injected = chr((seed + ord(word[pos])) % span + start)
    return word[:pos] + injected + word[pos + 1 :]


def _remove_special(word: str, seed: int, length: int) -> str:
    out: list[str] = []
    i = 0
    while i < length:
        j = next((n for n, ch in enumerate(word[i:]) if ch not in _ALNUM), -1)
        if j < 0:
            break
        out.append(word[i : i + j])
        out.append(chr((seed + i) % 26 + 65))
        i += j + 1
    out.append(word[i:])
    return "".join(out)


def _to_digits(word: str, seed: int, length: int) -> str:
    out: list[str] = []
    i = 0
    while i < length:
        j = next((n for n, ch in enumerate(word[i:]) if ch not in _DIGITS), -1)
        if j < 0:
            break
        out.append(word[i : i + j])
        out.append(chr((seed + ord(word[i])) % 10 + 48))
        i += j + 1
    out.append(word[i:])
    return "".join(out)


def generate_hash_word(
    tag: str,
    key: str,
    length: int,
    digit_count: int,
    punctuation: bool,
    mixed_case: bool,
    no_special: bool,
    digits_only: bool,
) -> str:
    """Derive the site password for *tag* from the master *key*.

    Args:
        length: Output size, 4 to 26 characters.
        digit_count: Require a digit when positive.
        punctuation: Require a punctuation character (ignored with *no_special*).
        mixed_case: Require both an upper and a lower case letter.
        no_special: Replace every non-alphanumeric character with a letter.
        digits_only: Produce a numeric PIN; overrides the other options.
    """
    if not 4 <= length <= 26:
        msg = f"length must be between 4 and 26, got {length}"
        raise ValueError(msg)
    word = _b64_hmac_sha1(key, tag)
    seed = sum(ord(ch) for ch in word)

    if digits_only:
        word = _to_digits(word, seed, length)
    else:
        if digit_count > 0:
            word = _inject(word, 0, seed, length, 48, 10)
        if punctuation and not no_special:
            word = _inject(word, 1, seed, length, 33, 15)
        if mixed_case:
            word = _inject(word, 2, seed, length, 65, 26)
            word = _inject(word, 3, seed, length, 97, 26)
        if no_special:
            word = _remove_special(word, seed, length)
    return word[:length]
