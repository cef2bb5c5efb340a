# utilities.py
from __future__ import annotations

import string

# ────────────────────────────────────────────────────────────────────────
#  0. Alphabet & index arithmetic
# ────────────────────────────────────────────────────────────────────────

ALPHA26 = string.ascii_uppercase
SIZE = len(ALPHA26)


def is_letter(ch: str) -> bool:
    """True for a single ASCII letter (either case)."""
    return len(ch) == 1 and ch in string.ascii_letters


def is_key(text: str, length: int = 3) -> bool:
    """True when *text* is exactly *length* letters, e.g. a window key."""
    return len(text) == length and all(is_letter(ch) for ch in text)


def to_index(letter: str) -> int:
    """'A' → 0 … 'Z' → 25 (case-insensitive)."""
    return ALPHA26.index(letter.upper())


def to_letter(index: int) -> str:
    return ALPHA26[index % SIZE]


def advance(index: int, steps: int = 1) -> int:
    """Move an alphabet index forward, wrapping at Z."""
    return (index + steps) % SIZE


def retreat(index: int, steps: int = 1) -> int:
    return (index - steps) % SIZE


# ────────────────────────────────────────────────────────────────────────
#  1. String helpers
# ────────────────────────────────────────────────────────────────────────


def caesar_shift(text: str, shift: int) -> str:
    """Shift every letter of *text* by *shift*; other symbols stay put."""
    if shift % SIZE == 0:
        return text
    return "".join(
        to_letter(advance(to_index(ch), shift)) if is_letter(ch) else ch
        for ch in text
    )


def rotate_left(text: str, n: int) -> str:
    n %= len(text) or 1
    return text[n:] + text[:n]


def format_groups(text: str, size: int = 5) -> str:
    """Split *text* into blocks of *size* separated by single spaces."""
    if not text:
        return text
    return " ".join(text[i : i + size] for i in range(0, len(text), size))


def preprocess_message(msg: str) -> str:
    """Upper-case and drop everything that is not A–Z."""
    return "".join(ch for ch in msg.upper() if ch in ALPHA26)


__all__ = [
    "ALPHA26",
    "SIZE",
    "advance",
    "caesar_shift",
    "format_groups",
    "is_key",
    "is_letter",
    "preprocess_message",
    "retreat",
    "rotate_left",
    "to_index",
    "to_letter",
]
