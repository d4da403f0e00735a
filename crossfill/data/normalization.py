"""Shared helpers for word normalization."""

from __future__ import annotations


def normalize_word(text: str) -> str:
    """Return ``text`` stripped of surrounding whitespace and upper-cased.

    Matching against the grid is case-insensitive, so every word entering a
    domain goes through here first.
    """

    if not text:
        return ""
    return text.strip().upper()


__all__ = ["normalize_word"]
