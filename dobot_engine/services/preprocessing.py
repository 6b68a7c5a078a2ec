"""Message normalization applied before intent classification."""

from __future__ import annotations


def normalize_message(text: str) -> str:
    """Case-fold ``text`` for keyword matching.

    Only the case changes; whitespace is preserved so that extraction can
    still trim titles itself.
    """
    return text.lower()


__all__ = ["normalize_message"]
