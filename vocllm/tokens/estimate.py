"""Cheap token-count estimate used for history budgeting.

The estimate is an approximation of tokenizer output, not an exact count:
roughly four tokens for every three whitespace-separated words.
"""

from __future__ import annotations


def estimate_tokens(text: str) -> int:
    """Estimate the token count of text as word count * 4 // 3."""
    if not text:
        return 0
    return (len(text.split()) * 4) // 3


__all__ = ["estimate_tokens"]
