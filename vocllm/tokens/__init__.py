"""Public API for token utilities."""

from .estimate import estimate_tokens
from .delta import DeltaDecoder
from .tokenizer import TextTokenizer

__all__ = [
    "DeltaDecoder",
    "estimate_tokens",
    "TextTokenizer",
]
