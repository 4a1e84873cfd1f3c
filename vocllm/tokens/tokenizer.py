"""Tokenizer access for the chat model.

Wraps a Hugging Face ``tokenizers.Tokenizer`` loaded from a tokenizer.json
file and converts library failures into the encode/decode errors the
generation loop reports.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

# Disable tokenizers parallelism before importing tokenizers (prevents fork warnings)
os.environ.setdefault("TOKENIZERS_PARALLELISM", "false")

from tokenizers import Tokenizer

from ..errors import ConfigurationError, DecodeError, EncodeError

logger = logging.getLogger(__name__)


class TextTokenizer:
    """Encode prompts to ids and decode generated ids back to text."""

    def __init__(self, tokenizer: Tokenizer):
        self.tok = tokenizer

    @classmethod
    def from_file(cls, path: str) -> "TextTokenizer":
        """Load a tokenizer.json file.

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed.
        """
        if not os.path.isfile(path):
            raise ConfigurationError(f"tokenizer file not found: {path}")
        try:
            tokenizer = Tokenizer.from_file(path)
        except Exception as exc:
            raise ConfigurationError(f"failed to load tokenizer from {path}: {exc}") from exc
        logger.debug("Loaded tokenizer from %s (vocab=%d)", path, tokenizer.get_vocab_size())
        return cls(tokenizer)

    def encode(self, text: str) -> list[int]:
        """Return token ids for text, including the tokenizer's special tokens.

        Raises:
            EncodeError: If the tokenizer rejects the input.
        """
        try:
            return list(self.tok.encode(text, add_special_tokens=True).ids)
        except Exception as exc:
            raise EncodeError(f"failed to encode prompt ({len(text or '')} chars): {exc}") from exc

    def decode(self, ids: Sequence[int], *, skip_special_tokens: bool = True) -> str:
        """Return the text for token ids.

        Raises:
            DecodeError: If the ids cannot be decoded.
        """
        try:
            return self.tok.decode(list(ids), skip_special_tokens=skip_special_tokens)
        except Exception as exc:
            raise DecodeError(f"failed to decode {len(ids)} tokens: {exc}") from exc


__all__ = ["TextTokenizer"]
