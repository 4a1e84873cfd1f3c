"""Incremental detokenization for streamed output.

Decoding the whole continuation after every sampled id costs quadratic
work over a long reply. DeltaDecoder instead keeps two offsets into the
growing id list:

    prefix_offset   start of the window re-decoded for context
    read_offset     end of the ids whose text has already been emitted

Each step decodes ids[prefix_offset:read_offset] and ids[prefix_offset:]
and emits the difference. The context window keeps tokenizers that merge
whitespace or byte pieces across token boundaries correct. Text ending in
U+FFFD is a partial multi-byte sequence and is held back until the next
id completes it; ``flush`` emits whatever is still held when generation
stops.
"""

from __future__ import annotations

from collections.abc import Sequence

from .tokenizer import TextTokenizer

REPLACEMENT_CHAR = "\ufffd"


class DeltaDecoder:
    """Turn a growing id sequence into text deltas."""

    def __init__(self, tokenizer: TextTokenizer):
        self.tokenizer = tokenizer
        self.prefix_offset = 0
        self.read_offset = 0

    def _pending_text(self, ids: Sequence[int]) -> tuple[str, str]:
        prefix_text = self.tokenizer.decode(ids[self.prefix_offset:self.read_offset])
        full_text = self.tokenizer.decode(ids[self.prefix_offset:])
        return prefix_text, full_text

    def step(self, ids: Sequence[int]) -> str:
        """Return the text added by ids beyond read_offset, or "" while held back.

        Raises:
            DecodeError: If the tokenizer cannot decode the window.
        """
        if len(ids) <= self.read_offset:
            return ""
        prefix_text, full_text = self._pending_text(ids)
        if len(full_text) <= len(prefix_text) or full_text.endswith(REPLACEMENT_CHAR):
            return ""
        self.prefix_offset = self.read_offset
        self.read_offset = len(ids)
        return full_text[len(prefix_text):]

    def flush(self, ids: Sequence[int]) -> str:
        """Return any held-back text, partial characters included."""
        if len(ids) <= self.read_offset:
            return ""
        prefix_text, full_text = self._pending_text(ids)
        self.prefix_offset = self.read_offset
        self.read_offset = len(ids)
        return full_text[len(prefix_text):]


__all__ = ["DeltaDecoder"]
