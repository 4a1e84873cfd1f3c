"""Tokenizer boundary exceptions."""

from __future__ import annotations

from .generation import GenerationError, GenerationStage


class EncodeError(GenerationError):
    """Raised when the tokenizer cannot encode a prompt."""

    default_stage = GenerationStage.ENCODE


class DecodeError(GenerationError):
    """Raised when generated token ids cannot be decoded back to text."""

    default_stage = GenerationStage.DECODE_OUTPUT


__all__ = ["EncodeError", "DecodeError"]
