"""Shared stubs for unit tests."""

__all__ = [
    "model",
    "tokenizer",
]
