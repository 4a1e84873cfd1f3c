"""Exception classification helpers for log labels."""

from __future__ import annotations

from .config import ConfigurationError
from .tokenizer import DecodeError, EncodeError
from .generation import GenerationError, ModelForwardError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (ConfigurationError, "configuration"),
    (EncodeError, "encode"),
    (DecodeError, "decode"),
    (ModelForwardError, "model_forward"),
    (GenerationError, "generation"),
    (KeyboardInterrupt, "interrupted"),
    (OSError, "io"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a short category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
