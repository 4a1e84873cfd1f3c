"""Centralized exception classes for the session driver.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - config.py: Faults that prevent a session from starting
    - generation.py: Per-call fatal failures and their stage labels
    - tokenizer.py: Tokenizer boundary failures (encode/decode)
    - classify.py: Exception-to-label mapping for log lines
"""

from .config import ConfigurationError
from .classify import classify_error
from .tokenizer import DecodeError, EncodeError
from .generation import GenerationError, GenerationStage, ModelForwardError

__all__ = [
    # Startup
    "ConfigurationError",
    # Generation
    "GenerationError",
    "GenerationStage",
    "ModelForwardError",
    # Tokenizer
    "EncodeError",
    "DecodeError",
    # Classification
    "classify_error",
]
