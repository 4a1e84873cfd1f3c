"""Per-call generation failures.

Every failure raised while turning a prompt into a continuation is fatal
for that call. The exception records which stage failed so the caller can
log it before deciding whether to exit.
"""

from __future__ import annotations

from enum import Enum


class GenerationStage(str, Enum):
    """Stage of a generation call at which a failure occurred."""

    ENCODE = "encode"
    PREFILL = "prefill"
    DECODE = "decode"
    DECODE_OUTPUT = "decode_output"

    def __str__(self) -> str:
        return self.value


class GenerationError(Exception):
    """Fatal failure of a single generation call.

    Attributes:
        stage: Where in the call the failure happened.
        message: Human-readable description.
        history_updated: True when the user turn had already been recorded
            into chat history before the failure. Set by the runner.
    """

    default_stage: GenerationStage = GenerationStage.DECODE

    def __init__(self, message: str, *, stage: GenerationStage | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.history_updated = False

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class ModelForwardError(GenerationError):
    """Raised when the model backend fails to produce logits.

    No retry is attempted because the model's cached state may be
    inconsistent after a partial forward pass.
    """

    default_stage = GenerationStage.PREFILL


__all__ = ["GenerationStage", "GenerationError", "ModelForwardError"]
