"""Per-call generation state.

GenerationParams:
    Sampler and loop settings for one call (seed, temperature, top_p,
    repeat penalty and window, EOS id, optional max-new-tokens cap).

GenerationSession:
    The growing token sequence and the cursor into it. The sequence starts
    as the encoded prompt and grows by one id per decode step. ``cursor``
    counts positions the model has already consumed. The session lives for
    one call and never touches chat history.

GenerationResult:
    What a finished call returns: the decoded continuation plus the token
    bookkeeping behind it.
"""

from __future__ import annotations

from dataclasses import field, dataclass

from ..config.generation import GEN_MAX_NEW_TOKENS
from ..config.sampling import (
    GEN_SEED,
    GEN_TEMPERATURE,
    GEN_TOP_P,
    GEN_REPEAT_PENALTY,
    GEN_REPEAT_LAST_N,
)


@dataclass(frozen=True, slots=True)
class GenerationParams:
    """Configuration for one generation call."""

    eos_token_id: int
    seed: int = GEN_SEED
    temperature: float | None = GEN_TEMPERATURE
    top_p: float | None = GEN_TOP_P
    repeat_penalty: float = GEN_REPEAT_PENALTY
    repeat_last_n: int = GEN_REPEAT_LAST_N
    max_new_tokens: int | None = GEN_MAX_NEW_TOKENS


@dataclass(slots=True)
class GenerationSession:
    """Token sequence and cursor for a single call."""

    params: GenerationParams
    tokens: list[int]
    prompt_len: int = 0
    cursor: int = 0
    finish_reason: str | None = None

    @classmethod
    def start(cls, prompt_ids: list[int], params: GenerationParams) -> "GenerationSession":
        return cls(params=params, tokens=list(prompt_ids), prompt_len=len(prompt_ids))

    @property
    def generated(self) -> int:
        return len(self.tokens) - self.prompt_len

    @property
    def generated_ids(self) -> list[int]:
        return self.tokens[self.prompt_len:]

    def pending(self) -> list[int]:
        """Ids appended since the model last consumed the sequence."""
        return self.tokens[self.cursor:]

    def append(self, token_id: int) -> None:
        self.tokens.append(token_id)

    def reached_limit(self) -> bool:
        limit = self.params.max_new_tokens
        return limit is not None and self.generated >= limit


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a finished generation call."""

    text: str
    token_ids: list[int] = field(default_factory=list)
    prompt_tokens: int = 0
    finish_reason: str = "eos"
    elapsed_s: float = 0.0

    @property
    def completion_tokens(self) -> int:
        return len(self.token_ids)


__all__ = ["GenerationParams", "GenerationSession", "GenerationResult"]
