"""Stub CausalModel implementations with recorded calls."""

from __future__ import annotations

from collections.abc import Sequence

import torch

from vocllm.engines.base import CausalModel
from tests.config.tokenizer import TEST_VOCAB_SIZE


def one_hot_logits(token_id: int, vocab_size: int = TEST_VOCAB_SIZE, value: float = 10.0) -> torch.Tensor:
    logits = torch.zeros(vocab_size, dtype=torch.float32)
    logits[token_id] = value
    return logits


class ScriptedModel(CausalModel):
    """Model whose n-th forward call favors the n-th scripted token.

    Once the script runs out the last token keeps being favored.
    """

    def __init__(
        self,
        script: Sequence[int],
        *,
        vocab_size: int = TEST_VOCAB_SIZE,
        fail_on_call: int | None = None,
        eos_token_id: int | None = None,
    ):
        self.script = list(script)
        self.vocab_size = vocab_size
        self.fail_on_call = fail_on_call
        self.eos_token_id = eos_token_id
        self.calls: list[tuple[tuple[int, ...], int]] = []
        self.resets = 0

    @property
    def metadata_eos_token_id(self) -> int | None:
        return self.eos_token_id

    def reset(self) -> None:
        self.resets += 1

    def forward(self, token_window: Sequence[int], position_offset: int) -> torch.Tensor:
        index = len(self.calls)
        self.calls.append((tuple(token_window), position_offset))
        if self.fail_on_call is not None and index == self.fail_on_call:
            raise RuntimeError("backend exploded")
        target = self.script[min(index, len(self.script) - 1)]
        return one_hot_logits(target, self.vocab_size)


class FixedLogitsModel(CausalModel):
    """Model returning the same logits on every call."""

    def __init__(self, logits: torch.Tensor):
        self.logits = logits
        self.calls: list[tuple[tuple[int, ...], int]] = []

    def reset(self) -> None:
        self.calls.clear()

    def forward(self, token_window: Sequence[int], position_offset: int) -> torch.Tensor:
        self.calls.append((tuple(token_window), position_offset))
        return self.logits.clone()
