"""Transformers-backed causal model with an incremental KV cache.

HFCausalModel adapts a Hugging Face causal LM to the CausalModel contract.
The cache returned by each forward pass is kept and handed back on the next
one, so decode steps forward a single id instead of the whole sequence.

Offsets are checked against the number of cached positions; a caller that
skips or repeats positions gets a ModelForwardError instead of silently
corrupted state.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Sequence

import torch
from transformers import PreTrainedModel

from ..errors import ModelForwardError
from .base import CausalModel

logger = logging.getLogger(__name__)


class HFCausalModel(CausalModel):
    """CausalModel implementation over a transformers PreTrainedModel.

    Attributes:
        device: Device holding the weights and the cache.
        position: Number of positions consumed since the last reset.
    """

    def __init__(self, model: PreTrainedModel, device: torch.device):
        self._model = model.eval()
        self.device = device
        self._past: Any = None
        self.position = 0

    @property
    def metadata_eos_token_id(self) -> int | None:
        generation_config = getattr(self._model, "generation_config", None)
        candidates = (
            getattr(generation_config, "eos_token_id", None),
            getattr(self._model.config, "eos_token_id", None),
        )
        for value in candidates:
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            if value is not None:
                return int(value)
        return None

    def reset(self) -> None:
        self._past = None
        self.position = 0

    def forward(self, token_window: Sequence[int], position_offset: int) -> torch.Tensor:
        if position_offset != self.position:
            raise ModelForwardError(
                f"position offset {position_offset} does not follow the {self.position} cached positions"
            )
        if not token_window:
            raise ModelForwardError("empty token window")

        input_ids = torch.tensor([list(token_window)], dtype=torch.long, device=self.device)
        try:
            with torch.inference_mode():
                outputs = self._model(
                    input_ids=input_ids,
                    past_key_values=self._past,
                    use_cache=True,
                )
        except (RuntimeError, ValueError, IndexError) as exc:
            raise ModelForwardError(f"transformers forward failed: {exc}") from exc

        self._past = outputs.past_key_values
        self.position += len(token_window)
        return outputs.logits[0, -1, :].to(torch.float32)


__all__ = ["HFCausalModel"]
