"""Abstract model capability used by the generation loop.

The model is an opaque stateful object: given a window of token ids and
the position offset of the first id in that window, it returns next-token
logits for the position after the window. It remembers everything that was
forwarded at lower offsets, so callers must keep offsets monotonic and must
not skip positions.

One model instance belongs to one GenerationEngine. Its cached state is not
safe to share between callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import torch


class CausalModel(ABC):
    """Abstract base class for next-token logit producers."""

    @abstractmethod
    def forward(self, token_window: Sequence[int], position_offset: int) -> torch.Tensor:
        """Forward a window of ids and return next-token logits.

        Args:
            token_window: Ids to feed, starting at position_offset.
            position_offset: Number of positions already consumed.

        Returns:
            1-D float32 tensor of logits over the vocabulary.

        Raises:
            ModelForwardError: If the backend fails.
        """

    @abstractmethod
    def reset(self) -> None:
        """Drop all cached state so the next forward starts at offset 0."""

    @property
    def metadata_eos_token_id(self) -> int | None:
        """EOS id declared by the model's own metadata, if any."""
        return None


__all__ = ["CausalModel"]
