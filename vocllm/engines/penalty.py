"""Repeat-penalty logit rescoring.

Tokens that appear in the trailing window have their logits pushed toward
lower probability: a non-negative logit is divided by the penalty, a
negative logit is multiplied by it. Both moves reduce the token's share of
probability mass for penalties above 1.0.
"""

from __future__ import annotations

from collections.abc import Sequence

import torch


def repeat_window(tokens: Sequence[int], repeat_last_n: int) -> Sequence[int]:
    """Return the trailing repeat_last_n ids of tokens."""
    if repeat_last_n <= 0:
        return tokens[:0]
    return tokens[max(len(tokens) - repeat_last_n, 0):]


def apply_repeat_penalty(
    logits: torch.Tensor,
    penalty: float,
    context: Sequence[int],
) -> torch.Tensor:
    """Rescore logits for every distinct id in context.

    A penalty of exactly 1.0 returns the input tensor itself, unchanged.
    Otherwise a rescored copy is returned and the input is left untouched.

    Args:
        logits: 1-D logits over the vocabulary.
        penalty: Repeat penalty factor.
        context: Ids in the trailing window.

    Returns:
        The rescored logits.
    """
    if penalty == 1.0 or not context:
        return logits

    vocab_size = logits.shape[-1]
    ids = sorted({int(t) for t in context if 0 <= int(t) < vocab_size})
    if not ids:
        return logits

    index = torch.tensor(ids, dtype=torch.long, device=logits.device)
    rescored = logits.clone()
    selected = rescored.index_select(-1, index)
    penalized = torch.where(selected >= 0, selected / penalty, selected * penalty)
    rescored.index_copy_(-1, index, penalized)
    return rescored


__all__ = ["apply_repeat_penalty", "repeat_window"]
