"""Token sampling from logits.

LogitsSampler turns a logit vector into one token id:

Deterministic mode:
    temperature None or below GREEDY_TEMPERATURE_EPS selects the arg-max id.

Stochastic mode:
    logits are divided by temperature and softmaxed. When top_p is in
    (0, 1), only the smallest highest-probability set whose cumulative mass
    reaches top_p is kept (nucleus sampling). The id is drawn with
    torch.multinomial from a torch.Generator seeded once at construction,
    so a fixed seed with identical logits and parameters yields an
    identical id stream.
"""

from __future__ import annotations

import torch

# Temperatures below this sample by arg-max
GREEDY_TEMPERATURE_EPS = 1e-7


def _top_p_filter(probs: torch.Tensor, top_p: float) -> torch.Tensor:
    """Zero out tokens outside the nucleus and renormalize."""
    sorted_probs, sorted_idx = torch.sort(probs, descending=True)
    cumulative = torch.cumsum(sorted_probs, dim=-1)
    # Keep a token while the mass accumulated before it is still below top_p
    keep = (cumulative - sorted_probs) < top_p
    keep[0] = True
    filtered = torch.zeros_like(probs)
    filtered[sorted_idx[keep]] = sorted_probs[keep]
    return filtered / filtered.sum()


class LogitsSampler:
    """Seeded sampler over 1-D logits."""

    def __init__(self, seed: int, temperature: float | None, top_p: float | None = None):
        self.seed = seed
        self.temperature = temperature
        self.top_p = top_p
        self._generator = torch.Generator(device="cpu")
        self._generator.manual_seed(seed)

    @property
    def is_greedy(self) -> bool:
        return self.temperature is None or self.temperature < GREEDY_TEMPERATURE_EPS

    def sample(self, logits: torch.Tensor) -> int:
        """Return one token id sampled from logits."""
        logits = logits.detach().to(device="cpu", dtype=torch.float32).reshape(-1)
        if self.is_greedy:
            return int(torch.argmax(logits).item())

        probs = torch.softmax(logits / self.temperature, dim=-1)
        if self.top_p is not None and 0.0 < self.top_p < 1.0:
            probs = _top_p_filter(probs, self.top_p)
        return int(torch.multinomial(probs, num_samples=1, generator=self._generator).item())


__all__ = ["GREEDY_TEMPERATURE_EPS", "LogitsSampler"]
