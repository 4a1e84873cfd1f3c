"""Sampling defaults for the generation loop.

These control the pseudo-random stream and the logit rescoring applied at
every decode step.

Sampling Parameters:
    seed: Fixes the pseudo-random stream. Identical seed, prompt and model
        produce identical output.

    temperature: Scales logits before sampling. 0 (or below) switches to
        deterministic arg-max decoding.

    top_p (nucleus sampling): Restricts sampling to the smallest set of
        tokens whose cumulative probability reaches top_p. Unset disables it.

    repeat_penalty: Penalty for tokens inside the trailing window
        (1.0 = no penalty). Values around 1.1 are typical.

    repeat_last_n: Size of the trailing token window the penalty looks at.

All values can be overridden from the command line.
"""

import os

from ..helpers.env import env_optional_float


GEN_SEED = int(os.getenv("GEN_SEED", "42"))
GEN_TEMPERATURE = float(os.getenv("GEN_TEMPERATURE", "0.7"))
GEN_TOP_P = env_optional_float("GEN_TOP_P")
GEN_REPEAT_PENALTY = float(os.getenv("GEN_REPEAT_PENALTY", "1.1"))
GEN_REPEAT_LAST_N = int(os.getenv("GEN_REPEAT_LAST_N", "64"))


__all__ = [
    "GEN_SEED",
    "GEN_TEMPERATURE",
    "GEN_TOP_P",
    "GEN_REPEAT_PENALTY",
    "GEN_REPEAT_LAST_N",
]
