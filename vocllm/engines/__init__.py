"""Generation engine and model abstractions.

Architecture:
    - base.py: CausalModel contract (window + offset -> logits)
    - hf.py: transformers-backed CausalModel with a KV cache
    - loader.py: device, model, tokenizer and EOS resolution
    - penalty.py: repeat-penalty rescoring
    - sampling.py: seeded arg-max / temperature / top-p sampler
    - session.py: per-call params, state and result
    - generator.py: the prefill/decode loop
"""

from .base import CausalModel
from .sampling import LogitsSampler
from .penalty import repeat_window, apply_repeat_penalty
from .generator import FINISH_EOS, FINISH_LENGTH, GenerationEngine
from .session import GenerationParams, GenerationResult, GenerationSession

__all__ = [
    "CausalModel",
    "GenerationEngine",
    "GenerationParams",
    "GenerationResult",
    "GenerationSession",
    "LogitsSampler",
    "apply_repeat_penalty",
    "repeat_window",
    "FINISH_EOS",
    "FINISH_LENGTH",
]
