"""Model, tokenizer and device loading for a local chat session.

Models load through transformers from either a checkpoint directory or a
single GGUF file (read with ``gguf_file=`` from its parent directory). The
tokenizer comes from a tokenizer.json, by default the one sitting next to
the model.

EOS resolution:
    The EOS id declared in the model's own metadata wins. An explicit
    override is used only when the metadata declares none. With neither,
    no session can start.
"""

from __future__ import annotations

import time
import logging
from pathlib import Path

import torch
from transformers import AutoModelForCausalLM

from ..errors import ConfigurationError
from ..tokens.tokenizer import TextTokenizer
from .hf import HFCausalModel

logger = logging.getLogger(__name__)

TOKENIZER_FILENAME = "tokenizer.json"
GGUF_SUFFIX = ".gguf"


def select_device(cpu: bool) -> torch.device:
    """Return the CPU when requested, else CUDA device 0 if available."""
    if cpu:
        return torch.device("cpu")
    if torch.cuda.is_available():
        return torch.device("cuda", 0)
    logger.warning("CUDA is not available. Falling back to CPU")
    return torch.device("cpu")


def load_model(model_path: str, device: torch.device) -> HFCausalModel:
    """Load a causal LM from a checkpoint directory or GGUF file.

    Raises:
        ConfigurationError: If the path does not exist or loading fails.
    """
    path = Path(model_path)
    dtype = torch.float16 if device.type == "cuda" else torch.float32
    if path.is_file() and path.suffix.lower() == GGUF_SUFFIX:
        source, kwargs = str(path.parent), {"gguf_file": path.name}
    elif path.is_dir():
        source, kwargs = str(path), {}
    else:
        raise ConfigurationError(f"model path is neither a directory nor a .gguf file: {model_path}")

    logger.debug("Loading model %s", model_path)
    load_start = time.perf_counter()
    try:
        model = AutoModelForCausalLM.from_pretrained(source, dtype=dtype, **kwargs)
        model.to(device)
    except (OSError, ValueError, ImportError, RuntimeError) as exc:
        raise ConfigurationError(f"failed to load model from {model_path}: {exc}") from exc

    n_tensors = len(model.state_dict())
    total_bytes = sum(p.numel() * p.element_size() for p in model.parameters())
    logger.info(
        "Successfully loaded model: %s [%d tensors, %d bytes] in %.1fs",
        model_path,
        n_tensors,
        total_bytes,
        time.perf_counter() - load_start,
    )
    return HFCausalModel(model, device)


def resolve_tokenizer_path(model_path: str, tokenizer_json: str | None = None) -> str:
    """Return the tokenizer.json path to use for model_path."""
    if tokenizer_json:
        return tokenizer_json
    path = Path(model_path)
    directory = path if path.is_dir() else path.parent
    return str(directory / TOKENIZER_FILENAME)


def load_tokenizer(model_path: str, tokenizer_json: str | None = None) -> TextTokenizer:
    return TextTokenizer.from_file(resolve_tokenizer_path(model_path, tokenizer_json))


def resolve_eos_token_id(metadata_eos: int | None, override: int | None) -> int:
    """Pick the EOS id, preferring model metadata over the override.

    Raises:
        ConfigurationError: If neither source provides an id.
    """
    if metadata_eos is not None:
        if override is not None and override != metadata_eos:
            logger.info("Model metadata defines EOS %d; ignoring override %d", metadata_eos, override)
        return metadata_eos
    if override is not None:
        return override
    raise ConfigurationError(
        "model metadata does not define an EOS token and none was supplied via --eos-token"
    )


__all__ = [
    "select_device",
    "load_model",
    "load_tokenizer",
    "resolve_tokenizer_path",
    "resolve_eos_token_id",
]
