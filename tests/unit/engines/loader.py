"""Unit tests for device, tokenizer path and EOS resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
import torch

import vocllm.engines.loader as loader
from vocllm.errors import ConfigurationError


def test_eos_from_metadata_wins_over_override() -> None:
    assert loader.resolve_eos_token_id(2, 99) == 2


def test_eos_override_used_when_metadata_missing() -> None:
    assert loader.resolve_eos_token_id(None, 99) == 99


def test_missing_eos_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        loader.resolve_eos_token_id(None, None)


def test_tokenizer_path_defaults_next_to_model(tmp_path: Path) -> None:
    model_file = tmp_path / "model.Q4_K_M.gguf"
    model_file.write_bytes(b"")

    assert loader.resolve_tokenizer_path(str(model_file)) == str(tmp_path / "tokenizer.json")
    assert loader.resolve_tokenizer_path(str(tmp_path)) == str(tmp_path / "tokenizer.json")
    assert loader.resolve_tokenizer_path(str(model_file), "/x/tok.json") == "/x/tok.json"


def test_select_device_honors_cpu_flag() -> None:
    assert loader.select_device(True).type == "cpu"


def test_select_device_falls_back_without_cuda(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(torch.cuda, "is_available", lambda: False)
    assert loader.select_device(False).type == "cpu"


def test_load_model_rejects_unknown_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        loader.load_model(str(tmp_path / "missing.bin"), torch.device("cpu"))


def test_load_tokenizer_missing_file_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        loader.load_tokenizer(str(tmp_path))
