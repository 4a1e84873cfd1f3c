"""Unit tests for the prefill/decode generation loop."""

from __future__ import annotations

import pytest
import torch

from vocllm.engines.generator import FINISH_EOS, FINISH_LENGTH, GenerationEngine
from vocllm.engines.session import GenerationParams, GenerationSession
from vocllm.errors import EncodeError, GenerationStage, ModelForwardError
from tests.config.tokenizer import TEST_EOS_ID, TEST_TOKENIZER_VOCAB as VOCAB, TEST_VOCAB_SIZE
from tests.helpers.model import FixedLogitsModel, ScriptedModel
from tests.helpers.tokenizer import ByteTokenizer, build_word_tokenizer


def _params(**overrides) -> GenerationParams:
    settings = {
        "eos_token_id": TEST_EOS_ID,
        "seed": 42,
        "temperature": 0.0,
        "top_p": None,
        "repeat_penalty": 1.0,
        "repeat_last_n": 64,
        "max_new_tokens": None,
    }
    settings.update(overrides)
    return GenerationParams(**settings)


def _engine(model) -> GenerationEngine:
    return GenerationEngine(model, build_word_tokenizer())


def test_eos_on_fifth_decode_step_yields_five_tokens() -> None:
    script = [VOCAB["cat"], VOCAB["sat"], VOCAB["on"], VOCAB["mat"], TEST_EOS_ID]
    model = ScriptedModel(script)

    result = _engine(model).generate("the dog", _params())

    assert result.token_ids == script
    assert result.completion_tokens == 5
    assert result.finish_reason == FINISH_EOS
    assert result.text == "cat sat on mat"
    assert result.prompt_tokens == 2


def test_prefill_once_then_single_token_calls_at_increasing_offsets() -> None:
    script = [VOCAB["cat"], VOCAB["sat"], VOCAB["on"], TEST_EOS_ID]
    model = ScriptedModel(script)

    _engine(model).generate("the cat sat", _params())

    prompt_ids = (VOCAB["the"], VOCAB["cat"], VOCAB["sat"])
    assert model.calls == [
        (prompt_ids, 0),
        ((VOCAB["cat"],), 3),
        ((VOCAB["sat"],), 4),
        ((VOCAB["on"],), 5),
    ]
    assert model.resets == 1


def test_continuation_excludes_prompt_text() -> None:
    model = ScriptedModel([VOCAB["hello"], TEST_EOS_ID])

    result = _engine(model).generate("hello world", _params())

    assert result.text == "hello"


def test_max_new_tokens_caps_generation_without_eos() -> None:
    model = ScriptedModel([VOCAB["a"]])

    result = _engine(model).generate("the", _params(max_new_tokens=3))

    assert result.token_ids == [VOCAB["a"]] * 3
    assert result.finish_reason == FINISH_LENGTH
    assert result.text == "a a a"


def test_repeat_penalty_changes_greedy_choice_only_when_enabled() -> None:
    logits = torch.zeros(TEST_VOCAB_SIZE)
    logits[VOCAB["cat"]] = 1.0
    logits[VOCAB["dog"]] = 0.9

    plain = _engine(FixedLogitsModel(logits)).generate("the cat", _params(max_new_tokens=1))
    penalized = _engine(FixedLogitsModel(logits)).generate(
        "the cat", _params(max_new_tokens=1, repeat_penalty=2.0)
    )

    assert plain.token_ids == [VOCAB["cat"]]
    assert penalized.token_ids == [VOCAB["dog"]]


def test_repeat_window_only_covers_last_n_tokens() -> None:
    logits = torch.zeros(TEST_VOCAB_SIZE)
    logits[VOCAB["cat"]] = 1.0
    logits[VOCAB["dog"]] = 0.9

    result = _engine(FixedLogitsModel(logits)).generate(
        "the cat sat on", _params(max_new_tokens=1, repeat_penalty=2.0, repeat_last_n=2)
    )

    assert result.token_ids == [VOCAB["cat"]]


def test_fixed_seed_produces_identical_sequences() -> None:
    logits = torch.linspace(0.0, 2.0, steps=TEST_VOCAB_SIZE)
    logits[TEST_EOS_ID] = -50.0
    params = _params(temperature=0.9, top_p=0.95, seed=7, max_new_tokens=12, repeat_penalty=1.1)

    first = _engine(FixedLogitsModel(logits)).generate("hello world", params)
    second = _engine(FixedLogitsModel(logits)).generate("hello world", params)

    assert first.token_ids == second.token_ids
    assert len(first.token_ids) == 12


def test_on_text_receives_incremental_deltas() -> None:
    script = [VOCAB["hello"], VOCAB["world"], TEST_EOS_ID]
    chunks: list[str] = []

    result = _engine(ScriptedModel(script)).generate("the", _params(), on_text=chunks.append)

    assert "".join(chunks) == result.text == "hello world"
    assert len(chunks) == 2


def test_prefill_failure_raises_model_forward_error() -> None:
    model = ScriptedModel([VOCAB["cat"]], fail_on_call=0)

    with pytest.raises(ModelForwardError) as excinfo:
        _engine(model).generate("the", _params())

    assert excinfo.value.stage is GenerationStage.PREFILL
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_decode_failure_is_tagged_with_decode_stage() -> None:
    model = ScriptedModel([VOCAB["cat"], VOCAB["sat"]], fail_on_call=2)

    with pytest.raises(ModelForwardError) as excinfo:
        _engine(model).generate("the", _params())

    assert excinfo.value.stage is GenerationStage.DECODE


def test_empty_prompt_encoding_is_an_encode_error() -> None:
    model = ScriptedModel([TEST_EOS_ID])

    with pytest.raises(EncodeError):
        _engine(model).generate("", _params())
    assert model.calls == []


def test_stream_advances_session_cursor() -> None:
    model = ScriptedModel([VOCAB["cat"], TEST_EOS_ID])
    session = GenerationSession.start([VOCAB["the"]], _params())

    ids = list(_engine(model).stream(session))

    assert ids == [VOCAB["cat"], TEST_EOS_ID]
    assert session.cursor == 2
    assert session.tokens == [VOCAB["the"], VOCAB["cat"], TEST_EOS_ID]
    assert session.finish_reason == FINISH_EOS


def test_streamed_partial_character_is_flushed_at_the_cap() -> None:
    script = [0x61, 0xC3, 0xA9, 0xC3]
    engine = GenerationEngine(ScriptedModel(script, vocab_size=256), ByteTokenizer())
    chunks: list[str] = []

    result = engine.generate(
        "ab",
        _params(eos_token_id=0, max_new_tokens=len(script)),
        on_text=chunks.append,
    )

    assert result.text == "aé\ufffd"
    assert chunks == ["a", "é", "\ufffd"]
    assert "".join(chunks) == result.text
