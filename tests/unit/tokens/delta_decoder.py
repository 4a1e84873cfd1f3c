"""Unit tests for incremental detokenization."""

from __future__ import annotations

from vocllm.tokens import DeltaDecoder
from tests.config.tokenizer import TEST_TOKENIZER_VOCAB as VOCAB
from tests.helpers.tokenizer import ByteTokenizer, build_word_tokenizer


class _CountingTokenizer(ByteTokenizer):
    def __init__(self):
        self.decoded_lengths: list[int] = []

    def decode(self, ids, *, skip_special_tokens: bool = True) -> str:
        self.decoded_lengths.append(len(ids))
        return super().decode(ids, skip_special_tokens=skip_special_tokens)


def test_word_deltas_keep_separating_spaces() -> None:
    decoder = DeltaDecoder(build_word_tokenizer())
    ids = [VOCAB["the"], VOCAB["cat"], VOCAB["sat"]]

    deltas = [decoder.step(ids[: n + 1]) for n in range(len(ids))]

    assert deltas == ["the", " cat", " sat"]


def test_partial_character_is_held_until_complete() -> None:
    decoder = DeltaDecoder(ByteTokenizer())
    ids = list("aé".encode("utf-8"))

    deltas = [decoder.step(ids[: n + 1]) for n in range(len(ids))]

    assert deltas == ["a", "", "é"]


def test_flush_emits_held_tail() -> None:
    decoder = DeltaDecoder(ByteTokenizer())
    ids = [0x61, 0xC3]

    assert decoder.step(ids[:1]) == "a"
    assert decoder.step(ids) == ""
    assert decoder.flush(ids) == "\ufffd"
    assert decoder.flush(ids) == ""


def test_step_decodes_a_bounded_window() -> None:
    tokenizer = _CountingTokenizer()
    decoder = DeltaDecoder(tokenizer)
    ids = list(b"streaming output stays cheap")

    text = "".join(decoder.step(ids[: n + 1]) for n in range(len(ids)))

    assert text == "streaming output stays cheap"
    assert max(tokenizer.decoded_lengths) <= 2
