"""Unit tests for prompt assembly with and without history."""

from __future__ import annotations

from vocllm.chat.roles import ChatRole
from vocllm.chat.history import ChatHistory
from vocllm.chat.templates import ChatMLTemplate, RolePrefixTemplate
from vocllm.chat.prompt import record_reply, assemble_stateless, assemble_with_history


def test_assemble_with_history_orders_sections_and_records_user_turn() -> None:
    template = RolePrefixTemplate()
    history = ChatHistory(100)
    history.record("USER: earlier\n")

    prompt = assemble_with_history(template, "rules", "question", "facts", history)

    assert prompt == (
        "SYSTEM: rules\n"
        "USER: earlier\n"
        "SYSTEM: facts\n"
        "USER: question\n"
        "ASSISTANT: "
    )
    assert [e.rendered_text for e in history] == ["USER: earlier\n", "USER: question\n"]


def test_assemble_with_history_omits_missing_context() -> None:
    template = ChatMLTemplate()
    history = ChatHistory(100)

    prompt = assemble_with_history(template, "sys", "hi", None, history)

    assert prompt == (
        "<|im_start|>system\nsys<|im_end|>\n"
        "<|im_start|>user\nhi<|im_end|>\n"
        "<|im_start|>assistant\n"
    )


def test_new_turn_is_not_replayed_in_the_prompt_that_records_it() -> None:
    template = RolePrefixTemplate()
    history = ChatHistory(100)

    first = assemble_with_history(template, "s", "one", None, history)
    second = assemble_with_history(template, "s", "two", None, history)

    assert first.count("USER: one\n") == 1
    assert second == "SYSTEM: s\nUSER: one\nUSER: two\nASSISTANT: "


def test_assemble_stateless_matches_empty_history_and_leaves_history_alone() -> None:
    template = ChatMLTemplate()
    history = ChatHistory(100)

    stateless = assemble_stateless(template, "sys", "hi", "ctx")
    with_history = assemble_with_history(template, "sys", "hi", "ctx", ChatHistory(100))

    assert stateless == with_history
    assert len(history) == 0


def test_record_reply_stores_assistant_turn() -> None:
    template = ChatMLTemplate()
    history = ChatHistory(100)

    record_reply(template, history, "sure")

    assert history.entries[-1].rendered_text == template.format_turn(ChatRole.ASSISTANT, "sure")
