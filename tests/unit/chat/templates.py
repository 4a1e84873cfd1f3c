"""Unit tests for chat template rendering."""

from __future__ import annotations

import pytest

from vocllm.errors import ConfigurationError
from vocllm.chat.roles import ChatRole, ChatTurn
from vocllm.chat.history import ChatHistory
from vocllm.chat.templates import (
    ChatMLTemplate,
    RolePrefixTemplate,
    get_template,
    available_templates,
)


@pytest.mark.parametrize("name", available_templates())
def test_system_and_user_turns_render_differently(name: str) -> None:
    template = get_template(name)
    assert template.format_turn(ChatRole.SYSTEM, "x") != template.format_turn(ChatRole.USER, "x")
    assert template.format_turn(ChatRole.USER, "x") != template.format_turn(ChatRole.ASSISTANT, "x")


def test_chatml_turn_and_lead() -> None:
    template = ChatMLTemplate()
    assert template.format_turn(ChatRole.USER, "hi") == "<|im_start|>user\nhi<|im_end|>\n"
    assert template.generation_lead() == "<|im_start|>assistant\n"


def test_role_prefix_turn_and_lead() -> None:
    template = RolePrefixTemplate()
    assert template.format_turn(ChatRole.SYSTEM, "be nice") == "SYSTEM: be nice\n"
    assert template.generation_lead() == "ASSISTANT: "


def test_render_turn_wraps_formatted_text() -> None:
    turn = ChatMLTemplate().render_turn(ChatRole.ASSISTANT, "ok")
    assert turn == ChatTurn(role=ChatRole.ASSISTANT, rendered_text="<|im_start|>assistant\nok<|im_end|>\n")


def test_insert_history_copies_stored_text_without_rerendering() -> None:
    history = ChatHistory(100)
    history.record(ChatMLTemplate().format_turn(ChatRole.USER, "old question"))
    history.record("USER: second\n")

    buffer: list[str] = ["start"]
    RolePrefixTemplate().insert_history(buffer, history)

    assert buffer == ["start", "<|im_start|>user\nold question<|im_end|>\n", "USER: second\n"]


def test_get_template_accepts_aliases_and_case() -> None:
    assert isinstance(get_template("chat-ml"), ChatMLTemplate)
    assert isinstance(get_template("IMessenger"), RolePrefixTemplate)


def test_get_template_unknown_name_raises() -> None:
    with pytest.raises(ConfigurationError):
        get_template("alpaca")
