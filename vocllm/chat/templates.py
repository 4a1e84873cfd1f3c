"""Chat templates that render role-tagged turns into model prompt syntax.

Two variants are provided:

ChatML (``chatml``):
    <|im_start|>user
    Hello<|im_end|>

Role prefix (``imessenger``):
    USER: Hello

Each template also supplies a generation lead, the marker appended after
the last turn to signal that the assistant continuation starts there.

History stores turns pre-rendered, so ``insert_history`` copies stored
text verbatim. Switching templates mid-session never reformats old turns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .roles import ChatRole, ChatTurn

if TYPE_CHECKING:
    from .history import ChatHistory


class ChatTemplate(ABC):
    """Formatting capability for one prompt syntax."""

    name: str = ""

    @abstractmethod
    def format_turn(self, role: ChatRole, text: str) -> str:
        """Render exactly one turn, trailing delimiter included."""

    @abstractmethod
    def generation_lead(self) -> str:
        """Return the marker that opens the assistant continuation."""

    def render_turn(self, role: ChatRole, text: str) -> ChatTurn:
        return ChatTurn(role=role, rendered_text=self.format_turn(role, text))

    def insert_history(self, buffer: list[str], history: ChatHistory) -> None:
        """Append every stored turn to buffer in chronological order."""
        for entry in history:
            buffer.append(entry.rendered_text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ChatMLTemplate(ChatTemplate):
    """Multi-delimiter template with explicit begin/end markers per turn."""

    name = "chatml"

    def format_turn(self, role: ChatRole, text: str) -> str:
        return f"<|im_start|>{role.value}\n{text}<|im_end|>\n"

    def generation_lead(self) -> str:
        return f"<|im_start|>{ChatRole.ASSISTANT.value}\n"


class RolePrefixTemplate(ChatTemplate):
    """Simple template that prefixes each turn with the upper-cased role."""

    name = "imessenger"

    def format_turn(self, role: ChatRole, text: str) -> str:
        return f"{role.value.upper()}: {text}\n"

    def generation_lead(self) -> str:
        return f"{ChatRole.ASSISTANT.value.upper()}: "


_TEMPLATES: dict[str, type[ChatTemplate]] = {
    ChatMLTemplate.name: ChatMLTemplate,
    RolePrefixTemplate.name: RolePrefixTemplate,
}

_ALIASES = {
    "chat-ml": ChatMLTemplate.name,
    "chat_ml": ChatMLTemplate.name,
    "i-messenger": RolePrefixTemplate.name,
}


def available_templates() -> tuple[str, ...]:
    return tuple(_TEMPLATES)


def get_template(name: str) -> ChatTemplate:
    """Return a template instance by name.

    Raises:
        ConfigurationError: If no template matches.
    """
    key = (name or "").strip().lower()
    key = _ALIASES.get(key, key)
    template_cls = _TEMPLATES.get(key)
    if template_cls is None:
        raise ConfigurationError(
            f"unknown chat template {name!r}; expected one of {', '.join(_TEMPLATES)}"
        )
    return template_cls()


__all__ = [
    "ChatTemplate",
    "ChatMLTemplate",
    "RolePrefixTemplate",
    "available_templates",
    "get_template",
]
