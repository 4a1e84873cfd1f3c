"""Chat roles and rendered turn values.

ChatRole:
    The three speakers a prompt distinguishes. ``str(role)`` yields the
    lower-case name templates embed in their delimiters.

ChatTurn:
    One turn already rendered into a template's delimiter syntax. Turns are
    immutable values owned by whichever container stores them.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class ChatRole(str, Enum):
    """Speaker of a chat turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ChatTurn:
    """A single turn rendered by a ChatTemplate.

    Attributes:
        role: Who spoke the turn.
        rendered_text: The turn in template syntax, trailing delimiter included.
    """

    role: ChatRole
    rendered_text: str


__all__ = ["ChatRole", "ChatTurn"]
