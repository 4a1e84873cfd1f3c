"""Chat formatting, history and prompt assembly."""

from .roles import ChatRole, ChatTurn
from .store import HistoryStore
from .history import ChatHistory, HistoryEntry, HistoryStatus
from .prompt import record_reply, assemble_stateless, assemble_with_history
from .templates import (
    ChatTemplate,
    ChatMLTemplate,
    RolePrefixTemplate,
    get_template,
    available_templates,
)

__all__ = [
    "ChatRole",
    "ChatTurn",
    "ChatTemplate",
    "ChatMLTemplate",
    "RolePrefixTemplate",
    "get_template",
    "available_templates",
    "ChatHistory",
    "HistoryEntry",
    "HistoryStatus",
    "HistoryStore",
    "assemble_with_history",
    "assemble_stateless",
    "record_reply",
]
