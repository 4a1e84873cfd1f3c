"""Prompt assembly from a system prompt, history, context and user turn.

Two modes are supported:

1. With history: replays stored turns between the system prompt and the new
   user turn, and records the rendered user turn into history. The history
   update happens here, before any generation runs.
2. Stateless: same rendering without history, for one-shot invocations.

Prompt layout:
    <system turn>
    <history turns...>          (with-history mode only)
    <context as system turn>    (optional)
    <user turn>
    <generation lead>
"""

from __future__ import annotations

from .roles import ChatRole
from .templates import ChatTemplate
from .history import ChatHistory, HistoryStatus


def assemble_with_history(
    template: ChatTemplate,
    system_prompt: str,
    user_prompt: str,
    context: str | None,
    history: ChatHistory,
) -> str:
    """Build a prompt that replays history and record the new user turn.

    Args:
        template: Template used to render new turns.
        system_prompt: Persistent system instructions.
        user_prompt: The new user message.
        context: Optional retrieved context, injected as a system turn.
        history: History to replay and then update.

    Returns:
        The complete prompt ending with the template's generation lead.
    """
    parts: list[str] = [template.format_turn(ChatRole.SYSTEM, system_prompt)]
    template.insert_history(parts, history)
    if context is not None:
        parts.append(template.format_turn(ChatRole.SYSTEM, context))
    user_turn = template.render_turn(ChatRole.USER, user_prompt)
    parts.append(user_turn.rendered_text)
    history.record(user_turn.rendered_text)
    parts.append(template.generation_lead())
    return "".join(parts)


def assemble_stateless(
    template: ChatTemplate,
    system_prompt: str,
    user_prompt: str,
    context: str | None = None,
) -> str:
    """Build a prompt without reading or updating history."""
    parts: list[str] = [template.format_turn(ChatRole.SYSTEM, system_prompt)]
    if context is not None:
        parts.append(template.format_turn(ChatRole.SYSTEM, context))
    parts.append(template.format_turn(ChatRole.USER, user_prompt))
    parts.append(template.generation_lead())
    return "".join(parts)


def record_reply(template: ChatTemplate, history: ChatHistory, reply: str) -> HistoryStatus:
    """Render an assistant reply and record it into history."""
    return history.record(template.render_turn(ChatRole.ASSISTANT, reply).rendered_text)


__all__ = [
    "assemble_with_history",
    "assemble_stateless",
    "record_reply",
]
