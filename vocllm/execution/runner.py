"""High-level chat generation runner.

This module provides the single entry point the CLI calls per user turn:

1. Prompt Building:
   - With history: replay stored turns and record the new user turn
   - Without history: stateless one-shot prompt

2. Generation:
   - Delegate to GenerationEngine (encode, prefill/decode, decode output)
   - Optionally stream text deltas to a callback

3. History Update:
   - Record the assistant reply when reply recording is enabled

The user turn is recorded before generation starts. If generation then
fails, the raised GenerationError has ``history_updated`` set so callers
can tell "history changed, generation failed" apart from "nothing happened".
"""

from __future__ import annotations

import uuid
import logging

from ..chat.history import ChatHistory
from ..chat.templates import ChatTemplate
from ..chat.prompt import record_reply, assemble_stateless, assemble_with_history
from ..engines.generator import GenerationEngine, TextCallback
from ..engines.session import GenerationParams
from ..errors import GenerationError, classify_error
from ..logging import log_context

logger = logging.getLogger(__name__)


def generate_reply(
    engine: GenerationEngine,
    template: ChatTemplate,
    system_prompt: str,
    user_prompt: str,
    params: GenerationParams,
    *,
    context: str | None = None,
    history: ChatHistory | None = None,
    record_replies: bool = False,
    on_text: TextCallback | None = None,
    request_id: str | None = None,
) -> str:
    """Assemble a prompt, generate a continuation and return its text.

    Args:
        engine: Engine owning the model and tokenizer.
        template: Chat template for rendering turns.
        system_prompt: Persistent system instructions.
        user_prompt: The new user message.
        params: Sampling and termination settings.
        context: Optional retrieved context injected as a system turn.
        history: Mutable history; None selects stateless assembly.
        record_replies: Also record the assistant reply into history.
        on_text: Optional callback receiving streamed text deltas.
        request_id: Optional id for log correlation (auto-generated if None).

    Returns:
        The decoded continuation, prompt text excluded.

    Raises:
        GenerationError: Any fatal encode, model or decode failure.
    """
    req_id = request_id or f"gen-{uuid.uuid4().hex[:8]}"
    with log_context(request_id=req_id):
        if history is not None:
            prompt = assemble_with_history(template, system_prompt, user_prompt, context, history)
        else:
            prompt = assemble_stateless(template, system_prompt, user_prompt, context)
        logger.debug("Built prompt (%d chars, history=%s)", len(prompt), history is not None)

        try:
            result = engine.generate(prompt, params, on_text=on_text)
        except GenerationError as exc:
            exc.history_updated = history is not None
            logger.error(
                "Generation failed (%s) at stage %s; history updated: %s",
                classify_error(exc),
                exc.stage,
                exc.history_updated,
            )
            raise

        logger.info(
            "Generated %d tokens from %d prompt tokens (finish=%s)",
            result.completion_tokens,
            result.prompt_tokens,
            result.finish_reason,
        )
        if history is not None and record_replies:
            record_reply(template, history, result.text)
        return result.text


__all__ = ["generate_reply"]
