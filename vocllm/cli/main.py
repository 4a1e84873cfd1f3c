"""Entry point for the vocllm command.

Loads the model and tokenizer once, then runs either a single prompt or an
interactive loop. Fatal errors are logged with their stage and turn into a
non-zero exit status.
"""

from __future__ import annotations

import sys
import logging
import argparse
from pathlib import Path
from collections.abc import Sequence

from ..chat.history import ChatHistory
from ..chat.store import HistoryStore
from ..chat.templates import ChatTemplate, get_template
from ..config import DEFAULT_SYSTEM_PROMPT, HISTORY_FILE_SUFFIX
from ..engines.generator import GenerationEngine
from ..engines.session import GenerationParams
from ..errors import ConfigurationError, GenerationError, classify_error
from ..execution import generate_reply
from ..logging import LoggingConfig, configure_logging, log_context
from .args import COMMAND_SINGLE, parse_args

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"exit", "quit"})
PROMPT_MARKER = "> "


def _save_history(store: HistoryStore, history: ChatHistory) -> bool:
    try:
        store.save(history)
    except OSError as exc:
        logger.error("Failed to save history to %s (%s): %s", store.path, classify_error(exc), exc)
        return False
    return True


def _stream_writer():
    def _write(delta: str) -> None:
        sys.stdout.write(delta)
        sys.stdout.flush()

    return _write


def load_system_prompt(path: str | None) -> str:
    """Read the system prompt file, falling back to the default on failure."""
    if not path:
        return DEFAULT_SYSTEM_PROMPT
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to read system prompt from %s, cause: %s", path, exc)
        return DEFAULT_SYSTEM_PROMPT


def default_history_path(model_path: str) -> Path:
    return Path.cwd() / f"{Path(model_path).stem}{HISTORY_FILE_SUFFIX}"


def build_params(args: argparse.Namespace, eos_token_id: int) -> GenerationParams:
    return GenerationParams(
        eos_token_id=eos_token_id,
        seed=args.seed,
        temperature=args.temperature,
        top_p=args.top_p,
        repeat_penalty=args.repeat_penalty,
        repeat_last_n=args.repeat_last_n,
        max_new_tokens=args.max_new_tokens if args.max_new_tokens > 0 else None,
    )


def build_engine(args: argparse.Namespace) -> tuple[GenerationEngine, int]:
    """Load device, tokenizer and model; return the engine and its EOS id."""
    from ..engines.loader import (  # noqa: PLC0415
        load_model,
        load_tokenizer,
        select_device,
        resolve_eos_token_id,
    )

    device = select_device(args.cpu)
    logger.debug("Active device: %s", device)
    tokenizer = load_tokenizer(args.model_path, args.tokenizer_json)
    model = load_model(args.model_path, device)
    eos_token_id = resolve_eos_token_id(model.metadata_eos_token_id, args.eos_token)
    logger.debug("Using EOS token %d, seed %d", eos_token_id, args.seed)
    return GenerationEngine(model, tokenizer), eos_token_id


def run_single(
    args: argparse.Namespace,
    engine: GenerationEngine,
    template: ChatTemplate,
    system_prompt: str,
    params: GenerationParams,
) -> int:
    on_text = None if args.no_stream else _stream_writer()
    reply = generate_reply(engine, template, system_prompt, args.prompt, params, on_text=on_text)
    if args.no_stream:
        print(reply)
    else:
        print()
    return 0


def run_repl(
    args: argparse.Namespace,
    engine: GenerationEngine,
    template: ChatTemplate,
    system_prompt: str,
    params: GenerationParams,
) -> int:
    store: HistoryStore | None = None
    history: ChatHistory | None = None
    if not args.disable_history:
        store = HistoryStore(args.historyfile or default_history_path(args.model_path))
        try:
            history = store.load(args.history_count)
        except OSError as exc:
            logger.error("Failed to load history from %s (%s): %s", store.path, classify_error(exc), exc)
            return 1

    saved = True
    on_text = None if args.no_stream else _stream_writer()
    try:
        while True:
            try:
                user_prompt = input(PROMPT_MARKER)
            except EOFError:
                break
            user_prompt = user_prompt.strip()
            if not user_prompt:
                continue
            if user_prompt.lower() in EXIT_WORDS:
                break
            try:
                reply = generate_reply(
                    engine,
                    template,
                    system_prompt,
                    user_prompt,
                    params,
                    history=history,
                    record_replies=args.record_replies,
                    on_text=on_text,
                )
            except GenerationError as exc:
                kept = " (your message was kept in history)" if exc.history_updated else ""
                print(f"\n[error] {exc}{kept}", file=sys.stderr)
                continue
            if args.no_stream:
                print(reply)
            else:
                print()
    finally:
        if store is not None and history is not None and not args.incognito:
            saved = _save_history(store, history)
    return 0 if saved else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(LoggingConfig.for_verbosity(args.verbose))
    logger.debug("Received %s", args)

    with log_context(session_id=Path(args.model_path).stem):
        try:
            template = get_template(args.template)
            system_prompt = load_system_prompt(args.sysprompt)
            engine, eos_token_id = build_engine(args)
            params = build_params(args, eos_token_id)
            if args.command == COMMAND_SINGLE:
                return run_single(args, engine, template, system_prompt, params)
            return run_repl(args, engine, template, system_prompt, params)
        except ConfigurationError as exc:
            logger.error("Cannot start session: %s", exc)
            return 1
        except GenerationError as exc:
            logger.error("Generation failed at stage %s: %s", exc.stage, exc.message)
            return 1
        except KeyboardInterrupt:
            return 130


__all__ = [
    "build_engine",
    "build_params",
    "default_history_path",
    "load_system_prompt",
    "main",
    "run_repl",
    "run_single",
]
