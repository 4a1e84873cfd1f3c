"""Command-line argument parser for the chat session driver.

Global options configure the model, sampler and history; a subcommand
selects the mode:

    single PROMPT   Run exactly one prompt. History is disabled.
    repl            Read prompts from stdin until exit/quit or EOF.

Defaults come from the environment-backed values in vocllm.config.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from ..chat.templates import available_templates
from ..config import (
    CHAT_TEMPLATE,
    GEN_MAX_NEW_TOKENS,
    GEN_REPEAT_LAST_N,
    GEN_REPEAT_PENALTY,
    GEN_SEED,
    GEN_TEMPERATURE,
    GEN_TOP_P,
    HISTORY_RECORD_REPLIES,
    HISTORY_TOKEN_BUDGET,
)

COMMAND_SINGLE = "single"
COMMAND_REPL = "repl"


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return parsed


def _probability(value: str) -> float:
    parsed = float(value)
    if not 0.0 < parsed <= 1.0:
        raise argparse.ArgumentTypeError(f"expected a value in (0, 1], got {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocllm",
        description="An elementary chat interface for local causal language models.",
    )
    parser.add_argument("-m", "--model-path", required=True, help="Model directory or .gguf file to load")
    parser.add_argument(
        "-T",
        "--tokenizer-json",
        default=None,
        help="Path to tokenizer.json (default: tokenizer.json next to the model)",
    )
    parser.add_argument("--seed", type=int, default=GEN_SEED, help="Seed for reproducible sampling")
    parser.add_argument(
        "--temperature",
        type=float,
        default=GEN_TEMPERATURE,
        help="Sampling temperature; 0 selects deterministic arg-max",
    )
    parser.add_argument("--top-p", type=_probability, default=GEN_TOP_P, help="Nucleus sampling threshold")
    parser.add_argument(
        "--repeat-penalty",
        type=float,
        default=GEN_REPEAT_PENALTY,
        help="Repeat penalty: 1.0=off, 1.1=mild (default: %(default)s)",
    )
    parser.add_argument(
        "--repeat-last-n",
        type=int,
        default=GEN_REPEAT_LAST_N,
        help="Trailing token window the repeat penalty applies to",
    )
    parser.add_argument(
        "--max-new-tokens",
        type=int,
        default=GEN_MAX_NEW_TOKENS or 0,
        help="Stop after this many generated tokens; 0 runs until EOS",
    )
    parser.add_argument("-c", "--cpu", action="store_true", help="Use the CPU even when CUDA is available")
    parser.add_argument(
        "--historyfile",
        default=None,
        help="JSON-lines history file to load and save (default: <model stem>.history.jsonl)",
    )
    parser.add_argument("--sysprompt", default=None, help="File whose text replaces the default system prompt")
    parser.add_argument(
        "-i",
        "--incognito",
        action="store_true",
        help="Keep history for this session but do not save it",
    )
    parser.add_argument("--disable-history", action="store_true", help="Disable chat history entirely")
    parser.add_argument(
        "--record-replies",
        action=argparse.BooleanOptionalAction,
        default=HISTORY_RECORD_REPLIES,
        help="Remember assistant replies in history, not just user turns",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-n",
        "--no-stream",
        action="store_true",
        help="Print the reply only once generation finishes",
    )
    parser.add_argument(
        "--eos-token",
        type=int,
        default=None,
        help="EOS token id, used when the model metadata defines none",
    )
    parser.add_argument(
        "--history-count",
        type=_positive_int,
        default=HISTORY_TOKEN_BUDGET,
        help="Rough number of tokens to retain in history",
    )
    parser.add_argument(
        "-t",
        "--template",
        default=CHAT_TEMPLATE,
        help=f"Chat template to apply ({', '.join(available_templates())})",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    single = commands.add_parser(COMMAND_SINGLE, help="Run exactly one prompt with history disabled")
    single.add_argument("prompt", help="User prompt fed to the model verbatim")
    commands.add_parser(COMMAND_REPL, help="Read prompts from stdin in a loop")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


__all__ = ["COMMAND_REPL", "COMMAND_SINGLE", "build_parser", "parse_args"]
