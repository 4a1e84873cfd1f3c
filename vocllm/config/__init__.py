"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- sampling: sampler and repeat-penalty defaults
- generation: loop limits and progress reporting
- chat: system prompt, template and history settings
- logging: log level and format

Functions live in vocllm/helpers/.
"""

from .sampling import (
    GEN_SEED,
    GEN_TEMPERATURE,
    GEN_TOP_P,
    GEN_REPEAT_PENALTY,
    GEN_REPEAT_LAST_N,
)
from .generation import (
    GEN_MAX_NEW_TOKENS,
    GEN_PROGRESS_INTERVAL,
)
from .chat import (
    DEFAULT_SYSTEM_PROMPT,
    CHAT_TEMPLATE,
    HISTORY_TOKEN_BUDGET,
    HISTORY_RECORD_REPLIES,
    HISTORY_FILE_SUFFIX,
)
from .logging import (
    APP_LOG_LEVEL,
    APP_LOG_FORMAT,
    APP_LOG_DATEFMT,
)

__all__ = [
    # sampling
    "GEN_SEED",
    "GEN_TEMPERATURE",
    "GEN_TOP_P",
    "GEN_REPEAT_PENALTY",
    "GEN_REPEAT_LAST_N",
    # generation
    "GEN_MAX_NEW_TOKENS",
    "GEN_PROGRESS_INTERVAL",
    # chat
    "DEFAULT_SYSTEM_PROMPT",
    "CHAT_TEMPLATE",
    "HISTORY_TOKEN_BUDGET",
    "HISTORY_RECORD_REPLIES",
    "HISTORY_FILE_SUFFIX",
    # logging
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
