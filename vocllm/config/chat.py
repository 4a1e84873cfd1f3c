"""Chat behavior configuration.

System prompt, template selection and history settings.
"""

from __future__ import annotations

import os

from ..helpers.env import env_flag


# ============================================================================
# SYSTEM PROMPT
# ============================================================================

DEFAULT_SYSTEM_PROMPT = """
You are a professional interactive AI assistant.
Your job is to answer any queries and perform any actions required of you to the best of your ability.
You may optionally be provided with additional context which must be incorporated into your answer.
You may optionally also be provided several tools that you may use to satisfy user's requests.
Your answers must be concise and correct. Never refuse to answer.
"""

# ============================================================================
# TEMPLATE SETTINGS
# ============================================================================

CHAT_TEMPLATE = os.getenv("CHAT_TEMPLATE", "chatml").strip().lower()

# ============================================================================
# HISTORY
# ============================================================================

# Rough count of tokens to retain in history. Should not exceed the model's
# context size.
HISTORY_TOKEN_BUDGET = int(os.getenv("HISTORY_TOKEN_BUDGET", "4096"))

# Record assistant replies into history alongside user turns
HISTORY_RECORD_REPLIES = env_flag("HISTORY_RECORD_REPLIES", True)

# Suffix for the default history file written next to the working directory
HISTORY_FILE_SUFFIX = ".history.jsonl"


__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "CHAT_TEMPLATE",
    "HISTORY_TOKEN_BUDGET",
    "HISTORY_RECORD_REPLIES",
    "HISTORY_FILE_SUFFIX",
]
