"""Generation loop limits and instrumentation settings."""

import os

from ..helpers.env import env_optional_int


# Hard cap on generated tokens per call. 0 disables the cap and the loop
# runs until the model emits EOS.
GEN_MAX_NEW_TOKENS = env_optional_int("GEN_MAX_NEW_TOKENS", 2048)

# Emit a debug progress line every N generated tokens
GEN_PROGRESS_INTERVAL = int(os.getenv("GEN_PROGRESS_INTERVAL", "128"))


__all__ = [
    "GEN_MAX_NEW_TOKENS",
    "GEN_PROGRESS_INTERVAL",
]
