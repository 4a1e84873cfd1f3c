"""Persistence for chat history between sessions.

History is stored as JSON lines, one entry per line, oldest first:

    {"tokens": 12, "text": "<|im_start|>user\\nhello<|im_end|>\\n"}

Loading re-records every entry through ChatHistory so the budget of the
new session applies even if the file was written under a larger one.
"""

from __future__ import annotations

import os
import json
import logging
import tempfile
from pathlib import Path

from .history import ChatHistory

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


def _parse_line(line: bytes) -> str | None:
    try:
        payload = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    text = payload.get("text")
    return text if isinstance(text, str) else None


class HistoryStore:
    """Line-delimited JSON file holding rendered history turns."""

    def __init__(self, path: PathLike):
        self.path = Path(path)

    def load(self, token_budget: int) -> ChatHistory:
        """Read stored turns into a fresh ChatHistory.

        A missing file yields an empty history. Malformed lines, including
        ones that are not valid UTF-8, are skipped with a warning.
        """
        history = ChatHistory(token_budget)
        if not self.path.exists():
            logger.debug("No history file at %s; starting empty", self.path)
            return history

        skipped = 0
        with self.path.open("rb") as fh:
            for lineno, raw in enumerate(fh, start=1):
                line = raw.strip()
                if not line:
                    continue
                text = _parse_line(line)
                if text is None:
                    skipped += 1
                    logger.warning("Skipping malformed history line %d in %s", lineno, self.path)
                    continue
                history.record(text)

        logger.info(
            "Loaded %d history turn(s) from %s (%d skipped)",
            len(history),
            self.path,
            skipped,
        )
        return history

    def save(self, history: ChatHistory) -> None:
        """Write history atomically, replacing any previous file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=str(self.path.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                for entry in history:
                    record = {"tokens": entry.estimated_tokens, "text": entry.rendered_text}
                    fh.write(json.dumps(record, ensure_ascii=False))
                    fh.write("\n")
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.info("Saved %d history turn(s) to %s", len(history), self.path)


__all__ = ["HistoryStore"]
