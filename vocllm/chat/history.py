"""Token-budgeted chat history.

History keeps pre-rendered turns in chronological order together with a
rough token estimate for each. Recording a turn appends it and then evicts
the oldest turns until the running estimate fits the budget again.

Eviction policy:
    Eviction stops once a single entry remains. If that entry is the newly
    recorded one and its own estimate exceeds the budget, it is kept as the
    sole entry and ``record`` reports ``HistoryStatus.OVERFLOW``. The caller
    gets the latest turn remembered without the loop running past an empty
    queue.
"""

from __future__ import annotations

import logging
from enum import Enum
from collections import deque
from dataclasses import dataclass
from collections.abc import Iterable, Iterator

from ..errors import ConfigurationError
from ..tokens.estimate import estimate_tokens

logger = logging.getLogger(__name__)


class HistoryStatus(str, Enum):
    """Outcome of recording a message."""

    OK = "ok"
    OVERFLOW = "overflow"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One stored turn and its estimated token count."""

    estimated_tokens: int
    rendered_text: str


class ChatHistory:
    """Ordered log of rendered turns bounded by an estimated token budget.

    Attributes:
        token_budget: Maximum aggregate estimate retained after eviction.
        total_tokens: Running sum of the stored entries' estimates.
    """

    def __init__(self, token_budget: int):
        if token_budget <= 0:
            raise ConfigurationError(f"history token budget must be positive, got {token_budget}")
        self.token_budget = token_budget
        self.total_tokens = 0
        self._entries: deque[HistoryEntry] = deque()

    def record(self, message: str) -> HistoryStatus:
        """Append a rendered turn and evict oldest turns to fit the budget.

        Args:
            message: Turn text already rendered by a ChatTemplate.

        Returns:
            HistoryStatus.OK when the budget holds, HistoryStatus.OVERFLOW
            when the new turn alone exceeds it.
        """
        n_tokens = estimate_tokens(message)
        self._entries.append(HistoryEntry(estimated_tokens=n_tokens, rendered_text=message))
        self.total_tokens += n_tokens

        evicted = 0
        while self.total_tokens > self.token_budget and len(self._entries) > 1:
            oldest = self._entries.popleft()
            self.total_tokens -= oldest.estimated_tokens
            evicted += 1

        if evicted:
            logger.debug(
                "History evicted %d turn(s); %d/%d estimated tokens retained",
                evicted,
                self.total_tokens,
                self.token_budget,
            )

        if self.total_tokens > self.token_budget:
            logger.warning(
                "Message of ~%d tokens exceeds history budget %d; keeping it as the only entry",
                n_tokens,
                self.token_budget,
            )
            return HistoryStatus.OVERFLOW
        return HistoryStatus.OK

    def extend(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.record(message)

    def clear(self) -> None:
        self._entries.clear()
        self.total_tokens = 0

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"ChatHistory(entries={len(self._entries)}, "
            f"total_tokens={self.total_tokens}, token_budget={self.token_budget})"
        )


__all__ = ["ChatHistory", "HistoryEntry", "HistoryStatus"]
