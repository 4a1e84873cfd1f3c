"""Request execution: prompt assembly plus generation per user turn."""

from .runner import generate_reply

__all__ = ["generate_reply"]
