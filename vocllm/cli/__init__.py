"""Command-line shell around the chat session driver."""

from .main import main
from .args import build_parser, parse_args

__all__ = ["build_parser", "main", "parse_args"]
