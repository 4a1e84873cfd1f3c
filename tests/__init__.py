"""Test suite for vocllm.

Unit tests live under tests/unit/, organized by package area (chat,
engines, tokens, execution, cli). Shared stubs for the model capability and
an in-memory word-level tokenizer live in the helpers/ subpackage.
"""
