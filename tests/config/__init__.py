"""Shared test configuration values."""
