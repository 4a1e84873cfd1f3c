"""Startup configuration exceptions."""


class ConfigurationError(Exception):
    """Raised when a session cannot be started.

    Typical causes are an EOS token id that cannot be resolved from model
    metadata or arguments, a missing tokenizer file, an unknown chat
    template name or a non-positive history budget.
    """


__all__ = ["ConfigurationError"]
