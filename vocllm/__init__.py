"""vocllm: an elementary chat session driver for local causal language models.

This package assembles prompts from role-tagged chat templates, keeps chat
history within a token budget, and runs the autoregressive loop that turns
a prompt into a decoded continuation:

- Prompt assembly with ChatML or role-prefix templates
- Token-budgeted history with oldest-first eviction
- Prefill/decode generation over an incremental KV cache
- Repeat penalty, seeded temperature / top-p sampling, EOS termination

Architecture Overview:
    - cli/: argparse entry point (single prompt or interactive loop)
    - config/: Configuration modules (environment-based)
    - chat/: Templates, history, prompt assembly and history persistence
    - engines/: Model contract, transformers adapter, sampler, generation loop
    - execution/: Per-turn runner tying assembly and generation together
    - tokens/: Tokenizer wrapper and history token estimate
    - errors/: Exception taxonomy
    - logging/: Logging setup and context fields

Example:
    Run a single prompt against a local checkpoint:

    $ python -m vocllm -m ./models/mistral-7b.Q4_K_M.gguf -T ./models/tokenizer.json single "Hi"

Environment Variables:
    Optional:
        - GEN_SEED, GEN_TEMPERATURE, GEN_TOP_P: Sampler defaults
        - GEN_REPEAT_PENALTY, GEN_REPEAT_LAST_N: Repeat penalty defaults
        - GEN_MAX_NEW_TOKENS: Generated-token cap (0 = until EOS)
        - CHAT_TEMPLATE: 'chatml' or 'imessenger' (default: 'chatml')
        - HISTORY_TOKEN_BUDGET: History budget in estimated tokens
        - HISTORY_RECORD_REPLIES: Remember assistant replies (default: true)
        - APP_LOG_LEVEL: Log level (default: WARNING)
"""

__version__ = "0.1.0"
