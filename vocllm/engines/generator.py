"""Autoregressive generation loop.

GenerationEngine drives a CausalModel through one call:

1. Init:
   - Reset the model's cached state
   - Create the session (token sequence = encoded prompt, cursor = 0)
   - Seed a fresh sampler

2. Prefill (once):
   - Forward the whole prompt at offset 0
   - Cursor moves to the end of the prompt

3. Decode (repeated):
   - First iteration reuses the prefill logits; later ones forward only
     the newest id at the cursor offset
   - Apply the repeat penalty over the trailing window (skipped at 1.0)
   - Sample, append, and stop on EOS or the max-new-tokens cap

4. Terminated:
   - Decode the generated ids (EOS excluded) back to text. The boundary
     between prompt and continuation is tracked in token space.

Every failure is raised as a GenerationError subclass tagged with its stage.
There are no retries and no partial results.
"""

from __future__ import annotations

import time
import logging
from collections.abc import Callable, Iterator, Sequence

import torch

from ..config.generation import GEN_PROGRESS_INTERVAL
from ..errors import EncodeError, GenerationError, GenerationStage, ModelForwardError
from ..tokens.delta import DeltaDecoder
from ..tokens.tokenizer import TextTokenizer
from .base import CausalModel
from .penalty import apply_repeat_penalty, repeat_window
from .sampling import LogitsSampler
from .session import GenerationParams, GenerationResult, GenerationSession

logger = logging.getLogger(__name__)

FINISH_EOS = "eos"
FINISH_LENGTH = "length"

TextCallback = Callable[[str], None]


class GenerationEngine:
    """Owns a model and tokenizer and turns prompts into continuations.

    The engine is synchronous and blocking. The model it wraps must not be
    shared with another engine while a call is running.
    """

    def __init__(
        self,
        model: CausalModel,
        tokenizer: TextTokenizer,
        *,
        progress_interval: int = GEN_PROGRESS_INTERVAL,
    ):
        self.model = model
        self.tokenizer = tokenizer
        self.progress_interval = progress_interval

    def generate(
        self,
        prompt: str,
        params: GenerationParams,
        *,
        on_text: TextCallback | None = None,
    ) -> GenerationResult:
        """Encode prompt, run the loop to termination and decode the continuation.

        Args:
            prompt: Fully assembled prompt text.
            params: Sampling and termination settings.
            on_text: Optional callback receiving incremental text as it is
                generated.

        Returns:
            GenerationResult with the continuation text only.

        Raises:
            EncodeError: If the prompt cannot be tokenized.
            ModelForwardError: If the model fails during prefill or decode.
            DecodeError: If the generated ids cannot be decoded.
        """
        prompt_ids = self.tokenizer.encode(prompt)
        logger.debug("Tokenized prompt into %d tokens", len(prompt_ids))
        session = GenerationSession.start(prompt_ids, params)

        decoder = DeltaDecoder(self.tokenizer) if on_text is not None else None
        start = time.perf_counter()
        for _ in self.stream(session):
            if decoder is not None:
                self._emit(on_text, decoder.step(self._continuation_ids(session)))
        elapsed = time.perf_counter() - start

        n_generated = session.generated
        logger.debug(
            "Generated %d tokens in %.2fs [avg: %.2f t/s] finish=%s",
            n_generated,
            elapsed,
            n_generated / elapsed if elapsed > 0 else 0.0,
            session.finish_reason,
        )

        continuation = self._continuation_ids(session)
        text = self.tokenizer.decode(continuation)
        if decoder is not None:
            self._emit(on_text, decoder.flush(continuation))

        return GenerationResult(
            text=text,
            token_ids=session.generated_ids,
            prompt_tokens=session.prompt_len,
            finish_reason=session.finish_reason or FINISH_EOS,
            elapsed_s=elapsed,
        )

    def stream(self, session: GenerationSession) -> Iterator[int]:
        """Run the prefill/decode loop, yielding each sampled id.

        The session is advanced in place. When the generator is exhausted
        ``session.finish_reason`` says why it stopped.
        """
        if not session.tokens:
            raise EncodeError("prompt encoded to zero tokens")

        params = session.params
        self.model.reset()
        sampler = LogitsSampler(params.seed, params.temperature, params.top_p)
        logger.debug(
            "Starting generation: prompt=%d tokens seed=%d temperature=%s top_p=%s",
            session.prompt_len,
            params.seed,
            params.temperature,
            params.top_p,
        )

        logits = self._forward(session.tokens, 0, GenerationStage.PREFILL)
        session.cursor = len(session.tokens)

        while True:
            pending = session.pending()
            if pending:
                logits = self._forward(pending, session.cursor, GenerationStage.DECODE)
                session.cursor += len(pending)

            if params.repeat_penalty != 1.0:
                window = repeat_window(session.tokens, params.repeat_last_n)
                logits = apply_repeat_penalty(logits, params.repeat_penalty, window)

            next_token = self._sample(sampler, logits)
            session.append(next_token)
            yield next_token

            if self.progress_interval > 0 and session.generated % self.progress_interval == 0:
                logger.debug("Got %d tokens so far.", session.generated)

            if next_token == params.eos_token_id:
                session.finish_reason = FINISH_EOS
                return
            if session.reached_limit():
                logger.warning(
                    "Stopped after %d tokens without EOS (max_new_tokens reached)",
                    session.generated,
                )
                session.finish_reason = FINISH_LENGTH
                return

    def _forward(
        self,
        window: Sequence[int],
        offset: int,
        stage: GenerationStage,
    ) -> torch.Tensor:
        try:
            return self.model.forward(window, offset)
        except ModelForwardError as exc:
            exc.stage = stage
            raise
        except Exception as exc:
            raise ModelForwardError(
                f"model forward failed at offset {offset} ({len(window)} tokens): {exc}",
                stage=stage,
            ) from exc

    @staticmethod
    def _sample(sampler: LogitsSampler, logits: torch.Tensor) -> int:
        try:
            return sampler.sample(logits)
        except RuntimeError as exc:
            raise GenerationError(f"could not sample token from logits: {exc}") from exc

    @staticmethod
    def _continuation_ids(session: GenerationSession) -> list[int]:
        ids = session.generated_ids
        if ids and ids[-1] == session.params.eos_token_id:
            ids = ids[:-1]
        return ids

    @staticmethod
    def _emit(on_text: TextCallback, delta: str) -> None:
        if delta:
            on_text(delta)


__all__ = ["GenerationEngine", "FINISH_EOS", "FINISH_LENGTH"]
