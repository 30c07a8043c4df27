"""
Application service: bounded calls to the language model.

Every call is wrapped in asyncio.wait_for. Transport failures and timeouts
are retried with exponential backoff up to *max_attempts*; the default of a
single attempt means no retry.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from stockwise.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


class ModelCallFailed(Exception):
    """Raised after the last attempt failed; *reason* is a short human-readable cause."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


@dataclass(frozen=True)
class ModelCallPolicy:
    timeout_seconds: float = 30.0
    max_attempts: int = 1
    backoff_seconds: float = 0.5


async def call_model(
    llm: ILanguageModel,
    prompt: str,
    policy: ModelCallPolicy,
    run_name: Optional[str] = None,
) -> str:
    """Return the model's reply text, enforcing *policy*.

    Raises:
        ModelCallFailed: when every attempt timed out or raised.
    """
    attempts = max(1, policy.max_attempts)
    reason = "model call failed"
    last_exc: Optional[BaseException] = None
    for attempt in range(1, attempts + 1):
        try:
            return await asyncio.wait_for(
                llm.generate(prompt, run_name=run_name), timeout=policy.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            last_exc = exc
            reason = "model call timed out"
            logger.warning(
                "%s: attempt %d/%d timed out after %.1fs",
                run_name or "model call", attempt, attempts, policy.timeout_seconds,
            )
        except Exception as exc:
            last_exc = exc
            reason = "model call failed"
            logger.warning(
                "%s: attempt %d/%d failed: %s", run_name or "model call", attempt, attempts, exc
            )
        if attempt < attempts:
            await asyncio.sleep(policy.backoff_seconds * 2 ** (attempt - 1))
    raise ModelCallFailed(reason) from last_exc
