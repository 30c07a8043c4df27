"""
Port (interface) for generative language models.
Infrastructure adapters (e.g. GeminiChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILanguageModel(ABC):
    @abstractmethod
    async def generate(self, prompt: str, run_name: Optional[str] = None) -> str:
        """Send a single user prompt and return the model's reply as plain text.

        Args:
            prompt:   The full natural-language instruction.
            run_name: Optional label used by tracing backends to group calls.

        Raises:
            Any exception from the underlying SDK on transport or quota failure.
        """
        ...
