"""
Port (interface) for observability / tracing handlers.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class IObservabilityHandler(ABC):
    @abstractmethod
    def as_callback(self) -> Any:
        """Return the framework-native callback object (e.g. a LangChain CallbackHandler)."""
        ...

    @abstractmethod
    def metadata(self, run_name: str | None = None) -> dict:
        """Return trace metadata to attach to a single model call."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...
