"""
Infrastructure adapter: Langfuse → IObservabilityHandler.

Langfuse is imported lazily inside the methods so the module can be loaded
even when LANGFUSE_* environment variables are not set (e.g. during testing).
The composition root only builds this handler when LANGFUSE_PUBLIC_KEY is
present; SecretsManagerAdapter.load_into_env() must run before that check.
"""

from typing import Any, Optional, Sequence

from stockwise.domain.ports.observability_port import IObservabilityHandler


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler and tags every model call."""

    def __init__(self, tags: Sequence[str] = ("stockwise",), _handler: Any = None) -> None:
        if _handler is None:
            from langfuse.langchain import CallbackHandler
            _handler = CallbackHandler()
        self._handler = _handler
        self._tags = list(tags)

    def as_callback(self) -> Any:
        """Return the Langfuse CallbackHandler for use in LangChain configs."""
        return self._handler

    def metadata(self, run_name: Optional[str] = None) -> dict:
        tags = self._tags + ([run_name] if run_name else [])
        return {"langfuse_tags": tags}

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()
