"""
Infrastructure adapter: Google Gemini (ChatGoogleGenerativeAI) → ILanguageModel.

All langchain_google_genai details are confined here. Each prompt is sent as a
single HumanMessage and the reply content is flattened to plain text. When an
IObservabilityHandler is supplied its LangChain callback and trace metadata
ride along on every call.
"""

from typing import Any, Optional

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from stockwise.domain.ports.llm_port import ILanguageModel
from stockwise.domain.ports.observability_port import IObservabilityHandler


class GeminiChatAdapter(ILanguageModel):
    """Wraps ChatGoogleGenerativeAI and exposes the ILanguageModel interface."""

    MODEL_ID = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = MODEL_ID,
        observability: Optional[IObservabilityHandler] = None,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            api_key:       Gemini API key. Required unless *_runnable* is given.
            model:         Gemini model name.
            observability: Optional tracing handler attached to every call.
            _runnable:     Optional pre-built chat model (used by tests to avoid
                           constructing the real client).
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            if not api_key:
                raise ValueError("GEMINI_API_KEY is required to build the Gemini adapter.")
            self._llm = ChatGoogleGenerativeAI(
                model=model,
                google_api_key=api_key,
                temperature=0.2,
            )
        self._observability = observability

    async def generate(self, prompt: str, run_name: Optional[str] = None) -> str:
        response = await self._llm.ainvoke(
            [HumanMessage(content=prompt)], config=self._config(run_name)
        )
        return self._to_text(getattr(response, "content", response))

    def _config(self, run_name: Optional[str]) -> dict:
        config: dict = {}
        if run_name:
            config["run_name"] = run_name
        if self._observability is not None:
            config["callbacks"] = [self._observability.as_callback()]
            config["metadata"] = self._observability.metadata(run_name)
        return config

    @staticmethod
    def _to_text(content: Any) -> str:
        """Gemini may return a list of content parts instead of a single string."""
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for part in content:
                if isinstance(part, str):
                    parts.append(part)
                elif isinstance(part, dict) and part.get("type", "text") == "text":
                    parts.append(str(part.get("text", "")))
            return "".join(parts)
        return str(content)
