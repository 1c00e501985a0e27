"""Text generator interface and the LangChain chat-model adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from spendr_insights.exceptions import GenerationError


class Generator(ABC):
    """Produces text from an ordered list of chat messages."""

    @abstractmethod
    def generate(self, messages: Sequence[BaseMessage]) -> str:
        """Return the model's reply to *messages* (at least one message).

        Raises
        ------
        GenerationError
            When the generation service fails.
        """
        ...


class ChatGenerator(Generator):
    """Adapter over any LangChain chat model.

    Parameters
    ----------
    llm:
        The chat model.  When *None*, :func:`get_llm` builds one from
        the global settings.
    """

    def __init__(self, llm: BaseChatModel | None = None) -> None:
        if llm is None:
            from spendr_insights.generation.llm import get_llm

            llm = get_llm()
        self._llm = llm

    def generate(self, messages: Sequence[BaseMessage]) -> str:
        if not messages:
            raise ValueError("generate() requires at least one message")
        try:
            response = self._llm.invoke(list(messages))
        except Exception as exc:
            raise GenerationError(f"Chat model call failed: {exc}") from exc
        return _content_to_text(getattr(response, "content", ""))


def _content_to_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of parts) to plain text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)
