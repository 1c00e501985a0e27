"""
Generation — chat-model access behind a one-method interface.

Public surface
--------------
- :class:`Generator` — abstract text generator.
- :class:`ChatGenerator` — LangChain chat-model adapter.
- :func:`get_llm` — build the configured ``ChatOpenAI`` client.
"""

from spendr_insights.generation.base import ChatGenerator, Generator
from spendr_insights.generation.llm import get_llm

__all__ = ["ChatGenerator", "Generator", "get_llm"]
