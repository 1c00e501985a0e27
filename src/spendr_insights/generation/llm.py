"""LLM initialisation — single place to swap providers.

Any OpenAI-compatible ``/v1/chat/completions`` endpoint works:

1. **OpenRouter** (default) — ``LLM_BASE_URL=https://openrouter.ai/api/v1``
   with the OpenRouter key in ``OPENAI_API_KEY``.
2. **OpenAI cloud** — set ``LLM_BASE_URL`` to an empty string.
3. **Self-hosted vLLM** — point ``LLM_BASE_URL`` at the server's ``/v1``.
"""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from spendr_insights.config import Settings, settings

logger = logging.getLogger(__name__)


def get_llm(config: Settings | None = None, temperature: float | None = None) -> ChatOpenAI:
    """Return the chat model described by *config* (the global settings by default).

    A dummy API key (``"EMPTY"``) is used against custom endpoints when
    no key is configured, since LangChain requires a non-empty value.
    """
    config = config or settings
    kwargs: dict = {
        "model": config.llm_model_name,
        "temperature": config.llm_temperature if temperature is None else temperature,
        "max_tokens": config.llm_max_tokens,
    }

    if config.llm_base_url:
        logger.info("Using chat endpoint %s (model=%s)", config.llm_base_url, config.llm_model_name)
        kwargs["base_url"] = config.llm_base_url
        kwargs["api_key"] = config.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = config.openai_api_key

    return ChatOpenAI(**kwargs)
