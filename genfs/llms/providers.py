"""
Selection and construction of the chat model that drives a turn.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from genfs.config import GenFSConfig, ProviderType

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

logger = logging.getLogger(__name__)


def get_provider_type(config: GenFSConfig) -> ProviderType:
    """
    Determine the active provider.

    An explicitly requested provider wins when its API key is available
    (the mock needs none); an explicit provider without a key falls back to
    the mock with a warning. Otherwise OpenRouter is preferred, then
    Anthropic, then the mock.
    """
    settings = config.provider
    explicit = settings.provider

    if explicit:
        if explicit == "openrouter" and settings.openrouter_api_key:
            return "openrouter"
        if explicit == "anthropic" and settings.anthropic_api_key:
            return "anthropic"
        if explicit == "mock":
            return "mock"
        logger.warning(
            "PROVIDER=%s requested but no API key is configured for it. Using mock.",
            explicit,
        )
        return "mock"

    if settings.openrouter_api_key:
        return "openrouter"
    if settings.anthropic_api_key:
        return "anthropic"
    return "mock"


def get_model_name(config: GenFSConfig) -> str:
    """Get the model name of the active provider."""
    provider = get_provider_type(config)
    if provider == "openrouter":
        return config.provider.openrouter_model
    if provider == "anthropic":
        return config.provider.anthropic_model
    return config.provider.mock_model


def supports_prompt_caching(config: GenFSConfig) -> bool:
    """Check whether the active provider supports prompt caching."""
    return config.agent.prompt_caching and get_provider_type(config) == "anthropic"


def get_chat_model(config: GenFSConfig) -> BaseChatModel:
    """
    Build the chat model for the active provider.

    Live providers are created with LangChain's init_chat_model, so the
    matching integration package (langchain-openai for OpenRouter,
    langchain-anthropic for Anthropic) must be installed.
    """
    provider = get_provider_type(config)
    settings = config.provider
    model_name = get_model_name(config)

    if provider == "mock":
        from genfs.llms.mock import MockChatModel

        return MockChatModel(model=model_name)

    from langchain.chat_models import init_chat_model

    if provider == "openrouter":
        # OpenRouter speaks the OpenAI chat completions protocol
        return init_chat_model(
            model_name,
            model_provider="openai",
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
            max_tokens=settings.max_output_tokens,
        )

    return init_chat_model(
        model_name,
        model_provider="anthropic",
        api_key=settings.anthropic_api_key,
        max_tokens=settings.max_output_tokens,
    )
