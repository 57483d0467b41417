"""Chat model backends for GenFS agent turns."""

from genfs.llms.mock import MockChatModel
from genfs.llms.providers import (
    get_chat_model,
    get_model_name,
    get_provider_type,
    supports_prompt_caching,
)

__all__ = [
    "MockChatModel",
    "get_chat_model",
    "get_model_name",
    "get_provider_type",
    "supports_prompt_caching",
]
