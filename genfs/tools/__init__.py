"""Tool providers for GenFS agent integration."""

from genfs.tools.base import BaseToolProvider
from genfs.tools.langchain_tools import (
    LangChainToolProvider,
    execute_langchain_tool,
    get_langchain_tools,
)
from genfs.tools.openai_tools import (
    OpenAIToolProvider,
    execute_openai_tool,
    get_openai_tools,
)

__all__ = [
    "BaseToolProvider",
    # OpenAI
    "OpenAIToolProvider",
    "get_openai_tools",
    "execute_openai_tool",
    # LangChain
    "LangChainToolProvider",
    "get_langchain_tools",
    "execute_langchain_tool",
]
