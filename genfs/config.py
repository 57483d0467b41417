"""
Configuration management for GenFS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal

from dotenv import load_dotenv

# Provider type definitions
ProviderType = Literal["openrouter", "anthropic", "mock"]

PROVIDER_TYPES: tuple[str, ...] = ("openrouter", "anthropic", "mock")


@dataclass
class ProviderConfig:
    """Configuration for the language model backend."""

    # Explicitly requested provider; None means pick by available API keys
    provider: str | None = None
    # OpenRouter
    openrouter_api_key: str | None = None
    openrouter_model: str = "anthropic/claude-sonnet-4.5"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    # Anthropic
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-haiku-4-5"
    # Mock
    mock_model: str = "mock-claude-sonnet-4-0"
    max_output_tokens: int = 10_000


@dataclass
class AgentConfig:
    """Configuration for the agent loop of a single turn."""

    # Step ceilings stop runaway tool loops; the simulated backend gets less
    max_steps: int = 40
    mock_max_steps: int = 4
    prompt_caching: bool = True


@dataclass
class EditorConfig:
    """Configuration for the file editing commands."""

    # Edits remembered per file for undo_edit
    undo_depth: int = 1


@dataclass
class GenFSConfig:
    """Main configuration for GenFS."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)

    # Debug mode - enables verbose logging for diagnosing issues
    debug: bool = False

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "GenFSConfig":
        """
        Create configuration from environment variables.

        Args:
            dotenv: Load a .env file into the environment first.
        """
        if dotenv:
            load_dotenv()

        config = cls()

        explicit = (os.getenv("PROVIDER") or "").strip().lower()
        config.provider.provider = explicit or None
        config.provider.openrouter_api_key = (os.getenv("OPENROUTER_API_KEY") or "").strip() or None
        config.provider.anthropic_api_key = (os.getenv("ANTHROPIC_API_KEY") or "").strip() or None
        config.provider.openrouter_model = os.getenv(
            "OPENROUTER_MODEL", config.provider.openrouter_model
        )
        config.provider.anthropic_model = os.getenv(
            "ANTHROPIC_MODEL", config.provider.anthropic_model
        )

        max_steps = os.getenv("GENFS_MAX_STEPS")
        if max_steps:
            config.agent.max_steps = int(max_steps)

        config.debug = os.getenv("GENFS_DEBUG", "").lower() in ("1", "true", "yes")

        return config

    @classmethod
    def default_mock(cls) -> "GenFSConfig":
        """Create a configuration that always uses the simulated backend (no API keys)."""
        return cls(provider=ProviderConfig(provider="mock"))
