"""Tests for configuration loading and provider selection."""

import logging

import pytest

from genfs import GenFSConfig
from genfs.llms import MockChatModel
from genfs.llms.providers import (
    get_chat_model,
    get_model_name,
    get_provider_type,
    supports_prompt_caching,
)


class TestFromEnv:
    def test_defaults(self):
        config = GenFSConfig.from_env(dotenv=False)

        assert config.provider.provider is None
        assert config.agent.max_steps == 40
        assert config.agent.mock_max_steps == 4
        assert config.editor.undo_depth == 1
        assert config.debug is False

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("PROVIDER", " Anthropic ")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
        monkeypatch.setenv("ANTHROPIC_MODEL", "claude-test")
        monkeypatch.setenv("GENFS_MAX_STEPS", "12")
        monkeypatch.setenv("GENFS_DEBUG", "true")

        config = GenFSConfig.from_env(dotenv=False)

        assert config.provider.provider == "anthropic"
        assert config.provider.anthropic_api_key == "sk-ant"
        assert config.provider.anthropic_model == "claude-test"
        assert config.agent.max_steps == 12
        assert config.debug is True

    def test_blank_key_is_unset(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "   ")

        assert GenFSConfig.from_env(dotenv=False).provider.openrouter_api_key is None


class TestProviderSelection:
    def make(self, provider=None, openrouter=None, anthropic=None):
        config = GenFSConfig()
        config.provider.provider = provider
        config.provider.openrouter_api_key = openrouter
        config.provider.anthropic_api_key = anthropic
        return config

    def test_no_keys_uses_mock(self):
        assert get_provider_type(self.make()) == "mock"

    def test_openrouter_preferred(self):
        assert get_provider_type(self.make(openrouter="a", anthropic="b")) == "openrouter"

    def test_anthropic_key_only(self):
        assert get_provider_type(self.make(anthropic="b")) == "anthropic"

    def test_explicit_provider_wins(self):
        assert get_provider_type(self.make("anthropic", openrouter="a", anthropic="b")) == "anthropic"

    def test_explicit_mock(self):
        assert get_provider_type(self.make("mock", openrouter="a")) == "mock"

    def test_explicit_without_key_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="genfs"):
            provider = get_provider_type(self.make("anthropic", openrouter="a"))

        assert provider == "mock"
        assert "no API key" in caplog.text

    @pytest.mark.parametrize(
        "kwargs, expected",
        [
            ({"openrouter": "a"}, "anthropic/claude-sonnet-4.5"),
            ({"anthropic": "b"}, "claude-haiku-4-5"),
            ({}, "mock-claude-sonnet-4-0"),
        ],
    )
    def test_model_name(self, kwargs, expected):
        assert get_model_name(self.make(**kwargs)) == expected

    def test_prompt_caching_only_for_anthropic(self):
        assert supports_prompt_caching(self.make(anthropic="b"))
        assert not supports_prompt_caching(self.make(openrouter="a"))

        config = self.make(anthropic="b")
        config.agent.prompt_caching = False
        assert not supports_prompt_caching(config)


def test_mock_chat_model_built_without_keys(mock_config):
    model = get_chat_model(mock_config)

    assert isinstance(model, MockChatModel)
    assert model.model == "mock-claude-sonnet-4-0"
