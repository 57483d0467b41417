"""Shared fixtures for GenFS tests."""

import logging

import pytest

from genfs import CommandExecutor, GenFSConfig, VirtualFileSystem


@pytest.fixture
def vfs():
    """An empty file system."""
    return VirtualFileSystem()


@pytest.fixture
def populated_vfs():
    """A small project tree."""
    fs = VirtualFileSystem()
    fs.create_file_with_parents("/App.jsx", "import Button from './components/Button';\n")
    fs.create_file_with_parents("/components/Button.jsx", "export default function Button() {}\n")
    fs.create_file_with_parents("/components/forms/Input.jsx", "<input />")
    fs.create_directory("/assets")
    return fs


@pytest.fixture
def executor(vfs):
    return CommandExecutor(vfs)


@pytest.fixture
def events(executor):
    """Events published by the executor fixture, in order."""
    received = []
    executor.subscribe(received.append)
    return received


@pytest.fixture
def mock_config():
    """Configuration that always uses the scripted mock model."""
    return GenFSConfig.default_mock()


@pytest.fixture(autouse=True)
def _clean_provider_env(monkeypatch):
    for name in (
        "PROVIDER",
        "OPENROUTER_API_KEY",
        "ANTHROPIC_API_KEY",
        "OPENROUTER_MODEL",
        "ANTHROPIC_MODEL",
        "GENFS_DEBUG",
        "GENFS_MAX_STEPS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    logging.getLogger("genfs").setLevel(logging.NOTSET)
