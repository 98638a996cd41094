"""Tests for configuration module."""

from pathlib import Path

from mnemo.core.config import Settings
from mnemo.memory.system import MemorySystemConfig


def test_default_settings():
    """Settings load with defaults."""
    settings = Settings(
        _env_file=None,  # Don't load .env in tests
    )
    assert settings.data_dir == Path("data")
    assert settings.w_similarity == 1.0
    assert settings.index_limit == 32


def test_log_path():
    """Log path lives in the data directory."""
    settings = Settings(data_dir=Path("/tmp/test"), _env_file=None)
    assert settings.log_path == Path("/tmp/test/mnemo.log")


def test_env_overrides(monkeypatch):
    """Environment variables override defaults."""
    monkeypatch.setenv("MNEMO_GRAPH_BOOST", "0.75")
    monkeypatch.setenv("MNEMO_CONSOLIDATION_THRESHOLD", "0.6")
    settings = Settings(_env_file=None)
    assert settings.graph_boost == 0.75
    assert settings.consolidation_threshold == 0.6


def test_system_config():
    """System config mirrors the scoring settings."""
    settings = Settings(w_similarity=2.0, w_graph=0.0, _env_file=None)
    config = settings.system_config()
    assert config == MemorySystemConfig(
        w_similarity=2.0,
        w_graph=0.0,
        graph_boost=settings.graph_boost,
        consolidation_threshold=settings.consolidation_threshold,
    )


def test_summarizer_from_settings():
    """Summarizer uses the configured models and credentials."""
    settings = Settings(
        summarizer_model="openai/gpt-4o-mini",
        llm_api_key="sk-test",
        llm_api_base="http://localhost:1234/v1",
        _env_file=None,
    )

    summarizer = settings.summarizer()

    assert summarizer.model == "openai/gpt-4o-mini"
    assert summarizer.api_key == "sk-test"
    assert summarizer.api_base == "http://localhost:1234/v1"
    assert callable(summarizer.embed)


def test_summarizer_without_credentials():
    """Empty credentials are not forwarded."""
    summarizer = Settings(_env_file=None).summarizer()
    assert summarizer.api_key is None
    assert summarizer.api_base is None
