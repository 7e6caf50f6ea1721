"""Tests for airelay.core.config: configuration management.

Tests cover:
- Default values for provider, path and server settings.
- Environment variable overrides via the AIRELAY_ prefix.
- The unprefixed OPENROUTER_API_KEY and PORT fallbacks.
- Automatic directory creation on initialisation.
- Pydantic validation constraints (port range).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from airelay.core.config import RelayConfig

_ENV_VARS = (
    "AIRELAY_PROVIDER_API_KEY",
    "OPENROUTER_API_KEY",
    "AIRELAY_SERVER_PORT",
    "PORT",
    "AIRELAY_VISION_MODEL_ID",
    "AIRELAY_SITE_URL",
    "PROVIDER_API_KEY",
    "SERVER_PORT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _make(temp_dir: Path, **overrides) -> RelayConfig:
    return RelayConfig(
        _env_file=None,
        uploads_dir=str(temp_dir / "uploads"),
        generated_dir=str(temp_dir / "generated"),
        **overrides,
    )


class TestConfigDefaults:
    """Verify that RelayConfig provides sensible defaults."""

    def test_default_provider(self, clean_env, temp_dir: Path):
        cfg = _make(temp_dir)
        assert cfg.provider_base_url == "https://openrouter.ai/api/v1"
        assert cfg.provider_api_key == ""
        assert cfg.site_url is None
        assert cfg.site_name is None

    def test_default_vision_model(self, clean_env, temp_dir: Path):
        assert _make(temp_dir).vision_model_id == "qwen/qwen3-32b:free"

    def test_default_server(self, clean_env, temp_dir: Path):
        cfg = _make(temp_dir)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 3000
        assert cfg.log_level == "INFO"

    def test_default_transcript_languages(self, clean_env, temp_dir: Path):
        assert _make(temp_dir).transcript_languages == ["en"]


class TestConfigEnvironment:
    """Verify environment variable loading."""

    def test_prefixed_api_key(self, clean_env, temp_dir: Path):
        clean_env.setenv("AIRELAY_PROVIDER_API_KEY", "sk-prefixed")
        assert _make(temp_dir).provider_api_key == "sk-prefixed"

    def test_openrouter_api_key_fallback(self, clean_env, temp_dir: Path):
        clean_env.setenv("OPENROUTER_API_KEY", "sk-legacy")
        assert _make(temp_dir).provider_api_key == "sk-legacy"

    def test_port_fallback(self, clean_env, temp_dir: Path):
        clean_env.setenv("PORT", "8080")
        assert _make(temp_dir).server_port == 8080

    def test_prefixed_port(self, clean_env, temp_dir: Path):
        clean_env.setenv("AIRELAY_SERVER_PORT", "9000")
        assert _make(temp_dir).server_port == 9000

    def test_vision_model_override(self, clean_env, temp_dir: Path):
        clean_env.setenv("AIRELAY_VISION_MODEL_ID", "vendor/vision-model")
        assert _make(temp_dir).vision_model_id == "vendor/vision-model"

    def test_unprefixed_field_names_ignored(self, clean_env, temp_dir: Path):
        clean_env.setenv("PROVIDER_API_KEY", "sk-stray")
        clean_env.setenv("SERVER_PORT", "9999")
        cfg = _make(temp_dir)
        assert cfg.provider_api_key == ""
        assert cfg.server_port == 3000

    def test_prefixed_key_wins_over_fallback(self, clean_env, temp_dir: Path):
        clean_env.setenv("AIRELAY_PROVIDER_API_KEY", "sk-prefixed")
        clean_env.setenv("OPENROUTER_API_KEY", "sk-legacy")
        assert _make(temp_dir).provider_api_key == "sk-prefixed"

    def test_transcript_languages_json(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("AIRELAY_TRANSCRIPT_LANGUAGES", '["de", "en"]')
        assert _make(temp_dir).transcript_languages == ["de", "en"]


class TestConfigDirectoryCreation:
    """Verify that RelayConfig creates its working directories."""

    def test_directories_created(self, temp_dir: Path):
        cfg = _make(temp_dir)
        assert cfg.uploads_dir.is_dir()
        assert cfg.generated_dir.is_dir()

    def test_nested_directories_created(self, temp_dir: Path):
        cfg = RelayConfig(
            _env_file=None,
            uploads_dir=str(temp_dir / "a" / "b" / "uploads"),
            generated_dir=str(temp_dir / "c" / "generated"),
        )
        assert cfg.uploads_dir.is_dir()
        assert cfg.generated_dir.is_dir()


class TestConfigValidation:
    @pytest.mark.parametrize("port", [80, 70000])
    def test_port_out_of_range(self, clean_env, temp_dir: Path, port):
        with pytest.raises(ValidationError):
            _make(temp_dir, server_port=port)

    def test_keyword_overrides(self, clean_env, temp_dir: Path):
        cfg = _make(temp_dir, provider_api_key="sk-kw", server_port=4000)
        assert cfg.provider_api_key == "sk-kw"
        assert cfg.server_port == 4000
