"""Tests for pydantic-settings-backed configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.faultline.config import FaultlineSettings, load_settings


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params should override env, env should override YAML, then defaults."""
    config_file = tmp_path / "faultline.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  service: from-yaml",
                "http:",
                "  decoder:",
                "    max_body_bytes: 2048",
                "  client:",
                "    base_url: https://yaml.test",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("FAULTLINE_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("FAULTLINE_HTTP__DECODER__DISALLOW_UNKNOWN_FIELDS", "true")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.logging.service == "from-yaml"
    assert settings.http.decoder.max_body_bytes == 2048
    assert settings.http.decoder.disallow_unknown_fields is True
    assert settings.http.client.base_url == "https://yaml.test"


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings should fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "missing.yaml")

    assert settings.logging.level == "INFO"
    assert settings.logging.json_output is True
    assert settings.http.decoder.skip_check_content_type is False
    assert settings.http.decoder.max_body_bytes == 1_048_576
    assert settings.http.client.timeout_seconds == 10.0
    assert isinstance(settings, FaultlineSettings)


def test_load_settings_rejects_invalid_values(tmp_path: Path) -> None:
    """Constrained fields should be validated."""
    config_file = tmp_path / "faultline.yaml"
    config_file.write_text("http:\n  decoder:\n    max_body_bytes: 0\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(config_path=config_file)
