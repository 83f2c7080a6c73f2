"""Tests for settings loading."""

import os
from pathlib import Path

import pytest

from hypertask.config import DEFAULT_STATIC_DIR, Settings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Swap in a copy of the environment without HYPERTASK_* variables."""
    environ = {key: value for key, value in os.environ.items() if not key.startswith("HYPERTASK_")}
    monkeypatch.setattr(os, "environ", environ)
    return environ


def test_defaults(clean_env: dict, tmp_path: Path) -> None:
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings == Settings()
    assert settings.port == 8070
    assert settings.static_dir == DEFAULT_STATIC_DIR
    assert settings.seed is True


def test_environment_overrides(clean_env: dict, tmp_path: Path) -> None:
    clean_env.update(
        {
            "HYPERTASK_HOST": "0.0.0.0",
            "HYPERTASK_PORT": "9000",
            "HYPERTASK_STATIC_DIR": str(tmp_path),
            "HYPERTASK_SEED": "false",
            "HYPERTASK_LOG_LEVEL": "debug",
        }
    )
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.static_dir == tmp_path
    assert settings.seed is False
    assert settings.log_level == "DEBUG"


def test_bad_port_falls_back_to_default(clean_env: dict, tmp_path: Path) -> None:
    clean_env["HYPERTASK_PORT"] = "eighty"
    assert Settings.from_env(tmp_path / "missing.env").port == 8070


def test_env_file(clean_env: dict, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("HYPERTASK_PORT=8123\nHYPERTASK_SEED=0\n")
    settings = Settings.from_env(env_file)
    assert settings.port == 8123
    assert settings.seed is False


def test_environment_wins_over_env_file(clean_env: dict, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("HYPERTASK_PORT=8123\n")
    clean_env["HYPERTASK_PORT"] = "8200"
    assert Settings.from_env(env_file).port == 8200
