from pathlib import Path

import pytest
from pydantic import ValidationError

from reprise.application.config import AppConfig, resolve_config


def test_defaults(mock_home):
    config = resolve_config()
    assert config.max_new == 5
    assert config.max_review == 20
    assert config.seconds_per_card == 30
    assert config.deck_file == mock_home / ".local/share/reprise/decks.yaml"


def test_env_overrides(mock_home, monkeypatch):
    monkeypatch.setenv("REPRISE_MAX_NEW", "8")
    monkeypatch.setenv("REPRISE_DECK_FILE", str(mock_home / "d.yaml"))

    config = resolve_config()

    assert config.max_new == 8
    assert config.deck_file == (mock_home / "d.yaml").resolve()


def test_toml_file_is_read(mock_home, monkeypatch):
    cfg = mock_home / ".config/reprise/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("max_review = 40\nmax_new = 2\n")
    monkeypatch.setenv("REPRISE_MAX_NEW", "3")

    config = resolve_config()

    assert config.max_review == 40
    assert config.max_new == 3  # env beats file


def test_cli_overrides_win_and_none_is_ignored(mock_home, monkeypatch):
    monkeypatch.setenv("REPRISE_MAX_NEW", "3")
    config = resolve_config({"max_new": 9, "max_review": None, "deck_file": Path("x.yaml")})

    assert config.max_new == 9
    assert config.max_review == 20
    assert config.deck_file.is_absolute()


def test_negative_caps_rejected(mock_home):
    with pytest.raises(ValidationError):
        AppConfig(max_new=-1)


def test_fields_are_all_consumed(mock_home):
    assert set(AppConfig.model_fields) == {
        "deck_file",
        "max_new",
        "max_review",
        "seconds_per_card",
        "verbose",
    }
