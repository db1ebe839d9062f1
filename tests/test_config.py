"""
File: tests/test_config.py
Tests for AppSettings and the per-user .env helpers.
"""
import sys

import pytest
from pydantic import ValidationError

import core.config
from core.config import AppSettings, write_user_env_vars


def test_defaults(monkeypatch):
    for name in ("BASE_URL", "RESOURCE", "DISCARD_STALE_SELECTIONS"):
        monkeypatch.delenv(f"ANIMAL_VOTES_{name}", raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "http://localhost:3000"
    assert settings.resource == "characters"
    assert settings.discard_stale_selections is False
    assert settings.collection_url == "http://localhost:3000/characters"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("ANIMAL_VOTES_BASE_URL", "http://animals.test:8080/")
    monkeypatch.setenv("ANIMAL_VOTES_DISCARD_STALE_SELECTIONS", "true")
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "http://animals.test:8080/"
    assert settings.discard_stale_selections is True
    assert settings.collection_url == "http://animals.test:8080/characters"


@pytest.mark.parametrize(
    "field, value",
    [
        ("resource", "chars/../x"),
        ("http_timeout_seconds", 0),
        ("log_level", "LOUD"),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, **{field: value})


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout only")
def test_write_user_env_vars_merges(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    path = write_user_env_vars({"ANIMAL_VOTES_BASE_URL": "http://a.test"})
    assert path == tmp_path / "animal-votes" / ".env"

    write_user_env_vars({"ANIMAL_VOTES_RESOURCE": "pets", "ANIMAL_VOTES_LOG_LEVEL": None})
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == [
        "ANIMAL_VOTES_BASE_URL=http://a.test",
        "ANIMAL_VOTES_RESOURCE=pets",
    ]


def test_parse_env_lines_ignores_noise():
    parsed = core.config._parse_env_lines('# c\n\nNOEQUALS\nA="1"\n B = \'two\' \n')
    assert parsed == {"A": "1", "B": "two"}
