from __future__ import annotations

import json
from pathlib import Path

import pytest

from vpm_validator.ingestion import index_config
from vpm_validator.ingestion.index_config import (
    CONFIG_PATH_ENV_VAR,
    ConfigError,
    default_settings,
    load_settings,
    load_settings_or_default,
)
from vpm_validator.ingestion.index_feed import DEFAULT_INDEX_URL


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_settings_json(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "settings.json",
        {
            "indices": [
                {"id": "public", "url": "https://example.com/index.json"},
                {
                    "id": "private",
                    "url": "https://example.com/private.json",
                    "enabled": False,
                    "description": "Private listing",
                    "token_env": "PRIVATE_INDEX_TOKEN",
                },
            ]
        },
    )
    settings = load_settings(path)

    assert [s.id for s in settings.indices] == ["public", "private"]
    assert [s.id for s in settings.get_enabled_indices()] == ["public"]
    private = settings.indices[1]
    assert private.description == "Private listing"
    assert private.token_env == "PRIVATE_INDEX_TOKEN"


def test_load_settings_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "indices:\n"
        "  - id: local\n"
        "    url: ./index.json\n"
        "    description: Checked-in listing\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.indices[0].url == "./index.json"
    assert settings.indices[0].enabled is True


def test_token_comes_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = _write(
        tmp_path / "settings.json",
        {"indices": [{"id": "private", "url": "https://x.test/i.json", "token_env": "IDX_TOKEN"}]},
    )
    source = load_settings(path).indices[0]

    monkeypatch.delenv("IDX_TOKEN", raising=False)
    assert source.token is None
    monkeypatch.setenv("IDX_TOKEN", "abc")
    assert source.token == "abc"


def test_settings_path_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = _write(tmp_path / "custom.json", {"indices": [{"id": "env", "url": "https://x.test"}]})
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(path))
    assert load_settings().indices[0].id == "env"


@pytest.mark.parametrize(
    "data,message",
    [
        ([], "must be a mapping"),
        ({}, "missing required 'indices'"),
        ({"indices": {}}, "must be an array"),
        ({"indices": []}, "at least one entry"),
        ({"indices": ["x"]}, "must be an object"),
        ({"indices": [{"url": "https://x.test"}]}, "missing required 'id'"),
        ({"indices": [{"id": "a"}]}, "missing required 'url'"),
        ({"indices": [{"id": "a", "url": "u", "enabled": "yes"}]}, "'enabled'"),
        ({"indices": [{"id": "a", "url": "u", "description": 1}]}, "'description'"),
        ({"indices": [{"id": "a", "url": "u", "token_env": 1}]}, "'token_env'"),
        ({"indices": [{"id": "a", "url": "u"}, {"id": "a", "url": "v"}]}, "Duplicate index ID"),
    ],
)
def test_load_settings_errors(tmp_path: Path, data: object, message: str) -> None:
    path = _write(tmp_path / "settings.json", data)
    with pytest.raises(ConfigError, match=message):
        load_settings(path)


def test_load_settings_missing_or_malformed(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "missing.json")

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_settings(bad_json)

    bad_yaml = tmp_path / "bad.yml"
    bad_yaml.write_text("indices: [", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings(bad_yaml)


def test_default_settings_when_nothing_configured(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.setattr(index_config, "DEFAULT_CONFIG_PATH", tmp_path / "settings.json")

    settings = load_settings_or_default()

    assert settings == default_settings()
    assert [s.url for s in settings.get_enabled_indices()] == [DEFAULT_INDEX_URL]


def test_explicit_missing_settings_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings_or_default(tmp_path / "missing.json")
