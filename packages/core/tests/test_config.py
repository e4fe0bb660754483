"""Tests for configuration loading."""

from sgclient_core.client import DEFAULT_BASE_URL
from sgclient_core.config import build_client, load_config


def test_defaults_applied_when_no_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("SRC_ENDPOINT", raising=False)
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["base_url"] == DEFAULT_BASE_URL
    assert config["timeout"] == 30
    assert config["user_agent"] == "sgclient"


def test_config_file_overrides_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SRC_ENDPOINT", raising=False)
    cfg = tmp_path / ".sgclient.yml"
    cfg.write_text("base_url: https://sg.example.com/.api/\ntimeout: 5\n")
    config = load_config(config_path=str(cfg))
    assert config["base_url"] == "https://sg.example.com/.api/"
    assert config["timeout"] == 5


def test_empty_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("SRC_ENDPOINT", raising=False)
    cfg = tmp_path / ".sgclient.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["base_url"] == DEFAULT_BASE_URL


def test_endpoint_env_var_overrides_file(tmp_path, monkeypatch):
    monkeypatch.setenv("SRC_ENDPOINT", "https://sg.internal")
    cfg = tmp_path / ".sgclient.yml"
    cfg.write_text("base_url: https://sg.example.com/.api/\n")
    config = load_config(config_path=str(cfg))
    assert config["base_url"] == "https://sg.internal/.api/"


def test_endpoint_env_var_with_api_path(tmp_path, monkeypatch):
    monkeypatch.setenv("SRC_ENDPOINT", "https://sg.internal/.api")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["base_url"] == "https://sg.internal/.api/"


def test_cli_overrides_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("SRC_ENDPOINT", "https://sg.internal")
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"), cli_overrides={"base_url": "http://localhost:3080/.api/"}
    )
    assert config["base_url"] == "http://localhost:3080/.api/"


def test_none_cli_overrides_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("SRC_ENDPOINT", raising=False)
    cfg = tmp_path / ".sgclient.yml"
    cfg.write_text("timeout: 5\n")
    config = load_config(config_path=str(cfg), cli_overrides={"timeout": None})
    assert config["timeout"] == 5


def test_access_token_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("SRC_ACCESS_TOKEN", "sg-token")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["access_token"] == "sg-token"


def test_defaults_are_not_shared(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["timeout"] = 1
    assert config_b["timeout"] == 30


def test_build_client(tmp_path, monkeypatch):
    monkeypatch.delenv("SRC_ENDPOINT", raising=False)
    monkeypatch.setenv("SRC_ACCESS_TOKEN", "sg-token")
    client = build_client(load_config(config_path=str(tmp_path / "nonexistent.yml")))
    assert client.base_url == DEFAULT_BASE_URL
    assert client.token == "sg-token"
    client.close()
