from __future__ import annotations

from pathlib import Path

import pytest

from nodecred.core.config import Config, CredentialsConfig
from nodecred.core.exceptions import ConfigError
from nodecred.security.manager import CredentialManager

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_repo_default_config_loads() -> None:
    cfg = Config.from_repo_defaults(REPO_ROOT)
    assert cfg.credentials.pool_size == 32
    assert cfg.credentials.secret_key == ""
    assert cfg.logging.level == "INFO"


def test_config_loads_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "nodecred.yaml"
    path.write_text("credentials:\n  pool_size: 4\nlogging:\n  level: debug\n  json_output: true\n")

    cfg = Config.from_yaml(path)
    assert cfg.credentials.pool_size == 4
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.json_output is True


def test_config_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODECRED_CREDENTIALS__SECRET_KEY", "0x" + "ab" * 32)
    monkeypatch.setenv("NODECRED_CREDENTIALS__POOL_SIZE", "8")
    cfg = Config()  # BaseSettings reads env
    assert cfg.credentials.key_bytes() == b"\xab" * 32
    assert cfg.credentials.pool_size == 8


def test_env_secret_merges_with_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODECRED_CREDENTIALS__SECRET_KEY", "cd" * 16)
    path = tmp_path / "nodecred.yaml"
    path.write_text("credentials:\n  pool_size: 2\n")

    cfg = Config.from_yaml(path)
    assert cfg.credentials.pool_size == 2
    assert cfg.credentials.key_bytes() == b"\xcd" * 16


def test_config_from_yaml_raises_if_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Config.from_yaml(tmp_path / "missing.yaml")


@pytest.mark.parametrize("body", ["credentials: [unclosed\n", "- just\n- a list\n"])
def test_config_from_yaml_rejects_bad_documents(tmp_path: Path, body: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(body)
    with pytest.raises(ConfigError):
        Config.from_yaml(path)


@pytest.mark.parametrize("secret", ["", "   ", "0x", "not-hex", "abc"])
def test_key_bytes_rejects_missing_or_malformed(secret: str) -> None:
    with pytest.raises(ConfigError):
        CredentialsConfig(secret_key=secret).key_bytes()


def test_secret_key_not_in_repr() -> None:
    cfg = CredentialsConfig(secret_key="ab" * 32)
    assert "ab" * 32 not in repr(cfg)


def test_negative_pool_size_rejected() -> None:
    with pytest.raises(ValueError):
        CredentialsConfig(pool_size=-1)


@pytest.mark.parametrize("body", ["credentials:\n  pool_size: -1\n", "credentials:\n  pool_size: many\n", "logging:\n  level: LOUD\n"])
def test_config_from_yaml_rejects_invalid_values(tmp_path: Path, body: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(body)
    with pytest.raises(ConfigError, match="Invalid configuration"):
        Config.from_yaml(path)


def test_config_from_env_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODECRED_CREDENTIALS__POOL_SIZE", "-1")
    with pytest.raises(ConfigError, match="credentials.pool_size"):
        Config.from_env()


def test_invalid_config_message_omits_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODECRED_CREDENTIALS__SECRET_KEY", "ab" * 32)
    monkeypatch.setenv("NODECRED_LOGGING__LEVEL", "LOUD")
    with pytest.raises(ConfigError) as exc:
        Config.from_env()
    assert "ab" * 32 not in str(exc.value)


def test_manager_from_config(key: bytes, node_id: bytes) -> None:
    cfg = Config(credentials=CredentialsConfig(secret_key=key.hex(), pool_size=3))
    from_cfg = CredentialManager.from_config(cfg)
    direct = CredentialManager(key)
    assert from_cfg.create(1, node_id, 0) == direct.create(1, node_id, 0)
