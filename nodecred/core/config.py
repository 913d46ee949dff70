"""nodecred.core.config

Two config surfaces only:
1) `config/default.yaml`
2) Environment variables (secrets only)

The secret key belongs in the environment. Keep it out of YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from nodecred.core.exceptions import ConfigError


def _describe(e: ValidationError) -> str:
    # Field paths and messages only; input values may hold the secret key.
    return "; ".join(".".join(str(p) for p in err["loc"]) + ": " + err["msg"] for err in e.errors())


class CredentialsConfig(BaseModel):
    """Credential manager settings."""

    secret_key: str = Field(default="", repr=False)  # hex, optional 0x prefix
    pool_size: int = 32

    @field_validator("pool_size")
    @classmethod
    def pool_size_cannot_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("pool_size must be >= 0")
        return v

    def key_bytes(self) -> bytes:
        raw = self.secret_key.strip().removeprefix("0x")
        if not raw:
            raise ConfigError("Missing secret key. Set NODECRED_CREDENTIALS__SECRET_KEY (hex).")
        try:
            return bytes.fromhex(raw)
        except ValueError as e:
            raise ConfigError("Secret key is not valid hex") from e


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def level_is_case_insensitive(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "NODECRED_", "env_nested_delimiter": "__"}

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")

        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {_describe(e)}") from e

    @classmethod
    def from_env(cls) -> Config:
        """Defaults plus environment overrides, with no file."""

        try:
            return cls()
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {_describe(e)}") from e

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        return cls.from_yaml(root / "config" / "default.yaml")
