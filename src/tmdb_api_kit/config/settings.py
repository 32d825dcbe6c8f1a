from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from tmdb_api_kit.clients.tmdb import DEFAULT_TIMEOUT, TmdbClient

CONFIG_PATH_ENV = "TMDB_API_KIT_CONFIG"


class Settings(BaseModel):
    """CLI configuration resolved from env vars and optional TOML files."""

    bearer_token: str | None = Field(default=None, alias="TMDB_BEARER_TOKEN")
    language: str | None = Field(default=None, alias="TMDB_LANGUAGE")
    region: str | None = Field(default=None, alias="TMDB_REGION")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, alias="TMDB_TIMEOUT")

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "extra": "ignore",
    }

    def require_token(self) -> None:
        """Ensure a TMDB bearer token is available."""
        if not self.bearer_token:
            raise SettingsError(
                "Missing TMDB_BEARER_TOKEN. Configure environment or TOML file.",
            )

    def build_client(self) -> TmdbClient:
        self.require_token()
        return TmdbClient(
            self.bearer_token,  # type: ignore[arg-type]
            timeout=self.timeout,
            default_language=self.language,
            default_region=self.region,
        )


class SettingsError(RuntimeError):
    """Raised when configuration cannot be resolved."""


@dataclass(frozen=True)
class SettingsLoadResult:
    settings: Settings
    source_path: Path | None


def load_settings(config_path: Path | None = None, *, load_env: bool = True) -> SettingsLoadResult:
    """Load settings from .env files, environment variables, and optional TOML configuration."""

    if load_env:
        load_dotenv()

    resolved_path = _determine_config_path(config_path)
    config_data: dict[str, Any] = {}

    if resolved_path and resolved_path.exists():
        with resolved_path.open("rb") as handle:
            toml_payload = tomllib.load(handle)
        config_data = _flatten_toml(toml_payload)

    env_data = _collect_env_overrides()
    merged = {**config_data, **env_data}

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc

    return SettingsLoadResult(settings=settings, source_path=resolved_path)


def _determine_config_path(config_path: Path | None) -> Path | None:
    if config_path:
        return config_path

    env_override = os.getenv(CONFIG_PATH_ENV)
    if env_override:
        return Path(env_override).expanduser().resolve()

    default_path = Path.home() / ".config" / "tmdb-api-kit" / "config.toml"
    return default_path if default_path.exists() else None


def _flatten_toml(payload: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}

    tmdb_cfg = payload.get("tmdb", {})
    if not isinstance(tmdb_cfg, dict):
        return result
    if "bearer_token" in tmdb_cfg:
        result["bearer_token"] = tmdb_cfg.get("bearer_token")
    if "language" in tmdb_cfg:
        result["language"] = tmdb_cfg.get("language")
    if "region" in tmdb_cfg:
        result["region"] = tmdb_cfg.get("region")
    if "timeout" in tmdb_cfg:
        result["timeout"] = tmdb_cfg.get("timeout")
    return result


def _collect_env_overrides() -> dict[str, Any]:
    mapping: dict[str, str] = {
        "TMDB_BEARER_TOKEN": "bearer_token",
        "TMDB_LANGUAGE": "language",
        "TMDB_REGION": "region",
        "TMDB_TIMEOUT": "timeout",
    }

    result: dict[str, Any] = {}
    for env_name, field in mapping.items():
        if env_name not in os.environ:
            continue
        value = os.environ[env_name]
        if field == "timeout":
            try:
                result[field] = float(value)
            except ValueError as exc:
                raise SettingsError(f"{env_name} must be a number, got {value!r}") from exc
        else:
            result[field] = value
    return result


__all__ = ["Settings", "SettingsError", "SettingsLoadResult", "load_settings"]
