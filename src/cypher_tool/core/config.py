"""Configuration management for Cypher Tool.

Handles TOML config files, environment variables, named profiles,
and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--user, --password, --format, etc.)
2. --uri flag (credentials embedded in the URI are split out)
3. Environment variables (NEO4J_URI, NEO4J_USERNAME, NEO4J_PASSWORD, NEO4J_DATABASE)
4. Named profile (--profile or CYPHER_PROFILE env var)
5. Config file defaults
6. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any
from urllib.parse import urlparse, urlunparse

from pydantic import BaseModel, field_validator, model_validator

from cypher_tool.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cypher-tool" / "config.toml"

VALID_SCHEMES = frozenset(
    {"neo4j", "neo4j+s", "neo4j+ssc", "bolt", "bolt+s", "bolt+ssc"}
)
VALID_FORMATS = ("plain", "verbose")

_NEO4J_ENV_VARS: dict[str, str] = {
    "NEO4J_URI": "uri",
    "NEO4J_USERNAME": "user",
    "NEO4J_PASSWORD": "password",  # pragma: allowlist secret
    "NEO4J_DATABASE": "database",
}

_PROFILE_DEFAULTS: dict[str, Any] = {
    "uri": "neo4j://localhost:7687",
    "user": "neo4j",
    "password": None,
    "database": None,
    "connection_timeout": 30.0,
}

_GENERAL_DEFAULTS: dict[str, Any] = {
    "default_timeout": 30.0,
    "default_format": None,
    "width": -1,
    "wrap": True,
}


def parse_uri(uri: str) -> dict[str, Any]:
    """Split a bolt/neo4j URI into the bare URI and any embedded credentials."""
    parsed = urlparse(uri)
    if parsed.scheme not in VALID_SCHEMES:
        msg = (
            f"Invalid URI scheme: '{parsed.scheme}'. "
            f"Expected one of: {', '.join(sorted(VALID_SCHEMES))}"
        )
        raise ConfigError(msg)

    result: dict[str, Any] = {}
    if parsed.username:
        result["user"] = parsed.username
    if parsed.password:
        result["password"] = parsed.password

    netloc = parsed.hostname or ""
    if parsed.port:
        netloc += f":{parsed.port}"
    result["uri"] = urlunparse(parsed._replace(netloc=netloc))
    return result


def _validate_format(value: str | None) -> str | None:
    if value is not None and value not in VALID_FORMATS:
        msg = f"Invalid format: '{value}'. Must be one of: {', '.join(VALID_FORMATS)}"
        raise ValueError(msg)
    return value


class Neo4jProfile(BaseModel):
    uri: str = "neo4j://localhost:7687"
    user: str = "neo4j"
    password: str | None = None
    database: str | None = None
    connection_timeout: float = 30.0

    @model_validator(mode="before")
    @classmethod
    def split_uri_credentials(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("uri"):
            uri_fields = parse_uri(data["uri"])
            data = {**data, "uri": uri_fields.pop("uri")}
            for key, value in uri_fields.items():
                data.setdefault(key, value)
        return data


class AppConfig(BaseModel):
    default_timeout: float = 30.0
    default_format: str | None = None
    width: int = -1
    wrap: bool = True
    default_profile: str | None = None
    profiles: dict[str, Neo4jProfile] = {}

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v: str | None) -> str | None:
        return _validate_format(v)


class ResolvedConfig(BaseModel):
    uri: str = "neo4j://localhost:7687"
    user: str = "neo4j"
    password: str | None = None
    database: str | None = None
    connection_timeout: float = 30.0
    default_timeout: float = 30.0
    default_format: str | None = None
    width: int = -1
    wrap: bool = True
    active_profile: str | None = None
    sources: dict[str, str] = {}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except ConfigError:
        raise
    except Exception as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_config(
    config: AppConfig,
    profile_name: str | None = None,
    uri: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > URI > env > profile > config defaults > built-in defaults.
    """
    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {}

    # Layer 1: Built-in defaults
    resolved.update(_PROFILE_DEFAULTS)
    resolved.update(_GENERAL_DEFAULTS)
    for key in resolved:
        sources[key] = "default"

    # Layer 2: Config file global defaults
    for key, default in _GENERAL_DEFAULTS.items():
        value = getattr(config, key)
        if value != default:
            resolved[key] = value
            sources[key] = "config"

    # Layer 3: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("CYPHER_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            if key in resolved:
                resolved[key] = getattr(profile, key)
                sources[key] = f"profile: {effective_profile}"

    # Layer 4: Environment variables
    for env_var, field_name in _NEO4J_ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if field_name == "uri":
            for key, uri_value in parse_uri(value).items():
                resolved[key] = uri_value
                sources[key] = f"env: {env_var}"
        else:
            resolved[field_name] = value
            sources[field_name] = f"env: {env_var}"

    # Layer 5: URI flag
    if uri:
        for key, value in parse_uri(uri).items():
            resolved[key] = value
            sources[key] = "uri"

    # Layer 6: CLI flags (highest priority)
    cli_to_field = {
        "user": "user",
        "password": "password",  # pragma: allowlist secret
        "database": "database",
        "timeout": "default_timeout",
        "format": "default_format",
        "width": "width",
        "wrap": "wrap",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"cli: --{cli_name}"

    try:
        _validate_format(resolved["default_format"])
    except ValueError as e:
        raise ConfigError(str(e)) from None

    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    return ResolvedConfig(**resolved)
