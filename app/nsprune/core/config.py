"""Configuration model and I/O for nsprune.

The configuration is an immutable value built once at startup and passed
to the enrollment source, the cluster manager and the engine. Nothing
reads configuration from module globals.

Configuration is stored in ~/.config/nsprune/config.toml. A legacy
``config.json`` holding only ``api_url`` is also accepted.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nsprune.core.baseline import DEFAULT_PROTECTED_NAMESPACES
from nsprune.core.classify import ClassificationStrategy
from nsprune.core.paths import get_config_path
from nsprune.core.volumes import DEFAULT_VOLUME_SUFFIXES

logger = logging.getLogger(__name__)

# Environment variables consulted at load time
API_KEY_ENV = "AWSED_API_KEY"
API_URL_ENV = "NSPRUNE_API_URL"


class PruneConfig(BaseModel):
    """Settings for a reconciliation run.

    Attributes:
        api_url: Base URL of the AWSEd enrollment API.
        environment: Enrollment environment queried for the roster.
        api_key: AWSEd API key sent in the Authorization header.
        volume_suffixes: Suffixes appended to a username to name its volumes.
        strategy: How stale namespaces are detected.
        protected_namespaces: Names and glob patterns that are never deleted.
        timeout_seconds: Timeout for every call to an external service.
        lenient_existence_checks: Treat volume lookup errors as "absent".
        kubeconfig: Optional kubeconfig path used outside the cluster.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_url: Annotated[str | None, Field(description="AWSEd API base URL")] = None
    environment: Annotated[str, Field(min_length=1, description="Enrollment environment")] = (
        "dsmlp"
    )
    api_key: Annotated[str | None, Field(description="AWSEd API key")] = None
    volume_suffixes: Annotated[
        tuple[str, ...],
        Field(description="Volume name suffixes, in processing order"),
    ] = DEFAULT_VOLUME_SUFFIXES
    strategy: Annotated[
        ClassificationStrategy,
        Field(description="Stale namespace detection strategy"),
    ] = ClassificationStrategy.PER_USER
    protected_namespaces: Annotated[
        tuple[str, ...],
        Field(description="Namespaces that are never deleted"),
    ] = DEFAULT_PROTECTED_NAMESPACES
    timeout_seconds: Annotated[
        float,
        Field(gt=0, le=600, description="External call timeout in seconds"),
    ] = 30.0
    lenient_existence_checks: Annotated[
        bool,
        Field(description="Coerce volume existence-check errors to 'absent'"),
    ] = False
    kubeconfig: Annotated[str | None, Field(description="Kubeconfig path")] = None

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the API URL so paths can be appended safely."""
        if v is None:
            return None
        url = v.strip().rstrip("/")
        return url or None

    @field_validator("volume_suffixes")
    @classmethod
    def validate_suffixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty and duplicate suffixes."""
        if any(not suffix for suffix in v):
            msg = "Volume suffixes cannot be empty"
            raise ValueError(msg)
        if len(set(v)) != len(v):
            msg = f"Duplicate volume suffixes: {v}"
            raise ValueError(msg)
        return v

    @property
    def authorization_header(self) -> str:
        """Authorization header value expected by AWSEd."""
        return f"AWSEd api_key={self.api_key or ''}"

    def to_display_dict(self) -> dict[str, object]:
        """Convert to a dictionary suitable for display, with the API key masked.

        Returns:
            Dictionary of setting names to printable values.
        """
        data = self.model_dump(mode="json")
        if self.api_key:
            data["api_key"] = "****" + self.api_key[-4:] if len(self.api_key) > 8 else "****"
        return data


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def _read_raw(config_path: Path) -> dict[str, Any]:
    """Read a TOML or legacy JSON config file into a dictionary."""
    try:
        if config_path.suffix == ".json":
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(f"Config must be a table/object: {config_path}")
    return data


def _apply_env(data: dict[str, Any], env: dict[str, str] | None = None) -> dict[str, Any]:
    """Overlay environment-provided settings onto raw config data."""
    environ = os.environ if env is None else env
    merged = dict(data)
    if environ.get(API_URL_ENV):
        merged["api_url"] = environ[API_URL_ENV]
    if "api_key" not in merged and environ.get(API_KEY_ENV):
        merged["api_key"] = environ[API_KEY_ENV]
    return merged


def _validate(data: dict[str, Any]) -> PruneConfig:
    try:
        return PruneConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config(path: Path | None = None, env: dict[str, str] | None = None) -> PruneConfig:
    """Load configuration from a TOML (or legacy JSON) file.

    Environment variables are applied on top of the file: NSPRUNE_API_URL
    replaces ``api_url`` and AWSED_API_KEY provides ``api_key`` when the
    file does not set one.

    Args:
        path: Path to the config file. If None, uses the default config path.
        env: Environment mapping to consult. If None, uses os.environ.

    Returns:
        Validated, immutable PruneConfig.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the file syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    data = _read_raw(config_path)
    logger.debug("Loaded config from %s", config_path)
    return _validate(_apply_env(data, env))


def config_from_env(env: dict[str, str] | None = None) -> PruneConfig:
    """Build a configuration from defaults and environment variables only.

    Args:
        env: Environment mapping to consult. If None, uses os.environ.

    Returns:
        Validated, immutable PruneConfig.

    Raises:
        ConfigError: If the environment holds invalid values.
    """
    return _validate(_apply_env({}, env))


def save_config(config: PruneConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The API key is never written; it is expected to come from the
    environment. The file is written atomically via a temporary file
    and os.replace().

    Args:
        config: The PruneConfig to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: PruneConfig) -> dict[str, Any]:
    """Convert PruneConfig to a dictionary for TOML serialization.

    None values and the API key are left out.

    Args:
        config: The PruneConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump(mode="json", exclude={"api_key"})
    return {key: value for key, value in data.items() if value is not None}
