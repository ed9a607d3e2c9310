"""Configuration loading and validation for the upload tool."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from phrase_upload.client import DEFAULT_BASE_URL
from phrase_upload.errors import ArgumentError, ConfigError, FileReadError

TOKEN_ENV_VAR = "PHRASE_ACCESS_TOKEN"
BASE_URL_ENV_VAR = "PHRASE_BASE_URL"


@dataclass
class PhraseConfig:
    """Phrase API access."""

    access_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None


@dataclass
class UploadConfig:
    """Where the uploaded strings go."""

    project_name: str = ""
    locale: str = "en"


@dataclass
class AppConfig:
    """Top-level application configuration."""

    phrase: PhraseConfig = field(default_factory=PhraseConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)


def load_config_file(config_path: str | Path) -> AppConfig:
    """Load configuration from a YAML file.

    The file may contain a ``phrase`` section (``access_token``,
    ``base_url``, ``timeout``) and an ``upload`` section (``project_name``,
    ``locale``). Missing values keep their defaults.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        AppConfig populated from the file, not yet validated.

    Raises:
        FileReadError: If the file cannot be read.
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise FileReadError(str(config_path), str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    phrase_raw = _section(raw, "phrase", config_path)
    phrase = PhraseConfig(
        access_token=str(phrase_raw.get("access_token", PhraseConfig.access_token) or ""),
        base_url=phrase_raw.get("base_url") or PhraseConfig.base_url,
        timeout=phrase_raw.get("timeout"),
    )

    upload_raw = _section(raw, "upload", config_path)
    upload = UploadConfig(
        project_name=str(upload_raw.get("project_name", UploadConfig.project_name) or ""),
        locale=str(upload_raw.get("locale") or UploadConfig.locale),
    )

    return AppConfig(phrase=phrase, upload=upload)


def _section(raw: dict, name: str, config_path: str | Path) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' in {config_path} must be a mapping")
    return section


def resolve_config(
    access_token: str | None = None,
    project_name: str | None = None,
    locale: str | None = None,
    config_path: str | None = None,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Merge command-line values, environment and config file.

    Command-line values win over the environment, which wins over the
    config file.

    Raises:
        ArgumentError: If the access token or project name is missing.
        ConfigError: If a value is present but unusable.
    """
    env = os.environ if environ is None else environ
    config = load_config_file(config_path) if config_path else AppConfig()

    if access_token:
        config.phrase.access_token = access_token
    elif env.get(TOKEN_ENV_VAR):
        config.phrase.access_token = env[TOKEN_ENV_VAR]

    if env.get(BASE_URL_ENV_VAR):
        config.phrase.base_url = env[BASE_URL_ENV_VAR]

    if project_name:
        config.upload.project_name = project_name
    if locale:
        config.upload.locale = locale

    _validate_config(config)
    return config


def _validate_config(config: AppConfig) -> None:
    if not config.phrase.access_token:
        raise ArgumentError("access-token")

    if not config.upload.project_name:
        raise ArgumentError("project-name")

    if not config.upload.locale:
        raise ConfigError("locale must not be empty.")

    if not isinstance(config.phrase.base_url, str) or not config.phrase.base_url:
        raise ConfigError("Phrase base_url must be a non-empty string.")

    timeout = config.phrase.timeout
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds.")
