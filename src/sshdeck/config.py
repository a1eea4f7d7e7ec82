"""Configuration models for sshdeck."""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

APP_NAME = "sshdeck"
CONFIG_FILE = "config.yaml"
LOG_FILE = "sshdeck.log"

SUPPORTED_FEATURES = ["ssh_config"]

# Environment variable -> AppConfig field.
ENV_VARS = {
    "GG_HOME": "app_home",
    "GG_LOG_LEVEL": "log_level",
    "SSH_CONFIG_FILE_PATH": "ssh_config_file_path",
}


def default_app_home() -> str:
    """Per-user configuration folder, e.g. ~/.config/sshdeck."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return str(Path(base) / APP_NAME)


def default_ssh_config_path() -> str:
    return str(Path.home() / ".ssh" / "config")


class AppConfig(BaseModel):
    """Main sshdeck configuration."""

    app_home: str = default_app_home()
    log_level: Literal["debug", "info"] = "info"
    ssh_config_file_path: str = default_ssh_config_path()
    ssh_config_enabled: bool = True
    hosts_file: str = "hosts.yaml"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("app_home", "ssh_config_file_path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        return os.path.expanduser(v)

    @property
    def hosts_path(self) -> Path:
        return Path(self.app_home) / self.hosts_file

    @property
    def log_path(self) -> Path:
        return Path(self.app_home) / LOG_FILE

    def describe(self) -> dict[str, str]:
        """Human-readable summary of the effective settings."""
        summary = {
            "App home": self.app_home,
            "Log level": self.log_level,
            "SSH config enabled": str(self.ssh_config_enabled).lower(),
        }
        if self.ssh_config_enabled:
            summary["SSH config path"] = self.ssh_config_file_path
        return summary


def load_config(path: Path) -> dict:
    """Load raw settings from a YAML file. A missing file yields no settings."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings")
    return data


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, str]:
    environ = os.environ if environ is None else environ
    return {field: environ[var] for var, field in ENV_VARS.items() if environ.get(var)}


def apply_feature_flags(
    settings: dict,
    enable: str | None = None,
    disable: str | None = None,
) -> dict:
    """Turn optional features on or off. Raises ValueError for unknown features."""
    for feature, enabled in ((enable, True), (disable, False)):
        if not feature:
            continue
        if feature not in SUPPORTED_FEATURES:
            raise ValueError(
                f"Unsupported feature: {feature}. Supported values: {', '.join(SUPPORTED_FEATURES)}"
            )
        settings[f"{feature}_enabled"] = enabled
    return settings


def build_config(
    cli_overrides: dict | None = None,
    environ: dict[str, str] | None = None,
    enable_feature: str | None = None,
    disable_feature: str | None = None,
) -> AppConfig:
    """Merge settings: defaults < config.yaml < environment < command line."""
    cli_overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    env = env_overrides(environ)

    app_home = cli_overrides.get("app_home") or env.get("app_home") or default_app_home()
    settings = load_config(Path(os.path.expanduser(app_home)) / CONFIG_FILE)
    settings["app_home"] = app_home
    settings.update(env)
    settings.update(cli_overrides)
    apply_feature_flags(settings, enable_feature, disable_feature)

    config = AppConfig(**settings)
    for field, value in config.describe().items():
        logger.debug(f"[CONFIG] {field}: {value}")
    return config
