"""Runtime configuration loaded from an optional YAML file and the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """A configuration value could not be interpreted."""


@dataclass
class Settings:
    ironic_endpoint: str = "http://localhost:6385"
    ironic_api_version: str = "1.81"
    ironic_username: Optional[str] = None
    ironic_password: Optional[str] = None
    ironic_cacert: Optional[str] = None
    ironic_insecure: bool = False
    request_timeout_s: Optional[float] = None  # None keeps requests blocking
    webhook_port: int = 9443
    webhook_cert_dir: str = "/tmp/k8s-webhook-server/serving-certs"
    log_level: str = "INFO"


ENV_VARS: Dict[str, str] = {
    "ironic_endpoint": "IRONIC_ENDPOINT",
    "ironic_api_version": "IRONIC_API_VERSION",
    "ironic_username": "IRONIC_USERNAME",
    "ironic_password": "IRONIC_PASSWORD",
    "ironic_cacert": "IRONIC_CACERT_FILE",
    "ironic_insecure": "IRONIC_INSECURE",
    "request_timeout_s": "IRONIC_REQUEST_TIMEOUT",
    "webhook_port": "WEBHOOK_PORT",
    "webhook_cert_dir": "WEBHOOK_CERT_DIR",
    "log_level": "LOG_LEVEL",
}


def _coerce(key: str, value: Any) -> Any:
    if key == "ironic_insecure":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConfigError(f"{key}: expected a boolean, got {value!r}")
    if key == "webhook_port":
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key}: expected an integer, got {value!r}") from e
    if key == "request_timeout_s":
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key}: expected a number of seconds, got {value!r}") from e
    return value


def _load_yaml(path: str) -> Dict[str, Any]:
    """Read settings from a YAML file, falling back to {} if it can't be read."""
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load settings from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {path}: expected a mapping")
        return {}
    return data


def load_settings(path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from defaults, then the YAML file, then the environment.

    Args:
        path: YAML settings file, defaults to $BMO_CONFIG_PATH when set
        environ: Environment mapping (os.environ if None)

    Returns:
        Populated Settings

    Raises:
        ConfigError: If a value has the wrong type
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get("BMO_CONFIG_PATH")

    values: Dict[str, Any] = {}
    known = {f.name for f in fields(Settings)}
    if path:
        for key, value in _load_yaml(path).items():
            if key in known:
                values[key] = value
            else:
                logger.warning(f"Unknown setting '{key}' in {path}")

    for key, env_name in ENV_VARS.items():
        if env_name in environ:
            values[key] = environ[env_name]

    return Settings(**{key: _coerce(key, value) for key, value in values.items()})


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
