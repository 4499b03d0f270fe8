"""Configuration module: frozen dataclass loaded from env vars and optional YAML."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://papertrailapp.com/api/v1/events/search.json"


class ConfigError(ValueError):
    """Raised when a required setting is missing or invalid."""


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_flag(value: str) -> bool:
    """TEST_MODE style flag: any non-empty value except an explicit false."""
    value = value.strip().lower()
    return value not in ("", "0", "false", "no")


@dataclass(frozen=True)
class Config:
    system_name: str = ""
    system_url: str = ""
    papertrail_token: str = ""
    influxdb_url: str = ""
    port: int = 9000
    timeout_on_search: int = 3600
    time_to_failure: int = 60
    dry_run: bool = False
    search_url: str = DEFAULT_SEARCH_URL
    app_log_interval: float = 1.0
    http_log_interval: float = 5.0
    watch_interval: float = 5.0
    record_delay: float = 0.1
    request_timeout: float = 30.0
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise ConfigError naming every required setting that is unset."""
        missing = []
        if not self.system_name:
            missing.append("ALAMO_APPLICATION")
        if not self.system_url:
            missing.append("URL")
        if not self.papertrail_token:
            missing.append("PAPERTRAIL_TOKEN")
        if not self.influxdb_url and not self.dry_run:
            missing.append("INFLUXDB")
        if missing:
            raise ConfigError("missing required settings: " + ", ".join(missing))
        if self.timeout_on_search <= 0 or self.time_to_failure <= 0:
            raise ConfigError("TIMEOUT_ON_SEARCH and TIME_TO_FAILURE must be positive")


def load_yaml_config(path: str | None) -> dict:
    """Load settings keyed by Config field name. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    logger.info("Loaded YAML config from %s", path)
    return {k: v for k, v in data.items() if k in known}


def load_config(environ=None) -> Config:
    """Build Config from defaults <- YAML file (CONFIG_PATH) <- env vars."""
    env = os.environ if environ is None else environ
    base = load_yaml_config(env.get("CONFIG_PATH"))

    def pick(var: str, name: str):
        if var in env:
            return env[var]
        return base.get(name, getattr(Config, name))

    try:
        return Config(
            system_name=str(pick("ALAMO_APPLICATION", "system_name")),
            system_url=str(pick("URL", "system_url")).rstrip("/"),
            papertrail_token=str(pick("PAPERTRAIL_TOKEN", "papertrail_token")),
            influxdb_url=str(pick("INFLUXDB", "influxdb_url")).rstrip("/"),
            port=int(pick("PORT", "port")),
            timeout_on_search=int(pick("TIMEOUT_ON_SEARCH", "timeout_on_search")),
            time_to_failure=int(pick("TIME_TO_FAILURE", "time_to_failure")),
            dry_run=(
                _parse_flag(env["TEST_MODE"]) if "TEST_MODE" in env
                else _parse_bool(str(base.get("dry_run", Config.dry_run)))
            ),
            search_url=str(pick("SEARCH_URL", "search_url")),
            app_log_interval=float(pick("APP_LOG_INTERVAL", "app_log_interval")),
            http_log_interval=float(pick("HTTP_LOG_INTERVAL", "http_log_interval")),
            watch_interval=float(pick("WATCH_INTERVAL", "watch_interval")),
            record_delay=float(pick("RECORD_DELAY", "record_delay")),
            request_timeout=float(pick("REQUEST_TIMEOUT", "request_timeout")),
            log_level=str(pick("LOG_LEVEL", "log_level")).upper(),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid setting: {e}") from e
