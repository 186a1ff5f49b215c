# risk_scanner/config.py
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import yaml


class ConfigError(Exception):
    pass


def _env_timeout() -> Optional[float]:
    raw = os.getenv("RISK_SCANNER_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"RISK_SCANNER_TIMEOUT must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    api_base: str = field(
        default_factory=lambda: os.getenv("RISK_SCANNER_API_BASE", "http://127.0.0.1:8080")
    )
    # seconds; None waits forever
    request_timeout: Optional[float] = field(default_factory=_env_timeout)
    log_level: str = field(
        default_factory=lambda: os.getenv("RISK_SCANNER_LOG_LEVEL", "WARNING")
    )
    config_path: Optional[str] = field(
        default_factory=lambda: os.getenv("RISK_SCANNER_CONFIG") or None
    )


def load_config_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    known = {f.name for f in fields(Settings)} - {"config_path"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown settings: {', '.join(unknown)}")

    if data.get("request_timeout") is not None:
        try:
            data["request_timeout"] = float(data["request_timeout"])
        except (TypeError, ValueError):
            raise ConfigError(f"{path}: request_timeout must be a number")

    for key in ("api_base", "log_level"):
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"{path}: {key} must be a string")

    return data


def load_settings(path: Optional[str] = None, **overrides) -> Settings:
    """
    Environment first, then the YAML file (explicit path or
    RISK_SCANNER_CONFIG), then keyword overrides that are not None.
    """
    base = Settings()

    path = path or base.config_path
    if path:
        base = replace(base, config_path=path, **load_config_file(path))

    given = {k: v for k, v in overrides.items() if v is not None}
    return replace(base, **given) if given else base
