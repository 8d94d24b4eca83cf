"""Runtime settings assembled from the config file and CLI flags.

Precedence: CLI flags, then the config file (``--config`` or a default
location), then built-in Constants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective configuration for one CLI run."""
    search_url: str = Constants.BUKKIT_SEARCH_URL
    files_url: str = Constants.BUKKIT_FILES_URL
    game_versions: Dict[str, str] = field(default_factory=lambda: dict(Constants.GAME_VERSIONS))
    game_version: Optional[str] = None
    timeout: int = Constants.REQUEST_TIMEOUT
    retries: int = Constants.HTTP_RETRY_MAX
    packages: List[str] = field(default_factory=list)


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = cfg.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return value


def _positive_int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Config value '{key}' must be an integer") from exc
    if number < 1:
        raise ValueError(f"Config value '{key}' must be at least 1")
    return number


def settings_from_config(cfg: Dict[str, Any]) -> Settings:
    """Build Settings from a parsed configuration mapping.

    Raises:
        ValueError: for sections or values of the wrong type.
    """
    settings = Settings()

    bukkit = _section(cfg, "bukkit")
    if bukkit.get("search_url"):
        settings.search_url = str(bukkit["search_url"])
    if bukkit.get("files_url"):
        settings.files_url = str(bukkit["files_url"])
    table = bukkit.get("game_versions")
    if table is not None:
        if not isinstance(table, dict):
            raise ValueError("Config value 'bukkit.game_versions' must be a mapping")
        settings.game_versions.update({str(k): str(v) for k, v in table.items()})

    http = _section(cfg, "http")
    if http.get("timeout") is not None:
        settings.timeout = _positive_int(http["timeout"], "http.timeout")
    if http.get("retries") is not None:
        settings.retries = _positive_int(http["retries"], "http.retries")

    if cfg.get("game_version") is not None:
        settings.game_version = str(cfg["game_version"])

    packages = cfg.get("packages")
    if packages is not None:
        if not isinstance(packages, list):
            raise ValueError("Config value 'packages' must be a list of specifiers")
        settings.packages = [str(p) for p in packages]

    return settings


def build_settings(args) -> Settings:
    """Merge the config file with CLI overrides.

    Raises:
        OSError: if an explicit ``--config`` file cannot be read.
        ValueError: if the configuration is invalid.
    """
    cfg = _load_yaml_config(getattr(args, "CONFIG", None))
    settings = settings_from_config(cfg)

    if getattr(args, "GAME_VERSION", None):
        settings.game_version = args.GAME_VERSION
    if getattr(args, "TIMEOUT", None) is not None:
        settings.timeout = _positive_int(args.TIMEOUT, "--timeout")
    if getattr(args, "SINGLE", None):
        settings.packages = list(args.SINGLE)

    return settings


def apply_http_overrides(settings: Settings) -> None:
    """Push HTTP tunables into Constants, where the HTTP client reads them."""
    Constants.REQUEST_TIMEOUT = settings.timeout
    Constants.HTTP_RETRY_MAX = settings.retries
    logger.debug("HTTP timeout=%ss retries=%s", settings.timeout, settings.retries)
