"""Constants used in the project."""

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3
    INVALID_INPUT = 4
    RESOLUTION_ERROR = 5


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    BUKKIT_SEARCH_URL = "https://dev.bukkit.org/search?search={}"
    BUKKIT_FILES_URL = "https://dev.bukkit.org/projects/{}/files"
    SPECIFIER_SEPARATOR = "@"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    USER_AGENT = "dropper/0.1 (+https://dev.bukkit.org)"

    # Game version -> dev.bukkit.org "filter-game-version" value.
    GAME_VERSIONS = {
        "1.12": "2020709689:6588",
        "1.11": "2020709689:6451",
        "1.10": "2020709689:5997",
        "1.9": "2020709689:5640",
        "1.8": "2020709689:5041",
    }

    CONFIG_FILE_NAMES = ("dropper.yml", "dropper.yaml")
    USER_CONFIG_DIR = os.path.join("~", ".config", "dropper")


def _read_config_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    return data


def _default_config_paths():
    dirs = [os.getcwd(), os.path.expanduser(Constants.USER_CONFIG_DIR)]
    for d in dirs:
        for name in Constants.CONFIG_FILE_NAMES:
            yield os.path.join(d, name)


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the user configuration.

    An explicit ``path`` must exist and parse; errors raise. Without one, the
    first readable default location wins and broken files are skipped with a
    warning.

    Args:
        path: Optional explicit YAML or JSON file.

    Returns:
        dict: Parsed configuration, empty when none is found.
    """
    if path:
        try:
            return _read_config_file(path)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Could not parse configuration {path}: {exc}") from exc

    for candidate in _default_config_paths():
        if not os.path.isfile(candidate):
            continue
        try:
            return _read_config_file(candidate)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logging.warning("Ignoring unreadable config %s: %s", candidate, exc)
    return {}
