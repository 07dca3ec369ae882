"""Local settings store for the API credentials.

Credentials live in ``settings.json`` (keys ``KEY``, ``SECRET``,
``PASSPHRASE``), looked up in the working directory and then in
``~/.krypto``.  ``KRYPTO_KEY``, ``KRYPTO_SECRET`` and ``KRYPTO_PASSPHRASE``
override the file, and may also come from a ``.env`` file.

On first run a settings file filled with placeholders is written so the user
has something to edit; loading refuses to continue until every placeholder
has been replaced.
"""
import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .models import Credentials
from .utils import logger

CONFIG_NAME = "settings.json"
CONFIG_ENV = "KRYPTO_CONFIG"

DEFAULTS: Dict[str, str] = {
    "KEY": "YOUR ACCESS KEY",
    "SECRET": "YOUR SECRET",
    "PASSPHRASE": "YOUR PASSPHRASE",
}

ENV_OVERRIDES: Dict[str, str] = {
    "KEY": "KRYPTO_KEY",
    "SECRET": "KRYPTO_SECRET",
    "PASSPHRASE": "KRYPTO_PASSPHRASE",
}


def search_paths() -> List[Path]:
    return [Path(".") / CONFIG_NAME, Path.home() / ".krypto" / CONFIG_NAME]


def find_config() -> Optional[Path]:
    for p in search_paths():
        if p.is_file():
            return p
    return None


def write_defaults(path: Path) -> None:
    """Create ``path`` holding the placeholder settings."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(DEFAULTS, f, indent=2)
    except OSError as e:
        raise ConfigError(f"error while writing config file {path}: {e}") from e
    logger.info(f"wrote default settings to {path}")


def read_settings(path: Path) -> Dict[str, str]:
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"error loading config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"error loading config file {path}: expected a JSON object")
    for field in DEFAULTS:
        if field in data and not isinstance(data[field], str):
            raise ConfigError(f"{field} in {path} must be a string, got {type(data[field]).__name__}")
    return {k: v for k, v in data.items() if isinstance(v, str)}


def load_config(path: Optional[Union[str, Path]] = None) -> Credentials:
    """Load credentials once at startup.

    ``path`` (or ``$KRYPTO_CONFIG``) pins the settings file; otherwise the
    search paths are tried and ``./settings.json`` is created when none exists.
    Raises :class:`ConfigError` if a field is missing or still a placeholder.
    """
    load_dotenv(find_dotenv(usecwd=True))

    explicit = path or os.getenv(CONFIG_ENV)
    cfg_path = Path(explicit) if explicit else find_config()
    if cfg_path is None:
        cfg_path = search_paths()[0]

    if cfg_path.is_file():
        settings = read_settings(cfg_path)
    else:
        write_defaults(cfg_path)
        settings = dict(DEFAULTS)

    for field, env in ENV_OVERRIDES.items():
        value = os.getenv(env)
        if value:
            settings[field] = value

    for field, default in DEFAULTS.items():
        if not settings.get(field) or settings[field] == default:
            raise ConfigError(f"the config file has not been changed. Check {cfg_path}")

    return Credentials(
        key=settings["KEY"],
        secret=settings["SECRET"],
        passphrase=settings["PASSPHRASE"],
    )
