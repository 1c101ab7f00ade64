"""Runtime settings read from the environment (and a .env file, if present)."""

import os
import logging
from dataclasses import dataclass

from .cache import DEFAULT_CACHE_FILE


DEFAULT_API_URL = 'https://api.bitbucket.org/2.0'
DEFAULT_PYPI_URL = 'https://pypi.org/pypi/better-pr/json'


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logging.warning(f"Invalid {name} value '{value}', using default: {default}")
        return default
    if parsed < minimum:
        logging.warning(f"{name} must be at least {minimum}, using default: {default}")
        return default
    return parsed


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ('false', '0', 'no')


@dataclass
class Settings:
    """Settings for a single run."""
    cache_file: str = DEFAULT_CACHE_FILE
    api_url: str = DEFAULT_API_URL
    pagelen: int = 50
    max_workers: int = 10
    http_retries: int = 0
    check_updates: bool = True
    pypi_url: str = DEFAULT_PYPI_URL

    @classmethod
    def from_env(cls) -> 'Settings':
        settings = cls(
            cache_file=os.environ.get('BETTERPR_CACHE_FILE') or DEFAULT_CACHE_FILE,
            api_url=(os.environ.get('BETTERPR_API_URL') or DEFAULT_API_URL).rstrip('/'),
            pagelen=_env_int('BETTERPR_PAGELEN', 50, minimum=1),
            max_workers=_env_int('BETTERPR_MAX_WORKERS', 10, minimum=1),
            http_retries=_env_int('BETTERPR_HTTP_RETRIES', 0),
            check_updates=_env_flag('BETTERPR_CHECK_UPDATES', True)
        )
        logging.debug(f"Loaded settings: {settings}")
        return settings
