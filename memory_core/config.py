from __future__ import annotations

import logging
import os

from .controller import DEFAULT_GRID_SIZE as _CORE_GRID_SIZE
from .scheduler import DEFAULT_REVEAL_DELAY_MS as _CORE_DELAY_MS


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


DEFAULT_GRID_SIZE = env_int('MEMORY_GRID_SIZE', _CORE_GRID_SIZE)
REVEAL_DELAY_MS = env_int('MEMORY_REVEAL_DELAY_MS', _CORE_DELAY_MS)
MAX_GAMES = env_int('MEMORY_MAX_GAMES', 1000)  # oldest idle game is evicted beyond this
DEBUG = env_flag('MEMORY_DEBUG')


def configure_logging(debug: bool = DEBUG) -> None:
    """Root logging setup for the entry points; library modules only create loggers."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - [%(name)s] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
