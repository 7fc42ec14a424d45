"""Environment-driven settings for Srcnav."""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass

from srcnav.core.exceptions import ConfigError
from srcnav.core.storage import DEFAULT_STORE_DIR

DEFAULT_API_URL = "https://sourcegraph.com/.api"
DEFAULT_API_TIMEOUT = 30.0
DEFAULT_EXAMPLES_PER_PAGE = 4
DEFAULT_CONFIGURE_CMD = "srclib config"
DEFAULT_MAKE_CMD = "srclib make"


@dataclass(frozen=True)
class Settings:
    store_dir: str = DEFAULT_STORE_DIR
    api_url: str = DEFAULT_API_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    examples_per_page: int = DEFAULT_EXAMPLES_PER_PAGE
    configure_cmd: tuple[str, ...] = tuple(shlex.split(DEFAULT_CONFIGURE_CMD))
    make_cmd: tuple[str, ...] = tuple(shlex.split(DEFAULT_MAKE_CMD))
    repo_uri: str | None = None


def _number(env: Mapping[str, str], name: str, default: float, cast: type) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _command(env: Mapping[str, str], name: str, default: str) -> tuple[str, ...]:
    argv = tuple(shlex.split(env.get(name) or default))
    if not argv:
        raise ConfigError(f"{name} must name a command")
    return argv


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read settings from ``SRCNAV_*`` environment variables.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    if env is None:
        env = os.environ
    return Settings(
        store_dir=env.get("SRCNAV_STORE_DIR") or DEFAULT_STORE_DIR,
        api_url=(env.get("SRCNAV_API_URL") or DEFAULT_API_URL).rstrip("/"),
        api_timeout=float(_number(env, "SRCNAV_API_TIMEOUT", DEFAULT_API_TIMEOUT, float)),
        examples_per_page=int(
            _number(env, "SRCNAV_EXAMPLES_PER_PAGE", DEFAULT_EXAMPLES_PER_PAGE, int)
        ),
        configure_cmd=_command(env, "SRCNAV_CONFIGURE_CMD", DEFAULT_CONFIGURE_CMD),
        make_cmd=_command(env, "SRCNAV_MAKE_CMD", DEFAULT_MAKE_CMD),
        repo_uri=env.get("SRCNAV_REPO_URI") or None,
    )
