"""Configuration loading utilities for wordtiming.

Every setting can come from the built-in defaults, the `configs/<env>.toml`
profile, or a `WORDTIMING_<KEY>` environment variable, in increasing order
of precedence.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from wordtiming.align import DEFAULT_SIMILARITY_THRESHOLD

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ENV_PREFIX = "WORDTIMING_"

Setting = str | int | float

_DEFAULTS: dict[str, Setting] = {
    "log_level": "INFO",
    "api_host": "127.0.0.1",
    "api_port": 8000,
    "workers": 1,
    "similarity_threshold": DEFAULT_SIMILARITY_THRESHOLD,
}
_KINDS: dict[str, type[Setting]] = {key: type(value) for key, value in _DEFAULTS.items()}
_KIND_LABELS: dict[type[Setting], str] = {str: "a string", int: "an integer", float: "a number"}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration resolved from profile + environment variables."""

    env: str
    log_level: str
    api_host: str
    api_port: int
    workers: int
    similarity_threshold: float


def load_config(env_name: str | None = None, config_dir: Path | None = None) -> AppConfig:
    """Load configuration from `configs/<env>.toml` and environment overrides."""
    env = env_name or os.getenv(f"{_ENV_PREFIX}ENV", "dev")
    resolved_dir = config_dir or _default_config_dir()

    values = dict(_DEFAULTS)
    values.update(_load_profile(resolved_dir / f"{env}.toml"))
    for key in _KINDS:
        name = f"{_ENV_PREFIX}{key.upper()}"
        raw = os.getenv(name)
        if raw is not None:
            values[key] = _coerce(name, raw, _KINDS[key])

    threshold = float(values["similarity_threshold"])
    if not 0.0 < threshold <= 1.0:
        raise ValueError(f"similarity_threshold must be in (0, 1], got {threshold!r}")

    return AppConfig(
        env=env,
        log_level=str(values["log_level"]).upper(),
        api_host=str(values["api_host"]),
        api_port=int(values["api_port"]),
        workers=int(values["workers"]),
        similarity_threshold=threshold,
    )


def configure_logging(config: AppConfig) -> None:
    """Route package logging to stderr at the configured level."""
    logging.basicConfig(level=config.log_level, format=_LOG_FORMAT)


def _default_config_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "configs"


def _load_profile(path: Path) -> dict[str, Setting]:
    if not path.exists():
        return {}

    with path.open("rb") as handle:
        payload = tomllib.load(handle)

    return {key: _coerce(key, raw, _KINDS[key]) for key, raw in payload.items() if key in _KINDS}


def _coerce(name: str, value: object, kind: type[Setting]) -> Setting:
    """Convert a profile value or environment string to `kind`."""
    label = _KIND_LABELS[kind]
    if kind is str:
        if isinstance(value, str):
            return value
    elif isinstance(value, str):
        try:
            return kind(value)
        except ValueError as exc:
            raise ValueError(f"{name} must be {label}, got {value!r}") from exc
    elif isinstance(value, int) and not isinstance(value, bool):
        return kind(value)
    elif kind is float and isinstance(value, float):
        return value
    raise ValueError(f"{name} must be {label}, got type {type(value).__name__}")
