from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

DEFAULT_URL = "https://jsonplaceholder.typicode.com/posts"
DEFAULT_COUNT = 1_000_000
LOG_LEVELS = frozenset({"CRITICAL", "FATAL", "ERROR", "WARN", "WARNING", "INFO", "DEBUG", "NOTSET"})


@dataclass
class LogConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class DemoConfig:
    url: str = DEFAULT_URL
    count: int = DEFAULT_COUNT
    seed: Optional[int] = None
    max_posts: Optional[int] = None
    skip_http: bool = False
    timeout: float = 10.0
    headers: Dict[str, str] = field(default_factory=dict)
    log: LogConfig = field(default_factory=LogConfig)


def _build(cls, data: Any, where: str):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{where}: unknown key(s) {', '.join(unknown)}")
    return cls(**data)


def load_config(path: Path) -> DemoConfig:
    try:
        data = yaml.safe_load(Path(path).read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    data = dict(data)
    log = _build(LogConfig, data.pop("log", None), f"{path}: log")
    cfg = _build(DemoConfig, data, str(path))
    cfg.log = log
    _validate(cfg, str(path))
    return cfg


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(cfg: DemoConfig, where: str) -> None:
    if not isinstance(cfg.url, str) or not cfg.url:
        raise ConfigError(f"{where}: url must be a non-empty string, got {cfg.url!r}")
    if not _is_int(cfg.count) or cfg.count < 0:
        raise ConfigError(f"{where}: count must be a non-negative integer, got {cfg.count!r}")
    if cfg.seed is not None and (not _is_int(cfg.seed) or cfg.seed < 0):
        raise ConfigError(f"{where}: seed must be a non-negative integer, got {cfg.seed!r}")
    if cfg.max_posts is not None and (not _is_int(cfg.max_posts) or cfg.max_posts < 0):
        raise ConfigError(f"{where}: max_posts must be a non-negative integer, got {cfg.max_posts!r}")
    if not isinstance(cfg.skip_http, bool):
        raise ConfigError(f"{where}: skip_http must be true or false, got {cfg.skip_http!r}")
    if isinstance(cfg.timeout, bool) or not isinstance(cfg.timeout, (int, float)) or not cfg.timeout > 0:
        raise ConfigError(f"{where}: timeout must be a positive number, got {cfg.timeout!r}")
    if not isinstance(cfg.headers, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in cfg.headers.items()
    ):
        raise ConfigError(f"{where}: headers must map strings to strings, got {cfg.headers!r}")
    if not isinstance(cfg.log.level, str) or cfg.log.level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"{where}: log.level must be one of {', '.join(sorted(LOG_LEVELS))}, got {cfg.log.level!r}"
        )
    if cfg.log.file is not None and not isinstance(cfg.log.file, str):
        raise ConfigError(f"{where}: log.file must be a path string, got {cfg.log.file!r}")
