from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigError


@dataclass
class SchedulerConfig:
    seed: int | None = None
    # 0 means scan the whole teacher x room x slot space for each hour
    max_attempts: int = 0
    lunch_period: int = 5
    enforce_daily_limit: bool = False


@dataclass
class SolverConfig:
    timeout_sec: int = 10
    workers: int = 8


@dataclass
class AppConfig:
    scheduler: SchedulerConfig
    solver: SolverConfig


def _get_int(section: Dict[str, Any], name: str, default: int | None) -> int | None:
    if name not in section:
        return default
    value = section[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return value


def _get_bool(section: Dict[str, Any], name: str, default: bool) -> bool:
    value = section.get(name, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def load_config(project_root: Path | str) -> AppConfig:
    """Load configs/scheduler.toml under project_root, else defaults.

    Recognised tables are [scheduler] (seed, max_attempts, lunch_period,
    enforce_daily_limit) and [solver] (timeout_sec, workers).
    """
    cfg = Path(project_root) / "configs" / "scheduler.toml"
    if not cfg.exists():
        return AppConfig(SchedulerConfig(), SolverConfig())
    data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    sched = data.get("scheduler", {})
    solv = data.get("solver", {})
    base_s, base_v = SchedulerConfig(), SolverConfig()

    scheduler = SchedulerConfig(
        seed=_get_int(sched, "seed", base_s.seed),
        max_attempts=_get_int(sched, "max_attempts", base_s.max_attempts),
        lunch_period=_get_int(sched, "lunch_period", base_s.lunch_period),
        enforce_daily_limit=_get_bool(sched, "enforce_daily_limit", base_s.enforce_daily_limit),
    )
    if scheduler.max_attempts < 0:
        raise ConfigError("max_attempts must be >= 0")
    if not 1 <= scheduler.lunch_period <= 8:
        raise ConfigError("lunch_period must be between 1 and 8")
    solver = SolverConfig(
        timeout_sec=_get_int(solv, "timeout_sec", base_v.timeout_sec),
        workers=_get_int(solv, "workers", base_v.workers),
    )
    return AppConfig(scheduler, solver)
