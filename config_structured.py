"""
Structured configuration for the optimizer using typed dataclasses.

This is the AUTHORITATIVE source of truth for all configuration values.
``config.py`` derives its flat constants from here.

Usage:
    from quant_optimizer.config_structured import get_config
    cfg = get_config()
    cfg.objectives.default_section   # section bare statistic names resolve under
    cfg.logging.level                # log level for run_target.py
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ExtremumName(Enum):
    """Optimization direction as written in configuration files."""
    MAX = "max"
    MIN = "min"


@dataclass
class ObjectivesConfig:
    """Defaults applied when building optimization objectives."""

    default_section: str = "Statistics"
    default_extremum: ExtremumName = ExtremumName.MAX

    def __post_init__(self):
        # Coerce string values to enums for backward compatibility
        if isinstance(self.default_extremum, str):
            self.default_extremum = ExtremumName(self.default_extremum.lower())
        if not isinstance(self.default_section, str) or not self.default_section.strip():
            raise ValueError(
                f"default_section must be a non-empty string, got {self.default_section!r}"
            )


@dataclass
class LoggingConfig:
    """Log output configuration for command-line runs."""

    level: str = "INFO"
    structured: bool = True

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {self.level!r}")


@dataclass
class ReplayConfig:
    """Replay of stored result documents through a target."""

    result_glob: str = "*.json"
    stop_on_reached: bool = True


@dataclass
class SystemConfig:
    """Top-level configuration aggregating all subsystems."""

    objectives: ObjectivesConfig = field(default_factory=ObjectivesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)


# ── Module-level singleton ──────────────────────────────────────────

_CONFIG: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Return the singleton SystemConfig instance.

    On first call, instantiates the default SystemConfig. Subsequent
    calls return the same instance so all callers share one source of
    truth.
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = SystemConfig()
    return _CONFIG
