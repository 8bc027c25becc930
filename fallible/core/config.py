"""Process-wide configuration for fallible.

Pure configuration data; nothing here configures logging handlers.
The library only decides whether, and at which level, it reports faults
to its module loggers. The active configuration starts from the
FALLIBLE_* environment variables and can be replaced with set_config().
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import final

from fallible.core.result import Err, Ok

log = logging.getLogger(__name__)

ENV_LOG_FAULTS: str = "FALLIBLE_LOG_FAULTS"
ENV_FAULT_LOG_LEVEL: str = "FALLIBLE_FAULT_LOG_LEVEL"

_TRUE_WORDS: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS: frozenset[str] = frozenset({"0", "false", "no", "off"})


@final
@dataclass(frozen=True, slots=True)
class ResultConfig:
    """Fault reporting switches."""

    log_faults: bool = True
    fault_log_level: int = logging.DEBUG

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Ok[ResultConfig] | Err[str]:
        """Build a config from FALLIBLE_* environment variables.

        Unset variables keep their defaults. Malformed values return Err.
        """
        env = os.environ if environ is None else environ
        defaults = ResultConfig()

        log_faults = defaults.log_faults
        raw_flag = env.get(ENV_LOG_FAULTS)
        if raw_flag is not None:
            word = raw_flag.strip().lower()
            if word in _TRUE_WORDS:
                log_faults = True
            elif word in _FALSE_WORDS:
                log_faults = False
            else:
                return Err(f"{ENV_LOG_FAULTS} must be a boolean, got {raw_flag!r}")

        level = defaults.fault_log_level
        raw_level = env.get(ENV_FAULT_LOG_LEVEL)
        if raw_level is not None:
            resolved = logging.getLevelName(raw_level.strip().upper())
            if not isinstance(resolved, int):
                return Err(f"{ENV_FAULT_LOG_LEVEL} is not a logging level: {raw_level!r}")
            level = resolved

        return Ok(ResultConfig(log_faults=log_faults, fault_log_level=level))


def config_from_env(environ: Mapping[str, str] | None = None) -> ResultConfig:
    """The configuration installed at import time.

    Malformed FALLIBLE_* values are reported and the defaults are used.
    """
    match ResultConfig.from_env(environ):
        case Ok(config):
            return config
        case Err(reason):
            log.warning("ignoring fault logging environment: %s", reason)
            return ResultConfig()


_current: ResultConfig = config_from_env()


def get_config() -> ResultConfig:
    """Return the active configuration."""
    return _current


def set_config(config: ResultConfig) -> ResultConfig:
    """Install config and return the one it replaces."""
    global _current
    previous = _current
    _current = config
    return previous


def log_fault(logger: logging.Logger, msg: str, *args: object) -> None:
    """Report a fault on logger if fault logging is enabled."""
    config = _current
    if config.log_faults:
        logger.log(config.fault_log_level, msg, *args)
