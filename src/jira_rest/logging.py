"""Logging for jira-rest.

The library only emits records under the ``jira_rest`` logger namespace and
never installs handlers on import. Applications decide where records go; the
CLI calls ``configure_logging`` to write:
- Request/debug logs: ./.jira-rest/logs/jira-rest.log
- Request timings: ./.jira-rest/logs/performance.log
"""

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

ROOT_LOGGER_NAME = "jira_rest"
PERFORMANCE_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.performance"

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return ``jira_rest.<name>``, or the package logger itself."""
    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_performance(operation: str, duration_ms: float, **metrics: Any) -> None:
    """Emit a one-line ``op=... | duration_ms=... | key=value`` timing record."""
    parts = [f"op={operation}", f"duration_ms={duration_ms:.2f}"]
    for key, value in metrics.items():
        parts.append(f"{key}={value}")

    logging.getLogger(PERFORMANCE_LOGGER_NAME).info(" | ".join(parts))


class PerformanceTimer:
    """Context manager timing one operation.

    Usage:
        with PerformanceTimer("jira_request", method="GET", path="/project") as timer:
            response = await client.get(url)
            timer.add_metric("status", response.status_code)
    """

    def __init__(self, operation: str, **initial_metrics: Any):
        self.operation = operation
        self.metrics = initial_metrics
        self._start_time: datetime | None = None

    def __enter__(self) -> "PerformanceTimer":
        self._start_time = datetime.now(UTC)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._start_time is None:
            return

        duration = (datetime.now(UTC) - self._start_time).total_seconds() * 1000

        if exc_type is not None:
            self.metrics["error"] = exc_type.__name__

        log_performance(self.operation, duration, **self.metrics)

    def add_metric(self, key: str, value: Any) -> None:
        self.metrics[key] = value


def _parse_log_level(level_str: str) -> int:
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    return levels.get(level_str.lower(), logging.INFO)


def _rotating_handler(path, level: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _has_real_handlers(logger: logging.Logger) -> bool:
    return any(not isinstance(h, logging.NullHandler) for h in logger.handlers)


def configure_logging(verbose: bool = False, config=None) -> None:
    """Install file and console handlers for command-line use.

    Safe to call more than once; later calls only adjust console verbosity.

    Args:
        verbose: If True, show debug output on the console.
        config: A ``JiraRestConfig``; loaded from settings.toml when omitted.
    """
    from . import config as config_module

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if not _has_real_handlers(logger):
        config = config or config_module.load_config()
        logger.setLevel(logging.DEBUG)  # Let handlers filter

        if config.logging.to_file:
            logs_dir = config_module.JIRA_REST_HOME / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)
            logger.addHandler(
                _rotating_handler(
                    logs_dir / "jira-rest.log",
                    _parse_log_level(config.logging.level),
                    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                )
            )

            perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
            perf_logger.setLevel(logging.INFO)
            perf_logger.propagate = False
            perf_logger.addHandler(
                _rotating_handler(logs_dir / "performance.log", logging.INFO, "%(asctime)s | %(message)s")
            )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_parse_log_level(config.logging.console_level))
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    if verbose:
        for handler in logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(logging.DEBUG)
