"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any

import structlog

_LOGGING_INITIALISED = False

JSON_FORMATTER = "pythonjsonlogger.jsonlogger.JsonFormatter"
# handler name -> (log file name, minimum level); the console handler is added separately
FILE_HANDLERS: dict[str, tuple[str, str]] = {
    "app_file": ("pokedexer.log", "INFO"),
    "error_file": ("error.log", "ERROR"),
}


def _default_log_dir() -> Path:
    env_root = os.environ.get("POKEDEXER_HOME")
    if env_root:
        return Path(env_root).expanduser().resolve() / "logs"
    return Path(__file__).resolve().parents[1] / "logs"


def build_logging_config(log_dir: Path, verbose: bool = False) -> dict[str, Any]:
    """Return the ``dictConfig`` payload routing the ``pokedexer`` tree to console and files."""

    level = "DEBUG" if verbose else "INFO"
    handlers: dict[str, dict[str, Any]] = {
        # console follows --verbose, files keep a fixed floor
        "console": {"class": "logging.StreamHandler", "level": level, "formatter": "json"},
    }
    for name, (filename, file_level) in FILE_HANDLERS.items():
        handlers[name] = {
            "class": "logging.FileHandler",
            "level": file_level,
            "filename": str(log_dir / filename),
            "encoding": "utf-8",
            "formatter": "json",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSON_FORMATTER, "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s"},
        },
        "handlers": handlers,
        "loggers": {
            # engine components log under pokedexer.<component> and inherit these handlers
            "pokedexer": {"handlers": list(handlers), "level": level, "propagate": False},
        },
    }


def _structlog_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        # hand the event dict to the stdlib handler; its formatter renders JSON
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def configure_logging(verbose: bool = False) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers once and return the application logger."""

    global _LOGGING_INITIALISED
    log_dir = _default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    for filename, _level in FILE_HANDLERS.values():
        (log_dir / filename).touch(exist_ok=True)

    if not _LOGGING_INITIALISED:
        logging.config.dictConfig(build_logging_config(log_dir, verbose))
        structlog.configure(
            processors=_structlog_processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("pokedexer")


def component_logger(component: str) -> structlog.BoundLogger:
    """Return a logger bound to an engine component without forcing configuration."""

    return structlog.get_logger(f"pokedexer.{component}").bind(component=component)


def app_log_path() -> Path:
    return _default_log_dir() / FILE_HANDLERS["app_file"][0]


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


__all__ = [
    "app_log_path",
    "build_logging_config",
    "component_logger",
    "configure_logging",
    "tail_log",
]
