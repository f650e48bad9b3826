"""
Package-level logging configuration.

* Rich console output on **stderr**: an include script's stdout is pasted
  into the including document, so nothing but the report may go there.
* Rotating **JSON** log file when a log directory is given (or
  ``$PERSISTENT_INCLUDE_LOG_DIR`` is set).  Every line is one JSON object,
  for structlog events and plain stdlib records alike.
* Optional plain-text mirror controlled via ``--save-logfile`` on the CLI.

The public helper :func:`setup_logging` wires everything and should be the
sole entry-point used by the command line.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory, ProcessorFormatter

__all__ = ["setup_logging", "LOG_DIR_ENV", "LOG_FILENAME"]

LOG_DIR_ENV = "PERSISTENT_INCLUDE_LOG_DIR"
LOG_FILENAME = "persistent_include.log"

# Applied to structlog events before they reach a handler, and to stdlib
# records by each handler's formatter.
_SHARED_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.add_log_level,
]


def _formatter(renderer) -> ProcessorFormatter:
    """Return a formatter rendering both structlog and stdlib records."""
    return ProcessorFormatter(
        processors=[ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


# --------------------------------------------------------------------------- #
# Internal helpers – file-based handlers                                      #
# --------------------------------------------------------------------------- #
def _json_file_handler(log_dir: Path | None, level: int) -> logging.Handler | None:
    """Return a rotating *JSON* file handler, or *None* when no directory is known.

    Args:
        log_dir: Explicit log directory; wins over ``$PERSISTENT_INCLUDE_LOG_DIR``.
        level: Log-level for the handler.
    """
    env_dir = os.environ.get(LOG_DIR_ENV)

    if log_dir is not None:
        logdir = log_dir.expanduser()
    elif env_dir:
        logdir = Path(env_dir).expanduser()
    else:
        return None
    logdir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=logdir / LOG_FILENAME,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    return handler


def _plain_text_file_handler(
    path: Optional[Path], level: int
) -> logging.Handler | None:
    """Return a plain-text file handler or *None* when *path* is *None*."""
    if path is None:
        return None

    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(_formatter(StructlogConsoleRenderer(colors=False)))
    return handler


# --------------------------------------------------------------------------- #
# Public API – main entry-point                                               #
# --------------------------------------------------------------------------- #
def setup_logging(
    *,
    verbose: bool = False,
    debug: bool = False,
    log_dir: Optional[Path] = None,
    extra_text_log: Optional[Path] = None,
) -> None:
    """Configure stderr console logging and optional file mirrors.

    Handlers from a previous call are closed and replaced, so the function
    may run more than once per process.

    Args:
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages and rich tracebacks with locals off.
        log_dir: Directory for the rotating JSON log.  Falls back to
            ``$PERSISTENT_INCLUDE_LOG_DIR``; no JSON log is written when
            neither is set.
        extra_text_log: Optional path for a plain-text mirror of console output.
    """
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    console = RichHandler(
        level=console_lvl,
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )
    console.setFormatter(
        _formatter(
            StructlogConsoleRenderer(colors=False)
            if verbose or debug
            else structlog.processors.JSONRenderer()
        )
    )
    handlers: list[logging.Handler] = [console]

    json_handler = _json_file_handler(log_dir, file_lvl)
    if json_handler:
        handlers.append(json_handler)

    txt_handler = _plain_text_file_handler(extra_text_log, console_lvl)
    if txt_handler:
        handlers.append(txt_handler)

    # force=True closes the handlers of an earlier call (tests, CliRunner).
    logging.basicConfig(
        level=logging.DEBUG,  # root logger stays at DEBUG
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(min(console_lvl, file_lvl)),
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=False,
    )
