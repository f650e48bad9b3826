"""
Public façade for the *utils* package.

Anything imported here becomes part of the *stable* public API.
"""

from __future__ import annotations

from .logging import LOG_DIR_ENV, setup_logging

__all__: list[str] = ["LOG_DIR_ENV", "setup_logging"]
