"""Exceptions raised while parsing persistent-include arguments.

Both concrete errors derive from :class:`ArgumentsError` so call-sites that
only care about *whether* parsing failed can catch a single type, while those
that need diagnostics can inspect :attr:`ArgumentsError.kind` or the subclass.
"""

from __future__ import annotations

from typing import ClassVar

__all__ = ["ArgumentsError", "MalformedArgumentsError", "DuplicateParameterError"]


class ArgumentsError(ValueError):
    """Raised when an argument vector does not match the expected format.

    Attributes:
        error_text: Human-readable description.  ``str(error)`` returns it
            verbatim so the text can be echoed straight to the caller.
        kind: Short tag naming the failure class.
    """

    kind: ClassVar[str] = "ArgumentsError"

    def __init__(self, error_text: str) -> None:
        super().__init__(error_text)
        self.error_text = error_text

    def __str__(self) -> str:
        return self.error_text


class MalformedArgumentsError(ArgumentsError):
    """Too few arguments, or a parameter name without a value."""

    kind: ClassVar[str] = "MalformedArguments"


class DuplicateParameterError(ArgumentsError):
    """Two parameter names collide after upper-casing."""

    kind: ClassVar[str] = "DuplicateParameter"
