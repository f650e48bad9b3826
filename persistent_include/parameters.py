"""
Typed access to the arguments of a BBEdit persistent-include script.

A *persistent include* in an HTML file is a pair of comments::

    <!-- #bbinclude "include file" [ #name#="value" ]... -->
    ...
    <!-- end bbinclude -->

When the include file is executable, BBEdit runs it with the path of the
including document as the first argument, followed by the ``name`` / ``value``
strings of the directive.  Whatever the script prints replaces the text
between the comments.

The module provides:

* :class:`PersistentIncludeParameters` – an immutable value object holding the
  script path, the includer path and the named parameters;
* :func:`parse_arguments` – build one from an explicit argument vector and
  raise an :class:`~persistent_include.errors.ArgumentsError` on bad input;
* :func:`try_parse_arguments` – same, but collapse any failure to ``None``.

Typical use inside an include script::

    params = PersistentIncludeParameters.from_argv()
    print(params.get("title", "Untitled"))
"""

from __future__ import annotations

import logging
import sys
from types import MappingProxyType
from typing import Dict, ItemsView, KeysView, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from .errors import DuplicateParameterError, MalformedArgumentsError

__all__ = [
    "PersistentIncludeParameters",
    "parse_arguments",
    "try_parse_arguments",
    "normalize_name",
]

log = logging.getLogger(__name__)

# BBEdit escapes spaces in the includer path it embeds in the command line.
_ESCAPED_SPACE = "\\ "


def normalize_name(name: str) -> str:
    """Return the case-folded key used to store and look up *name*."""
    return name.upper()


class PersistentIncludeParameters(BaseModel, frozen=True):
    """Arguments passed by BBEdit to a persistent-include script.

    Attributes
    ----------
    script
        Path of the running script or program (``argv[0]``).
    includer
        Path of the HTML file containing the ``#bbinclude`` directive, with
        escaped spaces already restored.
    parameters
        Read-only view of the parameter values keyed by upper-cased name.
        Prefer :meth:`get` which applies the same normalisation to the
        queried name.
    """

    script: str
    includer: str
    parameters: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("parameters", mode="after")
    @classmethod
    def _freeze_parameters(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        """Store a private copy behind a read-only proxy."""
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _names_are_normalized(self):
        """Reject keys that would be unreachable through :meth:`get`."""
        stray = sorted(k for k in self.parameters if normalize_name(k) != k)
        if stray:
            raise ValueError("Parameter names must be upper-case: " + ", ".join(stray))
        return self

    def __hash__(self) -> int:
        return hash((self.script, self.includer, frozenset(self.parameters.items())))

    # ------------------------------------------------------------------ #
    # Constructors                                                       #
    # ------------------------------------------------------------------ #
    @classmethod
    def from_arguments(cls, arguments: Sequence[str]) -> "PersistentIncludeParameters":
        """Shortcut for :func:`parse_arguments`."""
        return parse_arguments(arguments)

    @classmethod
    def of(cls, *arguments: str) -> "PersistentIncludeParameters":
        """Build from positional strings, e.g. ``of("script", "page.html")``."""
        return parse_arguments(arguments)

    @classmethod
    def from_argv(
        cls, argv: Optional[Sequence[str]] = None
    ) -> "PersistentIncludeParameters":
        """Build from the process command line.

        Args:
            argv: Argument vector including the program path.  Defaults to
                :data:`sys.argv`, read once at call time.

        Raises:
            MalformedArgumentsError: Too few arguments or an odd pair count.
            DuplicateParameterError: Two names collide after upper-casing.
        """
        return parse_arguments(sys.argv if argv is None else argv)

    @classmethod
    def try_from_argv(
        cls, argv: Optional[Sequence[str]] = None
    ) -> Optional["PersistentIncludeParameters"]:
        """Like :meth:`from_argv` but return ``None`` instead of raising."""
        return try_parse_arguments(sys.argv if argv is None else argv)

    # ------------------------------------------------------------------ #
    # Read access                                                        #
    # ------------------------------------------------------------------ #
    @property
    def count(self) -> int:
        """Number of name / value pairs."""
        return len(self.parameters)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of parameter *name* (case-insensitive) or *default*."""
        return self.parameters.get(normalize_name(name), default)

    def names(self) -> KeysView[str]:
        return self.parameters.keys()

    def items(self) -> ItemsView[str, str]:
        return self.parameters.items()

    def __getitem__(self, name: str) -> str:
        return self.parameters[normalize_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self.parameters


# --------------------------------------------------------------------------- #
# Parsing                                                                     #
# --------------------------------------------------------------------------- #
def parse_arguments(arguments: Sequence[str]) -> PersistentIncludeParameters:
    """Parse a persistent-include argument vector.

    Args:
        arguments: ``[script, includer, name1, value1, name2, value2, ...]``.

    Returns:
        A fully populated :class:`PersistentIncludeParameters`.

    Raises:
        MalformedArgumentsError: Fewer than two arguments, or a trailing name
            without a value.
        DuplicateParameterError: Two names are equal once upper-cased.
    """
    arguments = list(arguments)
    if len(arguments) < 2:
        log.debug("[params] rejected: %d argument(s), need at least 2", len(arguments))
        raise MalformedArgumentsError(
            "Argument array must contain the script and includer file paths"
        )

    script = arguments[0]
    includer = arguments[1].replace(_ESCAPED_SPACE, " ")

    if len(arguments) % 2:
        log.debug("[params] rejected: unpaired name %r", arguments[-1])
        raise MalformedArgumentsError(
            "Argument array must contain matched name / value pairs"
        )

    parameters: Dict[str, str] = {}
    for name, value in zip(arguments[2::2], arguments[3::2]):
        key = normalize_name(name)
        if key in parameters:
            log.debug("[params] rejected: duplicate name %s", key)
            raise DuplicateParameterError("Two parameters have the same name")
        parameters[key] = value

    log.debug(
        "[params] %s included by %s with %d parameter(s)",
        script,
        includer,
        len(parameters),
    )
    return PersistentIncludeParameters(
        script=script, includer=includer, parameters=parameters
    )


def try_parse_arguments(
    arguments: Sequence[str],
) -> Optional[PersistentIncludeParameters]:
    """Return :func:`parse_arguments` of *arguments*, or ``None`` on failure."""
    try:
        return parse_arguments(arguments)
    except (MalformedArgumentsError, DuplicateParameterError):
        return None
