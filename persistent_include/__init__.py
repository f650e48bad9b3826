"""
persistent_include package initialisation.

The module performs two small tasks:

1. **Expose the version string**
   ``persistent_include.__version__`` is resolved at import-time from the
   installed distribution metadata.

2. **Re-export the public parsing API**
   so include scripts can simply do::

       from persistent_include import PersistentIncludeParameters

       params = PersistentIncludeParameters.from_argv()
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("persistent-include-parameters")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

from .errors import (  # noqa: E402
    ArgumentsError,
    DuplicateParameterError,
    MalformedArgumentsError,
)
from .parameters import (  # noqa: E402
    PersistentIncludeParameters,
    normalize_name,
    parse_arguments,
    try_parse_arguments,
)

__all__: list[str] = [
    "__version__",
    "ArgumentsError",
    "DuplicateParameterError",
    "MalformedArgumentsError",
    "PersistentIncludeParameters",
    "normalize_name",
    "parse_arguments",
    "try_parse_arguments",
]
