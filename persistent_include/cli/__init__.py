"""Expose the ``persistent-include-params`` command.

The command is itself a usable persistent-include script: point a
``#bbinclude`` directive at it to see exactly what BBEdit passes::

    <!-- #bbinclude "persistent-include-params" #title#="Home" -->
    <!-- end bbinclude -->

Options must precede the includer path and unknown ones are rejected.  Option
parsing stops at the first positional argument, so parameter names and values
that look like flags are passed through verbatim.
Logs and errors go to stderr; stdout carries only the report.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

import click
import structlog

from persistent_include import __version__
from persistent_include.errors import ArgumentsError
from persistent_include.parameters import PersistentIncludeParameters
from persistent_include.utils.logging import setup_logging

_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
    allow_interspersed_args=False,
)


def _render_text(params: PersistentIncludeParameters) -> str:
    """Return a human-readable report, one parameter per line."""
    lines = [f"script: {params.script}", f"includer: {params.includer}"]
    lines.extend(f"{name} = {value}" for name, value in sorted(params.items()))
    return "\n".join(lines)


def _render_json(params: PersistentIncludeParameters) -> str:
    """Return the parsed arguments as a JSON document."""
    return json.dumps(
        {
            "script": params.script,
            "includer": params.includer,
            "count": params.count,
            "parameters": dict(params.items()),
        },
        indent=2,
        sort_keys=True,
    )


@click.command(
    name="persistent-include-params",
    context_settings=_CTX,
    help="""\b
persistent-include-params – report the arguments of a BBEdit persistent include.

ARGUMENTS are the includer path followed by name / value pairs.
""",
)
@click.version_option(__version__)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Report layout.",
)
@click.option("--get", "get_name", metavar="NAME", help="Print only the value of NAME.")
@click.option(
    "--script",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Script path recorded as argument 0 (defaults to the invoked program).",
)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG-level console output.")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the rotating JSON log (default: $PERSISTENT_INCLUDE_LOG_DIR).",
)
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
def main(
    fmt: str,
    get_name: str | None,
    script: Path | None,
    verbose: bool,
    debug: bool,
    log_dir: Path | None,
    save_logfile: Path | None,
    arguments: tuple[str, ...],
) -> None:
    """Parse ARGUMENTS and write the report to stdout.

    Raises:
        click.ClickException: When the arguments are malformed, contain a
            duplicate name, or ``--get`` names a missing parameter.
    """
    setup_logging(
        verbose=verbose,
        debug=debug,
        log_dir=log_dir,
        extra_text_log=save_logfile,
    )
    log = structlog.get_logger()

    argv = [str(script) if script is not None else sys.argv[0], *arguments]
    try:
        params = PersistentIncludeParameters.from_argv(argv)
    except ArgumentsError as err:
        log.error("include_arguments_invalid", kind=err.kind, error=err.error_text)
        raise click.ClickException(str(err)) from err

    log.info(
        "include_arguments",
        includer=params.includer,
        count=params.count,
    )

    if get_name is not None:
        value = params.get(get_name)
        if value is None:
            raise click.ClickException(f"No parameter named {get_name}")
        click.echo(value)
        return

    click.echo(_render_json(params) if fmt == "json" else _render_text(params))


# The public symbol exported by this module.  Required for ``python -m`` entry-points.
cli = main
__all__: list[str] = ["main"]
