"""CLI adapter for ``lib_env_populate`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check which keys a set of field names maps to and what the
environment (optionally backed by a ``.env`` file) currently holds for them,
without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_env_prefix` – exposes :func:`lib_env_populate.env_prefix`.
* :func:`cli_key` – prints derived keys for field names (``--prefix`` or
  ``--slug``).
* :func:`cli_resolve` – prints key, value and presence for field names as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It only wires adapters together and
never reaches into the populate algorithm. ``lib_cli_exit_tools`` centralises
the exit code strategy so all commands behave consistently across shells.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.dotenv.default import DotEnvSource
from .adapters.env.default import EnvironSource, env_prefix
from .adapters.formatters.uppercase import Uppercaser
from .adapters.mapping.default import ChainSource
from .application.ports import Source

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_env_populate")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Populate dataclasses from environment variables",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_env_populate",
    message="lib_env_populate version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_env_populate")
    except metadata.PackageNotFoundError:
        click.echo("lib_env_populate (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_env_populate')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("env-prefix", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("slug")
def cli_env_prefix(slug: str) -> None:
    """Compute the canonical environment prefix for *slug*.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["env-prefix", "billing-service"])
    >>> result.output.strip()
    'BILLING_SERVICE'
    """

    click.echo(env_prefix(slug))


@cli.command("key", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("fields", nargs=-1, required=True)
@click.option("--prefix", default="", help="Prefix joined to each field name with an underscore")
@click.option("--slug", default=None, help="Derive the prefix from a package slug (e.g. billing-service)")
def cli_key(fields: Sequence[str], prefix: str, slug: Optional[str]) -> None:
    """Print the source key derived for each field name, one per line."""

    formatter = _build_formatter(prefix, slug)
    for name in fields:
        click.echo(formatter.format(name))


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("fields", nargs=-1, required=True)
@click.option("--prefix", default="", help="Prefix joined to each field name with an underscore")
@click.option("--slug", default=None, help="Derive the prefix from a package slug (e.g. billing-service)")
@click.option(
    "--dotenv",
    "dotenv_path",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="Optional .env file consulted after the environment",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_resolve(
    fields: Sequence[str],
    prefix: str,
    slug: Optional[str],
    dotenv_path: Optional[Path],
    indent: Optional[int],
) -> None:
    """Resolve each field name against the environment and print JSON.

    The output maps every field name to its derived ``key``, the raw ``value``
    and whether the key was ``found``. Environment variables win over entries
    of the ``--dotenv`` file.
    """

    formatter = _build_formatter(prefix, slug)
    source = _build_source(dotenv_path)
    payload: dict[str, dict[str, object]] = {}
    for name in fields:
        key = formatter.format(name)
        value, found = source.get(key)
        payload[name] = {"key": key, "value": value, "found": found}
    click.echo(json.dumps(payload, indent=indent))


def _build_formatter(prefix: str, slug: Optional[str]) -> Uppercaser:
    """Return the uppercaser for an explicit *prefix* or one derived from *slug*."""

    if slug is None:
        return Uppercaser(prefix=prefix)
    if prefix:
        raise click.BadParameter("Use either --prefix or --slug, not both.", param_hint="--slug")
    return Uppercaser(prefix=env_prefix(slug))


def _build_source(dotenv_path: Optional[Path]) -> Source:
    """Return the environment source, chained with a dotenv source when given."""

    if dotenv_path is None:
        return EnvironSource()
    return ChainSource(EnvironSource(), DotEnvSource(dotenv_path))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_env_populate",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
