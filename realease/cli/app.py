from __future__ import annotations

from collections.abc import Sequence

import click
import typer

from realease import __version__
from realease.cli.commands.release_cmd import bump_command, tag
from realease.core.errors import ErrorCode
from realease.release.model import RELEASE_BUMPS


app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    rich_markup_mode=None,
    help="Cut release branches and tag released versions.",
)


# Commands
for _bump in RELEASE_BUMPS:
    app.command(_bump)(bump_command(_bump))
app.command()(tag)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))


def main(argv: Sequence[str] | None = None) -> None:
    """Console entry point; every usage error exits with status 1."""
    try:
        code = app(args=list(argv) if argv is not None else None, standalone_mode=False)
    except click.UsageError as e:
        e.show()
        code = int(ErrorCode.FAILURE)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        code = int(ErrorCode.FAILURE)
    raise SystemExit(code if isinstance(code, int) else 0)
