"""JotDB CLI - Main entry point."""

import logging
import sys
from typing import Annotated

import typer

import jotdb
from jotdb.cli.commands import collections, data
from jotdb.cli.context import CLIContext, get_config_path

# Create main Typer app
app = typer.Typer(
    name="jotdb",
    help="JotDB CLI - inspect and edit an embedded document store",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Option(
            "--path",
            "-p",
            envvar="JOTDB_PATH",
            help="Data directory (default: path from config, then ./jotdb-data)",
        ),
    ] = None,
    config: Annotated[
        str | None,
        typer.Option(
            "--config",
            "-c",
            envvar="JOTDB_CONFIG",
            help="JSON file declaring collections and their schemas",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    ctx.obj = CLIContext(
        config_path=get_config_path(config),
        data_path=path,
        json_output=json_output,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"JotDB v{jotdb.__version__}")


app.command(name="collections")(collections.collections_list)
app.command(name="describe")(collections.collections_describe)
app.command(name="add")(data.data_add)
app.command(name="get")(data.data_get)
app.command(name="find")(data.data_find)
app.command(name="update")(data.data_update)
app.command(name="remove")(data.data_remove)
app.command(name="clear")(data.data_clear)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
