"""Collection inspection commands."""

from typing import Annotated

import typer

from jotdb.cli.context import CLIContext
from jotdb.cli.output import OutputFormatter
from jotdb.exceptions import JotDBError


def collections_list(ctx: typer.Context) -> None:
    """List configured collections with record counts."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        infos = cli_ctx.get_db().describe()
        formatter.print_table(
            f"Collections ({len(infos)} total)",
            [
                {
                    "Name": info.name,
                    "Records": info.record_count,
                    "Fields": len(info.fields),
                    "Indexed": ", ".join(info.indexed_fields),
                }
                for info in infos
            ],
            ["Name", "Records", "Fields", "Indexed"],
        )
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def collections_describe(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Collection name")],
) -> None:
    """Show fields, storage mode and size of a collection."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        info = cli_ctx.get_collection(name).describe()
        formatter.print_collection_info(info)
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
