"""Record CRUD and query commands."""

from typing import Annotated

import typer

from jotdb.cli.context import CLIContext
from jotdb.cli.output import OutputFormatter
from jotdb.cli.parsing import (
    parse_json_object,
    parse_where_terms,
    read_json_file,
    read_jsonl_file,
)
from jotdb.exceptions import JotDBError, RecordNotFoundError


def data_add(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    data_json: Annotated[
        str | None,
        typer.Argument(help="Record as JSON string"),
    ] = None,
    from_file: Annotated[
        str | None,
        typer.Option("--from-file", "-f", help="Load record(s) from JSON/JSONL file"),
    ] = None,
    batch: Annotated[
        bool,
        typer.Option("--batch", help="Insert every line of a JSONL file in one write"),
    ] = False,
) -> None:
    """Add record(s) to a collection.

    Examples:

        # Inline JSON (single record)
        jotdb add users '{"name": "Josef", "age": 30}'

        # From JSON file (single record)
        jotdb add users --from-file josef.json

        # Batch insert from JSONL file (multiple records)
        jotdb add users --from-file users.jsonl --batch
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        if from_file and batch:
            records = read_jsonl_file(from_file)
            docs = cli_ctx.get_collection(collection_name).add_many(records)
            formatter.print_success(
                f"Added {len(docs)} records",
                {"count": len(docs), "ids": [doc["_id"] for doc in docs[:5]]},
            )
            return

        if from_file:
            record = read_json_file(from_file)
        elif data_json:
            record = parse_json_object(data_json)
        else:
            raise ValueError("Either provide the record as a JSON string or use --from-file")

        doc = cli_ctx.get_collection(collection_name).add(record)
        formatter.print_success("Added record", {"id": doc["_id"]})
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def data_get(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    record_id: Annotated[str, typer.Argument(help="Record ID")],
) -> None:
    """Get a record by ID.

    Examples:

        jotdb get users 4f1c2a9e0b7d4e7e9a51d1c0f3b2a8e6
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        doc = cli_ctx.get_collection(collection_name).get(record_id)
        if doc is None:
            raise RecordNotFoundError(record_id, collection_name)
        formatter.print_data(doc)
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def data_find(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    where: Annotated[
        list[str] | None,
        typer.Option(
            "--where",
            "-w",
            help="Query term field=pattern (repeatable, terms are ANDed)",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=0, help="Show at most this many records"),
    ] = None,
) -> None:
    """Find records through indexed fields.

    Patterns: 'jo' (exact), 'jo%' (prefix), '%ef' (suffix), '%os%' (contains),
    '30', '>10', '>=20', '<50', '<=30' for numbers, 'true'/'false' for booleans.

    Examples:

        jotdb find users -w 'name=josef%' -w 'age=>26'
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        query = parse_where_terms(where)
        collection = cli_ctx.get_collection(collection_name)
        docs = collection.find(query)
        if limit is not None:
            docs = docs[:limit]
        formatter.print_documents(
            f"{collection_name} ({len(docs)} records)",
            docs,
            list(collection.schema),
        )
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def data_update(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    record_id: Annotated[str, typer.Argument(help="Record ID")],
    data_json: Annotated[str, typer.Argument(help="Fields to overwrite as JSON string")],
) -> None:
    """Update fields of a record.

    Examples:

        jotdb update users 4f1c2a9e0b7d4e7e9a51d1c0f3b2a8e6 '{"age": 31}'
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        partial = parse_json_object(data_json)
        doc = cli_ctx.get_collection(collection_name).update(record_id, partial)
        formatter.print_success("Record updated", {"id": record_id, "record": doc})
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def data_remove(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    record_id: Annotated[str, typer.Argument(help="Record ID")],
) -> None:
    """Remove a record."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        cli_ctx.get_collection(collection_name).remove(record_id)
        formatter.print_success(f"Record removed: {record_id}", {"id": record_id})
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def data_clear(
    ctx: typer.Context,
    collection_name: Annotated[str, typer.Argument(help="Collection name")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
) -> None:
    """Remove every record of a collection."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        collection = cli_ctx.get_collection(collection_name)
        count = collection.count
        if not yes and not typer.confirm(f"Remove all {count} records from '{collection_name}'?"):
            raise typer.Abort()
        collection.clear()
        formatter.print_success(f"Cleared {collection_name}", {"removed": count})
    except (JotDBError, OSError, ValueError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
