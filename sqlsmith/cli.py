# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Command-line interface for inspecting what the generator can see."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sqlsmith.catalog.functions import build_function_catalog
from sqlsmith.catalog.operators import build_operator_catalog
from sqlsmith.catalog.schema_cache import SchemaCache
from sqlsmith.core.config import Config

console = Console()


def _configure_logging(level: str) -> None:
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    logger = logging.getLogger("sqlsmith")
    logger.handlers = [handler]
    logger.setLevel(level.upper())


def _load_config(path: str) -> Config:
    try:
        return Config.from_yaml(path)
    except Exception as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="sqlsmith")
def cli():
    """sqlsmith - schema and catalog inspection for the random SQL generator.

    \b
    Quick start:
        sqlsmith schema --config config.yaml
        sqlsmith catalog
    """
    pass


@cli.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    required=True,
    help="Path to config YAML file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging.",
)
def schema(config: str, verbose: bool):
    """Discover and print tables, columns and indexes.

    \b
    Examples:
        sqlsmith schema -c config.yaml
    """
    cfg = _load_config(config)
    _configure_logging("DEBUG" if verbose else cfg.log_level)

    cache = SchemaCache.from_config(cfg)
    try:
        cache.refresh()
    except Exception as e:
        console.print(f"[red]Schema refresh failed:[/red] {e}")
        sys.exit(1)

    tables = cache.tables
    if not tables:
        console.print("[yellow]No tables found.[/yellow]")
        return

    for ref in tables:
        table = Table(title=str(ref.name), title_justify="left")
        table.add_column("Column")
        table.add_column("Type")
        table.add_column("Nullable")
        table.add_column("Computed")
        for col in ref.columns:
            table.add_row(col.name, col.type.name, "yes" if col.nullable else "no", "yes" if col.computed else "")
        console.print(table)

        for index in cache.indexes_for(ref.name).values():
            console.print(f"  [dim]{index.to_sql()}[/dim]")


@cli.command()
def catalog():
    """Print operator and function counts by return type."""
    operators = build_operator_catalog()
    functions = build_function_catalog()

    type_names = {}
    for ops in operators.values():
        for op in ops:
            type_names[op.overload.return_type.oid] = op.overload.return_type.name
    for by_type in functions.values():
        for fns in by_type.values():
            for fn in fns:
                typ = fn.overload.fixed_return_type()
                type_names[typ.oid] = typ.name

    table = Table(title="Catalog")
    table.add_column("Return type")
    table.add_column("Operators", justify="right")
    for cls in functions:
        table.add_column(cls.value.capitalize(), justify="right")

    for oid in sorted(type_names, key=type_names.get):
        row = [type_names[oid], str(len(operators.get(oid, ())))]
        row.extend(str(len(functions[cls].get(oid, ()))) for cls in functions)
        table.add_row(*row)
    console.print(table)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
