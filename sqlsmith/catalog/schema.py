# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Table, column and index metadata discovered from a live database.

Two pure transformations live here:

- ``group_columns`` turns the ordered rows of the column query into one
  ``TableRef`` per table.
- ``fold_index_rows`` turns the rows of one table's index query into one
  ``IndexDef`` per index; ``assemble_indexes`` runs it for every table.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy.dialects.postgresql.base import RESERVED_WORDS

from sqlsmith.core.errors import RowDecodeError
from sqlsmith.sem.types import SQLType, type_from_name

if TYPE_CHECKING:
    from sqlsmith.catalog.source import QuerySource

logger = logging.getLogger(__name__)

COLUMNS_QUERY = """
SELECT
    table_catalog,
    table_schema,
    table_name,
    column_name,
    crdb_sql_type,
    generation_expression != '' AS computed,
    is_nullable = 'YES' AS nullable,
    is_hidden = 'YES' AS hidden
FROM
    information_schema.columns
WHERE
    table_schema = :schema
ORDER BY
    table_catalog, table_schema, table_name
"""

INDEXES_QUERY = "SELECT index_name, column_name, storing, direction = 'ASC' FROM [SHOW INDEXES FROM {table}]"

_SIMPLE_IDENT_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def quote_ident(name: str) -> str:
    """Quote an identifier unless it is a plain lowercase, non-reserved name."""
    if _SIMPLE_IDENT_RE.match(name) and name not in RESERVED_WORDS:
        return name
    return '"' + name.replace('"', '""') + '"'


@dataclass(frozen=True)
class TableName:
    """Fully qualified table identifier."""
    catalog: str
    schema: str
    name: str

    def __str__(self) -> str:
        return ".".join(quote_ident(part) for part in (self.catalog, self.schema, self.name))


@dataclass(frozen=True)
class ColumnDef:
    """One column of a discovered table."""
    name: str
    type: SQLType
    nullable: bool = False
    computed: bool = False


@dataclass(frozen=True)
class TableRef:
    """A discovered table and its visible columns in declaration order."""
    name: TableName
    columns: tuple[ColumnDef, ...] = ()

    def column(self, name: str) -> Optional[ColumnDef]:
        """Look up a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None


def pop_table(tables: Sequence[TableRef]) -> tuple[TableRef, list[TableRef]]:
    """Split ``tables`` into its first element and the rest."""
    if not tables:
        raise IndexError("pop_table() on an empty table list")
    return tables[0], list(tables[1:])


class Direction(Enum):
    """Sort direction of an index key column."""
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class IndexElem:
    """One key column of an index."""
    column: str
    direction: Direction = Direction.ASC


@dataclass(frozen=True)
class IndexDef:
    """An index on one table.

    ``columns`` holds the key columns in key order. ``storing`` holds the
    columns carried in the index payload without being part of the key.
    """
    name: str
    table: TableName
    columns: tuple[IndexElem, ...] = ()
    storing: tuple[str, ...] = ()

    def to_sql(self) -> str:
        """Render as a CREATE INDEX statement."""
        keys = ", ".join(f"{quote_ident(e.column)} {e.direction.value}" for e in self.columns)
        sql = f"CREATE INDEX {quote_ident(self.name)} ON {self.table} ({keys})"
        if self.storing:
            sql += f" STORING ({', '.join(quote_ident(c) for c in self.storing)})"
        return sql


@dataclass(frozen=True)
class TableIndexName:
    """An index addressed through its table."""
    table: TableName
    index: str

    def __str__(self) -> str:
        return f"{self.table}@{quote_ident(self.index)}"


# =============================================================================
# Row decoding
# =============================================================================

def _as_str(value: Any, what: str, row: Any) -> str:
    if not isinstance(value, str):
        raise RowDecodeError(f"Expected string for {what}, got {type(value).__name__}", row=row)
    return value


def _as_bool(value: Any, what: str, row: Any) -> bool:
    # Some drivers hand booleans back as 0/1
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise RowDecodeError(f"Expected boolean for {what}, got {value!r}", row=row)


def _unpack(row: Any, width: int) -> tuple:
    try:
        values = tuple(row)
    except TypeError:
        raise RowDecodeError(f"Expected a row of {width} values, got {type(row).__name__}", row=row) from None
    if len(values) != width:
        raise RowDecodeError(f"Expected a row of {width} values, got {len(values)}", row=row)
    return values


# =============================================================================
# Row grouper
# =============================================================================

def group_columns(rows: Iterable[Sequence[Any]], target_schema: str = "public") -> list[TableRef]:
    """Group ordered column rows into tables.

    Rows are ``(catalog, schema, table, column, type_name, computed,
    nullable, hidden)`` sorted by ``(catalog, schema, table)``. A new table
    starts whenever that key changes. Hidden columns are dropped before
    grouping, so a table whose columns are all hidden never starts a group
    and is not returned. Groups outside ``target_schema`` are consumed but
    not returned.

    Raises:
        RowDecodeError: If a row does not have the expected shape.
        UnknownTypeError: If a type name has no semantic type.
    """
    tables: list[TableRef] = []
    current_key: Optional[tuple[str, str, str]] = None
    current_cols: list[ColumnDef] = []

    def emit() -> None:
        catalog, schema, name = current_key
        if schema != target_schema:
            return
        tables.append(TableRef(name=TableName(catalog, schema, name), columns=tuple(current_cols)))

    for row in rows:
        catalog, schema, name, col, typ, computed, nullable, hidden = _unpack(row, 8)
        if _as_bool(hidden, "hidden", row):
            continue

        key = (
            _as_str(catalog, "table_catalog", row),
            _as_str(schema, "table_schema", row),
            _as_str(name, "table_name", row),
        )
        if current_key is not None and key != current_key:
            emit()
            current_cols = []
        current_key = key

        current_cols.append(ColumnDef(
            name=_as_str(col, "column_name", row),
            type=type_from_name(_as_str(typ, "type name", row)),
            nullable=_as_bool(nullable, "nullable", row),
            computed=_as_bool(computed, "computed", row),
        ))

    if current_key is not None:
        emit()
    return tables


# =============================================================================
# Index assembler
# =============================================================================

def fold_index_rows(table: TableName, rows: Iterable[Sequence[Any]]) -> dict[str, IndexDef]:
    """Fold ``(index_name, column_name, storing, ascending)`` rows into indexes.

    Index order follows first appearance; key columns keep row order.
    """
    # name -> (key columns, storing columns), frozen once every row is read
    pending: dict[str, tuple[list[IndexElem], list[str]]] = {}
    for row in rows:
        idx, col, storing, ascending = _unpack(row, 4)
        idx = _as_str(idx, "index_name", row)
        col = _as_str(col, "column_name", row)

        keys, stored = pending.setdefault(idx, ([], []))
        if _as_bool(storing, "storing", row):
            stored.append(col)
        else:
            direction = Direction.ASC if _as_bool(ascending, "direction", row) else Direction.DESC
            keys.append(IndexElem(col, direction))

    return {
        name: IndexDef(name=name, table=table, columns=tuple(keys), storing=tuple(stored))
        for name, (keys, stored) in pending.items()
    }


def assemble_indexes(source: "QuerySource", tables: Iterable[TableRef]) -> dict[TableName, dict[str, IndexDef]]:
    """Query and fold the indexes of every table.

    Tables whose index query returns no rows are left out. Any query or
    decode failure propagates and nothing is returned.

    Args:
        source: A ``QuerySource`` used to run one index query per table
        tables: Tables to inspect

    Returns:
        Mapping of table name to (index name -> IndexDef)
    """
    catalog: dict[TableName, dict[str, IndexDef]] = {}
    for table in tables:
        query = INDEXES_QUERY.format(table=table.name)
        rows = source.query(query)
        if not rows:
            logger.debug(f"No index rows for {table.name}")
            continue
        try:
            catalog[table.name] = fold_index_rows(table.name, rows)
        except RowDecodeError as e:
            e.query = query
            raise
        logger.debug(f"{table.name}: {len(catalog[table.name])} indexes")
    return catalog
