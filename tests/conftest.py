# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Pytest configuration and shared fixtures."""

from typing import Any, Optional

import pytest

from sqlsmith.catalog.schema import COLUMNS_QUERY


class FakeSource:
    """QuerySource that replays canned rows.

    ``columns`` answers the column metadata query. ``indexes`` maps a
    substring of the index query (normally the rendered table name) to its
    rows, or to an exception instance to raise.
    """

    def __init__(self, columns=None, indexes: Optional[dict[str, Any]] = None):
        self.columns = columns or []
        self.indexes = indexes or {}
        self.queries: list[tuple[str, Optional[dict]]] = []

    def query(self, sql: str, params: Optional[dict[str, Any]] = None) -> list[tuple]:
        self.queries.append((sql, params))
        if sql == COLUMNS_QUERY:
            if isinstance(self.columns, Exception):
                raise self.columns
            return list(self.columns)
        for key, rows in self.indexes.items():
            if key in sql:
                if isinstance(rows, Exception):
                    raise rows
                return list(rows)
        return []


def column_row(table: str, column: str, typ: str = "INT8", *, catalog: str = "defaultdb",
               schema: str = "public", computed: bool = False, nullable: bool = True,
               hidden: bool = False) -> tuple:
    """Build one row of the column metadata query."""
    return (catalog, schema, table, column, typ, computed, nullable, hidden)


@pytest.fixture
def two_table_source() -> FakeSource:
    """Tables t1 (two indexes) and t2 (no indexes)."""
    return FakeSource(
        columns=[
            column_row("t1", "a", "INT8", nullable=False),
            column_row("t1", "b", "STRING"),
            column_row("t1", "rowid", "INT8", hidden=True),
            column_row("t2", "c", "BOOL"),
        ],
        indexes={
            "defaultdb.public.t1": [
                ("primary", "a", False, True),
                ("t1_b_idx", "b", False, False),
                ("t1_b_idx", "a", True, False),
            ],
        },
    )
