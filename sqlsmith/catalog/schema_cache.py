# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Current tables and indexes of the database under test.

``SchemaCache`` is the only mutable schema state. ``refresh()`` reloads
everything under the exclusive side of a reader/writer lock and swaps the
new tables and indexes in only after both queries have succeeded. The
``pick_*`` family and ``indexes_for`` hold the shared side, so they never
observe a half-finished refresh.

Usage:
    cache = SchemaCache.from_config(config)
    cache.refresh()

    table = cache.pick_random_table()
    pick = cache.pick_random_index()
    if pick.found:
        print(pick.name, pick.index.to_sql())
"""

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlsmith.catalog.schema import (
    COLUMNS_QUERY,
    IndexDef,
    TableIndexName,
    TableName,
    TableRef,
    assemble_indexes,
    group_columns,
)
from sqlsmith.catalog.source import QuerySource, SQLAlchemySource
from sqlsmith.core.config import Config
from sqlsmith.core.errors import RowDecodeError, UnknownTypeError
from sqlsmith.core.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class PickOutcome(Enum):
    """Result of a random index pick."""
    FOUND = "found"
    NO_TABLES = "no_tables"
    NO_INDEXES = "no_indexes"


@dataclass(frozen=True)
class IndexPick:
    """An index chosen at random, or the reason none was."""
    outcome: PickOutcome
    name: Optional[TableIndexName] = None
    index: Optional[IndexDef] = None

    @property
    def found(self) -> bool:
        return self.outcome is PickOutcome.FOUND


_NO_TABLES = IndexPick(PickOutcome.NO_TABLES)
_NO_INDEXES = IndexPick(PickOutcome.NO_INDEXES)


class SchemaCache:
    """Thread-safe holder of the discovered tables and indexes."""

    def __init__(
        self,
        source: Optional[QuerySource] = None,
        target_schema: str = "public",
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            source: Where metadata queries run. None means schema-less mode:
                refresh() does nothing and no tables are ever available.
            target_schema: Only tables in this schema are kept
            rng: Random source for the pick_* methods
        """
        self._source = source
        self.target_schema = target_schema
        self._rng = rng or random.Random()
        # Guards _rng; taken while holding the shared side of _lock
        self._rng_lock = threading.Lock()
        self._lock = ReadWriteLock()
        self._tables: list[TableRef] = []
        self._indexes: dict[TableName, dict[str, IndexDef]] = {}

    @classmethod
    def from_config(cls, config: Config) -> "SchemaCache":
        """Build a cache for the configured database."""
        db = config.database
        source = None
        if not db.is_schemaless():
            source = SQLAlchemySource.from_uri(db.uri, db.connect_args)
        return cls(source=source, target_schema=db.target_schema, rng=random.Random(config.seed))

    @property
    def tables(self) -> tuple[TableRef, ...]:
        """Snapshot of the current tables."""
        with self._lock.read_locked():
            return tuple(self._tables)

    def refresh(self) -> None:
        """Reload all tables and indexes from the database.

        On failure the previous tables and indexes stay in place and the
        error propagates.
        """
        if self._source is None:
            logger.warning("No database configured, skipping schema refresh")
            return

        with self._lock.write_locked():
            try:
                rows = self._source.query(COLUMNS_QUERY, {"schema": self.target_schema})
            except Exception:
                logger.exception("Column metadata query failed; keeping previous schema")
                raise
            try:
                tables = group_columns(rows, self.target_schema)
            except RowDecodeError as e:
                e.query = COLUMNS_QUERY
                logger.exception("Column metadata could not be decoded; keeping previous schema")
                raise
            except UnknownTypeError:
                logger.exception("Column has an unknown type; keeping previous schema")
                raise
            try:
                indexes = assemble_indexes(self._source, tables)
            except Exception:
                logger.exception("Index metadata query or decode failed; keeping previous schema")
                raise

            self._tables = tables
            self._indexes = indexes

        logger.info(
            f"Loaded {len(tables)} tables and "
            f"{sum(len(idx) for idx in indexes.values())} indexes "
            f"from schema '{self.target_schema}'"
        )

    def pick_random_table(self) -> Optional[TableRef]:
        """Return a table chosen uniformly at random, or None if there are none."""
        with self._lock.read_locked():
            if not self._tables:
                return None
            with self._rng_lock:
                return self._rng.choice(self._tables)

    def indexes_for(self, table: TableName) -> dict[str, IndexDef]:
        """Return the indexes of ``table`` by name (empty if it has none)."""
        with self._lock.read_locked():
            return dict(self._indexes.get(table, {}))

    def pick_random_index_on(self, table: TableName) -> IndexPick:
        """Pick one index of ``table`` uniformly at random."""
        with self._lock.read_locked():
            return self._pick_index_on(table)

    def pick_random_index(self) -> IndexPick:
        """Pick a random table, then one of its indexes.

        NO_TABLES means the schema is empty. NO_INDEXES means only the
        chosen table has none; another attempt may pick a different table.
        """
        with self._lock.read_locked():
            if not self._tables:
                return _NO_TABLES
            with self._rng_lock:
                table = self._rng.choice(self._tables)
            return self._pick_index_on(table.name)

    def _pick_index_on(self, table: TableName) -> IndexPick:
        # Caller holds the shared lock
        indexes = self._indexes.get(table)
        if not indexes:
            return _NO_INDEXES
        names = list(indexes)
        with self._rng_lock:
            name = self._rng.choice(names)
        return IndexPick(PickOutcome.FOUND, TableIndexName(table, name), indexes[name])
