# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Query execution against the database under test."""

import logging
from typing import Any, Optional, Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class QuerySource(Protocol):
    """Anything that can run a query and return its rows as tuples."""

    def query(self, sql: str, params: Optional[dict[str, Any]] = None) -> list[tuple]:
        ...


class SQLAlchemySource:
    """QuerySource backed by a SQLAlchemy engine.

    Each call checks a connection out of the engine's pool and returns it
    once the rows are fetched. Driver errors are not caught.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_uri(cls, uri: str, connect_args: Optional[dict[str, Any]] = None) -> "SQLAlchemySource":
        engine = create_engine(uri, connect_args=connect_args or {})
        logger.debug(f"Created engine for {engine.url.render_as_string(hide_password=True)}")
        return cls(engine)

    def query(self, sql: str, params: Optional[dict[str, Any]] = None) -> list[tuple]:
        with self.engine.connect() as conn:
            result = conn.execute(text(sql), params or {})
            return [tuple(row) for row in result]

    def dispose(self) -> None:
        """Close pooled connections."""
        self.engine.dispose()
