# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Exceptions raised by the schema and catalog layer.

Query failures are not wrapped: whatever the database driver raises
(``sqlalchemy.exc.SQLAlchemyError``) reaches the caller unchanged.
"""

from typing import Any, Optional


class SmithError(Exception):
    """Base class for sqlsmith errors."""
    pass


class UnknownTypeError(SmithError):
    """Raised when an introspected type name has no semantic type."""
    def __init__(self, type_name: str):
        super().__init__(f"Unknown SQL type name: {type_name!r}")
        self.type_name = type_name


class RowDecodeError(SmithError):
    """Raised when a metadata row does not have the expected shape."""
    def __init__(
        self,
        message: str,
        row: Any = None,
        query: Optional[str] = None,
    ):
        super().__init__(message)
        self.row = row
        self.query = query
