# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Schema discovery and the static operator/function catalogs."""

from .functions import Function, FunctionCatalog, build_function_catalog
from .operators import Operator, OperatorCatalog, build_operator_catalog
from .schema import (
    ColumnDef,
    Direction,
    IndexDef,
    IndexElem,
    TableIndexName,
    TableName,
    TableRef,
    assemble_indexes,
    fold_index_rows,
    group_columns,
    pop_table,
)
from .schema_cache import IndexPick, PickOutcome, SchemaCache
from .source import QuerySource, SQLAlchemySource

__all__ = [
    "ColumnDef",
    "Direction",
    "Function",
    "FunctionCatalog",
    "IndexDef",
    "IndexElem",
    "IndexPick",
    "Operator",
    "OperatorCatalog",
    "PickOutcome",
    "QuerySource",
    "SQLAlchemySource",
    "SchemaCache",
    "TableIndexName",
    "TableName",
    "TableRef",
    "assemble_indexes",
    "build_function_catalog",
    "build_operator_catalog",
    "fold_index_rows",
    "group_columns",
    "pop_table",
]
