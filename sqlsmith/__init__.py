# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""sqlsmith - schema and catalog layer for a random SQL statement generator.

Submodules:
- sem: Semantic types, binary operators and builtin functions of the target engine
- catalog: Schema discovery, the schema cache, and the operator/function catalogs
- core: Configuration, errors and locking

Main classes:
- SchemaCache: Current tables and indexes, with random picks
- Config: Configuration loading from YAML
"""

from sqlsmith.catalog import (
    IndexDef,
    IndexPick,
    SchemaCache,
    TableName,
    TableRef,
    build_function_catalog,
    build_operator_catalog,
)
from sqlsmith.core.config import Config, DatabaseConfig

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DatabaseConfig",
    "IndexDef",
    "IndexPick",
    "SchemaCache",
    "TableName",
    "TableRef",
    "build_function_catalog",
    "build_operator_catalog",
]
