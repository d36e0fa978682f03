# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Semantic registry of the target engine: types, operators and builtins.

The catalog builders read this registry and never modify it.
"""

from .functions import FUN_DEFS, FunctionClass, FunctionDefinition, Overload
from .operators import BIN_OPS, BinaryOperator, BinOp
from .types import ANY_NON_ARRAY, Family, SQLType, array_of, type_from_name

__all__ = [
    "ANY_NON_ARRAY",
    "BIN_OPS",
    "BinOp",
    "BinaryOperator",
    "FUN_DEFS",
    "Family",
    "FunctionClass",
    "FunctionDefinition",
    "Overload",
    "SQLType",
    "array_of",
    "type_from_name",
]
