# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Binary operators indexed by the type they return."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from sqlsmith.sem.operators import BIN_OPS, BinaryOperator, BinOp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operator:
    """One overload of one operator symbol."""
    symbol: BinaryOperator
    overload: BinOp


OperatorCatalog = Mapping[int, tuple[Operator, ...]]


def build_operator_catalog(
    registry: Mapping[BinaryOperator, tuple[BinOp, ...]] = BIN_OPS,
) -> OperatorCatalog:
    """Index every operator overload by its return type OID.

    Nothing is filtered: a symbol with overloads returning different types
    appears under each of those types. Call once at startup and share the
    result; it cannot be modified.
    """
    by_type: dict[int, list[Operator]] = {}
    for symbol, overloads in registry.items():
        for overload in overloads:
            by_type.setdefault(overload.return_type.oid, []).append(Operator(symbol, overload))

    catalog = MappingProxyType({oid: tuple(ops) for oid, ops in by_type.items()})
    logger.debug(
        f"Operator catalog: {sum(len(ops) for ops in catalog.values())} overloads "
        f"across {len(catalog)} return types"
    )
    return catalog
