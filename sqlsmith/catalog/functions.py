# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Builtin functions indexed by class and return type.

Only functions a random statement generator can call safely are kept.
Rules are applied in this order:

1. ``pg_sleep`` and ``crdb_internal.force_*`` debugging functions are dropped.
2. Functions in the ``Compatibility`` category are dropped; most are stubs.
3. Private functions are dropped.
4. Overloads documented as "Not usable" are dropped.
5. Overloads whose return type is not a scalar (non-array) type are dropped.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from sqlsmith.sem.functions import FUN_DEFS, FunctionClass, FunctionDefinition, Overload
from sqlsmith.sem.types import NON_ARRAY_FAMILIES

logger = logging.getLogger(__name__)

EXCLUDED_NAMES = frozenset({"pg_sleep"})
FORCE_FUNCTION_MARKER = "crdb_internal.force_"
COMPATIBILITY_CATEGORY = "Compatibility"
NOT_USABLE_MARKER = "Not usable"


@dataclass(frozen=True)
class Function:
    """One callable overload of one builtin."""
    definition: FunctionDefinition
    overload: Overload

    @property
    def name(self) -> str:
        return self.definition.name


FunctionCatalog = Mapping[FunctionClass, Mapping[int, tuple[Function, ...]]]


def _skip_definition(definition: FunctionDefinition) -> bool:
    return definition.name in EXCLUDED_NAMES or FORCE_FUNCTION_MARKER in definition.name


def build_function_catalog(
    registry: Mapping[str, FunctionDefinition] = FUN_DEFS,
) -> FunctionCatalog:
    """Index callable overloads by function class, then return type OID.

    A class gets an entry as soon as one of its definitions gets past the
    name filter, even if every overload is dropped later. Call once at
    startup and share the result; it cannot be modified.
    """
    by_class: dict[FunctionClass, dict[int, list[Function]]] = {}
    skipped = 0
    for definition in registry.values():
        if _skip_definition(definition):
            skipped += 1
            continue
        by_type = by_class.setdefault(definition.function_class, {})
        if definition.category == COMPATIBILITY_CATEGORY or definition.private:
            skipped += 1
            continue

        for overload in definition.overloads:
            if NOT_USABLE_MARKER in overload.info:
                continue
            typ = overload.fixed_return_type()
            if typ.family not in NON_ARRAY_FAMILIES:
                continue
            by_type.setdefault(typ.oid, []).append(Function(definition, overload))

    catalog = MappingProxyType({
        cls: MappingProxyType({oid: tuple(fns) for oid, fns in by_type.items()})
        for cls, by_type in by_class.items()
    })
    logger.debug(f"Function catalog: {len(registry) - skipped} of {len(registry)} builtins usable")
    return catalog
