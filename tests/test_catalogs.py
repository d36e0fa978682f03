# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for the operator and function catalogs."""

import pytest

from sqlsmith.catalog.functions import build_function_catalog
from sqlsmith.catalog.operators import Operator, build_operator_catalog
from sqlsmith.sem import types
from sqlsmith.sem.functions import FUN_DEFS, FunctionClass, FunctionDefinition, Overload
from sqlsmith.sem.operators import BIN_OPS, BinaryOperator, BinOp


@pytest.fixture(scope="module")
def operators():
    return build_operator_catalog()


@pytest.fixture(scope="module")
def functions():
    return build_function_catalog()


def _names(functions, cls):
    return {fn.name for fns in functions.get(cls, {}).values() for fn in fns}


class TestOperatorCatalog:
    """Test indexing binary operators by return type."""

    def test_every_overload_appears_once(self, operators):
        expected = sum(len(ovs) for ovs in BIN_OPS.values())
        assert sum(len(ops) for ops in operators.values()) == expected

    def test_keyed_by_own_return_type(self, operators):
        for oid, ops in operators.items():
            for op in ops:
                assert op.overload.return_type.oid == oid

    def test_symbol_with_several_return_types(self, operators):
        """|| on strings and on bytes lands under both types."""
        string_ops = {op.symbol for op in operators[types.STRING.oid]}
        bytes_ops = {op.symbol for op in operators[types.BYTES.oid]}
        assert BinaryOperator.CONCAT in string_ops
        assert BinaryOperator.CONCAT in bytes_ops

    def test_array_returning_operators_are_kept(self, operators):
        assert types.array_of(types.INT).oid in operators

    def test_custom_registry(self):
        plus = BinOp(types.INT, types.INT, types.INT)
        div = BinOp(types.INT, types.INT, types.DECIMAL)
        catalog = build_operator_catalog({
            BinaryOperator.PLUS: (plus,),
            BinaryOperator.DIV: (div,),
        })
        assert catalog[types.INT.oid] == (Operator(BinaryOperator.PLUS, plus),)
        assert catalog[types.DECIMAL.oid] == (Operator(BinaryOperator.DIV, div),)

    def test_catalog_is_read_only(self, operators):
        with pytest.raises(TypeError):
            operators[0] = ()


class TestFunctionCatalog:
    """Test filtering and indexing builtin functions."""

    def test_sleep_and_force_functions_excluded(self, functions):
        for cls in functions:
            names = _names(functions, cls)
            assert "pg_sleep" not in names
            assert not any("crdb_internal.force_" in n for n in names)

    def test_compatibility_functions_excluded(self, functions):
        names = _names(functions, FunctionClass.NORMAL)
        assert "pg_get_userbyid" not in names
        assert "format_type" not in names

    def test_private_functions_excluded(self, functions):
        assert "crdb_internal.node_id" not in _names(functions, FunctionClass.NORMAL)
        assert "crdb_internal.unary_table" not in _names(functions, FunctionClass.GENERATOR)

    def test_not_usable_overloads_excluded(self, functions):
        assert "json_populate_record" not in _names(functions, FunctionClass.NORMAL)

    def test_array_returning_overloads_excluded(self, functions):
        assert "string_to_array" not in _names(functions, FunctionClass.NORMAL)
        assert "array_agg" not in _names(functions, FunctionClass.AGGREGATE)
        for by_type in functions.values():
            for fns in by_type.values():
                for fn in fns:
                    assert not fn.overload.fixed_return_type().is_array

    def test_polymorphic_return_excluded(self, functions):
        """coalesce(anyelement) returns ANY, which is not a scalar family."""
        assert "coalesce" not in _names(functions, FunctionClass.NORMAL)
        assert "unnest" not in _names(functions, FunctionClass.GENERATOR)

    def test_keyed_by_class_and_return_type(self, functions):
        for cls, by_type in functions.items():
            for oid, fns in by_type.items():
                for fn in fns:
                    assert fn.definition.function_class is cls
                    assert fn.overload.fixed_return_type().oid == oid

    def test_overloads_split_by_return_type(self, functions):
        """sum(INT) -> DECIMAL and sum(FLOAT) -> FLOAT land under different keys."""
        aggregates = functions[FunctionClass.AGGREGATE]
        assert "sum" in {fn.name for fn in aggregates[types.DECIMAL.oid]}
        assert "sum" in {fn.name for fn in aggregates[types.FLOAT.oid]}

    def test_all_classes_present(self, functions):
        assert set(functions) == set(FunctionClass)

    def test_builder_is_deterministic(self, functions):
        again = build_function_catalog()
        assert set(again) == set(functions)
        for cls in functions:
            assert set(again[cls]) == set(functions[cls])
            for oid in functions[cls]:
                assert len(again[cls][oid]) == len(functions[cls][oid])

    def test_custom_registry_rule_order(self):
        """Class entry exists even when every overload is filtered later."""
        registry = {
            "shim": FunctionDefinition("shim", "Compatibility", FunctionClass.WINDOW, (Overload((), types.INT),)),
            "pg_sleep": FunctionDefinition("pg_sleep", "System info", FunctionClass.GENERATOR, (Overload((), types.BOOL),)),
            "ok": FunctionDefinition("ok", "Math", FunctionClass.NORMAL, (
                Overload((), types.INT),
                Overload((types.INT,), types.INT, info="Not usable; internal"),
                Overload((types.STRING,), types.array_of(types.STRING)),
            )),
        }

        catalog = build_function_catalog(registry)

        assert FunctionClass.WINDOW in catalog
        assert dict(catalog[FunctionClass.WINDOW]) == {}
        assert FunctionClass.GENERATOR not in catalog
        normal = catalog[FunctionClass.NORMAL]
        assert list(normal) == [types.INT.oid]
        assert [fn.overload.args for fn in normal[types.INT.oid]] == [()]

    def test_registry_contains_exclusion_cases(self):
        """The builtin registry exercises every filter rule."""
        assert "pg_sleep" in FUN_DEFS
        assert any(d.category == "Compatibility" for d in FUN_DEFS.values())
        assert any(d.private for d in FUN_DEFS.values())
        assert any("Not usable" in o.info for d in FUN_DEFS.values() for o in d.overloads)
