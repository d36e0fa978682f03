# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for semantic type resolution."""

import pytest

from sqlsmith.core.errors import UnknownTypeError
from sqlsmith.sem import types
from sqlsmith.sem.functions import Overload


class TestTypeFromName:

    @pytest.mark.parametrize("name,expected", [
        ("INT8", types.INT),
        ("int4", types.INT4),
        ("INT2", types.INT2),
        ("STRING", types.STRING),
        ("text", types.STRING),
        ("VARCHAR(255)", types.STRING),
        ("DECIMAL(10,2)", types.DECIMAL),
        ("FLOAT8", types.FLOAT),
        ("BOOL", types.BOOL),
        ("TIMESTAMPTZ", types.TIMESTAMPTZ),
        ("timestamp with time zone", types.TIMESTAMPTZ),
        ("TIMESTAMP(6)", types.TIMESTAMP),
        ("JSONB", types.JSONB),
        ("UUID", types.UUID),
    ])
    def test_scalar_names(self, name, expected):
        assert types.type_from_name(name) == expected

    def test_array_names(self):
        typ = types.type_from_name("INT8[]")
        assert typ.is_array
        assert typ.element == types.INT
        assert typ.oid == 1016
        assert types.type_from_name("VARCHAR(20)[]").element == types.STRING

    def test_unknown_name(self):
        with pytest.raises(UnknownTypeError, match="GEOGRAPHY"):
            types.type_from_name("GEOGRAPHY")

    def test_any_non_array_excludes_arrays(self):
        assert types.Family.ARRAY not in types.NON_ARRAY_FAMILIES
        assert types.Family.ANY not in types.NON_ARRAY_FAMILIES
        assert types.INT4.family in types.NON_ARRAY_FAMILIES


class TestOverloadReturnType:

    def test_fixed(self):
        assert Overload((types.INT,), types.STRING).fixed_return_type() == types.STRING

    def test_computed_from_args(self):
        ov = Overload((types.DATE,), return_type_fn=lambda args: args[0])
        assert ov.fixed_return_type() == types.DATE

    def test_unresolved(self):
        assert Overload(()).fixed_return_type() == types.UNKNOWN
