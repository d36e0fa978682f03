# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Builtin function definitions of the target engine.

Each ``FunctionDefinition`` groups the overloads of one name. An overload
either declares a fixed return type or computes it from its argument
types; ``Overload.fixed_return_type`` resolves both forms against the
declared parameters.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from sqlsmith.sem.types import (
    ANY,
    ANY_ARRAY,
    ANY_NON_ARRAY,
    BOOL,
    BYTES,
    DATE,
    DECIMAL,
    FLOAT,
    INT,
    INTERVAL,
    JSONB,
    OID,
    STRING,
    TIMESTAMP,
    TIMESTAMPTZ,
    UNKNOWN,
    UUID,
    SQLType,
    array_of,
)


class FunctionClass(Enum):
    """How a function is evaluated."""
    NORMAL = "normal"
    AGGREGATE = "aggregate"
    WINDOW = "window"
    GENERATOR = "generator"


ReturnTypeFn = Callable[[tuple[SQLType, ...]], SQLType]


@dataclass(frozen=True)
class Overload:
    """One signature of a builtin."""
    args: tuple[SQLType, ...]
    return_type: Optional[SQLType] = None
    return_type_fn: Optional[ReturnTypeFn] = field(default=None, compare=False)
    info: str = ""

    def fixed_return_type(self) -> SQLType:
        """Return type when called with the declared parameter types."""
        if self.return_type is not None:
            return self.return_type
        if self.return_type_fn is not None:
            return self.return_type_fn(self.args)
        return UNKNOWN


@dataclass(frozen=True)
class FunctionDefinition:
    """All overloads of one builtin name."""
    name: str
    category: str
    function_class: FunctionClass
    overloads: tuple[Overload, ...]
    private: bool = False


def _first_arg(args: tuple[SQLType, ...]) -> SQLType:
    return args[0] if args else UNKNOWN


def _per_type(types: tuple[SQLType, ...], arity: int = 1, ret: Optional[SQLType] = None, info: str = "") -> list[Overload]:
    """One overload per type: ``f(t, ..., t) -> ret`` (``t`` when ret is None)."""
    return [Overload((t,) * arity, ret if ret is not None else t, info=info) for t in types]


def _define(
    name: str,
    category: str,
    overloads: list[Overload],
    function_class: FunctionClass = FunctionClass.NORMAL,
    private: bool = False,
) -> FunctionDefinition:
    return FunctionDefinition(
        name=name,
        category=category,
        function_class=function_class,
        overloads=tuple(overloads),
        private=private,
    )


_NUMERIC = (INT, FLOAT, DECIMAL)
_ORDERED = (BOOL, INT, FLOAT, DECIMAL, STRING, BYTES, DATE, TIMESTAMP, TIMESTAMPTZ, INTERVAL, UUID)

_AGGREGATE = FunctionClass.AGGREGATE
_WINDOW = FunctionClass.WINDOW
_GENERATOR = FunctionClass.GENERATOR

_DEFINITIONS: list[FunctionDefinition] = [
    # Math and numeric
    _define("abs", "Math and numeric", _per_type(_NUMERIC)),
    _define("ceil", "Math and numeric", _per_type((FLOAT, DECIMAL))),
    _define("floor", "Math and numeric", _per_type((FLOAT, DECIMAL))),
    _define("sqrt", "Math and numeric", _per_type((FLOAT, DECIMAL))),
    _define("sign", "Math and numeric", _per_type(_NUMERIC)),
    _define("round", "Math and numeric", [
        Overload((FLOAT,), FLOAT),
        Overload((DECIMAL,), DECIMAL),
        Overload((FLOAT, INT), FLOAT),
        Overload((DECIMAL, INT), DECIMAL),
    ]),
    _define("pow", "Math and numeric", _per_type(_NUMERIC, arity=2)),
    _define("mod", "Math and numeric", _per_type(_NUMERIC, arity=2)),
    _define("pi", "Math and numeric", [Overload((), FLOAT)]),
    _define("random", "Math and numeric", [Overload((), FLOAT)]),

    # String and byte
    _define("length", "String and byte", [
        Overload((STRING,), INT),
        Overload((BYTES,), INT),
    ]),
    _define("lower", "String and byte", [Overload((STRING,), STRING)]),
    _define("upper", "String and byte", [Overload((STRING,), STRING)]),
    _define("concat", "String and byte", [Overload((STRING, STRING), STRING)]),
    _define("substr", "String and byte", [
        Overload((STRING, INT), STRING),
        Overload((STRING, INT, INT), STRING),
    ]),
    _define("replace", "String and byte", [Overload((STRING, STRING, STRING), STRING)]),
    _define("repeat", "String and byte", [Overload((STRING, INT), STRING)]),
    _define("split_part", "String and byte", [Overload((STRING, STRING, INT), STRING)]),
    _define("strpos", "String and byte", [Overload((STRING, STRING), INT)]),
    _define("md5", "String and byte", [
        Overload((STRING,), STRING),
        Overload((BYTES,), STRING),
    ]),
    _define("to_hex", "String and byte", [
        Overload((INT,), STRING),
        Overload((BYTES,), STRING),
    ]),
    _define("string_to_array", "Array", [Overload((STRING, STRING), array_of(STRING))]),

    # Date and time
    _define("now", "Date and time", [Overload((), TIMESTAMPTZ)]),
    _define("current_date", "Date and time", [Overload((), DATE)]),
    _define("age", "Date and time", [
        Overload((TIMESTAMPTZ,), INTERVAL),
        Overload((TIMESTAMPTZ, TIMESTAMPTZ), INTERVAL),
    ]),
    _define("extract", "Date and time", [
        Overload((STRING, TIMESTAMP), FLOAT),
        Overload((STRING, TIMESTAMPTZ), FLOAT),
        Overload((STRING, DATE), FLOAT),
    ]),
    _define("date_trunc", "Date and time", [
        Overload((STRING, TIMESTAMP), TIMESTAMP),
        Overload((STRING, TIMESTAMPTZ), TIMESTAMPTZ),
    ]),

    # ID generation, JSONB and arrays
    _define("gen_random_uuid", "ID generation", [Overload((), UUID)]),
    _define("jsonb_typeof", "JSONB", [Overload((JSONB,), STRING)]),
    _define("to_jsonb", "JSONB", [Overload((ANY,), JSONB)]),
    _define("json_populate_record", "JSONB", [
        Overload((ANY, JSONB), return_type_fn=_first_arg,
                 info="Not usable; exposed only for ORM compatibility."),
    ]),
    _define("array_length", "Array", [Overload((ANY_ARRAY, INT), INT)]),
    _define("array_append", "Array", [
        Overload((array_of(t), t), array_of(t)) for t in (INT, STRING, FLOAT)
    ]),
    _define("coalesce", "Comparison", [Overload((ANY, ANY), return_type_fn=_first_arg)]),
    _define("greatest", "Comparison", _per_type(_NUMERIC, arity=2)),
    _define("least", "Comparison", _per_type(_NUMERIC, arity=2)),

    # Aggregates
    _define("count", "Aggregate", [Overload((ANY,), INT)], _AGGREGATE),
    _define("count_rows", "Aggregate", [Overload((), INT)], _AGGREGATE),
    _define("sum", "Aggregate", [
        Overload((INT,), DECIMAL),
        Overload((FLOAT,), FLOAT),
        Overload((DECIMAL,), DECIMAL),
        Overload((INTERVAL,), INTERVAL),
    ], _AGGREGATE),
    _define("avg", "Aggregate", [
        Overload((INT,), DECIMAL),
        Overload((FLOAT,), FLOAT),
        Overload((DECIMAL,), DECIMAL),
        Overload((INTERVAL,), INTERVAL),
    ], _AGGREGATE),
    _define("min", "Aggregate", _per_type(_ORDERED), _AGGREGATE),
    _define("max", "Aggregate", _per_type(_ORDERED), _AGGREGATE),
    _define("bool_and", "Aggregate", [Overload((BOOL,), BOOL)], _AGGREGATE),
    _define("bool_or", "Aggregate", [Overload((BOOL,), BOOL)], _AGGREGATE),
    _define("string_agg", "Aggregate", [
        Overload((STRING, STRING), STRING),
        Overload((BYTES, BYTES), BYTES),
    ], _AGGREGATE),
    _define("stddev", "Aggregate", _per_type((FLOAT, DECIMAL)), _AGGREGATE),
    _define("variance", "Aggregate", _per_type((FLOAT, DECIMAL)), _AGGREGATE),
    _define("array_agg", "Aggregate", [
        Overload((t,), array_of(t)) for t in (INT, STRING, FLOAT, DECIMAL)
    ], _AGGREGATE),
    _define("json_agg", "Aggregate", [Overload((ANY,), JSONB)], _AGGREGATE),

    # Window
    _define("row_number", "Window", [Overload((), INT)], _WINDOW),
    _define("rank", "Window", [Overload((), INT)], _WINDOW),
    _define("dense_rank", "Window", [Overload((), INT)], _WINDOW),
    _define("percent_rank", "Window", [Overload((), FLOAT)], _WINDOW),
    _define("cume_dist", "Window", [Overload((), FLOAT)], _WINDOW),
    _define("ntile", "Window", [Overload((INT,), INT)], _WINDOW),
    _define("lag", "Window", _per_type(ANY_NON_ARRAY), _WINDOW),
    _define("lead", "Window", _per_type(ANY_NON_ARRAY), _WINDOW),
    _define("first_value", "Window", _per_type(ANY_NON_ARRAY), _WINDOW),
    _define("last_value", "Window", _per_type(ANY_NON_ARRAY), _WINDOW),

    # Generators
    _define("generate_series", "Set-returning", [
        Overload((INT, INT), INT),
        Overload((INT, INT, INT), INT),
        Overload((TIMESTAMP, TIMESTAMP, INTERVAL), TIMESTAMP),
    ], _GENERATOR),
    _define("unnest", "Set-returning", [Overload((ANY_ARRAY,), ANY)], _GENERATOR),

    # Functions a random generator must never call
    _define("pg_sleep", "System info", [Overload((FLOAT,), BOOL)]),
    _define("crdb_internal.force_error", "System info", [Overload((STRING, STRING), INT)]),
    _define("crdb_internal.force_panic", "System info", [Overload((STRING,), INT)]),
    _define("crdb_internal.force_retry", "System info", [Overload((INTERVAL,), INT)]),
    _define("pg_get_userbyid", "Compatibility", [Overload((OID,), STRING)]),
    _define("format_type", "Compatibility", [Overload((OID, INT), STRING)]),
    _define("has_table_privilege", "Compatibility", [Overload((STRING, STRING), BOOL)]),
    _define("crdb_internal.unary_table", "System info", [Overload((), INT)], _GENERATOR, private=True),
    _define("crdb_internal.node_id", "System info", [Overload((), INT)], private=True),
]

FUN_DEFS: Mapping[str, FunctionDefinition] = MappingProxyType({d.name: d for d in _DEFINITIONS})
