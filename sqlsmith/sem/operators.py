# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Binary operator overloads of the target engine."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from sqlsmith.sem.types import (
    BYTES,
    DATE,
    DECIMAL,
    FLOAT,
    INET,
    INT,
    INTERVAL,
    JSONB,
    STRING,
    TIME,
    TIMESTAMP,
    TIMESTAMPTZ,
    SQLType,
    array_of,
)


class BinaryOperator(Enum):
    """Infix operator symbols."""
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    DIV = "/"
    FLOOR_DIV = "//"
    MOD = "%"
    POW = "^"
    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "#"
    CONCAT = "||"
    LSHIFT = "<<"
    RSHIFT = ">>"
    JSON_FETCH_VAL = "->"
    JSON_FETCH_TEXT = "->>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BinOp:
    """One overload: ``left <op> right -> return_type``."""
    left: SQLType
    right: SQLType
    return_type: SQLType


def _overloads(*signatures: tuple[SQLType, SQLType, SQLType]) -> tuple[BinOp, ...]:
    return tuple(BinOp(left, right, ret) for left, right, ret in signatures)


_NUMERIC = (INT, FLOAT, DECIMAL)


def _same_typed(*types: SQLType) -> list[tuple[SQLType, SQLType, SQLType]]:
    return [(t, t, t) for t in types]


BIN_OPS: Mapping[BinaryOperator, tuple[BinOp, ...]] = MappingProxyType({
    BinaryOperator.PLUS: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
        (DATE, INT, DATE),
        (INT, DATE, DATE),
        (DATE, TIME, TIMESTAMP),
        (DATE, INTERVAL, TIMESTAMP),
        (TIMESTAMP, INTERVAL, TIMESTAMP),
        (INTERVAL, TIMESTAMP, TIMESTAMP),
        (TIMESTAMPTZ, INTERVAL, TIMESTAMPTZ),
        (INTERVAL, TIMESTAMPTZ, TIMESTAMPTZ),
        (TIME, INTERVAL, TIME),
        (INTERVAL, INTERVAL, INTERVAL),
        (INET, INT, INET),
    ),
    BinaryOperator.MINUS: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
        (DATE, INT, DATE),
        (DATE, DATE, INT),
        (DATE, INTERVAL, TIMESTAMP),
        (TIMESTAMP, TIMESTAMP, INTERVAL),
        (TIMESTAMPTZ, TIMESTAMPTZ, INTERVAL),
        (TIMESTAMP, INTERVAL, TIMESTAMP),
        (TIMESTAMPTZ, INTERVAL, TIMESTAMPTZ),
        (TIME, INTERVAL, TIME),
        (TIME, TIME, INTERVAL),
        (INTERVAL, INTERVAL, INTERVAL),
        (JSONB, STRING, JSONB),
        (JSONB, INT, JSONB),
        (INET, INT, INET),
        (INET, INET, INT),
    ),
    BinaryOperator.MULT: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
        (INT, INTERVAL, INTERVAL),
        (INTERVAL, INT, INTERVAL),
        (INTERVAL, FLOAT, INTERVAL),
        (FLOAT, INTERVAL, INTERVAL),
        (DECIMAL, INTERVAL, INTERVAL),
        (INTERVAL, DECIMAL, INTERVAL),
    ),
    BinaryOperator.DIV: _overloads(
        (INT, INT, DECIMAL),
        (FLOAT, FLOAT, FLOAT),
        (DECIMAL, DECIMAL, DECIMAL),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
        (INTERVAL, INT, INTERVAL),
        (INTERVAL, FLOAT, INTERVAL),
    ),
    BinaryOperator.FLOOR_DIV: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
    ),
    BinaryOperator.MOD: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
    ),
    BinaryOperator.POW: _overloads(
        *_same_typed(*_NUMERIC),
        (INT, DECIMAL, DECIMAL),
        (DECIMAL, INT, DECIMAL),
    ),
    BinaryOperator.BIT_AND: _overloads(
        (INT, INT, INT),
        (INET, INET, INET),
    ),
    BinaryOperator.BIT_OR: _overloads(
        (INT, INT, INT),
        (INET, INET, INET),
    ),
    BinaryOperator.BIT_XOR: _overloads(
        (INT, INT, INT),
    ),
    BinaryOperator.CONCAT: _overloads(
        (STRING, STRING, STRING),
        (BYTES, BYTES, BYTES),
        (JSONB, JSONB, JSONB),
        (array_of(INT), array_of(INT), array_of(INT)),
        (array_of(STRING), array_of(STRING), array_of(STRING)),
        (array_of(INT), INT, array_of(INT)),
        (STRING, array_of(STRING), array_of(STRING)),
    ),
    BinaryOperator.LSHIFT: _overloads(
        (INT, INT, INT),
    ),
    BinaryOperator.RSHIFT: _overloads(
        (INT, INT, INT),
    ),
    BinaryOperator.JSON_FETCH_VAL: _overloads(
        (JSONB, STRING, JSONB),
        (JSONB, INT, JSONB),
    ),
    BinaryOperator.JSON_FETCH_TEXT: _overloads(
        (JSONB, STRING, STRING),
        (JSONB, INT, STRING),
    ),
})
