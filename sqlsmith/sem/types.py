# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Semantic SQL types.

Every type belongs to a semantic ``Family`` and carries the PostgreSQL
wire OID that identifies it. Catalogs are keyed by OID, so two types in
the same family (INT4 and INT8) land under different keys.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlsmith.core.errors import UnknownTypeError


class Family(Enum):
    """Semantic category of a SQL type."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    BYTES = "bytes"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    INTERVAL = "interval"
    UUID = "uuid"
    JSONB = "jsonb"
    INET = "inet"
    OID = "oid"
    ARRAY = "array"
    ANY = "any"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SQLType:
    """A concrete SQL type."""
    name: str
    family: Family
    oid: int
    element: Optional["SQLType"] = None  # Set for ARRAY types only

    @property
    def is_array(self) -> bool:
        return self.family is Family.ARRAY

    def __str__(self) -> str:
        return self.name


BOOL = SQLType("BOOL", Family.BOOL, 16)
INT2 = SQLType("INT2", Family.INT, 21)
INT4 = SQLType("INT4", Family.INT, 23)
INT = SQLType("INT8", Family.INT, 20)
FLOAT4 = SQLType("FLOAT4", Family.FLOAT, 700)
FLOAT = SQLType("FLOAT8", Family.FLOAT, 701)
DECIMAL = SQLType("DECIMAL", Family.DECIMAL, 1700)
STRING = SQLType("STRING", Family.STRING, 25)
BYTES = SQLType("BYTES", Family.BYTES, 17)
DATE = SQLType("DATE", Family.DATE, 1082)
TIME = SQLType("TIME", Family.TIME, 1083)
TIMESTAMP = SQLType("TIMESTAMP", Family.TIMESTAMP, 1114)
TIMESTAMPTZ = SQLType("TIMESTAMPTZ", Family.TIMESTAMPTZ, 1184)
INTERVAL = SQLType("INTERVAL", Family.INTERVAL, 1186)
UUID = SQLType("UUID", Family.UUID, 2950)
JSONB = SQLType("JSONB", Family.JSONB, 3802)
INET = SQLType("INET", Family.INET, 869)
OID = SQLType("OID", Family.OID, 26)
ANY = SQLType("ANYELEMENT", Family.ANY, 2283)
UNKNOWN = SQLType("UNKNOWN", Family.UNKNOWN, 705)

# Array OIDs from pg_type
_ARRAY_OIDS: dict[SQLType, int] = {
    BOOL: 1000,
    BYTES: 1001,
    INT2: 1005,
    INT4: 1007,
    STRING: 1009,
    INT: 1016,
    FLOAT4: 1021,
    FLOAT: 1022,
    INET: 1041,
    TIMESTAMP: 1115,
    DATE: 1182,
    TIME: 1183,
    TIMESTAMPTZ: 1185,
    INTERVAL: 1187,
    DECIMAL: 1231,
    UUID: 2951,
    JSONB: 3807,
    OID: 1028,
}

# Element type for ANYARRAY is ANY
ANY_ARRAY = SQLType("ANYARRAY", Family.ARRAY, 2277, element=ANY)


def array_of(element: SQLType) -> SQLType:
    """Return the array type whose elements are ``element``."""
    if element is ANY:
        return ANY_ARRAY
    oid = _ARRAY_OIDS.get(element)
    if oid is None:
        raise UnknownTypeError(f"{element.name}[]")
    return SQLType(f"{element.name}[]", Family.ARRAY, oid, element=element)


# Scalar types a generated expression may produce.
ANY_NON_ARRAY: tuple[SQLType, ...] = (
    BOOL,
    INT,
    FLOAT,
    DECIMAL,
    STRING,
    BYTES,
    DATE,
    TIME,
    TIMESTAMP,
    TIMESTAMPTZ,
    INTERVAL,
    UUID,
    INET,
    JSONB,
    OID,
)

NON_ARRAY_FAMILIES: frozenset[Family] = frozenset(t.family for t in ANY_NON_ARRAY)

# Names reported by information_schema.columns.crdb_sql_type and their aliases
_TYPE_NAMES: dict[str, SQLType] = {
    "BOOL": BOOL,
    "BOOLEAN": BOOL,
    "INT": INT,
    "INT8": INT,
    "INT64": INT,
    "BIGINT": INT,
    "INTEGER": INT,
    "INT4": INT4,
    "INT2": INT2,
    "SMALLINT": INT2,
    "FLOAT": FLOAT,
    "FLOAT8": FLOAT,
    "DOUBLE PRECISION": FLOAT,
    "FLOAT4": FLOAT4,
    "REAL": FLOAT4,
    "DECIMAL": DECIMAL,
    "NUMERIC": DECIMAL,
    "STRING": STRING,
    "TEXT": STRING,
    "VARCHAR": STRING,
    "CHAR": STRING,
    "CHARACTER VARYING": STRING,
    "BYTES": BYTES,
    "BYTEA": BYTES,
    "DATE": DATE,
    "TIME": TIME,
    "TIMESTAMP": TIMESTAMP,
    "TIMESTAMP WITHOUT TIME ZONE": TIMESTAMP,
    "TIMESTAMPTZ": TIMESTAMPTZ,
    "TIMESTAMP WITH TIME ZONE": TIMESTAMPTZ,
    "INTERVAL": INTERVAL,
    "UUID": UUID,
    "JSONB": JSONB,
    "JSON": JSONB,
    "INET": INET,
    "OID": OID,
}

# Width/precision modifiers such as VARCHAR(20) or DECIMAL(10,2)
_MODIFIER_RE = re.compile(r"\([^)]*\)")


def type_from_name(name: str) -> SQLType:
    """Resolve a textual SQL type name to its semantic type.

    Case-insensitive. Width and precision modifiers are ignored and a
    trailing ``[]`` resolves to the matching array type.

    Raises:
        UnknownTypeError: If the name is not in the lookup table. The
            introspection query and this table disagree; that is a bug,
            not a runtime condition.
    """
    normalized = " ".join(_MODIFIER_RE.sub(" ", name).upper().split())
    if normalized.endswith("[]"):
        return array_of(type_from_name(normalized[:-2]))
    typ = _TYPE_NAMES.get(normalized)
    if typ is None:
        raise UnknownTypeError(name)
    return typ
