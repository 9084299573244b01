# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from typing import Any, Optional, Tuple


class FieldType:
    """Semantic field types understood by the validator and renderer."""
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    VECTOR3 = "vector3"
    ENUM = "enum"
    OBJECT = "object"
    LIST = "list"

    @classmethod
    def get_all_types(cls) -> Tuple[str, ...]:
        return (cls.NUMBER, cls.INTEGER, cls.STRING, cls.BOOLEAN, cls.VECTOR3, cls.ENUM, cls.OBJECT, cls.LIST)


_ALIASES = {
    "str": FieldType.STRING,
    "text": FieldType.STRING,
    "bool": FieldType.BOOLEAN,
    "int": FieldType.INTEGER,
    "float": FieldType.NUMBER,
    "double": FieldType.NUMBER,
    "vec3": FieldType.VECTOR3,
    "vector": FieldType.VECTOR3,
    "array": FieldType.LIST,
    "map": FieldType.OBJECT,
    "dict": FieldType.OBJECT,
}

VECTOR_AXES = ("x", "y", "z")


def normalize_type_name(type_name: Any) -> Optional[str]:
    if type_name is None:
        return None
    name = str(type_name).strip().lower()
    return _ALIASES.get(name, name)


def is_supported_field_type(type_name: Optional[str]) -> bool:
    if not type_name:
        return False
    return type_name in FieldType.get_all_types()


def is_number(value: Any) -> bool:
    # bool is a subclass of int but never a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def coerce_vector3(value: Any) -> Optional[dict]:
    """Return ``value`` as an ``{x, y, z}`` mapping, or None if it is not a 3-vector.

    Accepts a mapping with exactly the keys x, y and z, or a list/tuple of three
    numbers.
    """
    if isinstance(value, dict):
        if set(value.keys()) != set(VECTOR_AXES):
            return None
        if not all(is_number(value[axis]) for axis in VECTOR_AXES):
            return None
        return {axis: value[axis] for axis in VECTOR_AXES}
    if isinstance(value, (list, tuple)):
        if len(value) != 3 or not all(is_number(v) for v in value):
            return None
        return dict(zip(VECTOR_AXES, value))
    return None


def describe_value_type(value: Any) -> str:
    """Name the semantic type of a received value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if is_number(value):
        return FieldType.INTEGER if isinstance(value, int) else FieldType.NUMBER
    if isinstance(value, str):
        return FieldType.STRING
    if coerce_vector3(value) is not None:
        return FieldType.VECTOR3
    if isinstance(value, dict):
        return FieldType.OBJECT
    if isinstance(value, (list, tuple)):
        return FieldType.LIST
    return type(value).__name__


def format_value(value: Any) -> str:
    """Format a field value the way documentation pages show it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    vector = coerce_vector3(value) if isinstance(value, dict) else None
    if vector is not None:
        return "{" + ", ".join(f"{axis}: {format_value(vector[axis])}" for axis in VECTOR_AXES) + "}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, dict):
        return "{" + ", ".join(f"{k}: {format_value(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    if value is None:
        return "null"
    return str(value)
