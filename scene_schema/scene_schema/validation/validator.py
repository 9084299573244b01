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

"""Validation of entity field values against registered kinds."""

from __future__ import annotations

import copy
import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..config import schema_config
from ..exceptions import (
    ConflictingScaleError,
    DuplicateFieldError,
    EntityValidationError,
    MissingFieldError,
    OutOfRangeError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnknownFieldError,
)
from ..models import EntityKind, Field, FieldType
from ..models.field_types import coerce_vector3, describe_value_type, is_integer, is_number

if TYPE_CHECKING:
    from ..registry import KindRegistry

logger = logging.getLogger(__name__)

FieldValues = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]

SCALE_FIELD = "scale"


class _NoMatch(Exception):
    """Raised internally when a value does not have one of a field's types."""


@dataclass
class ValidationOutcome:
    """Result of validating one entity among many."""

    kind: str
    record: Optional[Dict[str, Any]] = None
    error: Optional[EntityValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _as_pairs(field_values: FieldValues, kind_name: str) -> List[Tuple[str, Any]]:
    if isinstance(field_values, Mapping):
        pairs = list(field_values.items())
    elif isinstance(field_values, (str, bytes)):
        raise TypeMismatchError(
            f"Field values must be a mapping or (name, value) pairs, got {describe_value_type(field_values)}",
            kind=kind_name,
            value=field_values,
        )
    else:
        pairs = []
        for item in field_values:
            if not isinstance(item, (tuple, list)) or len(item) != 2:
                raise TypeMismatchError(
                    f"Field values must be (name, value) pairs, got {item!r}",
                    kind=kind_name,
                    value=item,
                )
            pairs.append((item[0], item[1]))

    for name, value in pairs:
        if not isinstance(name, str):
            raise TypeMismatchError(f"Field names must be strings, got {name!r}", kind=kind_name, value=value)
    return pairs


class EntityValidator:
    """Checks entity field values against the declared fields of a kind.

    Validation is pure: it never changes the registry or the supplied values,
    and a failure only rejects the entity being validated.
    """

    def __init__(self, registry: Optional[KindRegistry] = None, strict_unknown_fields: Optional[bool] = None):
        self._registry = registry
        self.strict_unknown_fields = (
            schema_config.strict_unknown_fields if strict_unknown_fields is None else strict_unknown_fields
        )

    @property
    def registry(self) -> KindRegistry:
        if self._registry is None:
            # registry loading parses definitions, which checks defaults through this module
            from ..registry import default_registry

            self._registry = default_registry()
        return self._registry

    def resolve_kind(self, kind: Union[str, EntityKind]) -> EntityKind:
        if isinstance(kind, EntityKind):
            return kind
        return self.registry.lookup(kind)

    def validate(self, kind: Union[str, EntityKind], field_values: FieldValues) -> Dict[str, Any]:
        """Validate field values and return the normalized record.

        The record lists fields in declaration order, with defaults applied
        for absent optional fields.
        """
        entity_kind = self.resolve_kind(kind)
        pairs = _as_pairs(field_values, entity_kind.name)

        self._check_duplicates(entity_kind, pairs)

        supplied: Dict[str, Any] = {}
        for name, value in pairs:
            field = entity_kind.get_field(name)
            if field is None:
                if self.strict_unknown_fields:
                    raise UnknownFieldError(
                        f"Unknown field. Declared fields: {list(entity_kind.field_names)}",
                        kind=entity_kind.name,
                        field=name,
                        value=value,
                    )
                logger.warning(f"Dropping unknown field '{name}' of kind '{entity_kind.name}'")
                continue
            supplied[name] = self._check_value(entity_kind, field, value, name)

        return self._complete(entity_kind, entity_kind.fields, supplied, path="")

    def validate_many(self, entities: Iterable[Tuple[Union[str, EntityKind], FieldValues]]) -> List[ValidationOutcome]:
        """Validate several entities; a failing entity does not stop the others."""
        outcomes = []
        for kind, field_values in entities:
            kind_name = kind.name if isinstance(kind, EntityKind) else str(kind)
            try:
                outcomes.append(ValidationOutcome(kind=kind_name, record=self.validate(kind, field_values)))
            except EntityValidationError as e:
                outcomes.append(ValidationOutcome(kind=kind_name, error=e))
        return outcomes

    def check_defaults(self, kind: EntityKind) -> None:
        """Check every declared default (nested ones included) against its own field.

        A default must pass the field's type, choice and range checks and already
        be in normalized form, so that records built from defaults validate to
        themselves.
        """
        self._check_field_defaults(kind, kind.fields, "")

    def _check_field_defaults(self, kind: EntityKind, fields: Tuple[Field, ...], path: str) -> None:
        for field in fields:
            field_path = f"{path}.{field.name}" if path else field.name
            if field.has_default:
                try:
                    normalized = self._check_value(kind, field, field.default, field_path)
                except EntityValidationError as e:
                    raise SchemaDefinitionError(f"Invalid default: {e}") from e
                if normalized != field.default:
                    raise SchemaDefinitionError(
                        f"Invalid default: {kind.name}.{field_path}: write the default in normalized form "
                        f"({normalized!r}, not {field.default!r})"
                    )
            self._check_field_defaults(kind, field.fields, f"{field_path}[]" if field.item_type else field_path)
            self._check_field_defaults(kind, field.entries, f"{field_path}.*")

    def _check_duplicates(self, kind: EntityKind, pairs: List[Tuple[str, Any]]) -> None:
        counts = Counter(name for name, _ in pairs)
        for name, count in counts.items():
            if count < 2:
                continue
            values = [value for key, value in pairs if key == name]
            if name == SCALE_FIELD:
                forms = ", ".join(describe_value_type(v) for v in values)
                raise ConflictingScaleError(
                    f"Scale supplied {count} times ({forms}); give either a uniform number or a vector",
                    kind=kind.name,
                    field=name,
                    value=values,
                )
            raise DuplicateFieldError(
                f"Field supplied {count} times",
                kind=kind.name,
                field=name,
                value=values,
            )

    def _complete(self, kind: EntityKind, fields: Tuple[Field, ...], supplied: Dict[str, Any], path: str) -> Dict[str, Any]:
        record: Dict[str, Any] = {}
        for field in fields:
            if field.name in supplied:
                record[field.name] = supplied[field.name]
            elif field.required:
                raise MissingFieldError(
                    "Required field is missing",
                    kind=kind.name,
                    field=f"{path}.{field.name}" if path else field.name,
                )
            elif field.has_default:
                record[field.name] = copy.deepcopy(field.default)
        return record

    def _check_members(self, kind: EntityKind, members: Tuple[Field, ...], value: Dict[str, Any], path: str) -> Dict[str, Any]:
        by_name = {member.name: member for member in members}
        supplied: Dict[str, Any] = {}
        for name, member_value in value.items():
            member = by_name.get(name)
            member_path = f"{path}.{name}"
            if member is None:
                raise UnknownFieldError(
                    f"Unknown field. Declared fields: {list(by_name)}",
                    kind=kind.name,
                    field=member_path,
                    value=member_value,
                )
            supplied[name] = self._check_value(kind, member, member_value, member_path)
        return self._complete(kind, members, supplied, path)

    def _check_value(self, kind: EntityKind, field: Field, value: Any, path: str) -> Any:
        for type_name in field.types:
            try:
                normalized = self._match_type(kind, field, type_name, value, path)
            except _NoMatch:
                continue
            self._check_range(kind, field, normalized, path)
            return normalized

        raise TypeMismatchError(
            f"expected {field.type_label}, got {describe_value_type(value)}",
            kind=kind.name,
            field=path,
            value=value,
        )

    def _check_range(self, kind: EntityKind, field: Field, value: Any, path: str) -> None:
        if not is_number(value):
            return
        bounded = field.minimum is not None or field.maximum is not None
        too_low = field.minimum is not None and value < field.minimum
        too_high = field.maximum is not None and value > field.maximum
        if too_low or too_high or (bounded and math.isnan(value)):
            low = field.minimum if field.minimum is not None else "-inf"
            high = field.maximum if field.maximum is not None else "inf"
            raise OutOfRangeError(
                f"value {value} outside [{low}, {high}]",
                kind=kind.name,
                field=path,
                value=value,
            )

    def _match_type(self, kind: EntityKind, field: Field, type_name: str, value: Any, path: str) -> Any:
        if type_name == FieldType.NUMBER:
            if is_number(value):
                return value
        elif type_name == FieldType.INTEGER:
            if is_integer(value):
                return int(value)
        elif type_name == FieldType.STRING:
            if isinstance(value, str):
                return value
        elif type_name == FieldType.BOOLEAN:
            if isinstance(value, bool):
                return value
        elif type_name == FieldType.VECTOR3:
            vector = coerce_vector3(value)
            if vector is not None:
                return vector
        elif type_name == FieldType.ENUM:
            if isinstance(value, str):
                if value not in field.choices:
                    raise TypeMismatchError(
                        f"expected one of {list(field.choices)}, got '{value}'",
                        kind=kind.name,
                        field=path,
                        value=value,
                    )
                return value
        elif type_name == FieldType.OBJECT:
            if isinstance(value, dict):
                return self._match_object(kind, field, value, path)
        elif type_name == FieldType.LIST:
            if isinstance(value, (list, tuple)):
                return self._match_list(kind, field, list(value), path)
        raise _NoMatch(type_name)

    def _match_object(self, kind: EntityKind, field: Field, value: Dict[str, Any], path: str) -> Dict[str, Any]:
        if field.fields:
            return self._check_members(kind, field.fields, value, path)

        if field.entries:
            animatable = kind.animatable_field_names
            entries: Dict[str, Any] = {}
            for target, entry in value.items():
                entry_path = f"{path}.{target}"
                if target not in animatable:
                    raise UnknownFieldError(
                        f"Not an animatable field. Animatable fields: {list(animatable)}",
                        kind=kind.name,
                        field=entry_path,
                        value=entry,
                    )
                if not isinstance(entry, dict):
                    raise TypeMismatchError(
                        f"expected object, got {describe_value_type(entry)}",
                        kind=kind.name,
                        field=entry_path,
                        value=entry,
                    )
                entries[target] = self._check_members(kind, field.entries, entry, entry_path)
            return entries

        return copy.deepcopy(value)

    def _match_list(self, kind: EntityKind, field: Field, items: List[Any], path: str) -> List[Any]:
        if field.item_type is None:
            return copy.deepcopy(items)

        item_field = Field(
            name=field.name,
            types=(field.item_type,),
            fields=field.fields,
            choices=field.choices,
        )
        return [
            self._check_value(kind, item_field, item, f"{path}[{idx}]")
            for idx, item in enumerate(items)
        ]


_default_validator: Optional[EntityValidator] = None


def validate(kind: Union[str, EntityKind], field_values: FieldValues, registry: Optional[KindRegistry] = None) -> Dict[str, Any]:
    """Validate ``field_values`` for ``kind`` and return the normalized record."""
    global _default_validator
    if registry is not None:
        return EntityValidator(registry).validate(kind, field_values)
    if _default_validator is None:
        _default_validator = EntityValidator()
    return _default_validator.validate(kind, field_values)
