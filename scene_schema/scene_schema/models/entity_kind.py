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

"""Data structures describing entity kinds and their fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..exceptions import SchemaDefinitionError
from .field_types import FieldType


class _Missing:
    """Marker for a field without a default value."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Field:
    """A single documented property of an entity kind.

    ``types`` holds every accepted semantic type; more than one entry is a
    union (``scale`` accepts ``number`` or ``vector3``). ``fields`` describes
    the members of an ``object`` value or of each item of a ``list`` of
    objects. ``entries`` describes the value stored under each key of a keyed
    object whose keys name animatable fields of the owning kind (transitions).
    """

    name: str
    types: Tuple[str, ...]
    required: bool = False
    default: Any = MISSING
    description: str = ""
    choices: Tuple[str, ...] = ()
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    item_type: Optional[str] = None
    fields: Tuple["Field", ...] = ()
    entries: Tuple["Field", ...] = ()
    animatable: bool = False

    def __post_init__(self):
        if not self.types:
            raise SchemaDefinitionError(f"Field '{self.name}' declares no type")
        if self.required and self.has_default:
            raise SchemaDefinitionError(f"Field '{self.name}' is required and cannot declare a default")
        if FieldType.ENUM in self.types and not self.choices:
            raise SchemaDefinitionError(f"Enumerated field '{self.name}' declares no choices")
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise SchemaDefinitionError(
                f"Field '{self.name}' has minimum {self.minimum} greater than maximum {self.maximum}"
            )

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def type_label(self) -> str:
        return " | ".join(self.types)

    @property
    def is_union(self) -> bool:
        return len(self.types) > 1

    def get_member(self, name: str) -> Optional["Field"]:
        for member in self.fields:
            if member.name == name:
                return member
        return None


@dataclass(frozen=True)
class EntityKind:
    """A named entity type: the shared base fields plus kind-specific fields."""

    name: str
    description: str = ""
    base_fields: Tuple[Field, ...] = ()
    own_fields: Tuple[Field, ...] = ()
    source: Optional[str] = None
    _index: Dict[str, Field] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise SchemaDefinitionError(f"Kind name must be a non-empty string, got: {self.name!r}")

        base_names = {f.name for f in self.base_fields}
        for own in self.own_fields:
            if own.name in base_names:
                raise SchemaDefinitionError(
                    f"Kind '{self.name}' redeclares base field '{own.name}'"
                )

        for f in self.fields:
            if f.name in self._index:
                raise SchemaDefinitionError(f"Kind '{self.name}' declares field '{f.name}' twice")
            self._index[f.name] = f

    @property
    def fields(self) -> Tuple[Field, ...]:
        """All fields in declaration order, base fields first."""
        return self.base_fields + self.own_fields

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def animatable_field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.animatable)

    def get_field(self, name: str) -> Optional[Field]:
        return self._index.get(name)

    def includes_fields(self, fields: Tuple[Field, ...]) -> bool:
        """Check that every field name in ``fields`` is declared by this kind."""
        return all(f.name in self._index for f in fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)


@dataclass(frozen=True)
class TransitionSpec:
    """Typed view of one validated transition entry."""

    duration: Union[int, float]
    timing: Optional[str] = None
    delay: Union[int, float] = 0

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TransitionSpec":
        return cls(
            duration=record["duration"],
            timing=record.get("timing"),
            delay=record.get("delay", 0),
        )


@dataclass(frozen=True)
class SkeletalAnimationRef:
    """Typed view of one validated skeletal animation reference (gltf-model only)."""

    clip: Union[str, int]
    loop: bool = True
    weight: Union[int, float] = 1
    playing: bool = True

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SkeletalAnimationRef":
        return cls(
            clip=record["clip"],
            loop=record.get("loop", True),
            weight=record.get("weight", 1),
            playing=record.get("playing", True),
        )
