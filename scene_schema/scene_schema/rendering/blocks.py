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

"""Documentation blocks for entity kinds and validated entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from ..models import EntityKind, Field
from ..models.field_types import format_value


@dataclass(frozen=True)
class DocBlock:
    """Documentation for a single field, optionally carrying an entity's value for it."""

    name: str
    type_label: str
    required: bool = False
    default: Optional[str] = None
    description: str = ""
    choices: Tuple[str, ...] = ()
    value_range: Optional[str] = None
    animatable: bool = False
    value: Optional[str] = None
    children: Tuple["DocBlock", ...] = field(default=())

    @property
    def has_value(self) -> bool:
        return self.value is not None

    def to_text(self, indent: int = 0) -> str:
        """Render the block as Markdown."""
        pad = "  " * indent
        if self.has_value:
            return f"{pad}- **{self.name}** (`{self.type_label}`): `{self.value}`"

        flags = ["required" if self.required else "optional"]
        if self.animatable:
            flags.append("animatable")
        lines = [f"{pad}- **{self.name}** (`{self.type_label}`, {', '.join(flags)})"]
        if self.description:
            lines.append(f"{pad}  {self.description}")
        if self.default is not None:
            lines.append(f"{pad}  Default: `{self.default}`")
        if self.value_range:
            lines.append(f"{pad}  Range: `{self.value_range}`")
        if self.choices:
            lines.append(f"{pad}  One of: {', '.join(f'`{c}`' for c in self.choices)}")
        lines.extend(child.to_text(indent + 1) for child in self.children)
        return "\n".join(lines)


def _range_label(f: Field) -> Optional[str]:
    if f.minimum is None and f.maximum is None:
        return None
    low = format_value(f.minimum) if f.minimum is not None else "-inf"
    high = format_value(f.maximum) if f.maximum is not None else "inf"
    return f"[{low}, {high}]"


def field_block(f: Field) -> DocBlock:
    type_label = f.type_label
    if f.item_type:
        type_label = f"{type_label} of {f.item_type}"
    return DocBlock(
        name=f.name,
        type_label=type_label,
        required=f.required,
        default=format_value(f.default) if f.has_default else None,
        description=f.description,
        choices=f.choices,
        value_range=_range_label(f),
        animatable=f.animatable,
        children=tuple(field_block(member) for member in f.fields + f.entries),
    )


class BlockSequence:
    """Lazy, finite and restartable sequence of documentation blocks.

    Every iteration runs the block factory again from the start.
    """

    def __init__(self, factory: Callable[[], Iterator[DocBlock]], size: int):
        self._factory = factory
        self._size = size

    def __iter__(self) -> Iterator[DocBlock]:
        return self._factory()

    def __len__(self) -> int:
        return self._size

    def to_text(self) -> str:
        return "\n".join(block.to_text() for block in self)


def render(kind: EntityKind) -> BlockSequence:
    """One documentation block per field of ``kind``, in declaration order.

    Does not validate.
    """

    def _blocks() -> Iterator[DocBlock]:
        for f in kind.fields:
            yield field_block(f)

    return BlockSequence(_blocks, len(kind.fields))


def render_entity(kind: EntityKind, record: Dict[str, Any]) -> BlockSequence:
    """One block per field of ``kind`` present in ``record``, carrying the formatted value.

    ``record`` is expected to be the output of validation.
    """
    present = [f for f in kind.fields if f.name in record]

    def _blocks() -> Iterator[DocBlock]:
        for f in present:
            yield DocBlock(
                name=f.name,
                type_label=f.type_label,
                required=f.required,
                description=f.description,
                animatable=f.animatable,
                value=format_value(record[f.name]),
            )

    return BlockSequence(_blocks, len(present))
