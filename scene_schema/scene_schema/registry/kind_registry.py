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

from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import logging

from ..config import schema_config
from ..exceptions import DuplicateKindError, RegistryFrozenError, SchemaDefinitionError, UnknownKindError
from ..models import EntityKind, Field
from ..parsers.kind_parser import KindParser

logger = logging.getLogger(__name__)


class KindRegistry:
    """Collection of entity kinds with lookup by name.

    The registry is populated once and then frozen; after :meth:`freeze` it is
    read-only and can be shared between threads without locking.
    """

    def __init__(self, base_fields: Tuple[Field, ...] = (), kinds: Iterable[EntityKind] = ()):
        self.base_fields = tuple(base_fields)
        self._kinds: Dict[str, EntityKind] = {}
        self._frozen = False
        for kind in kinds:
            self.register(kind)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, kind: EntityKind) -> EntityKind:
        """Add a kind to the registry."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register kind '{kind.name}': registry is already initialized")

        if kind.name in self._kinds:
            existing = self._kinds[kind.name]
            raise DuplicateKindError(
                f"Duplicate kind '{kind.name}' found:\n"
                f"  New: {kind.source}\n"
                f"  Existing: {existing.source}"
            )

        if not kind.includes_fields(self.base_fields):
            missing = [f.name for f in self.base_fields if kind.get_field(f.name) is None]
            raise SchemaDefinitionError(f"Kind '{kind.name}' is missing base fields: {missing}")

        self._kinds[kind.name] = kind
        logger.debug(f"Registered kind '{kind.name}'")
        return kind

    def freeze(self) -> "KindRegistry":
        self._frozen = True
        return self

    def lookup(self, name: str) -> EntityKind:
        """Get a kind by name."""
        kind = self._kinds.get(name)
        if kind is None:
            raise UnknownKindError(f"Kind '{name}' not found. Available kinds: {self.names()}")
        return kind

    def get(self, name: str, default: Optional[EntityKind] = None) -> Optional[EntityKind]:
        """Get a kind by name with default value."""
        return self._kinds.get(name, default)

    def names(self) -> List[str]:
        return list(self._kinds.keys())

    def kinds(self) -> List[EntityKind]:
        return list(self._kinds.values())

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[EntityKind]:
        return iter(list(self._kinds.values()))

    def __len__(self) -> int:
        return len(self._kinds)


def load_registry(definition_dir: Optional[Path] = None, schema_format: Optional[str] = None) -> KindRegistry:
    """Build a frozen registry from a definition directory (bundled definitions by default)."""
    parser = KindParser(schema_format=schema_format)
    kinds = parser.parse_definitions(definition_dir)

    base_fields = kinds[0].base_fields if kinds else ()
    registry = KindRegistry(base_fields=base_fields)
    for kind in kinds:
        try:
            registry.register(kind)
        except Exception as e:
            logger.error(f"Failed to register kind from {kind.source}: {e}")
            raise

    logger.info(f"Loaded {len(registry)} entity kinds: {', '.join(registry.names())}")
    return registry.freeze()


@lru_cache(maxsize=None)
def _cached_registry(schema_format: str) -> KindRegistry:
    return load_registry(schema_format=schema_format)


def default_registry() -> KindRegistry:
    """Shared registry of the bundled kinds for the configured format version."""
    return _cached_registry(schema_config.schema_format)
