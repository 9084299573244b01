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

"""Schema registry, validator and documentation renderer for scene entity kinds."""

# Format version of the bundled kind definitions. Must be set before the
# submodule imports below, which read it.
SCHEMA_FORMAT_VERSION = "1.0.0"

from .exceptions import (  # noqa: E402
    SceneSchemaError,
    RegistryError,
    DuplicateKindError,
    UnknownKindError,
    RegistryFrozenError,
    SchemaDefinitionError,
    FormatVersionError,
    EntityValidationError,
    UnknownFieldError,
    TypeMismatchError,
    ConflictingScaleError,
    OutOfRangeError,
    MissingFieldError,
    DuplicateFieldError,
)
from .models import EntityKind, Field, FieldType  # noqa: E402
from .registry import KindRegistry, load_registry, default_registry  # noqa: E402
from .validation import EntityValidator, validate  # noqa: E402
from .rendering import DocBlock, DocumentationRenderer, render, render_entity  # noqa: E402

__all__ = [
    "SCHEMA_FORMAT_VERSION",
    "SceneSchemaError",
    "RegistryError",
    "DuplicateKindError",
    "UnknownKindError",
    "RegistryFrozenError",
    "SchemaDefinitionError",
    "FormatVersionError",
    "EntityValidationError",
    "UnknownFieldError",
    "TypeMismatchError",
    "ConflictingScaleError",
    "OutOfRangeError",
    "MissingFieldError",
    "DuplicateFieldError",
    "EntityKind",
    "Field",
    "FieldType",
    "KindRegistry",
    "load_registry",
    "default_registry",
    "EntityValidator",
    "validate",
    "DocBlock",
    "DocumentationRenderer",
    "render",
    "render_entity",
]
