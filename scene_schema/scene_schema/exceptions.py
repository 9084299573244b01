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

"""Custom exceptions for the scene schema tooling."""

from typing import Any, Optional


class SceneSchemaError(Exception):
    """Base exception for scene-schema related errors."""
    pass


class RegistryError(SceneSchemaError):
    """Exception raised for entity kind registry errors."""
    pass


class DuplicateKindError(RegistryError):
    """Exception raised when a kind name is registered twice."""
    pass


class UnknownKindError(RegistryError):
    """Exception raised when looking up a kind that is not registered."""
    pass


class RegistryFrozenError(RegistryError):
    """Exception raised when registering into an initialized registry."""
    pass


class SchemaDefinitionError(SceneSchemaError):
    """Exception raised for malformed kind definition files."""
    pass


class FormatVersionError(SchemaDefinitionError):
    """Exception raised when a definition file's format version is incompatible."""
    pass


class EntityValidationError(SceneSchemaError):
    """Exception raised when an entity's field values fail validation.

    Carries the kind name, the (possibly dotted) field path and the received
    value so that callers can point at the offending input.
    """

    def __init__(self, message: str, kind: Optional[str] = None, field: Optional[str] = None, value: Any = None):
        self.kind = kind
        self.field = field
        self.value = value
        prefix = ""
        if kind is not None and field is not None:
            prefix = f"{kind}.{field}: "
        elif kind is not None:
            prefix = f"{kind}: "
        super().__init__(f"{prefix}{message}")


class UnknownFieldError(EntityValidationError):
    """Exception raised for a field not declared by the entity kind."""
    pass


class TypeMismatchError(EntityValidationError):
    """Exception raised when a value does not match the declared field type."""
    pass


class ConflictingScaleError(EntityValidationError):
    """Exception raised when scale is supplied in more than one form."""
    pass


class OutOfRangeError(EntityValidationError):
    """Exception raised for a numeric value outside its declared range."""
    pass


class MissingFieldError(EntityValidationError):
    """Exception raised when a required field is absent."""
    pass


class DuplicateFieldError(EntityValidationError):
    """Exception raised when a field is supplied more than once."""
    pass
