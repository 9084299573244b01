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

"""Entity kind and field data structures."""

from .field_types import FieldType, normalize_type_name, is_supported_field_type
from .entity_kind import MISSING, Field, EntityKind, TransitionSpec, SkeletalAnimationRef

__all__ = [
    "FieldType",
    "normalize_type_name",
    "is_supported_field_type",
    "MISSING",
    "Field",
    "EntityKind",
    "TransitionSpec",
    "SkeletalAnimationRef",
]
