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

"""Parser for kind definition files."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema

from ..config import schema_config
from ..exceptions import FormatVersionError, SchemaDefinitionError
from ..models import MISSING, EntityKind, Field, FieldType, is_supported_field_type, normalize_type_name
from ..schema.json_schema_loader import get_definition_dir, load_schema
from ..utils.format_version import FORMAT_FIELD, check_format_version
from ..validation.validator import EntityValidator
from .yaml_parser import YamlParser, yaml_parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[str] = None


def validate_against_json_schema(data: Any, json_schema: dict) -> List[SchemaIssue]:
    """Collect every JSON Schema violation of ``data``, in document order."""
    validator = jsonschema.Draft7Validator(json_schema)
    issues = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SchemaIssue(message=error.message, yaml_path=path))
    return issues


def _format_schema_issues(issues: List[SchemaIssue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (f" (yaml_path={i.yaml_path})" if i.yaml_path else "")
        for i in issues
    )


class KindParser:
    """Builds :class:`EntityKind` objects from YAML definition files."""

    def __init__(self, schema_format: Optional[str] = None, parser: Optional[YamlParser] = None):
        self.schema_format = schema_format or schema_config.schema_format
        self.parser = parser or yaml_parser

    def _check_document(self, data: Dict[str, Any], schema_name: str, file_path: Path) -> None:
        result = check_format_version(data.get(FORMAT_FIELD), self.schema_format)
        if not result.compatible:
            raise FormatVersionError(f"{result.message} File: {file_path}")
        if result.missing or result.minor_newer:
            logger.warning(f"{result.message} File: {file_path}")

        issues = validate_against_json_schema(data, load_schema(schema_name, self.schema_format))
        if issues:
            details = _format_schema_issues(issues)
            raise SchemaDefinitionError(f"Schema validation failed for {file_path}:\n{details}")

    def _parse_types(self, raw: Any, owner: str) -> Tuple[str, ...]:
        names = raw if isinstance(raw, list) else [raw]
        types = []
        for raw_name in names:
            type_name = normalize_type_name(raw_name)
            if not is_supported_field_type(type_name):
                raise SchemaDefinitionError(
                    f"Unsupported field type '{raw_name}' for '{owner}'. "
                    f"Valid types: {list(FieldType.get_all_types())}"
                )
            types.append(type_name)
        return tuple(types)

    def parse_field(self, raw: Dict[str, Any], owner: str = "") -> Field:
        """Turn one ``fields`` entry of a definition document into a :class:`Field`."""
        path = f"{owner}.{raw['name']}" if owner else raw["name"]
        types = self._parse_types(raw["type"], path)

        item_type = None
        if "items" in raw:
            (item_type,) = self._parse_types(raw["items"], f"{path}[]")
        elif FieldType.LIST in types and raw.get("fields"):
            item_type = FieldType.OBJECT

        return Field(
            name=raw["name"],
            types=types,
            required=raw.get("required", False),
            default=copy.deepcopy(raw["default"]) if "default" in raw else MISSING,
            description=raw.get("description", "").strip(),
            choices=tuple(raw.get("choices", ())),
            minimum=raw.get("minimum"),
            maximum=raw.get("maximum"),
            item_type=item_type,
            fields=tuple(self.parse_field(member, path) for member in raw.get("fields", ())),
            entries=tuple(self.parse_field(entry, f"{path}.*") for entry in raw.get("entries", ())),
            animatable=raw.get("animatable", False),
        )

    def parse_base_fields(self, file_path: Path) -> Tuple[Field, ...]:
        data = self.parser.load_config(file_path)
        self._check_document(data, "kind_definition", file_path)
        return tuple(self.parse_field(raw) for raw in data["fields"])

    def parse_kind_file(self, file_path: Path, base_fields: Tuple[Field, ...]) -> EntityKind:
        """Parse one ``<name>.kind.yaml`` file on top of the shared base fields."""
        data = self.parser.load_config(file_path)
        self._check_document(data, "kind_definition", file_path)

        # file/path/to/<kind name>.kind.yaml
        file_kind_name = file_path.name[: -len(".kind.yaml")]
        if data["name"] != file_kind_name:
            raise SchemaDefinitionError(
                f"Kind name '{data['name']}' does not match file name '{file_kind_name}'. File: {file_path}"
            )

        kind = EntityKind(
            name=data["name"],
            description=data.get("description", "").strip(),
            base_fields=base_fields,
            own_fields=tuple(self.parse_field(raw) for raw in data["fields"]),
            source=str(file_path),
        )
        try:
            EntityValidator(strict_unknown_fields=True).check_defaults(kind)
        except SchemaDefinitionError as e:
            raise SchemaDefinitionError(f"{e} File: {file_path}") from e
        logger.debug(f"Parsed kind '{kind.name}' with {len(kind.fields)} fields from {file_path}")
        return kind

    def parse_definitions(self, definition_dir: Optional[Path] = None) -> List[EntityKind]:
        """Parse the index of a definition directory and every kind it lists, in index order."""
        definition_dir = Path(definition_dir) if definition_dir else get_definition_dir(self.schema_format)
        index_path = definition_dir / "index.yaml"

        index = self.parser.load_config(index_path)
        self._check_document(index, "index", index_path)

        base_fields = self.parse_base_fields(definition_dir / index["base"])
        return [self.parse_kind_file(definition_dir / name, base_fields) for name in index["kinds"]]
