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

"""JSON Schema loader for kind definition files."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..exceptions import FormatVersionError
from ..utils.format_version import SemanticVersion, parse_format_version

logger = logging.getLogger(__name__)

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_root() -> Path:
    """Directory holding one sub-directory per definition format version."""
    return Path(__file__).parent


def get_schema_path(schema_name: str, version: str) -> Path:
    """Get the path to a JSON Schema file for the given schema name and version.

    Args:
        schema_name: Schema name (kind_definition, index)
        version: Format version string (e.g., "1.0.0")
    """
    return get_schema_root() / version / f"{schema_name}.json"


def available_versions() -> List[SemanticVersion]:
    """List the definition format versions bundled with the package."""
    versions = []
    for version_dir in get_schema_root().iterdir():
        if not version_dir.is_dir():
            continue
        try:
            versions.append(parse_format_version(version_dir.name))
        except FormatVersionError:
            # __pycache__ and other non-version directories
            continue
    return sorted(versions, key=lambda v: (v.major, v.minor, v.patch))


def resolve_schema_version(version: str) -> str:
    """Resolve the bundled version directory to use for ``version``.

    Version resolution rules:
    - Major version must match exactly
    - If the exact version exists, use it
    - Otherwise prefer the largest patch of the same minor, then the closest
      larger minor, then the largest available version of that major

    Raises:
        FormatVersionError: If no bundled version shares the major version.
    """
    parsed = parse_format_version(version)

    if (get_schema_root() / str(parsed)).is_dir():
        return str(parsed)

    candidates = [v for v in available_versions() if v.major == parsed.major]
    if not candidates:
        raise FormatVersionError(
            f"No bundled kind definitions for format version {version} "
            f"(available: {[str(v) for v in available_versions()]})"
        )

    same_minor = [v for v in candidates if v.minor == parsed.minor]
    if same_minor:
        best = max(same_minor, key=lambda v: v.patch)
    else:
        larger_minor = [v for v in candidates if v.minor > parsed.minor]
        if larger_minor:
            closest = min(v.minor for v in larger_minor)
            best = max((v for v in larger_minor if v.minor == closest), key=lambda v: v.patch)
        else:
            best = max(candidates, key=lambda v: (v.minor, v.patch))

    logger.debug(f"Resolved definition format {version} to bundled version {best}")
    return str(best)


def get_definition_dir(version: str) -> Path:
    """Directory holding the YAML kind definitions for ``version``."""
    return get_schema_root() / resolve_schema_version(version)


def load_schema(schema_name: str, version: str) -> dict:
    """Load a JSON Schema file for the given schema name and version.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    resolved_version = resolve_schema_version(version)

    cache_key = f"{schema_name}-v{resolved_version}"
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    schema_path = get_schema_path(schema_name, resolved_version)
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found for {schema_name} version {version} "
            f"(resolved to {resolved_version}): {schema_path}"
        )

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    _SCHEMA_CACHE[cache_key] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
