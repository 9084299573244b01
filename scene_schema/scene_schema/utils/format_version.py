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

"""Format version utilities for kind definition files.

The ``scene_schema_format`` field in definition files declares which
definition format the file is written against (e.g. ``1.0.0``).

Compatibility rule (semver-like):
  * **Major** must match exactly - a mismatch is an error.
  * **Minor** of the file newer than the tool -> warning.
  * **Patch** is ignored for compatibility purposes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .. import SCHEMA_FORMAT_VERSION
from ..exceptions import FormatVersionError


FORMAT_FIELD = "scene_schema_format"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``1.0.0`` (with or without 'v' prefix).

    Raises:
        FormatVersionError: If the string cannot be parsed.
    """
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Format version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid format version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '1.0.0')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of a format-version compatibility check."""

    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None
    supported_version: Optional[SemanticVersion] = None
    minor_newer: bool = False
    missing: bool = False


def check_format_version(raw_version: Optional[str], supported: Optional[str] = None) -> VersionCheckResult:
    """Check whether *raw_version* can be read by a tool supporting *supported*.

    A missing version is compatible but flagged (``missing=True``); a newer
    minor version is compatible but flagged (``minor_newer=True``); a major
    mismatch or an unparsable string is incompatible.
    """
    supported_ver = parse_format_version(supported or SCHEMA_FORMAT_VERSION)

    if raw_version is None:
        return VersionCheckResult(
            compatible=True,
            missing=True,
            message=(
                f"Missing '{FORMAT_FIELD}' field. "
                f"Consider adding '{FORMAT_FIELD}: {supported_ver}'."
            ),
            supported_version=supported_ver,
        )

    try:
        file_ver = parse_format_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(compatible=False, message=str(exc), supported_version=supported_ver)

    if file_ver.major != supported_ver.major:
        return VersionCheckResult(
            compatible=False,
            message=(
                f"Incompatible format version: file declares {file_ver} "
                f"but this tool supports major version {supported_ver.major} "
                f"(supported: {supported_ver})."
            ),
            file_version=file_ver,
            supported_version=supported_ver,
        )

    if file_ver.minor > supported_ver.minor:
        return VersionCheckResult(
            compatible=True,
            minor_newer=True,
            message=(
                f"Format version {file_ver} has a newer minor version than "
                f"the supported {supported_ver}. Some fields may not be understood."
            ),
            file_version=file_ver,
            supported_version=supported_ver,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"Format version {file_ver} is compatible (supported: {supported_ver}).",
        file_version=file_ver,
        supported_version=supported_ver,
    )
