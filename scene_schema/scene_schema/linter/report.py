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

"""Per-file results of snippet checking."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class SnippetReport:
    """Container for checking results of a single snippet file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []
        self.records: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    @staticmethod
    def _entry(message: str, line: Optional[int], yaml_path: Optional[str], kind: Optional[str]) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if line is not None:
            entry['line'] = line
        if yaml_path is not None:
            entry['yaml_path'] = yaml_path
        if kind is not None:
            entry['kind'] = kind
        return entry

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        yaml_path: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        self.errors.append(self._entry(message, line, yaml_path, kind))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        yaml_path: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        self.warnings.append(self._entry(message, line, yaml_path, kind))

    def format_human(self) -> str:
        lines = [f"{self.file_path}:"]
        for error in self.errors:
            line_info = f":{error['line']}" if 'line' in error else ""
            lines.append(f"  ERROR{line_info}: {error['message']}")
        for warning in self.warnings:
            line_info = f":{warning['line']}" if 'line' in warning else ""
            lines.append(f"  WARNING{line_info}: {warning['message']}")
        return "\n".join(lines)
