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

"""Checks documentation example snippets against the registered entity kinds.

A snippet file (``*.entity.yaml``) holds one entity per YAML document::

    kind: box
    position: {x: 0, y: 1, z: 0}
    scale: 2
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import yaml

from ..exceptions import DuplicateFieldError, EntityValidationError, UnknownKindError
from ..parsers.yaml_parser import PairsDocument, YamlParser, yaml_parser
from ..utils.format_version import FORMAT_FIELD, check_format_version
from ..validation import EntityValidator
from .report import SnippetReport

logger = logging.getLogger(__name__)

__all__ = ['check_snippets', 'check_snippet_text', 'find_snippet_files', 'SnippetReport']

SNIPPET_EXTENSION = '.entity.yaml'
KIND_KEY = 'kind'


def find_snippet_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Find all snippet files in the given files and directories."""
    found = []
    for path_str in paths:
        path = Path(path_str)
        if path.is_file():
            if path.name.endswith(SNIPPET_EXTENSION):
                found.append(path)
            else:
                logger.warning(f"File does not match snippet file pattern: {path}")
        elif path.is_dir():
            found.extend(path.rglob(f'*{SNIPPET_EXTENSION}'))
        else:
            logger.warning(f"Path does not exist: {path}")
    return sorted(set(found))


def _field_pointer(field: Optional[str]) -> Optional[str]:
    if not field:
        return None
    return "/" + field.split(".")[0].split("[")[0]


def _check_document(document: PairsDocument, validator: EntityValidator, report: SnippetReport) -> None:
    # validate() only sees the document without these keys
    for key in (KIND_KEY, FORMAT_FIELD):
        values = [value for name, value in document.pairs if name == key]
        if len(values) > 1:
            error = DuplicateFieldError(f"Field '{key}' supplied {len(values)} times", field=key, value=values)
            report.add_error(str(error), line=document.source_map.get(f"/{key}"), yaml_path=f"/{key}")
            return

    kind = document.get(KIND_KEY)
    if not isinstance(kind, str):
        report.add_error(f"Snippet must declare its entity kind with a '{KIND_KEY}' key", line=document.line)
        return

    raw_version = document.get(FORMAT_FIELD)
    if raw_version is not None:
        result = check_format_version(raw_version)
        if not result.compatible:
            report.add_error(result.message, line=document.source_map.get(f"/{FORMAT_FIELD}"), kind=kind)
            return
        if result.minor_newer:
            report.add_warning(result.message, line=document.source_map.get(f"/{FORMAT_FIELD}"), kind=kind)

    try:
        record = validator.validate(kind, document.without(KIND_KEY, FORMAT_FIELD))
    except UnknownKindError as e:
        report.add_error(str(e), line=document.source_map.get(f"/{KIND_KEY}"), yaml_path=f"/{KIND_KEY}", kind=kind)
        return
    except EntityValidationError as e:
        pointer = _field_pointer(e.field)
        line = document.source_map.get(pointer, document.line) if pointer else document.line
        report.add_error(str(e), line=line, yaml_path=pointer, kind=kind)
        return

    report.records.append({KIND_KEY: kind, **record})


def check_snippet_text(
    content: str,
    file_path: Union[str, Path] = "<string>",
    validator: Optional[EntityValidator] = None,
    parser: Optional[YamlParser] = None,
) -> SnippetReport:
    """Validate every entity document in ``content``."""
    validator = validator or EntityValidator()
    parser = parser or yaml_parser
    report = SnippetReport(Path(file_path))

    try:
        documents = parser.load_pair_documents_from_string(content)
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        report.add_error(f"Failed to parse YAML: {e}", line=mark.line + 1 if mark else None)
        return report

    for document in documents:
        _check_document(document, validator, report)
    return report


def check_snippets(
    paths: Iterable[Union[str, Path]],
    validator: Optional[EntityValidator] = None,
) -> List[SnippetReport]:
    """Check snippet files (or directories of them), one report per file.

    A failing entity is reported and skipped; other entities and files are
    still checked.
    """
    validator = validator or EntityValidator()
    reports = []
    for file_path in find_snippet_files(paths):
        try:
            content = file_path.read_text(encoding='utf-8')
        except OSError as e:
            report = SnippetReport(file_path)
            report.add_error(f"Failed to read file: {e}")
            reports.append(report)
            continue
        report = check_snippet_text(content, file_path, validator)
        if report.errors:
            logger.warning(report.format_human())
        reports.append(report)
    return reports
