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

"""YAML loading with caching and duplicate-key aware composition."""

import yaml
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import schema_config
from ..exceptions import SchemaDefinitionError

logger = logging.getLogger(__name__)


@dataclass
class PairsDocument:
    """A YAML mapping document kept as ordered ``(key, value)`` pairs.

    Keys appear as many times as the document spells them, so duplicates
    that ``safe_load`` would silently collapse stay visible. ``source_map``
    maps ``/key`` pointers to 1-based line numbers of the first occurrence.
    """

    pairs: List[Tuple[str, Any]]
    line: int = 1
    source_map: Dict[str, int] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        for name, value in self.pairs:
            if name == key:
                return value
        return default

    def without(self, *keys: str) -> List[Tuple[str, Any]]:
        return [(name, value) for name, value in self.pairs if name not in keys]


class YamlParser:
    """YAML parser with caching."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else schema_config.cache_enabled
        self._cache: Dict[Path, Any] = {}

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        return token.replace("~", "~0").replace("/", "~1")

    def load_config(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a YAML mapping document from file."""
        path = Path(file_path)

        if not path.is_file():
            raise SchemaDefinitionError(f"Definition file not found: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading definition from cache: {path}")
            return self._cache[path]

        try:
            logger.debug(f"Loading definition file: {path}")
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise SchemaDefinitionError(f"Failed to parse YAML file {path}: {exc}") from exc
        except OSError as exc:
            raise SchemaDefinitionError(f"Failed to read definition file {path}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SchemaDefinitionError(f"Root of {path} must be a mapping, got {type(data).__name__}")

        if self.cache_enabled:
            self._cache[path] = data
        return data

    def load_pair_documents_from_string(self, content: str) -> List[PairsDocument]:
        """Compose every document in ``content`` and keep top-level keys as pairs.

        Raises:
            yaml.YAMLError: If the content is not valid YAML.
        """
        documents: List[PairsDocument] = []
        constructor = yaml.SafeLoader("")

        for root in yaml.compose_all(content, Loader=yaml.SafeLoader):
            if root is None:
                continue
            line = root.start_mark.line + 1
            if not isinstance(root, yaml.nodes.MappingNode):
                documents.append(PairsDocument(pairs=[], line=line, source_map={"": line}))
                continue

            pairs: List[Tuple[str, Any]] = []
            source_map: Dict[str, int] = {"": line}
            for key_node, value_node in root.value:
                key = str(constructor.construct_document(key_node))
                value = constructor.construct_document(value_node)
                pairs.append((key, value))
                source_map.setdefault(f"/{self._json_pointer_escape(key)}", key_node.start_mark.line + 1)
            documents.append(PairsDocument(pairs=pairs, line=line, source_map=source_map))

        return documents

    def load_pair_documents(self, file_path: Union[str, Path]) -> List[PairsDocument]:
        """Load every mapping document of a YAML file as ordered pairs."""
        path = Path(file_path)
        return self.load_pair_documents_from_string(path.read_text(encoding="utf-8"))

    def clear_cache(self) -> None:
        self._cache.clear()


# Global parser instance
yaml_parser = YamlParser()
