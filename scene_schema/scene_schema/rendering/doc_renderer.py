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

import logging
import os
from typing import Any, Dict, List, Optional

from ..models import EntityKind
from ..registry import KindRegistry
from .blocks import render, render_entity
from .template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class DocumentationRenderer:
    """Renders documentation pages for entity kinds and entity examples.

    Output is Markdown or HTML; navigation, styling and site chrome are left to
    the static-site generator that consumes the pages.
    """

    FORMATS = {"markdown": "md", "html": "html"}

    def __init__(self, output_format: str = "markdown", template_dir: Optional[str] = None):
        if output_format not in self.FORMATS:
            raise ValueError(f"Unknown output format '{output_format}'. Valid formats: {list(self.FORMATS)}")
        self.output_format = output_format
        self.extension = self.FORMATS[output_format]
        self.template_renderer = TemplateRenderer(template_dir)

    def _template(self, page: str) -> str:
        return f"{page}.{self.extension}.jinja2"

    def render_kind_page(self, kind: EntityKind) -> str:
        return self.template_renderer.render_template(
            self._template("kind_page"), kind=kind, blocks=list(render(kind))
        )

    def render_entity_example(self, kind: EntityKind, record: Dict[str, Any], title: str = "") -> str:
        """Render a validated entity record as an example snippet."""
        return self.template_renderer.render_template(
            self._template("entity"), kind=kind, blocks=list(render_entity(kind, record)), title=title
        )

    def render_catalog(self, registry: KindRegistry) -> Dict[str, str]:
        """Render one page per registered kind, keyed by kind name."""
        return {kind.name: self.render_kind_page(kind) for kind in registry}

    def render_to_file(self, kind: EntityKind, output_path: str) -> None:
        self.template_renderer.render_template_to_file(
            self._template("kind_page"), output_path, kind=kind, blocks=list(render(kind))
        )
        logger.debug(f"Rendered kind '{kind.name}' to {output_path}")

    def render_catalog_to_dir(self, registry: KindRegistry, output_dir: str) -> List[str]:
        """Write one page per registered kind into ``output_dir``; returns the written paths."""
        written = []
        for kind in registry:
            output_path = os.path.join(output_dir, f"{kind.name}.{self.extension}")
            self.render_to_file(kind, output_path)
            written.append(output_path)
        logger.info(f"Rendered {len(written)} kind pages to {output_dir}")
        return written
