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

"""Template rendering utilities for consistent Jinja2 rendering."""

from __future__ import annotations

import os

from jinja2 import Environment, FileSystemLoader

from ..models.field_types import format_value


def _get_template_directories() -> list[str]:
    """Templates bundled in-package."""
    base_dir = os.path.dirname(os.path.abspath(__file__))
    template_dir = os.path.join(base_dir, "templates")
    return [template_dir] if os.path.exists(template_dir) else []


def _autoescape(template_name: str | None) -> bool:
    # <page>.html.jinja2 -> escaped, <page>.md.jinja2 -> verbatim
    return template_name is not None and ".html." in template_name


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=_autoescape,
        )
        self.env.filters["format_value"] = format_value

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    def render_template_to_file(self, template_name: str, output_path: str, **kwargs) -> None:
        content = self.render_template(template_name, **kwargs)
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
