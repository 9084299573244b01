"""Documentation rendering for entity kinds."""

from .blocks import BlockSequence, DocBlock, render, render_entity
from .doc_renderer import DocumentationRenderer
from .template_renderer import TemplateRenderer

__all__ = [
    "BlockSequence",
    "DocBlock",
    "render",
    "render_entity",
    "DocumentationRenderer",
    "TemplateRenderer",
]
