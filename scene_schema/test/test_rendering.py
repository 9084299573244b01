import inspect

import pytest
from jinja2 import Environment

from scene_schema import EntityKind
from scene_schema.models.field_types import format_value
from scene_schema.rendering import DocumentationRenderer, render, render_entity
from scene_schema.rendering.template_renderer import TemplateRenderer


def test_render_one_block_per_field_in_order(registry):
    box = registry.lookup("box")
    blocks = render(box)
    assert len(blocks) == len(box.fields)
    assert [b.name for b in blocks] == list(box.field_names)


def test_render_is_lazy_and_restartable(registry):
    blocks = render(registry.lookup("cone"))
    assert inspect.isgenerator(iter(blocks))
    first = [b.name for b in blocks]
    second = [b.name for b in blocks]
    assert first == second
    assert first[-1] == "arc"


def test_field_block_details(registry):
    blocks = {b.name: b for b in render(registry.lookup("cylinder"))}
    assert blocks["scale"].type_label == "number | vector3"
    assert blocks["scale"].default == "1"
    assert blocks["scale"].animatable
    assert blocks["arc"].value_range == "[0, 360]"
    assert blocks["id"].default is None
    assert [c.name for c in blocks["transition"].children] == ["duration", "timing", "delay"]


def test_skeletal_animation_block(registry):
    blocks = {b.name: b for b in render(registry.lookup("gltf-model"))}
    anim = blocks["skeletalAnimation"]
    assert anim.type_label == "list of object"
    assert [c.name for c in anim.children] == ["clip", "loop", "weight", "playing"]
    assert blocks["src"].required
    assert "required" in blocks["src"].to_text()


def test_rendered_entity_shows_each_value_once(validator, registry):
    values = {
        "position": {"x": 1.5, "y": 2, "z": -3},
        "scale": 4,
        "color": "#123456",
        "id": "crate",
    }
    box = registry.lookup("box")
    record = validator.validate("box", values)
    blocks = list(render_entity(box, record))

    names = [b.name for b in blocks]
    assert names == list(record)
    for name in values:
        assert names.count(name) == 1
        block = blocks[names.index(name)]
        assert block.value == format_value(record[name])
        assert block.to_text().count(block.value) == 1


def test_render_entity_skips_absent_fields(validator, registry):
    box = registry.lookup("box")
    record = validator.validate("box", {})
    assert "id" not in [b.name for b in render_entity(box, record)]


def test_markdown_kind_page(registry):
    page = DocumentationRenderer("markdown").render_kind_page(registry.lookup("cylinder"))
    assert page.startswith("# cylinder")
    assert "## Fields" in page
    assert "- **arc** (`number`, optional)" in page
    assert "Default: `360`" in page


def test_html_kind_page(registry):
    page = DocumentationRenderer("html").render_kind_page(registry.lookup("gltf-model"))
    assert 'id="kind-gltf-model"' in page
    assert "<code>skeletalAnimation</code>" in page
    assert "<code>weight</code>" in page
    assert '<span class="field-required">required</span>' in page


def test_html_is_escaped_markdown_is_not(registry):
    kind = EntityKind(name="widget", description="Uses <b>bold</b> text", base_fields=registry.base_fields)
    assert "&lt;b&gt;bold&lt;/b&gt;" in DocumentationRenderer("html").render_kind_page(kind)
    assert "<b>bold</b>" in DocumentationRenderer("markdown").render_kind_page(kind)


def test_entity_example(validator, registry):
    sphere = registry.lookup("sphere")
    record = validator.validate("sphere", {"scale": 3})
    markdown = DocumentationRenderer().render_entity_example(sphere, record, title="Big ball")
    assert markdown.startswith("### sphere: Big ball")
    assert "- **scale** (`number | vector3`): `3`" in markdown

    html = DocumentationRenderer("html").render_entity_example(sphere, record)
    assert 'data-kind="sphere"' in html
    assert "<dd><code>3</code></dd>" in html


def test_render_catalog(registry):
    pages = DocumentationRenderer().render_catalog(registry)
    assert list(pages) == registry.names()
    assert pages["obj-model"].startswith("# obj-model")


def test_render_to_file(tmp_path, registry):
    output = tmp_path / "docs" / "box.md"
    DocumentationRenderer().render_to_file(registry.lookup("box"), str(output))
    assert output.read_text(encoding="utf-8").startswith("# box")


def test_render_catalog_to_dir(tmp_path, registry):
    written = DocumentationRenderer("html").render_catalog_to_dir(registry, str(tmp_path / "site"))
    assert len(written) == 7
    assert (tmp_path / "site" / "gltf-model.html").exists()


def test_unknown_output_format():
    with pytest.raises(ValueError):
        DocumentationRenderer("pdf")


def test_template_renderer_adds_only_format_value_filter():
    renderer = TemplateRenderer()
    added = set(renderer.env.filters) - set(Environment().filters)
    assert added == {"format_value"}
    assert renderer.env.filters["format_value"] is format_value
