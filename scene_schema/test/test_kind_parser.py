import logging
import textwrap

import pytest

from scene_schema import FormatVersionError, SchemaDefinitionError
from scene_schema.models import MISSING, Field
from scene_schema.parsers import KindParser
from scene_schema.registry import load_registry

BASE = """\
scene_schema_format: 1.0.0
name: base
fields:
  - name: position
    type: vector3
    default: {x: 0, y: 0, z: 0}
    animatable: true
  - name: scale
    type: [number, vec3]
    default: 1
"""

TORUS = """\
scene_schema_format: 1.0.0
name: torus
description: A ring.
fields:
  - name: tube
    type: float
    default: 0.2
    minimum: 0
"""


def write_definitions(directory, kinds, base=BASE):
    (directory / "base.fields.yaml").write_text(base, encoding="utf-8")
    index = ["scene_schema_format: 1.0.0", "base: base.fields.yaml", "kinds:"]
    for file_name, content in kinds.items():
        (directory / file_name).write_text(textwrap.dedent(content), encoding="utf-8")
        index.append(f"  - {file_name}")
    (directory / "index.yaml").write_text("\n".join(index) + "\n", encoding="utf-8")
    return directory


def test_load_custom_definitions(tmp_path):
    registry = load_registry(write_definitions(tmp_path, {"torus.kind.yaml": TORUS}))
    torus = registry.lookup("torus")
    assert registry.names() == ["torus"]
    assert torus.field_names == ("position", "scale", "tube")
    assert torus.get_field("scale").types == ("number", "vector3")
    assert torus.get_field("tube").types == ("number",)
    assert torus.description == "A ring."
    assert torus.source.endswith("torus.kind.yaml")


def test_kind_name_must_match_file_name(tmp_path):
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"donut.kind.yaml": TORUS}))
    assert "does not match file name" in str(exc.value)


def test_unsupported_field_type(tmp_path):
    content = TORUS.replace("type: float", "type: quaternion")
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "Unsupported field type 'quaternion'" in str(exc.value)


def test_json_schema_violations_are_listed(tmp_path):
    content = TORUS.replace("    type: float\n", "").replace("description: A ring.", "colour: red")
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    message = str(exc.value)
    assert "'type' is a required property" in message
    assert "yaml_path=/fields/0" in message
    assert "colour" in message


def test_default_outside_declared_range(tmp_path):
    content = TORUS + "  - name: arc\n    type: number\n    default: 500\n    minimum: 0\n    maximum: 360\n"
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    message = str(exc.value)
    assert "Invalid default: torus.arc: value 500 outside [0, 360]" in message
    assert "torus.kind.yaml" in message


def test_default_of_wrong_type(tmp_path):
    content = TORUS.replace("default: 0.2", "default: thick")
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "torus.tube: expected number, got string" in str(exc.value)


def test_default_outside_choices(tmp_path):
    content = TORUS + "  - name: finish\n    type: enum\n    choices: [matte, gloss]\n    default: satin\n"
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "torus.finish: expected one of ['matte', 'gloss']" in str(exc.value)


def test_nested_default_is_checked(tmp_path):
    content = TORUS + (
        "  - name: clips\n"
        "    type: list\n"
        "    items: object\n"
        "    fields:\n"
        "      - name: weight\n"
        "        type: number\n"
        "        default: 2\n"
        "        maximum: 1\n"
    )
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "torus.clips[].weight: value 2 outside [-inf, 1]" in str(exc.value)


def test_default_must_be_normalized(tmp_path):
    base = BASE.replace("default: {x: 0, y: 0, z: 0}", "default: [0, 0, 0]")
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": TORUS}, base=base))
    assert "torus.position: write the default in normalized form" in str(exc.value)


def test_duplicate_index_entries(tmp_path):
    write_definitions(tmp_path, {"torus.kind.yaml": TORUS})
    (tmp_path / "index.yaml").write_text(
        "base: base.fields.yaml\nkinds: [torus.kind.yaml, torus.kind.yaml]\n", encoding="utf-8"
    )
    with pytest.raises(SchemaDefinitionError):
        load_registry(tmp_path)


def test_kind_cannot_redeclare_base_field(tmp_path):
    content = TORUS.replace("name: tube", "name: position")
    with pytest.raises(SchemaDefinitionError) as exc:
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "redeclares base field 'position'" in str(exc.value)


def test_incompatible_format_version(tmp_path):
    content = TORUS.replace("scene_schema_format: 1.0.0", "scene_schema_format: 2.0.0")
    with pytest.raises(FormatVersionError):
        load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))


def test_missing_format_version_warns(tmp_path, caplog):
    content = TORUS.replace("scene_schema_format: 1.0.0\n", "")
    with caplog.at_level(logging.WARNING):
        registry = load_registry(write_definitions(tmp_path, {"torus.kind.yaml": content}))
    assert "torus" in registry
    assert "Missing 'scene_schema_format' field" in caplog.text


def test_parse_field_nested():
    field = KindParser().parse_field({
        "name": "skeletalAnimation",
        "type": "array",
        "fields": [{"name": "clip", "type": ["str", "int"], "required": True}],
    })
    assert field.types == ("list",)
    assert field.item_type == "object"
    assert field.get_member("clip").types == ("string", "integer")
    assert field.get_member("clip").default is MISSING


def test_enum_field_needs_choices():
    with pytest.raises(SchemaDefinitionError):
        Field(name="timing", types=("enum",))


def test_required_field_cannot_have_default():
    with pytest.raises(SchemaDefinitionError):
        Field(name="src", types=("string",), required=True, default="")
