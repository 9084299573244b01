import pytest

from scene_schema import (
    DuplicateKindError,
    EntityKind,
    Field,
    RegistryFrozenError,
    SchemaDefinitionError,
    UnknownKindError,
)
from scene_schema.registry import KindRegistry, default_registry

BASE_FIELD_NAMES = {"position", "rotation", "scale", "visible", "id", "key", "transition"}


def test_bundled_kinds_in_documented_order(registry):
    assert registry.names() == ["box", "sphere", "plane", "cylinder", "cone", "gltf-model", "obj-model"]
    assert len(registry) == 7


def test_base_fields_are_subset_of_every_kind(registry):
    assert {f.name for f in registry.base_fields} == BASE_FIELD_NAMES
    for kind in registry:
        assert BASE_FIELD_NAMES <= set(kind.field_names), kind.name
        # base fields come first, in declaration order
        assert kind.field_names[:7] == ("position", "rotation", "scale", "visible", "id", "key", "transition")


def test_lookup_known_kind(registry):
    kind = registry.lookup("gltf-model")
    assert kind.name == "gltf-model"
    assert kind.get_field("src").required
    assert "gltf-model" in registry


def test_lookup_unknown_kind_lists_available():
    with pytest.raises(UnknownKindError) as exc:
        default_registry().lookup("tetrahedron")
    assert "tetrahedron" in str(exc.value)
    assert "box" in str(exc.value)


def test_get_returns_default_for_unknown(registry):
    assert registry.get("tetrahedron") is None


def test_register_duplicate_kind(registry):
    fresh = KindRegistry(base_fields=registry.base_fields)
    fresh.register(registry.lookup("box"))
    with pytest.raises(DuplicateKindError):
        fresh.register(registry.lookup("box"))
    assert fresh.names() == ["box"]


def test_frozen_registry_rejects_register(registry):
    assert registry.frozen
    kind = EntityKind(name="torus", base_fields=registry.base_fields)
    with pytest.raises(RegistryFrozenError):
        registry.register(kind)
    assert "torus" not in registry


def test_register_requires_base_fields(registry):
    fresh = KindRegistry(base_fields=registry.base_fields)
    with pytest.raises(SchemaDefinitionError) as exc:
        fresh.register(EntityKind(name="bare"))
    assert "position" in str(exc.value)


def test_kind_cannot_redeclare_base_field(registry):
    with pytest.raises(SchemaDefinitionError):
        EntityKind(
            name="odd",
            base_fields=registry.base_fields,
            own_fields=(Field(name="position", types=("string",)),),
        )


def test_default_registry_is_shared():
    assert default_registry() is default_registry()


def test_cylinder_and_cone_differ_only_in_radius_defaults(registry):
    cylinder = registry.lookup("cylinder")
    cone = registry.lookup("cone")
    assert cylinder.field_names == cone.field_names
    assert cylinder.get_field("radiusTop").default == 1
    assert cone.get_field("radiusTop").default == 0
    assert cylinder.get_field("radiusBottom").default == cone.get_field("radiusBottom").default == 1
