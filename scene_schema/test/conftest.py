import pytest

from scene_schema.registry import default_registry
from scene_schema.validation import EntityValidator


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def validator(registry):
    return EntityValidator(registry, strict_unknown_fields=True)
