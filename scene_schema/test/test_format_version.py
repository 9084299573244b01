import pytest

from scene_schema import FormatVersionError
from scene_schema.schema import available_versions, resolve_schema_version
from scene_schema.utils.format_version import SemanticVersion, check_format_version, parse_format_version


def test_parse_format_version():
    assert parse_format_version("v1.2.3") == SemanticVersion(1, 2, 3)
    assert str(parse_format_version(" 1.0.0 ")) == "1.0.0"


@pytest.mark.parametrize("raw", ["1.2", "one.two.three", 1.0])
def test_parse_invalid_version(raw):
    with pytest.raises(FormatVersionError):
        parse_format_version(raw)


def test_missing_version_is_compatible_but_flagged():
    result = check_format_version(None, "1.0.0")
    assert result.compatible
    assert result.missing


def test_newer_minor_version():
    result = check_format_version("1.5.0", "1.0.0")
    assert result.compatible
    assert result.minor_newer


def test_major_mismatch():
    result = check_format_version("2.0.0", "1.0.0")
    assert not result.compatible
    assert "Incompatible format version" in result.message


def test_unparsable_version_is_incompatible():
    assert not check_format_version("latest", "1.0.0").compatible


def test_bundled_versions():
    assert SemanticVersion(1, 0, 0) in available_versions()


@pytest.mark.parametrize("requested", ["1.0.0", "1.0.7", "1.3.0"])
def test_resolve_within_major(requested):
    assert resolve_schema_version(requested) == "1.0.0"


def test_resolve_unknown_major():
    with pytest.raises(FormatVersionError):
        resolve_schema_version("3.0.0")
