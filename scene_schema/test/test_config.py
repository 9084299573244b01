import logging

from scene_schema import SCHEMA_FORMAT_VERSION
from scene_schema.config import SchemaConfig
from scene_schema.utils.logging_utils import configure_split_stream_logging


def test_config_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "PRINT_LEVEL", "STRICT_UNKNOWN_FIELDS", "FORMAT", "CACHE_ENABLED"):
        monkeypatch.delenv(f"SCENE_SCHEMA_{name}", raising=False)
    config = SchemaConfig.from_env()
    assert config.strict_unknown_fields
    assert config.schema_format == SCHEMA_FORMAT_VERSION
    assert config.cache_enabled


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SCENE_SCHEMA_STRICT_UNKNOWN_FIELDS", "false")
    monkeypatch.setenv("SCENE_SCHEMA_LOG_LEVEL", "DEBUG")
    config = SchemaConfig.from_env()
    assert not config.strict_unknown_fields
    assert config.log_level == "DEBUG"


def test_split_stream_logging(capsys):
    logger = configure_split_stream_logging(
        level=logging.DEBUG,
        stderr_level=logging.WARNING,
        logger_name="scene_schema.test_split",
    )
    try:
        logger.info("loaded kinds")
        logger.warning("dropped field")
        captured = capsys.readouterr()
        assert "loaded kinds" in captured.out
        assert "dropped field" not in captured.out
        assert "dropped field" in captured.err
    finally:
        logger.handlers.clear()


def test_set_logging_configures_package_logger():
    logger = SchemaConfig(log_level="INFO").set_logging()
    try:
        assert logger.name == "scene_schema"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 2
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def test_split_stream_logging_threshold_is_configurable(capsys):
    logger = configure_split_stream_logging(
        level=logging.DEBUG,
        stderr_level=logging.ERROR,
        logger_name="scene_schema.test_threshold",
    )
    try:
        logger.warning("minor version skew")
        logger.error("bad definition")
        captured = capsys.readouterr()
        assert "minor version skew" in captured.out
        assert "minor version skew" not in captured.err
        assert "bad definition" in captured.err
        assert "bad definition" not in captured.out
        assert "scene_schema.test_threshold - ERROR - bad definition" in captured.err
    finally:
        logger.handlers.clear()
