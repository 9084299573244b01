"""Readers for kind definition files and entity snippet documents."""

from .yaml_parser import PairsDocument, YamlParser, yaml_parser
from .kind_parser import KindParser, SchemaIssue, validate_against_json_schema

__all__ = [
    "PairsDocument",
    "YamlParser",
    "yaml_parser",
    "KindParser",
    "SchemaIssue",
    "validate_against_json_schema",
]
