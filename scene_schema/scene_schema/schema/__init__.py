"""Bundled kind definitions and the JSON Schemas that describe them.

Each sub-directory is a definition format version (``1.0.0``) holding an
``index.yaml``, the shared ``base.fields.yaml`` and one ``<name>.kind.yaml``
per entity kind.
"""

from .json_schema_loader import (
    available_versions,
    clear_cache,
    get_definition_dir,
    load_schema,
    resolve_schema_version,
)
