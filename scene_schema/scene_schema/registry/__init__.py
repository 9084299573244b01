"""Registry of known entity kinds."""

from .kind_registry import KindRegistry, load_registry, default_registry

__all__ = ["KindRegistry", "load_registry", "default_registry"]
