"""Enum namespace registry for isaacls."""
from .registry import (
    Member,
    Namespace,
    NamespaceRegistry,
    RegistryError,
    load_registry,
)

__all__ = ['Member', 'Namespace', 'NamespaceRegistry', 'RegistryError', 'load_registry']
