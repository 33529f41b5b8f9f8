"""
Namespace Registry for isaacls

This module holds every enumerated namespace of the Isaac API that the
server can complete (EntityType, Card, ...). Each namespace is an ordered
set of named integer constants.

Design Principles:
1. Built once at server creation, read-only afterwards
2. Data-driven (one YAML file per namespace, no per-namespace code)
3. Queries never fail (absence is an empty result)
4. Declared order is preserved (no sorting, no deduplication)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Bundled enum definitions shipped with the package.
ENUMS_DIR = Path(__file__).parent / "enums"
INDEX_FILE = "all_enums.yml"
INDEX_VERSION = 1


class RegistryError(Exception):
    """Raised when bundled namespace data is malformed."""


@dataclass(frozen=True)
class Member:
    """One named constant within a namespace."""

    name: str
    value: int


@dataclass(frozen=True)
class Namespace:
    """
    A named set of integer constants.

    Values are not unique: aliases and trailing counters (NUM_*) are kept
    exactly as declared.
    """

    name: str
    members: tuple[Member, ...] = field(default_factory=tuple)

    # Hide the zero-valued placeholder member from completions
    hide_zero: bool = False

    description: str = ""

    @classmethod
    def from_members(
        cls,
        name: str,
        members: Mapping[str, int],
        hide_zero: bool = False,
        description: str = "",
    ) -> Namespace:
        """Build a namespace from an ordered name -> value mapping."""
        return cls(
            name=name,
            members=tuple(Member(n, v) for n, v in members.items()),
            hide_zero=hide_zero,
            description=description,
        )


class NamespaceRegistry:
    """
    Read-only mapping from namespace name to Namespace.

    Usage:
        registry = load_registry()

        registry.list_namespace_names()    # ('ActionTriggers', 'ActiveSlot', ...)
        registry.get_namespace('Card')     # Namespace | None
        registry.list_members('Card')      # (Member('CARD_NULL', 0), ...)
    """

    def __init__(self, namespaces: Iterable[Namespace] = ()) -> None:
        self._namespaces: dict[str, Namespace] = {}

        for namespace in namespaces:
            if namespace.name in self._namespaces:
                raise RegistryError(f"Duplicate namespace: {namespace.name}")
            self._namespaces[namespace.name] = namespace

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, int]],
        hide_zero: Iterable[str] = (),
    ) -> NamespaceRegistry:
        """
        Build a registry from plain mappings.

        Args:
            data: namespace name -> (member name -> value), both ordered
            hide_zero: names of namespaces whose zero member is hidden
        """
        hidden = set(hide_zero)
        return cls(
            Namespace.from_members(name, members, hide_zero=name in hidden)
            for name, members in data.items()
        )

    # ===== Public API =====

    def list_namespace_names(self) -> tuple[str, ...]:
        """Get all namespace names in registration order."""
        return tuple(self._namespaces)

    def get_namespace(self, name: str) -> Namespace | None:
        """Get a specific namespace by name."""
        if not isinstance(name, str):
            return None
        return self._namespaces.get(name)

    def list_members(self, name: str) -> tuple[Member, ...]:
        """Get the members of a namespace, or () if it is not registered."""
        namespace = self.get_namespace(name)
        if namespace is None:
            return ()
        return namespace.members

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._namespaces

    def __len__(self) -> int:
        return len(self._namespaces)

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self._namespaces.values())


# ===== Loading =====


def load_registry(enums_dir: Path | None = None) -> NamespaceRegistry:
    """
    Load all namespaces listed in the index file of enums_dir.

    Defaults to the enum definitions bundled with the package.

    Raises:
        RegistryError: if the index or any namespace file is malformed
    """
    enums_dir = enums_dir or ENUMS_DIR
    index = _read_yaml(enums_dir / INDEX_FILE)

    if not isinstance(index, dict) or index.get("version") != INDEX_VERSION:
        raise RegistryError(
            f"{enums_dir / INDEX_FILE}: expected version {INDEX_VERSION} index"
        )

    files = index.get("namespaces")
    if not isinstance(files, list):
        raise RegistryError(f"{enums_dir / INDEX_FILE}: 'namespaces' must be a list")

    return NamespaceRegistry(parse_namespace_file(enums_dir / f) for f in files)


def parse_namespace_file(file_path: Path) -> Namespace:
    """Parse a single namespace definition file."""
    data = _read_yaml(file_path)

    if not isinstance(data, dict):
        raise RegistryError(f"{file_path}: expected a mapping")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise RegistryError(f"{file_path}: missing namespace name")

    members = data.get("members")
    if not isinstance(members, dict) or not members:
        raise RegistryError(f"{file_path}: '{name}' has no members")

    for member_name, value in members.items():
        # bool is an int subclass; 'yes'/'no' values are almost always typos
        if not isinstance(value, int) or isinstance(value, bool):
            raise RegistryError(
                f"{file_path}: {name}.{member_name} is not an integer: {value!r}"
            )

    return Namespace.from_members(
        name=name,
        members={str(k): v for k, v in members.items()},
        hide_zero=bool(data.get("hide_zero", False)),
        description=str(data.get("description") or ""),
    )


def _read_yaml(file_path: Path):
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise RegistryError(f"Error reading {file_path}: {e}") from e
