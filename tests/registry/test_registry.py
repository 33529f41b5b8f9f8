"""
Tests for isaacls/registry/registry.py

Tests:
- Namespace / Member construction and lookups
- NamespaceRegistry queries (order, absence, no mutation)
- load_registry / parse_namespace_file error handling
"""
from __future__ import annotations

from pathlib import Path

import pytest

from isaacls.registry.registry import (
    Member,
    Namespace,
    NamespaceRegistry,
    RegistryError,
    load_registry,
    parse_namespace_file,
)


# --- Fixtures ---

@pytest.fixture
def registry():
    """Two namespaces with a duplicate value and a trailing counter."""
    return NamespaceRegistry.from_mapping(
        {
            "ActionTriggers": {"NULL": 0, "SOULS": 1, "SHOP": 2},
            "Challenge": {
                "CHALLENGE_NULL": 0,
                "CHALLENGE_PITCH_BLACK": 1,
                "CHALLENGE_ALIAS": 1,
                "NUM_CHALLENGE": 3,
            },
        },
        hide_zero=["ActionTriggers"],
    )


def _write_enums(tmp_path: Path, index: str, files: dict[str, str]) -> Path:
    (tmp_path / "all_enums.yml").write_text(index)
    for name, text in files.items():
        (tmp_path / name).write_text(text)
    return tmp_path


# --- Namespace tests ---

class TestNamespace:
    def test_from_members_keeps_order(self):
        ns = Namespace.from_members("Slots", {"B": 2, "A": 1, "C": 0})
        assert [m.name for m in ns.members] == ["B", "A", "C"]

    def test_from_members_defaults(self):
        ns = Namespace.from_members("Slots", {"A": 1})
        assert ns.hide_zero is False
        assert ns.description == ""

    def test_members_are_value_objects(self):
        ns = Namespace.from_members("Slots", {"A": 1, "B": 2})
        assert ns.members == (Member("A", 1), Member("B", 2))

    def test_is_immutable(self):
        ns = Namespace.from_members("Slots", {"A": 1})
        with pytest.raises(AttributeError):
            ns.name = "Other"  # type: ignore[misc]


# --- NamespaceRegistry tests ---

class TestNamespaceRegistry:
    def test_list_namespace_names_in_insertion_order(self, registry):
        assert registry.list_namespace_names() == ("ActionTriggers", "Challenge")

    def test_list_namespace_names_is_stable(self, registry):
        assert registry.list_namespace_names() == registry.list_namespace_names()

    def test_get_namespace(self, registry):
        ns = registry.get_namespace("Challenge")
        assert ns is not None
        assert ns.name == "Challenge"
        assert ns.hide_zero is False

    def test_get_namespace_is_case_sensitive(self, registry):
        assert registry.get_namespace("challenge") is None

    def test_get_namespace_absent(self, registry):
        assert registry.get_namespace("EntityType") is None

    def test_get_namespace_non_string(self, registry):
        assert registry.get_namespace(None) is None  # type: ignore[arg-type]
        assert registry.get_namespace(["Challenge"]) is None  # type: ignore[arg-type]

    def test_list_members_keeps_duplicates_and_counter(self, registry):
        members = registry.list_members("Challenge")
        assert [(m.name, m.value) for m in members] == [
            ("CHALLENGE_NULL", 0),
            ("CHALLENGE_PITCH_BLACK", 1),
            ("CHALLENGE_ALIAS", 1),
            ("NUM_CHALLENGE", 3),
        ]

    def test_list_members_absent_namespace_is_empty(self, registry):
        assert registry.list_members("Missing") == ()

    def test_hide_zero_flag_from_mapping(self, registry):
        assert registry.get_namespace("ActionTriggers").hide_zero is True

    def test_contains_len_iter(self, registry):
        assert "Challenge" in registry
        assert "Missing" not in registry
        assert 42 not in registry
        assert len(registry) == 2
        assert [ns.name for ns in registry] == ["ActionTriggers", "Challenge"]

    def test_duplicate_namespace_rejected(self):
        with pytest.raises(RegistryError, match="Duplicate namespace"):
            NamespaceRegistry(
                [
                    Namespace.from_members("Card", {"A": 1}),
                    Namespace.from_members("Card", {"B": 2}),
                ]
            )

    def test_empty_registry(self):
        registry = NamespaceRegistry()
        assert registry.list_namespace_names() == ()
        assert len(registry) == 0


# --- Loading tests ---

class TestLoadRegistry:
    def test_load_from_directory(self, tmp_path):
        enums_dir = _write_enums(
            tmp_path,
            "version: 1\nnamespaces:\n  - b.yml\n  - a.yml\n",
            {
                "a.yml": "name: Alpha\nmembers:\n  A_ONE: 1\n",
                "b.yml": (
                    "name: Beta\n"
                    "description: Second letter.\n"
                    "hide_zero: true\n"
                    "members:\n"
                    "  B_NULL: 0\n"
                    "  B_ONE: 1\n"
                ),
            },
        )

        registry = load_registry(enums_dir)

        assert registry.list_namespace_names() == ("Beta", "Alpha")
        beta = registry.get_namespace("Beta")
        assert beta.hide_zero is True
        assert beta.description == "Second letter."
        assert [m.name for m in beta.members] == ["B_NULL", "B_ONE"]

    def test_missing_index(self, tmp_path):
        with pytest.raises(RegistryError, match="Error reading"):
            load_registry(tmp_path)

    def test_wrong_index_version(self, tmp_path):
        enums_dir = _write_enums(tmp_path, "version: 2\nnamespaces: []\n", {})
        with pytest.raises(RegistryError, match="version 1"):
            load_registry(enums_dir)

    def test_namespaces_not_a_list(self, tmp_path):
        enums_dir = _write_enums(tmp_path, "version: 1\nnamespaces: a.yml\n", {})
        with pytest.raises(RegistryError, match="must be a list"):
            load_registry(enums_dir)

    def test_missing_namespace_file(self, tmp_path):
        enums_dir = _write_enums(
            tmp_path, "version: 1\nnamespaces:\n  - gone.yml\n", {}
        )
        with pytest.raises(RegistryError, match="gone.yml"):
            load_registry(enums_dir)

    def test_duplicate_namespace_across_files(self, tmp_path):
        enums_dir = _write_enums(
            tmp_path,
            "version: 1\nnamespaces:\n  - a.yml\n  - b.yml\n",
            {
                "a.yml": "name: Same\nmembers:\n  A: 1\n",
                "b.yml": "name: Same\nmembers:\n  B: 2\n",
            },
        )
        with pytest.raises(RegistryError, match="Duplicate namespace: Same"):
            load_registry(enums_dir)


class TestParseNamespaceFile:
    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(RegistryError, match="bad.yml"):
            parse_namespace_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(RegistryError, match="expected a mapping"):
            parse_namespace_file(path)

    def test_missing_name(self, tmp_path):
        path = tmp_path / "noname.yml"
        path.write_text("members:\n  A: 1\n")
        with pytest.raises(RegistryError, match="missing namespace name"):
            parse_namespace_file(path)

    def test_missing_members(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("name: Empty\n")
        with pytest.raises(RegistryError, match="has no members"):
            parse_namespace_file(path)

    def test_non_integer_value(self, tmp_path):
        path = tmp_path / "str.yml"
        path.write_text("name: Bad\nmembers:\n  A: one\n")
        with pytest.raises(RegistryError, match="Bad.A is not an integer"):
            parse_namespace_file(path)

    def test_boolean_value_rejected(self, tmp_path):
        path = tmp_path / "bool.yml"
        path.write_text("name: Bad\nmembers:\n  A: yes\n")
        with pytest.raises(RegistryError, match="not an integer"):
            parse_namespace_file(path)

    def test_negative_and_hex_values(self, tmp_path):
        path = tmp_path / "ints.yml"
        path.write_text("name: Ints\nmembers:\n  NEG: -1\n  HEX: 0x10\n")
        ns = parse_namespace_file(path)
        assert [(m.name, m.value) for m in ns.members] == [("NEG", -1), ("HEX", 16)]
