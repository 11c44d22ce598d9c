"""Tests for type spelling rewrites and using-directive suppression."""

import pytest

from cs2ts.mappings import IGNORED_NAMESPACES, is_suppressed_namespace, map_type


@pytest.mark.parametrize(
    "cs_type,expected",
    [
        ("void", "void"),
        ("bool", "Boolean"),
        ("int", "number"),
        ("long", "number"),
        ("float", "number"),
        ("string", "string"),
        ("double", "double"),
        ("Player", "Player"),
        ("ArgumentException", "ArgumentException"),
    ],
)
def test_map_type(cs_type, expected):
    assert map_type(cs_type) == expected


def test_primitives_map_independently_of_context():
    for _ in range(3):
        assert [map_type(t) for t in ("bool", "int", "long", "float", "string")] == [
            "Boolean", "number", "number", "number", "string",
        ]


def test_list_argument_is_not_mapped():
    assert map_type("List<int>") == "Array<int>"
    assert map_type("List<string>") == "Array<string>"
    assert map_type("List<List<bool>>") == "Array<List<bool>>"


def test_prefix_rules_match_textually():
    assert map_type("floaterUnit") == "number"
    assert map_type("int[]") == "number"
    assert map_type("bool?") == "Boolean"
    assert map_type("stringBuilder") == "string"


def test_exception_rule_wins_over_prefix_rules():
    assert map_type("intException") == "intException"


def test_list_shape_matches_anywhere():
    assert map_type("IList<Player>") == "IArray<Player>"
    assert map_type("Dictionary<string, List<int>>") == "Dictionary<string, Array<int>>"


def test_missing_type_maps_to_empty():
    assert map_type(None) == ""


def test_suppressed_namespaces():
    for name in IGNORED_NAMESPACES:
        assert is_suppressed_namespace(name)
    assert is_suppressed_namespace("System")
    assert is_suppressed_namespace("System.Collections.Generic")
    assert is_suppressed_namespace("UnityEngine.UI")


def test_kept_namespaces():
    assert not is_suppressed_namespace("Game.Battle")
    assert not is_suppressed_namespace("DG.Tweening.Core")
    assert not is_suppressed_namespace("MySystem")
    assert not is_suppressed_namespace("UI")
