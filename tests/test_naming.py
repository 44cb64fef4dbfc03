from __future__ import annotations

import pytest

from kitecli.naming import NameGrammar, pascal_case, validate_identifier


@pytest.mark.parametrize(
    "value, expected",
    [
        ("greeting", "Greeting"),
        ("a", "A"),
        ("user-profile", "UserProfile"),
        ("user-profile.extra", "UserProfileExtra"),
        ("snake_case_name", "SnakeCaseName"),
        ("alreadyCamel", "AlreadyCamel"),
        ("_private", "Private"),
        ("v2-api", "V2Api"),
        ("a..b", "AB"),
    ],
)
def test_pascal_case(value, expected):
    assert pascal_case(value) == expected


@pytest.mark.parametrize(
    "value", ["a", "greeting", "user-profile", "user.profile", "a1_b-c", "A.b.c", "a..b", "ab..cd", "x-..y"]
)
def test_extended_grammar_accepts(value):
    assert validate_identifier(value, NameGrammar.EXTENDED) is None


@pytest.mark.parametrize("value", ["1abc", "a.", "ab..", "-a", "_a", "user profile", "$x", "a/b"])
def test_extended_grammar_rejects(value):
    assert validate_identifier(value, NameGrammar.EXTENDED)


@pytest.mark.parametrize("value", ["a", "_x", "x$1", "Greeting"])
def test_simple_grammar_accepts(value):
    assert validate_identifier(value, NameGrammar.SIMPLE) is None


@pytest.mark.parametrize("value", ["user-profile", "user.profile", "1a", "$x"])
def test_simple_grammar_rejects(value):
    assert validate_identifier(value, NameGrammar.SIMPLE)


def test_empty_name_reason():
    assert validate_identifier("") == "name can not be empty"
    assert validate_identifier("", NameGrammar.SIMPLE) == "name can not be empty"
