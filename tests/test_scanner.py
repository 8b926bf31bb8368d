"""
Tests for the shared delimiter scanner.
"""
from __future__ import annotations

import pytest

from macrayon.errors import MalformedDefinition, MalformedInvocation
from macrayon.scanning.delimiters import DelimiterScanner, MacroMatch, ScanCursor


# ─────────────────────────────────────────────────────────────────────────────
# ScanCursor
# ─────────────────────────────────────────────────────────────────────────────


class TestScanCursor:
    def test_find_is_relative_to_position(self):
        cursor = ScanCursor("##a##b", pos=2)
        assert cursor.find("##") == 3

    def test_find_missing_returns_minus_one(self):
        assert ScanCursor("abc").find("#") == -1

    def test_moved_to_leaves_original_untouched(self):
        cursor = ScanCursor("abcdef", pos=1)
        moved = cursor.moved_to(4)
        assert cursor.pos == 1
        assert moved.pos == 4
        assert moved.rest() == "ef"

    def test_upto(self):
        assert ScanCursor("hello world", pos=6).upto(9) == "wor"


# ─────────────────────────────────────────────────────────────────────────────
# DelimiterScanner
# ─────────────────────────────────────────────────────────────────────────────


class TestDelimiterScanner:
    @pytest.fixture
    def scanner(self):
        return DelimiterScanner()

    def test_no_marks_yields_only_tail(self, scanner):
        events = list(scanner.invocations("plain text", MalformedInvocation))
        assert events == [("plain text", None)]

    def test_invocations_in_document_order(self, scanner):
        events = list(scanner.invocations("a ##x#1## b ##y## c", MalformedInvocation))
        assert events == [
            ("a ", MacroMatch("x", ("1",), None, 2, 9)),
            (" b ", MacroMatch("y", (), None, 12, 17)),
            (" c", None),
        ]

    def test_definition_with_params(self, scanner):
        events = list(scanner.definitions("##greet#name##Hello, name!##", MalformedDefinition))
        literal, match = events[0]
        assert literal == ""
        assert match.name == "greet"
        assert match.items == ("name",)
        assert match.body == "Hello, name!"
        assert events[-1] == ("", None)

    def test_zero_params_double_mark_after_name(self, scanner):
        (_, match), _ = scanner.definitions("##shout##LOUD##", MalformedDefinition)
        assert match.items == ()
        assert match.body == "LOUD"

    def test_names_and_items_trimmed(self, scanner):
        (_, match), _ = scanner.definitions(
            "## pair # left # right ##left-right##", MalformedDefinition
        )
        assert match.name == "pair"
        assert match.items == ("left", "right")

    def test_interior_whitespace_kept(self, scanner):
        (_, match), _ = scanner.definitions("##m##  a   b  ##", MalformedDefinition)
        assert match.body == "a   b"

    def test_body_may_contain_single_marks(self, scanner):
        (_, match), _ = scanner.definitions("##tag##<#>##", MalformedDefinition)
        assert match.body == "<#>"

    def test_empty_argument(self, scanner):
        (_, match), _ = scanner.invocations("##mk# ##", MalformedInvocation)
        assert match.items == ("",)

    def test_missing_mark_raises_given_error(self, scanner):
        with pytest.raises(MalformedInvocation) as info:
            list(scanner.invocations("text ##greet#World", MalformedInvocation))
        assert info.value.offset == 5

    def test_custom_mark(self):
        scanner = DelimiterScanner("@")
        events = list(scanner.invocations("x @@hi@there@@ # y", MalformedInvocation))
        assert events[0] == ("x ", MacroMatch("hi", ("there",), None, 2, 14))
        assert events[1] == (" # y", None)

    @pytest.mark.parametrize("mark", ["", "##", "ab"])
    def test_mark_must_be_one_character(self, mark):
        with pytest.raises(ValueError):
            DelimiterScanner(mark)
