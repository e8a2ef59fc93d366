"""Tests for branch rendering."""

import pytest

from sprig.ast.directives import decode_each, decode_if
from sprig.compiler.branches import (
    EachBranch,
    IfBranch,
    OutputBudget,
    Placeholder,
    RootBranch,
    TextBranch,
    format_scalar,
    scan_placeholders,
)
from sprig.exceptions import OutputLimitExceeded


class TestScanPlaceholders:
    def test_literal_and_placeholder_segments(self):
        segments = scan_placeholders("Hello ${user.name}!")
        assert segments[0] == "Hello "
        assert isinstance(segments[1], Placeholder)
        assert segments[1].path.parts == ("user", "name")
        assert segments[2] == "!"

    def test_escaped_placeholder_is_literal(self):
        assert scan_placeholders("a \\${x} b") == ("a ${x} b",)

    def test_directive_text_is_not_a_placeholder(self):
        assert scan_placeholders("${#if x}") == ("${#if x}",)

    def test_unparseable_path_is_literal(self):
        assert scan_placeholders("${a b}") == ("${a b}",)

    def test_empty_text(self):
        assert scan_placeholders("") == ()


class TestTextBranch:
    def test_substitutes_scalars(self):
        branch = TextBranch.from_text("${s} ${i} ${f} ${b}")
        assert branch.render({"s": "x", "i": 2, "f": 1.5, "b": True}) == "x 2 1.5 true"

    def test_leaves_unresolved_and_non_scalar_verbatim(self):
        branch = TextBranch.from_text("${missing} ${items} ${obj} ${nothing} ${fn}")
        data = {"items": [1], "obj": {"a": 1}, "nothing": None, "fn": len}
        assert branch.render(data) == "${missing} ${items} ${obj} ${nothing} ${fn}"

    def test_whitespace_inside_placeholder(self):
        assert TextBranch.from_text("${ name }").render({"name": "ada"}) == "ada"

    def test_format_scalar(self):
        assert format_scalar(False) == "false"
        assert format_scalar(0) == "0"
        assert format_scalar([]) is None


class TestIfBranch:
    def test_renders_children_when_condition_holds(self):
        branch = IfBranch(decode_if("x"), (TextBranch.from_text("yes"),))
        assert branch.render({"x": True}) == "yes"
        assert branch.render({"x": False}) == ""
        assert branch.render({}) == ""


class TestEachBranch:
    def test_binds_key_and_value(self):
        branch = EachBranch(
            decode_each("m as k to v"), (TextBranch.from_text("${k}=${v};"),)
        )
        assert branch.render({"m": {"a": 1, "b": 2}}) == "a=1;b=2;"

    def test_iteration_outer_children_inner(self):
        branch = EachBranch(
            decode_each("items as i"),
            (TextBranch.from_text("<${i}"), TextBranch.from_text(">")),
        )
        assert branch.render({"items": [1, 2]}) == "<1><2>"

    def test_missing_collection_is_zero_iterations(self):
        branch = EachBranch(decode_each("items as i"), (TextBranch.from_text("x"),))
        assert branch.render({}) == ""
        assert branch.render({"items": 7}) == ""

    def test_outer_scope_is_not_mutated(self):
        scope = {"items": [1, 2], "i": "outer"}
        branch = EachBranch(decode_each("items as i"), (TextBranch.from_text("${i}"),))
        assert branch.render(scope) == "12"
        assert scope == {"items": [1, 2], "i": "outer"}


class TestOutputBudget:
    def test_budget_counts_across_branches(self):
        root = RootBranch((TextBranch.from_text("abc"), TextBranch.from_text("de")))
        assert root.render({}, OutputBudget(5)) == "abcde"
        with pytest.raises(OutputLimitExceeded):
            root.render({}, OutputBudget(4))
