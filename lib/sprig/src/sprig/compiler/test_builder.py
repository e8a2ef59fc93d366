"""Tests for the tree builder."""

import dataclasses

import pytest

from sprig.ast.tokenizer import tokenize
from sprig.compiler.branches import EachBranch, IfBranch, RootBranch, TextBranch
from sprig.compiler.builder import TreeBuilder, build
from sprig.exceptions import (
    InvalidDirective,
    MismatchedClose,
    NestingTooDeep,
    UnclosedBranch,
)


def test_text_only_builds_single_leaf():
    root = build(tokenize("hello"))
    assert isinstance(root, RootBranch)
    assert len(root.children) == 1
    assert isinstance(root.children[0], TextBranch)


def test_children_follow_source_order():
    root = build(tokenize("a${#if x}b${#each y as z}c${#end each}${#end if}d"))
    first, branch_if, last = root.children
    assert isinstance(first, TextBranch)
    assert isinstance(branch_if, IfBranch)
    assert isinstance(last, TextBranch)

    inner_text, inner_each = branch_if.children
    assert isinstance(inner_text, TextBranch)
    assert isinstance(inner_each, EachBranch)
    assert inner_each.plan.value_name == "z"
    assert len(inner_each.children) == 1


def test_tree_is_immutable():
    root = build(tokenize("${#if x}a${#end if}"))
    assert isinstance(root.children, tuple)
    assert isinstance(root.children[0].children, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        root.children = ()


def test_unknown_directive():
    with pytest.raises(InvalidDirective) as excinfo:
        build(tokenize("x ${#loop items}"))
    assert excinfo.value.name == "loop"
    assert excinfo.value.offset == 2


def test_malformed_arguments_are_invalid():
    with pytest.raises(InvalidDirective):
        build(tokenize("${#each items}${#end each}"))


def test_unclosed_branch_names_innermost_type():
    with pytest.raises(UnclosedBranch) as excinfo:
        build(tokenize("${#if x}${#each y as z}A"))
    assert excinfo.value.type == "each"


def test_mismatched_close():
    with pytest.raises(MismatchedClose) as excinfo:
        build(tokenize("${#if x}${#each y as z}A${#end if}"))
    assert excinfo.value.expected == "each"
    assert excinfo.value.found == "if"


def test_close_without_open():
    with pytest.raises(MismatchedClose) as excinfo:
        build(tokenize("A${#end if}"))
    assert excinfo.value.expected == "root"


def test_close_named_root_at_root():
    with pytest.raises(MismatchedClose):
        build(tokenize("${#end root}"))


def test_max_depth():
    builder = TreeBuilder(max_depth=2)
    builder.build(tokenize("${#if a}${#if b}x${#end if}${#end if}"))

    with pytest.raises(NestingTooDeep) as excinfo:
        builder.build(tokenize("${#if a}${#if b}${#if c}x${#end if}${#end if}${#end if}"))
    assert excinfo.value.max_depth == 2


def test_builder_is_reusable_after_failure():
    builder = TreeBuilder()
    with pytest.raises(UnclosedBranch):
        builder.build(tokenize("${#if x}"))
    root = builder.build(tokenize("ok"))
    assert root.render({}) == "ok"
