from sprig.ast.tokenizer import tokenize
from sprig.ast.tokens import Close, Open, Text


def test_plain_text_is_one_token():
    assert tokenize("hello ${name}") == [Text(offset=0, content="hello ${name}")]


def test_empty_source_has_no_tokens():
    assert tokenize("") == []


def test_directives_split_text():
    tokens = tokenize("a${#if x}b${#end if}c")
    assert tokens == [
        Text(offset=0, content="a"),
        Open(offset=1, name="if", args="x"),
        Text(offset=9, content="b"),
        Close(offset=10, name="if"),
        Text(offset=20, content="c"),
    ]


def test_adjacent_markers_emit_no_empty_text():
    tokens = tokenize("${#if x}${#end if}")
    assert [type(t) for t in tokens] == [Open, Close]


def test_open_keeps_full_argument_text():
    (token,) = tokenize("${#each items as k to v}")
    assert token == Open(offset=0, name="each", args="items as k to v")


def test_escaped_marker_is_text_without_backslash():
    assert tokenize("\\${#if x}") == [Text(offset=0, content="${#if x}")]


def test_escaped_marker_merges_with_surrounding_text():
    tokens = tokenize("a \\${#if x} b${#end if}")
    assert tokens == [
        Text(offset=0, content="a ${#if x} b"),
        Close(offset=13, name="if"),
    ]


def test_unterminated_marker_is_text():
    assert tokenize("a ${#if x") == [Text(offset=0, content="a ${#if x")]


def test_marker_without_args():
    assert tokenize("${#if}") == [Open(offset=0, name="if", args="")]
    assert tokenize("${#end}") == [Close(offset=0, name="")]


def test_unknown_names_are_not_validated_here():
    assert tokenize("${#loop x}") == [Open(offset=0, name="loop", args="x")]
