import pytest

from flint_lsp.indexer import (
    BUILTIN_SIGNATURES,
    KEYWORD_NAMES,
    build_index,
    describe_symbol,
    word_at,
)

SOURCE = """func add(a: float, b: float): float {
  return a + b;
}
const limit: float = 10;
var name = "x";
for (let i = 1, limit) {
  let total: float[] = [add(i, 1)];
}
"""


def test_collects_declarations():
    idx = build_index(SOURCE)
    assert idx.parsed
    assert idx.diagnostics == []
    found = {name: (s.kind, s.line, s.col) for name, s in idx.symbols.items()}
    assert found == {
        "add": ("function", 0, 5),
        "a": ("parameter", 0, 9),
        "b": ("parameter", 0, 19),
        "limit": ("const", 3, 6),
        "name": ("var", 4, 4),
        "i": ("var", 5, 9),
        "total": ("var", 6, 6),
    }


def test_symbol_details():
    symbols = build_index(SOURCE).symbols
    assert symbols["add"].detail == "func add(a: float, b: float): float"
    assert symbols["limit"].detail == "const limit: float"
    assert symbols["name"].detail == "var name"
    assert symbols["total"].detail == "let total: float[]"


def test_nested_declarations_are_indexed():
    text = "if (true) { func inner(): void { var deep = 1; } } while (false) { var w = 2; }"
    assert set(build_index(text).symbols) == {"inner", "deep", "w"}


@pytest.mark.parametrize(
    "text,line,col",
    [
        ("var x = ;", 0, 8),
        ('print(1);\nvar s = "abc', 1, 8),
        ("let x: nope = 1;", 0, 7),
        ("print(1)", 0, 8),
    ],
)
def test_first_error_becomes_a_diagnostic(text, line, col):
    idx = build_index(text)
    assert not idx.parsed
    assert idx.symbols == {}
    (diag,) = idx.diagnostics
    assert (diag.line, diag.col) == (line, col)
    assert diag.message


def test_index_never_evaluates():
    idx = build_index('error("would abort"); print(missing);')
    assert idx.parsed
    assert idx.diagnostics == []


@pytest.mark.parametrize(
    "text,line,character,expected",
    [
        ("print(x)", 0, 2, "print"),
        ("print(x)", 0, 0, "print"),
        ("print(x)", 0, 5, "print"),
        ("print(x)", 0, 6, "x"),
        ("a\nsnake_case = 1;", 1, 7, "snake_case"),
        ("a + b", 0, 2, None),
        ("a", 4, 0, None),
    ],
)
def test_word_at(text, line, character, expected):
    assert word_at(text, line, character) == expected


def test_describe_symbol():
    idx = build_index(SOURCE)
    assert describe_symbol(idx, "print") == "print: (object) -> void"
    assert describe_symbol(idx, "add") == "func add(a: float, b: float): float (function, defined at 1:6)"
    assert describe_symbol(idx, "unknown") is None


def test_completion_tables():
    assert set(BUILTIN_SIGNATURES) == {"input", "print", "error", "length", "get", "clear"}
    assert "elseif" in KEYWORD_NAMES
    assert "true" in KEYWORD_NAMES
