import pytest
from hypothesis import given, strategies as st

from flint.errors import LexError
from flint.reader.lexer import lex, tokenize
from flint.reader.tokens import TRIVIA, Token, TokenKind, line_and_column


def _kinds(source):
    return [(t.kind, t.text) for t in tokenize(source)[:-1]]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("x", [(TokenKind.IDENTIFIER, "x")]),
        ("snake_case", [(TokenKind.IDENTIFIER, "snake_case")]),
        ("42", [(TokenKind.NUMBER, "42")]),
        ("3.25", [(TokenKind.NUMBER, "3.25")]),
        ('"hello world"', [(TokenKind.STRING, '"hello world"')]),
        ('""', [(TokenKind.STRING, '""')]),
        ("true false", [(TokenKind.BOOLEAN, "true"), (TokenKind.BOOLEAN, "false")]),
        ("let const var", [(TokenKind.LET, "let"), (TokenKind.CONST, "const"), (TokenKind.VAR, "var")]),
        ("elseif else if", [(TokenKind.ELSEIF, "elseif"), (TokenKind.ELSE, "else"), (TokenKind.IF, "if")]),
        ("func void return break", [
            (TokenKind.FUNC, "func"), (TokenKind.VOID, "void"),
            (TokenKind.RETURN, "return"), (TokenKind.BREAK, "break"),
        ]),
        ("iffy", [(TokenKind.IDENTIFIER, "iffy")]),
        ("a->b", [(TokenKind.IDENTIFIER, "a"), (TokenKind.ARROW, "->"), (TokenKind.IDENTIFIER, "b")]),
        ("a - b", [(TokenKind.IDENTIFIER, "a"), (TokenKind.MINUS, "-"), (TokenKind.IDENTIFIER, "b")]),
        ("== = !=", [(TokenKind.DOUBLE_EQUALS, "=="), (TokenKind.EQUALS, "="), (TokenKind.BANG_EQUALS, "!=")]),
        ("&& ||", [(TokenKind.DOUBLE_AMPERSAND, "&&"), (TokenKind.DOUBLE_PIPE, "||")]),
        ("< >", [(TokenKind.LESS_THAN, "<"), (TokenKind.GREATER_THAN, ">")]),
        ("([{}]);,:", [
            (TokenKind.LEFT_PAREN, "("), (TokenKind.LEFT_BRACKET, "["), (TokenKind.LEFT_BRACE, "{"),
            (TokenKind.RIGHT_BRACE, "}"), (TokenKind.RIGHT_BRACKET, "]"), (TokenKind.RIGHT_PAREN, ")"),
            (TokenKind.SEMICOLON, ";"), (TokenKind.COMMA, ","), (TokenKind.COLON, ":"),
        ]),
        ("x # a comment\n y", [(TokenKind.IDENTIFIER, "x"), (TokenKind.IDENTIFIER, "y")]),
        ("# only a comment", []),
        ("", []),
    ],
)
def test_tokenize(source, expected):
    assert _kinds(source) == expected


def test_number_then_period_without_digit():
    assert _kinds("1.") == [(TokenKind.NUMBER, "1"), (TokenKind.PERIOD, ".")]


def test_keywords_are_case_sensitive():
    assert _kinds("If TRUE") == [(TokenKind.IDENTIFIER, "If"), (TokenKind.IDENTIFIER, "TRUE")]


def test_positions_are_offsets_into_the_source():
    tokens = tokenize("let x\n  = 1;")
    assert [t.position for t in tokens] == [0, 4, 8, 10, 11, 12]


def test_tokenize_ends_with_end_of_file():
    tokens = tokenize("print(1);")
    assert tokens[-1] == Token(TokenKind.END_OF_FILE, "", 9)
    assert sum(t.kind is TokenKind.END_OF_FILE for t in tokens) == 1


def test_lex_keeps_trivia():
    kinds = [t.kind for t in lex("a # note\nb")]
    assert kinds == [
        TokenKind.IDENTIFIER,
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.WHITESPACE,
        TokenKind.IDENTIFIER,
    ]


def test_comment_stops_before_newline():
    comment = [t for t in lex("# note\nx") if t.kind is TokenKind.COMMENT][0]
    assert comment.text == "# note"


@pytest.mark.parametrize(
    "source,position",
    [
        ("let x = $;", 8),
        ("a ! b", 2),
        ('"never closed', 0),
        ('x = "abc', 4),
    ],
)
def test_lex_errors(source, position):
    with pytest.raises(LexError) as info:
        tokenize(source)
    assert info.value.position == position


@pytest.mark.parametrize(
    "source,offset,expected",
    [
        ("abc", 0, (0, 0)),
        ("abc", 2, (0, 2)),
        ("ab\ncd", 3, (1, 0)),
        ("ab\ncd\nef", 7, (2, 1)),
    ],
)
def test_line_and_column(source, offset, expected):
    assert line_and_column(source, offset) == expected


FRAGMENTS = [
    "abc", "x_y", "if", "true", "42", "3.5", " ", "\n", "\t", "# note\n",
    '"hi there"', "+", "-", "->", "==", "=", "!=", "(", ")", "{", "}",
    "[", "]", ";", ",", ":", "<", ">", "&&", "||",
]

sources = st.lists(st.sampled_from(FRAGMENTS), max_size=40).map("".join)


@given(sources)
def test_lex_is_lossless(source):
    assert "".join(t.text for t in lex(source)) == source


@given(sources)
def test_tokenize_drops_trivia(source):
    tokens = tokenize(source)
    assert all(t.kind not in TRIVIA for t in tokens)
    assert tokens[-1].kind is TokenKind.END_OF_FILE
    assert all(t.kind is not TokenKind.END_OF_FILE for t in tokens[:-1])


@given(sources)
def test_token_positions_point_at_their_text(source):
    for token in lex(source):
        assert source[token.position:token.position + len(token.text)] == token.text
