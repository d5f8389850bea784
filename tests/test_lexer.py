from __future__ import annotations

import pytest

from tokfold.errors import LexError
from tokfold.lexer import LarkLexer, char_leaves, leaves
from tokfold.tree import ParseToken

ARITH_GRAMMAR = r"""
start: (NUMBER | OP | LPAR | RPAR)*

NUMBER: /\d+/
OP: "+" | "-"
LPAR: "("
RPAR: ")"

%ignore /\s+/
"""


def test_leaves_from_pairs() -> None:
    tokens = leaves([("word", "A"), (("(", "paren"), "("), ("eof", None)])

    assert tokens == [
        ParseToken.leaf("word", "A"),
        ParseToken.leaf(("(", "paren"), "("),
        ParseToken.leaf("eof"),
    ]
    assert all(tok.is_leaf for tok in tokens)


def test_char_leaves_appends_sentinel() -> None:
    tokens = char_leaves("ab")

    assert [tok.payload for tok in tokens] == ["a", "b", "\0"]
    assert all(tok.has_tag("char") for tok in tokens)
    assert tokens[-1].has_tag("eof")
    assert not tokens[0].has_tag("eof")


def test_char_leaves_empty_text() -> None:
    [sentinel] = char_leaves("", sentinel="$")

    assert sentinel.payload == "$"


def test_lark_lexer_tags_by_terminal() -> None:
    lexer = LarkLexer(ARITH_GRAMMAR, {"LPAR": ["(", "paren"], "RPAR": [")", "paren"]})

    tokens = lexer.lex("(1 + 23)")

    assert [tok.payload for tok in tokens] == ["(", "1", "+", "23", ")"]
    assert [tok.tags[0] for tok in tokens] == ["LPAR", "NUMBER", "OP", "NUMBER", "RPAR"]
    assert tokens[0].tags == ("LPAR", "(", "paren")
    assert tokens[1].tags == ("NUMBER",)


def test_lark_lexer_is_lazy_until_consumed() -> None:
    lexer = LarkLexer(ARITH_GRAMMAR)

    it = lexer.iter_tokens("1 * 2")
    first = next(it)

    assert first.payload == "1"
    with pytest.raises(LexError):
        list(it)


def test_lark_lexer_reports_position() -> None:
    lexer = LarkLexer(ARITH_GRAMMAR)

    with pytest.raises(LexError) as excinfo:
        lexer.lex("1 +\n2 * 3")

    err = excinfo.value
    assert err.line == 2
    assert err.column == 3
    assert "'*'" in str(err)
    assert err.__cause__ is not None
