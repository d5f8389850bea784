"""
S-expression grammar built from tokfold rules.

Two front ends produce the same leaf vocabulary (`word`, `paren` plus the
literal bracket character): a character-level rule pipeline over
`char_leaves`, and a Lark terminal lexer. Either is then folded into `expr`
groups by `bracket_rule`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from .fold import PARENS, bracket_rule
from .lexer import LarkLexer, char_leaves
from .rules import Rule, apply_rules, drop_where, merge_runs, tag_where
from .tree import ParseToken, TokenSequence, has_tag

PAREN_CHARS = ("(", ")")


def _is_blank(token: ParseToken) -> bool:
    payload = token.payload
    return token.is_leaf and payload is not None and (payload.isspace() or payload == "\0")


whitespace_rule = tag_where(_is_blank, "ws")


def paren_rule(tokens: TokenSequence) -> TokenSequence:
    out: List[ParseToken] = []

    for token in tokens:
        if token.is_leaf and token.payload in PAREN_CHARS:
            token = token.tagged("paren", token.payload)
        out.append(token)

    return out


def _is_word_char(token: ParseToken) -> bool:
    return not token.has_tag("ws") and not token.has_tag("paren")


word_rule = merge_runs(_is_word_char, "word")

remove_whitespace_rule = drop_where(has_tag("ws"))

SEXPR_RULES: List[Rule] = [
    whitespace_rule,
    paren_rule,
    word_rule,
    remove_whitespace_rule,
]


def parse_sexpr(text: str) -> TokenSequence:
    return apply_rules(SEXPR_RULES + [bracket_rule(PARENS)], char_leaves(text))


SEXPR_GRAMMAR = r"""
start: (LPAR | RPAR | STRING | ATOM)*

LPAR: "("
RPAR: ")"
STRING: /"(\\.|[^"\\])*"/
ATOM: /[^\s()"]+/

%import common.WS
%ignore WS
"""

SEXPR_TAGS = {
    "LPAR": ("(", "paren"),
    "RPAR": (")", "paren"),
    "ATOM": ("word",),
    "STRING": ("word", "string"),
}


@lru_cache(maxsize=1)
def sexpr_lexer() -> LarkLexer:
    return LarkLexer(SEXPR_GRAMMAR, SEXPR_TAGS)


def lex_sexpr(text: str) -> TokenSequence:
    """Leaves for `text` via Lark; quoted strings stay single `word` leaves."""
    return sexpr_lexer().lex(text)
