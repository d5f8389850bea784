"""
Adapters at the lexer boundary.

Lexing proper is done elsewhere (a hand-written scanner, or Lark's basic
lexer); these helpers turn whatever it produced into the initial list of
leaf ParseTokens that rules start from.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError
from .tree import ParseToken, TokenSequence

TagPair = Tuple[Union[str, Sequence[str]], Optional[str]]


def leaves(pairs: Iterable[TagPair]) -> TokenSequence:
    """Build leaf tokens from `(tag_or_tags, payload)` pairs."""
    return [ParseToken.leaf(tags, payload) for tags, payload in pairs]


def char_leaves(text: str, sentinel: str = "\0") -> TokenSequence:
    """One `char` leaf per character plus a trailing `eof` sentinel leaf."""
    tokens = [ParseToken.leaf("char", ch) for ch in text]
    tokens.append(ParseToken.leaf(("char", "eof"), sentinel))
    return tokens


class LarkLexer:
    """
    Lex text with a Lark grammar's terminals.

    Each Lark token becomes a leaf tagged with its terminal name, followed by
    any extra tags listed for that terminal in `tag_map`.
    """

    def __init__(self, grammar: str, tag_map: Optional[Mapping[str, Sequence[str]]] = None):
        self.parser = Lark(grammar, parser="lalr", lexer="basic")
        self.tag_map = dict(tag_map or {})

    def iter_tokens(self, text: str) -> Iterator[ParseToken]:
        try:
            for tok in self.parser.lex(text):
                extra = tuple(self.tag_map.get(tok.type, ()))
                yield ParseToken.leaf((tok.type,) + extra, str(tok))
        except UnexpectedCharacters as exc:
            raise LexError(f"Unexpected character {exc.char!r}", exc.line, exc.column) from exc

    def lex(self, text: str) -> TokenSequence:
        tokens: List[ParseToken] = list(self.iter_tokens(text))
        return tokens
