"""
Bracket folding: turn flat open/close marker runs into nested branch nodes.

Markers are recognized by tag, so the same transform folds parentheses,
square brackets or any other pair a lexer rule has tagged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .tree import ParseToken, TokenSequence
from .rules import Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Brackets:
    """Marker tags for one bracket pair and the tags given to folded groups."""

    open_tag: str = "("
    close_tag: str = ")"
    group_tags: Tuple[str, ...] = ("expr",)


PARENS = Brackets()
SQUARE = Brackets("[", "]", ("list",))
BRACES = Brackets("{", "}", ("block",))


def fold_brackets(tokens: TokenSequence, brackets: Brackets = PARENS) -> TokenSequence:
    """Fold every matched open/close pair in `tokens` into a branch node.

    Only the most recent unmatched open marker is remembered. When a close
    marker follows it, the enclosed range is folded first (so nesting
    resolves inside-out), the range including both markers is replaced by a
    single group node, and scanning restarts from the beginning of the
    shortened sequence. Unmatched markers are left where they are.

    Nesting depth is limited by the interpreter recursion limit.
    """
    while True:
        open_index: Optional[int] = None

        for i, token in enumerate(tokens):
            if token.has_tag(brackets.open_tag):
                open_index = i
            elif open_index is not None and token.has_tag(brackets.close_tag):
                inner = fold_brackets(tokens[open_index + 1:i], brackets)
                group = ParseToken.new_branch_from_first(inner, brackets.group_tags)
                tokens[open_index:i + 1] = [group]
                logger.debug("folded %d tokens at %d into %s", len(inner), open_index, brackets.group_tags)
                break
        else:
            return tokens


def bracket_rule(brackets: Brackets = PARENS) -> Rule:
    def rule(tokens: TokenSequence) -> TokenSequence:
        return fold_brackets(tokens, brackets)

    rule.__name__ = f"fold_{brackets.group_tags[0] if brackets.group_tags else 'group'}"
    return rule
