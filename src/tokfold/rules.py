"""
Rule driver and generic rule builders.

A rule is any callable taking a token list and returning a token list. Rules
own their input: they may mutate it and return it, or build a new list, and
callers must not reuse the list they passed in.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, List

from typing_extensions import TypeAlias

from .errors import RuleContractError, UnbalancedError
from .tree import ParseToken, Predicate, TokenSequence, is_empty

if TYPE_CHECKING:
    from .fold import Brackets

logger = logging.getLogger(__name__)

# Rules must return a list: later rules (folding included) splice it in place.
Rule: TypeAlias = Callable[[TokenSequence], TokenSequence]


def _rule_name(rule: Rule) -> str:
    return getattr(rule, "__name__", repr(rule))


def apply_rules(rules: Iterable[Rule], tokens: TokenSequence) -> TokenSequence:
    """Thread `tokens` through `rules` in order and return the final sequence.

    A rule returning anything but a list (None, a tuple, a generator) is a bug
    in that rule and raises RuleContractError before the next rule runs.
    """
    for rule in rules:
        before = len(tokens)
        result = rule(tokens)

        if not isinstance(result, list):
            raise RuleContractError(rule, result)

        logger.debug("rule %s: %d -> %d tokens", _rule_name(rule), before, len(result))
        tokens = result

    return tokens


def tag_where(predicate: Predicate, *tags: str) -> Rule:
    def rule(tokens: TokenSequence) -> TokenSequence:
        return [token.tagged(*tags) if predicate(token) else token for token in tokens]

    rule.__name__ = f"tag_{'_'.join(tags)}"
    return rule


def drop_where(predicate: Predicate) -> Rule:
    def rule(tokens: TokenSequence) -> TokenSequence:
        return [token for token in tokens if not predicate(token)]

    rule.__name__ = "drop_where"
    return rule


def merge_runs(predicate: Predicate, *tags: str) -> Rule:
    """Collapse each run of adjacent matching leaves into one leaf tagged `tags`."""
    def rule(tokens: TokenSequence) -> TokenSequence:
        out: List[ParseToken] = []
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.is_leaf and predicate(token):
                j = i
                while j < len(tokens) and tokens[j].is_leaf and predicate(tokens[j]):
                    j += 1
                payload = "".join(t.payload or "" for t in tokens[i:j])
                out.append(ParseToken.leaf(tags, payload))
                i = j
                continue

            out.append(token)
            i += 1

        return out

    rule.__name__ = f"merge_{'_'.join(tags)}"
    return rule


def remove_last(tokens: TokenSequence) -> TokenSequence:
    if tokens:
        tokens.pop()
    return tokens


def drop_trailing_empty(tokens: TokenSequence) -> TokenSequence:
    """Remove the final node only if it has neither children nor payload."""
    if tokens and is_empty(tokens[-1]):
        tokens.pop()
    return tokens


def require_balanced(brackets: Brackets) -> Rule:
    """Build a checking rule that raises if any marker survived folding."""
    markers = (brackets.open_tag, brackets.close_tag)

    def rule(tokens: TokenSequence) -> TokenSequence:
        for token in tokens:
            for node in token.walk():
                for tag in markers:
                    if node.has_tag(tag):
                        raise UnbalancedError(f"unmatched {tag!r} marker", node, tag)
        return tokens

    rule.__name__ = "require_balanced"
    return rule
