"""ParseToken, the single node type rules operate on, plus the helpers shared
by rules for inspecting token sequences.

A ParseToken is a leaf when it has no children and a branch otherwise; both
kinds live in the same TokenSequence. Conversion to and from Lark trees is
provided so folded output can be handed to Lark-based tooling.
"""
from __future__ import annotations
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union
from typing_extensions import TypeAlias

from lark import Token as LarkToken
from lark import Tree as LarkTree


def _normalize_tags(tags: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(tags, str):
        return (tags,)
    return tuple(dict.fromkeys(tags))


class ParseToken:
    """Tree node carrying a tag set, an optional payload and ordered children."""
    __slots__ = ('tags', 'payload', 'children')

    def __init__(self, tags: Union[str, Iterable[str]], payload: Optional[str] = None,
                 children: Optional[List[ParseToken]] = None):
        self.tags = _normalize_tags(tags)
        self.payload = payload
        self.children = children if children is not None else []

    @classmethod
    def leaf(cls, tags: Union[str, Iterable[str]], payload: Optional[str] = None) -> ParseToken:
        return cls(tags, payload)

    @classmethod
    def new_branch_from_first(cls, tokens: TokenSequence, tags: Union[str, Iterable[str]]) -> ParseToken:
        """Wrap `tokens` as the children of a new node tagged `tags`.

        The list is adopted as-is, not copied; callers must not touch it
        afterwards.
        """
        return cls(tags, None, tokens)

    @property
    def is_leaf(self) -> bool:
        """True when there are no children; empty folded groups count as leaves."""
        return not self.children

    @property
    def is_branch(self) -> bool:
        """True only when the node owns at least one child."""
        return bool(self.children)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def tagged(self, *extra: str) -> ParseToken:
        """Return a replacement node with `extra` tags added; consumes self."""
        return ParseToken(self.tags + extra, self.payload, self.children)

    def content(self) -> str:
        """Concatenated payloads of every leaf below this node, in source order."""
        if self.is_leaf:
            return self.payload or ""
        return "".join(child.content() for child in self.children)

    def walk(self) -> Iterator[ParseToken]:
        yield self
        for child in self.children:
            yield from child.walk()

    def pretty(self, indent: str = '\t') -> str:
        """Return an indented dump: branches as `tag; :`, leaves as `tag; <TAB>payload`."""
        def _pretty(node: ParseToken, level: int) -> str:
            head = indent * level + ''.join(f'{t}; ' for t in node.tags)
            if node.is_leaf and node.payload is not None:
                return f'{head}\t{node.payload!r}\n'
            lines = [f'{head}:\n']
            for child in node.children:
                lines.append(_pretty(child, level + 1))
            return ''.join(lines)
        return _pretty(self, 0)

    def to_lark(self) -> Union[LarkTree, LarkToken]:
        """Convert to Lark objects; the first tag becomes the Tree data or Token type."""
        label = tag_of(self) or 'node'
        if self.is_leaf and self.payload is not None:
            return LarkToken(label, self.payload)
        return LarkTree(label, [child.to_lark() for child in self.children])

    def __repr__(self) -> str:
        if self.is_leaf and self.payload is not None:
            return f'ParseToken({list(self.tags)!r}, {self.payload!r})'
        return f'ParseToken({list(self.tags)!r}, children={self.children!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseToken):
            return False
        return (set(self.tags) == set(other.tags)
                and self.payload == other.payload
                and self.children == other.children)

    def __hash__(self) -> int:
        return hash((frozenset(self.tags), self.payload, tuple(self.children)))


TokenSequence: TypeAlias = List[ParseToken]
Predicate: TypeAlias = Callable[[ParseToken], bool]


def from_lark(node: Union[LarkTree, LarkToken]) -> ParseToken:
    """Convert a Lark Tree/Token into ParseTokens (Tree data and Token type become tags)."""
    if isinstance(node, LarkToken):
        return ParseToken.leaf(node.type, str(node))
    children = [from_lark(child) for child in node.children]
    return ParseToken.new_branch_from_first(children, str(node.data))


def is_leaf(token: ParseToken) -> bool:
    return token.is_leaf

def is_branch(token: ParseToken) -> bool:
    return token.is_branch

def is_empty(token: ParseToken) -> bool:
    return not token.children and not token.payload

def has_tag(tag: str) -> Predicate:
    def predicate(token: ParseToken) -> bool:
        return token.has_tag(tag)
    return predicate

def tag_of(token: ParseToken) -> Optional[str]:
    """First tag of `token`, or None for an untagged node."""
    return token.tags[0] if token.tags else None

def has_any_tag(tags: Iterable[str]) -> Predicate:
    lookup = set(tags)

    def predicate(token: ParseToken) -> bool:
        return not lookup.isdisjoint(token.tags)
    return predicate

def find_tagged(tokens: Iterable[ParseToken], tags: Iterable[str]) -> Optional[ParseToken]:
    """Depth-first search for the first node carrying any of `tags`."""
    matches = has_any_tag(tags)

    for token in tokens:
        for node in token.walk():
            if matches(node):
                return node

    return None

def pretty_sequence(tokens: Iterable[ParseToken], indent: str = '\t') -> str:
    return ''.join(token.pretty(indent) for token in tokens)
