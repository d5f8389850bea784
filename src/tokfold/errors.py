"""
Error types for tokfold.

Folding itself never raises on malformed input; these are used by the
opt-in strict checks, the lexer adapters and the rule driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .tree import ParseToken


class TokfoldError(Exception):
    pass


class UnbalancedError(TokfoldError):
    """A marker tag survived folding"""
    def __init__(self, message: str, token: Optional[ParseToken] = None, tag: Optional[str] = None):
        self.message = message
        self.token = token
        self.tag = tag
        payload = token.payload if token is not None else None
        super().__init__(
            f"{message} at {payload!r}" if payload is not None else message
        )


class RuleContractError(TokfoldError, TypeError):
    def __init__(self, rule: Any, result: Any):
        self.rule = rule
        self.result = result
        name = getattr(rule, "__name__", repr(rule))
        super().__init__(
            f"rule {name} returned {type(result).__name__}, expected a token list"
        )


class LexError(TokfoldError):
    """Lexical analysis error"""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, col {column}" if line else message)
