"""
Custom exceptions for the chemexpr library.

This module defines a hierarchy of exceptions for handling parse and
evaluation errors in a structured way. Every error is raised once at the
boundary of one input unit; formatting and retry policy belong to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chemexpr.tokens import Token
    from chemexpr.values import DataType, Value


class ChemError(Exception):
    """Base exception for all chemexpr errors."""

    pass


class ParseError(ChemError):
    """Error while building an expression tree from tokens."""

    pass


class NoTokensError(ParseError):
    """The input held no expression at all."""

    def __init__(self) -> None:
        super().__init__("No tokens to parse")


class UnexpectedTokenError(ParseError):
    """A token could not be placed anywhere in the expression.

    Attributes:
        token: The offending token, unchanged.
    """

    def __init__(self, token: Token) -> None:
        self.token = token
        super().__init__(f"Unexpected token {token.kind.name} {token.source!r}")


class ExpectedTokensError(ParseError):
    """Input ended while an expression still needed more tokens."""

    def __init__(self, message: str = "Expected more tokens") -> None:
        super().__init__(message)


class InvalidLiteralError(ParseError):
    """A literal token whose text cannot be converted to its value.

    Attributes:
        token: The literal token, unchanged.
    """

    def __init__(self, token: Token, reason: str) -> None:
        self.token = token
        super().__init__(f"Invalid {token.kind.name} literal: {reason}")


class UnsupportedSyntaxError(ParseError):
    """Syntax that is recognized but has no builder.

    Attributes:
        name: Special-syntax name or construct that is not supported.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported syntax: {name}")


class EvaluationError(ChemError):
    """Error while evaluating an expression tree."""

    pass


class DictAccessError(EvaluationError):
    """Error reading a value out of the dictionary."""

    pass


class BadTypeError(DictAccessError):
    """A value had a different type than the one required.

    Attributes:
        expected: The required data type.
        found: The value actually present.
    """

    def __init__(self, expected: DataType, found: Value) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"Expected type {expected}, found value {found}")


class UndefinedIdentifierError(DictAccessError):
    """An identifier has no entry in the dictionary.

    Attributes:
        name: The name that was looked up.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Undefined identifier '{name}'")


class UnsupportedEvaluationError(EvaluationError):
    """Expression kind whose evaluation is not implemented."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Evaluation of {kind} is not supported")


class PeriodicTableError(ChemError):
    """Malformed periodic table data.

    Attributes:
        line_number: 1-based line of the bad entry, if known.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            super().__init__(f"{message} (line {line_number})")
        else:
            super().__init__(message)
