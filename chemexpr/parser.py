"""
Top-level parsing: text or tokens to an expression tree.

    >>> from chemexpr import parse
    >>> parse("a + b")
    InfixChain(operands=(Identifier(name='a'), Identifier(name='b')), operators=(<InfixOperator.PLUS: '+'>,))
"""

from __future__ import annotations

import logging
from typing import Iterable

from chemexpr.builders import RootBuilder, SyntaxRegistry
from chemexpr.exceptions import UnexpectedTokenError
from chemexpr.expression import Expression
from chemexpr.tokens import Token, Tokenizer

logger = logging.getLogger(__name__)


class ExpressionParser:
    """Parser bound to one special-syntax registry.

    Each call to ``parse`` builds a fresh builder tree; nothing is shared
    between inputs except the registry.

    Example:
        >>> parser = ExpressionParser()
        >>> parser.parse("$H2O")
        MolecularFormulaExpr(...)
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: SyntaxRegistry | None = None) -> None:
        self._registry = registry if registry is not None else SyntaxRegistry()

    @property
    def registry(self) -> SyntaxRegistry:
        return self._registry

    def parse(self, source: Iterable[str]) -> Expression:
        """Parse a string (or any character iterable) into an expression.

        Raises:
            ParseError: If the input is not exactly one valid expression.
        """
        return self.parse_tokens(Tokenizer(source))

    def parse_tokens(self, tokens: Iterable[Token]) -> Expression:
        """Parse a token stream, pulling one token at a time.

        Raises:
            NoTokensError: If the stream holds no expression.
            UnexpectedTokenError: If a token fits nowhere.
            ExpectedTokensError: If the stream ends mid-expression.
            UnsupportedSyntaxError: For syntax with no builder.
        """
        root = RootBuilder(self._registry)
        for token in tokens:
            rejected = root.add_token(token)
            if rejected is not None:
                logger.debug("Root rejected %r", rejected)
                raise UnexpectedTokenError(rejected)
        return root.finish()


def parse(source: Iterable[str], registry: SyntaxRegistry | None = None) -> Expression:
    """Parse text into an expression tree.

    Args:
        source: Expression text.
        registry: Special-syntax registry; empty if omitted.

    Returns:
        The finished expression.

    Raises:
        ParseError: If the text is not exactly one valid expression.
    """
    return ExpressionParser(registry).parse(source)


def parse_tokens(tokens: Iterable[Token], registry: SyntaxRegistry | None = None) -> Expression:
    """Parse an already tokenized stream."""
    return ExpressionParser(registry).parse_tokens(tokens)
