"""
Incremental expression builders.

A builder is a mutable node that consumes tokens one at a time and is then
finished into an immutable expression. Builders form a tree: a compound
builder routes each token to its active child and handles whatever the
child hands back.

Protocol:
    - ``add_token(token)`` returns None when the token was accepted, or
      returns the same token when it was rejected. The caller must then
      offer the rejected token to something further up.
    - A builder rejects a token only when it is in a valid state to be
      closed. Rejecting closes it for good: every later token is rejected
      unexamined.
    - When a builder can neither accept nor close, ``add_token`` raises a
      ParseError instead.
    - ``finish()`` consumes the builder and returns the expression. It may
      be called once.

When a finished sub-expression rejects an operator, ``wrap_in_infix``
promotes it into the first operand of an InfixChainBuilder, so operator
chains are built left to right without backtracking.

The builder set is closed; the only open extension point is the
special-syntax registry, which maps a name to an inner builder factory.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from chemexpr.exceptions import (
    ExpectedTokensError,
    InvalidLiteralError,
    NoTokensError,
    UnexpectedTokenError,
    UnsupportedSyntaxError,
)
from chemexpr.expression import (
    Expression,
    FormulaCharge,
    Identifier,
    InfixChain,
    InfixOperator,
    IntegerLiteral,
    MolecularFormulaExpr,
    RealLiteral,
    SpecialSyntax,
    StringLiteral,
    TupleExpr,
)
from chemexpr.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

BuilderFactory = Callable[["SyntaxRegistry"], "ExpressionBuilder"]


class SyntaxRegistry:
    """Name -> inner builder factory for ``name!{ ... }`` blocks.

    A factory is called with the registry itself so that the inner builder
    can parse nested special syntax. The registry starts empty.

    Example:
        >>> registry = SyntaxRegistry()
        >>> registry.register("expr", RootBuilder)
        >>> "expr" in registry
        True
    """

    __slots__ = ("_factories",)

    def __init__(self, factories: Mapping[str, BuilderFactory] | None = None) -> None:
        self._factories: dict[str, BuilderFactory] = dict(factories or {})

    def register(self, name: str, factory: BuilderFactory) -> None:
        self._factories[name] = factory

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def create(self, name: str) -> ExpressionBuilder:
        """Create the inner builder registered under ``name``.

        Raises:
            UnsupportedSyntaxError: If nothing is registered under ``name``.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnsupportedSyntaxError(name)
        logger.debug("Special syntax %r resolved", name)
        return factory(self)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


class ExpressionBuilder:
    """Base class for all builders.

    Subclasses implement ``_offer`` (called only while open) and ``_build``.
    """

    __slots__ = ("_closed", "_finished")

    def __init__(self) -> None:
        self._closed = False
        self._finished = False

    @property
    def closed(self) -> bool:
        """Whether this builder rejects every further token."""
        return self._closed

    def add_token(self, token: Token) -> Token | None:
        """Offer a token to this builder.

        Args:
            token: Next token of the input.

        Returns:
            None if the token was accepted, otherwise the rejected token.

        Raises:
            ParseError: If the token cannot be accepted and this builder is
                not in a state where it may close.
        """
        if self._closed:
            return token
        rejected = self._offer(token)
        if rejected is not None:
            self._closed = True
        return rejected

    def finish(self) -> Expression:
        """Finalize this builder and all of its children.

        Raises:
            ParseError: If a required part of the expression is missing.
            RuntimeError: If called a second time.
        """
        if self._finished:
            raise RuntimeError(f"{type(self).__name__} was already finished")
        self._finished = True
        return self._build()

    def parse_time_identifier(self) -> str | None:
        """Name usable for special syntax, or None for anything but a bare identifier."""
        return None

    def _offer(self, token: Token) -> Token | None:
        """Handle a token while open; return it to reject and close.

        Subclasses must override this.
        """
        raise NotImplementedError

    def _build(self) -> Expression:
        """Produce the finished expression. Subclasses must override this."""
        raise NotImplementedError


class LiteralBuilder(ExpressionBuilder):
    """Single-token expression; closed from the start."""

    __slots__ = ("_expression",)

    def __init__(self, expression: Expression) -> None:
        super().__init__()
        self._expression = expression
        self._closed = True

    def _offer(self, token: Token) -> Token | None:
        return token

    def _build(self) -> Expression:
        return self._expression


class IdentifierBuilder(LiteralBuilder):
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        super().__init__(Identifier(name))
        self._name = name

    def parse_time_identifier(self) -> str | None:
        return self._name


def create_builder(token: Token, registry: SyntaxRegistry) -> ExpressionBuilder:
    """Start a new expression from its first token.

    Args:
        token: First token of the expression.
        registry: Special-syntax registry passed down to compound builders.

    Returns:
        A builder seeded with ``token``.

    Raises:
        UnexpectedTokenError: If no expression can start with ``token``.
        InvalidLiteralError: If an integer literal is too long to convert.
        UnsupportedSyntaxError: For condensed formulas.
    """
    kind = token.kind
    if kind is TokenKind.IDENTIFIER:
        return IdentifierBuilder(token.value)
    if kind is TokenKind.STRING:
        return LiteralBuilder(StringLiteral(token.value))
    if kind is TokenKind.INTEGER:
        try:
            value = int(token.value)
        except ValueError as e:
            # more digits than the interpreter converts
            raise InvalidLiteralError(token, str(e)) from None
        return LiteralBuilder(IntegerLiteral(value))
    if kind is TokenKind.REAL:
        return LiteralBuilder(RealLiteral(token.value))
    if kind is TokenKind.LPAREN:
        return TupleBuilder(registry)
    if kind is TokenKind.FORMULA:
        return MolecularFormulaBuilder(registry)
    if kind is TokenKind.CONDENSED_FORMULA:
        raise UnsupportedSyntaxError("condensed formula")
    raise UnexpectedTokenError(token)


def wrap_in_infix(
    builder: ExpressionBuilder,
    token: Token,
    registry: SyntaxRegistry,
) -> tuple[ExpressionBuilder, Token | None]:
    """Try to restructure ``builder`` around the token it just rejected.

    1. An operator token makes ``builder`` the first operand of a new
       InfixChainBuilder.
    2. A ``!`` after a bare identifier starts a SpecialSyntaxBuilder with
       that identifier as its name.
    3. Anything else leaves both unchanged.

    Returns:
        ``(new_builder, None)`` when the token was consumed, or
        ``(builder, token)`` when wrapping failed.

    Raises:
        UnsupportedSyntaxError: If the special-syntax name is not registered.
    """
    operator = InfixOperator.from_token(token)
    if operator is not None:
        logger.debug("Promoting %s into infix chain on %r", type(builder).__name__, str(operator))
        return InfixChainBuilder(builder, operator, registry), None

    if token.kind is TokenKind.BANG:
        name = builder.parse_time_identifier()
        if name is not None:
            return SpecialSyntaxBuilder(name, registry), None

    return builder, token


class RootBuilder(ExpressionBuilder):
    """Top-level wrapper holding at most one expression.

    Leading whitespace is skipped, the first other token starts the inner
    expression, and rejections from the inner expression are run through
    ``wrap_in_infix``. If wrapping fails the root rejects, which means the
    input holds a second, unrelated expression.
    """

    __slots__ = ("_registry", "_inner")

    def __init__(self, registry: SyntaxRegistry | None = None) -> None:
        super().__init__()
        self._registry = registry if registry is not None else SyntaxRegistry()
        self._inner: ExpressionBuilder | None = None

    def _offer(self, token: Token) -> Token | None:
        if self._inner is None:
            if token.kind is not TokenKind.WHITESPACE:
                self._inner = create_builder(token, self._registry)
            return None

        rejected = self._inner.add_token(token)
        if rejected is None or rejected.kind is TokenKind.WHITESPACE:
            return None
        self._inner, leftover = wrap_in_infix(self._inner, rejected, self._registry)
        return leftover

    def _build(self) -> Expression:
        if self._inner is None:
            raise NoTokensError()
        return self._inner.finish()


class TupleBuilder(ExpressionBuilder):
    """``(a, b, c)`` built slot by slot.

    An open tuple is never a complete expression, so it does not reject
    tokens: anything its active slot rejects that is not ``,`` or ``)``
    and cannot be infix-wrapped is an error.
    """

    __slots__ = ("_registry", "_items", "_has_active", "_terminated")

    def __init__(self, registry: SyntaxRegistry) -> None:
        super().__init__()
        self._registry = registry
        self._items: list[ExpressionBuilder] = []
        self._has_active = False
        self._terminated = False

    def _offer(self, token: Token) -> Token | None:
        if not self._has_active:
            if token.kind is not TokenKind.WHITESPACE:
                self._items.append(create_builder(token, self._registry))
                self._has_active = True
            return None

        rejected = self._items[-1].add_token(token)
        if rejected is None:
            return None

        kind = rejected.kind
        if kind is TokenKind.WHITESPACE:
            return None
        if kind is TokenKind.RPAREN:
            self._terminated = True
            self._closed = True
            return None
        if kind is TokenKind.COMMA:
            self._has_active = False
            return None

        self._items[-1], leftover = wrap_in_infix(self._items[-1], rejected, self._registry)
        if leftover is not None:
            raise UnexpectedTokenError(leftover)
        return None

    def _build(self) -> Expression:
        if not self._terminated:
            raise ExpectedTokensError("Unterminated tuple, expected ')'")
        return TupleExpr(tuple(item.finish() for item in self._items))


class SpecialSyntaxBuilder(ExpressionBuilder):
    """``name!{ ... }`` block delegating its contents to a registered builder."""

    __slots__ = ("_name", "_inner", "_opened", "_terminated")

    def __init__(self, name: str, registry: SyntaxRegistry) -> None:
        super().__init__()
        self._name = name
        self._inner = registry.create(name)
        self._opened = False
        self._terminated = False

    def _offer(self, token: Token) -> Token | None:
        if not self._opened:
            if token.kind is TokenKind.WHITESPACE:
                return None
            if token.kind is TokenKind.LBRACE:
                self._opened = True
                return None
            raise UnexpectedTokenError(token)

        rejected = self._inner.add_token(token)
        if rejected is None or rejected.kind is TokenKind.WHITESPACE:
            return None
        if rejected.kind is TokenKind.RBRACE:
            self._terminated = True
            self._closed = True
            return None
        # no infix-wrap inside a special syntax block
        raise UnexpectedTokenError(rejected)

    def _build(self) -> Expression:
        if not self._terminated:
            raise ExpectedTokensError(f"Unterminated {self._name}! block, expected '}}'")
        return SpecialSyntax(self._name, self._inner.finish())


class InfixChainBuilder(ExpressionBuilder):
    """``a op b op c`` built left to right.

    Only ever created by ``wrap_in_infix``. Between operators there is
    either one open operand slot or none; ``len(operands)`` is always
    ``len(operators)`` or ``len(operators) + 1``.
    """

    __slots__ = ("_registry", "_operands", "_operators")

    def __init__(
        self,
        first_operand: ExpressionBuilder,
        operator: InfixOperator,
        registry: SyntaxRegistry,
    ) -> None:
        super().__init__()
        self._registry = registry
        self._operands: list[ExpressionBuilder] = [first_operand]
        self._operators: list[InfixOperator] = [operator]

    def _awaiting_operand(self) -> bool:
        return len(self._operands) == len(self._operators)

    def _offer(self, token: Token) -> Token | None:
        if self._awaiting_operand():
            if token.kind is not TokenKind.WHITESPACE:
                self._operands.append(create_builder(token, self._registry))
            return None

        rejected = self._operands[-1].add_token(token)
        if rejected is None or rejected.kind is TokenKind.WHITESPACE:
            return None

        operator = InfixOperator.from_token(rejected)
        if operator is None:
            return rejected
        self._operators.append(operator)
        return None

    def _build(self) -> Expression:
        if self._awaiting_operand():
            raise ExpectedTokensError(f"Expected an operand after '{self._operators[-1]}'")
        return InfixChain(
            tuple(operand.finish() for operand in self._operands),
            tuple(self._operators),
        )


class MolecularFormulaBuilder(ExpressionBuilder):
    """``$`` formula: symbol/subscript terms with an optional charge.

    Terms are any expressions; each incoming token first extends the
    trailing term, then tries to start a new one. A ``+`` or ``-`` that no
    term takes starts the charge, which must be followed immediately by a
    magnitude expression. Whitespace ends the formula.
    """

    __slots__ = ("_registry", "_terms", "_sign", "_magnitude")

    def __init__(self, registry: SyntaxRegistry) -> None:
        super().__init__()
        self._registry = registry
        self._terms: list[ExpressionBuilder] = []
        self._sign: int | None = None
        self._magnitude: ExpressionBuilder | None = None

    def _extend_terms(self, token: Token) -> Token | None:
        if self._terms:
            rejected = self._terms[-1].add_token(token)
            if rejected is None:
                return None
            token = rejected

        if token.kind is TokenKind.WHITESPACE:
            return token
        try:
            self._terms.append(create_builder(token, self._registry))
        except UnexpectedTokenError:
            return token
        return None

    def _offer(self, token: Token) -> Token | None:
        if self._sign is None:
            rejected = self._extend_terms(token)
            if rejected is None:
                return None
            if rejected.kind is TokenKind.PLUS:
                self._sign = 1
                return None
            if rejected.kind is TokenKind.MINUS:
                self._sign = -1
                return None
            return rejected

        if self._magnitude is None:
            # the magnitude must follow the sign directly
            self._magnitude = create_builder(token, self._registry)
            return None

        return self._magnitude.add_token(token)

    def _build(self) -> Expression:
        terms = tuple(term.finish() for term in self._terms)
        if self._sign is None:
            return MolecularFormulaExpr(terms)
        if self._magnitude is None:
            raise ExpectedTokensError("Expected a charge magnitude after the sign")
        return MolecularFormulaExpr(terms, FormulaCharge(self._sign, self._magnitude.finish()))
