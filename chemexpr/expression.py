"""
Expression tree types.

Finished, immutable nodes produced by the builders in ``chemexpr.builders``.
Every node is a frozen dataclass; a parent exclusively owns its children.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union

from chemexpr.tokens import Token, TokenKind


class InfixOperator(Enum):
    """Operators that may join the operands of an infix chain."""

    CALL = "."
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: Token) -> InfixOperator | None:
        """Interpret a token as an operator, or None if it is not one."""
        return OPERATOR_TOKENS.get(token.kind)


OPERATOR_TOKENS: Final[dict[TokenKind, InfixOperator]] = {
    TokenKind.DOT: InfixOperator.CALL,
    TokenKind.PLUS: InfixOperator.PLUS,
    TokenKind.MINUS: InfixOperator.MINUS,
    TokenKind.MULTIPLY: InfixOperator.MULTIPLY,
    TokenKind.DIVIDE: InfixOperator.DIVIDE,
    TokenKind.POWER: InfixOperator.POWER,
}


@dataclass(frozen=True, slots=True)
class Identifier:
    """A name resolved through the dictionary at evaluation time."""

    name: str


@dataclass(frozen=True, slots=True)
class StringLiteral:
    value: str


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    value: int


@dataclass(frozen=True, slots=True)
class RealLiteral:
    """A real number literal, kept as its source digits."""

    text: str


@dataclass(frozen=True, slots=True)
class TupleExpr:
    items: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class SpecialSyntax:
    """``name!{ inner }`` block handled by a registered builder."""

    name: str
    inner: Expression


@dataclass(frozen=True, slots=True)
class InfixChain:
    """Left-to-right chain ``a op b op c``.

    Attributes:
        operands: Operand expressions in source order.
        operators: Operators between consecutive operands.
    """

    operands: tuple[Expression, ...]
    operators: tuple[InfixOperator, ...]

    def __post_init__(self) -> None:
        if len(self.operands) != len(self.operators) + 1:
            raise ValueError(
                f"Infix chain needs one more operand than operators, got "
                f"{len(self.operands)} operands and {len(self.operators)} operators"
            )


@dataclass(frozen=True, slots=True)
class FormulaCharge:
    """Charge suffix of a formula: sign (+1 or -1) and magnitude expression."""

    sign: int
    magnitude: Expression


@dataclass(frozen=True, slots=True)
class MolecularFormulaExpr:
    """``$H2O`` style formula.

    Attributes:
        terms: Symbol and subscript sub-expressions, flat and in source order.
            Pairing symbols with subscripts happens during evaluation.
        charge: Optional charge suffix.
    """

    terms: tuple[Expression, ...]
    charge: FormulaCharge | None = None


@dataclass(frozen=True, slots=True)
class CondensedFormulaExpr:
    """``$$`` condensed formula. Declared only; never produced by the parser."""

    groups: tuple[Expression, ...]
    charge: FormulaCharge | None = None


Expression = Union[
    Identifier,
    StringLiteral,
    IntegerLiteral,
    RealLiteral,
    TupleExpr,
    SpecialSyntax,
    InfixChain,
    MolecularFormulaExpr,
    CondensedFormulaExpr,
]
