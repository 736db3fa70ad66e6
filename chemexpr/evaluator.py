"""
Expression evaluator.

Walks a finished expression tree depth-first, left to right, against a
read-only Dictionary. Expression kinds without defined semantics raise
UnsupportedEvaluationError instead of guessing a result.
"""

from __future__ import annotations

from chemexpr.dictionary import Dictionary
from chemexpr.exceptions import BadTypeError, UnsupportedEvaluationError
from chemexpr.expression import (
    CondensedFormulaExpr,
    Expression,
    Identifier,
    InfixChain,
    IntegerLiteral,
    MolecularFormulaExpr,
    RealLiteral,
    SpecialSyntax,
    StringLiteral,
    TupleExpr,
)
from chemexpr.formulas import MolecularFormula
from chemexpr.values import DataType, Value

_UNSUPPORTED: dict[type, str] = {
    InfixChain: "infix chain",
    TupleExpr: "tuple",
    SpecialSyntax: "special syntax",
    CondensedFormulaExpr: "condensed formula",
}


def evaluate(expr: Expression, dictionary: Dictionary) -> Value:
    """Evaluate an expression against a dictionary.

    Args:
        expr: Parsed expression tree.
        dictionary: Symbol table; only read.

    Returns:
        The resulting value.

    Raises:
        UndefinedIdentifierError: If an identifier is not bound.
        BadTypeError: If a value has the wrong type for its position.
        UnsupportedEvaluationError: For expression kinds with no semantics.
    """
    if isinstance(expr, Identifier):
        return dictionary.get(expr.name)

    if isinstance(expr, StringLiteral):
        return Value.string(expr.value)

    if isinstance(expr, IntegerLiteral):
        return Value.integer(expr.value)

    if isinstance(expr, RealLiteral):
        return Value.real(float(expr.text))

    if isinstance(expr, MolecularFormulaExpr):
        return _evaluate_formula(expr, dictionary)

    kind = _UNSUPPORTED.get(type(expr))
    if kind is not None:
        raise UnsupportedEvaluationError(kind)
    raise TypeError(f"Not an expression: {expr!r}")


def _evaluate_formula(expr: MolecularFormulaExpr, dictionary: Dictionary) -> Value:
    """Pair each element with an optional following integer subscript.

    ``$HH2`` evaluates to three hydrogens: repeated elements add up.
    """
    if expr.charge is not None:
        raise UnsupportedEvaluationError("charged molecular formula")

    values = [evaluate(term, dictionary) for term in expr.terms]
    formula = MolecularFormula()
    i = 0
    while i < len(values):
        value = values[i]
        if not value.is_type(DataType.ELEMENT):
            raise BadTypeError(DataType.ELEMENT, value)
        subscript = 1
        if i + 1 < len(values) and values[i + 1].is_type(DataType.INTEGER):
            subscript = values[i + 1].payload
            i += 1
        formula.add_atoms(value.payload, subscript)
        i += 1
    return Value.formula(formula)
