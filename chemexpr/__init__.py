"""
Chemexpr - expression language for chemical entities.

Compiles text such as ``$H2O`` or ``a + b`` into an expression tree with a
single-pass incremental parser, then evaluates the tree against a symbol
table into typed values.

    >>> from chemexpr import PeriodicTable, Session
    >>> session = Session(PeriodicTable.standard())
    >>> str(session.evaluate("$H2O").payload)
    'H2O'

Modules:
    chemexpr.tokens     - Tokenizer
    chemexpr.builders   - Incremental builders and infix-wrap
    chemexpr.parser     - parse() entry points
    chemexpr.evaluator  - evaluate()
"""

__version__ = "0.1.0"

# Tokens and parsing
from chemexpr.tokens import Token, TokenKind, Tokenizer, tokenize
from chemexpr.builders import ExpressionBuilder, RootBuilder, SyntaxRegistry
from chemexpr.parser import ExpressionParser, parse, parse_tokens

# Expression tree
from chemexpr.expression import (
    CondensedFormulaExpr,
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

# Values and evaluation
from chemexpr.coeffs import CoeffVec
from chemexpr.elements import Element, PeriodicTable
from chemexpr.formulas import ChemEqn, MolecularFormula
from chemexpr.values import DataType, Value
from chemexpr.dictionary import Dictionary
from chemexpr.evaluator import evaluate
from chemexpr.session import Session

# Exceptions
from chemexpr.exceptions import (
    BadTypeError,
    ChemError,
    DictAccessError,
    EvaluationError,
    ExpectedTokensError,
    InvalidLiteralError,
    NoTokensError,
    ParseError,
    PeriodicTableError,
    UndefinedIdentifierError,
    UnexpectedTokenError,
    UnsupportedEvaluationError,
    UnsupportedSyntaxError,
)

__all__ = [
    # Tokens and parsing
    "Token", "TokenKind", "Tokenizer", "tokenize",
    "ExpressionBuilder", "RootBuilder", "SyntaxRegistry",
    "ExpressionParser", "parse", "parse_tokens",
    # Expression tree
    "Expression", "Identifier", "StringLiteral", "IntegerLiteral", "RealLiteral",
    "TupleExpr", "SpecialSyntax", "InfixChain", "InfixOperator",
    "MolecularFormulaExpr", "FormulaCharge", "CondensedFormulaExpr",
    # Values and evaluation
    "CoeffVec", "Element", "PeriodicTable", "MolecularFormula", "ChemEqn",
    "DataType", "Value", "Dictionary", "evaluate", "Session",
    # Exceptions
    "ChemError", "ParseError", "NoTokensError", "UnexpectedTokenError",
    "ExpectedTokensError", "InvalidLiteralError", "UnsupportedSyntaxError",
    "EvaluationError", "DictAccessError", "BadTypeError", "UndefinedIdentifierError",
    "UnsupportedEvaluationError", "PeriodicTableError",
]
