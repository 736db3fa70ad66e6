"""
Session: one periodic table, one dictionary, many input units.
"""

from __future__ import annotations

import logging

from chemexpr.builders import SyntaxRegistry
from chemexpr.dictionary import Dictionary
from chemexpr.elements import PeriodicTable
from chemexpr.evaluator import evaluate
from chemexpr.expression import Expression
from chemexpr.parser import ExpressionParser
from chemexpr.values import Value

logger = logging.getLogger(__name__)


class Session:
    """Processes input units against a shared dictionary.

    The periodic table is supplied by the caller; its element symbols are
    bound in the dictionary when the session starts. Each call to
    ``evaluate`` is one input unit: a failure raises a ChemError subclass and
    leaves the dictionary as it was.

    Example:
        >>> session = Session(PeriodicTable.standard())
        >>> str(session.evaluate("$C2H6O").payload)
        'C2H6O'
    """

    __slots__ = ("_table", "_dictionary", "_parser")

    def __init__(
        self,
        table: PeriodicTable,
        dictionary: Dictionary | None = None,
        registry: SyntaxRegistry | None = None,
    ) -> None:
        self._table = table
        self._dictionary = dictionary if dictionary is not None else Dictionary()
        self._dictionary.load_elements(table)
        self._parser = ExpressionParser(registry)

    @property
    def table(self) -> PeriodicTable:
        return self._table

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def parse(self, source: str) -> Expression:
        return self._parser.parse(source)

    def evaluate(self, source: str) -> Value:
        """Parse and evaluate one input unit.

        Raises:
            ParseError: If the source does not parse.
            EvaluationError: If the expression cannot be evaluated.
        """
        logger.debug("Evaluating %r", source)
        return evaluate(self._parser.parse(source), self._dictionary)

    def define(self, name: str, value: Value) -> None:
        """Bind ``name`` between input units."""
        self._dictionary.set(name, value)

    def undefine(self, name: str) -> Value | None:
        return self._dictionary.remove(name)
