"""
Typed values produced by evaluation and stored in the dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from chemexpr.elements import Element
from chemexpr.exceptions import BadTypeError
from chemexpr.formulas import ChemEqn, MolecularFormula


class DataType(Enum):
    """The variant a Value holds."""

    STRING = "string"
    INTEGER = "integer"
    REAL = "real number"
    ELEMENT = "element reference"
    MOLECULAR_FORMULA = "molecular formula"
    CHEM_EQN = "chemical equation"

    def __str__(self) -> str:
        return self.value


# Payload class required for each data type
_PAYLOAD_TYPES: dict[DataType, type] = {
    DataType.STRING: str,
    DataType.INTEGER: int,
    DataType.REAL: float,
    DataType.ELEMENT: Element,
    DataType.MOLECULAR_FORMULA: MolecularFormula,
    DataType.CHEM_EQN: ChemEqn,
}


@dataclass(frozen=True, slots=True)
class Value:
    """Tagged value: exactly one data type with its payload.

    Element payloads are references into a periodic table and are shared;
    formula and equation payloads are owned and copied by ``copy()``.

    Attributes:
        type: The active variant.
        payload: The wrapped Python object.
    """

    type: DataType
    payload: Any

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.type]
        if not isinstance(self.payload, expected) or isinstance(self.payload, bool):
            raise TypeError(
                f"{self.type} value needs a {expected.__name__} payload, "
                f"got {type(self.payload).__name__}"
            )
        if self.type is DataType.INTEGER and self.payload < 0:
            raise ValueError(f"Integer values are unsigned, got {self.payload}")

    @classmethod
    def string(cls, text: str) -> Value:
        return cls(DataType.STRING, text)

    @classmethod
    def integer(cls, number: int) -> Value:
        return cls(DataType.INTEGER, number)

    @classmethod
    def real(cls, number: float) -> Value:
        return cls(DataType.REAL, float(number))

    @classmethod
    def element(cls, element: Element) -> Value:
        return cls(DataType.ELEMENT, element)

    @classmethod
    def formula(cls, formula: MolecularFormula) -> Value:
        return cls(DataType.MOLECULAR_FORMULA, formula)

    @classmethod
    def equation(cls, eqn: ChemEqn) -> Value:
        return cls(DataType.CHEM_EQN, eqn)

    def as_type(self, expected: DataType) -> Any:
        """Unwrap the payload if this value has the expected type.

        Raises:
            BadTypeError: If the type differs.
        """
        if self.type is not expected:
            raise BadTypeError(expected, self)
        return self.payload

    def is_type(self, expected: DataType) -> bool:
        return self.type is expected

    def copy(self) -> Value:
        """Copy owned payloads; element references stay shared."""
        if self.type in (DataType.MOLECULAR_FORMULA, DataType.CHEM_EQN):
            return Value(self.type, self.payload.copy())
        return self

    def __str__(self) -> str:
        return f"({self.type}) {self.payload}"
