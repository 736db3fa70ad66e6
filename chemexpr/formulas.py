"""
Molecular formulas and chemical equations.

Both are thin wrappers around CoeffVec: a formula counts elements, an
equation counts species (formulas) with signed coefficients.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from chemexpr.coeffs import CoeffVec
from chemexpr.elements import Element


class MolecularFormula:
    """Element counts in first-seen order.

    Example:
        >>> table = PeriodicTable.standard()
        >>> water = MolecularFormula([(table.lookup("H"), 2), (table.lookup("O"), 1)])
        >>> str(water)
        'H2O'
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Iterable[tuple[Element, int]] = ()) -> None:
        self._counts: CoeffVec[Element] = CoeffVec()
        for element, subscript in counts:
            self.add_atoms(element, subscript)

    def get_subscript(self, element: Element) -> int:
        """Number of atoms of ``element`` (0 if absent)."""
        return self._counts.get_coeff(element)

    def set_subscript(self, element: Element, subscript: int) -> None:
        """Set the atom count for ``element``; 0 removes it.

        Raises:
            ValueError: If ``subscript`` is negative.
        """
        if subscript < 0:
            raise ValueError(f"Subscript must be non-negative, got {subscript}")
        self._counts.set_coeff(element, subscript)

    def add_atoms(self, element: Element, count: int) -> None:
        """Increase the count for ``element`` by ``count``."""
        self.set_subscript(element, self.get_subscript(element) + count)

    @property
    def elements(self) -> list[Element]:
        return self._counts.keys()

    @property
    def num_atoms(self) -> int:
        return sum(count for _, count in self._counts)

    def copy(self) -> MolecularFormula:
        new = MolecularFormula()
        new._counts = self._counts.copy()
        return new

    def __iter__(self) -> Iterator[tuple[Element, int]]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __add__(self, other: MolecularFormula) -> MolecularFormula:
        result = self.copy()
        result._counts += other._counts
        return result

    def __mul__(self, factor: int) -> MolecularFormula:
        if factor < 0:
            raise ValueError(f"Cannot scale a formula by {factor}")
        result = self.copy()
        result._counts *= factor
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MolecularFormula):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(
            element.symbol + ("" if count == 1 else str(count))
            for element, count in self._counts
        )

    def __repr__(self) -> str:
        return f"MolecularFormula({str(self)!r})"


class ChemEqn:
    """Reaction equation as signed species coefficients.

    Negative coefficients are reactants, positive coefficients are products.
    """

    __slots__ = ("_species",)

    def __init__(self) -> None:
        self._species: CoeffVec[MolecularFormula] = CoeffVec()

    def get_coeff(self, species: MolecularFormula) -> int:
        return self._species.get_coeff(species)

    def set_coeff(self, species: MolecularFormula, coeff: int) -> None:
        self._species.set_coeff(species.copy(), coeff)

    def reactants(self) -> list[tuple[MolecularFormula, int]]:
        """Reactant species with their (positive) stoichiometric counts."""
        return [(species, -coeff) for species, coeff in self._species if coeff < 0]

    def products(self) -> list[tuple[MolecularFormula, int]]:
        return [(species, coeff) for species, coeff in self._species if coeff > 0]

    def copy(self) -> ChemEqn:
        new = ChemEqn()
        new._species = CoeffVec((species.copy(), coeff) for species, coeff in self._species)
        return new

    def __iter__(self) -> Iterator[tuple[MolecularFormula, int]]:
        return iter(self._species)

    def __len__(self) -> int:
        return len(self._species)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChemEqn):
            return NotImplemented
        return self._species == other._species

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        def side(terms: list[tuple[MolecularFormula, int]]) -> str:
            return " + ".join(
                (str(n) if n != 1 else "") + str(species) for species, n in terms
            )

        return f"{side(self.reactants())} -> {side(self.products())}"
