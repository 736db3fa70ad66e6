"""
Chemical elements and periodic tables.

A periodic table is an ordinary object constructed by the caller and passed
to whatever needs it; there is no process-wide default table. Element
references handed out by a table stay valid for as long as the table does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator

from chemexpr.exceptions import PeriodicTableError


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.

    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol (e.g., "C", "Cl").
        name: Full element name.
    """

    atomic_number: int
    symbol: str
    name: str

    def __str__(self) -> str:
        return f"[{self.atomic_number} {self.symbol} | {self.name}]"


# (atomic_number, symbol, name)
_ELEMENTS_DATA: Final[tuple[tuple[int, str, str], ...]] = (
    (1, "H", "Hydrogen"),
    (2, "He", "Helium"),
    (3, "Li", "Lithium"),
    (4, "Be", "Beryllium"),
    (5, "B", "Boron"),
    (6, "C", "Carbon"),
    (7, "N", "Nitrogen"),
    (8, "O", "Oxygen"),
    (9, "F", "Fluorine"),
    (10, "Ne", "Neon"),
    (11, "Na", "Sodium"),
    (12, "Mg", "Magnesium"),
    (13, "Al", "Aluminum"),
    (14, "Si", "Silicon"),
    (15, "P", "Phosphorus"),
    (16, "S", "Sulfur"),
    (17, "Cl", "Chlorine"),
    (18, "Ar", "Argon"),
    (19, "K", "Potassium"),
    (20, "Ca", "Calcium"),
    (21, "Sc", "Scandium"),
    (22, "Ti", "Titanium"),
    (23, "V", "Vanadium"),
    (24, "Cr", "Chromium"),
    (25, "Mn", "Manganese"),
    (26, "Fe", "Iron"),
    (27, "Co", "Cobalt"),
    (28, "Ni", "Nickel"),
    (29, "Cu", "Copper"),
    (30, "Zn", "Zinc"),
    (31, "Ga", "Gallium"),
    (32, "Ge", "Germanium"),
    (33, "As", "Arsenic"),
    (34, "Se", "Selenium"),
    (35, "Br", "Bromine"),
    (36, "Kr", "Krypton"),
    (37, "Rb", "Rubidium"),
    (38, "Sr", "Strontium"),
    (39, "Y", "Yttrium"),
    (40, "Zr", "Zirconium"),
    (41, "Nb", "Niobium"),
    (42, "Mo", "Molybdenum"),
    (43, "Tc", "Technetium"),
    (44, "Ru", "Ruthenium"),
    (45, "Rh", "Rhodium"),
    (46, "Pd", "Palladium"),
    (47, "Ag", "Silver"),
    (48, "Cd", "Cadmium"),
    (49, "In", "Indium"),
    (50, "Sn", "Tin"),
    (51, "Sb", "Antimony"),
    (52, "Te", "Tellurium"),
    (53, "I", "Iodine"),
    (54, "Xe", "Xenon"),
    (55, "Cs", "Cesium"),
    (56, "Ba", "Barium"),
    (57, "La", "Lanthanum"),
    (58, "Ce", "Cerium"),
    (59, "Pr", "Praseodymium"),
    (60, "Nd", "Neodymium"),
    (61, "Pm", "Promethium"),
    (62, "Sm", "Samarium"),
    (63, "Eu", "Europium"),
    (64, "Gd", "Gadolinium"),
    (65, "Tb", "Terbium"),
    (66, "Dy", "Dysprosium"),
    (67, "Ho", "Holmium"),
    (68, "Er", "Erbium"),
    (69, "Tm", "Thulium"),
    (70, "Yb", "Ytterbium"),
    (71, "Lu", "Lutetium"),
    (72, "Hf", "Hafnium"),
    (73, "Ta", "Tantalum"),
    (74, "W", "Tungsten"),
    (75, "Re", "Rhenium"),
    (76, "Os", "Osmium"),
    (77, "Ir", "Iridium"),
    (78, "Pt", "Platinum"),
    (79, "Au", "Gold"),
    (80, "Hg", "Mercury"),
    (81, "Tl", "Thallium"),
    (82, "Pb", "Lead"),
    (83, "Bi", "Bismuth"),
    (84, "Po", "Polonium"),
    (85, "At", "Astatine"),
    (86, "Rn", "Radon"),
    (87, "Fr", "Francium"),
    (88, "Ra", "Radium"),
    (89, "Ac", "Actinium"),
    (90, "Th", "Thorium"),
    (91, "Pa", "Protactinium"),
    (92, "U", "Uranium"),
    (93, "Np", "Neptunium"),
    (94, "Pu", "Plutonium"),
    (95, "Am", "Americium"),
    (96, "Cm", "Curium"),
    (97, "Bk", "Berkelium"),
    (98, "Cf", "Californium"),
    (99, "Es", "Einsteinium"),
    (100, "Fm", "Fermium"),
    (101, "Md", "Mendelevium"),
    (102, "No", "Nobelium"),
    (103, "Lr", "Lawrencium"),
    (104, "Rf", "Rutherfordium"),
    (105, "Db", "Dubnium"),
    (106, "Sg", "Seaborgium"),
    (107, "Bh", "Bohrium"),
    (108, "Hs", "Hassium"),
    (109, "Mt", "Meitnerium"),
    (110, "Ds", "Darmstadtium"),
    (111, "Rg", "Roentgenium"),
    (112, "Cn", "Copernicium"),
    (113, "Nh", "Nihonium"),
    (114, "Fl", "Flerovium"),
    (115, "Mc", "Moscovium"),
    (116, "Lv", "Livermorium"),
    (117, "Ts", "Tennessine"),
    (118, "Og", "Oganesson"),
)


class PeriodicTable:
    """Ordered collection of elements with lookup by symbol.

    Example:
        >>> table = PeriodicTable.standard()
        >>> table.lookup("Cl").atomic_number
        17
    """

    __slots__ = ("_elements", "_by_symbol")

    def __init__(self, elements: Iterable[Element] = ()) -> None:
        self._elements: list[Element] = []
        self._by_symbol: dict[str, Element] = {}
        for element in elements:
            self.add_element(element)

    @classmethod
    def standard(cls) -> PeriodicTable:
        """Build a fresh table with all 118 known elements."""
        return cls(Element(num, sym, name) for num, sym, name in _ELEMENTS_DATA)

    @classmethod
    def from_text(cls, text: str) -> PeriodicTable:
        """Parse a table from lines of ``<atomic number> <symbol> <name>``.

        Blank lines are skipped.

        Args:
            text: Table contents.

        Returns:
            The parsed table.

        Raises:
            PeriodicTableError: If a line is malformed or a symbol repeats.
        """
        table = cls()
        for line_number, line in enumerate(text.splitlines(), start=1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) != 3:
                raise PeriodicTableError(
                    f"Expected 3 fields, found {len(fields)}", line_number
                )
            number, symbol, name = fields
            if not number.isdigit():
                raise PeriodicTableError(
                    f"Atomic number is not an integer: {number!r}", line_number
                )
            try:
                table.add_element(Element(int(number), symbol, name))
            except PeriodicTableError as e:
                raise PeriodicTableError(e.message, line_number) from None
        return table

    def add_element(self, element: Element) -> None:
        """Append an element.

        Raises:
            PeriodicTableError: If the symbol is already present.
        """
        if element.symbol in self._by_symbol:
            raise PeriodicTableError(f"Duplicate element symbol {element.symbol!r}")
        self._elements.append(element)
        self._by_symbol[element.symbol] = element

    def lookup(self, symbol: str) -> Element | None:
        """Look up an element by exact symbol."""
        return self._by_symbol.get(symbol)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def __str__(self) -> str:
        return "\n".join(str(element) for element in self._elements)
