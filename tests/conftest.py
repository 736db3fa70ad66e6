"""Test configuration and fixtures for chemexpr tests."""

import pytest
from collections import Counter

# RDKit is used as reference for element data and atom counts
from rdkit import Chem

from chemexpr import Dictionary, PeriodicTable, RootBuilder, Session, SyntaxRegistry


# Toy table with made-up elements, handy for checking that nothing relies
# on real chemistry
ALPHABETIC_TABLE = """\
1 Al alicium
2 Bo bobbium
3 Ch charlium
4 Dv davidium
5 Er erinium
6 Fr frankium
7 Gr gracium
8 He heidium
9 Iv ivanine
10 Js joshine
11 Kv kevinium
12 Ll lilium
13 Mk mikine
14 Nc nancium
15 Os oscarinium
"""


def rdkit_atom_counts(smiles: str) -> dict[str, int]:
    """Get element -> atom count (hydrogens included) from RDKit.

    Args:
        smiles: Input SMILES string.

    Returns:
        Mapping of element symbol to number of atoms.
    """
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    mol = Chem.AddHs(mol)
    return dict(Counter(atom.GetSymbol() for atom in mol.GetAtoms()))


def rdkit_element_symbol(atomic_number: int) -> str:
    """Get the element symbol RDKit uses for an atomic number."""
    return Chem.GetPeriodicTable().GetElementSymbol(atomic_number)


@pytest.fixture
def table() -> PeriodicTable:
    """Fresh standard periodic table."""
    return PeriodicTable.standard()


@pytest.fixture
def alphabetic_table() -> PeriodicTable:
    """Toy periodic table with 15 invented elements."""
    return PeriodicTable.from_text(ALPHABETIC_TABLE)


@pytest.fixture
def dictionary(table) -> Dictionary:
    """Dictionary with the standard elements loaded."""
    d = Dictionary()
    d.load_elements(table)
    return d


@pytest.fixture
def session(table) -> Session:
    """Session over the standard periodic table."""
    return Session(table)


@pytest.fixture
def expr_registry() -> SyntaxRegistry:
    """Registry where ``expr!{ ... }`` wraps a single nested expression."""
    registry = SyntaxRegistry()
    registry.register("expr", RootBuilder)
    return registry


@pytest.fixture
def molecules() -> dict[str, str]:
    """Formula -> SMILES pairs for common molecules."""
    return {
        "$H2O": "O",
        "$CH4": "C",
        "$C2H6O": "CCO",
        "$C6H6": "c1ccccc1",
        "$C2H4O2": "CC(=O)O",
        "$NaCl": "[Na+].[Cl-]",
        "$C9H8O4": "CC(=O)OC1=CC=CC=C1C(=O)O",
        "$C8H10N4O2": "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
    }
