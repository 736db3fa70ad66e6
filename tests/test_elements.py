"""Tests for element and periodic table functionality."""

import pytest

from chemexpr import Element, PeriodicTable, PeriodicTableError

from .conftest import rdkit_element_symbol


class TestElement:
    """Test Element class."""

    def test_carbon(self, table):
        """Carbon element lookup."""
        elem = table.lookup("C")
        assert elem is not None
        assert elem.symbol == "C"
        assert elem.atomic_number == 6
        assert elem.name == "Carbon"

    def test_chlorine(self, table):
        """Chlorine (two-letter) element lookup."""
        elem = table.lookup("Cl")
        assert elem is not None
        assert elem.atomic_number == 17

    def test_invalid_symbol(self, table):
        """Invalid symbol should return None."""
        assert table.lookup("Xx") is None

    def test_lookup_is_case_sensitive(self, table):
        """Lowercase symbols are not element symbols."""
        assert table.lookup("c") is None
        assert "co" not in table
        assert "Co" in table

    def test_display(self, table):
        """Elements print as ``[number symbol | name]``."""
        assert str(table.lookup("O")) == "[8 O | Oxygen]"

    def test_immutable(self, table):
        with pytest.raises(AttributeError):
            table.lookup("C").symbol = "X"


class TestStandardTable:
    """Test the built-in table against RDKit."""

    def test_size(self, table):
        assert len(table) == 118

    def test_ordered_by_atomic_number(self, table):
        assert [e.atomic_number for e in table] == list(range(1, 119))

    @pytest.mark.parametrize("atomic_number", [1, 6, 7, 8, 11, 17, 26, 29, 53, 79, 92])
    def test_symbols_match_rdkit(self, table, atomic_number):
        """Symbols for common elements agree with RDKit."""
        elem = next(e for e in table if e.atomic_number == atomic_number)
        assert elem.symbol == rdkit_element_symbol(atomic_number)

    def test_all_symbols_match_rdkit(self, table):
        """Every symbol in the table agrees with RDKit."""
        mismatches = [
            (e.atomic_number, e.symbol)
            for e in table
            if e.symbol != rdkit_element_symbol(e.atomic_number)
        ]
        assert mismatches == []

    def test_fresh_tables(self):
        """Each call builds an independent table."""
        first = PeriodicTable.standard()
        first.add_element(Element(200, "Zz", "Testium"))
        assert "Zz" not in PeriodicTable.standard()


class TestTableText:
    """Test parsing tables from text."""

    def test_alphabetic(self, alphabetic_table):
        assert len(alphabetic_table) == 15
        elem = alphabetic_table.lookup("Dv")
        assert elem == Element(4, "Dv", "davidium")

    def test_blank_lines_skipped(self):
        table = PeriodicTable.from_text("\n1 H hydrogen\n\n   \n2 He helium\n")
        assert [e.symbol for e in table] == ["H", "He"]

    def test_round_trip_through_text(self, alphabetic_table):
        """A table can be rebuilt from its own listing."""
        lines = [f"{e.atomic_number} {e.symbol} {e.name}" for e in alphabetic_table]
        rebuilt = PeriodicTable.from_text("\n".join(lines))
        assert list(rebuilt) == list(alphabetic_table)

    def test_bad_atomic_number(self):
        with pytest.raises(PeriodicTableError) as exc:
            PeriodicTable.from_text("1 H hydrogen\nx He helium\n")
        assert exc.value.line_number == 2

    def test_negative_atomic_number(self):
        with pytest.raises(PeriodicTableError):
            PeriodicTable.from_text("-1 H hydrogen")

    def test_wrong_field_count(self):
        with pytest.raises(PeriodicTableError) as exc:
            PeriodicTable.from_text("1 H")
        assert exc.value.line_number == 1

    def test_duplicate_symbol(self):
        with pytest.raises(PeriodicTableError) as exc:
            PeriodicTable.from_text("1 H hydrogen\n2 H again\n")
        assert exc.value.line_number == 2
        assert "Duplicate" in exc.value.message

    def test_add_duplicate(self, table):
        with pytest.raises(PeriodicTableError):
            table.add_element(Element(1, "H", "Hydrogen"))

    def test_listing(self):
        table = PeriodicTable.from_text("1 Al alicium\n2 Bo bobbium")
        assert str(table) == "[1 Al | alicium]\n[2 Bo | bobbium]"
