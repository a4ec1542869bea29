"""
Tests for isotope labels, the in-memory mass table and the static level source.
"""

import pytest

from spsplot import ExcitationFetchError, InvalidParameterError, MassTable, NuclideData, StaticExcitationSource, parse_isotope
from spsplot.nuclear_data import element_symbol, element_z, isotope_label


class TestLabels:

    @pytest.mark.parametrize("label, expected", [
        ("12C", (6, 12)),
        ("4He", (2, 4)),
        ("4HE", (2, 4)),
        ("1n", (0, 1)),
        ("14N", (7, 14)),
        (" 208Pb ", (82, 208)),
    ])
    def test_parse_isotope(self, label, expected):
        assert parse_isotope(label) == expected

    @pytest.mark.parametrize("label", ["C12", "12", "12Xx", ""])
    def test_parse_isotope_rejects(self, label):
        with pytest.raises(InvalidParameterError):
            parse_isotope(label)

    def test_symbols(self):
        assert element_symbol(0) == "n"
        assert element_symbol(2) == "He"
        assert element_symbol(200) is None
        assert element_z("fe") == 26

    def test_isotope_label(self):
        assert isotope_label(6, 13) == "13C"
        assert isotope_label(0, 1) == "1n"
        assert isotope_label(6, 0) is None


class TestMassTable:

    def test_default_contains_carbon(self):
        table = MassTable.default()
        carbon = table(6, 12)
        assert carbon.isotope == "12C"
        assert carbon.mass == pytest.approx(11174.8632, abs=1e-3)
        assert (carbon.z, carbon.a) == (6, 12)

    def test_nucleon_masses(self):
        table = MassTable.default()
        assert table(1, 1).mass == pytest.approx(938.272, abs=1e-3)
        assert table(0, 1).mass == pytest.approx(939.565, abs=1e-3)
        assert table(1, 2).mass == pytest.approx(1875.613, abs=1e-3)

    def test_unknown_nuclide(self):
        assert MassTable.default()(99, 300) is None

    def test_add_and_contains(self):
        table = MassTable()
        table.add(NuclideData("7Li", 6533.833, 3, 7))
        assert (3, 7) in table
        assert len(table) == 1
        assert table.get(3, 7).isotope == "7Li"

    def test_unknown_element_skipped(self):
        table = MassTable.from_mass_excess({(6, 12): 0.0, (500, 900): 1.0})
        assert len(table) == 1


class TestStaticExcitationSource:

    def test_returns_levels_in_order(self):
        source = StaticExcitationSource({"13C": [3.089, 0.0]})
        assert source("13C") == [3.089, 0.0]

    def test_returns_copy(self):
        source = StaticExcitationSource({"13C": [0.0]})
        source("13C").append(1.0)
        assert source("13C") == [0.0]

    def test_unknown_isotope(self):
        with pytest.raises(ExcitationFetchError):
            StaticExcitationSource({})("13C")
