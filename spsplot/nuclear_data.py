"""
Nuclear data interfaces consumed by the reaction model.

The kinematics engine never decides how isotopes are looked up. It talks to
two collaborators:

- a mass lookup, ``lookup(z, a) -> Optional[NuclideData]``
- an excitation source, ``source(isotope) -> Sequence[float]`` raising
  ``ExcitationFetchError`` on failure

``MassTable`` and ``StaticExcitationSource`` are small in-memory
implementations of both, suitable for offline work and testing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .errors import ExcitationFetchError, InvalidParameterError
from .kinematics_core import AMU_TO_MEV, ELECTRON_MASS

logger = logging.getLogger(__name__)


# Element symbols indexed by Z (index 0 is the neutron)
ELEMENT_SYMBOLS = (
    'n', 'H', 'He', 'Li', 'Be', 'B', 'C', 'N', 'O', 'F', 'Ne', 'Na', 'Mg',
    'Al', 'Si', 'P', 'S', 'Cl', 'Ar', 'K', 'Ca', 'Sc', 'Ti', 'V', 'Cr', 'Mn',
    'Fe', 'Co', 'Ni', 'Cu', 'Zn', 'Ga', 'Ge', 'As', 'Se', 'Br', 'Kr', 'Rb',
    'Sr', 'Y', 'Zr', 'Nb', 'Mo', 'Tc', 'Ru', 'Rh', 'Pd', 'Ag', 'Cd', 'In',
    'Sn', 'Sb', 'Te', 'I', 'Xe', 'Cs', 'Ba', 'La', 'Ce', 'Pr', 'Nd', 'Pm',
    'Sm', 'Eu', 'Gd', 'Tb', 'Dy', 'Ho', 'Er', 'Tm', 'Yb', 'Lu', 'Hf', 'Ta',
    'W', 'Re', 'Os', 'Ir', 'Pt', 'Au', 'Hg', 'Tl', 'Pb', 'Bi', 'Po', 'At',
    'Rn', 'Fr', 'Ra', 'Ac', 'Th', 'Pa', 'U', 'Np', 'Pu', 'Am', 'Cm', 'Bk',
    'Cf', 'Es', 'Fm', 'Md', 'No', 'Lr', 'Rf', 'Db', 'Sg', 'Bh', 'Hs', 'Mt',
    'Ds', 'Rg', 'Cn', 'Nh', 'Fl', 'Mc', 'Lv', 'Ts', 'Og',
)

_SYMBOL_TO_Z = {symbol.upper(): z for z, symbol in enumerate(ELEMENT_SYMBOLS) if z > 0}

_ISOTOPE_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]{1,2})\s*$")

# Mass excesses in MeV for common light nuclei (AME2020)
DEFAULT_MASS_EXCESS = {
    (0, 1): 8.0713,      # 1n
    (1, 1): 7.28897,     # 1H
    (1, 2): 13.13572,    # 2H (deuteron)
    (1, 3): 14.94981,    # 3H
    (2, 3): 14.93122,    # 3He
    (2, 4): 2.42492,     # 4He
    (3, 6): 14.08688,    # 6Li
    (3, 7): 14.90711,    # 7Li
    (4, 9): 11.34845,    # 9Be
    (5, 10): 12.05076,   # 10B
    (5, 11): 8.66770,    # 11B
    (6, 12): 0.0,        # 12C (reference)
    (6, 13): 3.12501,    # 13C
    (6, 14): 3.01989,    # 14C
    (7, 14): 2.86342,    # 14N
    (7, 15): 0.10144,    # 15N
    (8, 16): -4.73700,   # 16O
    (8, 17): -0.80876,   # 17O
    (8, 18): -0.78282,   # 18O
    (12, 24): -13.93340, # 24Mg
    (13, 27): -17.19678, # 27Al
    (20, 40): -34.84629, # 40Ca
    (22, 48): -48.48707, # 48Ti
    (26, 56): -60.60716, # 56Fe
}


@dataclass(frozen=True)
class NuclideData:
    """Resolved physical data for one nuclide (mass in MeV)."""

    isotope: str
    mass: float
    z: int
    a: int


MassLookup = Callable[[int, int], Optional[NuclideData]]
ExcitationSource = Callable[[str], Sequence[float]]


def element_symbol(z: int) -> Optional[str]:
    """Return the element symbol for charge number ``z`` ('n' for Z=0)."""
    if 0 <= z < len(ELEMENT_SYMBOLS):
        return ELEMENT_SYMBOLS[z]
    return None


def element_z(symbol: str) -> Optional[int]:
    """Return the charge number for an element symbol (case-insensitive)."""
    if symbol == 'n':
        return 0
    return _SYMBOL_TO_Z.get(symbol.strip().upper())


def isotope_label(z: int, a: int) -> Optional[str]:
    """Build an isotope label such as '13C' or '4He'."""
    symbol = element_symbol(z)
    if symbol is None or a <= 0:
        return None
    return f"{a}{symbol}"


def parse_isotope(label: str) -> Tuple[int, int]:
    """
    Parse an isotope label (e.g. "12C", "4He", "1n") into (Z, A).

    A lower-case 'n' with A=1 is the neutron; anything else is looked up
    in the element table.

    Raises:
        InvalidParameterError: If the label is malformed or the element
            symbol is unknown.
    """
    match = _ISOTOPE_RE.match(label)
    if match is None:
        raise InvalidParameterError(f"Malformed isotope label: {label!r}")

    a = int(match.group(1))
    symbol = match.group(2)

    if symbol.lower() == 'n' and a == 1:
        return 0, 1

    z = element_z(symbol)
    if z is None:
        raise InvalidParameterError(f"Unknown element symbol in {label!r}")
    return z, a


class MassTable:
    """
    In-memory mass table keyed by (Z, A).

    Instances are callable and therefore usable directly as a mass lookup.
    """

    def __init__(self, entries: Iterable[NuclideData] = ()):
        self._data: Dict[Tuple[int, int], NuclideData] = {}
        for entry in entries:
            self.add(entry)

    @classmethod
    def from_mass_excess(cls, mass_excess: Mapping[Tuple[int, int], float]) -> "MassTable":
        """
        Build a table of nuclear masses from atomic mass excesses (MeV).

        M = A * u + excess - Z * m_e
        """
        table = cls()
        for (z, a), excess in mass_excess.items():
            label = isotope_label(z, a)
            if label is None:
                logger.warning("Skipping mass excess for unknown nuclide Z=%d A=%d", z, a)
                continue
            mass = a * AMU_TO_MEV + excess - z * ELECTRON_MASS
            table.add(NuclideData(isotope=label, mass=mass, z=z, a=a))
        return table

    @classmethod
    def default(cls) -> "MassTable":
        """Table of common light nuclei used by the examples."""
        return cls.from_mass_excess(DEFAULT_MASS_EXCESS)

    def add(self, entry: NuclideData) -> None:
        self._data[(entry.z, entry.a)] = entry

    def get(self, z: int, a: int) -> Optional[NuclideData]:
        return self._data.get((z, a))

    def __call__(self, z: int, a: int) -> Optional[NuclideData]:
        return self.get(z, a)

    def __contains__(self, key) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class StaticExcitationSource:
    """
    Excitation source backed by a mapping of isotope label to levels (MeV).

    Levels are returned in the stored order. Unknown isotopes raise
    ``ExcitationFetchError`` so that "not available" is never confused with
    an empty level list.
    """

    def __init__(self, levels: Mapping[str, Sequence[float]]):
        self._levels = {label: [float(e) for e in energies]
                        for label, energies in levels.items()}

    def __call__(self, isotope: str) -> Sequence[float]:
        try:
            return list(self._levels[isotope])
        except KeyError:
            raise ExcitationFetchError(f"No level table for {isotope}") from None
