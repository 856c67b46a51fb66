"""
Chemical elements and bond constants.

This module provides the periodic table, the bond and parity enumerations
attached to the molecular graph, and the valence tables used to fill in
implicit hydrogens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final, FrozenSet


class BondType(Enum):
    """Bond kind, keyed by its SMILES symbol."""

    SINGLE = "-"
    DOUBLE = "="
    TRIPLE = "#"
    QUADRUPLE = "$"
    AROMATIC = ":"
    UP = "/"
    DOWN = "\\"

    @classmethod
    def from_symbol(cls, symbol: str) -> BondType:
        """Map a bond symbol to its type.

        Raises:
            KeyError: If symbol is not a bond symbol.
        """
        return _BOND_SYMBOLS[symbol]

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def order(self) -> float:
        """Bond order; directional bonds count as single, aromatic as 1.5."""
        return _BOND_ORDERS[self]

    @property
    def is_directional(self) -> bool:
        return self in (BondType.UP, BondType.DOWN)

    def __str__(self) -> str:
        return self.name.lower()


_BOND_SYMBOLS: Final[dict[str, BondType]] = {bond.value: bond for bond in BondType}

_BOND_ORDERS: Final[dict[BondType, float]] = {
    BondType.SINGLE: 1,
    BondType.DOUBLE: 2,
    BondType.TRIPLE: 3,
    BondType.QUADRUPLE: 4,
    BondType.AROMATIC: 1.5,
    BondType.UP: 1,
    BondType.DOWN: 1,
}


class Parity(Enum):
    """Tetrahedral or allene parity, looking from the first neighbor."""

    COUNTERCLOCKWISE = "@"
    CLOCKWISE = "@@"


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

    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}

    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        Element._by_number[self.atomic_number] = self

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up an element by symbol.

        Lowercase symbols are accepted for the aromatic subset only, so
        "c" is carbon but "sc" is nothing.
        """
        if symbol in cls._by_symbol:
            return cls._by_symbol[symbol]
        if symbol in AROMATIC_SUBSET:
            return cls._by_symbol.get(symbol.capitalize())
        return None

    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)

    def __str__(self) -> str:
        return self.name


# Symbol and name pairs in atomic number order
_PERIODIC_TABLE: Final[str] = """
    H Hydrogen He Helium Li Lithium Be Beryllium B Boron C Carbon
    N Nitrogen O Oxygen F Fluorine Ne Neon Na Sodium Mg Magnesium
    Al Aluminum Si Silicon P Phosphorus S Sulfur Cl Chlorine Ar Argon
    K Potassium Ca Calcium Sc Scandium Ti Titanium V Vanadium Cr Chromium
    Mn Manganese Fe Iron Co Cobalt Ni Nickel Cu Copper Zn Zinc
    Ga Gallium Ge Germanium As Arsenic Se Selenium Br Bromine Kr Krypton
    Rb Rubidium Sr Strontium Y Yttrium Zr Zirconium Nb Niobium Mo Molybdenum
    Tc Technetium Ru Ruthenium Rh Rhodium Pd Palladium Ag Silver Cd Cadmium
    In Indium Sn Tin Sb Antimony Te Tellurium I Iodine Xe Xenon
    Cs Cesium Ba Barium La Lanthanum Ce Cerium Pr Praseodymium Nd Neodymium
    Pm Promethium Sm Samarium Eu Europium Gd Gadolinium Tb Terbium Dy Dysprosium
    Ho Holmium Er Erbium Tm Thulium Yb Ytterbium Lu Lutetium Hf Hafnium
    Ta Tantalum W Tungsten Re Rhenium Os Osmium Ir Iridium Pt Platinum
    Au Gold Hg Mercury Tl Thallium Pb Lead Bi Bismuth Po Polonium
    At Astatine Rn Radon Fr Francium Ra Radium Ac Actinium Th Thorium
    Pa Protactinium U Uranium Np Neptunium Pu Plutonium Am Americium Cm Curium
    Bk Berkelium Cf Californium Es Einsteinium Fm Fermium Md Mendelevium No Nobelium
    Lr Lawrencium Rf Rutherfordium Db Dubnium Sg Seaborgium Bh Bohrium Hs Hassium
    Mt Meitnerium Ds Darmstadtium Rg Roentgenium Cn Copernicium Nh Nihonium Fl Flerovium
    Mc Moscovium Lv Livermorium Ts Tennessine Og Oganesson  
"""


def _load_table(table: str) -> tuple[Element, ...]:
    words = table.split()
    return tuple(
        Element(number, symbol, name)
        for number, (symbol, name) in enumerate(zip(words[::2], words[1::2]), start=1)
    )


ELEMENTS: Final[tuple[Element, ...]] = _load_table(_PERIODIC_TABLE)

# Daylight "organic subset" - atoms that can appear without brackets
ORGANIC_SUBSET: Final[FrozenSet[str]] = frozenset({
    "B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I",
})

# Aromatic element symbols allowed in lowercase SMILES form
AROMATIC_SUBSET: Final[FrozenSet[str]] = frozenset({
    "b", "c", "n", "o", "p", "s", "as", "se",
})

# Normal valences of the organic subset, lowest first
NORMAL_VALENCES: Final[dict[int, tuple[int, ...]]] = {
    5: (3,),         # B
    6: (4,),         # C
    7: (3, 5),       # N
    8: (2,),         # O
    9: (1,),         # F
    15: (3, 5),      # P
    16: (2, 4, 6),   # S
    17: (1,),        # Cl
    35: (1,),        # Br
    53: (1,),        # I
}


def get_atomic_number(symbol: str) -> int:
    """Get atomic number for an element symbol.

    Args:
        symbol: Element symbol (e.g., "C", "c", "Cl").

    Returns:
        Atomic number, or 0 if not found (wildcards included).
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else 0


def get_normal_valences(atomic_num: int) -> tuple[int, ...]:
    """Normal valences for an organic-subset element, empty for the rest."""
    return NORMAL_VALENCES.get(atomic_num, ())


def is_organic_symbol(symbol: str) -> bool:
    """Check if symbol may be written without brackets."""
    return symbol in ORGANIC_SUBSET or symbol in AROMATIC_SUBSET


def is_aromatic_symbol(symbol: str) -> bool:
    """Check if symbol represents an aromatic atom."""
    return symbol in AROMATIC_SUBSET
