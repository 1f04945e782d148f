"""Energy-equivalent units and their relation to the electronvolt."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class EnergyUnit(str, Enum):
    """Units convertible to eV through one fixed ratio.

    Declaration order is the display order of ``enconv uc``.
    """

    ELECTRON_VOLT = "ElectronVolt"
    CALORIE_PER_MOLE = "CaloriePerMole"
    JOULE_PER_MOLE = "JoulePerMole"
    KELVIN = "Kelvin"  # E = kB * T
    HARTREE = "Hartree"
    WAVENUMBER = "Wavenumber"  # cm^-1
    METER = "Meter"  # wavelength of light
    HERTZ = "Hertz"  # frequency of light
    SECOND = "Second"  # period of light

    @property
    def abbr(self) -> str:
        return UNIT_ABBR[self]

    @property
    def full_name(self) -> str:
        return self.value

    @property
    def ratio(self) -> float:
        """Magnitude of 1 eV expressed in this unit."""
        return UNIT_RATIO[self]

    @property
    def is_reciprocal(self) -> bool:
        return self in RECIPROCAL_UNITS

    @property
    def is_base(self) -> bool:
        return self is BASE_UNIT


BASE_UNIT = EnergyUnit.ELECTRON_VOLT

# Wavelength and period scale inversely with energy.
RECIPROCAL_UNITS: frozenset[EnergyUnit] = frozenset({EnergyUnit.METER, EnergyUnit.SECOND})

UNIT_ABBR: MappingProxyType[EnergyUnit, str] = MappingProxyType(
    {
        EnergyUnit.ELECTRON_VOLT: "eV",
        EnergyUnit.CALORIE_PER_MOLE: "Cal/mol",
        EnergyUnit.JOULE_PER_MOLE: "J/mol",
        EnergyUnit.KELVIN: "K",
        EnergyUnit.HARTREE: "Ha",
        EnergyUnit.WAVENUMBER: "cm-1",
        EnergyUnit.METER: "m",
        EnergyUnit.HERTZ: "Hz",
        EnergyUnit.SECOND: "s",
    }
)

UNIT_RATIO: MappingProxyType[EnergyUnit, float] = MappingProxyType(
    {
        EnergyUnit.ELECTRON_VOLT: 1.0,
        EnergyUnit.CALORIE_PER_MOLE: 1.60217733 * 6.0223 * 1e4 / 4.184,
        EnergyUnit.JOULE_PER_MOLE: 1.60217733 * 6.0223 * 1e4,
        EnergyUnit.KELVIN: 1.160451812e4,
        EnergyUnit.HARTREE: 1.0 / 27.2114,
        EnergyUnit.WAVENUMBER: 8065.73,
        EnergyUnit.METER: 1.23984193e-6,
        EnergyUnit.HERTZ: 2.417989242e14,
        EnergyUnit.SECOND: 1.0 / 2.417989242e14,
    }
)


# Parse literals in priority order: spelled-out names first, then symbols.
UNIT_FULL_NAMES: tuple[tuple[str, EnergyUnit], ...] = (
    ("ElectronVolt", EnergyUnit.ELECTRON_VOLT),
    ("Calorie/mol", EnergyUnit.CALORIE_PER_MOLE),
    ("Joule/mol", EnergyUnit.JOULE_PER_MOLE),
    ("Kelvin", EnergyUnit.KELVIN),
    ("Hartree", EnergyUnit.HARTREE),
    ("Cm-1", EnergyUnit.WAVENUMBER),
    ("Meter", EnergyUnit.METER),
    ("Hertz", EnergyUnit.HERTZ),
    ("Second", EnergyUnit.SECOND),
)

UNIT_ABBREVIATIONS: tuple[tuple[str, EnergyUnit], ...] = tuple(
    (UNIT_ABBR[u], u) for u in EnergyUnit
)

UNIT_LITERALS: tuple[tuple[str, EnergyUnit], ...] = UNIT_FULL_NAMES + UNIT_ABBREVIATIONS
