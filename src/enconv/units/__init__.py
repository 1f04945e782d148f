"""Energy unit conversion core.

Typical use::

    from enconv.units import Quantity, EnergyUnit

    q = Quantity.parse("298K")
    q.to_quantity(EnergyUnit.HERTZ)   # ~6.21 THz
"""

from enconv.units.energy import BASE_UNIT, RECIPROCAL_UNITS, EnergyUnit
from enconv.units.parser import ParseError, parse_number, parse_prefix, parse_unit
from enconv.units.prefix import ScalePrefix, select_prefix
from enconv.units.quantity import ConversionDomainError, Quantity, parse_quantity

__all__ = [
    "BASE_UNIT",
    "RECIPROCAL_UNITS",
    "ConversionDomainError",
    "EnergyUnit",
    "ParseError",
    "Quantity",
    "ScalePrefix",
    "parse_number",
    "parse_prefix",
    "parse_quantity",
    "parse_unit",
    "select_prefix",
]
