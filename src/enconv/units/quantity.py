"""Energy quantity value type: parse, normalize, convert, display.

A quantity moves one way through four forms::

    raw (as parsed) -> normalized (ONE, eV) -> converted (ONE, target)
                    -> displayed (auto prefix, target)

Each step returns a new :class:`Quantity`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from enconv.units.energy import BASE_UNIT, EnergyUnit
from enconv.units.parser import parse_quantity_parts
from enconv.units.prefix import ScalePrefix, select_prefix


class ConversionDomainError(ValueError):
    """A reciprocal unit (wavelength, period) met a zero magnitude."""

    def __init__(self, message: str, quantity: "Quantity | None" = None):
        self.quantity = quantity
        super().__init__(message)


def _reciprocal(ratio: float, q: "Quantity", target: EnergyUnit) -> float:
    if q.number == 0.0:
        raise ConversionDomainError(
            f"cannot convert {q.format().strip()} to {target.full_name}: "
            "zero magnitude has no finite reciprocal",
            quantity=q,
        )
    return ratio / q.number


@dataclass(frozen=True)
class Quantity:
    """``number * prefix.scale`` measured in ``unit``."""

    number: float
    prefix: ScalePrefix = ScalePrefix.ONE
    unit: EnergyUnit = BASE_UNIT

    @classmethod
    def parse(cls, text: str) -> "Quantity":
        """Build a quantity from text; raises :class:`ParseError`."""
        number, prefix, unit = parse_quantity_parts(text)
        return cls(number=number, prefix=prefix, unit=unit)

    @property
    def is_normalized(self) -> bool:
        return self.prefix is ScalePrefix.ONE and self.unit is BASE_UNIT

    def normalize_prefix(self) -> "Quantity":
        return replace(self, number=self.number * self.prefix.scale, prefix=ScalePrefix.ONE)

    def normalize_unit(self) -> "Quantity":
        q = self.normalize_prefix()
        unit = q.unit
        if unit.is_reciprocal:
            number = _reciprocal(unit.ratio, q, BASE_UNIT)
        else:
            number = q.number / unit.ratio
        return replace(q, number=number, unit=BASE_UNIT)

    def normalize(self) -> "Quantity":
        return self.normalize_prefix().normalize_unit()

    def to_normalized_quantity(self, unit: EnergyUnit) -> "Quantity":
        """Express in ``unit`` with prefix ONE."""
        q = self.normalize()
        if unit.is_reciprocal:
            number = _reciprocal(unit.ratio, q, unit)
        else:
            number = q.number * unit.ratio
        return replace(q, number=number, unit=unit)

    def add_metric_prefix(self) -> "Quantity":
        q = self.normalize_prefix()
        prefix = select_prefix(q.number)
        return replace(q, number=q.number / prefix.scale, prefix=prefix)

    def to_quantity(self, unit: EnergyUnit) -> "Quantity":
        """Express in ``unit`` with a readable prefix picked automatically."""
        return self.to_normalized_quantity(unit).add_metric_prefix()

    def conversions(self) -> list["Quantity"]:
        return [self.to_quantity(u) for u in EnergyUnit]

    def format(self, pretty: bool = False) -> str:
        if pretty:
            return f"{self.number:11.6f} {self.prefix.full_name} {self.unit.full_name}"
        return f"{self.number:11.6f} {self.prefix.abbr}{self.unit.abbr}"

    def __str__(self) -> str:
        return self.format()


def parse_quantity(text: str) -> Quantity:
    return Quantity.parse(text)
