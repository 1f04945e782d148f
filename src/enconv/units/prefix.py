"""Metric scale prefixes (atto .. exa).

The enum value is the decimal exponent, so prefixes compare by magnitude.
Scale factors come from an explicit literal table rather than ``10 ** n``
to keep them bit-identical to the documented constants.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType


class ScalePrefix(IntEnum):
    ATTO = -18
    FEMTO = -15
    PICO = -12
    NANO = -9
    MICRO = -6
    MILLI = -3
    ONE = 0
    KILO = 3
    MEGA = 6
    GIGA = 9
    TERA = 12
    PETA = 15
    EXA = 18

    @property
    def scale(self) -> float:
        return PREFIX_SCALE[self]

    @property
    def abbr(self) -> str:
        return PREFIX_ABBR[self]

    @property
    def full_name(self) -> str:
        return self.name.capitalize()


PREFIX_SCALE: MappingProxyType[ScalePrefix, float] = MappingProxyType(
    {
        ScalePrefix.ATTO: 1e-18,
        ScalePrefix.FEMTO: 1e-15,
        ScalePrefix.PICO: 1e-12,
        ScalePrefix.NANO: 1e-9,
        ScalePrefix.MICRO: 1e-6,
        ScalePrefix.MILLI: 1e-3,
        ScalePrefix.ONE: 1.0,
        ScalePrefix.KILO: 1e3,
        ScalePrefix.MEGA: 1e6,
        ScalePrefix.GIGA: 1e9,
        ScalePrefix.TERA: 1e12,
        ScalePrefix.PETA: 1e15,
        ScalePrefix.EXA: 1e18,
    }
)

PREFIX_ABBR: MappingProxyType[ScalePrefix, str] = MappingProxyType(
    {
        ScalePrefix.ATTO: "a",
        ScalePrefix.FEMTO: "f",
        ScalePrefix.PICO: "p",
        ScalePrefix.NANO: "n",
        ScalePrefix.MICRO: "μ",
        ScalePrefix.MILLI: "m",
        ScalePrefix.ONE: "",
        ScalePrefix.KILO: "K",
        ScalePrefix.MEGA: "M",
        ScalePrefix.GIGA: "G",
        ScalePrefix.TERA: "T",
        ScalePrefix.PETA: "P",
        ScalePrefix.EXA: "E",
    }
)


# Parse literals, tried strictly in this order. Full names come before
# abbreviations, and within one prefix the longer literal comes first
# ("Mi" before "M"). Matching is case-sensitive: "m" is milli, "M" is mega.
# ONE has no literal; an absent prefix is handled by the quantity grammar.
PREFIX_FULL_NAMES: tuple[tuple[str, ScalePrefix], ...] = (
    ("atto", ScalePrefix.ATTO),
    ("Atto", ScalePrefix.ATTO),
    ("femto", ScalePrefix.FEMTO),
    ("Femto", ScalePrefix.FEMTO),
    ("pico", ScalePrefix.PICO),
    ("Pico", ScalePrefix.PICO),
    ("nano", ScalePrefix.NANO),
    ("Nano", ScalePrefix.NANO),
    ("μ", ScalePrefix.MICRO),
    ("micro", ScalePrefix.MICRO),
    ("Micro", ScalePrefix.MICRO),
    ("milli", ScalePrefix.MILLI),
    ("Milli", ScalePrefix.MILLI),
    ("kilo", ScalePrefix.KILO),
    ("Kilo", ScalePrefix.KILO),
    ("mega", ScalePrefix.MEGA),
    ("Mega", ScalePrefix.MEGA),
    ("giga", ScalePrefix.GIGA),
    ("Giga", ScalePrefix.GIGA),
    ("tera", ScalePrefix.TERA),
    ("Tera", ScalePrefix.TERA),
    ("peta", ScalePrefix.PETA),
    ("Peta", ScalePrefix.PETA),
    ("exa", ScalePrefix.EXA),
    ("Exa", ScalePrefix.EXA),
)

PREFIX_ABBREVIATIONS: tuple[tuple[str, ScalePrefix], ...] = (
    ("a", ScalePrefix.ATTO),
    ("f", ScalePrefix.FEMTO),
    ("p", ScalePrefix.PICO),
    ("n", ScalePrefix.NANO),
    ("Mu", ScalePrefix.MICRO),
    ("mu", ScalePrefix.MICRO),
    ("u", ScalePrefix.MICRO),
    ("m", ScalePrefix.MILLI),
    ("K", ScalePrefix.KILO),
    ("Mi", ScalePrefix.MEGA),
    ("M", ScalePrefix.MEGA),
    ("Gi", ScalePrefix.GIGA),
    ("G", ScalePrefix.GIGA),
    ("Ti", ScalePrefix.TERA),
    ("T", ScalePrefix.TERA),
    ("Pi", ScalePrefix.PETA),
    ("P", ScalePrefix.PETA),
    ("E", ScalePrefix.EXA),
)

PREFIX_LITERALS: tuple[tuple[str, ScalePrefix], ...] = PREFIX_FULL_NAMES + PREFIX_ABBREVIATIONS


# Auto-prefix ladder: the first upper bound the value does not exceed wins.
# Bounds are inclusive, so exactly 1000.0 stays at ONE and exactly 1.0 picks
# MILLI. Anything above the last bound is EXA.
AUTO_PREFIX_LADDER: tuple[tuple[float, ScalePrefix], ...] = (
    (1e-15, ScalePrefix.ATTO),
    (1e-12, ScalePrefix.FEMTO),
    (1e-9, ScalePrefix.PICO),
    (1e-6, ScalePrefix.NANO),
    (1e-3, ScalePrefix.MICRO),
    (1e0, ScalePrefix.MILLI),
    (1e3, ScalePrefix.ONE),
    (1e6, ScalePrefix.KILO),
    (1e9, ScalePrefix.MEGA),
    (1e12, ScalePrefix.GIGA),
    (1e15, ScalePrefix.TERA),
)


def select_prefix(value: float) -> ScalePrefix:
    """Pick the display prefix for a value expressed with prefix ONE."""
    for bound, prefix in AUTO_PREFIX_LADDER:
        if value <= bound:
            return prefix
    return ScalePrefix.EXA
