"""Lexical parser for energy quantities such as ``298K`` or ``1.5 meV``.

Grammar (ordered choice, case-sensitive)::

    quantity := number ws* prefix ws* unit EOF
              | number ws* unit EOF
    number   := [+-]? digits ('.' digits)? ([eE] [+-]? digits)?

Every sub-parser takes the remaining text and returns ``(value, rest)`` or
raises :class:`ParseError`. Literal tables are tried in their declared
order and the first literal that matches is committed.
"""

from __future__ import annotations

import re
from typing import Sequence, TypeVar

from enconv.units.energy import UNIT_LITERALS, EnergyUnit
from enconv.units.prefix import PREFIX_LITERALS, ScalePrefix


T = TypeVar("T")

_WHITESPACE = " \t\r\n"

_SIGN = re.compile(r"[+-]")
_DIGITS = re.compile(r"[0-9]+")
_FRACTION = re.compile(r"\.[0-9]+")
_EXPONENT = re.compile(r"[eE][+-]?[0-9]+")


class ParseError(ValueError):
    """Input text does not match the quantity grammar.

    ``remainder`` is the part of ``text`` that could not be consumed.
    """

    def __init__(self, message: str, *, text: str = "", remainder: str = ""):
        self.text = text
        self.remainder = remainder
        super().__init__(message)


def _match_literal(text: str, literals: Sequence[tuple[str, T]], what: str) -> tuple[T, str]:
    for literal, value in literals:
        if text.startswith(literal):
            return value, text[len(literal):]
    raise ParseError(f"expected {what} at {text!r}", text=text, remainder=text)


def skip_whitespace(text: str) -> str:
    return text.lstrip(_WHITESPACE)


def parse_prefix(text: str) -> tuple[ScalePrefix, str]:
    """Match a metric prefix at the start of ``text``."""
    return _match_literal(text, PREFIX_LITERALS, "a metric prefix")


def parse_unit(text: str) -> tuple[EnergyUnit, str]:
    """Match an energy unit at the start of ``text``."""
    return _match_literal(text, UNIT_LITERALS, "an energy unit")


def parse_number(text: str) -> tuple[float, str]:
    """Match a signed decimal literal with optional fraction and exponent.

    The recognized pieces are joined back together before ``float()`` sees
    them, so ``float``'s own leniency (``inf``, ``1_000``, ``.5``) never
    applies. An optional piece that is incomplete (``1e`` or ``1.``) is left
    unconsumed.
    """
    pos = 0
    parts: list[str] = []

    m = _SIGN.match(text, pos)
    if m:
        parts.append(m.group())
        pos = m.end()

    m = _DIGITS.match(text, pos)
    if not m:
        raise ParseError(f"expected a number at {text!r}", text=text, remainder=text)
    parts.append(m.group())
    pos = m.end()

    for pattern in (_FRACTION, _EXPONENT):
        m = pattern.match(text, pos)
        if m:
            parts.append(m.group())
            pos = m.end()

    return float("".join(parts)), text[pos:]


def _with_prefix(text: str) -> tuple[tuple[float, ScalePrefix, EnergyUnit], str]:
    number, rest = parse_number(text)
    prefix, rest = parse_prefix(skip_whitespace(rest))
    unit, rest = parse_unit(skip_whitespace(rest))
    return (number, prefix, unit), rest


def _without_prefix(text: str) -> tuple[tuple[float, ScalePrefix, EnergyUnit], str]:
    number, rest = parse_number(text)
    unit, rest = parse_unit(skip_whitespace(rest))
    return (number, ScalePrefix.ONE, unit), rest


def parse_quantity_parts(text: str) -> tuple[float, ScalePrefix, EnergyUnit]:
    """Parse a whole quantity string into ``(number, prefix, unit)``.

    The prefixed form is tried first; if it matches, it is kept even when
    input remains afterwards. The entire input must be consumed.
    """
    try:
        parts, rest = _with_prefix(text)
    except ParseError:
        try:
            parts, rest = _without_prefix(text)
        except ParseError as e:
            raise ParseError(
                f"cannot parse quantity {text!r}: unmatched input {e.remainder!r}",
                text=text,
                remainder=e.remainder,
            ) from None

    if rest:
        raise ParseError(
            f"cannot parse quantity {text!r}: unexpected trailing input {rest!r}",
            text=text,
            remainder=rest,
        )
    return parts
