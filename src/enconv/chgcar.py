"""VASP volumetric grid files (CHGCAR / PARCHG / LOCPOT).

Layout
------
A POSCAR-style structure header, one blank line, then one or more data
blocks::

    NGX NGY NGZ
    v v v v v          (NGX*NGY*NGZ values, x runs fastest)
    ...
    augmentation occupancies 1 14   (CHGCAR only, skipped)
    ...
    m1 m2 ... mN                    (spin-polarized: per-atom moments, skipped)
    NGX NGY NGZ                     (second block: magnetization)
    ...

Only the grids are kept. Augmentation data cannot be summed meaningfully,
so files written back by :meth:`ChargeDensity.to_file` carry none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

import numpy as np


log = logging.getLogger(__name__)

_VALUES_PER_LINE = 5


class ChargeType(str, Enum):
    CHGCAR = "chgcar"
    PARCHG = "parchg"
    LOCPOT = "locpot"


class FieldError(RuntimeError):
    """Base error of volumetric field I/O and arithmetic."""


class FieldReadError(FieldError):
    pass


class FieldWriteError(FieldError):
    pass


class FieldMismatchError(FieldError):
    """Two fields live on different grids or lattices."""


@dataclass(frozen=True, eq=False)
class Structure:
    comment: str
    scale: float
    lattice: np.ndarray  # (3, 3), rows are lattice vectors
    species: list[str]
    counts: list[int]
    selective_dynamics: bool
    coord_mode: str  # the literal "Direct" / "Cartesian" line
    positions: list[str] = field(default_factory=list)  # raw lines, kept verbatim

    @property
    def n_atoms(self) -> int:
        return int(sum(self.counts))

    def header_lines(self) -> list[str]:
        lines = [self.comment, f"  {self.scale:.14f}"]
        for row in self.lattice:
            lines.append("  " + " ".join(f"{x:12.6f}" for x in row))
        if self.species:
            lines.append("  " + " ".join(f"{s:>4}" for s in self.species))
        lines.append("  " + " ".join(f"{c:>4d}" for c in self.counts))
        if self.selective_dynamics:
            lines.append("Selective dynamics")
        lines.append(self.coord_mode)
        lines.extend(self.positions)
        return lines


@dataclass(frozen=True, eq=False)
class ChargeDensity:
    kind: ChargeType
    structure: Structure
    grids: list[np.ndarray]

    @property
    def shape(self) -> tuple[int, int, int]:
        ngx, ngy, ngz = self.grids[0].shape
        return int(ngx), int(ngy), int(ngz)

    @property
    def is_spin_polarized(self) -> bool:
        return len(self.grids) > 1

    # ------------------------------------------------------------------ I/O

    @classmethod
    def from_file(cls, path: str | Path, kind: ChargeType | str = ChargeType.CHGCAR) -> "ChargeDensity":
        path = Path(path)
        kind = ChargeType(kind)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FieldReadError(f"cannot read {path}: {e}") from e

        try:
            structure, rest = _parse_structure(text.splitlines())
            grids = _parse_blocks(rest)
        except (ValueError, IndexError) as e:
            raise FieldReadError(f"malformed {kind.value.upper()} file {path}: {e}") from e

        log.debug("Read %s %s: grid=%s blocks=%d", kind.value, path, grids[0].shape, len(grids))
        return cls(kind=kind, structure=structure, grids=grids)

    def to_file(self, path: str | Path) -> Path:
        path = Path(path)
        lines = self.structure.header_lines()
        lines.append("")
        for i, grid in enumerate(self.grids):
            if i > 0:
                lines.append("")
            lines.append(" ".join(f"{n:5d}" for n in grid.shape))
            lines.extend(_format_values(grid.ravel(order="F")))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            raise FieldWriteError(f"cannot write {path}: {e}") from e
        return path

    # ----------------------------------------------------------- arithmetic

    def check_compatible(self, other: "ChargeDensity") -> None:
        if self.kind != other.kind:
            raise FieldMismatchError(f"cannot combine {self.kind.value} with {other.kind.value}")
        if len(self.grids) != len(other.grids):
            raise FieldMismatchError(
                f"block count differs: {len(self.grids)} vs {len(other.grids)} "
                "(mixing spin-polarized and non-polarized data?)"
            )
        if self.shape != other.shape:
            raise FieldMismatchError(f"grid shape differs: {self.shape} vs {other.shape}")
        a = self.structure.lattice * self.structure.scale
        b = other.structure.lattice * other.structure.scale
        if not np.allclose(a, b, rtol=1e-6, atol=1e-8):
            raise FieldMismatchError("lattice vectors differ")

    def __add__(self, other: "ChargeDensity") -> "ChargeDensity":
        if not isinstance(other, ChargeDensity):
            return NotImplemented
        self.check_compatible(other)
        grids = [a + b for a, b in zip(self.grids, other.grids)]
        return replace(self, grids=grids)

    def scaled(self, factor: float) -> "ChargeDensity":
        return replace(self, grids=[g * float(factor) for g in self.grids])


def load(path: str | Path, kind: ChargeType | str = ChargeType.CHGCAR) -> ChargeDensity:
    return ChargeDensity.from_file(path, kind)


def save(density: ChargeDensity, path: str | Path) -> Path:
    return density.to_file(path)


# ---------------------------------------------------------------- parsing


def _is_int(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def _parse_structure(lines: list[str]) -> tuple[Structure, list[str]]:
    comment = lines[0].rstrip()
    scale = float(lines[1].split()[0])
    lattice = np.array([[float(x) for x in lines[i].split()[:3]] for i in (2, 3, 4)], dtype=float)

    i = 5
    tokens = lines[i].split()
    species: list[str] = []
    if not all(_is_int(t) for t in tokens):
        # VASP 5 files name the species on their own line.
        species = tokens
        i += 1
        tokens = lines[i].split()
    counts = [int(t) for t in tokens]
    i += 1

    selective = lines[i].strip()[:1] in ("S", "s")
    if selective:
        i += 1
    coord_mode = lines[i].rstrip()
    i += 1

    n_atoms = sum(counts)
    positions = [ln.rstrip() for ln in lines[i:i + n_atoms]]
    if len(positions) != n_atoms:
        raise ValueError(f"expected {n_atoms} atomic positions, found {len(positions)}")
    for p in positions:
        coords = p.split()[:3]
        if len(coords) != 3:
            raise ValueError(f"bad atomic position line {p.strip()!r}")
        np.array(coords, dtype=float)
    i += n_atoms

    structure = Structure(
        comment=comment,
        scale=scale,
        lattice=lattice,
        species=species,
        counts=counts,
        selective_dynamics=selective,
        coord_mode=coord_mode,
        positions=positions,
    )
    return structure, lines[i:]


def _parse_grid_line(line: str) -> tuple[int, int, int] | None:
    tokens = line.split()
    if len(tokens) != 3 or not all(_is_int(t) for t in tokens):
        return None
    ngx, ngy, ngz = (int(t) for t in tokens)
    return ngx, ngy, ngz


def _parse_blocks(lines: list[str]) -> list[np.ndarray]:
    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i >= len(lines):
        raise ValueError("no volumetric data after the structure header")
    dims = _parse_grid_line(lines[i])
    if dims is None:
        raise ValueError(f"expected grid dimensions, found {lines[i].strip()!r}")

    grids: list[np.ndarray] = []
    while True:
        i += 1
        n = dims[0] * dims[1] * dims[2]
        values: list[str] = []
        while len(values) < n and i < len(lines):
            values.extend(lines[i].split())
            i += 1
        if len(values) < n:
            raise ValueError(f"truncated data: expected {n} values, found {len(values)}")
        data = np.array(values[:n], dtype=float)
        grids.append(data.reshape(dims, order="F"))

        # Skip augmentation / magnetic moment lines up to the next grid line.
        while i < len(lines) and _parse_grid_line(lines[i]) != dims:
            i += 1
        if i >= len(lines):
            return grids


def _format_values(values: np.ndarray) -> list[str]:
    out = []
    for start in range(0, values.size, _VALUES_PER_LINE):
        chunk = values[start:start + _VALUES_PER_LINE]
        out.append(" " + " ".join(f"{v:17.11E}" for v in chunk))
    return out
