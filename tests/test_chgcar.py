from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

import enconv.chgcar
from enconv.chgcar import (
    ChargeDensity,
    ChargeType,
    FieldMismatchError,
    FieldReadError,
    FieldWriteError,
    load,
    save,
)


def _header(lattice: float = 4.0) -> list[str]:
    return [
        "Si2 test cell",
        "   1.00000000000000",
        f"     {lattice:.6f}    0.000000    0.000000",
        f"     0.000000    {lattice:.6f}    0.000000",
        f"     0.000000    0.000000    {lattice:.6f}",
        "   Si",
        "     2",
        "Direct",
        "  0.000000  0.000000  0.000000",
        "  0.250000  0.250000  0.250000",
    ]


def _values_lines(values: np.ndarray) -> list[str]:
    flat = values.ravel(order="F")
    return [" ".join(f"{v:.11E}" for v in flat[i:i + 5]) for i in range(0, flat.size, 5)]


def write_chgcar(
    path: Path,
    grid: np.ndarray,
    *,
    magnetization: np.ndarray | None = None,
    lattice: float = 4.0,
    augmentation: bool = True,
) -> Path:
    lines = _header(lattice)
    lines.append("")
    lines.append(" ".join(str(n) for n in grid.shape))
    lines.extend(_values_lines(grid))
    if augmentation:
        lines.append("augmentation occupancies   1   4")
        lines.append("  0.1234567E+00  0.2345678E+00  0.3456789E+00  0.4567890E+00")
        lines.append("augmentation occupancies   2   4")
        lines.append("  0.1234567E+00  0.2345678E+00  0.3456789E+00  0.4567890E+00")
    if magnetization is not None:
        lines.append("  0.000000E+00  0.000000E+00")
        lines.append(" ".join(str(n) for n in magnetization.shape))
        lines.extend(_values_lines(magnetization))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _grid(shape=(3, 4, 5), offset: float = 0.0) -> np.ndarray:
    return np.arange(np.prod(shape), dtype=float).reshape(shape) * 0.5 + offset


def test_read_chgcar_layout(tmp_path: Path):
    g = _grid()
    p = write_chgcar(tmp_path / "CHGCAR", g)

    chg = load(p, ChargeType.CHGCAR)
    assert chg.shape == (3, 4, 5)
    assert not chg.is_spin_polarized
    assert np.allclose(chg.grids[0], g)
    assert chg.structure.species == ["Si"]
    assert chg.structure.counts == [2]
    assert chg.structure.n_atoms == 2
    assert np.allclose(chg.structure.lattice, np.eye(3) * 4.0)


def test_grid_index_order_is_x_fastest(tmp_path: Path):
    g = _grid((2, 3, 4))
    p = write_chgcar(tmp_path / "CHGCAR", g, augmentation=False)
    chg = load(p)
    # value at (x=1, y=0, z=0) is the second number in the file
    assert chg.grids[0][1, 0, 0] == pytest.approx(g.ravel(order="F")[1])


def test_read_spin_polarized(tmp_path: Path):
    g = _grid()
    m = _grid(offset=-1.0)
    p = write_chgcar(tmp_path / "CHGCAR", g, magnetization=m)
    chg = ChargeDensity.from_file(p)
    assert chg.is_spin_polarized
    assert len(chg.grids) == 2
    assert np.allclose(chg.grids[1], m)


def test_write_then_read_keeps_grids(tmp_path: Path):
    g = _grid()
    m = _grid(offset=2.0)
    chg = load(write_chgcar(tmp_path / "CHGCAR", g, magnetization=m))

    out = save(chg, tmp_path / "out" / "CHGCAR.copy")
    assert out.is_file()
    again = load(out)
    assert again.shape == chg.shape
    assert len(again.grids) == 2
    assert np.allclose(again.grids[0], g)
    assert np.allclose(again.grids[1], m)
    assert again.structure.positions == chg.structure.positions
    assert "augmentation" not in out.read_text(encoding="utf-8")


def test_add_sums_elementwise(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid()))
    b = load(write_chgcar(tmp_path / "b", _grid(offset=1.0)))
    total = a + b
    assert np.allclose(total.grids[0], _grid() * 2 + 1.0)
    assert total.structure is a.structure
    # operands are untouched
    assert np.allclose(a.grids[0], _grid())


def test_add_is_commutative(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid()))
    b = load(write_chgcar(tmp_path / "b", _grid(offset=3.0)))
    assert np.allclose((a + b).grids[0], (b + a).grids[0])


def test_scaled_negates(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid(offset=1.0)))
    diff = a + a.scaled(-1.0)
    assert np.allclose(diff.grids[0], 0.0)


def test_add_rejects_different_grid(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid((3, 4, 5))))
    b = load(write_chgcar(tmp_path / "b", _grid((3, 4, 6))))
    with pytest.raises(FieldMismatchError):
        a + b


def test_add_rejects_different_lattice(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid(), lattice=4.0))
    b = load(write_chgcar(tmp_path / "b", _grid(), lattice=4.5))
    with pytest.raises(FieldMismatchError):
        a + b


def test_add_rejects_spin_mixture(tmp_path: Path):
    a = load(write_chgcar(tmp_path / "a", _grid()))
    b = load(write_chgcar(tmp_path / "b", _grid(), magnetization=_grid()))
    with pytest.raises(FieldMismatchError):
        a + b


def test_add_rejects_different_kind(tmp_path: Path):
    p = write_chgcar(tmp_path / "a", _grid(), augmentation=False)
    with pytest.raises(FieldMismatchError):
        load(p, ChargeType.CHGCAR) + load(p, ChargeType.PARCHG)


def test_missing_file_is_read_error(tmp_path: Path):
    with pytest.raises(FieldReadError):
        load(tmp_path / "nope")


def test_truncated_data_is_read_error(tmp_path: Path):
    p = write_chgcar(tmp_path / "CHGCAR", _grid(), augmentation=False)
    lines = p.read_text(encoding="utf-8").splitlines()
    p.write_text("\n".join(lines[:-3]) + "\n", encoding="utf-8")
    with pytest.raises(FieldReadError):
        load(p)


def test_garbage_is_read_error(tmp_path: Path):
    p = tmp_path / "CHGCAR"
    p.write_text("hello\nworld\n", encoding="utf-8")
    with pytest.raises(FieldReadError):
        load(p)


def test_binary_file_is_read_error(tmp_path: Path):
    p = tmp_path / "CHGCAR.gz"
    p.write_bytes(b"\xff\xfe\x00binary")
    with pytest.raises(FieldReadError):
        ChargeDensity.from_file(p)


def test_write_into_a_file_path_fails(tmp_path: Path):
    chg = load(write_chgcar(tmp_path / "CHGCAR", _grid()))
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(FieldWriteError):
        save(chg, blocker / "CHGSUM.vasp")


def test_module_docstring_describes_layout():
    assert enconv.chgcar.__doc__ is not None
    assert "NGX NGY NGZ" in enconv.chgcar.__doc__
