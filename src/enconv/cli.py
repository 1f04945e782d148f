from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import print
from rich.markup import escape

from enconv.chgcar import ChargeDensity, ChargeType, FieldError, FieldMismatchError, FieldReadError
from enconv.log import setup_logging, timer
from enconv.parallel import map_fallible
from enconv.settings import ConfigurationError, load_settings
from enconv.units import ConversionDomainError, EnergyUnit, ParseError, Quantity
from enconv.version import get_version_info


log = logging.getLogger("enconv")

_RULE = "=" * 80


def _cmd_uc(args: argparse.Namespace) -> None:
    for text in args.input:
        print(escape(f'==================== Processing input "{text}" ===================='))
        q = Quantity.parse(text)
        lhs = q.format(pretty=args.pretty)
        for unit in EnergyUnit:
            try:
                rhs = q.to_quantity(unit).format(pretty=args.pretty)
            except ConversionDomainError as e:
                log.warning("%s", e)
                name = unit.full_name if args.pretty else unit.abbr
                rhs = f"{'undefined':>11} {name}"
            print(escape(f" {lhs} ==  {rhs}"))
        print(_RULE)
        print()


def _load_all(paths: list[Path], kind: ChargeType, n_jobs: int) -> list[ChargeDensity]:
    def _load_one(path: Path) -> ChargeDensity:
        try:
            return ChargeDensity.from_file(path, kind)
        except FieldError as e:
            raise FieldReadError(f"Failed to read {kind.value.upper()} from {path}") from e

    log.info("Reading %d charge densities in parallel...", len(paths))
    return map_fallible(_load_one, paths, n_jobs=n_jobs)


def _sum(paths: list[Path], densities: list[ChargeDensity]) -> ChargeDensity:
    total = densities[0]
    for path, d in zip(paths[1:], densities[1:]):
        try:
            total = total + d
        except FieldMismatchError as e:
            raise FieldMismatchError(f"Cannot add {path} to {paths[0]}") from e
    return total


def _cmd_chgsum(args: argparse.Namespace) -> None:
    paths = [Path(p) for p in args.input]
    kind = ChargeType(args.kind)
    with timer(f"sum {len(paths)} charge densities", log):
        densities = _load_all(paths, kind, args.jobs)
        log.info("Successfully read all %s files. Summing...", kind.value.upper())
        total = _sum(paths, densities)
        log.info("Writing combined charge density to %s", args.output)
        total.to_file(args.output)
    print(f"[green]Wrote:[/green] {escape(str(args.output))}")


def _cmd_chgdiff(args: argparse.Namespace) -> None:
    paths = [Path(p) for p in args.input]
    kind = ChargeType(args.kind)
    with timer("charge density difference", log):
        a, b = _load_all(paths, kind, args.jobs)
        diff = _sum(paths, [a, b.scaled(-1.0)])
        log.info("Writing charge density difference to %s", args.output)
        diff.to_file(args.output)
    print(f"[green]Wrote:[/green] {escape(str(args.output))}")


def _cmd_settings(args: argparse.Namespace) -> None:
    settings = load_settings(args.path)
    print(escape(settings.to_yaml().rstrip()))


def _cmd_version(args: argparse.Namespace) -> None:
    v = get_version_info()
    print(f"[bold]enconv[/bold] {v.package_version}")
    if v.git_commit:
        print(f"git: {v.git_commit}")
    print(f"python: {v.python}")
    print(f"platform: {escape(v.platform)}")


def _add_field_args(p: argparse.ArgumentParser, default_output: str) -> None:
    p.add_argument("-o", "--output", type=Path, default=Path(default_output), help="Output file path")
    p.add_argument(
        "--kind",
        choices=[k.value for k in ChargeType],
        default=ChargeType.CHGCAR.value,
        help="Volumetric file flavour",
    )
    p.add_argument("-j", "--jobs", type=int, default=0, help="Reader threads (0 = auto)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="enconv")
    p.add_argument(
        "--log-level",
        default=None,
        help="CRITICAL|ERROR|WARNING|INFO|DEBUG (or env ENCONV_LOG_LEVEL)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_uc = sub.add_parser(
        "uc",
        help="Conversion between various energy units",
        epilog="Try `enconv uc 298K` to see what happens.",
    )
    p_uc.add_argument("input", nargs="+", help="Energy quantity, e.g. 298K, '1.5 eV', 0.05E2Kelvin")
    p_uc.add_argument("--pretty", action="store_true", help="Spell out prefix and unit names")
    p_uc.set_defaults(func=_cmd_uc)

    p_sum = sub.add_parser("chgsum", help="Sum charge densities: out = in_1 + in_2 + ... + in_n")
    p_sum.add_argument("input", nargs="+", type=Path, help="Input CHGCAR files")
    _add_field_args(p_sum, "CHGSUM.vasp")
    p_sum.set_defaults(func=_cmd_chgsum)

    p_diff = sub.add_parser("chgdiff", help="Charge density difference: out = a - b")
    p_diff.add_argument("input", nargs=2, type=Path, metavar="CHGCAR", help="Minuend and subtrahend")
    _add_field_args(p_diff, "CHGDIFF.vasp")
    p_diff.set_defaults(func=_cmd_chgdiff)

    p_set = sub.add_parser("settings", help="Validate and show the settings file")
    p_set.add_argument("--path", type=Path, default=None, help="Settings file (default ~/.enconv.yaml)")
    p_set.set_defaults(func=_cmd_settings)

    p_ver = sub.add_parser("version", help="Show version info")
    p_ver.set_defaults(func=_cmd_version)
    return p


def _report(e: BaseException) -> None:
    print(f"[red]Error:[/red] {escape(str(e))}")
    cause = e.__cause__
    while cause is not None:
        print(f"[red]  caused by:[/red] {escape(str(cause))}")
        cause = cause.__cause__


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        args.func(args)
    except (ParseError, ConversionDomainError, FieldError, ConfigurationError) as e:
        log.debug("command %s failed", args.cmd, exc_info=True)
        _report(e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
