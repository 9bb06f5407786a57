"""
Command-line interface for bolted joint calculations.
"""

import argparse
import json
import logging
import sys
from typing import Dict, Optional

from ..calculator.core import calculate_joint_forces, calculate_stress_area
from ..calculator.output import _finite_or_none, _model_to_dict, format_value, to_json, to_markdown, to_summary
from ..calculator.validation import validate_joint
from ..io.loaders import JointInput, MaterialSpec, ThreadSpec, UndefinedValueError, load_catalogs


def get_version_string() -> str:
    """Installed package version, or the source tree version."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("boltjoint")
    except PackageNotFoundError:
        from .. import __version__
        return __version__


def _pick(catalog: Dict, name: Optional[str], kind: str):
    if name is None:
        return None
    if name not in catalog:
        raise ValueError(
            f"Unknown {kind} '{name}'. Available: {', '.join(catalog)}"
        )
    return catalog[name]


def _print_catalogs(
    threads: Dict[str, ThreadSpec],
    materials: Dict[str, MaterialSpec],
    which: str,
    as_json: bool
) -> None:
    if as_json:
        data = {}
        if which in ("all", "threads"):
            data["threads"] = {name: _model_to_dict(spec) for name, spec in threads.items()}
        if which in ("all", "materials"):
            data["materials"] = {name: _model_to_dict(spec, exclude_unset=True) for name, spec in materials.items()}
        print(json.dumps(data, indent=2))
        return

    if which in ("all", "threads"):
        print("Threads:")
        print(f"  {'Name':<8} {'D [mm]':>8} {'d [mm]':>8} {'P [mm]':>8} {'As [mm²]':>10}")
        for name, spec in threads.items():
            print(
                f"  {name:<8} {format_value(spec.major_diameter_mm, 1):>8} "
                f"{format_value(spec.diameter_mm, 3):>8} {format_value(spec.pitch_mm, 2):>8} "
                f"{format_value(spec.stress_area_mm2, 2):>10}"
            )
    if which == "all":
        print()
    if which in ("all", "materials"):
        print("Materials:")
        print(f"  {'Name':<8} {'σB [MPa]':>9}  Description")
        for name, spec in materials.items():
            strength = spec.sigma_b_mpa
            if strength is None or isinstance(strength, (int, float)):
                strength = format_value(strength, 0)
            print(f"  {name:<8} {strength!s:>9}  {spec.description}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="boltjoint",
        description="Preload, force split and failure checks for an axially loaded bolted joint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Stress area of an M16 (d=16 mm, P=2 mm)
  boltjoint stress-area 16 2

  # Joint with catalog thread and property class
  boltjoint forces --thread M16 --material 8.8 --kb 500 --kc 1500 --preload 75 --force 10

  # Custom values, JSON output
  boltjoint forces --sigma-b 800 --as 157.9 --kb 500 --kc 1500 --preload 75 --force 10 --json

  # Markdown report
  boltjoint forces --thread M12 --material 10.9 --kb 400 --kc 1200 --preload 70 --force 25 --markdown

  # List catalogs (built-in, or from a config file)
  boltjoint catalog
  boltjoint catalog threads --config bolts.json
        """
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f"%(prog)s {get_version_string()}"
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    sa = subparsers.add_parser('stress-area', help='Tensile stress area from diameter and pitch')
    sa.add_argument('d', type=float, help='Diameter basis d (mm)')
    sa.add_argument('P', type=float, help='Thread pitch P (mm)')
    sa.add_argument('--json', action='store_true', help='Print JSON')

    forces = subparsers.add_parser('forces', help='Joint forces, deformations and risk flags')
    forces.add_argument('--thread', type=str, help='Thread name from catalog (e.g. M10)')
    forces.add_argument('--material', type=str, help='Material name from catalog (e.g. 8.8)')
    forces.add_argument('--as', dest='stress_area', type=float, help='Stress area As (mm²), overrides --thread')
    forces.add_argument('--sigma-b', dest='sigma_b', type=float, help='Tensile strength (MPa), overrides --material')
    forces.add_argument('--kb', type=float, required=True, help='Bolt stiffness Kb (kN/mm)')
    forces.add_argument('--kc', type=float, required=True, help='Clamped parts stiffness Kc (kN/mm)')
    forces.add_argument('--preload', type=float, required=True, help='Preload (%% of breaking load)')
    forces.add_argument('--force', type=float, required=True, help='External axial force (kN)')
    forces.add_argument('--config', type=str, help='JSON config with thread/material tables')
    output = forces.add_mutually_exclusive_group()
    output.add_argument('--json', action='store_true', help='Print JSON instead of a summary')
    output.add_argument('--markdown', action='store_true', help='Print a Markdown report')

    catalog = subparsers.add_parser('catalog', help='List thread and material catalogs')
    catalog.add_argument('which', nargs='?', choices=['all', 'threads', 'materials'], default='all')
    catalog.add_argument('--config', type=str, help='JSON config with thread/material tables')
    catalog.add_argument('--json', action='store_true', help='Print JSON')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == 'stress-area':
            stress_area = calculate_stress_area(args.d, args.P)
            if args.json:
                print(json.dumps({"As": _finite_or_none(stress_area)}))
            else:
                print(f"As = {format_value(stress_area, 2, 'mm²')}")
            return 0

        threads, materials = load_catalogs(args.config)

        if args.command == 'catalog':
            _print_catalogs(threads, materials, args.which, args.json)
            return 0

        thread = _pick(threads, args.thread, "thread")
        material = _pick(materials, args.material, "material")
        stress_area = args.stress_area
        if stress_area is None:
            stress_area = (thread or ThreadSpec()).require_stress_area()
        sigma_b = args.sigma_b
        if sigma_b is None:
            sigma_b = (material or MaterialSpec()).require_strength()

        joint = JointInput(
            sigma_b_mpa=sigma_b,
            stress_area_mm2=stress_area,
            kb_kn_per_mm=args.kb,
            kc_kn_per_mm=args.kc,
            preload_percent=args.preload,
            external_force_kn=args.force,
        )
        result = calculate_joint_forces(joint)
        validation = validate_joint(joint, result)

        if args.json:
            print(to_json(result, joint_input=joint, validation=validation))
        elif args.markdown:
            print(to_markdown(result, joint_input=joint, validation=validation))
        else:
            print(to_summary(result))
            for msg in validation.messages:
                print(f"  [{msg.severity.value}] {msg.message}")
        return 0

    except UndefinedValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Hint: use --as / --sigma-b for custom values", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
