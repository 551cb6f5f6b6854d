#!/usr/bin/env python3
"""
Flash process-window CLI

Usage:
    python -m flash_window list
    python -m flash_window run Ti --foil 100 6 --ramp 500
    python -m flash_window run W --wire 250 --gas argon --pressure 10 --json
    python -m flash_window compare --tube 1.0 50
    python -m flash_window curve --foil 100 6 --out ej.png
    python -m flash_window experiments --h 8
"""

from __future__ import annotations

import argparse
import json
import math
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_CONSTANTS, ModelConstants
from .cooling import ConvectionEnvironment, GasEnvironment, describe_environment
from .efield import build_ej_curve
from .experiments import process_map
from .geometry import Foil, Tube, Wire, describe
from .log import configure_logging
from .material import MaterialDatabase, default_database
from .process_window import ProcessParameters, comparison_table, evaluate, evaluate_all

logger = logging.getLogger(__name__)


# ==============================================================================
# Argument → model objects
# ==============================================================================

def _geometry(args: argparse.Namespace):
    if args.wire is not None:
        return Wire(args.wire, gauge_length_mm=args.gauge)
    if args.tube is not None:
        return Tube(args.tube[0], args.tube[1], gauge_length_mm=args.gauge)
    t, w = args.foil if args.foil is not None else (100.0, 6.0)
    return Foil(t, w, gauge_length_mm=args.gauge)


def _params(args: argparse.Namespace) -> ProcessParameters:
    if args.gas is not None:
        env = GasEnvironment(args.gas, args.pressure, args.emissivity)
    else:
        env = ConvectionEnvironment(args.h)
    return ProcessParameters(
        ramp_rate=args.ramp, I_max=args.imax, v_offset_mV=args.voffset, environment=env,
    )


def _database(args: argparse.Namespace) -> MaterialDatabase:
    if getattr(args, "materials", None):
        return MaterialDatabase.from_json(args.materials)
    return default_database()


def _constants(args: argparse.Namespace) -> ModelConstants:
    if getattr(args, "constants", None):
        return ModelConstants.from_json(args.constants)
    return DEFAULT_CONSTANTS


def _json_safe(record: dict) -> dict:
    """inf / nan → None (JSON has no literal for them)"""
    return {
        k: None if isinstance(v, float) and not math.isfinite(v) else v
        for k, v in record.items()
    }


# ==============================================================================
# Commands
# ==============================================================================

def cmd_list(args: argparse.Namespace) -> int:
    db = _database(args)
    print(f"\n  Materials ({len(db)})")
    print(f"  {'='*70}")
    print(f"  {'Key':<4} {'Name':<10} {'rho0':>10} {'rhoM':>10} {'T_m':>6} {'k_th':>6} {'lam':>6}  cal")
    print(f"  {'-'*70}")
    for key, mat in db.items():
        print(f"  {key:<4} {mat.name:<10} {mat.rho0:>10.3e} {mat.rhoM:>10.3e} "
              f"{mat.T_m:>6.0f} {mat.k_th:>6.1f} {mat.lam:>6.0f}  "
              f"{'yes' if mat.is_calibrated else '-'}")
    print()
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    result = evaluate(args.material, _geometry(args), _params(args),
                      db=_database(args), constants=_constants(args))
    if args.json:
        print(json.dumps(_json_safe(result.to_dict()), indent=2))
    else:
        print(result.summary())
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    geom = _geometry(args)
    df = comparison_table(geom, _params(args), db=_database(args),
                          constants=_constants(args), executor=args.executor)
    if args.json:
        print(df.to_json(orient="records", indent=2))
    else:
        print(f"\n  {describe(geom)}")
        print(df.round(3).to_string(index=False))
        print()
    return 0


def cmd_curve(args: argparse.Namespace) -> int:
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    geom = _geometry(args)
    params = _params(args)
    db = _database(args)
    constants = _constants(args)
    keys = args.materials_list or db.keys()
    results = evaluate_all(geom, params, keys, db=db, constants=constants)

    fig, ax = plt.subplots(figsize=(10, 6))
    for key, r in results.items():
        mat = db.get(key)
        curve = build_ej_curve(mat, r.J_loc, constants=constants)
        ax.plot(curve.J, curve.E, '-', color=mat.color, linewidth=2, label=key)
        ax.axhline(r.E_flash, color=mat.color, linestyle=':', linewidth=1, alpha=0.6)
        if r.J_flash > 0:
            ax.plot([r.J_flash], [r.E_flash], 'o', color=mat.color)

    ax.set_xlabel('J [A/mm²]', fontsize=12)
    ax.set_ylabel('E [V/cm]', fontsize=12)
    ax.set_title(f'E(J) to LOC: {describe(geom)}', fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend()
    plt.tight_layout()
    plt.savefig(args.out, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"  Saved: {args.out}")
    return 0


def cmd_experiments(args: argparse.Namespace) -> int:
    db = _database(args)
    params = _params(args)
    points = process_map(params, db=db, constants=_constants(args))
    print(f"\n  Reference experiments ({describe_environment(params.environment)})")
    print(f"  {'='*64}")
    print(f"  {'Label':<8} {'Mat':<4} {'ramp':>6} {'J_LOC':>7} {'N_R':>8} {'E_max':>8} {'E_flash':>8}  obs")
    print(f"  {'-'*64}")
    for p in points:
        print(f"  {p.label:<8} {p.material:<4} {p.ramp_rate:>6.0f} {p.J_loc:>7.1f} "
              f"{p.N_R:>8.3f} {p.E_max:>8.3f} {p.E_flash:>8.3f}  "
              f"{'FLASH' if p.flash else 'LOC only'}")
    print()
    return 0


# ==============================================================================
# Parser
# ==============================================================================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='flash-window',
        description='Electro-thermal flash vs loss-of-cohesion process window',
    )
    p.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    p.add_argument('--materials', default=None, help='material table JSON (default: built-in)')
    p.add_argument('--constants', default=None, help='model constants JSON override')
    sub = p.add_subparsers(dest='cmd', required=True)

    def add_common(sp: argparse.ArgumentParser):
        g = sp.add_mutually_exclusive_group()
        g.add_argument('--foil', nargs=2, type=float, metavar=('T_UM', 'W_MM'),
                       help='foil thickness [um] and width [mm] (default 100 6)')
        g.add_argument('--wire', type=float, metavar='D_UM', help='wire diameter [um]')
        g.add_argument('--tube', nargs=2, type=float, metavar=('ID_MM', 'WALL_UM'),
                       help='tube inner diameter [mm] and wall [um]')
        sp.add_argument('--gauge', type=float, default=20.0, help='gauge length [mm]')
        sp.add_argument('--ramp', type=float, default=500.0, help='ramp rate [A/mm2/min]')
        sp.add_argument('--imax', type=float, default=100.0, help='supply current cap [A]')
        sp.add_argument('--voffset', type=float, default=10.0, help='voltage offset [mV]')

        env = sp.add_mutually_exclusive_group()
        env.add_argument('--h', type=float, default=8.0, help='fixed convection h [W/m2K]')
        env.add_argument('--gas', default=None,
                         help='gas atmosphere (argon, nitrogen, helium, hydrogen, air, forming_gas)')
        sp.add_argument('--pressure', type=float, default=760.0, help='chamber pressure [torr]')
        sp.add_argument('--emissivity', type=float, default=None, help='emissivity override')

    sp_list = sub.add_parser('list', help='list materials')
    sp_list.set_defaults(func=cmd_list)

    sp_run = sub.add_parser('run', help='evaluate one material')
    sp_run.add_argument('material')
    add_common(sp_run)
    sp_run.add_argument('--json', action='store_true')
    sp_run.set_defaults(func=cmd_run)

    sp_cmp = sub.add_parser('compare', help='comparison table over all materials')
    add_common(sp_cmp)
    sp_cmp.add_argument('--executor', choices=['thread', 'process'], default=None)
    sp_cmp.add_argument('--json', action='store_true')
    sp_cmp.set_defaults(func=cmd_compare)

    sp_curve = sub.add_parser('curve', help='plot E(J) curves')
    add_common(sp_curve)
    sp_curve.add_argument('--metals', dest='materials_list', nargs='+', default=None)
    sp_curve.add_argument('--out', default='ej_curve.png')
    sp_curve.set_defaults(func=cmd_curve)

    sp_exp = sub.add_parser('experiments', help='process map of the reference experiments')
    add_common(sp_exp)
    sp_exp.set_defaults(func=cmd_experiments)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        return args.func(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
