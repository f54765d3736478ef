#!/usr/bin/env python3
"""
Monte Carlo driver script for eemumu (e+ e- -> mu+ mu-)

Examples:
    python monte_carlo.py --energy 1000 --events 10000
    python monte_carlo.py --energy 500 --events 2000 --seed 42 --plot cos_theta.png
    python monte_carlo.py --energy 1000 --precision decimal --events 50 --scalar
    python monte_carlo.py --energy 1000 --show-kinematics --cos-theta 0.9 --phi 0.785398
"""

import argparse
import logging
import math
import sys
from decimal import Decimal, localcontext

import numpy as np

from eemumu import config
from eemumu.conservation import check_event_kinematics
from eemumu.event_generator import TargetUnreachableError, generate_events
from eemumu.events import event_stats
from eemumu.kinematics import KinematicsError, momenta_dict_from_coords
from eemumu.processes import get_process, list_registered_processes

logger = logging.getLogger("eemumu")

PRECISIONS = {
    "float32": np.float32,
    "float64": float,
    "longdouble": np.longdouble,
    "decimal": Decimal,
}


def parse_energy(raw: str, precision: str):
    """Convert the --energy string to the requested numeric kind."""
    kind = PRECISIONS[precision]
    if kind is Decimal:
        return Decimal(raw)
    if kind is np.longdouble:
        return np.longdouble(raw)
    return kind(float(raw))


def print_kinematics(E_in, cos_theta, phi):
    moms = momenta_dict_from_coords(E_in, cos_theta, phi)
    diag = check_event_kinematics(tuple(moms.values()))

    print("\n📐 CM-frame kinematics")
    print("=" * 60)
    for name, p in moms.items():
        print(f"  {name:4s}: {p}   m = {p.mass}")
    print(f"\nFour-momentum conserved: {diag['conserved']} "
          f"(ΔE = {diag['deltaE']}, Δpz = {diag['deltaPz']})")
    print("=" * 60 + "\n")


def print_event_stats(stats: dict, n_requested: int):
    print("\n📊 Sample Statistics")
    print("=" * 60)
    print(f"Events returned              : {stats['n_events']} (requested {n_requested})")
    print(f"Mean cos(theta)              : {stats['mean_cos_theta']:+.4f}")
    print(f"Forward / backward           : {stats['forward']} / {stats['backward']}")
    print(f"Forward-backward asymmetry   : {stats['forward_backward_asymmetry']:+.4f}")
    print(f"Mean weight (MeV^-2)         : {stats['mean_weight']:.4e}")
    print("=" * 60 + "\n")


def build_parser():
    parser = argparse.ArgumentParser(
        description="eemumu Monte Carlo Event Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  python monte_carlo.py --energy 1000 --events 10000
  python monte_carlo.py --energy 500 --events 2000 --seed 42 --plot cos_theta.png
  python monte_carlo.py --energy 1000 --show-kinematics --cos-theta 0.9 --phi 0.785398"""
    )
    parser.add_argument("--energy", type=str, default=str(config.DEFAULT_ENERGY_MEV),
                        help=f"Beam energy E_in in MeV (default {config.DEFAULT_ENERGY_MEV})")
    parser.add_argument("--events", type=int, default=config.DEFAULT_N_EVENTS,
                        help=f"Number of unweighted events (default {config.DEFAULT_N_EVENTS})")
    parser.add_argument("--chunk-size", type=int, default=config.DEFAULT_CHUNK_SIZE,
                        help=f"Events sampled per batch (default {config.DEFAULT_CHUNK_SIZE})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--max-batches", type=config.parse_optional_int, default=config.DEFAULT_MAX_BATCHES,
                        help="Give up after this many batches, 0 for no limit "
                             f"(default {config.DEFAULT_MAX_BATCHES})")
    parser.add_argument("--exact", action="store_true",
                        help="Truncate to exactly --events instead of keeping the last batch")
    parser.add_argument("--process", choices=sorted(list_registered_processes()),
                        default=config.DEFAULT_PROCESS,
                        help=f"Scattering process (default {config.DEFAULT_PROCESS!r})")
    parser.add_argument("--precision", choices=sorted(PRECISIONS), default="float64",
                        help="Numeric precision of the generation (default float64)")
    parser.add_argument("--decimal-digits", type=int, default=config.DECIMAL_PRECISION,
                        help=f"Digits for --precision decimal (default {config.DECIMAL_PRECISION})")
    parser.add_argument("--scalar", action="store_true",
                        help="Sample event by event instead of vectorized batches")
    parser.add_argument("--show-kinematics", action="store_true",
                        help="Print the four-momenta for --cos-theta/--phi and exit")
    parser.add_argument("--cos-theta", type=str, default="0.9", help="cos(theta) for --show-kinematics")
    parser.add_argument("--phi", type=str, default=str(math.pi / 4), help="phi (rad) for --show-kinematics")
    parser.add_argument("--plot", type=str, help="Save a cos(theta) histogram to this file")
    parser.add_argument("--verbose", action="store_true", help="Show progress output")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    with localcontext() as ctx:
        if args.precision == "decimal":
            ctx.prec = args.decimal_digits
        return run(args)


def run(args):
    """Show kinematics or generate events for parsed command-line arguments."""
    E_in = parse_energy(args.energy, args.precision)

    if args.show_kinematics:
        try:
            print_kinematics(E_in, parse_energy(args.cos_theta, args.precision),
                             parse_energy(args.phi, args.precision))
        except KinematicsError as e:
            logger.error(f"Invalid kinematics: {e}")
            return 1
        return 0

    process = get_process(args.process)

    print("\n" + "=" * 60)
    print("🔥 eemumu Monte Carlo Event Generator")
    print("=" * 60)
    print(f"Process          : {process.name}")
    print(f"Beam Energy      : {E_in} MeV ({args.precision})")
    print(f"Number of Events : {args.events}")
    print(f"Chunk Size       : {args.chunk_size}")
    print(f"Random Seed      : {args.seed if args.seed is not None else 'None'}")
    if args.plot:
        print(f"Plot Output      : {args.plot}")
    print("=" * 60 + "\n")

    try:
        events = generate_events(
            E_in,
            args.events,
            chunk_size=args.chunk_size,
            process=process,
            seed=args.seed,
            max_batches=args.max_batches,
            exact=args.exact,
            vectorized=False if args.scalar else None,
        )
    except (TargetUnreachableError, KinematicsError) as e:
        logger.error(f"Generation failed: {e}")
        return 1

    print("=" * 60)
    print("✅ Generation Complete")
    print("=" * 60)
    print_event_stats(event_stats(events), args.events)

    if args.plot and events:
        from eemumu.plotting import plot_cos_theta_distribution
        plot_cos_theta_distribution(events, process, args.plot)
        print(f"🖼  Saved cos(theta) histogram to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
