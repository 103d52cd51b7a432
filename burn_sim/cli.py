"""
Finite-Burn Simulation - CLI

The single entry point for running an experiment or a strategy sweep,
generating plots, and handling configuration.
"""

import argparse
import logging
import os
import sys

from . import constants as C
from .config import BurnConfig, ConfigurationError
from .guidance import BurnMode, SteeringMode
from .main import run_burn_experiment
from .plotting import generate_all_plots
from .sweep import run_strategy_sweep

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Finite-burn apogee raise vs impulsive Hohmann transfer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--steering",
        choices=[m.value for m in SteeringMode],
        default=SteeringMode.PERPENDICULAR.value,
        help="Steering law for the burn direction"
    )
    parser.add_argument(
        "--burn-mode",
        choices=[m.value for m in BurnMode],
        default=BurnMode.IMPULSE_TRAIN.value,
        help="Apply discrete impulses or a continuous engine thrust"
    )
    parser.add_argument(
        "--burn-time",
        type=float,
        default=C.BURN_DURATION,
        help="Burn duration in world seconds"
    )
    parser.add_argument(
        "--target-radius",
        type=float,
        default=C.TARGET_ORBIT_RADIUS,
        help="Target apogee radius (km)"
    )
    parser.add_argument(
        "--initial-radius",
        type=float,
        default=C.INITIAL_ORBIT_RADIUS,
        help="Circular parking orbit radius (km)"
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=C.APOGEE_TOLERANCE,
        help="Apogee acceptance band below the target (km)"
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=C.DT,
        help="Fixed simulation step (s)"
    )
    parser.add_argument(
        "--max-time",
        type=float,
        default=C.MAX_TIME,
        help="Cancel the burn after this much simulation time (s)"
    )
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="Run every steering/burn mode combination instead of a single run"
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default="plots",
        help="Directory to save output plots"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write the per-tick log to this CSV file"
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip plot generation"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress verbose output"
    )
    return parser.parse_args(argv)


def build_config(args) -> BurnConfig:
    return BurnConfig(
        dt=args.dt,
        max_time=args.max_time,
        steering_mode=args.steering,
        burn_mode=args.burn_mode,
        burn_duration_world_seconds=args.burn_time,
        target_orbit_radius=args.target_radius,
        initial_orbit_radius=args.initial_radius,
        apogee_tolerance=args.tolerance,
        verbose=not args.quiet,
    )


def main(argv=None):
    """Main execution flow."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = parse_args(argv)

    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    try:
        config = build_config(args)

        if args.sweep:
            logger.info("Starting strategy sweep...")
            run_strategy_sweep(config, verbose=not args.quiet)
            return 0

        logger.info("Starting burn experiment...")
        result = run_burn_experiment(config)

        print("\n" + "=" * 60)
        print("EXPERIMENT SUMMARY")
        print("=" * 60)
        print(f"Outcome: {result.report.outcome.name}")
        print(result.report.summary())
        if result.phase_offset_deg is not None:
            print(f"Phase offset vs impulsive reference: {result.phase_offset_deg:.4f} deg")
        print("=" * 60 + "\n")

        if args.csv:
            result.log.to_csv(args.csv)
            print(f">> Saved {args.csv}")

        if not args.no_plots:
            if os.path.isabs(args.output_dir):
                plot_dir = args.output_dir
            else:
                plot_dir = os.path.join(os.getcwd(), args.output_dir)
            logger.info(f"Generating plots in {plot_dir}")
            for path in generate_all_plots(result, plot_dir):
                print(f">> Saved {path}")

        return 0 if not result.report.hyperbolic else 2

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"\n[ERROR] Invalid configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Experiment failed: {e}", exc_info=True)
        print(f"\n[ERROR] Experiment failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
