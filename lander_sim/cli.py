"""
Lander Descent Simulation - CLI

Evaluates a stock controller on the Mars lander and prints the average
fitness. Optionally records one extra descent and plots it.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import constants as C
from .config import SimulationConfig
from .control import create_policy
from .environment import create_mars_environment
from .evaluator import Evaluator
from .specs import create_mars_lander_specs
from .telemetry import TrajectoryLog
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="lander-eval",
        description="Evaluate a lander controller on Mars",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--trials", "-r",
        type=int,
        default=C.CLI_TRIALS,
        help="Number of landings to average over"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Log the fitness of every run and every step of the lander"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Master seed for reproducible turbulence"
    )
    parser.add_argument(
        "--policy",
        choices=["zero", "braking", "steering"],
        default="braking",
        help="Stock controller to evaluate"
    )
    parser.add_argument(
        "--max-time",
        type=float,
        default=None,
        help="Stop a run after this much simulated time (s)"
    )
    parser.add_argument(
        "--plot-dir",
        type=str,
        default=None,
        help="Record one extra descent and save its plots here"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress informational logging"
    )
    args = parser.parse_args(argv)
    if args.trials < 1:
        parser.error(f"--trials must be at least 1, got {args.trials}")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution flow. Returns the process exit status."""
    args = parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    if args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = SimulationConfig(delay=0.0, max_time=args.max_time,
                                  trials=args.trials, seed=args.seed,
                                  debug=args.debug)
        environment = create_mars_environment()
        specs = create_mars_lander_specs()
        policy = create_policy(args.policy, environment, specs)
        vehicle = Vehicle(environment, policy, specs, config=config)

        logger.info(f"Evaluating '{args.policy}' over {config.trials} trials")
        evaluator = Evaluator(vehicle, trials=config.trials, seed=config.seed,
                              debug=config.debug)
        results = evaluator.run()

        if not args.quiet:
            print(results.summary())
        print(f"Average fitness = {results.average_fitness}")

        if args.plot_dir is not None:
            from .plotting import generate_all_plots

            log = TrajectoryLog()
            vehicle.add_observer(log)
            vehicle.reset(seed=config.seed)
            vehicle.run()

            plot_dir = os.path.abspath(args.plot_dir)
            logger.info(f"Generating plots in {plot_dir}")
            saved = generate_all_plots(log, plot_dir)
            print(f"Saved {len(saved)} plots in {plot_dir}")

    except Exception as e:
        logger.error(f"Evaluation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Evaluation failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
