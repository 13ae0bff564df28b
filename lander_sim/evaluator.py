"""
Lander Descent Simulation - Controller Evaluation

Runs a controller through repeated, independent landings of one lander and
aggregates the fitness of each run into a single score. Turbulence makes each
trial different; seeding the evaluator makes a whole campaign reproducible.

Averaging: the sum of fitness over runs that reached the ground, divided by the
number of trials requested. A run that is stopped before touchdown scores
nothing but still counts.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import constants as C
from .control import ControlPolicy
from .fitness import fitness_breakdown
from .state import VehicleSnapshot
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class TrialResult:
    """Result from a single landing attempt."""
    index: int
    seed: Optional[int]
    landed: bool = False
    fitness: float = 0.0
    steps: int = 0
    time: float = 0.0
    landing_speed: float = 0.0
    location: float = 0.0
    rotation: float = 0.0
    fuel: float = 0.0
    crashed: bool = False
    error: Optional[str] = None


@dataclass
class EvaluationResults:
    """Aggregated results from an evaluation campaign."""
    trials: int
    runs: List[TrialResult] = field(default_factory=list)
    completed: bool = False
    wall_time_s: float = 0.0

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def n_landed(self) -> int:
        return sum(1 for r in self.runs if r.landed)

    @property
    def average_fitness(self) -> float:
        """Landed fitness summed over all runs, divided by requested trials."""
        return sum(r.fitness for r in self.runs if r.landed) / self.trials

    def get_statistic(self, attr: str) -> dict:
        """Compute mean/std/min/max for a scalar attribute across landed runs."""
        values = [getattr(r, attr) for r in self.runs if r.landed]
        if not values:
            return {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
        arr = np.array(values, dtype=float)
        return {
            'mean': float(np.mean(arr)),
            'std': float(np.std(arr)),
            'min': float(np.min(arr)),
            'max': float(np.max(arr)),
        }

    def summary(self) -> str:
        """Return a formatted summary string."""
        lines = [f"Evaluation: {self.n_landed}/{self.trials} landed "
                 f"in {self.wall_time_s:.1f}s, average fitness = {self.average_fitness:.3f}"]
        for attr in ['fitness', 'landing_speed', 'location', 'fuel', 'time']:
            stats = self.get_statistic(attr)
            lines.append(f"  {attr:15s}: mean={stats['mean']:.2f} std={stats['std']:.2f} "
                         f"min={stats['min']:.2f} max={stats['max']:.2f}")
        if not self.completed:
            lines.append("  (aborted before all trials ran)")
        return '\n'.join(lines)


class Evaluator:
    """Tests a controller by running a lander several times."""

    def __init__(self, vehicle: Vehicle, trials: int = C.DEFAULT_TRIALS,
                 seed: Optional[int] = None, debug: bool = False):
        """
        Create a lander evaluator.

        Args:
            vehicle: The lander doing the landing, with its controller set
            trials: Number of trials to run
            seed: Master seed for per-trial turbulence seeds
            debug: Log the fitness of every run
        """
        if trials < 1:
            raise ValueError(f"trials must be at least 1, got {trials}")

        self.vehicle = vehicle
        self.trials = trials
        self.seed = seed
        self.debug = debug

        self._current: Optional[TrialResult] = None
        self._abort = False
        self.results: Optional[EvaluationResults] = None

    def on_step_completed(self, landed: bool, snapshot: VehicleSnapshot) -> None:
        trial = self._current
        if not landed or trial is None or trial.landed:
            return

        breakdown = fitness_breakdown(snapshot, self.vehicle.specs)
        trial.landed = True
        trial.fitness = breakdown['fitness']
        trial.crashed = breakdown['crashed']
        trial.landing_speed = breakdown['speed']
        trial.rotation = breakdown['rotation']
        trial.location = snapshot.location
        trial.fuel = snapshot.fuel
        trial.steps = snapshot.steps
        trial.time = snapshot.t

        if self.debug:
            logger.info(f"Fitness for one run = {trial.fitness}")

    def stop(self) -> None:
        """Abort the campaign; the current run is stopped where it is."""
        self._abort = True
        self.vehicle.stop()

    def run(self) -> EvaluationResults:
        """
        Run every trial in sequence.

        The evaluator observes the lander only while this call is active.

        Returns:
            EvaluationResults with per-trial data
        """
        self.vehicle.add_observer(self)
        try:
            return self._run_trials()
        finally:
            self.vehicle.remove_observer(self)

    def _run_trials(self) -> EvaluationResults:
        rng = np.random.default_rng(self.seed) if self.seed is not None else None
        results = EvaluationResults(trials=self.trials)
        self.results = results
        self._abort = False
        start = time.time()

        for i in range(self.trials):
            if self._abort:
                break

            run_seed = int(rng.integers(0, 2**31)) if rng is not None else None
            trial = TrialResult(index=i, seed=run_seed)
            self._current = trial
            results.runs.append(trial)

            try:
                self.vehicle.reset(seed=run_seed)
                self.vehicle.run()
            except Exception as e:
                logger.error(f"Trial {i} failed: {e}", exc_info=True)
                trial.error = str(e)
                self.vehicle.stop()
                self._abort = True
                break
            finally:
                self._current = None

            if not trial.landed:
                snapshot = self.vehicle.snapshot()
                trial.steps = snapshot.steps
                trial.time = snapshot.t
                logger.info(f"Trial {i} stopped before touchdown at "
                            f"height={snapshot.height:.1f}m; scored 0")

        results.completed = not self._abort and results.n_runs == self.trials
        results.wall_time_s = time.time() - start
        self.vehicle.stop()

        logger.info(f"Evaluation finished: {results.n_landed}/{self.trials} landed, "
                    f"average fitness={results.average_fitness:.3f}")
        return results

    def get_fitness(self) -> float:
        """Average fitness of the last campaign."""
        if self.results is None:
            return 0.0
        return self.results.average_fitness


def evaluate(policy: ControlPolicy, vehicle: Vehicle, trials: int = C.DEFAULT_TRIALS,
             seed: Optional[int] = None) -> float:
    """
    Score a controller on a lander.

    Args:
        policy: The controller under test
        vehicle: The lander (its controller is replaced by `policy`)
        trials: Number of independent landings
        seed: Master seed for reproducible turbulence

    Returns:
        Average fitness over the requested trials
    """
    vehicle.policy = policy
    evaluator = Evaluator(vehicle, trials=trials, seed=seed)
    return evaluator.run().average_fitness
