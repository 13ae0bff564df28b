"""
Lander Descent Simulation - Vehicle

This module implements a lander and its run loop:
- Thrust command validation
- Fixed-timestep integration (explicit Euler, see integrators)
- Controller polling once per step
- Observer notification with an immutable snapshot
- Run / pause / resume / stop lifecycle (cooperative flags)
- Fitness of the current state

The run loop either blocks the caller (run) or lives on its own daemon thread
(start). Simulated time always advances by config.dt per step; the wall-clock
delay between steps only paces the loop for a viewer.
"""

from enum import Enum, auto
import logging
import math
import threading
import time
from typing import List, Optional, Protocol, Tuple

from . import constants as C
from .config import SimulationConfig, create_default_config
from .control import ControlPolicy, ControllerError, Observation
from .dynamics import terminal_velocity
from .environment import Environment
from .fitness import compute_fitness, fitness_breakdown
from .integrators import integrate
from .specs import VehicleSpecification
from .state import VehicleState, VehicleSnapshot
from .types import FitnessBreakdown, StepTrace
from .validation import (
    LifecycleError,
    ValidationError,
    check_initial_conditions,
    is_thrust_command_valid,
)

# Configure module logger
logger = logging.getLogger(__name__)


class RunStatus(Enum):
    CREATED = auto()    # reset, not yet running
    RUNNING = auto()
    PAUSED = auto()
    LANDED = auto()     # height reached zero (landing or crash)
    STOPPED = auto()    # stopped externally or by the time limit


class VehicleObserver(Protocol):
    """Receives one notification per simulation step."""

    def on_step_completed(self, landed: bool, snapshot: VehicleSnapshot) -> None:
        ...


class Vehicle:
    """A lander descending under a controller's thrust commands."""

    def __init__(self, environment: Environment, policy: ControlPolicy,
                 specs: VehicleSpecification,
                 delay: Optional[float] = None,
                 height: Optional[float] = None,
                 speed: Optional[float] = None,
                 fuel: Optional[float] = None,
                 thrust_left: float = 0.0,
                 thrust_right: float = 0.0,
                 config: Optional[SimulationConfig] = None):
        """
        Create a lander.

        Height, speed and fuel default to the specification's start
        conditions; overrides apply to the first run only, reset() always
        restores the defaults.

        Args:
            environment: The planet we are landing on
            policy: Controls the thrust to land the lander safely
            specs: Specifications of this lander
            delay: Wall-clock time between steps (s), defaults to config.delay
            height: Initial height above ground (m)
            speed: Initial speed of descent (m/s)
            fuel: Initial amount of fuel (kg)
            thrust_left: Initial left thrust (N)
            thrust_right: Initial right thrust (N)
            config: Run configuration

        Raises:
            ValidationError: If the initial conditions are invalid
        """
        self.config = config if config is not None else create_default_config()
        self.delay = self.config.delay if delay is None else float(delay)
        if self.delay < 0:
            raise ValidationError(f"delay must be non-negative, got {self.delay}")

        self._environment = environment
        self._policy = policy
        self._specs = specs

        self._max_speed = terminal_velocity(environment, specs)

        if height is None:
            height = specs.start_height
        if speed is None:
            speed = C.INITIAL_SPEED_FRACTION * self._max_speed
        if fuel is None:
            fuel = specs.fuel_capacity
        check_initial_conditions(height, fuel, specs.fuel_capacity)

        self._max_height = float(height)
        self._state = VehicleState(height=float(height), speed_y=float(speed),
                                   fuel=float(fuel))
        if not self.request_thrust(thrust_left, thrust_right):
            raise ValidationError(
                f"Initial thrust ({thrust_left}, {thrust_right}) rejected"
            )

        self._observers: List[VehicleObserver] = []
        self.last_trace: Optional[StepTrace] = None

        self._status = RunStatus.CREATED
        self._running = False
        self._paused = False
        self._resume_event = threading.Event()
        self._resume_event.set()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the lander to starting condition.

        Stops an active run first. The planet's turbulence memory is cleared
        as well.

        Args:
            seed: Forwarded to Environment.reset for reproducible turbulence
        """
        if self._running:
            self.stop()
            self.join()

        self._state = VehicleState(
            height=self._specs.start_height,
            speed_y=C.INITIAL_SPEED_FRACTION * self._max_speed,
            fuel=self._specs.fuel_capacity,
        )
        self._environment.reset(seed)
        with self._lock:
            self._status = RunStatus.CREATED
        self.last_trace = None

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, ob: VehicleObserver) -> None:
        self._observers.append(ob)

    def remove_observer(self, ob: VehicleObserver) -> None:
        if ob in self._observers:
            self._observers.remove(ob)

    @property
    def observers(self) -> Tuple[VehicleObserver, ...]:
        return tuple(self._observers)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> RunStatus:
        """
        Run the lander until it lands or is stopped, blocking the caller.

        Returns:
            Final RunStatus (LANDED or STOPPED)

        Raises:
            LifecycleError: If already running or already on the ground
        """
        self._begin_run()
        self._loop()
        return self._status

    def start(self) -> threading.Thread:
        """Run the lander in its own thread."""
        self._begin_run()
        self._thread = threading.Thread(target=self._loop, name="lander-run", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for a run started with start() to finish."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._paused = False
            self._resume_event.set()

    def pause(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._paused = True
            self._resume_event.clear()
            self._status = RunStatus.PAUSED

    def resume(self) -> None:
        with self._lock:
            if not self._paused:
                return
            self._paused = False
            self._resume_event.set()
            if self._running:
                self._status = RunStatus.RUNNING

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def status(self) -> RunStatus:
        return self._status

    def _begin_run(self) -> None:
        with self._lock:
            if self._running:
                raise LifecycleError("Lander is already running")
            if self._state.height == 0.0:
                raise LifecycleError("Lander is on the ground; call reset() first")
            self._running = True
            self._paused = False
            self._resume_event.set()
            self._status = RunStatus.RUNNING

        logger.debug(f"Run started: {self._state}")

    def _loop(self) -> None:
        max_time = self.config.max_time
        # pause() and resume() may run on other threads; the terminal status
        # is only written under the lock, together with clearing _running
        final = RunStatus.STOPPED
        try:
            while self._running:
                if self._paused:
                    self._resume_event.wait(C.PAUSE_POLL_INTERVAL)
                    continue

                if not self.advance():
                    final = RunStatus.LANDED
                    break

                if max_time is not None and self._state.t >= max_time:
                    logger.info(f"Run stopped at time limit t={self._state.t:.2f}s, "
                                f"height={self._state.height:.1f}m")
                    break

                if self.delay > 0:
                    time.sleep(self.delay)
        finally:
            with self._lock:
                self._running = False
                self._paused = False
                self._status = final
                self._resume_event.set()

        logger.debug(f"Run finished ({final.name}): {self._state}")

    # ------------------------------------------------------------------
    # Control and integration
    # ------------------------------------------------------------------

    def request_thrust(self, left: float, right: float) -> bool:
        """
        Set new thrust levels.

        Returns:
            Whether the command was accepted; a rejected command changes nothing
        """
        try:
            left = float(left)
            right = float(right)
        except (TypeError, ValueError):
            return False

        if not is_thrust_command_valid(left, right, self._specs.max_thrust,
                                       self._state.fuel, self._state.height):
            return False

        self._state.thrust_left = left
        self._state.thrust_right = right
        return True

    def advance(self) -> bool:
        """
        One control cycle: ask the controller, step the physics, notify.

        Returns:
            True while the lander is still descending
        """
        self._apply_policy()
        descending = self.step()

        snapshot = self._state.snapshot()
        for ob in list(self._observers):
            ob.on_step_completed(not descending, snapshot)

        return descending

    def step(self, dt: Optional[float] = None) -> bool:
        """
        Update lander position, speed and fuel by one timestep.

        Args:
            dt: Time step (s), defaults to config.dt

        Returns:
            True while still descending, False once landed
        """
        if dt is None:
            dt = self.config.dt

        result = integrate(self._state, self._specs, self._environment, dt)
        self._state = result.state
        self.last_trace = StepTrace(
            fuel_used=result.fuel_used,
            effective_left=result.effective_thrust[0],
            effective_right=result.effective_thrust[1],
            turbulence_x=result.turbulence[0],
            turbulence_y=result.turbulence[1],
        )

        if self.config.debug:
            self._log_step()

        return self._state.height > 0.0

    def _apply_policy(self) -> None:
        """Get a new thrust setting from the controller and try to apply it."""
        observation = Observation.from_state(self._state)
        try:
            left, right = self._policy.get_thrust(observation)
        except ControllerError as e:
            logger.warning(f"Controller failed at t={self._state.t:.2f}s, "
                           f"holding previous thrust: {e}")
            return
        except Exception as e:
            logger.error(f"Unexpected controller error at t={self._state.t:.2f}s, "
                         f"holding previous thrust: {e}", exc_info=True)
            return

        if not self.request_thrust(left, right):
            logger.debug(f"Thrust command ({left}, {right}) rejected at "
                         f"t={self._state.t:.2f}s")

    def _log_step(self) -> None:
        s = self._state
        trace = self.last_trace
        logger.debug(
            f"height: {s.height:.2f}\t"
            f"vertical speed: {s.speed_y:.2f}\t"
            f"location: {s.location:.2f}\t"
            f"horizontal speed: {s.speed_x:.2f}\t"
            f"angle: {math.degrees(s.rotation):.2f}\t"
            f"rotational speed: {math.degrees(s.rotation_speed):.2f}\n"
            f"fuel: {s.fuel:.2f}\t"
            f"left thrust: {s.thrust_left:.2f}\t"
            f"right thrust: {s.thrust_right:.2f}\t"
            f"turbulence: {trace['turbulence_x']:.2f} : {trace['turbulence_y']:.2f}"
        )

    # ------------------------------------------------------------------
    # Fitness
    # ------------------------------------------------------------------

    def fitness(self) -> float:
        """Fitness of the current state; only meaningful once landed."""
        return compute_fitness(self.snapshot(), self._specs)

    def fitness_breakdown(self) -> FitnessBreakdown:
        return fitness_breakdown(self.snapshot(), self._specs)

    # ------------------------------------------------------------------
    # Getters and setters
    # ------------------------------------------------------------------

    def snapshot(self) -> VehicleSnapshot:
        """Immutable copy of the current state."""
        return self._state.snapshot()

    @property
    def policy(self) -> ControlPolicy:
        return self._policy

    @policy.setter
    def policy(self, policy: ControlPolicy) -> None:
        if self._running:
            raise LifecycleError("Cannot change the controller of a running lander")
        self._policy = policy

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def specs(self) -> VehicleSpecification:
        return self._specs

    @property
    def height(self) -> float:
        return self._state.height

    @property
    def speed_y(self) -> float:
        return self._state.speed_y

    @property
    def location(self) -> float:
        return self._state.location

    @property
    def speed_x(self) -> float:
        return self._state.speed_x

    @property
    def rotation(self) -> float:
        return self._state.rotation

    @property
    def rotation_speed(self) -> float:
        return self._state.rotation_speed

    @property
    def fuel(self) -> float:
        return self._state.fuel

    @property
    def thrust_left(self) -> float:
        return self._state.thrust_left

    @property
    def thrust_right(self) -> float:
        return self._state.thrust_right

    @property
    def max_height(self) -> float:
        return self._max_height

    @property
    def max_fuel(self) -> float:
        return self._specs.fuel_capacity

    @property
    def max_speed(self) -> float:
        return self._max_speed

    @property
    def max_thrust(self) -> float:
        return self._specs.max_thrust

    @property
    def safe_landing_speed(self) -> float:
        return self._specs.safe_landing_speed

    def __repr__(self) -> str:
        return f"Vehicle({self._status.name}, {self._state})"
