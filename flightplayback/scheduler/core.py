# flightplayback/scheduler/core.py
import logging
import math
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from ..phases.data_models import FlightPhase, PhaseState, create_initial_phase_state
from ..phases.takeoff import is_takeoff_phase, advance_takeoff_phase
from ..phases.enroute import is_enroute_phase, advance_enroute_phase
from ..phases.landing import is_landing_phase, advance_landing_phase
from ..snapshot.data_models import SimulationSnapshot
from .config import SimulationConfig
from .data_models import SimulationOutput, PhaseTransition, to_simulation_output
from .exceptions import EngineNotReadyError, PhaseOwnershipError

logger = logging.getLogger(__name__)

PhaseAdvancer = Callable[[PhaseState, SimulationSnapshot, float], Optional[PhaseState]]

_PHASE_MODULES: Tuple[Tuple[Callable[[FlightPhase], bool], PhaseAdvancer], ...] = (
    (is_takeoff_phase, advance_takeoff_phase),
    (is_enroute_phase, advance_enroute_phase),
    (is_landing_phase, advance_landing_phase),
)

# Sub-step deltas within this tolerance of a whole step count round down
_STEP_EPSILON = 1e-9


def _build_phase_owners() -> Dict[FlightPhase, PhaseAdvancer]:
    """Maps every phase to the one module that owns it, or raises PhaseOwnershipError."""
    owners: Dict[FlightPhase, PhaseAdvancer] = {}
    contested = []
    for owns, advancer in _PHASE_MODULES:
        for phase in FlightPhase:
            if not owns(phase):
                continue
            if phase in owners:
                contested.append(phase)
            owners[phase] = advancer
    if contested:
        raise PhaseOwnershipError(contested, message="Phases claimed by more than one module")
    orphaned = [phase for phase in FlightPhase if phase not in owners]
    if orphaned:
        raise PhaseOwnershipError(orphaned, message="Phases owned by no module")
    return owners


PHASE_OWNERS = _build_phase_owners()


def advance_state(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    """
    Advances the flight by one physics step of dt simulated seconds.

    Stopped, paused and completed flights are returned unchanged, as is any
    step of zero or negative length.
    """
    if not state.is_playing or state.is_paused or state.phase == FlightPhase.COMPLETE or dt <= 0:
        return state

    advancer = PHASE_OWNERS.get(state.phase)
    new_state = advancer(state, snapshot, dt) if advancer else None
    if new_state is None:
        logger.warning(f"No phase module advanced phase {state.phase!r}; holding state.")
        return state
    return new_state


class SimulationEngine:
    """
    Owns the canonical PhaseState for one loaded snapshot and exposes the
    playback controls. The host drives time through tick() or advance();
    nothing runs in the background.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self._snapshot: Optional[SimulationSnapshot] = None
        self._state: Optional[PhaseState] = None
        self._listeners: List[Callable[[SimulationOutput], None]] = []
        self._history: List[PhaseTransition] = []

    # --- Accessors ---

    @property
    def snapshot(self) -> Optional[SimulationSnapshot]:
        return self._snapshot

    @property
    def state(self) -> Optional[PhaseState]:
        return self._state

    @property
    def phase_history(self) -> Tuple[PhaseTransition, ...]:
        """Every phase entered since the last load or reset, in order."""
        return tuple(self._history)

    def output(self) -> SimulationOutput:
        state = self._require_state("read output")
        return to_simulation_output(state, self._snapshot)

    # --- Playback Controls ---

    def load_snapshot(self, snapshot: SimulationSnapshot) -> None:
        self._snapshot = snapshot
        self._reset(self.config.default_playback_speed)
        departure = snapshot.departure
        logger.info(f"Snapshot loaded: lined up on {departure.airport_icao} RWY {departure.runway_designator} "
                    f"(heading {departure.runway_heading_true:.1f}).")

    def play(self) -> None:
        state = self._require_state("play")
        if state.phase == FlightPhase.COMPLETE:
            logger.info("Flight already complete; stop() to replay.")
            return
        if state.phase == FlightPhase.LINEUP:
            state = replace(state, phase=FlightPhase.TAKEOFF_ROLL, phase_elapsed_sec=0.0)
            self._record_transition(state)
            logger.info("Playback started: brakes released.")
        self._commit(replace(state, is_playing=True, is_paused=False))

    def pause(self) -> None:
        state = self._require_state("pause")
        if not state.is_paused:
            self._commit(replace(state, is_paused=True))

    def resume(self) -> None:
        state = self._require_state("resume")
        if state.is_paused:
            self._commit(replace(state, is_paused=False))

    def stop(self) -> None:
        """Discards the flight and lines up on the departure runway again."""
        self._require_state("stop")
        self._reset(self.config.default_playback_speed)
        logger.info("Playback stopped: reset to lineup.")

    def set_speed(self, multiplier: float) -> float:
        """Sets the playback multiplier, clamped to the configured range. Returns the applied value."""
        state = self._require_state("set speed")
        if math.isnan(multiplier):
            raise ValueError("Playback speed must be a number")
        speed = min(max(multiplier, self.config.min_playback_speed), self.config.max_playback_speed)
        logger.debug(f"Playback speed set to {speed}x (requested {multiplier}).")
        self._commit(replace(state, playback_speed=speed))
        return speed

    def subscribe(self, listener: Callable[[SimulationOutput], None]) -> Callable[[], None]:
        """Registers a listener for every new output. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    # --- Time ---

    def tick(self, wall_delta_sec: float) -> SimulationOutput:
        """
        Advances by one render frame. The wall-clock delta is clamped to
        [0, max_frame_delta_sec] so that a stalled frame cannot jump the flight,
        then scaled by the playback speed and the time scale.
        """
        state = self._require_state("tick")
        wall_delta = min(max(wall_delta_sec, 0.0), self.config.max_frame_delta_sec)
        return self.advance(wall_delta * state.playback_speed * self.config.time_scale)

    def advance(self, sim_delta_sec: float) -> SimulationOutput:
        """
        Advances by an explicit number of simulated seconds, split into equal
        physics sub-steps no longer than max_physics_step_sec. The sub-step count
        depends only on the delta, so equal inputs give identical trajectories.
        """
        state = self._require_state("advance")
        if sim_delta_sec <= 0:
            return self.output()

        steps = max(1, math.ceil(sim_delta_sec / self.config.max_physics_step_sec - _STEP_EPSILON))
        step = sim_delta_sec / steps
        for _ in range(steps):
            new_state = advance_state(state, self._snapshot, step)
            if new_state is state:
                break
            if new_state.phase != state.phase:
                self._log_transition(state, new_state)
            state = new_state
        return self._commit(state)

    def seek(self, elapsed_sec: float) -> SimulationOutput:
        """
        Replays the flight from lineup in fixed physics steps until the total
        simulated time reaches `elapsed_sec` or the flight completes. The result
        is left paused; playback speed is preserved.
        """
        current = self._require_state("seek")
        speed = current.playback_speed
        self._reset(speed, notify=False)
        if elapsed_sec <= 0:
            return self._commit(self._state)

        state = replace(self._state, phase=FlightPhase.TAKEOFF_ROLL, is_playing=True, is_paused=False)
        self._record_transition(state)
        max_step = self.config.max_physics_step_sec
        while state.phase != FlightPhase.COMPLETE:
            remaining = elapsed_sec - state.total_elapsed_sec
            if remaining <= _STEP_EPSILON:
                break
            new_state = advance_state(state, self._snapshot, min(max_step, remaining))
            if new_state is state:
                break
            if new_state.phase != state.phase:
                self._record_transition(new_state)
            state = new_state

        logger.debug(f"Seeked to T+{state.total_elapsed_sec:.1f}s ({state.phase.name}).")
        if state.phase != FlightPhase.COMPLETE:
            state = replace(state, is_paused=True)
        return self._commit(state)

    # --- Internals ---

    def _require_state(self, operation: str) -> PhaseState:
        if self._state is None or self._snapshot is None:
            raise EngineNotReadyError(operation)
        return self._state

    def _reset(self, playback_speed: float, notify: bool = True) -> None:
        self._history = []
        state = create_initial_phase_state(self._snapshot, playback_speed=playback_speed)
        self._record_transition(state)
        if notify:
            self._commit(state)
        else:
            self._state = state

    def _record_transition(self, state: PhaseState) -> None:
        self._history.append(PhaseTransition(phase=state.phase, total_elapsed_sec=state.total_elapsed_sec))

    def _log_transition(self, old: PhaseState, new: PhaseState) -> None:
        self._record_transition(new)
        logger.info(f"Phase {old.phase.name} -> {new.phase.name} [{new.phase.category}] "
                    f"at T+{new.total_elapsed_sec:.1f}s (alt {new.altitude_ft:.0f} ft, IAS {new.indicated_airspeed_kts:.0f} kt).")
        if new.phase == FlightPhase.COMPLETE:
            logger.info(f"Simulation complete: {new.distance_along_route_nm:.1f} nm flown "
                        f"in {new.total_elapsed_sec / 60:.1f} min.")

    def _commit(self, state: PhaseState) -> SimulationOutput:
        changed = state is not self._state
        self._state = state
        output = to_simulation_output(state, self._snapshot)
        if changed:
            for listener in list(self._listeners):
                listener(output)
        return output
