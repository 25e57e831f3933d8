# flightplayback/phases/data_models.py
"""
Shared state models for the phase modules and the scheduler.

PhaseState is frozen; every physics step returns a new instance built with
dataclasses.replace, so a state handed to a consumer can never change under it.
"""
from dataclasses import dataclass
from enum import IntEnum

from ..geometry.data_models import Position
from ..snapshot.data_models import SimulationSnapshot


class FlightPhase(IntEnum):
    LINEUP = 0; TAKEOFF_ROLL = 1; V1 = 2; ROTATE = 3; LIFTOFF = 4
    INITIAL_CLIMB = 5; CLIMB = 6; CRUISE = 7; DESCENT = 8
    APPROACH = 9; FINAL = 10; LANDING = 11; TAXI_IN = 12; COMPLETE = 13

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def category(self) -> str:
        """One of 'ground', 'departure', 'enroute' or 'arrival'."""
        if self <= FlightPhase.ROTATE:
            return 'ground'
        if self <= FlightPhase.INITIAL_CLIMB:
            return 'departure'
        if self <= FlightPhase.DESCENT:
            return 'enroute'
        return 'arrival'


_DISPLAY_NAMES = {
    FlightPhase.LINEUP: 'Lined Up',
    FlightPhase.TAKEOFF_ROLL: 'Takeoff Roll',
    FlightPhase.V1: 'V1 - Decision',
    FlightPhase.ROTATE: 'Rotating',
    FlightPhase.LIFTOFF: 'Liftoff',
    FlightPhase.INITIAL_CLIMB: 'Initial Climb',
    FlightPhase.CLIMB: 'Climbing',
    FlightPhase.CRUISE: 'Cruise',
    FlightPhase.DESCENT: 'Descending',
    FlightPhase.APPROACH: 'Approach',
    FlightPhase.FINAL: 'Final Approach',
    FlightPhase.LANDING: 'Landing',
    FlightPhase.TAXI_IN: 'Taxi In',
    FlightPhase.COMPLETE: 'Complete',
}


@dataclass(frozen=True)
class PhaseState:
    """The complete kinematic and playback state at one simulated instant."""
    phase: FlightPhase
    position: Position
    heading_true: float
    altitude_ft: float
    indicated_airspeed_kts: float = 0.0
    ground_speed_kts: float = 0.0
    vertical_speed_fpm: float = 0.0
    pitch_deg: float = 0.0
    bank_deg: float = 0.0
    distance_along_runway_ft: float = 0.0
    # Total ground distance flown since brake release.
    distance_along_route_nm: float = 0.0
    current_waypoint_index: int = 0
    phase_elapsed_sec: float = 0.0
    total_elapsed_sec: float = 0.0
    is_playing: bool = False
    is_paused: bool = False
    playback_speed: float = 1.0


def create_initial_phase_state(snapshot: SimulationSnapshot, playback_speed: float = 1.0) -> PhaseState:
    """A stationary aircraft lined up on the departure threshold."""
    departure = snapshot.departure
    return PhaseState(
        phase=FlightPhase.LINEUP,
        position=departure.threshold,
        heading_true=departure.runway_heading_true,
        altitude_ft=departure.elevation_ft,
        playback_speed=playback_speed,
    )
