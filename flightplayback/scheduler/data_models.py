# flightplayback/scheduler/data_models.py
"""
Read-only projections of the engine state for rendering layers.
"""
from dataclasses import dataclass

from ..geometry.coordinates import haversine_distance_nm
from ..geometry.data_models import Position
from ..phases.constants import EnrouteConstants, LandingConstants
from ..phases.data_models import FlightPhase, PhaseState
from ..snapshot.data_models import SimulationSnapshot


@dataclass(frozen=True)
class SimulationOutput:
    phase: FlightPhase
    progress: float
    position: Position
    altitude_ft: float
    heading_true: float
    ground_speed_kts: float
    indicated_airspeed_kts: float
    vertical_speed_fpm: float
    distance_flown_nm: float
    distance_remaining_nm: float
    time_elapsed_min: float
    time_remaining_min: float
    is_playing: bool
    is_paused: bool
    playback_speed: float


@dataclass(frozen=True)
class PhaseTransition:
    """A phase change and the simulated time at which it happened."""
    phase: FlightPhase
    total_elapsed_sec: float


def distance_remaining_nm(state: PhaseState, snapshot: SimulationSnapshot) -> float:
    """Distance still to fly to the arrival threshold; zero once on the ground."""
    if state.phase >= FlightPhase.LANDING:
        return 0.0

    position = state.position
    arrival = snapshot.arrival
    direct = haversine_distance_nm(position.lat, position.lon, arrival.threshold_lat, arrival.threshold_lon)
    if state.phase >= FlightPhase.APPROACH:
        return direct
    if state.phase == FlightPhase.DESCENT and direct < EnrouteConstants.DIRECT_TO_THRESHOLD_NM:
        return direct

    route = snapshot.route
    index = min(max(1, state.current_waypoint_index), len(route.waypoints) - 1)
    waypoint = route.waypoints[index]
    to_waypoint = haversine_distance_nm(position.lat, position.lon, waypoint.lat, waypoint.lon)
    return to_waypoint + route.remaining_distance_nm[index]


def _time_remaining_min(state: PhaseState, snapshot: SimulationSnapshot, remaining_nm: float) -> float:
    if state.phase == FlightPhase.COMPLETE:
        return 0.0
    if state.phase == FlightPhase.TAXI_IN:
        return max(LandingConstants.TAXI_IN_DURATION_SEC - state.phase_elapsed_sec, 0.0) / 60
    if state.ground_speed_kts > 0:
        return remaining_nm / state.ground_speed_kts * 60
    return max(snapshot.route.estimated_time_min - state.total_elapsed_sec / 60, 0.0)


def to_simulation_output(state: PhaseState, snapshot: SimulationSnapshot) -> SimulationOutput:
    remaining = distance_remaining_nm(state, snapshot)
    flown = state.distance_along_route_nm

    if state.phase == FlightPhase.COMPLETE:
        progress = 1.0
    elif flown + remaining > 0:
        progress = flown / (flown + remaining)
    else:
        progress = 0.0

    return SimulationOutput(
        phase=state.phase,
        progress=progress,
        position=state.position,
        altitude_ft=state.altitude_ft,
        heading_true=state.heading_true,
        ground_speed_kts=state.ground_speed_kts,
        indicated_airspeed_kts=state.indicated_airspeed_kts,
        vertical_speed_fpm=state.vertical_speed_fpm,
        distance_flown_nm=flown,
        distance_remaining_nm=remaining,
        time_elapsed_min=state.total_elapsed_sec / 60,
        time_remaining_min=_time_remaining_min(state, snapshot, remaining),
        is_playing=state.is_playing,
        is_paused=state.is_paused,
        playback_speed=state.playback_speed,
    )
