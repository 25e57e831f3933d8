# flightplayback/phases/enroute.py
"""
Enroute physics: INITIAL_CLIMB, CLIMB, CRUISE and DESCENT.

The aircraft moves along the great circle toward its steering target (the
current route waypoint, or the arrival threshold once the route is used up or
the threshold is close), while the heading turns toward the target at the
standard rate. Altitude and speed are integrated independently of the lateral
motion.
"""
from dataclasses import replace
from typing import Optional, Tuple

from ..geometry.coordinates import haversine_distance_nm, calculate_bearing
from ..geometry.data_models import Position
from ..geometry.turns import heading_difference
from ..snapshot.data_models import SimulationSnapshot
from .constants import EnrouteConstants
from .data_models import FlightPhase, PhaseState
from .kinematics import approach_value, climb_toward, descend_toward, step_timing, fly_toward

ENROUTE_PHASES = frozenset({
    FlightPhase.INITIAL_CLIMB, FlightPhase.CLIMB, FlightPhase.CRUISE, FlightPhase.DESCENT,
})


def is_enroute_phase(phase: FlightPhase) -> bool:
    return phase in ENROUTE_PHASES


def approach_altitude_ft(snapshot: SimulationSnapshot) -> float:
    """Descent floor: 3000 ft MSL, raised for high fields to keep a minimum clearance."""
    c = EnrouteConstants
    return max(c.APPROACH_ALTITUDE_FT, snapshot.arrival.elevation_ft + c.APPROACH_MIN_FIELD_CLEARANCE_FT)


def top_of_descent_nm(snapshot: SimulationSnapshot) -> float:
    """Distance from the arrival threshold at which the descent begins."""
    c = EnrouteConstants
    altitude_to_lose = max(snapshot.aircraft.cruise_altitude_ft - c.APPROACH_ALTITUDE_FT, 0.0)
    return altitude_to_lose / 1000 * c.TOD_NM_PER_1000_FT + c.TOD_BUFFER_NM


def distance_to_arrival_nm(position: Position, snapshot: SimulationSnapshot) -> float:
    arrival = snapshot.arrival
    return haversine_distance_nm(position.lat, position.lon, arrival.threshold_lat, arrival.threshold_lon)


def _steering_target(state: PhaseState, snapshot: SimulationSnapshot,
                     min_index: int = 0) -> Tuple[int, Position]:
    """
    Returns the (clamped) waypoint index and the point to steer toward. Once the
    last waypoint has been captured the route is exhausted and the arrival
    threshold becomes the target.
    """
    waypoints = snapshot.route.waypoints
    last_index = len(waypoints) - 1
    index = min(max(min_index, state.current_waypoint_index), last_index)
    waypoint = waypoints[index]

    if index == last_index:
        distance = haversine_distance_nm(state.position.lat, state.position.lon, waypoint.lat, waypoint.lon)
        if distance < EnrouteConstants.WAYPOINT_CAPTURE_RADIUS_NM:
            return index, snapshot.arrival.threshold
    return index, Position(lat=waypoint.lat, lon=waypoint.lon)


def _captured_index(position: Position, index: int, snapshot: SimulationSnapshot) -> int:
    """Advances to the next waypoint once inside the capture radius."""
    waypoints = snapshot.route.waypoints
    waypoint = waypoints[index]
    distance = haversine_distance_nm(position.lat, position.lon, waypoint.lat, waypoint.lon)
    if distance < EnrouteConstants.WAYPOINT_CAPTURE_RADIUS_NM:
        return min(index + 1, len(waypoints) - 1)
    return index


def _enroute_step(state: PhaseState, snapshot: SimulationSnapshot, dt: float, index: int,
                  target: Position, speed: float) -> dict:
    """Lateral motion plus the fields every enroute phase updates the same way."""
    position, moved_nm, heading, bank = fly_toward(state, target, speed, dt)
    return {
        'position': position,
        'heading_true': heading,
        'bank_deg': bank,
        'indicated_airspeed_kts': speed,
        'ground_speed_kts': speed,
        'distance_along_route_nm': state.distance_along_route_nm + moved_nm,
        'current_waypoint_index': _captured_index(position, index, snapshot),
    }


def advance_initial_climb(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = EnrouteConstants

    # The first waypoint is the departure end itself; head for the next one.
    index, target = _steering_target(state, snapshot, min_index=1)
    target_speed = min(c.LOW_ALTITUDE_SPEED_LIMIT_KTS, aircraft.cruise_speed_kts)
    speed = approach_value(state.indicated_airspeed_kts, target_speed, c.INITIAL_CLIMB_ACCELERATION_KTS_S * dt)
    altitude = climb_toward(state.altitude_ft, aircraft.cruise_altitude_ft, aircraft.initial_climb_rate_fpm, dt)
    vs = aircraft.initial_climb_rate_fpm if altitude > state.altitude_ft else 0.0

    moved = _enroute_step(state, snapshot, dt, index, target, speed)
    residual = abs(heading_difference(moved['heading_true'],
                                      calculate_bearing(state.position.lat, state.position.lon,
                                                        target.lat, target.lon)))
    established = (residual < c.INITIAL_CLIMB_EXIT_HEADING_DEG
                   and speed >= c.INITIAL_CLIMB_EXIT_SPEED_FRACTION * target_speed)
    next_phase = FlightPhase.CLIMB if established else FlightPhase.INITIAL_CLIMB

    return replace(state, **step_timing(state, next_phase, dt), **moved,
                   altitude_ft=altitude, vertical_speed_fpm=vs)


def _climb_speed_target(altitude_ft: float, cruise_speed_kts: float) -> float:
    c = EnrouteConstants
    if altitude_ft < c.SPEED_LIMIT_ALTITUDE_FT:
        return min(c.LOW_ALTITUDE_SPEED_LIMIT_KTS, cruise_speed_kts)
    return min(c.CLIMB_HIGH_SPEED_CAP_KTS, c.CLIMB_HIGH_SPEED_CRUISE_FRACTION * cruise_speed_kts)


def advance_climb(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = EnrouteConstants

    index, target = _steering_target(state, snapshot)
    target_speed = _climb_speed_target(state.altitude_ft, aircraft.cruise_speed_kts)
    speed = approach_value(state.indicated_airspeed_kts, target_speed, c.CLIMB_ACCELERATION_KTS_S * dt)
    pitch = approach_value(state.pitch_deg, c.CLIMB_PITCH_DEG, c.PITCH_EASE_RATE_DEG_S * dt)

    cruise_altitude = aircraft.cruise_altitude_ft
    altitude = climb_toward(state.altitude_ft, cruise_altitude, aircraft.cruise_climb_rate_fpm, dt)
    if altitude >= cruise_altitude:
        next_phase, altitude, vs = FlightPhase.CRUISE, cruise_altitude, 0.0
    else:
        next_phase, vs = FlightPhase.CLIMB, aircraft.cruise_climb_rate_fpm

    return replace(state, **step_timing(state, next_phase, dt),
                   **_enroute_step(state, snapshot, dt, index, target, speed),
                   altitude_ft=altitude, vertical_speed_fpm=vs, pitch_deg=pitch)


def advance_cruise(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = EnrouteConstants

    index, target = _steering_target(state, snapshot)
    speed = approach_value(state.indicated_airspeed_kts, aircraft.cruise_speed_kts,
                           c.CRUISE_ACCELERATION_KTS_S * dt)
    pitch = approach_value(state.pitch_deg, c.CRUISE_PITCH_DEG, c.PITCH_EASE_RATE_DEG_S * dt)

    moved = _enroute_step(state, snapshot, dt, index, target, speed)
    at_top_of_descent = distance_to_arrival_nm(moved['position'], snapshot) <= top_of_descent_nm(snapshot)
    next_phase = FlightPhase.DESCENT if at_top_of_descent else FlightPhase.CRUISE

    return replace(state, **step_timing(state, next_phase, dt), **moved,
                   altitude_ft=aircraft.cruise_altitude_ft, vertical_speed_fpm=0.0, pitch_deg=pitch)


def advance_descent(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = EnrouteConstants

    index, target = _steering_target(state, snapshot)
    if distance_to_arrival_nm(state.position, snapshot) < c.DIRECT_TO_THRESHOLD_NM:
        target = snapshot.arrival.threshold

    if state.altitude_ft < c.SPEED_LIMIT_ALTITUDE_FT:
        target_speed = min(c.LOW_ALTITUDE_SPEED_LIMIT_KTS, c.DESCENT_LOW_SPEED_CRUISE_FRACTION * aircraft.cruise_speed_kts)
    else:
        target_speed = c.DESCENT_HIGH_SPEED_CRUISE_FRACTION * aircraft.cruise_speed_kts
    speed = approach_value(state.indicated_airspeed_kts, target_speed, c.DESCENT_ACCELERATION_KTS_S * dt)

    floor = approach_altitude_ft(snapshot)
    altitude = descend_toward(state.altitude_ft, floor, aircraft.descent_rate_fpm, dt)
    vs = -aircraft.descent_rate_fpm if altitude < state.altitude_ft else 0.0
    pitch_target = c.DESCENT_PITCH_DEG if vs < 0 else 0.0
    pitch = approach_value(state.pitch_deg, pitch_target, c.PITCH_EASE_RATE_DEG_S * dt)

    moved = _enroute_step(state, snapshot, dt, index, target, speed)
    established = (altitude <= floor
                   and distance_to_arrival_nm(moved['position'], snapshot) < c.APPROACH_ENTRY_NM)
    next_phase = FlightPhase.APPROACH if established else FlightPhase.DESCENT

    return replace(state, **step_timing(state, next_phase, dt), **moved,
                   altitude_ft=altitude, vertical_speed_fpm=vs, pitch_deg=pitch)


_ADVANCERS = {
    FlightPhase.INITIAL_CLIMB: advance_initial_climb,
    FlightPhase.CLIMB: advance_climb,
    FlightPhase.CRUISE: advance_cruise,
    FlightPhase.DESCENT: advance_descent,
}


def advance_enroute_phase(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> Optional[PhaseState]:
    """Advances an enroute phase by dt seconds; None if the phase is not owned here."""
    advancer = _ADVANCERS.get(state.phase)
    if advancer is None:
        return None
    return advancer(state, snapshot, dt)
