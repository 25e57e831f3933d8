# flightplayback/phases/takeoff.py
"""
Takeoff physics: LINEUP, TAKEOFF_ROLL, V1, ROTATE and LIFTOFF.

Motion is one-dimensional along the departure runway's unit vector, and the
heading is pinned to the runway heading throughout. Each step performs at most
one phase transition, so every labelled speed gate is visited even when a large
step would carry the aircraft past several of them.
"""
from dataclasses import replace
from typing import Optional

from ..geometry.constants import GeoConstants
from ..geometry.data_models import Position
from ..geometry.runway import position_on_runway
from ..snapshot.data_models import SimulationSnapshot
from .constants import TakeoffConstants
from .data_models import FlightPhase, PhaseState
from .kinematics import approach_value, trapezoid_distance_ft, step_timing

TAKEOFF_PHASES = frozenset({
    FlightPhase.LINEUP, FlightPhase.TAKEOFF_ROLL, FlightPhase.V1, FlightPhase.ROTATE, FlightPhase.LIFTOFF,
})


def is_takeoff_phase(phase: FlightPhase) -> bool:
    return phase in TAKEOFF_PHASES


def _runway_position(snapshot: SimulationSnapshot, distance_ft: float) -> Position:
    departure = snapshot.departure
    lat, lon = position_on_runway(departure.threshold_lat, departure.threshold_lon,
                                  departure.unit_vector, distance_ft)
    return Position(lat=lat, lon=lon)


def _along_runway(state: PhaseState, snapshot: SimulationSnapshot, dt: float, next_phase: FlightPhase,
                  new_speed: float, **changes) -> PhaseState:
    """Integrates distance along the runway centerline for one step."""
    step_ft = trapezoid_distance_ft(state.indicated_airspeed_kts, new_speed, dt)
    distance_ft = state.distance_along_runway_ft + step_ft
    return replace(
        state,
        **step_timing(state, next_phase, dt),
        position=_runway_position(snapshot, distance_ft),
        heading_true=snapshot.departure.runway_heading_true,
        distance_along_runway_ft=distance_ft,
        distance_along_route_nm=state.distance_along_route_nm + step_ft / GeoConstants.FEET_PER_NAUTICAL_MILE,
        indicated_airspeed_kts=new_speed,
        ground_speed_kts=new_speed,
        bank_deg=0.0,
        **changes,
    )


def advance_lineup(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    """Holds the aircraft stationary on the threshold until play() releases it."""
    departure = snapshot.departure
    return replace(
        state,
        position=departure.threshold,
        heading_true=departure.runway_heading_true,
        altitude_ft=departure.elevation_ft,
        distance_along_runway_ft=0.0,
        indicated_airspeed_kts=0.0,
        ground_speed_kts=0.0,
        vertical_speed_fpm=0.0,
        pitch_deg=0.0,
        bank_deg=0.0,
    )


def advance_takeoff_roll(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    speed = state.indicated_airspeed_kts + aircraft.ground_acceleration_kts_s * dt
    next_phase = FlightPhase.V1 if speed >= aircraft.v1_kts else FlightPhase.TAKEOFF_ROLL
    return _along_runway(state, snapshot, dt, next_phase, speed,
                         altitude_ft=snapshot.departure.elevation_ft, vertical_speed_fpm=0.0)


def advance_v1(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    speed = state.indicated_airspeed_kts + aircraft.ground_acceleration_kts_s * dt
    next_phase = FlightPhase.ROTATE if speed >= aircraft.vr_kts else FlightPhase.V1
    return _along_runway(state, snapshot, dt, next_phase, speed,
                         altitude_ft=snapshot.departure.elevation_ft, vertical_speed_fpm=0.0)


def advance_rotate(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = TakeoffConstants
    acceleration = aircraft.ground_acceleration_kts_s * c.ROTATE_ACCELERATION_FACTOR
    speed = state.indicated_airspeed_kts + acceleration * dt
    pitch = min(state.pitch_deg + aircraft.rotation_pitch_rate_deg_s * dt, c.LIFTOFF_PITCH_DEG)

    lifting_off = pitch >= c.LIFTOFF_PITCH_DEG and speed >= aircraft.v2_kts
    next_phase = FlightPhase.LIFTOFF if lifting_off else FlightPhase.ROTATE
    return _along_runway(state, snapshot, dt, next_phase, speed, pitch_deg=pitch,
                         altitude_ft=snapshot.departure.elevation_ft, vertical_speed_fpm=0.0)


def advance_liftoff(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    c = TakeoffConstants

    pitch = approach_value(state.pitch_deg, aircraft.initial_climb_pitch_deg,
                           aircraft.rotation_pitch_rate_deg_s * dt)
    target_vs = aircraft.initial_climb_rate_fpm
    vs = min(state.vertical_speed_fpm + c.VS_RAMP_RATE_FPM_S * dt, target_vs)
    altitude = state.altitude_ft + vs * dt / 60

    # Speed builds toward V2 + margin but never bleeds off while climbing away.
    speed_cap = aircraft.v2_kts + c.LIFTOFF_SPEED_MARGIN_KTS
    speed = max(state.indicated_airspeed_kts,
                min(state.indicated_airspeed_kts + c.LIFTOFF_ACCELERATION_KTS_S * dt, speed_cap))

    agl = altitude - snapshot.departure.elevation_ft
    climbing_away = agl >= c.INITIAL_CLIMB_AGL_FT and vs >= c.INITIAL_CLIMB_VS_FRACTION * target_vs
    next_phase = FlightPhase.INITIAL_CLIMB if climbing_away else FlightPhase.LIFTOFF
    return _along_runway(state, snapshot, dt, next_phase, speed, pitch_deg=pitch,
                         altitude_ft=altitude, vertical_speed_fpm=vs)


_ADVANCERS = {
    FlightPhase.LINEUP: advance_lineup,
    FlightPhase.TAKEOFF_ROLL: advance_takeoff_roll,
    FlightPhase.V1: advance_v1,
    FlightPhase.ROTATE: advance_rotate,
    FlightPhase.LIFTOFF: advance_liftoff,
}


def advance_takeoff_phase(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> Optional[PhaseState]:
    """Advances a takeoff phase by dt seconds; None if the phase is not owned here."""
    advancer = _ADVANCERS.get(state.phase)
    if advancer is None:
        return None
    return advancer(state, snapshot, dt)
