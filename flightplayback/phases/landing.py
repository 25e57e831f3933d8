# flightplayback/phases/landing.py
"""
Landing physics: APPROACH, FINAL, LANDING, TAXI_IN and COMPLETE.

APPROACH funnels the aircraft onto the extended centerline, FINAL tracks a
3 degree glideslope down to the threshold, and the rollout phases run
one-dimensionally along the arrival runway until the aircraft is parked.
"""
import math
from dataclasses import replace
from typing import Optional

from ..geometry.constants import GeoConstants
from ..geometry.coordinates import haversine_distance_nm, calculate_bearing, destination_point
from ..geometry.data_models import Position
from ..geometry.runway import position_on_runway
from ..geometry.turns import heading_difference, turn_toward
from ..snapshot.data_models import SimulationSnapshot
from .constants import EnrouteConstants, LandingConstants
from .data_models import FlightPhase, PhaseState
from .kinematics import approach_value, descend_toward, trapezoid_distance_ft, step_timing, fly_toward

LANDING_PHASES = frozenset({
    FlightPhase.APPROACH, FlightPhase.FINAL, FlightPhase.LANDING, FlightPhase.TAXI_IN, FlightPhase.COMPLETE,
})

_TAN_GLIDESLOPE = math.tan(math.radians(LandingConstants.GLIDESLOPE_DEG))


def is_landing_phase(phase: FlightPhase) -> bool:
    return phase in LANDING_PHASES


def glideslope_altitude_ft(distance_nm: float, field_elevation_ft: float) -> float:
    return distance_nm * GeoConstants.FEET_PER_NAUTICAL_MILE * _TAN_GLIDESLOPE + field_elevation_ft


def glideslope_vertical_speed_fpm(ground_speed_kts: float) -> float:
    """Descent rate that holds the glideslope at the given ground speed (negative)."""
    return -ground_speed_kts * GeoConstants.FPM_PER_KNOT * _TAN_GLIDESLOPE


def final_approach_fix(snapshot: SimulationSnapshot) -> Position:
    """A point on the extended centerline, FINAL_APPROACH_FIX_NM before the threshold."""
    arrival = snapshot.arrival
    lat, lon = destination_point(arrival.threshold_lat, arrival.threshold_lon,
                                 (arrival.runway_heading_true + 180) % 360,
                                 LandingConstants.FINAL_APPROACH_FIX_NM)
    return Position(lat=lat, lon=lon)


def _approach_target(state: PhaseState, snapshot: SimulationSnapshot, distance_nm: float) -> Position:
    """The threshold when it lies ahead along the runway axis, otherwise the FAF."""
    arrival = snapshot.arrival
    if distance_nm < EnrouteConstants.NEGLIGIBLE_DISTANCE_NM:
        return arrival.threshold
    bearing = calculate_bearing(state.position.lat, state.position.lon,
                                arrival.threshold_lat, arrival.threshold_lon)
    if abs(heading_difference(bearing, arrival.runway_heading_true)) > LandingConstants.ALIGNMENT_TOLERANCE_DEG:
        return final_approach_fix(snapshot)
    return arrival.threshold


def advance_approach(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    arrival = snapshot.arrival
    c = LandingConstants

    distance_nm = haversine_distance_nm(state.position.lat, state.position.lon,
                                        arrival.threshold_lat, arrival.threshold_lon)
    target = _approach_target(state, snapshot, distance_nm)
    speed = approach_value(state.indicated_airspeed_kts, aircraft.approach_speed_kts + c.APPROACH_SPEED_MARGIN_KTS,
                           c.APPROACH_ACCELERATION_KTS_S * dt)

    target_altitude = max(glideslope_altitude_ft(distance_nm, arrival.elevation_ft),
                          arrival.elevation_ft + c.APPROACH_MIN_AGL_FT)
    altitude = descend_toward(state.altitude_ft, target_altitude, c.APPROACH_DESCENT_RATE_FPM, dt)
    vs = -c.APPROACH_DESCENT_RATE_FPM if altitude < state.altitude_ft else 0.0
    pitch = approach_value(state.pitch_deg, c.APPROACH_PITCH_DEG, c.PITCH_LOWERING_RATE_DEG_S * dt)

    position, moved_nm, heading, bank = fly_toward(state, target, speed, dt)
    if distance_nm < EnrouteConstants.NEGLIGIBLE_DISTANCE_NM:
        # Over the threshold: no bearing to follow, swing onto the runway heading instead.
        heading = turn_toward(state.heading_true, arrival.runway_heading_true,
                              GeoConstants.STANDARD_TURN_RATE_DEG_S * dt)

    new_distance = haversine_distance_nm(position.lat, position.lon, arrival.threshold_lat, arrival.threshold_lon)
    aligned = abs(heading_difference(heading, arrival.runway_heading_true)) < c.ALIGNMENT_TOLERANCE_DEG
    next_phase = FlightPhase.FINAL if new_distance < c.FINAL_ENTRY_NM and aligned else FlightPhase.APPROACH

    return replace(
        state,
        **step_timing(state, next_phase, dt),
        position=position,
        heading_true=heading,
        bank_deg=bank,
        indicated_airspeed_kts=speed,
        ground_speed_kts=speed,
        altitude_ft=altitude,
        vertical_speed_fpm=vs,
        pitch_deg=pitch,
        distance_along_route_nm=state.distance_along_route_nm + moved_nm,
    )


def _glideslope_vertical_speed(state: PhaseState, speed_kts: float, glideslope_alt_ft: float, dt: float) -> float:
    """
    Glideslope descent rate plus a proportional correction toward the beam. The
    correction is limited so that a single step can at most remove the error.
    """
    altitude_error = state.altitude_ft - glideslope_alt_ft
    correction = LandingConstants.GLIDESLOPE_CORRECTION_GAIN * altitude_error
    max_correction = abs(altitude_error) * 60 / dt
    correction = min(max(correction, -max_correction), max_correction)
    return glideslope_vertical_speed_fpm(speed_kts) - correction


def advance_final(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    aircraft = snapshot.aircraft
    arrival = snapshot.arrival
    c = LandingConstants

    heading = turn_toward(state.heading_true, arrival.runway_heading_true,
                          GeoConstants.STANDARD_TURN_RATE_DEG_S * dt)
    # Only ever slows down on final.
    target_speed = aircraft.vref_kts + c.FINAL_SPEED_MARGIN_KTS
    speed = state.indicated_airspeed_kts - min(max(state.indicated_airspeed_kts - target_speed, 0.0),
                                               c.FINAL_DECELERATION_KTS_S * dt)

    distance_nm = haversine_distance_nm(state.position.lat, state.position.lon,
                                        arrival.threshold_lat, arrival.threshold_lon)
    vs = _glideslope_vertical_speed(state, speed, glideslope_altitude_ft(distance_nm, arrival.elevation_ft), dt)
    altitude = max(state.altitude_ft + vs * dt / 60, arrival.elevation_ft)
    pitch = approach_value(state.pitch_deg, c.FINAL_PITCH_DEG, c.PITCH_LOWERING_RATE_DEG_S * dt)

    position, moved_nm, _, _ = fly_toward(state, arrival.threshold, speed, dt)
    new_distance = haversine_distance_nm(position.lat, position.lon, arrival.threshold_lat, arrival.threshold_lon)
    distance_flown = state.distance_along_route_nm + moved_nm

    touching_down = (altitude - arrival.elevation_ft <= c.TOUCHDOWN_AGL_FT
                     or new_distance < c.TOUCHDOWN_DISTANCE_NM)
    if touching_down:
        return replace(
            state,
            **step_timing(state, FlightPhase.LANDING, dt),
            position=arrival.threshold,
            heading_true=arrival.runway_heading_true,
            altitude_ft=arrival.elevation_ft,
            vertical_speed_fpm=0.0,
            pitch_deg=c.FLARE_PITCH_DEG,
            bank_deg=0.0,
            indicated_airspeed_kts=speed,
            ground_speed_kts=speed,
            distance_along_runway_ft=0.0,
            distance_along_route_nm=distance_flown,
        )

    return replace(
        state,
        **step_timing(state, FlightPhase.FINAL, dt),
        position=position,
        heading_true=heading,
        altitude_ft=altitude,
        vertical_speed_fpm=vs,
        pitch_deg=pitch,
        bank_deg=0.0,
        indicated_airspeed_kts=speed,
        ground_speed_kts=speed,
        distance_along_route_nm=distance_flown,
    )


def _rollout(state: PhaseState, snapshot: SimulationSnapshot, dt: float, next_phase: FlightPhase,
             speed: float, distance_ft: float, **changes) -> PhaseState:
    arrival = snapshot.arrival
    lat, lon = position_on_runway(arrival.threshold_lat, arrival.threshold_lon, arrival.unit_vector, distance_ft)
    moved_ft = distance_ft - state.distance_along_runway_ft
    return replace(
        state,
        **step_timing(state, next_phase, dt),
        position=Position(lat=lat, lon=lon),
        heading_true=arrival.runway_heading_true,
        altitude_ft=arrival.elevation_ft,
        vertical_speed_fpm=0.0,
        bank_deg=0.0,
        indicated_airspeed_kts=speed,
        ground_speed_kts=speed,
        distance_along_runway_ft=distance_ft,
        distance_along_route_nm=state.distance_along_route_nm + moved_ft / GeoConstants.FEET_PER_NAUTICAL_MILE,
        **changes,
    )


def advance_landing(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    c = LandingConstants
    # Braking stops at taxi speed; a slow touchdown is never sped back up to it.
    speed = min(state.indicated_airspeed_kts,
                max(state.indicated_airspeed_kts - c.BRAKING_DECELERATION_KTS_S * dt, c.TAXI_SPEED_KTS))
    distance_ft = state.distance_along_runway_ft + trapezoid_distance_ft(state.indicated_airspeed_kts, speed, dt)
    pitch = max(state.pitch_deg - c.PITCH_LOWERING_RATE_DEG_S * dt, 0.0)

    next_phase = FlightPhase.TAXI_IN if speed <= c.TAXI_SPEED_KTS else FlightPhase.LANDING
    return _rollout(state, snapshot, dt, next_phase, speed, distance_ft, pitch_deg=pitch)


def advance_taxi_in(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    c = LandingConstants
    speed = approach_value(state.indicated_airspeed_kts, c.TAXI_IN_SPEED_KTS, c.TAXI_IN_DECELERATION_KTS_S * dt)

    # Stop short of the far end; never roll backward if the landing ran past the limit.
    limit_ft = max(c.TAXI_IN_RUNWAY_FRACTION * snapshot.arrival.runway_length_ft, state.distance_along_runway_ft)
    step_ft = trapezoid_distance_ft(state.indicated_airspeed_kts, speed, dt)
    distance_ft = min(state.distance_along_runway_ft + step_ft, limit_ft)

    if state.phase_elapsed_sec + dt >= c.TAXI_IN_DURATION_SEC:
        return _rollout(state, snapshot, dt, FlightPhase.COMPLETE, 0.0, distance_ft,
                        pitch_deg=0.0, is_playing=False)
    return _rollout(state, snapshot, dt, FlightPhase.TAXI_IN, speed, distance_ft, pitch_deg=0.0)


def advance_complete(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> PhaseState:
    return state


_ADVANCERS = {
    FlightPhase.APPROACH: advance_approach,
    FlightPhase.FINAL: advance_final,
    FlightPhase.LANDING: advance_landing,
    FlightPhase.TAXI_IN: advance_taxi_in,
    FlightPhase.COMPLETE: advance_complete,
}


def advance_landing_phase(state: PhaseState, snapshot: SimulationSnapshot, dt: float) -> Optional[PhaseState]:
    """Advances a landing phase by dt seconds; None if the phase is not owned here."""
    advancer = _ADVANCERS.get(state.phase)
    if advancer is None:
        return None
    return advancer(state, snapshot, dt)
