# flightplayback/phases/kinematics.py
"""
Small integration helpers shared by the phase modules.
"""
from typing import Tuple

from ..geometry.constants import GeoConstants
from ..geometry.coordinates import haversine_distance_nm, calculate_bearing, interpolate_great_circle
from ..geometry.data_models import Position
from ..geometry.turns import heading_difference, turn_toward, standard_rate_bank_angle
from .constants import EnrouteConstants
from .data_models import FlightPhase, PhaseState


def approach_value(current: float, target: float, max_step: float) -> float:
    """Moves `current` toward `target` by at most `max_step`, never overshooting."""
    if current < target:
        return min(current + max_step, target)
    return max(current - max_step, target)


def trapezoid_distance_ft(speed_start_kts: float, speed_end_kts: float, dt: float) -> float:
    """Ground distance covered while speed changes linearly over dt seconds."""
    return (speed_start_kts + speed_end_kts) / 2 * GeoConstants.KTS_TO_FPS * dt


def climb_toward(altitude_ft: float, ceiling_ft: float, rate_fpm: float, dt: float) -> float:
    """Climbs at `rate_fpm` but never above the ceiling; never descends."""
    if altitude_ft >= ceiling_ft:
        return altitude_ft
    return min(altitude_ft + rate_fpm * dt / 60, ceiling_ft)


def descend_toward(altitude_ft: float, floor_ft: float, rate_fpm: float, dt: float) -> float:
    """Descends at `rate_fpm` but never below the floor; never climbs."""
    if altitude_ft <= floor_ft:
        return altitude_ft
    return max(altitude_ft - rate_fpm * dt / 60, floor_ft)


def step_timing(state: PhaseState, next_phase: FlightPhase, dt: float) -> dict:
    """Phase and clock fields for a step; the phase clock restarts on a transition."""
    phase_elapsed = state.phase_elapsed_sec + dt if next_phase == state.phase else 0.0
    return {
        'phase': next_phase,
        'phase_elapsed_sec': phase_elapsed,
        'total_elapsed_sec': state.total_elapsed_sec + dt,
    }


def fly_toward(state: PhaseState, target: Position, speed_kts: float,
               dt: float) -> Tuple[Position, float, float, float]:
    """
    Moves along the great circle toward `target` at `speed_kts` for dt seconds
    and turns the heading toward it at the standard rate.

    Returns:
        (new position, ground distance moved in nm, new heading, bank angle)
    """
    lat, lon = state.position.lat, state.position.lon
    distance_to_target = haversine_distance_nm(lat, lon, target.lat, target.lon)
    step_nm = speed_kts * dt / 3600

    if distance_to_target <= step_nm:
        moved_nm = distance_to_target
        new_position = target
    else:
        moved_nm = step_nm
        new_lat, new_lon = interpolate_great_circle(lat, lon, target.lat, target.lon,
                                                    step_nm / distance_to_target)
        new_position = Position(lat=new_lat, lon=new_lon)

    if distance_to_target < EnrouteConstants.NEGLIGIBLE_DISTANCE_NM:
        return new_position, moved_nm, state.heading_true, 0.0

    bearing = calculate_bearing(lat, lon, target.lat, target.lon)
    diff = heading_difference(state.heading_true, bearing)
    heading = turn_toward(state.heading_true, bearing, GeoConstants.STANDARD_TURN_RATE_DEG_S * dt)

    bank = 0.0
    if abs(diff) > EnrouteConstants.MIN_BANK_HEADING_DIFF_DEG:
        bank = standard_rate_bank_angle(speed_kts) * (1.0 if diff > 0 else -1.0)
    return new_position, moved_nm, heading, bank
