# flightplayback/geometry/turns.py
import math

from .constants import GeoConstants


def heading_difference(from_heading: float, to_heading: float) -> float:
    """Signed shortest turn from one heading to another, in (-180, 180]."""
    diff = (to_heading - from_heading) % 360
    if diff > 180:
        diff -= 360
    return diff


def turn_toward(current_heading: float, target_heading: float, max_turn_deg: float) -> float:
    """Turns by at most `max_turn_deg` along the shortest direction; result in [0, 360)."""
    diff = heading_difference(current_heading, target_heading)
    turn = math.copysign(min(abs(diff), max_turn_deg), diff)
    return (current_heading + turn) % 360


def standard_rate_bank_angle(speed_kts: float) -> float:
    """
    Bank angle for a standard-rate (3 deg/s) coordinated turn at the given
    true airspeed, capped for display.
    """
    if speed_kts <= 0:
        return 0.0
    speed_mps = speed_kts * GeoConstants.METERS_PER_SECOND_PER_KNOT
    turn_rate_rad_s = math.radians(GeoConstants.STANDARD_TURN_RATE_DEG_S)
    bank_deg = math.degrees(math.atan(speed_mps * turn_rate_rad_s / GeoConstants.G_ACCEL_MPS2))
    return min(bank_deg, GeoConstants.MAX_VISUAL_BANK_DEG)
