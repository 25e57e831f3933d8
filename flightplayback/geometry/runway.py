# flightplayback/geometry/runway.py
import math

from .constants import GeoConstants
from .coordinates import calculate_bearing, haversine_distance_nm
from .data_models import RunwayUnitVector


def runway_unit_vector(threshold_lat: float, threshold_lon: float,
                       opposite_lat: float, opposite_lon: float) -> RunwayUnitVector:
    """
    Unit vector pointing from a threshold toward the opposite end of the runway.
    A zero-length runway yields the zero vector.
    """
    length_nm = haversine_distance_nm(threshold_lat, threshold_lon, opposite_lat, opposite_lon)
    if length_nm < GeoConstants.MIN_RUNWAY_LENGTH_NM:
        return RunwayUnitVector(north=0.0, east=0.0)
    heading_rad = math.radians(calculate_bearing(threshold_lat, threshold_lon, opposite_lat, opposite_lon))
    return RunwayUnitVector(north=math.cos(heading_rad), east=math.sin(heading_rad))


def position_on_runway(threshold_lat: float, threshold_lon: float,
                       unit_vector: RunwayUnitVector, distance_ft: float) -> tuple[float, float]:
    if unit_vector.is_degenerate:
        return threshold_lat, threshold_lon
    # Local tangent plane; runway lengths are far too short for curvature to matter.
    angular = (distance_ft / GeoConstants.FEET_PER_NAUTICAL_MILE) / GeoConstants.EARTH_RADIUS_NM
    cos_lat = math.cos(math.radians(threshold_lat))
    dlat = angular * unit_vector.north
    dlon = angular * unit_vector.east / cos_lat if abs(cos_lat) > 1e-12 else 0.0
    return threshold_lat + math.degrees(dlat), threshold_lon + math.degrees(dlon)
