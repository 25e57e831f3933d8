# flightplayback/geometry/coordinates.py
"""
Core great-circle geometry. Logging is omitted here as these are high-frequency,
low-level functions called on every physics step.
"""
import math

import numpy as np

from .constants import GeoConstants


def _angular_distance_rad(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)
    dlon = lon2_rad - lon1_rad; dlat = lat2_rad - lat1_rad
    a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
    a = min(max(a, 0.0), 1.0)
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_distance_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return GeoConstants.EARTH_RADIUS_NM * _angular_distance_rad(lat1, lon1, lat2, lon2)


def haversine_distance_ft(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return haversine_distance_nm(lat1, lon1, lat2, lon2) * GeoConstants.FEET_PER_NAUTICAL_MILE


def _local_north_east(lat: float, lon: float) -> tuple[np.ndarray, np.ndarray]:
    """Unit north and east vectors of the tangent plane at a point, in earth-centred coordinates."""
    lat_rad, lon_rad = np.radians(lat), np.radians(lon)
    north = np.array([-np.sin(lat_rad) * np.cos(lon_rad), -np.sin(lat_rad) * np.sin(lon_rad), np.cos(lat_rad)])
    east = np.array([-np.sin(lon_rad), np.cos(lon_rad), 0.0])
    return north, east


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Initial true bearing from point 1 to point 2, in [0, 360). The destination
    is projected onto the tangent plane at the origin; coincident points give 0.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    north, east = _local_north_east(lat1, lon1)
    target = _to_cartesian(lat2, lon2)
    bearing = math.degrees(math.atan2(float(np.dot(target, east)), float(np.dot(target, north))))
    return (bearing + 360) % 360


def destination_point(lat: float, lon: float, bearing_deg: float, distance_nm: float) -> tuple[float, float]:
    lat_rad = math.radians(lat); lon_rad = math.radians(lon); bearing_rad = math.radians(bearing_deg)
    angular_distance = distance_nm / GeoConstants.EARTH_RADIUS_NM
    dest_lat_rad = math.asin(math.sin(lat_rad) * math.cos(angular_distance) +
                             math.cos(lat_rad) * math.sin(angular_distance) * math.cos(bearing_rad))
    dest_lon_rad = lon_rad + math.atan2(math.sin(bearing_rad) * math.sin(angular_distance) * math.cos(lat_rad),
                                        math.cos(angular_distance) - math.sin(lat_rad) * math.sin(dest_lat_rad))
    dest_lon = (math.degrees(dest_lon_rad) + 540) % 360 - 180
    return math.degrees(dest_lat_rad), dest_lon


def _to_cartesian(lat: float, lon: float) -> np.ndarray:
    lat_rad, lon_rad = np.radians(lat), np.radians(lon)
    return np.array([
        np.cos(lat_rad) * np.cos(lon_rad),
        np.cos(lat_rad) * np.sin(lon_rad),
        np.sin(lat_rad),
    ])


def interpolate_great_circle(lat1: float, lon1: float, lat2: float, lon2: float,
                             fraction: float) -> tuple[float, float]:
    """
    Spherical linear interpolation between two points. `fraction` is clamped
    to [0, 1]; 0 returns the start point and 1 the end point. Nearly coincident
    points fall back to linear interpolation of the coordinates.
    """
    f = float(np.clip(fraction, 0.0, 1.0))
    if f == 0.0:
        return lat1, lon1
    if f == 1.0:
        return lat2, lon2

    delta = _angular_distance_rad(lat1, lon1, lat2, lon2)
    if delta < GeoConstants.NEGLIGIBLE_ANGLE_RAD:
        return lat1 + f * (lat2 - lat1), lon1 + f * (lon2 - lon1)

    sin_delta = math.sin(delta)
    weight_start = math.sin((1 - f) * delta) / sin_delta
    weight_end = math.sin(f * delta) / sin_delta
    v = weight_start * _to_cartesian(lat1, lon1) + weight_end * _to_cartesian(lat2, lon2)

    lat = math.degrees(math.atan2(v[2], math.hypot(v[0], v[1])))
    lon = math.degrees(math.atan2(v[1], v[0]))
    return float(lat), float(lon)
