"""
Spherical-earth helpers shared by the snapshot builder and the phase modules.
"""
from .constants import GeoConstants
from .data_models import Position, RunwayUnitVector
from .coordinates import (
    haversine_distance_nm,
    haversine_distance_ft,
    calculate_bearing,
    destination_point,
    interpolate_great_circle,
)
from .runway import runway_unit_vector, position_on_runway
from .turns import heading_difference, turn_toward, standard_rate_bank_angle

__all__ = [
    'GeoConstants',
    'Position',
    'RunwayUnitVector',
    'haversine_distance_nm',
    'haversine_distance_ft',
    'calculate_bearing',
    'destination_point',
    'interpolate_great_circle',
    'runway_unit_vector',
    'position_on_runway',
    'heading_difference',
    'turn_toward',
    'standard_rate_bank_angle',
]
