# flightplayback/geometry/data_models.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A point on the Earth's surface in decimal degrees."""
    lat: float
    lon: float


@dataclass(frozen=True)
class RunwayUnitVector:
    """
    Direction cosines of a runway centerline in the local tangent plane.
    `north` and `east` are the components of a unit step along the runway.
    """
    north: float
    east: float

    @property
    def is_degenerate(self) -> bool:
        return self.north == 0.0 and self.east == 0.0
