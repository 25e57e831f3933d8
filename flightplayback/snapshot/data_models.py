# flightplayback/snapshot/data_models.py
"""
Data structures for the snapshot builder.

The planning-side models are plain mutable dataclasses filled in by whatever
tool assembles a flight plan; every field that a half-finished plan may lack
is Optional so that incomplete plans can still be validated. The simulation-side
models are frozen and built exactly once per flight.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from ..geometry.data_models import Position, RunwayUnitVector


# --- Planning Inputs ---

@dataclass
class RunwayEnd:
    """One end of a runway, e.g. '09' or '27L'."""
    designator: str
    threshold: Optional[Position] = None
    elevation_ft: float = 0.0


@dataclass
class Runway:
    ends: List[RunwayEnd] = field(default_factory=list)
    # Informational only; the simulator derives length from the thresholds.
    length_ft: Optional[float] = None


@dataclass
class SelectedRunway:
    """A runway together with the end the flight uses."""
    runway: Runway
    end: RunwayEnd


@dataclass
class AircraftPerformance:
    icao_type: str
    cruise_speed_kts: float
    cruise_altitude_ft: float
    takeoff_distance_m: float
    v1_kts: Optional[float] = None
    vr_kts: Optional[float] = None
    v2_kts: Optional[float] = None
    vref_kts: Optional[float] = None
    initial_climb_rate_fpm: Optional[float] = None
    cruise_climb_rate_fpm: Optional[float] = None
    descent_rate_fpm: Optional[float] = None


@dataclass
class RouteWaypoint:
    id: str
    lat: float
    lon: float
    altitude_ft: float = 0.0
    type: str = 'ENROUTE'


@dataclass
class FlightRoute:
    waypoints: List[RouteWaypoint] = field(default_factory=list)
    total_distance_nm: Optional[float] = None
    total_time_min: Optional[float] = None


@dataclass
class PlanningState:
    departure_icao: Optional[str] = None
    arrival_icao: Optional[str] = None
    departure_runway: Optional[SelectedRunway] = None
    arrival_runway: Optional[SelectedRunway] = None
    aircraft: Optional[AircraftPerformance] = None
    route: Optional[FlightRoute] = None


# --- Frozen Simulation Inputs ---

class WaypointType(Enum):
    DEPARTURE = 'DEPARTURE'
    ENROUTE = 'ENROUTE'
    ARRIVAL = 'ARRIVAL'


@dataclass(frozen=True)
class RunwayGeometry:
    airport_icao: str
    runway_designator: str
    threshold_lat: float
    threshold_lon: float
    opposite_threshold_lat: float
    opposite_threshold_lon: float
    runway_heading_true: float
    runway_length_ft: float
    runway_length_nm: float
    unit_vector: RunwayUnitVector
    elevation_ft: float

    @property
    def threshold(self) -> Position:
        return Position(lat=self.threshold_lat, lon=self.threshold_lon)


@dataclass(frozen=True)
class AircraftProfile:
    icao_type: str
    v1_kts: float
    vr_kts: float
    v2_kts: float
    vref_kts: float
    takeoff_distance_required_ft: float
    ground_acceleration_kts_s: float
    rotation_pitch_rate_deg_s: float
    initial_climb_pitch_deg: float
    initial_climb_rate_fpm: float
    cruise_climb_rate_fpm: float
    cruise_speed_kts: float
    cruise_altitude_ft: float
    descent_rate_fpm: float
    approach_speed_kts: float


@dataclass(frozen=True)
class SimulationWaypoint:
    id: str
    lat: float
    lon: float
    altitude_ft: float
    type: WaypointType


@dataclass(frozen=True)
class SimulationRoute:
    waypoints: Tuple[SimulationWaypoint, ...]
    total_distance_nm: float
    estimated_time_min: float
    # Distance from each waypoint to the end of the route and on to the arrival threshold.
    remaining_distance_nm: Tuple[float, ...]


@dataclass(frozen=True)
class SimulationSnapshot:
    departure: RunwayGeometry
    arrival: RunwayGeometry
    aircraft: AircraftProfile
    route: SimulationRoute
    created_at: datetime
