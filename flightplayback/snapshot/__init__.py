"""
Initializes the snapshot module, defining its public API.

The snapshot builder is the only place that reads planning data; everything
downstream works from the frozen SimulationSnapshot it produces.
"""
# Core logic from core.py
from .core import create_simulation_snapshot, validate_planning_state, find_opposite_end

# Planning inputs and frozen simulation models from data_models.py
from .data_models import (
    PlanningState,
    SelectedRunway,
    Runway,
    RunwayEnd,
    AircraftPerformance,
    FlightRoute,
    RouteWaypoint,
    WaypointType,
    RunwayGeometry,
    AircraftProfile,
    SimulationWaypoint,
    SimulationRoute,
    SimulationSnapshot,
)
from .exceptions import SnapshotError, SnapshotValidationError, RunwayInvariantError

__all__ = [
    'create_simulation_snapshot',
    'validate_planning_state',
    'find_opposite_end',
    'PlanningState',
    'SelectedRunway',
    'Runway',
    'RunwayEnd',
    'AircraftPerformance',
    'FlightRoute',
    'RouteWaypoint',
    'WaypointType',
    'RunwayGeometry',
    'AircraftProfile',
    'SimulationWaypoint',
    'SimulationRoute',
    'SimulationSnapshot',
    'SnapshotError',
    'SnapshotValidationError',
    'RunwayInvariantError',
]
