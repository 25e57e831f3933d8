# flightplayback/snapshot/core.py
"""
Freezes a planning state into an immutable SimulationSnapshot.

Everything the physics needs is derived here once, up front: runway heading,
length and unit vector from the two threshold coordinates, V-speeds and ground
acceleration from the aircraft record, and the remaining-distance table for the
route. After this point the planning state is never read again.
"""
import logging
from datetime import datetime
from typing import List, Optional

from ..geometry.coordinates import haversine_distance_nm, calculate_bearing
from ..geometry.constants import GeoConstants
from ..geometry.runway import runway_unit_vector
from .constants import SnapshotConstants
from .data_models import (
    PlanningState, Runway, RunwayEnd, SelectedRunway, AircraftPerformance, FlightRoute,
    WaypointType, RunwayGeometry, AircraftProfile, SimulationWaypoint, SimulationRoute,
    SimulationSnapshot,
)
from .exceptions import SnapshotValidationError, RunwayInvariantError

logger = logging.getLogger(__name__)


def _validate_runway(label: str, selected: Optional[SelectedRunway]) -> List[str]:
    if selected is None:
        return [f"{label} runway not selected"]
    if selected.end.threshold is None:
        return [f"{label} runway {selected.end.designator} has no threshold coordinates"]
    return []


def validate_planning_state(planning: PlanningState) -> List[str]:
    """
    Checks a planning state for completeness. Never raises; returns one
    human-readable message per problem, or an empty list when the plan is usable.
    """
    errors = []
    if not planning.departure_icao:
        errors.append("Departure airport not selected")
    if not planning.arrival_icao:
        errors.append("Arrival airport not selected")
    errors.extend(_validate_runway("Departure", planning.departure_runway))
    errors.extend(_validate_runway("Arrival", planning.arrival_runway))

    if planning.aircraft is None:
        errors.append("Aircraft not selected")
    elif not planning.aircraft.cruise_speed_kts or planning.aircraft.cruise_speed_kts <= 0:
        errors.append(f"Aircraft {planning.aircraft.icao_type} has no positive cruise speed")

    if planning.route is None:
        errors.append("Route not generated")
    elif len(planning.route.waypoints) < SnapshotConstants.MIN_ROUTE_WAYPOINTS:
        errors.append(f"Route must contain at least {SnapshotConstants.MIN_ROUTE_WAYPOINTS} waypoints")
    return errors


def find_opposite_end(runway: Runway, designator: str) -> RunwayEnd:
    """Returns the other end of the runway; it must carry threshold coordinates."""
    for end in runway.ends:
        if end.designator != designator and end.threshold is not None:
            return end
    raise RunwayInvariantError(designator)


def build_runway_geometry(airport_icao: str, selected: SelectedRunway) -> RunwayGeometry:
    end = selected.end
    opposite = find_opposite_end(selected.runway, end.designator)
    t, o = end.threshold, opposite.threshold

    length_nm = haversine_distance_nm(t.lat, t.lon, o.lat, o.lon)
    return RunwayGeometry(
        airport_icao=airport_icao,
        runway_designator=end.designator,
        threshold_lat=t.lat,
        threshold_lon=t.lon,
        opposite_threshold_lat=o.lat,
        opposite_threshold_lon=o.lon,
        runway_heading_true=calculate_bearing(t.lat, t.lon, o.lat, o.lon),
        runway_length_ft=length_nm * GeoConstants.FEET_PER_NAUTICAL_MILE,
        runway_length_nm=length_nm,
        unit_vector=runway_unit_vector(t.lat, t.lon, o.lat, o.lon),
        elevation_ft=end.elevation_ft,
    )


def ground_acceleration_for(takeoff_distance_ft: float) -> float:
    """Longer takeoff runs mean heavier aircraft and slower acceleration."""
    for threshold_ft, acceleration in SnapshotConstants.GROUND_ACCELERATION_BUCKETS:
        if takeoff_distance_ft > threshold_ft:
            return acceleration
    return SnapshotConstants.DEFAULT_GROUND_ACCELERATION_KTS_S


def _supplied_or(value: Optional[float], default: float) -> float:
    return float(value) if value is not None else float(default)


def derive_aircraft_profile(performance: AircraftPerformance) -> AircraftProfile:
    c = SnapshotConstants
    cruise = performance.cruise_speed_kts

    vr = _supplied_or(performance.vr_kts, round(c.VR_CRUISE_RATIO * cruise))
    v1 = _supplied_or(performance.v1_kts, round(c.V1_VR_RATIO * vr))
    v2 = _supplied_or(performance.v2_kts, vr + c.V2_VR_MARGIN_KTS)
    vref = _supplied_or(performance.vref_kts, round(c.VREF_CRUISE_RATIO * cruise))
    takeoff_distance_ft = performance.takeoff_distance_m * GeoConstants.METERS_TO_FEET

    return AircraftProfile(
        icao_type=performance.icao_type,
        v1_kts=v1,
        vr_kts=vr,
        v2_kts=v2,
        vref_kts=vref,
        takeoff_distance_required_ft=takeoff_distance_ft,
        ground_acceleration_kts_s=ground_acceleration_for(takeoff_distance_ft),
        rotation_pitch_rate_deg_s=c.ROTATION_PITCH_RATE_DEG_S,
        initial_climb_pitch_deg=c.INITIAL_CLIMB_PITCH_DEG,
        initial_climb_rate_fpm=_supplied_or(performance.initial_climb_rate_fpm, c.INITIAL_CLIMB_RATE_FPM),
        cruise_climb_rate_fpm=_supplied_or(performance.cruise_climb_rate_fpm, c.CRUISE_CLIMB_RATE_FPM),
        cruise_speed_kts=float(cruise),
        cruise_altitude_ft=float(performance.cruise_altitude_ft),
        descent_rate_fpm=_supplied_or(performance.descent_rate_fpm, c.DESCENT_RATE_FPM),
        approach_speed_kts=vref + c.APPROACH_VREF_MARGIN_KTS,
    )


def map_waypoint_type(planning_type: Optional[str]) -> WaypointType:
    key = (planning_type or '').upper()
    if key in SnapshotConstants.DEPARTURE_WAYPOINT_TYPES:
        return WaypointType.DEPARTURE
    if key in SnapshotConstants.ARRIVAL_WAYPOINT_TYPES:
        return WaypointType.ARRIVAL
    return WaypointType.ENROUTE


def build_simulation_route(route: FlightRoute, cruise_speed_kts: float,
                           arrival: RunwayGeometry) -> SimulationRoute:
    waypoints = tuple(
        SimulationWaypoint(id=wp.id, lat=wp.lat, lon=wp.lon, altitude_ft=wp.altitude_ft,
                           type=map_waypoint_type(wp.type))
        for wp in route.waypoints
    )
    legs = [haversine_distance_nm(a.lat, a.lon, b.lat, b.lon) for a, b in zip(waypoints, waypoints[1:])]

    last = waypoints[-1]
    remaining = [0.0] * len(waypoints)
    remaining[-1] = haversine_distance_nm(last.lat, last.lon, arrival.threshold_lat, arrival.threshold_lon)
    for i in range(len(waypoints) - 2, -1, -1):
        remaining[i] = remaining[i + 1] + legs[i]

    total_distance = route.total_distance_nm if route.total_distance_nm is not None else sum(legs)
    if route.total_time_min is not None:
        estimated_time = route.total_time_min
    else:
        estimated_time = total_distance / cruise_speed_kts * 60

    return SimulationRoute(
        waypoints=waypoints,
        total_distance_nm=float(total_distance),
        estimated_time_min=float(estimated_time),
        remaining_distance_nm=tuple(remaining),
    )


def create_simulation_snapshot(planning: PlanningState,
                               created_at: Optional[datetime] = None) -> SimulationSnapshot:
    """
    Validates the planning state and freezes it into a SimulationSnapshot.

    Raises:
        SnapshotValidationError: listing every problem found in the plan.
        RunwayInvariantError: when a selected runway has no usable opposite end.
    """
    errors = validate_planning_state(planning)
    if errors:
        raise SnapshotValidationError(errors)

    departure = build_runway_geometry(planning.departure_icao, planning.departure_runway)
    arrival = build_runway_geometry(planning.arrival_icao, planning.arrival_runway)
    aircraft = derive_aircraft_profile(planning.aircraft)
    route = build_simulation_route(planning.route, aircraft.cruise_speed_kts, arrival)

    snapshot = SimulationSnapshot(
        departure=departure,
        arrival=arrival,
        aircraft=aircraft,
        route=route,
        created_at=created_at or datetime.now(),
    )
    logger.info(
        f"Snapshot created: {departure.airport_icao} RWY {departure.runway_designator} -> "
        f"{arrival.airport_icao} RWY {arrival.runway_designator}, {aircraft.icao_type}, "
        f"{route.total_distance_nm:.1f} nm, {len(route.waypoints)} waypoints."
    )
    return snapshot
