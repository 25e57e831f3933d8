# flightplayback/demo.py
"""
Synthetic planning states for demonstrations and tests.

The flight is laid out along a single great circle: a departure runway at the
origin, a three-waypoint route, and an arrival runway aligned with the inbound
course. Nothing here depends on external airport data.
"""
from .geometry.coordinates import destination_point, calculate_bearing
from .geometry.constants import GeoConstants
from .geometry.data_models import Position
from .snapshot.data_models import (
    PlanningState, SelectedRunway, Runway, RunwayEnd, AircraftPerformance, FlightRoute, RouteWaypoint,
)


def runway_designator(heading_deg: float) -> str:
    number = int(round(heading_deg / 10.0)) % 36
    return f"{number or 36:02d}"


def _selected_runway(threshold_lat: float, threshold_lon: float, heading_deg: float,
                     length_ft: float, elevation_ft: float) -> SelectedRunway:
    far_lat, far_lon = destination_point(threshold_lat, threshold_lon, heading_deg,
                                         length_ft / GeoConstants.FEET_PER_NAUTICAL_MILE)
    near_end = RunwayEnd(designator=runway_designator(heading_deg),
                         threshold=Position(lat=threshold_lat, lon=threshold_lon),
                         elevation_ft=elevation_ft)
    far_end = RunwayEnd(designator=runway_designator((heading_deg + 180.0) % 360),
                        threshold=Position(lat=far_lat, lon=far_lon),
                        elevation_ft=elevation_ft)
    return SelectedRunway(runway=Runway(ends=[near_end, far_end], length_ft=length_ft), end=near_end)


def build_demo_planning_state(origin_lat: float = 0.0, origin_lon: float = 0.0,
                              heading_deg: float = 90.0, route_distance_nm: float = 500.0,
                              runway_length_ft: float = 9000.0, elevation_ft: float = 0.0,
                              cruise_speed_kts: float = 450.0, cruise_altitude_ft: float = 33000.0,
                              takeoff_distance_m: float = 2500.0) -> PlanningState:
    """
    Builds a complete planning state. The defaults describe a 500 nm sea-level
    flight heading 090 from the equator at FL330 and 450 kt.
    """
    mid_lat, mid_lon = destination_point(origin_lat, origin_lon, heading_deg, route_distance_nm / 2)
    arr_lat, arr_lon = destination_point(origin_lat, origin_lon, heading_deg, route_distance_nm)
    inbound_course = (calculate_bearing(arr_lat, arr_lon, mid_lat, mid_lon) + 180.0) % 360

    route = FlightRoute(waypoints=[
        RouteWaypoint(id='DEP', lat=origin_lat, lon=origin_lon, altitude_ft=elevation_ft, type='DEPARTURE'),
        RouteWaypoint(id='MID', lat=mid_lat, lon=mid_lon, altitude_ft=cruise_altitude_ft, type='ENROUTE'),
        RouteWaypoint(id='ARR', lat=arr_lat, lon=arr_lon, altitude_ft=elevation_ft, type='ARRIVAL'),
    ])

    return PlanningState(
        departure_icao='XDEP',
        arrival_icao='XARR',
        departure_runway=_selected_runway(origin_lat, origin_lon, heading_deg, runway_length_ft, elevation_ft),
        arrival_runway=_selected_runway(arr_lat, arr_lon, inbound_course, runway_length_ft, elevation_ft),
        aircraft=AircraftPerformance(
            icao_type='B738',
            cruise_speed_kts=cruise_speed_kts,
            cruise_altitude_ft=cruise_altitude_ft,
            takeoff_distance_m=takeoff_distance_m,
        ),
        route=route,
    )
