#!/usr/bin/env python3
# flightplayback/phases/tests/test_enroute_phases.py

import sys
from pathlib import Path
from dataclasses import replace
import unittest

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

from flightplayback.demo import build_demo_planning_state
from flightplayback.geometry.coordinates import destination_point, haversine_distance_nm
from flightplayback.geometry.data_models import Position
from flightplayback.phases.data_models import FlightPhase, create_initial_phase_state
from flightplayback.phases.enroute import (
    advance_enroute_phase,
    is_enroute_phase,
    top_of_descent_nm,
    approach_altitude_ft,
    _steering_target,
)
from flightplayback.snapshot.core import create_simulation_snapshot
from flightplayback.snapshot.data_models import RouteWaypoint


class EnrouteTestCase(unittest.TestCase):
    planning_kwargs = {}

    def setUp(self):
        self.planning = build_demo_planning_state(**self.planning_kwargs)
        self.snapshot = create_simulation_snapshot(self.planning)
        self.arrival = self.snapshot.arrival

    def before_arrival(self, distance_nm):
        lat, lon = destination_point(self.arrival.threshold_lat, self.arrival.threshold_lon, 270.0, distance_nm)
        return Position(lat=lat, lon=lon)

    def at(self, phase, **changes):
        base = create_initial_phase_state(self.snapshot)
        fields = dict(heading_true=90.0, is_playing=True)
        fields.update(changes)
        return replace(base, phase=phase, **fields)


class TestInitialClimb(EnrouteTestCase):
    def test_ownership(self):
        self.assertTrue(is_enroute_phase(FlightPhase.INITIAL_CLIMB))
        self.assertTrue(is_enroute_phase(FlightPhase.DESCENT))
        self.assertFalse(is_enroute_phase(FlightPhase.APPROACH))
        self.assertIsNone(advance_enroute_phase(self.at(FlightPhase.FINAL), self.snapshot, 1.0))

    def test_targets_past_the_departure_waypoint(self):
        state = self.at(FlightPhase.INITIAL_CLIMB, position=Position(0.0, 0.05),
                        indicated_airspeed_kts=200.0, altitude_ft=1000.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.current_waypoint_index, 1)
        self.assertGreater(state.position.lon, 0.05)
        self.assertAlmostEqual(state.altitude_ft, 1000.0 + 2500.0 / 60)
        self.assertEqual(state.indicated_airspeed_kts, 202.0)

    def test_established_hands_over_to_climb(self):
        state = self.at(FlightPhase.INITIAL_CLIMB, position=Position(0.0, 0.05),
                        indicated_airspeed_kts=236.0, altitude_ft=1500.0)
        self.assertEqual(advance_enroute_phase(state, self.snapshot, 1.0).phase, FlightPhase.CLIMB)

    def test_turning_keeps_initial_climb(self):
        state = self.at(FlightPhase.INITIAL_CLIMB, position=Position(0.0, 0.05), heading_true=0.0,
                        indicated_airspeed_kts=240.0, altitude_ft=1500.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.phase, FlightPhase.INITIAL_CLIMB)
        self.assertAlmostEqual(state.heading_true, 3.0, places=6)
        self.assertGreater(state.bank_deg, 0.0)


class TestClimbAndCruise(EnrouteTestCase):
    def test_level_off_at_cruise_altitude(self):
        state = self.at(FlightPhase.CLIMB, position=Position(0.0, 1.0), current_waypoint_index=1,
                        indicated_airspeed_kts=300.0, altitude_ft=32990.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.phase, FlightPhase.CRUISE)
        self.assertEqual(state.altitude_ft, 33000.0)
        self.assertEqual(state.vertical_speed_fpm, 0.0)

    def test_speed_limit_below_ten_thousand(self):
        state = self.at(FlightPhase.CLIMB, position=Position(0.0, 1.0), current_waypoint_index=1,
                        indicated_airspeed_kts=250.0, altitude_ft=8000.0)
        self.assertEqual(advance_enroute_phase(state, self.snapshot, 1.0).indicated_airspeed_kts, 250.0)

    def test_cruise_holds_altitude(self):
        state = self.at(FlightPhase.CRUISE, position=Position(0.0, 2.0), current_waypoint_index=1,
                        indicated_airspeed_kts=440.0, altitude_ft=33000.0)
        for _ in range(10):
            state = advance_enroute_phase(state, self.snapshot, 1.0)
            self.assertEqual(state.altitude_ft, 33000.0)
        self.assertEqual(state.phase, FlightPhase.CRUISE)
        self.assertEqual(state.indicated_airspeed_kts, 450.0)

    def test_top_of_descent(self):
        self.assertAlmostEqual(top_of_descent_nm(self.snapshot), 140.0)
        far = self.at(FlightPhase.CRUISE, position=self.before_arrival(145.0), current_waypoint_index=2,
                      indicated_airspeed_kts=450.0, altitude_ft=33000.0)
        self.assertEqual(advance_enroute_phase(far, self.snapshot, 1.0).phase, FlightPhase.CRUISE)
        near = replace(far, position=self.before_arrival(140.05))
        self.assertEqual(advance_enroute_phase(near, self.snapshot, 1.0).phase, FlightPhase.DESCENT)

    def test_waypoint_capture_advances_index(self):
        mid = self.snapshot.route.waypoints[1]
        lat, lon = destination_point(mid.lat, mid.lon, 270.0, 1.1)
        state = self.at(FlightPhase.CRUISE, position=Position(lat, lon), current_waypoint_index=1,
                        indicated_airspeed_kts=450.0, altitude_ft=33000.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.current_waypoint_index, 2)

    def test_index_never_passes_last_waypoint(self):
        state = self.at(FlightPhase.DESCENT, position=self.before_arrival(0.5), current_waypoint_index=2,
                        indicated_airspeed_kts=250.0, altitude_ft=5000.0)
        self.assertEqual(advance_enroute_phase(state, self.snapshot, 1.0).current_waypoint_index, 2)


class TestRouteExhausted(EnrouteTestCase):
    def setUp(self):
        super().setUp()
        # End the route 5 nm short of the arrival threshold.
        short = self.before_arrival(5.0)
        self.planning.route.waypoints[-1] = RouteWaypoint(id='END', lat=short.lat, lon=short.lon,
                                                          altitude_ft=3000.0, type='ENROUTE')
        self.snapshot = create_simulation_snapshot(self.planning)

    def test_steers_to_threshold_after_last_waypoint(self):
        last = self.snapshot.route.waypoints[-1]
        state = self.at(FlightPhase.CLIMB, position=Position(last.lat, last.lon), current_waypoint_index=2,
                        heading_true=0.0, indicated_airspeed_kts=250.0, altitude_ft=3000.0)
        index, target = _steering_target(state, self.snapshot)
        self.assertEqual(index, 2)
        self.assertEqual(target, self.arrival.threshold)

        moved = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertAlmostEqual(moved.heading_true, 3.0, places=6)
        self.assertLess(haversine_distance_nm(moved.position.lat, moved.position.lon,
                                              self.arrival.threshold_lat, self.arrival.threshold_lon), 5.0)


class TestDescent(EnrouteTestCase):
    def test_descends_to_floor_then_approach(self):
        state = self.at(FlightPhase.DESCENT, position=self.before_arrival(19.0), current_waypoint_index=2,
                        indicated_airspeed_kts=250.0, altitude_ft=3010.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.altitude_ft, 3000.0)
        self.assertEqual(state.phase, FlightPhase.APPROACH)

    def test_stays_in_descent_outside_twenty_miles(self):
        state = self.at(FlightPhase.DESCENT, position=self.before_arrival(25.0), current_waypoint_index=2,
                        indicated_airspeed_kts=250.0, altitude_ft=3000.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.phase, FlightPhase.DESCENT)
        self.assertEqual(state.altitude_ft, 3000.0)
        self.assertEqual(state.vertical_speed_fpm, 0.0)

    def test_descent_rate(self):
        state = self.at(FlightPhase.DESCENT, position=self.before_arrival(100.0), current_waypoint_index=2,
                        indicated_airspeed_kts=360.0, altitude_ft=20000.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertAlmostEqual(state.altitude_ft, 20000.0 - 2000.0 / 60)
        self.assertEqual(state.vertical_speed_fpm, -2000.0)


class TestElevatedArrival(EnrouteTestCase):
    planning_kwargs = {'elevation_ft': 5400.0}

    def test_top_of_descent_ignores_field_elevation(self):
        self.assertAlmostEqual(top_of_descent_nm(self.snapshot), 140.0)

    def test_descent_floor_keeps_field_clearance(self):
        self.assertEqual(approach_altitude_ft(self.snapshot), 6900.0)
        state = self.at(FlightPhase.DESCENT, position=self.before_arrival(25.0), current_waypoint_index=2,
                        indicated_airspeed_kts=250.0, altitude_ft=6910.0)
        state = advance_enroute_phase(state, self.snapshot, 1.0)
        self.assertEqual(state.altitude_ft, 6900.0)
        self.assertEqual(state.phase, FlightPhase.DESCENT)


if __name__ == '__main__':
    unittest.main()
