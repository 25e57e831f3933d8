#!/usr/bin/env python3
# flightplayback/geometry/tests/test_coordinates.py

import sys
from pathlib import Path
import math
import unittest

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

from flightplayback.geometry.constants import GeoConstants
from flightplayback.geometry.coordinates import (
    haversine_distance_nm,
    haversine_distance_ft,
    calculate_bearing,
    destination_point,
    interpolate_great_circle,
)


class TestDistances(unittest.TestCase):
    def test_one_degree_of_latitude(self):
        expected = GeoConstants.EARTH_RADIUS_NM * math.pi / 180
        self.assertAlmostEqual(haversine_distance_nm(0.0, 0.0, 1.0, 0.0), expected, places=6)

    def test_coincident_points(self):
        self.assertEqual(haversine_distance_nm(47.5, 8.5, 47.5, 8.5), 0.0)

    def test_feet_matches_nautical_miles(self):
        nm = haversine_distance_nm(10.0, 10.0, 10.5, 10.5)
        ft = haversine_distance_ft(10.0, 10.0, 10.5, 10.5)
        self.assertAlmostEqual(ft, nm * GeoConstants.FEET_PER_NAUTICAL_MILE, places=3)


class TestBearing(unittest.TestCase):
    def test_cardinal_directions(self):
        self.assertAlmostEqual(calculate_bearing(0.0, 0.0, 1.0, 0.0), 0.0, places=6)
        self.assertAlmostEqual(calculate_bearing(0.0, 0.0, 0.0, 1.0), 90.0, places=6)
        self.assertAlmostEqual(calculate_bearing(0.0, 0.0, -1.0, 0.0), 180.0, places=6)
        self.assertAlmostEqual(calculate_bearing(0.0, 0.0, 0.0, -1.0), 270.0, places=6)

    def test_range(self):
        bearing = calculate_bearing(51.47, -0.45, 40.64, -73.78)
        self.assertGreaterEqual(bearing, 0.0)
        self.assertLess(bearing, 360.0)

    def test_matches_destination_course_at_high_latitude(self):
        for course in (10.0, 100.0, 200.0, 350.0):
            lat, lon = destination_point(60.0, -170.0, course, 100.0)
            self.assertAlmostEqual(calculate_bearing(60.0, -170.0, lat, lon), course, places=6)

    def test_coincident_points(self):
        self.assertEqual(calculate_bearing(47.0, 8.0, 47.0, 8.0), 0.0)


class TestDestinationPoint(unittest.TestCase):
    def test_distance_and_bearing_are_preserved(self):
        lat, lon = destination_point(47.0, 8.0, 137.0, 25.0)
        self.assertAlmostEqual(haversine_distance_nm(47.0, 8.0, lat, lon), 25.0, places=6)
        self.assertAlmostEqual(calculate_bearing(47.0, 8.0, lat, lon), 137.0, places=6)

    def test_longitude_wraps(self):
        _, lon = destination_point(0.0, 179.9, 90.0, 30.0)
        self.assertGreaterEqual(lon, -180.0)
        self.assertLess(lon, 180.0)


class TestGreatCircleInterpolation(unittest.TestCase):
    def test_endpoints(self):
        self.assertEqual(interpolate_great_circle(10.0, 20.0, 30.0, 40.0, 0.0), (10.0, 20.0))
        self.assertEqual(interpolate_great_circle(10.0, 20.0, 30.0, 40.0, 1.0), (30.0, 40.0))

    def test_fraction_is_clamped(self):
        self.assertEqual(interpolate_great_circle(10.0, 20.0, 30.0, 40.0, -0.5), (10.0, 20.0))
        self.assertEqual(interpolate_great_circle(10.0, 20.0, 30.0, 40.0, 1.5), (30.0, 40.0))

    def test_midpoint_is_equidistant(self):
        lat, lon = interpolate_great_circle(10.0, 20.0, 30.0, 40.0, 0.5)
        d1 = haversine_distance_nm(10.0, 20.0, lat, lon)
        d2 = haversine_distance_nm(lat, lon, 30.0, 40.0)
        self.assertAlmostEqual(d1, d2, places=6)
        self.assertAlmostEqual(d1 + d2, haversine_distance_nm(10.0, 20.0, 30.0, 40.0), places=6)

    def test_equator_stays_on_equator(self):
        lat, lon = interpolate_great_circle(0.0, 0.0, 0.0, 10.0, 0.25)
        self.assertAlmostEqual(lat, 0.0, places=9)
        self.assertAlmostEqual(lon, 2.5, places=9)

    def test_coincident_points_fall_back_to_linear(self):
        lat, lon = interpolate_great_circle(45.0, 7.0, 45.0, 7.0, 0.3)
        self.assertEqual((lat, lon), (45.0, 7.0))
        self.assertIsInstance(lat, float)


if __name__ == '__main__':
    unittest.main()
