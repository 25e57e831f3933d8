# flightplayback/geometry/constants.py

class GeoConstants:
    EARTH_RADIUS_NM: float = 3440.065
    FEET_PER_NAUTICAL_MILE: float = 6076.12
    G_ACCEL_MPS2: float = 9.80665
    METERS_PER_SECOND_PER_KNOT: float = 0.514444
    METERS_TO_FEET: float = 3.28084

    # Knots to feet per second
    KTS_TO_FPS: float = 1.68781
    # One knot expressed in feet per minute
    FPM_PER_KNOT: float = 101.269

    STANDARD_TURN_RATE_DEG_S: float = 3.0
    MAX_VISUAL_BANK_DEG: float = 30.0

    # Below this angular separation (radians) two points are treated as coincident
    NEGLIGIBLE_ANGLE_RAD: float = 1e-9
    # Runways shorter than this are degenerate and get a zero unit vector
    MIN_RUNWAY_LENGTH_NM: float = 1e-6
