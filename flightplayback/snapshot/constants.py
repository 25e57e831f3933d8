# flightplayback/snapshot/constants.py

class SnapshotConstants:
    # --- V-speed derivation as fractions of cruise speed ---
    VR_CRUISE_RATIO: float = 0.38
    V1_VR_RATIO: float = 0.92
    V2_VR_MARGIN_KTS: float = 12.0
    VREF_CRUISE_RATIO: float = 0.32
    APPROACH_VREF_MARGIN_KTS: float = 5.0

    # --- Ground acceleration buckets (required takeoff distance in ft, kt/s) ---
    # Checked in order; the first threshold exceeded wins.
    GROUND_ACCELERATION_BUCKETS = (
        (10000.0, 2.5),
        (7000.0, 3.0),
        (5000.0, 3.5),
    )
    DEFAULT_GROUND_ACCELERATION_KTS_S: float = 4.0

    # --- Performance defaults when the planning record leaves them out ---
    ROTATION_PITCH_RATE_DEG_S: float = 3.0
    INITIAL_CLIMB_PITCH_DEG: float = 15.0
    INITIAL_CLIMB_RATE_FPM: float = 2500.0
    CRUISE_CLIMB_RATE_FPM: float = 1500.0
    DESCENT_RATE_FPM: float = 2000.0

    MIN_ROUTE_WAYPOINTS: int = 2

    DEPARTURE_WAYPOINT_TYPES = frozenset({'THRESHOLD', 'DEPARTURE', 'SID'})
    ARRIVAL_WAYPOINT_TYPES = frozenset({'THRESHOLD_ARR', 'ARRIVAL', 'STAR', 'APPROACH'})
