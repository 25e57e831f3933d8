# flightplayback/phases/constants.py

class TakeoffConstants:
    ROTATE_ACCELERATION_FACTOR: float = 0.5
    LIFTOFF_PITCH_DEG: float = 8.0
    LIFTOFF_ACCELERATION_KTS_S: float = 1.5
    LIFTOFF_SPEED_MARGIN_KTS: float = 20.0
    VS_RAMP_RATE_FPM_S: float = 500.0
    INITIAL_CLIMB_AGL_FT: float = 400.0
    INITIAL_CLIMB_VS_FRACTION: float = 0.9


class EnrouteConstants:
    WAYPOINT_CAPTURE_RADIUS_NM: float = 1.0
    # Bearings to targets closer than this are meaningless
    NEGLIGIBLE_DISTANCE_NM: float = 1e-6
    MIN_BANK_HEADING_DIFF_DEG: float = 1.0
    PITCH_EASE_RATE_DEG_S: float = 1.0

    SPEED_LIMIT_ALTITUDE_FT: float = 10000.0
    LOW_ALTITUDE_SPEED_LIMIT_KTS: float = 250.0

    # --- Initial climb ---
    INITIAL_CLIMB_ACCELERATION_KTS_S: float = 2.0
    INITIAL_CLIMB_EXIT_HEADING_DEG: float = 5.0
    INITIAL_CLIMB_EXIT_SPEED_FRACTION: float = 0.95

    # --- Climb ---
    CLIMB_ACCELERATION_KTS_S: float = 1.5
    CLIMB_HIGH_SPEED_CAP_KTS: float = 300.0
    CLIMB_HIGH_SPEED_CRUISE_FRACTION: float = 0.85
    CLIMB_PITCH_DEG: float = 8.0

    # --- Cruise ---
    CRUISE_ACCELERATION_KTS_S: float = 1.0
    CRUISE_PITCH_DEG: float = 2.0
    TOD_NM_PER_1000_FT: float = 3.0
    TOD_BUFFER_NM: float = 50.0

    # --- Descent ---
    DESCENT_ACCELERATION_KTS_S: float = 2.0
    DESCENT_LOW_SPEED_CRUISE_FRACTION: float = 0.7
    DESCENT_HIGH_SPEED_CRUISE_FRACTION: float = 0.8
    DESCENT_PITCH_DEG: float = -2.0
    APPROACH_ALTITUDE_FT: float = 3000.0
    APPROACH_MIN_FIELD_CLEARANCE_FT: float = 1500.0
    DIRECT_TO_THRESHOLD_NM: float = 30.0
    APPROACH_ENTRY_NM: float = 20.0


class LandingConstants:
    GLIDESLOPE_DEG: float = 3.0
    # Proportional gain on glideslope altitude error (fpm per ft)
    GLIDESLOPE_CORRECTION_GAIN: float = 5.0

    # --- Approach ---
    APPROACH_ACCELERATION_KTS_S: float = 3.0
    APPROACH_SPEED_MARGIN_KTS: float = 20.0
    APPROACH_DESCENT_RATE_FPM: float = 1500.0
    APPROACH_MIN_AGL_FT: float = 1500.0
    APPROACH_PITCH_DEG: float = 0.0
    ALIGNMENT_TOLERANCE_DEG: float = 15.0
    FINAL_APPROACH_FIX_NM: float = 8.0
    FINAL_ENTRY_NM: float = 10.0

    # --- Final ---
    FINAL_DECELERATION_KTS_S: float = 2.0
    FINAL_SPEED_MARGIN_KTS: float = 5.0
    FINAL_PITCH_DEG: float = -3.0
    TOUCHDOWN_AGL_FT: float = 50.0
    TOUCHDOWN_DISTANCE_NM: float = 0.1
    FLARE_PITCH_DEG: float = 2.0

    # --- Rollout ---
    BRAKING_DECELERATION_KTS_S: float = 4.0
    PITCH_LOWERING_RATE_DEG_S: float = 2.0
    TAXI_SPEED_KTS: float = 20.0
    TAXI_IN_DECELERATION_KTS_S: float = 0.5
    TAXI_IN_SPEED_KTS: float = 15.0
    TAXI_IN_RUNWAY_FRACTION: float = 0.8
    TAXI_IN_DURATION_SEC: float = 30.0
