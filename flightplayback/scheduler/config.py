# flightplayback/scheduler/config.py
"""
Runtime settings for the simulation engine.
"""
from dataclasses import dataclass


@dataclass
class SimulationConfig:
    """Time scaling and playback limits. The defaults suit a 60 Hz render loop."""
    # Simulated seconds per real second at 1x playback
    time_scale: float = 60.0
    # Wall-clock deltas above this are treated as a stall and clamped
    max_frame_delta_sec: float = 0.1
    min_playback_speed: float = 0.25
    max_playback_speed: float = 4.0
    default_playback_speed: float = 1.0
    # Longest single physics integration step, in simulated seconds
    max_physics_step_sec: float = 1.0
