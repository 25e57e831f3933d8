"""
flightplayback: a deterministic, phase-based flight playback engine.

A planning state is frozen into a SimulationSnapshot, which a SimulationEngine
then flies from runway lineup to taxi-in, one physics step at a time.
"""
# Snapshot builder
from .snapshot import create_simulation_snapshot, validate_planning_state, PlanningState, SimulationSnapshot

# Phase models
from .phases import FlightPhase, PhaseState

# Scheduler
from .scheduler import SimulationEngine, SimulationConfig, SimulationOutput

__all__ = [
    'create_simulation_snapshot',
    'validate_planning_state',
    'PlanningState',
    'SimulationSnapshot',
    'FlightPhase',
    'PhaseState',
    'SimulationEngine',
    'SimulationConfig',
    'SimulationOutput',
]
