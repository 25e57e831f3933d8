"""
Initializes the phases module, defining its public API.

Each physics module owns a disjoint slice of FlightPhase and exposes a
predicate (is_*_phase) plus a single advance function that the scheduler
dispatches to.
"""
# Shared state models from data_models.py
from .data_models import FlightPhase, PhaseState, create_initial_phase_state

# Phase physics modules
from .takeoff import is_takeoff_phase, advance_takeoff_phase
from .enroute import is_enroute_phase, advance_enroute_phase
from .landing import is_landing_phase, advance_landing_phase

__all__ = [
    'FlightPhase',
    'PhaseState',
    'create_initial_phase_state',
    'is_takeoff_phase',
    'advance_takeoff_phase',
    'is_enroute_phase',
    'advance_enroute_phase',
    'is_landing_phase',
    'advance_landing_phase',
]
