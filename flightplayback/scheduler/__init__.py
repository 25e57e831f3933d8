"""
Initializes the scheduler module, defining its public API.
"""
# Core logic classes from core.py
from .core import SimulationEngine, advance_state, PHASE_OWNERS

# Public data models and settings
from .config import SimulationConfig
from .data_models import SimulationOutput, PhaseTransition
from .exceptions import SchedulerError, EngineNotReadyError, PhaseOwnershipError

__all__ = [
    'SimulationEngine',
    'advance_state',
    'PHASE_OWNERS',
    'SimulationConfig',
    'SimulationOutput',
    'PhaseTransition',
    'SchedulerError',
    'EngineNotReadyError',
    'PhaseOwnershipError',
]
