# flightplayback/scheduler/exceptions.py
"""
Scheduler Exceptions
Error types raised by the simulation engine and its phase dispatch
"""


class SchedulerError(Exception):
    """Base class for all scheduler errors"""
    pass


class EngineNotReadyError(SchedulerError):
    """A playback control was used before a snapshot was loaded"""
    def __init__(self, operation, message="No snapshot loaded"):
        self.operation = operation
        super().__init__(f"{message}: cannot {operation}")


class PhaseOwnershipError(SchedulerError):
    """The phase modules do not partition FlightPhase exactly once"""
    def __init__(self, phases, message="Phase ownership is not a partition"):
        self.phases = list(phases)
        super().__init__(f"{message}: {', '.join(p.name for p in self.phases)}")
