# flightplayback/snapshot/exceptions.py
"""
Snapshot Builder Exceptions
Error types raised while freezing a planning state into a simulation snapshot
"""
from typing import List


class SnapshotError(Exception):
    """Base class for all snapshot builder errors"""
    pass


class SnapshotValidationError(SnapshotError):
    """The planning state is incomplete; every problem found is listed"""
    def __init__(self, errors: List[str], message="Invalid planning state"):
        self.errors = list(errors)
        super().__init__(f"{message}: {'; '.join(self.errors)}")


class RunwayInvariantError(SnapshotError):
    """A selected runway end has no usable opposite end"""
    def __init__(self, designator, message="No opposite runway end found"):
        self.designator = designator
        super().__init__(f"{message} for {designator}")
