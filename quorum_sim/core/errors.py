class SimulationError(Exception):
    """Base class for faults that abort a run."""


class ProtocolViolation(SimulationError):
    """A safety invariant of the allocation protocol was broken."""


class RoutingError(SimulationError):
    """A message reached a participant that cannot handle it."""
