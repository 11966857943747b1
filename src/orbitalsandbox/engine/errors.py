class SimulationError(Exception):
    """Base class for failures raised by the engine."""


class DegenerateGeometryError(SimulationError, ValueError):
    """Two points that must be apart coincide (zero separation).

    Raised wherever a separation feeds a division or a normalize: force
    magnitude, orbital velocity and insertion.
    """


class EmptySystemError(SimulationError, ValueError):
    """An aggregate was requested over a system with no bodies."""
