from __future__ import annotations


class RingFDTDError(Exception):
    """Base class for errors raised by the ring simulator."""


class ConfigurationError(RingFDTDError, ValueError):
    """Invalid construction parameter (simulation or renderer)."""


class TickOrderError(RingFDTDError, ValueError):
    """step() called with a tick that is not the next one in sequence."""


class NumericalInstabilityError(RingFDTDError, RuntimeError):
    """Non-finite field values found after a step."""

    def __init__(self, tick: int):
        super().__init__(f"non-finite field values after tick {tick} "
                         "(Courant violation or update bug)")
        self.tick = tick
