__all__ = [
    "RingConfig",
    "RenderConfig",
    "FieldStore",
    "PulseSource",
    "YeeRing",
    "ScanlineRenderer",
    "ClockDriver",
    "correct_drift",
    "ConfigurationError",
    "TickOrderError",
    "NumericalInstabilityError",
    "C0",
    "DX",
    "DT",
    "COURANT",
]

from .config import RingConfig, RenderConfig, C0, DX, DT, COURANT
from .errors import ConfigurationError, TickOrderError, NumericalInstabilityError
from .grid import FieldStore
from .source import PulseSource
from .drift import correct_drift
from .yee_ring import YeeRing
from .render import ScanlineRenderer
from .driver import ClockDriver
