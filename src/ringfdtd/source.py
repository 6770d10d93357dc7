from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class PulseSource:
    """Derivative-of-Gaussian pulse; its discrete time-integral is ~0."""
    peak_tick: int = 30
    width: float = 8.0

    def excite(self, tick: int) -> float:
        tau = (tick - self.peak_tick) / self.width
        return -tau * math.exp(-0.5 * tau * tau)

    __call__ = excite

    def net_area(self, ticks: Iterable[int]) -> float:
        return math.fsum(self.excite(t) for t in ticks)
