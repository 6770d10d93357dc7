from __future__ import annotations
import logging

from .yee_ring import YeeRing

logger = logging.getLogger(__name__)


class ClockDriver:
    """Calls YeeRing.advance() once per clock tick unless paused.

    Pausing only withholds steps; the tick counter and fields are left alone,
    so a resumed run continues exactly where an unpaused one would be.
    """

    def __init__(self, sim: YeeRing, running: bool = True):
        self.sim = sim
        self.running = running

    def toggle(self) -> bool:
        self.running = not self.running
        logger.info("%s at tick %d", "resumed" if self.running else "paused",
                    self.sim.next_tick)
        return self.running

    def tick(self) -> bool:
        if not self.running:
            return False
        self.sim.advance()
        return True

    def run(self, n_ticks: int) -> int:
        """Run n clock ticks; returns how many simulation steps happened."""
        return sum(1 for _ in range(int(n_ticks)) if self.tick())
