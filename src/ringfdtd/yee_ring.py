from __future__ import annotations
import logging
import threading
from typing import Optional

import numpy as np
import torch
from torch import Tensor

from .config import RingConfig
from .drift import correct_drift
from .errors import NumericalInstabilityError, TickOrderError
from .grid import FieldStore
from .source import PulseSource

logger = logging.getLogger(__name__)

# Neighbour shifts on the ring via torch.roll:
#   f[(i+1) mod N] is roll(f, -1)
#   f[(i-1) mod N] is roll(f, +1)


@torch.no_grad()
def update_magnetic_(E: Tensor, H: Tensor, coef: float):
    # H^{n+1/2}[i] = H^{n-1/2}[i] + dt/dx * (E^n[i+1] - E^n[i])
    H.add_(torch.roll(E, -1) - E, alpha=coef)


@torch.no_grad()
def update_electric_(E: Tensor, H: Tensor, coef: float):
    # E^{n+1}[i] = E^n[i] + dt/dx * (H^{n+1/2}[i] - H^{n+1/2}[i-1])
    E.add_(H - torch.roll(H, 1), alpha=coef)


@torch.no_grad()
def inject_source_(E: Tensor, H: Tensor, index: int, pulse: float):
    """Soft source: half the pulse out of the H cell behind, all of it into E."""
    n = E.shape[0]
    H[(index - 1 + n) % n] -= 0.5 * pulse
    E[index] += pulse


class YeeRing(torch.nn.Module):
    """1-D leapfrog (Yee) update on a periodic ring, vacuum, soft pulse source.

    One call to step(t) advances the store by exactly one tick:
      1. H from the pre-update E
      2. source injection (into the already updated H, and into E)
      3. E from the post-injection H
      4. mean removal on both arrays
    Each stage covers the whole ring before the next starts.
    """

    def __init__(self, config: Optional[RingConfig] = None):
        super().__init__()
        self.config = config if config is not None else RingConfig()
        cfg = self.config
        self.store = FieldStore(cfg.n_cells, dtype=cfg.dtype, device=cfg.device)
        self.source = PulseSource(peak_tick=cfg.peak_tick, width=cfg.width)
        self.source_index = int(cfg.source_index)
        self.coef = float(cfg.update_coef)
        self.ticks_completed = 0
        self._lock = threading.Lock()
        logger.debug("YeeRing: N=%d dx=%g dt=%g source@%d peak=%d width=%g",
                     cfg.n_cells, cfg.dx, cfg.dt, self.source_index,
                     cfg.peak_tick, cfg.width)

    @property
    def n_cells(self) -> int:
        return self.store.n_cells

    @property
    def next_tick(self) -> int:
        return self.ticks_completed

    @torch.no_grad()
    def step(self, tick: int):
        with self._lock:
            self._step_locked(tick)

    def _step_locked(self, tick: int):
        if tick != self.ticks_completed:
            raise TickOrderError(
                f"expected tick {self.ticks_completed}, got {tick}")
        E, H = self.store.E, self.store.H
        update_magnetic_(E, H, self.coef)
        pulse = self.source.excite(tick)
        inject_source_(E, H, self.source_index, pulse)
        update_electric_(E, H, self.coef)
        mean_e, mean_h = correct_drift(self.store)
        # the tick is consumed even when the fields blew up; it cannot be re-run
        self.ticks_completed += 1
        if self.config.check_finite and not self.store.is_finite():
            raise NumericalInstabilityError(tick)
        logger.debug("tick %d: pulse=%.3e removed mean E=%.3e H=%.3e",
                     tick, pulse, mean_e, mean_h)

    @torch.no_grad()
    def advance(self) -> int:
        """Step the next tick in sequence; returns the tick that was run."""
        with self._lock:
            tick = self.ticks_completed
            self._step_locked(tick)
        return tick

    def run(self, n_steps: int):
        for _ in range(int(n_steps)):
            self.advance()

    def snapshot(self, field: str = "E") -> Tensor:
        """Copy of one field taken between steps, safe to hand to a renderer."""
        with self._lock:
            return self.store.field(field).detach().clone()

    @property
    def electric(self) -> np.ndarray:
        arr = self.snapshot("E").cpu().numpy()
        arr.setflags(write=False)
        return arr

    @property
    def magnetic(self) -> np.ndarray:
        arr = self.snapshot("H").cpu().numpy()
        arr.setflags(write=False)
        return arr

    def energy(self) -> float:
        with self._lock:
            return self.store.energy()
