from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional

import torch

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Normalised units: c = dx = dt = 1 (unit Courant number).
C0 = 1.0
DX = 1.0
COURANT = 1.0
DT = COURANT * DX / C0


@dataclass
class RingConfig:
    n_cells: int = 600
    dx: float = DX
    courant: float = COURANT
    source_index: Optional[int] = None   # None -> ring midpoint
    peak_tick: int = 30
    width: float = 8.0                   # pulse sigma, in ticks
    dtype: torch.dtype = torch.float64
    device: str = "cpu"
    check_finite: bool = False

    def __post_init__(self):
        if int(self.n_cells) <= 0:
            raise ConfigurationError(f"ring size must be positive, got {self.n_cells}")
        self.n_cells = int(self.n_cells)
        if not (self.dx > 0 and math.isfinite(self.dx)):
            raise ConfigurationError(f"dx must be a positive finite number, got {self.dx}")
        if not (self.courant > 0 and math.isfinite(self.courant)):
            raise ConfigurationError(f"Courant number must be positive, got {self.courant}")
        if not (self.width > 0 and math.isfinite(self.width)):
            raise ConfigurationError(f"pulse width must be positive, got {self.width}")
        if self.source_index is None:
            self.source_index = self.n_cells // 2
        if not 0 <= self.source_index < self.n_cells:
            raise ConfigurationError(
                f"source index {self.source_index} outside [0, {self.n_cells})")
        if self.courant > 1.0:
            logger.warning("Courant number %.3g > 1: the 1-D Yee update is unstable",
                           self.courant)

    @property
    def dt(self) -> float:
        """Time step from the Courant relation dt = S * dx / c."""
        return self.courant * self.dx / C0

    @property
    def update_coef(self) -> float:
        return self.dt / self.dx


@dataclass
class RenderConfig:
    height: int = 200
    draw_scale: float = 0.7
    epsilon: float = 1e-6   # |value * draw_scale| below this is drawn as 0

    def __post_init__(self):
        if int(self.height) <= 0:
            raise ConfigurationError(f"display height must be positive, got {self.height}")
        self.height = int(self.height)
        if not math.isfinite(self.draw_scale):
            raise ConfigurationError(f"draw scale must be finite, got {self.draw_scale}")
        if not (self.epsilon >= 0 and math.isfinite(self.epsilon)):
            raise ConfigurationError(f"zero-snap epsilon must be >= 0, got {self.epsilon}")
