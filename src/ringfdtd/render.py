from __future__ import annotations
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
import torch

from .config import RenderConfig


def _as_numpy(field) -> np.ndarray:
    if torch.is_tensor(field):
        field = field.detach().cpu().numpy()
    return np.array(field, dtype=np.float64)   # always a copy


class ScanlineRenderer:
    """
    Maps a field snapshot to display rows of a `height`-pixel tall trace.

    Values are scaled by draw_scale; anything with |v| < epsilon is snapped to
    exactly zero before rounding, otherwise residual noise left after drift
    correction lands on alternating rows and the baseline looks doubled.
    Works on a copy; the simulation arrays are never touched.
    """

    def __init__(self, height: int = 200, draw_scale: float = 0.7, epsilon: float = 1e-6):
        self.config = RenderConfig(height=height, draw_scale=draw_scale, epsilon=epsilon)

    @classmethod
    def from_config(cls, config: RenderConfig) -> "ScanlineRenderer":
        return cls(config.height, config.draw_scale, config.epsilon)

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mid(self) -> float:
        return self.config.height / 2.0

    def display_values(self, field) -> np.ndarray:
        v = _as_numpy(field) * self.config.draw_scale
        v[np.abs(v) < self.config.epsilon] = 0.0
        return v

    def pixel_rows(self, field) -> np.ndarray:
        # row = round(mid - v * mid), halves rounded up
        v = self.display_values(field)
        rows = np.floor(self.mid - v * self.mid + 0.5).astype(np.int64)
        return np.clip(rows, 0, self.config.height - 1)

    def rasterize(self, field, image: Optional[np.ndarray] = None) -> np.ndarray:
        """Draw the connected trace into a [height, N] uint8 image (255 = lit)."""
        rows = self.pixel_rows(field)
        n = rows.shape[0]
        if image is None:
            image = np.zeros((self.config.height, n), dtype=np.uint8)
        else:
            image[...] = 0
        prev = rows[0]
        for col, row in enumerate(rows):
            lo, hi = (prev, row) if prev <= row else (row, prev)
            image[lo:hi + 1, col] = 255
            prev = row
        return image

    def plot(self, field, ax=None, title: Optional[str] = None):
        """Trace on a matplotlib axis with the display scale applied."""
        rows = self.pixel_rows(field)
        if ax is None:
            _, ax = plt.subplots(figsize=(8, 3))
        line, = ax.plot(np.arange(rows.shape[0]), rows, 'b-', lw=1)
        ax.set_ylim(self.config.height - 1, 0)
        ax.set_xlim(0, rows.shape[0] - 1)
        ax.set_xlabel('cell')
        ax.set_ylabel('row')
        if title:
            ax.set_title(title)
        return line
