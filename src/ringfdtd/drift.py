from __future__ import annotations
import torch
from torch import Tensor

from .grid import FieldStore


@torch.no_grad()
def remove_mean_(field: Tensor) -> float:
    """Subtract the mean of `field` in place; returns the removed mean."""
    mean = field.mean()
    field.sub_(mean)
    return float(mean.item())


def correct_drift(store: FieldStore) -> tuple[float, float]:
    # unconditional, once per tick
    return remove_mean_(store.E), remove_mean_(store.H)
