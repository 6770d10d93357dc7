from __future__ import annotations
import torch
from torch import Tensor


class FieldStore(torch.nn.Module):
    """
    Electric and magnetic samples on a periodic ring of N cells.

    E[i] sits at integer position i (time step n), H[i] at position i + 1/2
    (time step n + 1/2). Both arrays are allocated once, zero-initialised and
    only ever mutated in place.
    """

    FIELDS = ("E", "H")

    def __init__(self, n_cells: int, dtype: torch.dtype = torch.float64,
                 device: str | torch.device = "cpu"):
        super().__init__()
        self.n_cells = int(n_cells)
        # registered as buffers so they move with the module
        self.register_buffer('E', torch.zeros(self.n_cells, dtype=dtype, device=device))
        self.register_buffer('H', torch.zeros(self.n_cells, dtype=dtype, device=device))

    def __len__(self) -> int:
        return self.n_cells

    def field(self, name: str) -> Tensor:
        if name not in self.FIELDS:
            raise ValueError(f"unknown field {name!r}, expected one of {self.FIELDS}")
        return getattr(self, name)

    # neighbour lookups on the ring
    def next_index(self, i: int) -> int:
        return (i + 1) % self.n_cells

    def prev_index(self, i: int) -> int:
        return (i - 1 + self.n_cells) % self.n_cells

    def get(self, name: str, index: int) -> float:
        return float(self.field(name)[index % self.n_cells].item())

    @torch.no_grad()
    def update(self, name: str, index: int, delta: float):
        self.field(name)[index % self.n_cells] += delta

    @torch.no_grad()
    def reset(self):
        self.E.zero_()
        self.H.zero_()

    def means(self) -> tuple[float, float]:
        return float(self.E.mean().item()), float(self.H.mean().item())

    def energy(self) -> float:
        """Sum of E^2 + H^2 over the ring (unit permittivity/permeability)."""
        return float((self.E.square().sum() + self.H.square().sum()).item())

    def is_finite(self) -> bool:
        return bool(torch.isfinite(self.E).all() and torch.isfinite(self.H).all())
