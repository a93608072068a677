"""Pulse injection strategies for ISM.

An injector adds each path's contribution to the 1-D output column of one
source/receiver pair. The strategy is chosen once per simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import torch
from torch import Tensor


class PulseInjector(Protocol):
    """Adds ``strength`` pulses arriving at ``dist`` samples into ``out``."""

    def __call__(self, out: Tensor, dist: Tensor, strength: Tensor) -> None:
        ...


@dataclass(frozen=True)
class BandlimitedInjector:
    """Windowed-sinc fractional delay (Peterson's low-pass pulse).

    Each pulse becomes ``window[n] * fc * sinc(fc * (n - frac - tw // 2))``
    added at samples ``floor(dist) - tw // 2 + n``, clipped to the output.
    """

    window: Tensor
    fc: float = 1.0
    chunk_size: int = 4096
    _grid: Tensor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        grid = torch.arange(
            self.window.numel(), device=self.window.device, dtype=self.window.dtype
        )
        object.__setattr__(self, "_grid", grid)

    @property
    def half_width(self) -> int:
        return (self.window.numel() - 1) // 2

    def __call__(self, out: Tensor, dist: Tensor, strength: Tensor) -> None:
        nsample = out.shape[0]
        half = self.half_width
        offsets = self._grid.to(torch.int64) - half
        for start in range(0, dist.numel(), self.chunk_size):
            d = dist[start : start + self.chunk_size]
            amp = strength[start : start + self.chunk_size]
            fdist = torch.floor(d)
            frac = d - fdist
            # torch.sinc is sin(pi x) / (pi x)
            t = self._grid[None, :] - frac[:, None] - half
            kernel = self.window[None, :] * self.fc * torch.sinc(self.fc * t)
            target = fdist.to(torch.int64)[:, None] + offsets[None, :]
            valid = (target >= 0) & (target < nsample)
            if not valid.any():
                continue
            contrib = amp[:, None] * kernel
            out.index_add_(0, target[valid], contrib[valid])


@dataclass(frozen=True)
class NearestSampleInjector:
    """Allen and Berkley's original placement at ``floor(dist)``."""

    chunk_size: int = 4096

    def __call__(self, out: Tensor, dist: Tensor, strength: Tensor) -> None:
        nsample = out.shape[0]
        for start in range(0, dist.numel(), self.chunk_size):
            target = torch.floor(dist[start : start + self.chunk_size]).to(torch.int64)
            amp = strength[start : start + self.chunk_size]
            valid = (target >= 0) & (target < nsample)
            out.index_add_(0, target[valid], amp[valid])


def select_injector(
    low_pass_interp: bool, window: Tensor, *, chunk_size: int = 4096
) -> PulseInjector:
    """Return the injection strategy for this simulation."""
    if low_pass_interp:
        return BandlimitedInjector(window=window, chunk_size=chunk_size)
    return NearestSampleInjector(chunk_size=chunk_size)
