"""Tensor helpers."""

from __future__ import annotations

from typing import Iterable, Optional

import torch
from torch import Tensor

from .device import resolve_device


def as_tensor(
    value: Tensor | Iterable[float] | Iterable[Iterable[float]] | float | int,
    *,
    device: Optional[torch.device | str] = None,
    dtype: Optional[torch.dtype] = None,
) -> Tensor:
    """Convert a value to a tensor while preserving device/dtype when possible."""
    if isinstance(device, str):
        device = resolve_device(device)
    if torch.is_tensor(value):
        out = value
        if device is not None:
            out = out.to(device)
        if dtype is not None:
            out = out.to(dtype)
        return out
    return torch.as_tensor(value, device=device, dtype=dtype)


def ensure_size3(size: Tensor) -> Tensor:
    """Validate a shoebox size vector (Lx, Ly, Lz)."""
    if size.ndim != 1 or size.numel() != 3:
        raise ValueError("room size must be a 1D tensor of length 3")
    return size


def ensure_positions(positions: Tensor, *, name: str) -> Tensor:
    """Return positions as an (n, 3) tensor, promoting a single (3,) point."""
    if positions.ndim == 1:
        positions = positions.unsqueeze(0)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"{name} positions must have shape (n, 3)")
    if positions.shape[0] == 0:
        raise ValueError(f"at least one {name} position is required")
    if not torch.all(torch.isfinite(positions)):
        raise ValueError(f"{name} positions must contain finite values")
    return positions
