"""General-purpose acoustic, device, and tensor utilities for shoeboxrir."""

from .acoustics import (
    InfeasibleRoomError,
    estimate_beta_from_t60,
    estimate_nsample,
    estimate_t60_from_beta,
)
from .device import resolve_device, resolve_dtype
from .tensor import as_tensor, ensure_positions, ensure_size3

__all__ = [
    "InfeasibleRoomError",
    "as_tensor",
    "ensure_positions",
    "ensure_size3",
    "estimate_beta_from_t60",
    "estimate_nsample",
    "estimate_t60_from_beta",
    "resolve_device",
    "resolve_dtype",
]
