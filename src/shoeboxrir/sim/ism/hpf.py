from __future__ import annotations

"""Allen-Berkley high-pass (DC removal) filter for RIRs."""

import math

import numpy as np
import torch
from torch import Tensor

_CUTOFF_HZ = 100.0


def _allen_berkley_ba(fs: float, fc: float = _CUTOFF_HZ) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(b, a)`` of the fixed second-order high-pass.

    The recursion ``y0 = B1 y1 + B2 y2 + x0``, ``out = y0 + A1 y1 + A2 y2``
    is the transfer function ``(1 + A1 z^-1 + A2 z^-2) / (1 - B1 z^-1 - B2 z^-2)``.
    """
    if fs <= 0:
        raise ValueError("fs must be positive")
    w = 2.0 * math.pi * fc / fs
    r = math.exp(-w)
    b1 = 2.0 * r * math.cos(w)
    b2 = -r * r
    a1 = -(1.0 + r)
    a2 = r
    return np.array([1.0, a1, a2]), np.array([1.0, -b1, -b2])


def apply_allen_berkley_hpf(rir: Tensor, fs: float) -> Tensor:
    """Filter ``rir`` along its last axis and return a new tensor."""
    try:
        from scipy.signal import lfilter
    except ImportError as exc:
        raise ImportError(
            "scipy is required when high_pass=True. "
            "Install scipy or disable the high-pass filter."
        ) from exc

    b, a = _allen_berkley_ba(fs)
    rir_np = rir.detach().cpu().to(torch.float64).numpy()
    filtered = np.ascontiguousarray(lfilter(b, a, rir_np, axis=-1))
    return torch.as_tensor(filtered, device=rir.device, dtype=rir.dtype)
