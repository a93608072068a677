from __future__ import annotations

"""Reverberation-time formulas for shoebox rooms.

All relations use the Sabine form ``T60 = 24 ln(10) V / (c A)`` where ``A`` is
the equivalent absorption area ``sum(area_i * (1 - beta_i**2))``.
"""

import math
from typing import Optional, Sequence

import torch
from torch import Tensor

from .tensor import as_tensor, ensure_size3

_DEF_SPEED_OF_SOUND = 343.0
_SABINE = 24.0 * math.log(10.0)


class InfeasibleRoomError(ValueError):
    """Raised when a reverberation time cannot be realised by a room."""


def _volume_and_walls(size: Tensor) -> tuple[float, list[float]]:
    size = ensure_size3(as_tensor(size))
    lx, ly, lz = (float(v) for v in size.tolist())
    walls = [ly * lz, ly * lz, lx * lz, lx * lz, lx * ly, lx * ly]
    return lx * ly * lz, walls


def estimate_beta_from_t60(
    size: Tensor | Sequence[float],
    t60: float,
    *,
    c: float = _DEF_SPEED_OF_SOUND,
) -> float:
    """Return the uniform reflection coefficient that yields ``t60``.

    Raises:
        InfeasibleRoomError: when the implied absorption coefficient exceeds 1.

    Example:
        >>> beta = estimate_beta_from_t60([6.0, 4.0, 3.0], t60=0.4)
    """
    if t60 <= 0:
        raise ValueError("t60 must be positive")
    if c <= 0:
        raise ValueError("c must be positive")
    volume, walls = _volume_and_walls(as_tensor(size, dtype=torch.float64))
    surface = sum(walls)
    alpha = _SABINE * volume / (c * surface * t60)
    if alpha > 1.0:
        raise InfeasibleRoomError(
            f"reflection coefficients cannot be computed for t60={t60} s in this "
            f"room (absorption coefficient {alpha:.3f} > 1); specify the "
            "reflection coefficients or change the room size or reverberation time"
        )
    return math.sqrt(1.0 - alpha)


def estimate_t60_from_beta(
    size: Tensor | Sequence[float],
    beta: Tensor | Sequence[float],
    *,
    c: float = _DEF_SPEED_OF_SOUND,
) -> float:
    """Estimate T60 from six wall reflection coefficients.

    Returns ``inf`` when no wall absorbs.

    Example:
        >>> t60 = estimate_t60_from_beta([6.0, 4.0, 3.0], [0.9] * 6)
    """
    volume, walls = _volume_and_walls(as_tensor(size, dtype=torch.float64))
    beta = as_tensor(beta, dtype=torch.float64).reshape(-1)
    if beta.numel() != 6:
        raise ValueError("beta must have 6 elements")
    areas = torch.tensor(walls, dtype=torch.float64)
    absorption = torch.sum(areas * (1.0 - beta**2)).item()
    if absorption <= 0.0:
        return float("inf")
    return _SABINE * volume / (c * absorption)


def estimate_nsample(
    size: Tensor | Sequence[float],
    fs: float,
    *,
    beta: Optional[Tensor | Sequence[float]] = None,
    t60: Optional[float] = None,
    c: float = _DEF_SPEED_OF_SOUND,
    min_duration: float = 0.128,
) -> int:
    """Estimate the RIR length in samples.

    A given ``t60`` is used as is. Otherwise the reverberation time implied by
    ``beta`` is floored to ``min_duration`` seconds.

    Example:
        >>> n = estimate_nsample([6.0, 4.0, 3.0], 16000, beta=[0.9] * 6)
    """
    if (beta is None) == (t60 is None):
        raise ValueError("exactly one of beta or t60 must be provided")
    if t60 is not None:
        duration = t60
    else:
        duration = estimate_t60_from_beta(size, beta, c=c)
        if math.isinf(duration):
            raise ValueError(
                "cannot estimate nsample for a room without absorption; "
                "provide nsample explicitly"
            )
        duration = max(duration, min_duration)
    return int(duration * fs)
