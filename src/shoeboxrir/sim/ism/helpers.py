"""Helper routines for ISM simulations."""

from __future__ import annotations

from typing import Optional, Tuple

import torch
from torch import Tensor

from ...models import Room
from ...util.acoustics import estimate_beta_from_t60


def _resolve_beta(room: Room) -> Tuple[Tensor, Optional[float]]:
    """Return the six effective reflection coefficients and ``beta_hat``.

    Coefficients of collapsed axes are zeroed. ``beta_hat`` is only set when
    the room was described by its reverberation time.
    """
    beta_hat = None
    if room.beta is not None:
        beta = room.beta.to(torch.float64).clone()
    else:
        beta_hat = estimate_beta_from_t60(room.size, room.t60, c=room.c)
        beta = torch.full((6,), beta_hat, dtype=torch.float64)
    return _mask_beta(beta, room.dim), beta_hat


def _mask_beta(beta: Tensor, dim: tuple[bool, bool, bool]) -> Tensor:
    """Force both coefficients of every collapsed axis to zero."""
    beta = beta.view(3, 2).clone()
    for axis, active in enumerate(dim):
        if not active:
            beta[axis] = 0.0
    return beta.view(-1)
