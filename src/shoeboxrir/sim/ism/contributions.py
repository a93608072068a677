"""Compute image-source contributions for one source/receiver pair."""

from __future__ import annotations

import math
from typing import Iterator, Tuple

import torch
from torch import Tensor

from ..directivity import MicPattern, directivity_gain
from .images import AxisLattice, _axis_offsets

# Path lengths are in samples.
_MIN_DIST = 1e-6


def _compute_pair_contributions(
    src: Tensor,
    mic: Tensor,
    room_size: Tensor,
    lattices: tuple[AxisLattice, AxisLattice, AxisLattice],
    *,
    nsample: int,
    cts: float,
    max_order: int,
    pattern: MicPattern,
    orientation: float,
    chunk_size: int,
) -> Iterator[Tuple[Tensor, Tensor]]:
    """Yield ``(dist, strength)`` for every path that reaches the output.

    ``dist`` is the path length in samples and ``strength`` the amplitude
    ``gain * attenuation / (4 pi r)`` with ``r`` in metres. The lattice is
    walked along its flattened (x, y, z) index so at most ``chunk_size``
    cells are live at once.
    """
    lat_x, lat_y, lat_z = lattices
    off_x = _axis_offsets(lat_x, room_size[0], src[0], mic[0])
    off_y = _axis_offsets(lat_y, room_size[1], src[1], mic[1])
    off_z = _axis_offsets(lat_z, room_size[2], src[2], mic[2])

    n_z = off_z.numel()
    n_plane = off_y.numel() * n_z
    total = off_x.numel() * n_plane
    for start in range(0, total, chunk_size):
        idx = torch.arange(
            start, min(start + chunk_size, total), device=off_x.device
        )
        ix = torch.div(idx, n_plane, rounding_mode="floor")
        rem = idx - ix * n_plane
        iy = torch.div(rem, n_z, rounding_mode="floor")
        iz = rem - iy * n_z

        dx, dy = off_x[ix], off_y[iy]
        dist = torch.sqrt(dx**2 + dy**2 + off_z[iz] ** 2)
        keep = torch.floor(dist) < nsample
        if max_order >= 0:
            bounces = lat_x.bounces[ix] + lat_y.bounces[iy] + lat_z.bounces[iz]
            keep &= bounces <= max_order
        refl = (
            lat_x.attenuation[ix] * lat_y.attenuation[iy] * lat_z.attenuation[iz]
        )
        keep &= refl != 0
        if not keep.any():
            continue

        dist = torch.clamp(dist[keep], min=_MIN_DIST)
        gain = directivity_gain(dx[keep], dy[keep], orientation, pattern)
        strength = gain * refl[keep] / (4.0 * math.pi * dist * cts)
        yield dist, strength
