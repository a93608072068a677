"""Image source lattice tables and reflection coefficient helpers.

A path is labelled per axis by a mirror index ``m`` and a parity ``p``; its
offset along the axis is ``2 m L + s - r + 2 p r`` and it bounces ``|2 m + p|``
times on that axis, ``|m|`` times on the low wall and ``|m + p|`` times on the
high wall.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

import torch
from torch import Tensor


@dataclass(frozen=True)
class AxisLattice:
    """Mirror/parity entries along one axis with their attenuation."""

    mirror: Tensor
    parity: Tensor
    attenuation: Tensor
    bounces: Tensor

    def __len__(self) -> int:
        return int(self.mirror.numel())


def _lattice_bound(nsample: int, length: float, active: bool) -> int:
    """Largest mirror index that can still arrive within ``nsample``."""
    if not active:
        return 0
    return int(math.ceil(nsample / (2.0 * length)))


def _axis_lattice(
    bound: int,
    active: bool,
    beta_lo: Tensor,
    beta_hi: Tensor,
    *,
    max_order: int = -1,
) -> AxisLattice:
    """Build the (m, p) table for one axis.

    A collapsed axis has the single entry ``(0, 0)``. With a bounded
    ``max_order`` entries that alone exceed it are dropped.
    """
    device, dtype = beta_lo.device, beta_lo.dtype
    m = torch.arange(-bound, bound + 1, device=device, dtype=torch.int64)
    p = torch.arange(0, 2 if active else 1, device=device, dtype=torch.int64)
    mirror = m.repeat_interleave(p.numel())
    parity = p.repeat(m.numel())
    bounces = torch.abs(2 * mirror + parity)
    if max_order >= 0:
        keep = bounces <= max_order
        mirror, parity, bounces = mirror[keep], parity[keep], bounces[keep]
    attenuation = torch.pow(beta_lo, torch.abs(mirror).to(dtype)) * torch.pow(
        beta_hi, torch.abs(mirror + parity).to(dtype)
    )
    return AxisLattice(
        mirror=mirror.to(dtype),
        parity=parity.to(dtype),
        attenuation=attenuation,
        bounces=bounces,
    )


def _image_lattices(
    room_size: Tensor,
    beta: Tensor,
    dim: tuple[bool, bool, bool],
    nsample: int,
    *,
    max_order: int = -1,
) -> tuple[AxisLattice, AxisLattice, AxisLattice]:
    """Per-axis lattice tables shared by every source/receiver pair."""
    beta = beta.view(3, 2)
    lattices = []
    for axis in range(3):
        bound = _lattice_bound(nsample, float(room_size[axis]), dim[axis])
        lattices.append(
            _axis_lattice(
                bound,
                dim[axis],
                beta[axis, 0],
                beta[axis, 1],
                max_order=max_order,
            )
        )
    return lattices[0], lattices[1], lattices[2]


def _axis_offsets(lattice: AxisLattice, length: Tensor, src: Tensor, mic: Tensor) -> Tensor:
    """Image-to-receiver offsets along one axis for every lattice entry."""
    return 2.0 * lattice.mirror * length + src - mic + 2.0 * lattice.parity * mic
