"""Preprocessing of ISM inputs: sample units, interpolation window."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional

import torch
from torch import Tensor

from ...models import MicrophoneArray, Room, Source
from ...util.tensor import as_tensor


@dataclass(frozen=True)
class PreparedGeometry:
    """Read-only inputs shared by all workers, lengths in samples."""

    src_pos: Tensor
    mic_pos: Tensor
    room_size: Tensor
    beta: Tensor
    dim: tuple[bool, bool, bool]
    window: Tensor
    nsample: int
    cts: float

    @property
    def n_src(self) -> int:
        return int(self.src_pos.shape[0])

    @property
    def n_mic(self) -> int:
        return int(self.mic_pos.shape[0])


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else int(math.ceil(value - 0.5))


def _window_length(window_seconds: float, fs: float) -> int:
    """Return ``Tw``; the interpolation kernel spans ``Tw + 1`` samples."""
    return max(1, _round_half_away(window_seconds * fs))


def _hanning_window(
    tw: int, *, device: Optional[torch.device] = None, dtype: torch.dtype = torch.float64
) -> Tensor:
    """Raised-cosine window of length ``tw + 1`` peaking at ``tw // 2``."""
    n = torch.arange(tw + 1, device=device, dtype=dtype)
    return 0.5 * (1.0 + torch.cos(2.0 * math.pi * (n + tw // 2) / tw))


def _prepare_static_tensors(
    *,
    room: Room,
    sources: Source,
    mics: MicrophoneArray,
    beta: Tensor,
    nsample: int,
    window_seconds: float,
    device: torch.device,
    dtype: torch.dtype,
) -> PreparedGeometry:
    """Convert geometry to sample units and build the interpolation window."""
    cts = room.c / room.fs
    src_pos = as_tensor(sources.positions, device=device, dtype=dtype) / cts
    mic_pos = as_tensor(mics.positions, device=device, dtype=dtype) / cts
    room_size = as_tensor(room.size, device=device, dtype=dtype) / cts
    window = _hanning_window(
        _window_length(window_seconds, room.fs), device=device, dtype=dtype
    )
    return PreparedGeometry(
        src_pos=src_pos,
        mic_pos=mic_pos,
        room_size=room_size,
        beta=as_tensor(beta, device=device, dtype=dtype),
        dim=room.dim,
        window=window,
        nsample=nsample,
        cts=cts,
    )
