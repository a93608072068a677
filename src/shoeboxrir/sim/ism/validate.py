"""Validation helpers for ISM inputs."""

from __future__ import annotations

from typing import Optional

import torch
from torch import Tensor

from ...config import SimulationConfig, default_config
from ...models import MicrophoneArray, Room, Source
from ...util.acoustics import estimate_nsample


def _resolve_config(
    *,
    config: Optional[SimulationConfig],
    nsample: Optional[int],
    max_order: Optional[int],
) -> SimulationConfig:
    """Merge call-site overrides into the config and validate it."""
    cfg = config or default_config()
    overrides = {}
    if nsample is not None:
        overrides["nsample"] = nsample
    if max_order is not None:
        overrides["max_order"] = max_order
    if overrides:
        return cfg.replace(**overrides)
    cfg.validate()
    return cfg


def _validate_types(room: object, sources: object, mics: object) -> None:
    if not isinstance(room, Room):
        raise TypeError("room must be a Room instance")
    if not isinstance(sources, Source):
        raise TypeError("sources must be a Source instance")
    if not isinstance(mics, MicrophoneArray):
        raise TypeError("mics must be a MicrophoneArray instance")


def _validate_static_args(
    *,
    room: Room,
    beta: Tensor,
    cfg: SimulationConfig,
) -> int:
    """Return the output length in samples, estimating it when unset."""
    nsample = cfg.nsample
    if nsample is None:
        if room.t60 is not None:
            nsample = estimate_nsample(
                room.size,
                room.fs,
                t60=room.t60,
                c=room.c,
                min_duration=cfg.min_duration,
            )
        else:
            nsample = estimate_nsample(
                room.size,
                room.fs,
                beta=beta,
                c=room.c,
                min_duration=cfg.min_duration,
            )
    if nsample <= 0:
        raise ValueError("nsample must be positive")
    return nsample


def _validate_pos_shapes(src_pos: Tensor, mic_pos: Tensor) -> None:
    if src_pos.ndim != 2 or src_pos.shape[1] != 3:
        raise ValueError("sources must be of shape (n_src, 3)")
    if mic_pos.ndim != 2 or mic_pos.shape[1] != 3:
        raise ValueError("mics must be of shape (n_mic, 3)")


def _validate_distinct_positions(src_pos: Tensor, mic_pos: Tensor) -> None:
    """Reject receivers placed exactly on a source (zero-length direct path)."""
    same = torch.all(mic_pos[:, None, :] == src_pos[None, :, :].to(mic_pos), dim=-1)
    if torch.any(same):
        mic_idx, src_idx = (int(v) for v in torch.nonzero(same)[0])
        raise ValueError(
            f"mic {mic_idx} coincides with source {src_idx}; "
            "the direct path would have zero length"
        )
