from __future__ import annotations

"""ISM API for static RIR simulation."""

from typing import Optional, Sequence, Tuple

import torch
from torch import Tensor

from ...config import SimulationConfig
from ...logging_utils import get_logger
from ...models import MicrophoneArray, RIRResult, Room, Source
from ...util.device import resolve_device, resolve_dtype
from ..directivity import MicPattern
from .accumulate import PulseInjector, select_injector
from .contributions import _compute_pair_contributions
from .helpers import _resolve_beta
from .hpf import apply_allen_berkley_hpf
from .images import AxisLattice, _image_lattices
from .parallel import resolve_worker_count, run_partitioned
from .prepare import PreparedGeometry, _prepare_static_tensors
from .validate import (
    _resolve_config,
    _validate_distinct_positions,
    _validate_pos_shapes,
    _validate_static_args,
    _validate_types,
)

logger = get_logger("sim.ism")


def simulate_rir(
    *,
    room: Room,
    sources: Source | Tensor,
    mics: MicrophoneArray | Tensor,
    config: Optional[SimulationConfig] = None,
    nsample: Optional[int] = None,
    max_order: Optional[int] = None,
    device: Optional[torch.device | str] = None,
    dtype: Optional[torch.dtype] = None,
) -> RIRResult:
    """Simulate RIRs for every source/receiver pair with the image method.

    ``nsample`` and ``max_order`` override the values in ``config``. The
    returned tensor has shape ``(nsample, n_mic, n_src)``.

    Examples:
        ```python
        room = Room.shoebox([4.0, 4.0, 2.0], fs=16000, beta=[0.5] * 6)
        result = simulate_rir(
            room=room,
            sources=Source.from_positions([[2.0, 2.0, 1.0]]),
            mics=MicrophoneArray.from_positions([[1.0, 1.0, 1.0]]),
            max_order=2,
        )
        ```
    """
    cfg = _resolve_config(config=config, nsample=nsample, max_order=max_order)
    if not isinstance(sources, Source) and torch.is_tensor(sources):
        sources = Source(sources)
    if not isinstance(mics, MicrophoneArray) and torch.is_tensor(mics):
        mics = MicrophoneArray(mics)
    _validate_types(room, sources, mics)
    beta, beta_hat = _resolve_beta(room)
    nsample = _validate_static_args(room=room, beta=beta, cfg=cfg)
    _validate_pos_shapes(sources.positions, mics.positions)
    _validate_distinct_positions(sources.positions, mics.positions)

    device = resolve_device(device if device is not None else cfg.device)
    dtype = resolve_dtype(dtype)
    geom = _prepare_static_tensors(
        room=room,
        sources=sources,
        mics=mics,
        beta=beta,
        nsample=nsample,
        window_seconds=cfg.window_seconds,
        device=device,
        dtype=dtype,
    )
    lattices = _image_lattices(
        geom.room_size, geom.beta, geom.dim, nsample, max_order=cfg.max_order
    )
    injector = select_injector(
        cfg.low_pass_interp, geom.window, chunk_size=cfg.accumulate_chunk_size
    )
    pattern = MicPattern.parse(cfg.mic_pattern)
    logger.debug(
        "nsample=%d lattice=%s window=%d pattern=%s",
        nsample,
        tuple(len(lat) for lat in lattices),
        geom.window.numel(),
        pattern.value,
    )

    rir = torch.zeros((nsample, geom.n_mic, geom.n_src), device=device, dtype=dtype)

    def _simulate_receivers(receivers: range) -> None:
        for mic_idx in receivers:
            for src_idx in range(geom.n_src):
                rir[:, mic_idx, src_idx] = _simulate_pair(
                    geom,
                    lattices,
                    injector,
                    src_idx=src_idx,
                    mic_idx=mic_idx,
                    cfg=cfg,
                    pattern=pattern,
                    fs=room.fs,
                )

    n_workers = resolve_worker_count(cfg.max_workers, geom.n_mic, geom.n_src)
    run_partitioned(_simulate_receivers, geom.n_mic, n_workers)
    return RIRResult(
        rirs=rir, room=room, config=cfg.replace(nsample=nsample), beta_hat=beta_hat
    )


def _simulate_pair(
    geom: PreparedGeometry,
    lattices: tuple[AxisLattice, AxisLattice, AxisLattice],
    injector: PulseInjector,
    *,
    src_idx: int,
    mic_idx: int,
    cfg: SimulationConfig,
    pattern: MicPattern,
    fs: float,
) -> Tensor:
    """Sum the image lattice for one pair and post-filter the result."""
    column = torch.zeros(geom.nsample, device=geom.window.device, dtype=geom.window.dtype)
    for dist, strength in _compute_pair_contributions(
        geom.src_pos[src_idx],
        geom.mic_pos[mic_idx],
        geom.room_size,
        lattices,
        nsample=geom.nsample,
        cts=geom.cts,
        max_order=cfg.max_order,
        pattern=pattern,
        orientation=cfg.orientation,
        chunk_size=cfg.image_chunk_size,
    ):
        injector(column, dist, strength)
    if cfg.high_pass:
        column = apply_allen_berkley_hpf(column, fs)
    return column


def compute_rir(
    c: float,
    fs: float,
    receivers: Tensor | Sequence[Sequence[float]],
    sources: Tensor | Sequence[Sequence[float]],
    room_dims: Tensor | Sequence[float],
    *,
    beta: Optional[Tensor | Sequence[float]] = None,
    t60: Optional[float] = None,
    nsample: Optional[int] = None,
    mic_pattern: str = "omni",
    max_order: int = -1,
    dim: Sequence[bool | int] = (1, 1, 1),
    orientation: float = 0.0,
    high_pass: bool = True,
    low_pass_interp: bool = True,
    window_seconds: float = 0.008,
    max_workers: Optional[int] = None,
    device: Optional[torch.device | str] = None,
    dtype: Optional[torch.dtype] = None,
) -> Tuple[Tensor, float]:
    """Flat interface returning ``(h, beta_hat)``.

    ``h`` has shape ``(nsample, n_receivers, n_sources)``. Exactly one of
    ``beta`` (six coefficients) or ``t60`` must be given; ``beta_hat`` is the
    derived uniform coefficient for ``t60`` and ``0.0`` otherwise.

    Examples:
        ```python
        h, _ = compute_rir(
            343.0, 16000, [[1.0, 1.0, 1.0]], [[2.0, 2.0, 1.0]], [4.0, 4.0, 2.0],
            beta=[0.5] * 6, nsample=1024,
        )
        ```
    """
    if (beta is None) == (t60 is None):
        raise ValueError("exactly one of beta or t60 must be provided")
    if beta is not None:
        room = Room.shoebox(room_dims, fs=fs, c=c, beta=beta, dim=dim)
    else:
        room = Room.from_t60(room_dims, fs=fs, c=c, t60=t60, dim=dim)
    cfg = SimulationConfig(
        max_order=max_order,
        nsample=nsample,
        mic_pattern=mic_pattern,
        orientation=orientation,
        high_pass=high_pass,
        low_pass_interp=low_pass_interp,
        window_seconds=window_seconds,
        max_workers=max_workers,
    )
    result = simulate_rir(
        room=room,
        sources=Source.from_positions(sources),
        mics=MicrophoneArray.from_positions(receivers),
        config=cfg,
        device=device,
        dtype=dtype,
    )
    beta_hat = 0.0 if result.beta_hat is None else result.beta_hat
    return result.rirs, beta_hat
