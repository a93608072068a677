"""Room, source, and microphone geometry models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

import torch
from torch import Tensor

from ..util.tensor import as_tensor, ensure_positions, ensure_size3


@dataclass(frozen=True)
class Room:
    """Shoebox room geometry and acoustic parameters.

    Exactly one of ``beta`` (six wall reflection coefficients ordered
    x-, x+, y-, y+, z-, z+) or ``t60`` (target reverberation time in seconds)
    describes the walls. ``dim`` collapses axes: a false entry removes every
    reflection along that axis.

    Examples:
        ```python
        room = Room.shoebox(size=[6.0, 4.0, 3.0], fs=16000, beta=[0.9] * 6)
        room = Room.from_t60(size=[6.0, 4.0, 3.0], fs=16000, t60=0.4)
        ```
    """

    size: Tensor
    fs: float
    c: float = 343.0
    beta: Optional[Tensor] = None
    t60: Optional[float] = None
    dim: tuple[bool, bool, bool] = (True, True, True)

    def __post_init__(self) -> None:
        """Validate room size, masks and reflection parameters."""
        size = ensure_size3(as_tensor(self.size, dtype=torch.float64))
        if not torch.all(torch.isfinite(size)):
            raise ValueError("room size must contain finite values")
        if torch.any(size <= 0):
            raise ValueError("room size must be strictly positive")
        object.__setattr__(self, "size", size)
        if self.fs <= 0:
            raise ValueError("fs must be positive")
        if self.c <= 0:
            raise ValueError("c must be positive")
        if self.beta is None and self.t60 is None:
            raise ValueError("one of beta or t60 must be provided")
        if self.beta is not None and self.t60 is not None:
            raise ValueError("beta and t60 are mutually exclusive")
        if self.t60 is not None and self.t60 <= 0:
            raise ValueError("t60 must be positive")
        if self.beta is not None:
            beta = as_tensor(self.beta, dtype=torch.float64).reshape(-1)
            if beta.numel() != 6:
                raise ValueError("beta must have 6 elements")
            if not torch.all(torch.isfinite(beta)):
                raise ValueError("beta must contain finite values")
            if torch.any(beta < 0) or torch.any(beta > 1):
                raise ValueError("beta values must be in [0, 1]")
            object.__setattr__(self, "beta", beta)
        dim = tuple(bool(d) for d in self.dim)
        if len(dim) != 3:
            raise ValueError("dim must have 3 entries")
        object.__setattr__(self, "dim", dim)

    def replace(self, **kwargs) -> "Room":
        """Return a new Room with updated fields."""
        return replace(self, **kwargs)

    @property
    def volume(self) -> float:
        return float(torch.prod(self.size).item())

    @property
    def surface(self) -> float:
        lx, ly, lz = self.size.tolist()
        return 2.0 * (lx * ly + ly * lz + lx * lz)

    @staticmethod
    def shoebox(
        size: Sequence[float] | Tensor,
        *,
        fs: float,
        beta: Sequence[float] | Tensor,
        c: float = 343.0,
        dim: Sequence[bool | int] = (True, True, True),
    ) -> "Room":
        """Create a room from explicit wall reflection coefficients."""
        return Room(
            size=as_tensor(size, dtype=torch.float64),
            fs=fs,
            c=c,
            beta=as_tensor(beta, dtype=torch.float64),
            dim=tuple(dim),
        )

    @staticmethod
    def from_t60(
        size: Sequence[float] | Tensor,
        *,
        fs: float,
        t60: float,
        c: float = 343.0,
        dim: Sequence[bool | int] = (True, True, True),
    ) -> "Room":
        """Create a room whose uniform coefficient is derived from ``t60``."""
        return Room(
            size=as_tensor(size, dtype=torch.float64), fs=fs, c=c, t60=t60, dim=tuple(dim)
        )


@dataclass(frozen=True)
class Source:
    """Point sources.

    Examples:
        ```python
        sources = Source.from_positions([[1.0, 2.0, 1.5]])
        ```
    """

    positions: Tensor

    def __post_init__(self) -> None:
        pos = ensure_positions(_as_float(self.positions), name="source")
        object.__setattr__(self, "positions", pos)

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    @classmethod
    def from_positions(
        cls,
        positions: Sequence[Sequence[float]] | Tensor,
        *,
        dtype: Optional[torch.dtype] = None,
    ) -> "Source":
        return cls(_as_float(positions, dtype=dtype))


@dataclass(frozen=True)
class MicrophoneArray:
    """Receivers sharing one directivity pattern and orientation.

    Examples:
        ```python
        mics = MicrophoneArray.from_positions([[2.0, 2.0, 1.5], [2.1, 2.0, 1.5]])
        ```
    """

    positions: Tensor

    def __post_init__(self) -> None:
        pos = ensure_positions(_as_float(self.positions), name="mic")
        object.__setattr__(self, "positions", pos)

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    @classmethod
    def from_positions(
        cls,
        positions: Sequence[Sequence[float]] | Tensor,
        *,
        dtype: Optional[torch.dtype] = None,
    ) -> "MicrophoneArray":
        return cls(_as_float(positions, dtype=dtype))


def _as_float(
    value: Sequence[Sequence[float]] | Tensor, *, dtype: Optional[torch.dtype] = None
) -> Tensor:
    if dtype is None and not torch.is_tensor(value):
        dtype = torch.float64
    return as_tensor(value, dtype=dtype)
