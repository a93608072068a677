"""Result containers for simulation outputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from torch import Tensor

from .room import Room

if TYPE_CHECKING:
    from ..config import SimulationConfig


@dataclass(frozen=True)
class RIRResult:
    """Container for RIRs with metadata.

    ``rirs`` has shape ``(nsample, n_mic, n_src)``. ``beta_hat`` is only set
    when the room was described by a reverberation time.

    Examples:
        ```python
        result = ISMSimulator(config).simulate(room, sources, mics)
        h = result.rirs[:, 0, 0]
        ```
    """

    rirs: Tensor
    room: Room
    config: "SimulationConfig"
    beta_hat: Optional[float] = None

    @property
    def nsample(self) -> int:
        return int(self.rirs.shape[0])

    def pair(self, mic: int, src: int) -> Tensor:
        """Return the impulse response from source ``src`` to receiver ``mic``."""
        return self.rirs[:, mic, src]
