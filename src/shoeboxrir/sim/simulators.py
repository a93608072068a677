"""Simulation strategy interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import torch

from ..config import SimulationConfig, default_config
from ..models import MicrophoneArray, RIRResult, Room, Source
from .ism import simulate_rir


class RIRSimulator(Protocol):
    """Strategy interface for RIR simulation backends."""

    def simulate(
        self, room: Room, sources: Source, mics: MicrophoneArray
    ) -> RIRResult:
        """Run a simulation and return the result."""


@dataclass(frozen=True)
class ISMSimulator:
    """Image-source simulator bound to a configuration.

    Examples:
        ```python
        sim = ISMSimulator(SimulationConfig(max_order=6, nsample=4096))
        result = sim.simulate(room, sources, mics)
        ```
    """

    config: SimulationConfig = field(default_factory=default_config)
    device: torch.device | str | None = None
    dtype: torch.dtype | None = None

    def __post_init__(self) -> None:
        self.config.validate()

    def simulate(
        self, room: Room, sources: Source, mics: MicrophoneArray
    ) -> RIRResult:
        return simulate_rir(
            room=room,
            sources=sources,
            mics=mics,
            config=self.config,
            device=self.device,
            dtype=self.dtype,
        )
