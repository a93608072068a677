from __future__ import annotations

"""Simulation configuration for shoeboxrir."""

from dataclasses import dataclass, replace
import math
from typing import Optional

import torch


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration values for RIR simulation.

    Example:
        >>> cfg = SimulationConfig(max_order=6, mic_pattern="cardioid")
        >>> cfg.validate()
    """

    max_order: int = -1
    nsample: Optional[int] = None
    mic_pattern: str = "omni"
    orientation: float = 0.0
    high_pass: bool = True
    low_pass_interp: bool = True
    window_seconds: float = 0.008
    max_workers: Optional[int] = None
    image_chunk_size: int = 65536
    accumulate_chunk_size: int = 4096
    min_duration: float = 0.128
    device: Optional[torch.device | str] = None

    def validate(self) -> None:
        """Validate configuration values."""
        if self.max_order < -1:
            raise ValueError("max_order must be -1 (unbounded) or non-negative")
        if self.nsample is not None and self.nsample <= 0:
            raise ValueError("nsample must be positive")
        if not isinstance(self.mic_pattern, str):
            raise TypeError("mic_pattern must be a pattern name or MicPattern")
        if not math.isfinite(self.orientation):
            raise ValueError("orientation must be finite")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.image_chunk_size <= 0:
            raise ValueError("image_chunk_size must be positive")
        if self.accumulate_chunk_size <= 0:
            raise ValueError("accumulate_chunk_size must be positive")
        if self.min_duration < 0:
            raise ValueError("min_duration must be non-negative")

    def replace(self, **kwargs) -> "SimulationConfig":
        """Return a new config with updated fields."""
        new_cfg = replace(self, **kwargs)
        new_cfg.validate()
        return new_cfg


def default_config() -> SimulationConfig:
    """Return the default simulation configuration.

    Example:
        >>> cfg = default_config()
    """
    cfg = SimulationConfig()
    cfg.validate()
    return cfg
