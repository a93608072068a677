"""Microphone directivity patterns."""

from __future__ import annotations

from enum import Enum

import torch
from torch import Tensor

from ..logging_utils import get_logger

logger = get_logger("sim.directivity")


class MicPattern(str, Enum):
    """First-order polar patterns, ``gain = P + PG * cos(theta)``."""

    OMNI = "omnidirectional"
    SUBCARDIOID = "subcardioid"
    CARDIOID = "cardioid"
    HYPERCARDIOID = "hypercardioid"
    BIDIRECTIONAL = "bidirectional"

    @property
    def coefficients(self) -> tuple[float, float]:
        return _COEFFICIENTS[self]

    @classmethod
    def parse(cls, pattern: "str | MicPattern | None") -> "MicPattern":
        """Resolve a pattern name by its first letter, falling back to omni."""
        if isinstance(pattern, MicPattern):
            return pattern
        if not pattern:
            return cls.OMNI
        resolved = _BY_INITIAL.get(str(pattern).strip().lower()[:1])
        if resolved is None:
            logger.warning(
                "unknown microphone pattern %r; using omnidirectional", pattern
            )
            return cls.OMNI
        return resolved


_COEFFICIENTS = {
    MicPattern.OMNI: (1.0, 0.0),
    MicPattern.SUBCARDIOID: (0.75, 0.25),
    MicPattern.CARDIOID: (0.5, 0.5),
    MicPattern.HYPERCARDIOID: (0.25, 0.75),
    MicPattern.BIDIRECTIONAL: (0.0, 1.0),
}
_BY_INITIAL = {p.value[0]: p for p in MicPattern}


def directivity_gain(
    dx: Tensor,
    dy: Tensor,
    orientation: float,
    pattern: str | MicPattern,
) -> Tensor:
    """Gain for arrivals along ``(dx, dy)`` at a mic pointing at ``orientation``.

    The arrival angle is measured in the horizontal plane only.

    Example:
        >>> directivity_gain(torch.tensor([1.0]), torch.tensor([0.0]), 0.0, "cardioid")
        tensor([1.])
    """
    p, pg = MicPattern.parse(pattern).coefficients
    if pg == 0.0:
        return torch.full_like(torch.broadcast_tensors(dx, dy)[0], p)
    theta = torch.atan2(dy, dx) - orientation
    return p + pg * torch.cos(theta)
