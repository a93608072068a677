"""Device and dtype resolution for simulation tensors."""

from __future__ import annotations

from typing import Optional

import torch

from ..logging_utils import get_logger

logger = get_logger("util.device")


def resolve_device(device: Optional[torch.device | str]) -> torch.device:
    """Map ``None``, ``"auto"``, ``"cpu"`` or ``"cuda[:n]"`` to a torch.device.

    ``None`` means CPU. ``"auto"`` picks CUDA when present. A CUDA request on a
    machine without CUDA falls back to CPU with a warning.

    Examples:
        ```python
        device = resolve_device("auto")
        ```
    """
    if isinstance(device, torch.device):
        return device
    name = "cpu" if device is None else str(device).lower()
    if name == "auto":
        name = "cuda" if torch.cuda.is_available() else "cpu"
    if name.startswith("cuda") and not torch.cuda.is_available():
        logger.warning("CUDA requested (%s) but not available; using CPU", device)
        name = "cpu"
    return torch.device(name)


def resolve_dtype(dtype: Optional[torch.dtype]) -> torch.dtype:
    """Return the accumulation dtype; impulse responses default to float64."""
    if dtype is None:
        return torch.float64
    if not dtype.is_floating_point:
        raise TypeError("dtype must be a floating point type")
    return dtype
