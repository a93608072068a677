"""shoeboxrir public API."""

from .config import SimulationConfig, default_config
from .logging_utils import LoggingConfig, get_logger, setup_logging
from .models import MicrophoneArray, RIRResult, Room, Source
from .sim import (
    ISMSimulator,
    MicPattern,
    SimulationWorkerError,
    compute_rir,
    directivity_gain,
    simulate_rir,
)
from .util import (
    InfeasibleRoomError,
    estimate_beta_from_t60,
    estimate_nsample,
    estimate_t60_from_beta,
    resolve_device,
)

__all__ = [
    "ISMSimulator",
    "InfeasibleRoomError",
    "LoggingConfig",
    "MicPattern",
    "MicrophoneArray",
    "RIRResult",
    "Room",
    "SimulationConfig",
    "SimulationWorkerError",
    "Source",
    "compute_rir",
    "default_config",
    "directivity_gain",
    "estimate_beta_from_t60",
    "estimate_nsample",
    "estimate_t60_from_beta",
    "get_logger",
    "resolve_device",
    "setup_logging",
    "simulate_rir",
]
