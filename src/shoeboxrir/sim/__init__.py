"""Simulation engines for RIR generation.

Includes the ISM implementation (in ``shoeboxrir.sim.ism``), microphone
directivity, and the simulator strategy interface.
"""

from .directivity import MicPattern, directivity_gain
from .ism import SimulationWorkerError, compute_rir, simulate_rir
from .simulators import ISMSimulator, RIRSimulator

__all__ = [
    "ISMSimulator",
    "MicPattern",
    "RIRSimulator",
    "SimulationWorkerError",
    "compute_rir",
    "directivity_gain",
    "simulate_rir",
]
