"""Image source method: lattice summation, pulse injection, post-filter and
the parallel driver."""

from .accumulate import (
    BandlimitedInjector,
    NearestSampleInjector,
    PulseInjector,
    select_injector,
)
from .api import compute_rir, simulate_rir
from .hpf import apply_allen_berkley_hpf
from .parallel import (
    SimulationWorkerError,
    partition_receivers,
    resolve_worker_count,
    run_partitioned,
)

__all__ = [
    "BandlimitedInjector",
    "NearestSampleInjector",
    "PulseInjector",
    "SimulationWorkerError",
    "apply_allen_berkley_hpf",
    "compute_rir",
    "partition_receivers",
    "resolve_worker_count",
    "run_partitioned",
    "select_injector",
    "simulate_rir",
]
