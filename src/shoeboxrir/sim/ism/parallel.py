"""Strided receiver partitioning and the thread-pool driver.

Worker ``t`` of ``T`` owns receivers ``t, t + T, t + 2T, ...`` for every
source, so each output column ``[:, mic, src]`` has exactly one writer and the
shared output needs no locking. torch releases the GIL inside its kernels,
which lets the threads overlap.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
import os
from typing import Optional

from ...logging_utils import get_logger

logger = get_logger("sim.ism.parallel")

ReceiverTask = Callable[[range], None]


class SimulationWorkerError(RuntimeError):
    """A simulation worker could not be started or failed while running."""


def resolve_worker_count(max_workers: Optional[int], n_mic: int, n_src: int) -> int:
    """Return ``min(max_workers, n_mic * n_src)``, defaulting to the CPU count."""
    if max_workers is None:
        max_workers = os.cpu_count() or 1
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")
    return max(1, min(max_workers, n_mic * n_src))


def partition_receivers(n_mic: int, n_workers: int) -> list[range]:
    """Assign receiver indices to workers by stride."""
    if n_workers < 1:
        raise ValueError("n_workers must be at least 1")
    return [range(t, n_mic, n_workers) for t in range(n_workers)]


def run_partitioned(task: ReceiverTask, n_mic: int, n_workers: int) -> None:
    """Run ``task`` on every receiver partition and wait for all of them.

    Any failure aborts the whole run: pending partitions are cancelled and the
    first error is re-raised as :class:`SimulationWorkerError`.
    """
    parts = [p for p in partition_receivers(n_mic, n_workers) if len(p) > 0]
    logger.debug("running %d partitions on %d workers", len(parts), n_workers)
    if n_workers == 1:
        for part in parts:
            _run_inline(task, part)
        return

    futures: list[Future[None]] = []
    try:
        with ThreadPoolExecutor(
            max_workers=n_workers, thread_name_prefix="shoeboxrir"
        ) as executor:
            try:
                for part in parts:
                    futures.append(executor.submit(task, part))
                for future in futures:
                    future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
    except Exception as exc:
        raise SimulationWorkerError(f"simulation worker failed: {exc}") from exc


def _run_inline(task: ReceiverTask, part: range) -> None:
    try:
        task(part)
    except Exception as exc:
        raise SimulationWorkerError(f"simulation worker failed: {exc}") from exc
