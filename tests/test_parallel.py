import os
import threading

import pytest

from shoeboxrir import SimulationWorkerError
from shoeboxrir.sim.ism.parallel import (
    partition_receivers,
    resolve_worker_count,
    run_partitioned,
)


def test_partition_is_strided_and_disjoint():
    parts = partition_receivers(7, 3)
    assert [list(p) for p in parts] == [[0, 3, 6], [1, 4], [2, 5]]
    flat = sorted(i for p in parts for i in p)
    assert flat == list(range(7))


def test_partition_more_workers_than_receivers():
    parts = partition_receivers(2, 4)
    assert [list(p) for p in parts] == [[0], [1], [], []]


def test_resolve_worker_count():
    assert resolve_worker_count(8, 2, 3) == 6
    assert resolve_worker_count(4, 1, 1) == 1
    assert resolve_worker_count(2, 10, 10) == 2
    assert resolve_worker_count(None, 1000, 1000) == (os.cpu_count() or 1)
    with pytest.raises(ValueError):
        resolve_worker_count(0, 2, 2)


def test_run_partitioned_visits_every_receiver_once():
    seen = []
    lock = threading.Lock()

    def task(receivers):
        with lock:
            seen.extend(receivers)

    run_partitioned(task, 10, 4)
    assert sorted(seen) == list(range(10))


@pytest.mark.parametrize("n_workers", [1, 3])
def test_worker_failure_aborts_run(n_workers):
    def task(receivers):
        if 1 in receivers:
            raise ValueError("boom")

    with pytest.raises(SimulationWorkerError, match="boom") as info:
        run_partitioned(task, 4, n_workers)
    assert isinstance(info.value.__cause__, ValueError)
