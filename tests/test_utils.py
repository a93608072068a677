import math

import pytest
import torch

from shoeboxrir import InfeasibleRoomError
from shoeboxrir.util import (
    estimate_beta_from_t60,
    estimate_nsample,
    estimate_t60_from_beta,
    resolve_device,
    resolve_dtype,
)


def test_t60_beta_roundtrip():
    size = [6.0, 4.0, 3.0]
    beta = estimate_beta_from_t60(size, 0.5, c=343.0)
    assert 0.0 < beta < 1.0
    t60 = estimate_t60_from_beta(size, [beta] * 6, c=343.0)
    assert t60 == pytest.approx(0.5, rel=1e-9)


def test_t60_roundtrip_other_speed_of_sound():
    size = torch.tensor([3.0, 3.0, 2.5])
    beta = estimate_beta_from_t60(size, 0.2, c=340.0)
    assert estimate_t60_from_beta(size, [beta] * 6, c=340.0) == pytest.approx(0.2)


def test_infeasible_t60_raises():
    with pytest.raises(InfeasibleRoomError, match="absorption coefficient"):
        estimate_beta_from_t60([10.0, 10.0, 10.0], 0.1)
    assert issubclass(InfeasibleRoomError, ValueError)


def test_t60_from_perfect_reflection():
    t60 = estimate_t60_from_beta([6.0, 4.0, 3.0], torch.ones(6))
    assert math.isinf(t60)


def test_estimate_nsample():
    assert estimate_nsample([6.0, 4.0, 3.0], 16000, t60=0.4) == int(0.4 * 16000)
    # fully absorbing walls imply a very short T60, floored to min_duration
    assert estimate_nsample([4.0, 4.0, 2.0], 16000, beta=[0.0] * 6) == int(0.128 * 16000)

    beta = [0.95] * 6
    expected = int(estimate_t60_from_beta([6.0, 4.0, 3.0], beta) * 8000)
    assert estimate_nsample([6.0, 4.0, 3.0], 8000, beta=beta) == expected

    with pytest.raises(ValueError, match="exactly one"):
        estimate_nsample([6.0, 4.0, 3.0], 8000)
    with pytest.raises(ValueError, match="without absorption"):
        estimate_nsample([6.0, 4.0, 3.0], 8000, beta=[1.0] * 6)


def test_resolve_device_auto_returns_device():
    device = resolve_device("auto")
    assert isinstance(device, torch.device)
    assert device.type in ("cpu", "cuda")
    assert resolve_device(None) == torch.device("cpu")


def test_resolve_device_cuda_falls_back_cpu():
    device = resolve_device("cuda")
    if torch.cuda.is_available():
        assert device.type == "cuda"
    else:
        assert device.type == "cpu"


def test_resolve_dtype_defaults_to_float64():
    assert resolve_dtype(None) == torch.float64
    assert resolve_dtype(torch.float32) == torch.float32
    with pytest.raises(TypeError):
        resolve_dtype(torch.int64)
