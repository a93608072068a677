import pytest
import torch

from shoeboxrir import MicrophoneArray, Room, Source


def test_room_beta_t60_exclusive():
    with pytest.raises(ValueError, match="mutually exclusive"):
        Room(size=torch.tensor([4.0, 3.0, 2.0]), fs=16000, beta=[0.9] * 6, t60=0.5)
    with pytest.raises(ValueError, match="one of beta or t60"):
        Room(size=torch.tensor([4.0, 3.0, 2.0]), fs=16000)


def test_room_dimension_validation():
    with pytest.raises(ValueError, match="length 3"):
        Room.shoebox(size=[4.0, 3.0], fs=16000, beta=[0.9] * 6)

    room = Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, beta=[0.9] * 6)
    assert room.size.shape == (3,)
    assert room.size.dtype == torch.float64
    assert room.volume == pytest.approx(24.0)
    assert room.surface == pytest.approx(52.0)


def test_room_positive_parameters_validation():
    with pytest.raises(ValueError, match="fs must be positive"):
        Room.shoebox(size=[4.0, 3.0, 2.0], fs=0, beta=[0.9] * 6)
    with pytest.raises(ValueError, match="c must be positive"):
        Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, c=0.0, beta=[0.9] * 6)
    with pytest.raises(ValueError, match="room size must be strictly positive"):
        Room.shoebox(size=[4.0, -3.0, 2.0], fs=16000, beta=[0.9] * 6)
    with pytest.raises(ValueError, match="t60 must be positive"):
        Room.from_t60(size=[4.0, 3.0, 2.0], fs=16000, t60=0.0)


def test_room_beta_validation():
    with pytest.raises(ValueError, match="beta must have 6 elements"):
        Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, beta=[0.9] * 4)
    with pytest.raises(ValueError, match="beta values must be in \\[0, 1\\]"):
        Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, beta=[1.1] * 6)


def test_room_dim_mask_normalized():
    room = Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, beta=[0.9] * 6, dim=(1, 0, 1))
    assert room.dim == (True, False, True)
    with pytest.raises(ValueError, match="dim must have 3 entries"):
        Room.shoebox(size=[4.0, 3.0, 2.0], fs=16000, beta=[0.9] * 6, dim=(1, 1))


def test_entity_positions_shape():
    sources = Source.from_positions([1.0, 2.0, 1.5])
    assert sources.positions.shape == (1, 3)
    assert len(sources) == 1

    mics = MicrophoneArray.from_positions([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])
    assert len(mics) == 2
    assert mics.positions.dtype == torch.float64

    with pytest.raises(ValueError, match="shape \\(n, 3\\)"):
        MicrophoneArray.from_positions([[1.0, 1.0]])
    with pytest.raises(ValueError, match="finite"):
        Source.from_positions([[1.0, float("nan"), 1.0]])
