"""Core data models for rooms, sources, microphones, and results.

Example:
    >>> from shoeboxrir import MicrophoneArray, Room, Source
    >>> room = Room.shoebox([4.0, 4.0, 2.0], fs=16000, beta=[0.5] * 6)
    >>> sources = Source.from_positions([[2.0, 2.0, 1.0]])
    >>> mics = MicrophoneArray.from_positions([[1.0, 1.0, 1.0]])
"""

from .results import RIRResult
from .room import MicrophoneArray, Room, Source

__all__ = [
    "MicrophoneArray",
    "Room",
    "RIRResult",
    "Source",
]
