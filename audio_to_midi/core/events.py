"""Per-frame detector outputs consumed by note segmentation."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass
class PitchEstimate:
    """Fundamental frequency estimate for one analysis frame."""

    frequency: float  # Hz
    midi_note: int
    confidence: float  # 0.0 - 1.0
    time: float  # Frame start in seconds


@dataclass
class ChordEstimate:
    """Simultaneous pitches detected in one analysis frame."""

    pitches: Tuple[int, ...]  # At most MAX_CHORD_PITCHES, detection order
    time: float

    @property
    def fingerprint(self) -> str:
        """Sorted, comma-joined pitches identifying the chord."""
        return ",".join(str(p) for p in sorted(self.pitches))


class DrumClass(str, Enum):
    """Coarse percussion classes, keyed by spectral brightness."""

    KICK = "kick"
    SNARE = "snare"
    HAT = "hat"

    @property
    def midi_pitch(self) -> int:
        """General MIDI drum-map pitch for this class."""
        return DRUM_PITCHES[self]


DRUM_PITCHES = {
    DrumClass.KICK: 36,  # Bass Drum 1
    DrumClass.SNARE: 38,  # Acoustic Snare
    DrumClass.HAT: 42,  # Closed Hi-Hat
}


@dataclass
class TransientEvent:
    """A percussive onset."""

    time: float
    velocity: float  # 0.0 - 1.0
    classification: DrumClass
