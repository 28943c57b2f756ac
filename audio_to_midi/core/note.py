"""MidiNote data class - the unit of output placed on the editor timeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import numpy as np

from .constants import PITCH_NAMES, MIDI_MIN, MIDI_MAX


@dataclass
class MidiNote:
    """Represents a note on a beat-relative timeline."""

    id: str
    pitch: int  # MIDI pitch (0-127)
    start: float  # Start position in beats
    duration: float  # Length in beats
    velocity: float = 0.8  # Normalized velocity (0-1]

    def __post_init__(self):
        if not MIDI_MIN <= self.pitch <= MIDI_MAX:
            raise ValueError(f"Pitch out of range: {self.pitch}")
        if self.start < 0:
            raise ValueError(f"Note start must be >= 0, got {self.start}")
        if self.duration <= 0:
            raise ValueError(f"Note duration must be > 0, got {self.duration}")
        if not 0 < self.velocity <= 1:
            raise ValueError(f"Velocity must be in (0, 1], got {self.velocity}")

    @property
    def end(self) -> float:
        """Note end position in beats."""
        return self.start + self.duration

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        octave = (self.pitch // 12) - 1
        name = PITCH_NAMES[self.pitch % 12]
        return f"{name}{octave}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the editor's note shape."""
        return {
            "id": self.id,
            "pitch": self.pitch,
            "start": self.start,
            "duration": self.duration,
            "velocity": self.velocity,
        }

    @staticmethod
    def freq_to_midi(freq: float) -> int:
        """Convert frequency (Hz) to MIDI pitch."""
        if freq <= 0:
            return 0
        return int(round(69 + 12 * np.log2(freq / 440.0)))

    @staticmethod
    def midi_to_freq(midi: int) -> float:
        """Convert MIDI pitch to frequency (Hz)."""
        return 440.0 * (2 ** ((midi - 69) / 12.0))


@dataclass
class ConversionResult:
    """Notes extracted from one conversion run.

    ``tempo`` and ``key`` are reserved; the analyzers never fill them in.
    """

    notes: List[MidiNote] = field(default_factory=list)
    tempo: Optional[float] = None
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"notes": [note.to_dict() for note in self.notes]}
        if self.tempo is not None:
            data["tempo"] = self.tempo
        if self.key is not None:
            data["key"] = self.key
        return data
