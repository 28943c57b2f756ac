"""Core types and constants for Audio to MIDI."""

from .note import MidiNote, ConversionResult
from .events import PitchEstimate, ChordEstimate, TransientEvent, DrumClass, DRUM_PITCHES
from .buffer import SampleBuffer, AnalysisFrame, iter_frames, count_frames
from .errors import AudioToMidiError, InvalidSizeError, DecodeError
from .constants import (
    PITCH_NAMES,
    DEFAULT_TEMPO,
)

__all__ = [
    "MidiNote",
    "ConversionResult",
    "PitchEstimate",
    "ChordEstimate",
    "TransientEvent",
    "DrumClass",
    "DRUM_PITCHES",
    "SampleBuffer",
    "AnalysisFrame",
    "iter_frames",
    "count_frames",
    "AudioToMidiError",
    "InvalidSizeError",
    "DecodeError",
    "PITCH_NAMES",
    "DEFAULT_TEMPO",
]
