"""Transcription layer - Frame-level detection to notes.

This layer drives the detectors over a signal:
- Melody transcription (single line, YIN)
- Harmony transcription (spectral peaks, up to four pitches)
- Drum transcription (onsets, kick/snare/hat)
- Conversion orchestration with progress reporting
"""

from .base import ConversionMode, FrameTranscriber
from .monophonic import MelodyTranscriber
from .polyphonic import HarmonyTranscriber
from .percussive import DrumTranscriber
from .converter import (
    AudioToMidiConverter,
    Conversion,
    ConversionProgress,
    ConversionStage,
)

__all__ = [
    "ConversionMode",
    "FrameTranscriber",
    "MelodyTranscriber",
    "HarmonyTranscriber",
    "DrumTranscriber",
    "AudioToMidiConverter",
    "Conversion",
    "ConversionProgress",
    "ConversionStage",
]
