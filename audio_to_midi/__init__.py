"""Audio to MIDI - Symbolic note extraction for a track-based editor.

Architecture Layers:
    1. core/          - Data model, constants, errors, framing
    2. input/         - Audio decoding into sample buffers
    3. analysis/      - FFT engine and per-frame detectors (pitch, peaks, transients)
    4. processing/    - Note segmentation
    5. transcription/ - Per-mode transcribers and the conversion orchestrator
    6. output/        - MIDI file export
"""

__version__ = "0.1.0"

# Core types
from .core import (
    MidiNote,
    ConversionResult,
    SampleBuffer,
    DrumClass,
    AudioToMidiError,
    InvalidSizeError,
    DecodeError,
)

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import FFT, PitchDetector, PeakDetector, PeakOrder, TransientDetector

# Processing layer
from .processing import NoteSegmenter, SegmentationConfig

# Transcription layer
from .transcription import (
    AudioToMidiConverter,
    Conversion,
    ConversionMode,
    ConversionProgress,
    ConversionStage,
)

# Output layer
from .output import MIDIExporter

__all__ = [
    # Core
    "MidiNote",
    "ConversionResult",
    "SampleBuffer",
    "DrumClass",
    "AudioToMidiError",
    "InvalidSizeError",
    "DecodeError",
    # Input
    "AudioLoader",
    # Analysis
    "FFT",
    "PitchDetector",
    "PeakDetector",
    "PeakOrder",
    "TransientDetector",
    # Processing
    "NoteSegmenter",
    "SegmentationConfig",
    # Transcription
    "AudioToMidiConverter",
    "Conversion",
    "ConversionMode",
    "ConversionProgress",
    "ConversionStage",
    # Output
    "MIDIExporter",
]
