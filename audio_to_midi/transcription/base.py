"""Base classes for frame-by-frame transcription."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from ..core import AnalysisFrame, MidiNote

E = TypeVar("E")


class ConversionMode(str, Enum):
    """Capture modes offered by the converter."""

    MELODY = "melody"
    HARMONY = "harmony"
    DRUMS = "drums"

    @classmethod
    def parse(cls, value) -> "ConversionMode":
        """Accept a member or its name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown mode: {value!r}. Choose from: {choices}") from None


class FrameTranscriber(ABC, Generic[E]):
    """Detects one estimate per frame, then turns the estimates into notes.

    Subclasses fix the frame schedule and the progress labels for their mode.
    """

    mode: ConversionMode
    stage_label: str = "Analyzing..."
    building_label: str = "Building MIDI notes..."
    progress_interval: int = 50

    def __init__(self, frame_size: int, hop_size: int):
        if frame_size <= 0 or hop_size <= 0:
            raise ValueError(
                f"Frame and hop sizes must be positive, got {frame_size}/{hop_size}"
            )
        self.frame_size = frame_size
        self.hop_size = hop_size

    def reset(self) -> None:
        """Clear any state carried between frames."""

    @abstractmethod
    def analyze_frame(self, frame: AnalysisFrame) -> Optional[E]:
        """
        Analyze one frame.

        Args:
            frame: Analysis frame from channel 0

        Returns:
            An estimate, or None when the frame yields nothing
        """
        pass

    @abstractmethod
    def build_notes(self, estimates: List[E]) -> List[MidiNote]:
        """Segment accepted estimates into notes."""
        pass
