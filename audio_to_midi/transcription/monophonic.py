"""Melody transcription using YIN pitch tracking."""

from typing import List, Optional

from .base import ConversionMode, FrameTranscriber
from ..analysis import FFT, PitchDetector
from ..core import AnalysisFrame, MidiNote, PitchEstimate
from ..core.constants import (
    MELODY_FRAME_SIZE,
    MELODY_HOP_SIZE,
    MELODY_FMIN,
    MELODY_FMAX,
    PITCH_CONFIDENCE_THRESHOLD,
)
from ..processing import NoteSegmenter


class MelodyTranscriber(FrameTranscriber[PitchEstimate]):
    """Transcribes a single melodic line."""

    mode = ConversionMode.MELODY
    stage_label = "Detecting pitch..."
    building_label = "Building MIDI notes..."
    progress_interval = 50

    def __init__(
        self,
        sample_rate: int,
        segmenter: Optional[NoteSegmenter] = None,
        frame_size: int = MELODY_FRAME_SIZE,
        hop_size: int = MELODY_HOP_SIZE,
        fmin: float = MELODY_FMIN,
        fmax: float = MELODY_FMAX,
        confidence_threshold: float = PITCH_CONFIDENCE_THRESHOLD,
        fft: Optional[FFT] = None,
    ):
        """
        Initialize MelodyTranscriber.

        Args:
            sample_rate: Sample rate of the audio in Hz
            segmenter: Note segmenter (default settings if omitted)
            frame_size: Samples per analysis frame
            hop_size: Samples between frame starts
            fmin: Lowest detectable pitch in Hz
            fmax: Highest detectable pitch in Hz
            confidence_threshold: Estimates at or below this are discarded
            fft: Shared FFT engine
        """
        super().__init__(frame_size, hop_size)
        self.confidence_threshold = confidence_threshold
        self.segmenter = segmenter or NoteSegmenter()
        self.detector = PitchDetector(
            sample_rate,
            frame_size=frame_size,
            fmin=fmin,
            fmax=fmax,
            fft=fft,
        )

    def analyze_frame(self, frame: AnalysisFrame) -> Optional[PitchEstimate]:
        estimate = self.detector.detect(frame.samples, frame.time)
        if estimate is None or estimate.confidence <= self.confidence_threshold:
            return None
        return estimate

    def build_notes(self, estimates: List[PitchEstimate]) -> List[MidiNote]:
        return self.segmenter.segment_melody(estimates)
