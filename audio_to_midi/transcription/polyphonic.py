"""Harmony transcription using spectral peak picking."""

from typing import List, Optional

from .base import ConversionMode, FrameTranscriber
from ..analysis import FFT, PeakDetector, PeakOrder
from ..core import AnalysisFrame, ChordEstimate, MidiNote
from ..core.constants import HARMONY_FRAME_SIZE, HARMONY_HOP_SIZE
from ..processing import NoteSegmenter


class HarmonyTranscriber(FrameTranscriber[ChordEstimate]):
    """Transcribes chords as sets of up to four sustained pitches.

    Uses long frames for frequency resolution at the cost of timing.
    """

    mode = ConversionMode.HARMONY
    stage_label = "Analyzing harmony..."
    building_label = "Building chords..."
    progress_interval = 20

    def __init__(
        self,
        sample_rate: int,
        segmenter: Optional[NoteSegmenter] = None,
        frame_size: int = HARMONY_FRAME_SIZE,
        hop_size: int = HARMONY_HOP_SIZE,
        order: PeakOrder = PeakOrder.DETECTION,
        fft: Optional[FFT] = None,
    ):
        super().__init__(frame_size, hop_size)
        self.segmenter = segmenter or NoteSegmenter()
        self.detector = PeakDetector(
            sample_rate,
            frame_size=frame_size,
            order=order,
            fft=fft,
        )

    def analyze_frame(self, frame: AnalysisFrame) -> Optional[ChordEstimate]:
        return self.detector.detect(frame.samples, frame.time)

    def build_notes(self, estimates: List[ChordEstimate]) -> List[MidiNote]:
        return self.segmenter.segment_chords(estimates)
