"""Drum transcription using energy onsets."""

from typing import List, Optional

from .base import ConversionMode, FrameTranscriber
from ..analysis import FFT, TransientDetector
from ..core import AnalysisFrame, MidiNote, TransientEvent
from ..core.constants import DRUMS_FRAME_SIZE, DRUMS_HOP_SIZE
from ..processing import NoteSegmenter


class DrumTranscriber(FrameTranscriber[TransientEvent]):
    """Transcribes percussion as kick, snare and hat hits."""

    mode = ConversionMode.DRUMS
    stage_label = "Detecting transients..."
    building_label = "Building drum pattern..."
    progress_interval = 100

    def __init__(
        self,
        sample_rate: int,
        segmenter: Optional[NoteSegmenter] = None,
        frame_size: int = DRUMS_FRAME_SIZE,
        hop_size: int = DRUMS_HOP_SIZE,
        fft: Optional[FFT] = None,
    ):
        super().__init__(frame_size, hop_size)
        self.segmenter = segmenter or NoteSegmenter()
        self.detector = TransientDetector(sample_rate, frame_size=frame_size, fft=fft)

    def reset(self) -> None:
        self.detector.reset()

    def analyze_frame(self, frame: AnalysisFrame) -> Optional[TransientEvent]:
        return self.detector.detect(frame.samples, frame.time)

    def build_notes(self, estimates: List[TransientEvent]) -> List[MidiNote]:
        return self.segmenter.segment_transients(estimates)
