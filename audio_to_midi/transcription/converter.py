"""Audio to MIDI conversion - mode dispatch, frame loop and progress.

A conversion is a lazy, resumable sequence: ``AudioToMidiConverter.start``
returns a ``Conversion`` that analyses frames only as it is iterated, yielding
a progress update at regular frame boundaries. ``convert`` drives it to the end
in one call; ``convert_async`` hands control back to the event loop at every
update.
"""

import asyncio
import warnings
from contextlib import closing
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union
import numpy as np

from .base import ConversionMode, FrameTranscriber
from .monophonic import MelodyTranscriber
from .polyphonic import HarmonyTranscriber
from .percussive import DrumTranscriber
from ..analysis import FFT, PeakOrder
from ..core import ConversionResult, SampleBuffer, DecodeError, iter_frames, count_frames
from ..core.constants import DEFAULT_TEMPO, PITCH_CONFIDENCE_THRESHOLD
from ..input import AudioLoader
from ..processing import NoteSegmenter, SegmentationConfig

ProgressCallback = Callable[[str, float], None]
AudioSource = Union[SampleBuffer, np.ndarray, str, Path]


class ConversionStage(Enum):
    """Lifecycle of a single conversion."""

    IDLE = "idle"
    LOADING = "loading"
    ANALYZING = "analyzing"
    DETECTING = "detecting"
    BUILDING_NOTES = "building_notes"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class ConversionProgress:
    """One progress update."""

    stage: str  # Human-readable label
    progress: float  # 0 - 100
    state: ConversionStage


class Conversion:
    """A single, resumable conversion run.

    Iterate it to advance the analysis; each step yields a
    ``ConversionProgress``. Frames are processed in time order and the
    final update is always ``("Complete", 100)``.
    """

    def __init__(
        self,
        converter: "AudioToMidiConverter",
        source: AudioSource,
        mode: ConversionMode,
        sample_rate: Optional[int] = None,
    ):
        self.mode = mode
        self.state = ConversionStage.IDLE
        self._converter = converter
        self._source = source
        self._sample_rate = sample_rate
        self._result: Optional[ConversionResult] = None
        self._started = False

    @property
    def result(self) -> ConversionResult:
        """The finished result; only available once the run is complete."""
        if self._result is None:
            raise RuntimeError(f"Conversion is not complete (state: {self.state.value})")
        return self._result

    def __iter__(self) -> Iterator[ConversionProgress]:
        if self._started:
            raise RuntimeError("A conversion can only be run once")
        self._started = True
        return self._steps()

    def run(self, on_progress: Optional[ProgressCallback] = None) -> ConversionResult:
        """Drive the conversion to completion on the calling thread."""
        with closing(iter(self)) as steps:
            for update in steps:
                if on_progress is not None:
                    on_progress(update.stage, update.progress)
        return self.result

    async def run_async(
        self, on_progress: Optional[ProgressCallback] = None
    ) -> ConversionResult:
        """Drive the conversion, yielding to the event loop between updates.

        Cancelling the awaiting task closes the run and leaves it FAILED.
        """
        with closing(iter(self)) as steps:
            for update in steps:
                if on_progress is not None:
                    on_progress(update.stage, update.progress)
                await asyncio.sleep(0)
        return self.result

    def _report(self, stage: str, progress: float) -> ConversionProgress:
        return ConversionProgress(stage=stage, progress=float(progress), state=self.state)

    def _steps(self) -> Iterator[ConversionProgress]:
        try:
            self.state = ConversionStage.LOADING
            yield self._report("Loading audio...", 0)
            buffer = self._converter.load(self._source, self._sample_rate)

            self.state = ConversionStage.ANALYZING
            yield self._report("Starting analysis...", 10)
            transcriber = self._converter.transcriber_for(self.mode, buffer.sample_rate)
            transcriber.reset()

            total = count_frames(buffer.length, transcriber.frame_size, transcriber.hop_size)
            if total == 0:
                warnings.warn(
                    f"Audio is shorter than one {self.mode.value} frame "
                    f"({transcriber.frame_size} samples); no notes detected"
                )

            self.state = ConversionStage.DETECTING
            estimates: List = []
            for frame in iter_frames(buffer, transcriber.frame_size, transcriber.hop_size):
                if frame.index % transcriber.progress_interval == 0:
                    yield self._report(
                        transcriber.stage_label, 20 + 60 * frame.index / total
                    )
                estimate = transcriber.analyze_frame(frame)
                if estimate is not None:
                    estimates.append(estimate)

            self.state = ConversionStage.BUILDING_NOTES
            yield self._report(transcriber.building_label, 85)
            notes = transcriber.build_notes(estimates)

            self._result = ConversionResult(notes=notes)
            self.state = ConversionStage.COMPLETE
            yield self._report("Complete", 100)
        finally:
            # Covers errors and runs abandoned early (close() or task cancellation)
            if self.state is not ConversionStage.COMPLETE:
                self.state = ConversionStage.FAILED


class AudioToMidiConverter:
    """Extracts MIDI notes from audio in melody, harmony or drums mode.

    The converter owns one FFT engine whose tables are reused across runs, so
    an instance must not be shared between threads.
    """

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        peak_order: PeakOrder = PeakOrder.DETECTION,
        confidence_threshold: float = PITCH_CONFIDENCE_THRESHOLD,
        segmentation: Optional[SegmentationConfig] = None,
        loader: Optional[AudioLoader] = None,
    ):
        """
        Initialize AudioToMidiConverter.

        Args:
            tempo: Tempo in BPM for placing notes on the beat grid
                (240 puts one second at four beats)
            peak_order: Which chord peaks to keep when more than four are found
            confidence_threshold: Minimum pitch confidence in melody mode
            segmentation: Full segmentation settings (overrides ``tempo``)
            loader: Decoder for file inputs
        """
        if segmentation is not None:
            self.segmenter = NoteSegmenter(config=segmentation)
        else:
            self.segmenter = NoteSegmenter(tempo=tempo)
        self.peak_order = PeakOrder(peak_order)
        self.confidence_threshold = confidence_threshold
        self.loader = loader or AudioLoader()
        self.fft = FFT()

        self._factories: Dict[ConversionMode, Callable[[int], FrameTranscriber]] = {
            ConversionMode.MELODY: self._melody_transcriber,
            ConversionMode.HARMONY: self._harmony_transcriber,
            ConversionMode.DRUMS: self._drum_transcriber,
        }

    @property
    def tempo(self) -> float:
        return self.segmenter.config.tempo

    def start(
        self,
        source: AudioSource,
        mode: Union[ConversionMode, str] = ConversionMode.MELODY,
        sample_rate: Optional[int] = None,
    ) -> Conversion:
        """
        Prepare a conversion without running it.

        Args:
            source: SampleBuffer, numpy samples (with ``sample_rate``), or file path
            mode: Capture mode
            sample_rate: Sample rate for raw numpy input

        Returns:
            Conversion to iterate or run
        """
        return Conversion(self, source, ConversionMode.parse(mode), sample_rate)

    def convert(
        self,
        source: AudioSource,
        mode: Union[ConversionMode, str] = ConversionMode.MELODY,
        on_progress: Optional[ProgressCallback] = None,
        sample_rate: Optional[int] = None,
    ) -> ConversionResult:
        """
        Convert audio to MIDI notes.

        Args:
            source: SampleBuffer, numpy samples (with ``sample_rate``), or file path
            mode: Capture mode ('melody', 'harmony' or 'drums')
            on_progress: Called with (stage, percent); the last call is
                ("Complete", 100)
            sample_rate: Sample rate for raw numpy input

        Returns:
            ConversionResult with the detected notes
        """
        return self.start(source, mode, sample_rate).run(on_progress)

    async def convert_async(
        self,
        source: AudioSource,
        mode: Union[ConversionMode, str] = ConversionMode.MELODY,
        on_progress: Optional[ProgressCallback] = None,
        sample_rate: Optional[int] = None,
    ) -> ConversionResult:
        """Same as ``convert`` but cooperative with an asyncio event loop."""
        return await self.start(source, mode, sample_rate).run_async(on_progress)

    def load(self, source: AudioSource, sample_rate: Optional[int] = None) -> SampleBuffer:
        """Resolve any accepted source into a SampleBuffer."""
        if isinstance(source, SampleBuffer):
            return source
        if isinstance(source, (str, Path)):
            return self.loader.load(source)
        if sample_rate is None:
            raise DecodeError("A sample rate is required for raw sample input")
        return SampleBuffer.from_array(source, sample_rate)

    def transcriber_for(
        self, mode: Union[ConversionMode, str], sample_rate: int
    ) -> FrameTranscriber:
        """Build a fresh transcriber for one run."""
        return self._factories[ConversionMode.parse(mode)](sample_rate)

    def _melody_transcriber(self, sample_rate: int) -> MelodyTranscriber:
        return MelodyTranscriber(
            sample_rate,
            segmenter=self.segmenter,
            confidence_threshold=self.confidence_threshold,
            fft=self.fft,
        )

    def _harmony_transcriber(self, sample_rate: int) -> HarmonyTranscriber:
        return HarmonyTranscriber(
            sample_rate,
            segmenter=self.segmenter,
            order=self.peak_order,
            fft=self.fft,
        )

    def _drum_transcriber(self, sample_rate: int) -> DrumTranscriber:
        return DrumTranscriber(sample_rate, segmenter=self.segmenter, fft=self.fft)
