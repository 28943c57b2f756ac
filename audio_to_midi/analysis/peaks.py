"""Polyphonic pitch estimation by magnitude-spectrum peak picking."""

from enum import Enum
from typing import List, Optional
import numpy as np

from .fft import FFT, is_power_of_two
from ..core import ChordEstimate, MidiNote, InvalidSizeError
from ..core.constants import (
    HARMONY_FRAME_SIZE,
    HARMONY_FMIN,
    HARMONY_FMAX,
    PEAK_MAGNITUDE_FLOOR,
    MAX_CHORD_PITCHES,
    SILENCE_RMS,
    MIDI_MIN,
    MIDI_MAX,
)


class PeakOrder(str, Enum):
    """Which peaks survive when a frame has more than the pitch cap."""

    DETECTION = "detection"  # Lowest bins first
    MAGNITUDE = "magnitude"  # Strongest first


class PeakDetector:
    """Estimates up to a handful of simultaneous pitches per frame.

    Harmonics are not separated: a single rich tone can register as several
    pitches.
    """

    def __init__(
        self,
        sample_rate: int,
        frame_size: int = HARMONY_FRAME_SIZE,
        fmin: float = HARMONY_FMIN,
        fmax: float = HARMONY_FMAX,
        magnitude_floor: float = PEAK_MAGNITUDE_FLOOR,
        max_pitches: int = MAX_CHORD_PITCHES,
        order: PeakOrder = PeakOrder.DETECTION,
        silence_rms: float = SILENCE_RMS,
        fft: Optional[FFT] = None,
    ):
        """
        Initialize PeakDetector.

        Args:
            sample_rate: Sample rate of the frames in Hz
            frame_size: Samples per frame (power of two)
            fmin: Peaks at or below this frequency are ignored
            fmax: Peaks at or above this frequency are ignored
            magnitude_floor: Minimum unnormalised bin magnitude for a peak
            max_pitches: Maximum pitches reported per frame
            order: Tie-break used when truncating to ``max_pitches``
            silence_rms: Frames quieter than this RMS are skipped
            fft: FFT engine to use (a private one is created if omitted)
        """
        if not is_power_of_two(frame_size):
            raise InvalidSizeError(f"Frame size must be a power of 2, got {frame_size}")

        self.sample_rate = sample_rate
        self.frame_size = frame_size
        self.fmin = fmin
        self.fmax = fmax
        self.magnitude_floor = magnitude_floor
        self.max_pitches = max_pitches
        self.order = PeakOrder(order)
        self.silence_rms = silence_rms
        self.fft = fft or FFT()

    @property
    def bin_width(self) -> float:
        """Frequency spacing of spectrum bins in Hz."""
        return self.sample_rate / self.frame_size

    def detect(self, frame: np.ndarray, time: float = 0.0) -> Optional[ChordEstimate]:
        """
        Detect the pitches sounding in one frame.

        Returns:
            ChordEstimate, or None if the frame is silent or has no usable peaks

        Raises:
            InvalidSizeError: If the frame is not ``frame_size`` samples long
        """
        x = np.asarray(frame, dtype=np.float64)
        if len(x) != self.frame_size:
            raise InvalidSizeError(
                f"Expected a frame of {self.frame_size} samples, got {len(x)}"
            )
        if np.sqrt(np.mean(x**2)) < self.silence_rms:
            return None

        spectrum = self.fft.magnitude_spectrum(x)
        pitches = self.pitches_from_spectrum(spectrum)
        if not pitches:
            return None

        return ChordEstimate(pitches=tuple(pitches), time=time)

    def find_peaks(self, spectrum: np.ndarray) -> np.ndarray:
        """Bins louder than the floor and their two neighbours on each side."""
        if len(spectrum) < 5:
            return np.array([], dtype=np.intp)

        center = spectrum[2:-2]
        mask = (
            (center > spectrum[1:-3])
            & (center > spectrum[3:-1])
            & (center > spectrum[:-4])
            & (center > spectrum[4:])
            & (center > self.magnitude_floor)
        )
        return np.flatnonzero(mask) + 2

    def pitches_from_spectrum(self, spectrum: np.ndarray) -> List[int]:
        """Map spectral peaks to distinct MIDI pitches, capped at ``max_pitches``."""
        bins = self.find_peaks(spectrum)
        if self.order is PeakOrder.MAGNITUDE:
            bins = bins[np.argsort(-spectrum[bins], kind="stable")]

        pitches: List[int] = []
        for b in bins:
            freq = b * self.bin_width
            if not self.fmin < freq < self.fmax:
                continue
            pitch = int(np.clip(MidiNote.freq_to_midi(freq), MIDI_MIN, MIDI_MAX))
            if pitch in pitches:
                continue
            pitches.append(pitch)
            if len(pitches) == self.max_pitches:
                break

        return pitches
