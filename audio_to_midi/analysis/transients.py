"""Percussive onset detection and coarse drum classification."""

from typing import Optional
import numpy as np

from .fft import FFT, is_power_of_two
from ..core import DrumClass, TransientEvent, InvalidSizeError
from ..core.constants import (
    DRUMS_FRAME_SIZE,
    ONSET_THRESHOLD,
    ENERGY_FLOOR,
    KICK_MAX_CENTROID,
    HAT_MIN_CENTROID,
)


class TransientDetector:
    """Energy-flux onset detector with a spectral-centroid classifier.

    The detector is stateful: each frame's onset strength is measured against
    the previous frame's energy, so frames must be fed in time order. Call
    ``reset()`` before analysing a new signal.
    """

    def __init__(
        self,
        sample_rate: int,
        frame_size: int = DRUMS_FRAME_SIZE,
        onset_threshold: float = ONSET_THRESHOLD,
        energy_floor: float = ENERGY_FLOOR,
        kick_max_centroid: float = KICK_MAX_CENTROID,
        hat_min_centroid: float = HAT_MIN_CENTROID,
        fft: Optional[FFT] = None,
    ):
        """
        Initialize TransientDetector.

        Args:
            sample_rate: Sample rate of the frames in Hz
            frame_size: Samples per frame (power of two)
            onset_threshold: Minimum RMS rise from the previous frame
            energy_floor: Minimum absolute RMS of the frame
            kick_max_centroid: Centroids below this (Hz) are kicks
            hat_min_centroid: Centroids above this (Hz) are hats
            fft: FFT engine to use (a private one is created if omitted)
        """
        if not is_power_of_two(frame_size):
            raise InvalidSizeError(f"Frame size must be a power of 2, got {frame_size}")

        self.sample_rate = sample_rate
        self.frame_size = frame_size
        self.onset_threshold = onset_threshold
        self.energy_floor = energy_floor
        self.kick_max_centroid = kick_max_centroid
        self.hat_min_centroid = hat_min_centroid
        self.fft = fft or FFT()
        self._previous_energy = 0.0

    def reset(self) -> None:
        self._previous_energy = 0.0

    def detect(self, frame: np.ndarray, time: float = 0.0) -> Optional[TransientEvent]:
        """
        Check one frame for an onset.

        Returns:
            TransientEvent, or None when the energy rise or level is too small
        """
        x = np.asarray(frame, dtype=np.float64)
        energy = float(np.sqrt(np.mean(x**2)))
        onset = energy - self._previous_energy
        self._previous_energy = energy

        if onset <= self.onset_threshold or energy <= self.energy_floor:
            return None

        return TransientEvent(
            time=time,
            velocity=min(1.0, energy * 2),
            classification=self.classify(x),
        )

    def spectral_centroid(self, frame: np.ndarray) -> float:
        """Magnitude-weighted mean frequency in Hz (0 for a silent frame)."""
        spectrum = self.fft.magnitude_spectrum(np.asarray(frame, dtype=np.float64))
        freqs = np.arange(len(spectrum)) * (self.sample_rate / len(frame))

        total = spectrum.sum()
        if total <= 0:
            return 0.0
        return float(np.dot(freqs, spectrum) / total)

    def classify(self, frame: np.ndarray) -> DrumClass:
        centroid = self.spectral_centroid(frame)
        if centroid < self.kick_max_centroid:
            return DrumClass.KICK
        if centroid > self.hat_min_centroid:
            return DrumClass.HAT
        return DrumClass.SNARE
