"""Monophonic pitch detection (YIN with FFT-accelerated autocorrelation)."""

from typing import Optional
import numpy as np

from .fft import FFT, next_power_of_two
from ..core import MidiNote, PitchEstimate
from ..core.constants import (
    MELODY_FRAME_SIZE,
    MELODY_FMIN,
    MELODY_FMAX,
    YIN_THRESHOLD,
    SILENCE_RMS,
    MIDI_MIN,
    MIDI_MAX,
)


class PitchDetector:
    """Per-frame fundamental frequency estimator.

    Implements the cumulative-mean-normalized difference function from YIN
    (de Cheveigne & Kawahara, 2002). The difference function is expanded as

        d(tau) = P[N - tau] + (P[N] - P[tau]) - 2 * r(tau)

    where P is the prefix sum of squared samples and r the autocorrelation,
    which is computed through the FFT on a zero-padded copy of the frame.
    """

    def __init__(
        self,
        sample_rate: int,
        frame_size: int = MELODY_FRAME_SIZE,
        fmin: float = MELODY_FMIN,
        fmax: float = MELODY_FMAX,
        threshold: float = YIN_THRESHOLD,
        silence_rms: float = SILENCE_RMS,
        fft: Optional[FFT] = None,
    ):
        """
        Initialize PitchDetector.

        Args:
            sample_rate: Sample rate of the frames in Hz
            frame_size: Samples per analysis frame
            fmin: Lowest detectable frequency (sets the longest period)
            fmax: Highest detectable frequency (sets the shortest period)
            threshold: Absolute threshold on the normalized difference
            silence_rms: Frames quieter than this RMS are skipped
            fft: FFT engine to use (a private one is created if omitted)
        """
        if fmin <= 0 or fmax <= fmin:
            raise ValueError(f"Invalid frequency band: {fmin}-{fmax} Hz")

        self.sample_rate = sample_rate
        self.frame_size = frame_size
        self.fmin = fmin
        self.fmax = fmax
        self.threshold = threshold
        self.silence_rms = silence_rms
        self.fft = fft or FFT()

        self.min_period = max(1, int(sample_rate // fmax))
        self.max_period = min(int(sample_rate // fmin), frame_size - 1)
        if self.max_period <= self.min_period:
            raise ValueError(
                f"Frame size {frame_size} too short for a {fmin}-{fmax} Hz band "
                f"at {sample_rate} Hz"
            )

        # Linear (not circular) autocorrelation needs at least 2N points
        self.fft_size = next_power_of_two(2 * frame_size)

    def detect(self, frame: np.ndarray, time: float = 0.0) -> Optional[PitchEstimate]:
        """
        Estimate the fundamental frequency of one frame.

        Args:
            frame: Mono samples, ``frame_size`` long
            time: Frame start in seconds, copied into the estimate

        Returns:
            PitchEstimate, or None for silent or aperiodic frames
        """
        x = np.asarray(frame, dtype=np.float64)
        if len(x) != self.frame_size:
            raise ValueError(
                f"Expected a frame of {self.frame_size} samples, got {len(x)}"
            )

        rms = np.sqrt(np.mean(x**2))
        if rms < self.silence_rms:
            return None

        cmnd = self.normalized_difference(x)

        tau = self._first_dip(cmnd)
        if tau is None:
            return None

        period = tau + self._parabolic_offset(cmnd, tau)
        frequency = self.sample_rate / period
        midi_note = int(np.clip(MidiNote.freq_to_midi(frequency), MIDI_MIN, MIDI_MAX))
        confidence = float(np.clip(1.0 - cmnd[tau], 0.0, 1.0))

        return PitchEstimate(
            frequency=float(frequency),
            midi_note=midi_note,
            confidence=confidence,
            time=time,
        )

    def normalized_difference(self, x: np.ndarray) -> np.ndarray:
        """Cumulative-mean-normalized difference d'(tau) for tau in [0, max_period]."""
        n = len(x)

        prefix = np.zeros(n + 1)
        np.cumsum(x * x, out=prefix[1:])

        # Autocorrelation via power spectrum
        ctx = self.fft.context(self.fft_size)
        real, imag = ctx.real, ctx.imag
        real[:n] = x
        real[n:] = 0.0
        imag.fill(0.0)

        self.fft.forward(real, imag)
        real *= real
        real += imag * imag
        imag.fill(0.0)
        self.fft.inverse(real, imag)

        taus = np.arange(self.max_period + 1)
        diff = prefix[n - taus] + (prefix[n] - prefix[taus]) - 2.0 * real[: self.max_period + 1]
        # Rounding can leave tiny negatives where the true value is zero
        diff = np.maximum(diff, 0.0)
        diff[0] = 0.0

        cmnd = np.ones_like(diff)
        running = np.cumsum(diff[1:])
        np.divide(
            diff[1:] * taus[1:],
            running,
            out=cmnd[1:],
            where=running > 0,
        )
        return cmnd

    def _first_dip(self, cmnd: np.ndarray) -> Optional[int]:
        """First local minimum below threshold within [min_period, max_period)."""
        below = np.flatnonzero(cmnd[self.min_period : self.max_period] < self.threshold)
        if len(below) == 0:
            return None

        tau = self.min_period + int(below[0])
        while tau + 1 < self.max_period and cmnd[tau + 1] < cmnd[tau]:
            tau += 1
        return tau

    def _parabolic_offset(self, cmnd: np.ndarray, tau: int) -> float:
        """Sub-sample offset of the minimum around ``tau``."""
        if tau < 1 or tau + 1 >= len(cmnd):
            return 0.0

        prev, curr, nxt = cmnd[tau - 1], cmnd[tau], cmnd[tau + 1]
        denominator = prev - 2.0 * curr + nxt
        if abs(denominator) < 1e-12:
            return 0.0

        offset = (prev - nxt) / (2.0 * denominator)
        return float(np.clip(offset, -1.0, 1.0))
