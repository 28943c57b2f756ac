"""Tests for polyphonic peak detection."""

import numpy as np
import pytest

from audio_to_midi.analysis import PeakDetector, PeakOrder
from audio_to_midi.core import InvalidSizeError

from generate_test_audio import SR, generate_partials

FRAME = 4096
# Bin-centred partials for MIDI 60, 64, 67, 71, 72, 76
SIX_BINS = [24, 30, 36, 45, 48, 60]


@pytest.fixture
def detector():
    return PeakDetector(SR)


class TestChordDetection:
    def test_triad(self, detector):
        estimate = detector.detect(generate_partials([24, 30, 36], FRAME), time=0.5)
        assert estimate.pitches == (60, 64, 67)
        assert estimate.time == 0.5
        assert estimate.fingerprint == "60,64,67"

    def test_six_partials_capped_at_four(self, detector):
        estimate = detector.detect(generate_partials(SIX_BINS, FRAME))
        assert len(estimate.pitches) <= 4
        assert estimate.pitches == (60, 64, 67, 71)

    def test_magnitude_order_keeps_strongest(self):
        detector = PeakDetector(SR, order=PeakOrder.MAGNITUDE)
        amplitudes = [0.1, 0.15, 0.2, 0.25, 0.3, 0.35]
        estimate = detector.detect(generate_partials(SIX_BINS, FRAME, amplitudes))
        assert estimate.pitches == (76, 72, 71, 67)

    def test_custom_cap(self):
        detector = PeakDetector(SR, max_pitches=2)
        estimate = detector.detect(generate_partials(SIX_BINS, FRAME))
        assert estimate.pitches == (60, 64)

    def test_duplicate_pitches_collapse(self, detector):
        # 1851.9 Hz and 1884.2 Hz both round to MIDI 94
        spectrum = np.zeros(FRAME // 2)
        spectrum[172] = 5.0
        spectrum[175] = 5.0
        assert list(detector.find_peaks(spectrum)) == [172, 175]
        assert detector.pitches_from_spectrum(spectrum) == [94]


class TestPeakPicking:
    def test_requires_two_neighbours_each_side(self, detector):
        spectrum = np.zeros(64)
        spectrum[10] = 1.0
        spectrum[12] = 0.5  # within two bins of 10, but lower
        spectrum[30] = 1.0
        spectrum[31] = 1.0  # plateau is not a strict peak
        assert list(detector.find_peaks(spectrum)) == [10]

    def test_magnitude_floor(self, detector):
        spectrum = np.zeros(64)
        spectrum[20] = 0.1
        spectrum[40] = 0.11
        assert list(detector.find_peaks(spectrum)) == [40]

    def test_edges_ignored(self, detector):
        spectrum = np.zeros(16)
        spectrum[1] = 9.0
        spectrum[14] = 9.0
        assert len(detector.find_peaks(spectrum)) == 0

    def test_band_limits(self, detector):
        # Bin 5 = 53.8 Hz (below 60), bin 190 = 2045 Hz (above 2000)
        estimate = detector.detect(generate_partials([5, 190], FRAME))
        assert estimate is None

    def test_silent_frame(self, detector):
        assert detector.detect(np.zeros(FRAME)) is None

    def test_frame_must_be_power_of_two(self):
        with pytest.raises(InvalidSizeError):
            PeakDetector(SR, frame_size=3000)

    def test_frame_length_must_match(self, detector):
        # A 2048-sample frame would put every partial an octave low
        half_frame = generate_partials([24, 30, 36], FRAME)[: FRAME // 2]
        with pytest.raises(InvalidSizeError, match="4096"):
            detector.detect(half_frame)

    def test_bin_width(self, detector):
        assert detector.bin_width == pytest.approx(SR / FRAME)
