"""Analysis layer - Low-level signal analysis.

This layer turns raw frames into per-frame estimates:
- FFT engine shared by all detectors
- Monophonic pitch (YIN)
- Polyphonic spectral peaks
- Percussive transients
"""

from .fft import FFT, FFTContext, is_power_of_two, next_power_of_two
from .pitch import PitchDetector
from .peaks import PeakDetector, PeakOrder
from .transients import TransientDetector

__all__ = [
    "FFT",
    "FFTContext",
    "is_power_of_two",
    "next_power_of_two",
    "PitchDetector",
    "PeakDetector",
    "PeakOrder",
    "TransientDetector",
]
