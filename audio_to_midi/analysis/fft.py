"""Radix-2 FFT engine with per-size cached tables.

The engine works in place on separate real/imaginary arrays so detectors can
reuse scratch buffers frame after frame. Tables and scratch space for each
transform length are built once and kept for the lifetime of the engine.

An ``FFT`` instance is not safe to share between threads; give each worker
its own engine.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple
import numpy as np

from ..core.errors import InvalidSizeError


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return isinstance(n, (int, np.integer)) and n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n."""
    size = 1
    while size < n:
        size <<= 1
    return size


@dataclass
class FFTContext:
    """Precomputed tables and scratch buffers for one transform length."""

    size: int
    reverse_table: np.ndarray  # Bit-reversed index for each position
    cos_table: np.ndarray  # cos(-2*pi*k/N), k < N/2
    sin_table: np.ndarray  # sin(-2*pi*k/N), k < N/2
    real: np.ndarray  # Scratch
    imag: np.ndarray  # Scratch

    @classmethod
    def create(cls, size: int) -> "FFTContext":
        reverse_table = np.zeros(size, dtype=np.intp)
        limit = 1
        bit = size >> 1
        while limit < size:
            reverse_table[limit : 2 * limit] = reverse_table[:limit] + bit
            limit <<= 1
            bit >>= 1

        phase = -2.0 * np.pi * np.arange(size // 2) / size

        return cls(
            size=size,
            reverse_table=reverse_table,
            cos_table=np.cos(phase),
            sin_table=np.sin(phase),
            real=np.zeros(size),
            imag=np.zeros(size),
        )


class FFT:
    """Iterative Cooley-Tukey transform over power-of-two lengths."""

    def __init__(self):
        self._contexts: Dict[int, FFTContext] = {}

    @property
    def sizes(self) -> List[int]:
        """Transform lengths with cached tables."""
        return sorted(self._contexts)

    def context(self, size: int) -> FFTContext:
        """
        Get the cached context for a transform length, building it on first use.

        Raises:
            InvalidSizeError: If size is not a power of two
        """
        if not is_power_of_two(size):
            raise InvalidSizeError(f"FFT size must be a power of 2, got {size}")

        ctx = self._contexts.get(size)
        if ctx is None:
            ctx = FFTContext.create(int(size))
            self._contexts[ctx.size] = ctx
        return ctx

    def create_complex_array(self, size: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return zero-filled (real, imag) buffers of the given length."""
        if not is_power_of_two(size):
            raise InvalidSizeError(f"FFT size must be a power of 2, got {size}")
        return np.zeros(size), np.zeros(size)

    def forward(self, real: np.ndarray, imag: np.ndarray) -> None:
        """In-place forward transform of ``real + 1j * imag``."""
        ctx = self._check_buffers(real, imag)
        size = ctx.size

        # Bit-reverse permutation
        real[:] = real[ctx.reverse_table]
        imag[:] = imag[ctx.reverse_table]

        # Butterflies, one vectorised pass per stage
        half = 1
        while half < size:
            step = size // (half * 2)
            cos = ctx.cos_table[::step][:half]
            sin = ctx.sin_table[::step][:half]

            re = real.reshape(-1, 2 * half)
            im = imag.reshape(-1, 2 * half)
            top_re, bottom_re = re[:, :half], re[:, half:]
            top_im, bottom_im = im[:, :half], im[:, half:]

            temp_re = bottom_re * cos - bottom_im * sin
            temp_im = bottom_re * sin + bottom_im * cos

            bottom_re[...] = top_re - temp_re
            bottom_im[...] = top_im - temp_im
            top_re += temp_re
            top_im += temp_im

            half <<= 1

    def inverse(self, real: np.ndarray, imag: np.ndarray) -> None:
        """In-place inverse transform, scaled by 1/N."""
        self._check_buffers(real, imag)
        size = real.shape[0]

        np.negative(imag, out=imag)
        self.forward(real, imag)
        np.negative(imag, out=imag)

        real /= size
        imag /= size

    def magnitude_spectrum(self, frame: np.ndarray) -> np.ndarray:
        """
        Unnormalised magnitude |X[k]| of a real frame, first N/2 bins.

        Args:
            frame: Real samples, power-of-two length

        Returns:
            New array of length N/2
        """
        ctx = self.context(len(frame))
        real, imag = ctx.real, ctx.imag
        real[:] = frame
        imag.fill(0.0)

        self.forward(real, imag)

        half = ctx.size // 2
        return np.hypot(real[:half], imag[:half])

    def _check_buffers(self, real: np.ndarray, imag: np.ndarray) -> FFTContext:
        for name, arr in (("real", real), ("imag", imag)):
            if not isinstance(arr, np.ndarray) or arr.ndim != 1:
                raise InvalidSizeError(f"FFT {name} buffer must be a 1-D numpy array")
            if not np.issubdtype(arr.dtype, np.floating):
                raise InvalidSizeError(f"FFT {name} buffer must be floating point")
            if not arr.flags.c_contiguous:
                raise InvalidSizeError(f"FFT {name} buffer must be contiguous")

        if real.shape != imag.shape:
            raise InvalidSizeError(
                f"FFT buffers differ in length: {real.shape[0]} vs {imag.shape[0]}"
            )
        return self.context(real.shape[0])
