"""Decoded audio buffers and analysis framing."""

from dataclasses import dataclass
from typing import Iterator
import numpy as np
import librosa

from .errors import DecodeError


@dataclass(frozen=True)
class SampleBuffer:
    """Immutable decoded audio: ``samples`` has shape (channels, length)."""

    samples: np.ndarray
    sample_rate: int

    @classmethod
    def from_array(cls, data, sample_rate: int) -> "SampleBuffer":
        """
        Build a buffer from raw sample data.

        Args:
            data: 1-D mono samples or 2-D (channels, samples) array
            sample_rate: Sample rate in Hz

        Returns:
            Read-only SampleBuffer

        Raises:
            DecodeError: If the data is empty, malformed, or not finite
        """
        try:
            samples = np.array(data, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Sample data is not numeric: {e}") from e

        if samples.ndim == 1:
            samples = samples[np.newaxis, :]
        if samples.ndim != 2:
            raise DecodeError(
                f"Expected 1-D or 2-D sample data, got {samples.ndim} dimensions"
            )
        if samples.shape[0] == 0 or samples.shape[1] == 0:
            raise DecodeError("Sample buffer is empty")
        if not np.all(np.isfinite(samples)):
            raise DecodeError("Sample buffer contains NaN or infinite values")
        if (
            not isinstance(sample_rate, (int, float, np.number))
            or isinstance(sample_rate, bool)
            or not sample_rate > 0
        ):
            raise DecodeError(f"Invalid sample rate: {sample_rate}")

        samples.setflags(write=False)
        return cls(samples=samples, sample_rate=int(sample_rate))

    @property
    def n_channels(self) -> int:
        return self.samples.shape[0]

    @property
    def length(self) -> int:
        """Number of samples per channel."""
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self.sample_rate

    def channel(self, index: int = 0) -> np.ndarray:
        return self.samples[index]


@dataclass
class AnalysisFrame:
    """A fixed-length slice of channel 0 and its position in the signal."""

    samples: np.ndarray
    index: int
    time: float  # Frame start in seconds


def count_frames(length: int, frame_size: int, hop_size: int) -> int:
    """Number of whole frames that fit in ``length`` samples."""
    if length < frame_size:
        return 0
    return 1 + (length - frame_size) // hop_size


def iter_frames(
    buffer: SampleBuffer,
    frame_size: int,
    hop_size: int,
) -> Iterator[AnalysisFrame]:
    """
    Lazily slice channel 0 into overlapping frames, in time order.

    Frames are strided views; nothing is copied until a detector reads them.
    """
    if count_frames(buffer.length, frame_size, hop_size) == 0:
        return

    frames = librosa.util.frame(
        buffer.channel(0), frame_length=frame_size, hop_length=hop_size
    )
    times = librosa.frames_to_time(
        np.arange(frames.shape[-1]), sr=buffer.sample_rate, hop_length=hop_size
    )

    for i in range(frames.shape[-1]):
        yield AnalysisFrame(samples=frames[:, i], index=i, time=float(times[i]))
