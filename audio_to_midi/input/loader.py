"""Audio decoding into sample buffers."""

import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Union
import numpy as np
import librosa
import soundfile as sf

from ..core import SampleBuffer, DecodeError


@dataclass
class AudioInfo:
    """Header information for an audio file."""

    path: Path
    sample_rate: int
    channels: int
    frames: int
    format: str

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.frames / self.sample_rate


class AudioLoader:
    """Handles audio file decoding."""

    SUPPORTED_FORMATS = {".wav", ".flac", ".ogg", ".mp3", ".m4a", ".aiff", ".aif"}

    def __init__(self, normalize: bool = False):
        """
        Initialize AudioLoader.

        Args:
            normalize: Peak-normalize the decoded audio if True
        """
        self.normalize = normalize

    def load(self, path: Union[str, Path]) -> SampleBuffer:
        """
        Decode an audio file at its native sample rate.

        Args:
            path: Path to audio file

        Returns:
            SampleBuffer with every channel of the file

        Raises:
            DecodeError: If the format is unsupported or the file is unreadable
            FileNotFoundError: If file doesn't exist
        """
        path = self._check_path(path)

        try:
            audio, sr = librosa.load(str(path), sr=None, mono=False)
        except Exception as e:
            raise DecodeError(f"Could not decode {path.name}: {e}") from e

        if audio.ndim > 1 and audio.shape[0] > 1:
            warnings.warn(
                f"{path.name} has {audio.shape[0]} channels; only channel 0 is analyzed"
            )

        if self.normalize:
            audio = self._normalize(audio)

        return SampleBuffer.from_array(audio, sr)

    def info(self, path: Union[str, Path]) -> AudioInfo:
        """Read the file header without decoding samples."""
        path = self._check_path(path)

        try:
            header = sf.info(str(path))
        except Exception as e:
            raise DecodeError(f"Could not read {path.name}: {e}") from e

        return AudioInfo(
            path=path,
            sample_rate=header.samplerate,
            channels=header.channels,
            frames=header.frames,
            format=header.format,
        )

    def _check_path(self, path: Union[str, Path]) -> Path:
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise DecodeError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )
        return path

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max()
        if peak > 0:
            audio = audio / peak
        return audio
