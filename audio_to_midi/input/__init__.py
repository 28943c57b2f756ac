"""Input layer - Decoding audio files into sample buffers."""

from .loader import AudioLoader, AudioInfo

__all__ = ["AudioLoader", "AudioInfo"]
