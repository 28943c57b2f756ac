"""Exception types raised by the analysis pipeline."""


class AudioToMidiError(Exception):
    """Base class for all Audio to MIDI errors."""


class InvalidSizeError(AudioToMidiError, ValueError):
    """Transform length is not a power of two, or buffers disagree in shape."""


class DecodeError(AudioToMidiError, ValueError):
    """Input audio could not be decoded into a usable sample buffer."""
