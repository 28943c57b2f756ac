"""Output layer - Export to MIDI files."""

from .midi import MIDIExporter

__all__ = ["MIDIExporter"]
