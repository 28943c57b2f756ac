"""MIDI export functionality."""

import pretty_midi
from typing import Iterable, Union
from pathlib import Path

from ..core import MidiNote, ConversionResult
from ..core.constants import DEFAULT_TEMPO


class MIDIExporter:
    """Export beat-positioned notes to a Standard MIDI File."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        is_drum: bool = False,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM; must match the tempo the notes were placed at
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            is_drum: Write the track on the percussion channel
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.is_drum = is_drum

    def beats_to_seconds(self, beats: float) -> float:
        return beats * 60.0 / self.tempo

    @staticmethod
    def midi_velocity(velocity: float) -> int:
        """Map a (0, 1] velocity onto MIDI's 1-127."""
        return max(1, min(127, int(round(velocity * 127))))

    def export(
        self,
        notes: Union[ConversionResult, Iterable[MidiNote]],
        output_path: Union[str, Path],
    ) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: ConversionResult or MidiNote objects
            output_path: Path to output MIDI file
        """
        midi = self.notes_to_pretty_midi(notes)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))

    def notes_to_pretty_midi(
        self, notes: Union[ConversionResult, Iterable[MidiNote]]
    ) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        if isinstance(notes, ConversionResult):
            notes = notes.notes

        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            is_drum=self.is_drum,
            name=self.instrument_name,
        )

        for note in notes:
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=self.midi_velocity(note.velocity),
                    pitch=note.pitch,
                    start=self.beats_to_seconds(note.start),
                    end=self.beats_to_seconds(note.end),
                )
            )

        midi.instruments.append(instrument)
        return midi
