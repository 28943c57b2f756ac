"""Note segmentation - Merge per-frame estimates into discrete notes.

Three strategies, one per capture mode:
- Melody: runs of frames within a semitone become one note
- Harmony: runs of frames with the same chord become one note per pitch
- Drums: every transient becomes one short note
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..core import MidiNote, PitchEstimate, ChordEstimate, TransientEvent
from ..core.constants import DEFAULT_TEMPO, MIN_NOTE_DURATION


@dataclass
class SegmentationConfig:
    """Configuration for note segmentation.

    Attributes:
        tempo: Tempo in BPM used to convert seconds to beats (default: 240,
            i.e. one second is four beats)
        pitch_tolerance: Semitones a melody may drift and stay one note (default: 1)
        min_note_duration: Melody notes shorter than this in seconds are dropped
            (default: 0.05)
        max_gap: Seconds between melody estimates that close a note; None never
            closes on gaps (default: None)
        melody_min_beats: Shortest emitted melody note in beats (default: 0.25)
        melody_velocity: Velocity of melody notes (default: 0.8)
        chord_min_beats: Shortest emitted chord note in beats (default: 0.5)
        chord_velocity: Velocity of chord notes (default: 0.75)
        drum_duration_beats: Length of every drum note in beats (default: 0.25)
    """

    tempo: float = DEFAULT_TEMPO
    pitch_tolerance: int = 1
    min_note_duration: float = MIN_NOTE_DURATION
    max_gap: Optional[float] = None
    melody_min_beats: float = 0.25
    melody_velocity: float = 0.8
    chord_min_beats: float = 0.5
    chord_velocity: float = 0.75
    drum_duration_beats: float = 0.25

    def __post_init__(self):
        if self.tempo <= 0:
            raise ValueError(f"Tempo must be positive, got {self.tempo}")


@dataclass
class _OpenNote:
    pitch: int
    start: float
    end: float


@dataclass
class _OpenChord:
    pitches: List[int]
    fingerprint: str
    start: float
    end: float


class NoteSegmenter:
    """Build MidiNotes from detector output."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        min_note_duration: float = MIN_NOTE_DURATION,
        config: Optional[SegmentationConfig] = None,
    ):
        """Initialize NoteSegmenter.

        Args:
            tempo: Tempo in BPM for the seconds-to-beats conversion
            min_note_duration: Minimum melody note duration in seconds
            config: Optional SegmentationConfig for advanced settings
        """
        if config is not None:
            self.config = config
        else:
            self.config = SegmentationConfig(
                tempo=tempo,
                min_note_duration=min_note_duration,
            )

    @property
    def beats_per_second(self) -> float:
        return self.config.tempo / 60.0

    def seconds_to_beats(self, seconds: float) -> float:
        return seconds * self.beats_per_second

    def segment_melody(self, estimates: Iterable[PitchEstimate]) -> List[MidiNote]:
        """
        Merge consecutive pitch estimates into notes.

        A note keeps absorbing frames while their pitch stays within
        ``pitch_tolerance`` of the note's first pitch.

        Args:
            estimates: Accepted pitch estimates in time order

        Returns:
            List of melody notes
        """
        cfg = self.config
        notes: List[MidiNote] = []
        current: Optional[_OpenNote] = None

        for est in estimates:
            if current is not None:
                same_pitch = abs(est.midi_note - current.pitch) <= cfg.pitch_tolerance
                gap_ok = cfg.max_gap is None or est.time - current.end <= cfg.max_gap
                if same_pitch and gap_ok:
                    current.end = est.time
                    continue
                self._close_melody_note(current, notes)

            current = _OpenNote(pitch=est.midi_note, start=est.time, end=est.time)

        if current is not None:
            self._close_melody_note(current, notes)

        return notes

    def _close_melody_note(self, current: _OpenNote, notes: List[MidiNote]) -> None:
        duration = current.end - current.start
        if duration < self.config.min_note_duration:
            return

        notes.append(
            MidiNote(
                id=f"note-{len(notes)}",
                pitch=current.pitch,
                start=self.seconds_to_beats(current.start),
                duration=max(self.config.melody_min_beats, self.seconds_to_beats(duration)),
                velocity=self.config.melody_velocity,
            )
        )

    def segment_chords(self, estimates: Iterable[ChordEstimate]) -> List[MidiNote]:
        """
        Merge consecutive frames holding the same chord.

        Each closed chord emits one note per pitch, all sharing its start and
        duration.

        Args:
            estimates: Chord estimates in time order

        Returns:
            List of chord notes, grouped by chord and ordered by pitch
        """
        notes: List[MidiNote] = []
        current: Optional[_OpenChord] = None

        for est in estimates:
            fingerprint = est.fingerprint
            if current is not None and fingerprint == current.fingerprint:
                current.end = est.time
                continue

            if current is not None:
                self._close_chord(current, notes)
            current = _OpenChord(
                pitches=sorted(est.pitches),
                fingerprint=fingerprint,
                start=est.time,
                end=est.time,
            )

        if current is not None:
            self._close_chord(current, notes)

        return notes

    def _close_chord(self, current: _OpenChord, notes: List[MidiNote]) -> None:
        start = self.seconds_to_beats(current.start)
        duration = max(
            self.config.chord_min_beats,
            self.seconds_to_beats(current.end - current.start),
        )
        for pitch in current.pitches:
            notes.append(
                MidiNote(
                    id=f"chord-{len(notes)}",
                    pitch=pitch,
                    start=start,
                    duration=duration,
                    velocity=self.config.chord_velocity,
                )
            )

    def segment_transients(self, events: Iterable[TransientEvent]) -> List[MidiNote]:
        """One fixed-length drum note per transient."""
        return [
            MidiNote(
                id=f"drum-{i}",
                pitch=event.classification.midi_pitch,
                start=self.seconds_to_beats(event.time),
                duration=self.config.drum_duration_beats,
                velocity=event.velocity,
            )
            for i, event in enumerate(events)
        ]
