"""Tests for the core data types."""

import numpy as np
import pytest

from audio_to_midi.core import (
    ConversionResult,
    DecodeError,
    DrumClass,
    MidiNote,
    SampleBuffer,
    count_frames,
    iter_frames,
)


class TestSampleBuffer:
    def test_mono_becomes_one_channel(self):
        buffer = SampleBuffer.from_array(np.zeros(100), 8000)
        assert buffer.samples.shape == (1, 100)
        assert buffer.samples.dtype == np.float32
        assert buffer.n_channels == 1
        assert buffer.duration == pytest.approx(100 / 8000)

    def test_channels_first(self):
        buffer = SampleBuffer.from_array(np.zeros((2, 50)), 8000)
        assert buffer.n_channels == 2
        assert buffer.length == 50

    def test_read_only(self):
        buffer = SampleBuffer.from_array(np.zeros(10), 8000)
        with pytest.raises(ValueError):
            buffer.samples[0, 0] = 1.0

    def test_source_array_is_copied(self):
        data = np.zeros(10)
        buffer = SampleBuffer.from_array(data, 8000)
        data[0] = 1.0
        assert buffer.samples[0, 0] == 0.0

    @pytest.mark.parametrize(
        "data,sample_rate",
        [
            (np.zeros(0), 8000),
            (np.zeros((1, 2, 3)), 8000),
            (np.array([0.0, np.inf]), 8000),
            (np.zeros(10), 0),
            (["a", "b"], 8000),
            (np.zeros(10), "44100"),
            (np.zeros(10), None),
            (np.zeros(10), True),
        ],
    )
    def test_malformed_input(self, data, sample_rate):
        with pytest.raises(DecodeError):
            SampleBuffer.from_array(data, sample_rate)

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            SampleBuffer.from_array(np.zeros(0), 8000)


class TestFraming:
    def test_count_frames(self):
        assert count_frames(2048, 2048, 512) == 1
        assert count_frames(2047, 2048, 512) == 0
        assert count_frames(88200, 2048, 512) == 169
        assert count_frames(44100, 4096, 2048) == 20

    def test_frames_in_time_order(self):
        samples = np.arange(20, dtype=np.float32)
        buffer = SampleBuffer.from_array(samples, 10)
        frames = list(iter_frames(buffer, 8, 4))

        assert [f.index for f in frames] == [0, 1, 2, 3]
        assert [f.time for f in frames] == pytest.approx([0.0, 0.4, 0.8, 1.2])
        np.testing.assert_array_equal(frames[1].samples, samples[4:12])

    def test_channel_zero_only(self):
        data = np.stack([np.zeros(16), np.ones(16)])
        frames = list(iter_frames(SampleBuffer.from_array(data, 10), 8, 8))
        assert all(not f.samples.any() for f in frames)

    def test_short_buffer_has_no_frames(self):
        buffer = SampleBuffer.from_array(np.zeros(5), 10)
        assert list(iter_frames(buffer, 8, 4)) == []


class TestMidiNote:
    def test_defaults_and_end(self):
        note = MidiNote(id="note-0", pitch=60, start=1.0, duration=2.0)
        assert note.velocity == 0.8
        assert note.end == 3.0

    @pytest.mark.parametrize(
        "pitch,name", [(60, "C4"), (69, "A4"), (70, "A#4"), (21, "A0"), (0, "C-1")]
    )
    def test_pitch_name(self, pitch, name):
        assert MidiNote("n", pitch, 0.0, 1.0).pitch_name == name

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"pitch": 128},
            {"pitch": -1},
            {"start": -0.5},
            {"duration": 0.0},
            {"velocity": 0.0},
            {"velocity": 1.5},
        ],
    )
    def test_validation(self, kwargs):
        fields = {"id": "n", "pitch": 60, "start": 0.0, "duration": 1.0, **kwargs}
        with pytest.raises(ValueError):
            MidiNote(**fields)

    def test_to_dict(self):
        note = MidiNote("chord-2", 64, 0.5, 0.5, 0.75)
        assert note.to_dict() == {
            "id": "chord-2",
            "pitch": 64,
            "start": 0.5,
            "duration": 0.5,
            "velocity": 0.75,
        }

    @pytest.mark.parametrize(
        "freq,midi", [(440.0, 69), (261.63, 60), (329.63, 64), (880.0, 81), (0.0, 0)]
    )
    def test_freq_to_midi(self, freq, midi):
        assert MidiNote.freq_to_midi(freq) == midi

    def test_midi_to_freq(self):
        assert MidiNote.midi_to_freq(69) == pytest.approx(440.0)
        assert MidiNote.midi_to_freq(57) == pytest.approx(220.0)


class TestConversionResult:
    def test_optional_fields_omitted(self):
        result = ConversionResult(notes=[MidiNote("note-0", 60, 0.0, 1.0)])
        assert result.to_dict() == {"notes": [result.notes[0].to_dict()]}

    def test_optional_fields_present(self):
        data = ConversionResult(tempo=120.0, key="C").to_dict()
        assert data == {"notes": [], "tempo": 120.0, "key": "C"}


def test_drum_pitches():
    assert DrumClass.KICK.midi_pitch == 36
    assert DrumClass.SNARE.midi_pitch == 38
    assert DrumClass.HAT.midi_pitch == 42
