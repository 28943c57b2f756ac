"""Tests for the command-line interface."""

import json

import pretty_midi
import pytest
from typer.testing import CliRunner

from audio_to_midi.cli import app

from generate_test_audio import generate_drum_hits, generate_note_sequence, save_wav

runner = CliRunner()


@pytest.fixture
def melody_wav(tmp_path):
    audio = generate_note_sequence([261.63, 329.63], [1.0, 1.0])
    return save_wav(str(tmp_path / "melody.wav"), audio)


def test_convert_writes_midi(melody_wav, tmp_path):
    output = tmp_path / "melody.mid"
    result = runner.invoke(app, ["convert", melody_wav, "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "Detected 2 notes" in result.output
    assert output.exists()


def test_convert_default_output(melody_wav, tmp_path):
    result = runner.invoke(app, ["convert", melody_wav])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "melody.mid").exists()


def test_convert_json(melody_wav, tmp_path):
    output = tmp_path / "melody.mid"
    result = runner.invoke(app, ["convert", melody_wav, "-o", str(output), "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["mode"] == "melody"
    assert [n["pitch"] for n in data["notes"]] == [60, 64]
    assert data["notes"][0]["id"] == "note-0"


def test_convert_drums_uses_percussion_track(tmp_path):
    path = save_wav(str(tmp_path / "drums.wav"), generate_drum_hits([0.25, 0.75], 1.0))
    output = tmp_path / "drums.mid"
    result = runner.invoke(app, ["convert", path, "-m", "drums", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert pretty_midi.PrettyMIDI(str(output)).instruments[0].is_drum


def test_convert_verbose_table(melody_wav):
    result = runner.invoke(app, ["convert", melody_wav, "-v"])
    assert result.exit_code == 0, result.output
    assert "Detected Notes" in result.output
    assert "C4" in result.output


def test_bad_mode(melody_wav):
    result = runner.invoke(app, ["convert", melody_wav, "-m", "piano"])
    assert result.exit_code == 1
    assert "Unknown mode" in result.output


def test_bad_peak_order(melody_wav):
    result = runner.invoke(app, ["convert", melody_wav, "--peak-order", "loudest"])
    assert result.exit_code == 1


def test_missing_file(tmp_path):
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.wav")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_unsupported_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not audio")
    result = runner.invoke(app, ["convert", str(path)])
    assert result.exit_code == 1
    assert "Unsupported format" in result.output


def test_info(melody_wav):
    result = runner.invoke(app, ["info", melody_wav])
    assert result.exit_code == 0, result.output
    assert "Sample rate: 44100 Hz" in result.output
    assert "Channels: 1" in result.output
