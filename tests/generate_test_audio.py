"""Synthetic signals for tests, and a script to write them as WAV examples."""

import os
from typing import List, Sequence
import numpy as np
import soundfile as sf

SR = 44100

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def generate_sine_wave(
    freq: float, duration: float, sr: int = SR, amplitude: float = 0.5
) -> np.ndarray:
    """Generate a sine wave at given frequency."""
    t = np.arange(int(round(sr * duration))) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def generate_cosine_frame(k: int, n: int) -> np.ndarray:
    """cos(2*pi*k*i/n), exactly periodic in the frame."""
    return np.cos(2 * np.pi * k * np.arange(n) / n)


def bin_frequency(k: int, n: int, sr: int = SR) -> float:
    """Frequency that lands exactly on FFT bin ``k`` of an ``n``-point frame."""
    return k * sr / n


def generate_note_sequence(
    frequencies: Sequence[float], durations: Sequence[float], sr: int = SR
) -> np.ndarray:
    """Back-to-back pure tones with hard cuts between them."""
    return np.concatenate(
        [generate_sine_wave(f, d, sr) for f, d in zip(frequencies, durations)]
    )


def generate_partials(
    bins: Sequence[int],
    n: int,
    amplitudes: Sequence[float] = (),
    sr: int = SR,
    duration: float = 0.0,
) -> np.ndarray:
    """Sum of bin-centred sinusoids; ``duration`` 0 means a single frame."""
    length = int(round(sr * duration)) if duration else n
    t = np.arange(length)
    amplitudes = list(amplitudes) or [0.2] * len(bins)
    signal = np.zeros(length)
    for k, amp in zip(bins, amplitudes):
        signal += amp * np.sin(2 * np.pi * k * t / n)
    return signal


def generate_white_noise(n: int, amplitude: float = 0.3, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return amplitude * rng.standard_normal(n)


def generate_drum_hits(
    onsets: List[float], duration: float, sr: int = SR, hit_length: float = 0.1
) -> np.ndarray:
    """Low thumps (bin 2 of a 1024-point frame) at the given onset times."""
    audio = np.zeros(int(round(sr * duration)))
    hit = generate_sine_wave(bin_frequency(2, 1024, sr), hit_length, sr, amplitude=0.9)
    for onset in onsets:
        start = int(round(onset * sr))
        end = min(len(audio), start + len(hit))
        audio[start:end] = hit[: end - start]
    return audio


def save_wav(path: str, audio: np.ndarray, sr: int = SR) -> str:
    """Save audio as a 16-bit WAV file."""
    sf.write(path, np.asarray(audio).T, sr, subtype="PCM_16")
    return path


def main():
    os.makedirs(EXAMPLES_DIR, exist_ok=True)

    melody = generate_note_sequence([261.63, 329.63, 392.0, 523.25], [0.5] * 4)
    chord = generate_partials([24, 30, 36], 4096, duration=2.0)
    drums = generate_drum_hits([0.25, 0.75, 1.25, 1.75], 2.0)

    for name, audio in (("melody", melody), ("chord", chord), ("drums", drums)):
        path = save_wav(os.path.join(EXAMPLES_DIR, f"{name}.wav"), audio)
        print(f"Created: {path}")


if __name__ == "__main__":
    main()
