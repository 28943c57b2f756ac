"""Global constants for Audio to MIDI."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Silence gate (RMS)
SILENCE_RMS = 0.01

# Melody (monophonic) analysis
MELODY_FRAME_SIZE = 2048  # ~46ms at 44.1kHz
MELODY_HOP_SIZE = 512
MELODY_FMIN = 60.0
MELODY_FMAX = 1200.0
YIN_THRESHOLD = 0.15
PITCH_CONFIDENCE_THRESHOLD = 0.8

# Harmony (polyphonic) analysis
HARMONY_FRAME_SIZE = 4096
HARMONY_HOP_SIZE = 2048
HARMONY_FMIN = 60.0
HARMONY_FMAX = 2000.0
PEAK_MAGNITUDE_FLOOR = 0.1
MAX_CHORD_PITCHES = 4

# Drum (transient) analysis
DRUMS_FRAME_SIZE = 1024
DRUMS_HOP_SIZE = 256
ONSET_THRESHOLD = 0.1
ENERGY_FLOOR = 0.05
KICK_MAX_CENTROID = 200.0
HAT_MIN_CENTROID = 4000.0

# Musical defaults
DEFAULT_TEMPO = 240.0  # 1 second == 4 beats
MIN_NOTE_DURATION = 0.05  # seconds

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
