"""Global constants for Kinko Transcriber."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Flat spellings used by the traditional key labels
PITCH_CLASSES = {
    "C": 0, "C#": 1, "Db": 1, "D": 2, "D#": 3, "Eb": 3,
    "E": 4, "F": 5, "F#": 6, "Gb": 6, "G": 7, "G#": 8, "Ab": 8,
    "A": 9, "A#": 10, "Bb": 10, "B": 11,
}

A4_FREQ = 440.0
A4_MIDI = 69

# Audio processing defaults
DEFAULT_FRAME_SIZE = 2048
DEFAULT_HOP_SIZE = 512
DEFAULT_MIN_FREQ = 80.0
DEFAULT_MAX_FREQ = 2000.0
DEFAULT_MIN_AMPLITUDE = 0.01
DEFAULT_CORRELATION_THRESHOLD = 0.3

# Confidence scoring band (frequencies outside score 0.5)
CORE_BAND = (100.0, 1500.0)

# Musical defaults
DEFAULT_TEMPO = 100  # slow default for honkyoku-style playing
MIN_TEMPO = 60
MAX_TEMPO = 180
DEFAULT_KEY = "D"
DEFAULT_TITLE = "転写された楽曲"

# Instrument ranges (min_freq, max_freq) in Hz
INSTRUMENT_RANGES = {
    "default": (80.0, 2000.0),
    "shakuhachi": (250.0, 1200.0),  # 1.8 shaku, roughly D4 to D6
    "shakuhachi_2_4": (200.0, 1000.0),
}
