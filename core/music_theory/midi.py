"""
core/music_theory/midi.py — MIDI note, name, frequency and interval utilities.

The single authority for converting between MIDI note numbers, scientific
pitch names ("C#4") and equal-temperament frequencies. Standalone: imports
nothing from the rest of the engine except value types and config.

Naming convention: MIDI 60 = C4 (middle C), MIDI 69 = A4, MIDI 0 = C-1.

Failure policy:
    - Parsing and frequency functions return None for input they cannot
      convert (note_name_to_midi, midi_to_frequency, frequency_to_midi,
      transpose_note, get_interval_semitones).
    - Formatting and arithmetic helpers clamp instead (midi_to_note_name,
      transpose, clamp_midi).
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from typing import overload

from core.music_theory.config import DEFAULT_TUNING, TuningConfig
from core.music_theory.diagnostics import WarningHandler, warn
from core.music_theory.types import NoteRange

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIDI_MIN: int = 0
MIDI_MAX: int = 127

NOTE_NAMES_SHARP: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
NOTE_NAMES_FLAT: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

# Natural note letter → semitone offset from C
_LETTER_SEMITONES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_NOTE_NAME_RE = re.compile(r"([A-G])([#b]?)(-?[0-9]+)")

#: Named reference pitches, consistent with midi_to_note_name()
MIDI_REFERENCE_NOTES: dict[str, int] = {
    "C-1": 0,
    "C0": 12,
    "C1": 24,
    "C2": 36,
    "C3": 48,
    "C4": 60,  # middle C
    "C5": 72,
    "C6": 84,
    "C7": 96,
    "C8": 108,
    "A0": 21,
    "A1": 33,
    "A2": 45,
    "A3": 57,
    "A4": 69,  # concert pitch
    "A5": 81,
    "A6": 93,
    "A7": 105,
    "G9": 127,
    "PIANO_LOWEST": 21,  # A0
    "PIANO_HIGHEST": 108,  # C8
}

PIANO_RANGE = NoteRange(
    low=MIDI_REFERENCE_NOTES["PIANO_LOWEST"],
    high=MIDI_REFERENCE_NOTES["PIANO_HIGHEST"],
)

# Keyed by semitones % 12, so "octave" is only reachable through
# get_interval_semitones().
INTERVAL_NAMES: dict[int, str] = {
    0: "unison",
    1: "minor 2nd",
    2: "major 2nd",
    3: "minor 3rd",
    4: "major 3rd",
    5: "perfect 4th",
    6: "tritone",
    7: "perfect 5th",
    8: "minor 6th",
    9: "major 6th",
    10: "minor 7th",
    11: "major 7th",
    12: "octave",
}


# ---------------------------------------------------------------------------
# Name ↔ MIDI
# ---------------------------------------------------------------------------


def midi_to_note_name(
    note: int,
    use_sharps: bool = True,
    *,
    on_warning: WarningHandler | None = None,
) -> str:
    """Convert a MIDI note to its scientific pitch name.

    Out-of-range notes are clamped into [0, 127] with a warning.

    Examples:
        >>> midi_to_note_name(60)
        'C4'
        >>> midi_to_note_name(61, use_sharps=False)
        'Db4'
        >>> midi_to_note_name(127)
        'G9'
    """
    if not (MIDI_MIN <= note <= MIDI_MAX):
        warn(logger, on_warning, f"MIDI note out of range: {note}. Clamping to 0-127.")
        note = max(MIDI_MIN, min(MIDI_MAX, note))
    names = NOTE_NAMES_SHARP if use_sharps else NOTE_NAMES_FLAT
    return f"{names[note % 12]}{get_octave(note)}"


def note_name_to_midi(name: object) -> int | None:
    """Parse a scientific pitch name into a MIDI note.

    Accepts a letter A–G, an optional "#" or "b", and a (possibly negative)
    octave number. Enharmonic spellings map to the same note.

    Returns:
        MIDI note in [0, 127], or None if the name cannot be parsed or the
        result is out of range

    Examples:
        >>> note_name_to_midi("A4")
        69
        >>> note_name_to_midi("Db4")
        61
        >>> note_name_to_midi("H2") is None
        True
    """
    if not isinstance(name, str):
        return None
    match = _NOTE_NAME_RE.fullmatch(name)
    if match is None:
        return None

    letter, accidental, octave_str = match.groups()
    offset = _LETTER_SEMITONES[letter]
    if accidental == "#":
        offset += 1
    elif accidental == "b":
        offset -= 1

    note = (int(octave_str) + 1) * 12 + offset
    if not (MIDI_MIN <= note <= MIDI_MAX):
        return None
    return note


# ---------------------------------------------------------------------------
# MIDI ↔ frequency
# ---------------------------------------------------------------------------


def midi_to_frequency(
    note: int,
    *,
    tuning: TuningConfig = DEFAULT_TUNING,
    on_warning: WarningHandler | None = None,
) -> float | None:
    """Convert a MIDI note to its equal-temperament frequency in Hz.

    f = reference_hz × 2^((note − reference_midi) / 12)

    Returns:
        Frequency in Hz, or None if note is outside [0, 127]

    Examples:
        >>> midi_to_frequency(69)
        440.0
        >>> round(midi_to_frequency(60), 2)
        261.63
    """
    if not (MIDI_MIN <= note <= MIDI_MAX):
        warn(logger, on_warning, f"MIDI note out of range: {note}")
        return None
    return tuning.reference_hz * 2 ** ((note - tuning.reference_midi) / 12)


def frequency_to_midi(
    frequency: float,
    *,
    tuning: TuningConfig = DEFAULT_TUNING,
    on_warning: WarningHandler | None = None,
) -> int | None:
    """Convert a frequency in Hz to the nearest MIDI note.

    n = reference_midi + 12 × log2(f / reference_hz), rounded half up.

    Returns:
        MIDI note in [0, 127], or None for a non-positive frequency or one
        outside the MIDI range

    Examples:
        >>> frequency_to_midi(440.0)
        69
        >>> frequency_to_midi(261.63)
        60
    """
    if not math.isfinite(frequency) or frequency <= 0:
        warn(logger, on_warning, f"Frequency must be positive: {frequency}")
        return None

    exact = tuning.reference_midi + 12 * math.log2(frequency / tuning.reference_hz)
    note = math.floor(exact + 0.5)
    if not (MIDI_MIN <= note <= MIDI_MAX):
        warn(logger, on_warning, f"Frequency {frequency} Hz is out of MIDI range")
        return None
    return note


# ---------------------------------------------------------------------------
# Note arithmetic
# ---------------------------------------------------------------------------


def get_midi_offset(from_note: int, to_note: int) -> int:
    """Return the signed semitone distance from one note to another."""
    return to_note - from_note


def get_octave(note: int) -> int:
    """Return the scientific-pitch octave of a note (60 → 4, 0 → -1)."""
    return note // 12 - 1


def get_note_in_octave(note: int) -> int:
    """Return the pitch class (0–11) of a note."""
    return note % 12


def is_valid_midi_note(value: object) -> bool:
    """True if value is an integer MIDI note in [0, 127]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIDI_MIN <= value <= MIDI_MAX


def _clamp(note: int, low: int, high: int) -> int:
    return max(low, min(high, note))


@overload
def transpose(notes: int, semitones: int) -> int: ...


@overload
def transpose(notes: Sequence[int], semitones: int) -> tuple[int, ...]: ...


def transpose(notes: int | Sequence[int], semitones: int) -> int | tuple[int, ...]:
    """Transpose a note or a sequence of notes, clamping into [0, 127].

    A scalar input returns a scalar; a sequence returns a tuple of the
    same length.

    Examples:
        >>> transpose(60, 5)
        65
        >>> transpose([60, 64, 67], 7)
        (67, 71, 74)
        >>> transpose(120, 12)
        127
    """
    if isinstance(notes, int):
        return _clamp(notes + semitones, MIDI_MIN, MIDI_MAX)
    return tuple(_clamp(note + semitones, MIDI_MIN, MIDI_MAX) for note in notes)


def transpose_note(note: int, semitones: int) -> int | None:
    """Transpose a single note without clamping.

    Returns:
        The transposed note, or None if it leaves [0, 127]
    """
    transposed = note + semitones
    if not (MIDI_MIN <= transposed <= MIDI_MAX):
        return None
    return transposed


@overload
def clamp_midi(notes: int, low: int = ..., high: int = ...) -> int: ...


@overload
def clamp_midi(notes: Sequence[int], low: int = ..., high: int = ...) -> tuple[int, ...]: ...


def clamp_midi(
    notes: int | Sequence[int],
    low: int = MIDI_MIN,
    high: int = MIDI_MAX,
) -> int | tuple[int, ...]:
    """Clamp a note or a sequence of notes into [low, high].

    Same shape rules as transpose().
    """
    if isinstance(notes, int):
        return _clamp(notes, low, high)
    return tuple(_clamp(note, low, high) for note in notes)


# ---------------------------------------------------------------------------
# Intervals and ranges
# ---------------------------------------------------------------------------


def get_interval_name(semitones: int) -> str:
    """Name the interval for a semitone distance, folded into one octave.

    Examples:
        >>> get_interval_name(7)
        'perfect 5th'
        >>> get_interval_name(16)
        'major 3rd'
    """
    return INTERVAL_NAMES.get(semitones % 12, "unknown")


def get_interval_semitones(name: object) -> int | None:
    """Inverse of get_interval_name(); case-insensitive. "octave" → 12.

    Returns:
        Semitone count 0–12, or None for an unknown interval name
    """
    if not isinstance(name, str):
        return None
    wanted = name.strip().lower()
    for semitones, interval_name in INTERVAL_NAMES.items():
        if interval_name == wanted:
            return semitones
    return None


def get_piano_range() -> NoteRange:
    """Return the 88-key piano range, A0 (21) to C8 (108)."""
    return PIANO_RANGE


def is_in_piano_range(note: int) -> bool:
    """True if note lies on an 88-key piano (21 ≤ note ≤ 108)."""
    return PIANO_RANGE.low <= note <= PIANO_RANGE.high
