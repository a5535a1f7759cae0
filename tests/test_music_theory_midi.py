"""
Tests for core/music_theory/midi.py — note names, frequency, intervals.

Validates:
    - midi_to_note_name / note_name_to_midi: C4 = 60 convention, enharmonics,
      clamping with a warning, null on unparseable input
    - midi_to_frequency / frequency_to_midi: equal temperament, custom tuning,
      null outside the MIDI range
    - transpose / clamp_midi: scalar and sequence shapes, clamping
    - Interval naming and the piano range
"""

import math

import pytest

from core.music_theory.config import BAROQUE_TUNING, TuningConfig
from core.music_theory.midi import (
    MIDI_REFERENCE_NOTES,
    clamp_midi,
    frequency_to_midi,
    get_interval_name,
    get_interval_semitones,
    get_midi_offset,
    get_note_in_octave,
    get_octave,
    get_piano_range,
    is_in_piano_range,
    is_valid_midi_note,
    midi_to_frequency,
    midi_to_note_name,
    note_name_to_midi,
    transpose,
    transpose_note,
)

# ---------------------------------------------------------------------------
# Name ↔ MIDI
# ---------------------------------------------------------------------------


class TestMidiToNoteName:
    @pytest.mark.parametrize(
        "note, expected",
        [(60, "C4"), (61, "C#4"), (69, "A4"), (0, "C-1"), (127, "G9"), (21, "A0")],
    )
    def test_sharps(self, note, expected):
        assert midi_to_note_name(note) == expected

    def test_flats(self):
        assert midi_to_note_name(63, use_sharps=False) == "Eb4"

    def test_above_range_clamped_with_warning(self, warnings_sink):
        assert midi_to_note_name(200, on_warning=warnings_sink) == "G9"
        assert warnings_sink.messages == ["MIDI note out of range: 200. Clamping to 0-127."]

    def test_below_range_clamped(self, warnings_sink):
        assert midi_to_note_name(-3, on_warning=warnings_sink) == "C-1"
        assert len(warnings_sink) == 1


class TestNoteNameToMidi:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("C4", 60),
            ("A4", 69),
            ("C#4", 61),
            ("Db4", 61),
            ("C-1", 0),
            ("G9", 127),
            ("B#3", 60),
        ],
    )
    def test_valid(self, name, expected):
        assert note_name_to_midi(name) == expected

    @pytest.mark.parametrize("name", ["H2", "c4", "", "C", "C##4", "G#9", "Cb-1", "A4 "])
    def test_invalid_returns_none(self, name):
        assert note_name_to_midi(name) is None

    def test_non_string_returns_none(self):
        assert note_name_to_midi(60) is None
        assert note_name_to_midi(None) is None

    def test_round_trip_full_range(self):
        for note in range(128):
            assert note_name_to_midi(midi_to_note_name(note)) == note
            assert note_name_to_midi(midi_to_note_name(note, use_sharps=False)) == note

    def test_reference_notes_consistent(self):
        for name, note in MIDI_REFERENCE_NOTES.items():
            if name.startswith("PIANO"):
                continue
            assert note_name_to_midi(name) == note, name


# ---------------------------------------------------------------------------
# Frequency
# ---------------------------------------------------------------------------


class TestMidiToFrequency:
    def test_concert_a(self):
        assert midi_to_frequency(69) == pytest.approx(440.0)

    def test_octaves_double(self):
        assert midi_to_frequency(57) == pytest.approx(220.0)
        assert midi_to_frequency(81) == pytest.approx(880.0)

    def test_middle_c(self):
        assert midi_to_frequency(60) == pytest.approx(261.6256, rel=1e-5)

    def test_custom_tuning(self):
        assert midi_to_frequency(69, tuning=BAROQUE_TUNING) == pytest.approx(415.0)
        assert midi_to_frequency(69, tuning=TuningConfig(reference_hz=432.0)) == pytest.approx(
            432.0
        )

    def test_out_of_range_returns_none(self, warnings_sink):
        assert midi_to_frequency(128, on_warning=warnings_sink) is None
        assert midi_to_frequency(-1, on_warning=warnings_sink) is None
        assert len(warnings_sink) == 2


class TestFrequencyToMidi:
    def test_concert_a(self):
        assert frequency_to_midi(440.0) == 69

    def test_nearest_note(self):
        assert frequency_to_midi(261.63) == 60
        assert frequency_to_midi(450.0) == 69

    def test_custom_tuning(self):
        assert frequency_to_midi(415.0, tuning=BAROQUE_TUNING) == 69

    @pytest.mark.parametrize("hz", [0.0, -10.0, math.nan, math.inf])
    def test_invalid_frequency_returns_none(self, hz, warnings_sink):
        assert frequency_to_midi(hz, on_warning=warnings_sink) is None
        assert len(warnings_sink) == 1

    def test_out_of_midi_range_returns_none(self):
        assert frequency_to_midi(5.0) is None
        assert frequency_to_midi(100_000.0) is None

    def test_round_trip(self):
        for note in range(128):
            assert frequency_to_midi(midi_to_frequency(note)) == note


# ---------------------------------------------------------------------------
# Note arithmetic
# ---------------------------------------------------------------------------


class TestNoteArithmetic:
    def test_offset(self):
        assert get_midi_offset(60, 67) == 7
        assert get_midi_offset(67, 60) == -7

    def test_octave(self):
        assert get_octave(60) == 4
        assert get_octave(0) == -1
        assert get_octave(11) == -1
        assert get_octave(12) == 0

    def test_note_in_octave(self):
        assert get_note_in_octave(61) == 1
        assert get_note_in_octave(72) == 0

    @pytest.mark.parametrize(
        "value, expected",
        [(60, True), (0, True), (127, True), (128, False), (-1, False), (60.0, False), (True, False)],
    )
    def test_is_valid_midi_note(self, value, expected):
        assert is_valid_midi_note(value) is expected


class TestTranspose:
    def test_scalar(self):
        assert transpose(60, 5) == 65

    def test_sequence_returns_tuple(self):
        assert transpose([60, 64, 67], 7) == (67, 71, 74)

    def test_clamps(self):
        assert transpose(120, 12) == 127
        assert transpose(5, -10) == 0
        assert transpose((120, 124), 6) == (126, 127)

    def test_empty_sequence(self):
        assert transpose((), 3) == ()

    def test_transpose_note_strict(self):
        assert transpose_note(60, 12) == 72
        assert transpose_note(120, 12) is None
        assert transpose_note(5, -6) is None


class TestClampMidi:
    def test_scalar(self):
        assert clamp_midi(130) == 127
        assert clamp_midi(-4) == 0

    def test_sequence(self):
        assert clamp_midi([-5, 60, 200]) == (0, 60, 127)

    def test_custom_bounds(self):
        assert clamp_midi(50, 60, 72) == 60
        assert clamp_midi((50, 66, 80), 60, 72) == (60, 66, 72)


# ---------------------------------------------------------------------------
# Intervals and ranges
# ---------------------------------------------------------------------------


class TestIntervals:
    @pytest.mark.parametrize(
        "semitones, expected",
        [(0, "unison"), (6, "tritone"), (7, "perfect 5th"), (12, "unison"), (16, "major 3rd")],
    )
    def test_name(self, semitones, expected):
        assert get_interval_name(semitones) == expected

    def test_negative_folds_upward(self):
        assert get_interval_name(-5) == "perfect 5th"

    def test_semitones_case_insensitive(self):
        assert get_interval_semitones("Perfect 5th") == 7
        assert get_interval_semitones("MINOR 3RD") == 3

    def test_octave_is_twelve(self):
        assert get_interval_semitones("octave") == 12

    def test_unknown_returns_none(self):
        assert get_interval_semitones("ninth") is None
        assert get_interval_semitones(5) is None


class TestPianoRange:
    def test_range(self):
        piano = get_piano_range()
        assert (piano.low, piano.high) == (21, 108)
        assert piano.high - piano.low + 1 == 88

    def test_membership(self):
        assert is_in_piano_range(21)
        assert is_in_piano_range(108)
        assert not is_in_piano_range(20)
        assert not is_in_piano_range(109)
