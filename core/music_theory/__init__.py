"""
core/music_theory/ — Pure music theory engine.

Exports:
    Types:       ScaleDefinition, ScaleDegree, ChordTemplate, DiatonicChord,
                 VoiceLeadingResult, ProgressionTemplate, ProgressionChord,
                 ChordFunction, VoiceLeadingAnalysis, CompleteProgression, NoteRange
    Config:      TuningConfig, VoiceLeadingThresholds, DEFAULT_TUNING,
                 BAROQUE_TUNING, DEFAULT_THRESHOLDS
    Scales:      generate_scale, get_scale_info, get_available_scales,
                 get_note_name, get_scale_note_names, get_scale_degree,
                 resolve_scale_key
    Chords:      generate_chord, generate_diatonic_chords, get_chord_info,
                 get_available_chords, get_chord_name, resolve_chord_key
    Voicing:     invert, calculate_voice_leading
    MIDI:        midi_to_note_name, note_name_to_midi, midi_to_frequency,
                 frequency_to_midi, transpose, transpose_note, clamp_midi, ...
    Progression: generate_progression, generate_complete_progression,
                 analyze_chord_function, analyze_voice_leading,
                 get_progression_template, get_available_progressions,
                 get_progressions_by_genre, filter_progressions
"""

from core.music_theory.chords import (
    CHORD_TEMPLATES,
    DEFAULT_CHORD,
    DIATONIC_CHORD_QUALITIES,
    generate_chord,
    generate_diatonic_chords,
    get_available_chords,
    get_chord_info,
    get_chord_name,
    resolve_chord_key,
)
from core.music_theory.config import (
    BAROQUE_TUNING,
    DEFAULT_THRESHOLDS,
    DEFAULT_TUNING,
    TuningConfig,
    VoiceLeadingThresholds,
)
from core.music_theory.diagnostics import WarningHandler
from core.music_theory.midi import (
    INTERVAL_NAMES,
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
from core.music_theory.progressions import (
    CHORD_FUNCTIONS,
    HARMONIC_FUNCTIONS,
    analyze_chord_function,
    analyze_voice_leading,
    filter_progressions,
    generate_complete_progression,
    generate_progression,
    get_available_progressions,
    get_progression_template,
    get_progressions_by_genre,
)
from core.music_theory.scales import (
    DEFAULT_OCTAVES,
    DEFAULT_SCALE,
    SCALE_DEFINITIONS,
    generate_scale,
    get_available_scales,
    get_note_name,
    get_scale_degree,
    get_scale_info,
    get_scale_note_names,
    resolve_scale_key,
)
from core.music_theory.types import (
    ChordFunction,
    ChordTemplate,
    CompleteProgression,
    DiatonicChord,
    HarmonicFunction,
    NoteRange,
    ProgressionChord,
    ProgressionTemplate,
    ScaleDefinition,
    ScaleDegree,
    VoiceLeadingAnalysis,
    VoiceLeadingResult,
)
from core.music_theory.voicing import calculate_voice_leading, invert

__all__ = [
    # Types
    "ChordFunction",
    "ChordTemplate",
    "CompleteProgression",
    "DiatonicChord",
    "HarmonicFunction",
    "NoteRange",
    "ProgressionChord",
    "ProgressionTemplate",
    "ScaleDefinition",
    "ScaleDegree",
    "VoiceLeadingAnalysis",
    "VoiceLeadingResult",
    "WarningHandler",
    # Config
    "TuningConfig",
    "VoiceLeadingThresholds",
    "DEFAULT_TUNING",
    "BAROQUE_TUNING",
    "DEFAULT_THRESHOLDS",
    # Scales
    "SCALE_DEFINITIONS",
    "DEFAULT_SCALE",
    "DEFAULT_OCTAVES",
    "resolve_scale_key",
    "generate_scale",
    "get_scale_info",
    "get_available_scales",
    "get_note_name",
    "get_scale_note_names",
    "get_scale_degree",
    # Chords
    "CHORD_TEMPLATES",
    "DIATONIC_CHORD_QUALITIES",
    "DEFAULT_CHORD",
    "resolve_chord_key",
    "generate_chord",
    "generate_diatonic_chords",
    "get_chord_info",
    "get_available_chords",
    "get_chord_name",
    # Voicing
    "invert",
    "calculate_voice_leading",
    # MIDI
    "INTERVAL_NAMES",
    "MIDI_REFERENCE_NOTES",
    "midi_to_note_name",
    "note_name_to_midi",
    "midi_to_frequency",
    "frequency_to_midi",
    "get_midi_offset",
    "get_octave",
    "get_note_in_octave",
    "is_valid_midi_note",
    "transpose",
    "transpose_note",
    "clamp_midi",
    "get_interval_name",
    "get_interval_semitones",
    "get_piano_range",
    "is_in_piano_range",
    # Progressions
    "CHORD_FUNCTIONS",
    "HARMONIC_FUNCTIONS",
    "generate_progression",
    "generate_complete_progression",
    "analyze_chord_function",
    "analyze_voice_leading",
    "get_progression_template",
    "get_available_progressions",
    "get_progressions_by_genre",
    "filter_progressions",
]
