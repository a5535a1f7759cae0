"""
core/music_theory/scales.py — Scale definitions and scale generation.

Scales are stored as interval patterns (semitones from the root), so the
same definition works for any root note. Generation turns a pattern into
concrete MIDI notes across one or more octaves.

Exports:
    SCALE_DEFINITIONS       scale key → ScaleDefinition (declaration order)
    DEGREE_NAMES            functional names of the seven scale degrees

    generate_scale(root_note, scale_key, octave_count) → tuple[int, ...]
    get_scale_info(scale_key) → ScaleDefinition
    resolve_scale_key(scale_key) → str
    get_available_scales() → tuple[str, ...]
    get_note_name(note_id, use_sharps) → str
    get_scale_note_names(root_note, scale_key, octave_count, use_sharps) → tuple[str, ...]
    get_scale_degree(degree, scale_key) → ScaleDegree

Unknown scale keys never raise: they are reported through the warning
channel and replaced by the major scale.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from core.music_theory.diagnostics import WarningHandler, warn
from core.music_theory.midi import MIDI_MAX, MIDI_MIN, NOTE_NAMES_FLAT, NOTE_NAMES_SHARP
from core.music_theory.types import ScaleDefinition, ScaleDegree

logger = logging.getLogger(__name__)

DEFAULT_SCALE = "major"
DEFAULT_OCTAVES = 2

# ---------------------------------------------------------------------------
# Scale definitions (semitone intervals from root)
# ---------------------------------------------------------------------------

SCALE_DEFINITIONS: MappingProxyType[str, ScaleDefinition] = MappingProxyType(
    {
        # W W H W W W H
        "major": ScaleDefinition(
            name="Major",
            intervals=(0, 2, 4, 5, 7, 9, 11),
            degree_labels=("I", "II", "III", "IV", "V", "VI", "VII"),
            description="Bright, happy, resolved",
        ),
        # W H W W H W W
        "minorNatural": ScaleDefinition(
            name="Minor (Natural)",
            intervals=(0, 2, 3, 5, 7, 8, 10),
            degree_labels=("I", "II", "IIIb", "IV", "V", "VIb", "VIIb"),
            description="Dark, introspective, melancholic",
        ),
        # Raised 7th gives the V chord a leading tone
        "minorHarmonic": ScaleDefinition(
            name="Minor (Harmonic)",
            intervals=(0, 2, 3, 5, 7, 8, 11),
            degree_labels=("I", "II", "IIIb", "IV", "V", "VIb", "VII"),
            description="Dark with classical harmonic strength",
        ),
        # Ascending form
        "minorMelodic": ScaleDefinition(
            name="Minor (Melodic)",
            intervals=(0, 2, 3, 5, 7, 9, 11),
            degree_labels=("I", "II", "IIIb", "IV", "V", "VI", "VII"),
            description="Dark but with melodic ease",
        ),
        # Modes of the major scale
        "dorian": ScaleDefinition(
            name="Dorian",
            intervals=(0, 2, 3, 5, 7, 9, 10),
            degree_labels=("I", "II", "IIIb", "IV", "V", "VI", "VIIb"),
            description="Jazzy, funky, slightly dark",
        ),
        "phrygian": ScaleDefinition(
            name="Phrygian",
            intervals=(0, 1, 3, 5, 7, 8, 10),
            degree_labels=("I", "IIb", "IIIb", "IV", "V", "VIb", "VIIb"),
            description="Spanish, exotic, ominous",
        ),
        "lydian": ScaleDefinition(
            name="Lydian",
            intervals=(0, 2, 4, 6, 7, 9, 11),
            degree_labels=("I", "II", "III", "#IV", "V", "VI", "VII"),
            description="Bright, ethereal, whimsical",
        ),
        "mixolydian": ScaleDefinition(
            name="Mixolydian",
            intervals=(0, 2, 4, 5, 7, 9, 10),
            degree_labels=("I", "II", "III", "IV", "V", "VI", "VIIb"),
            description="Bluesy, dominant, rock-oriented",
        ),
        "aeolian": ScaleDefinition(
            name="Aeolian",
            intervals=(0, 2, 3, 5, 7, 8, 10),
            degree_labels=("I", "II", "IIIb", "IV", "V", "VIb", "VIIb"),
            description="Dark, introspective",
        ),
        "locrian": ScaleDefinition(
            name="Locrian",
            intervals=(0, 1, 3, 5, 6, 8, 10),
            degree_labels=("I", "IIb", "IIIb", "IV", "Vb", "VIb", "VIIb"),
            description="Dark, dissonant, unstable",
        ),
        # Five- and six-note scales
        "majorPentatonic": ScaleDefinition(
            name="Major Pentatonic",
            intervals=(0, 2, 4, 7, 9),
            degree_labels=("I", "II", "III", "V", "VI"),
            description="Pentatonic, musical, versatile",
        ),
        "minorPentatonic": ScaleDefinition(
            name="Minor Pentatonic",
            intervals=(0, 3, 5, 7, 10),
            degree_labels=("I", "IIIb", "IV", "V", "VIIb"),
            description="Pentatonic blues, versatile",
        ),
        # Minor pentatonic + b5 blue note
        "blues": ScaleDefinition(
            name="Blues",
            intervals=(0, 3, 5, 6, 7, 10),
            degree_labels=("I", "IIIb", "IV", "Vb", "V", "VIIb"),
            description="Blues, rock, with blue notes",
        ),
    }
)

DEGREE_NAMES: tuple[str, ...] = (
    "Tonic",
    "Supertonic",
    "Mediant",
    "Subdominant",
    "Dominant",
    "Submediant",
    "Subtonic",
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def resolve_scale_key(
    scale_key: str,
    *,
    on_warning: WarningHandler | None = None,
) -> str:
    """Return scale_key if it is defined, otherwise DEFAULT_SCALE with a warning."""
    if scale_key in SCALE_DEFINITIONS:
        return scale_key
    warn(logger, on_warning, f"Unknown scale type: {scale_key!r}, defaulting to major")
    return DEFAULT_SCALE


def _resolve_scale(scale_key: str, on_warning: WarningHandler | None) -> ScaleDefinition:
    return SCALE_DEFINITIONS[resolve_scale_key(scale_key, on_warning=on_warning)]


def get_scale_info(
    scale_key: str,
    *,
    on_warning: WarningHandler | None = None,
) -> ScaleDefinition:
    """Return the ScaleDefinition for a key, or the major scale if unknown.

    Examples:
        >>> get_scale_info("dorian").intervals
        (0, 2, 3, 5, 7, 9, 10)
    """
    return _resolve_scale(scale_key, on_warning)


def get_available_scales() -> tuple[str, ...]:
    """Return all scale keys in declaration order."""
    return tuple(SCALE_DEFINITIONS)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_scale(
    root_note: int,
    scale_key: str = DEFAULT_SCALE,
    octave_count: int = DEFAULT_OCTAVES,
    *,
    on_warning: WarningHandler | None = None,
) -> tuple[int, ...]:
    """Generate the MIDI notes of a scale across one or more octaves.

    Notes are emitted octave by octave, then in interval order. Notes that
    fall outside [0, 127] are dropped (not clamped), so a root outside the
    MIDI range yields a sequence that does not start at the root.

    Args:
        root_note:    Root MIDI note, normally 0–127
        scale_key:    Key from SCALE_DEFINITIONS. Unknown keys fall back to
                      major with a warning.
        octave_count: Number of octaves to generate (default 2)
        on_warning:   Optional warning callback (defaults to the module logger)

    Returns:
        Tuple of MIDI notes, ascending

    Examples:
        >>> generate_scale(60, "major", 1)
        (60, 62, 64, 65, 67, 69, 71)
    """
    definition = _resolve_scale(scale_key, on_warning)
    notes: list[int] = []
    for octave in range(octave_count):
        for interval in definition.intervals:
            note = root_note + 12 * octave + interval
            if MIDI_MIN <= note <= MIDI_MAX:
                notes.append(note)
    return tuple(notes)


def get_note_name(note_id: int, use_sharps: bool = True) -> str:
    """Format a MIDI note as scientific pitch notation, e.g. 61 → "C#4".

    No range validation: the octave is ``note_id // 12 - 1``, so MIDI 0
    is "C-1" and MIDI 60 is "C4".
    """
    names = NOTE_NAMES_SHARP if use_sharps else NOTE_NAMES_FLAT
    return f"{names[note_id % 12]}{note_id // 12 - 1}"


def get_scale_note_names(
    root_note: int,
    scale_key: str = DEFAULT_SCALE,
    octave_count: int = DEFAULT_OCTAVES,
    use_sharps: bool = True,
    *,
    on_warning: WarningHandler | None = None,
) -> tuple[str, ...]:
    """Return the note names of a generated scale.

    Examples:
        >>> get_scale_note_names(60, "major", 1)
        ('C4', 'D4', 'E4', 'F4', 'G4', 'A4', 'B4')
    """
    notes = generate_scale(root_note, scale_key, octave_count, on_warning=on_warning)
    return tuple(get_note_name(note, use_sharps) for note in notes)


def get_scale_degree(
    degree: int,
    scale_key: str = DEFAULT_SCALE,
    *,
    on_warning: WarningHandler | None = None,
) -> ScaleDegree:
    """Describe a 1-based scale degree (8 wraps to the tonic).

    Args:
        degree:    Scale degree, 1–7 (8 = octave)
        scale_key: Key from SCALE_DEFINITIONS

    Returns:
        ScaleDegree with roman numeral, functional name and interval.
        ``roman_numeral`` and ``interval`` are None when the scale has
        fewer degrees than requested.

    Examples:
        >>> get_scale_degree(5, "major")
        ScaleDegree(degree=5, roman_numeral='V', degree_name='Dominant', interval=7)
    """
    definition = _resolve_scale(scale_key, on_warning)
    index = (degree - 1) % 7
    in_scale = index < len(definition.intervals)
    return ScaleDegree(
        degree=degree,
        roman_numeral=definition.degree_labels[index] if in_scale else None,
        degree_name=DEGREE_NAMES[index],
        interval=definition.intervals[index] if in_scale else None,
    )
