"""
core/music_theory/chords.py — Chord templates and diatonic chord derivation.

Exports:
    CHORD_TEMPLATES           chord key → ChordTemplate (declaration order)
    DIATONIC_CHORD_QUALITIES  scale key → per-degree quality table

    generate_chord(root_note, chord_key) → tuple[int, ...]
    generate_diatonic_chords(root_note, scale_key) → tuple[DiatonicChord, ...]
    get_chord_info(chord_key) → ChordTemplate
    resolve_chord_key(chord_key) → str
    get_available_chords() → tuple[str, ...]
    get_chord_name(root_note, chord_key, use_sharps) → str

Inversions and voice leading live in core/music_theory/voicing.py.

Diatonic quality tables exist for "major", "minorNatural" and
"minorHarmonic". Every other scale (modes, pentatonics, blues) borrows the
major table, so its roman numerals and qualities describe major-key
harmony even where the stacked notes say otherwise.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from core.music_theory.diagnostics import WarningHandler, warn
from core.music_theory.midi import NOTE_NAMES_FLAT, NOTE_NAMES_SHARP
from core.music_theory.scales import DEFAULT_SCALE, generate_scale
from core.music_theory.types import ChordTemplate, DiatonicChord, DiatonicQuality

logger = logging.getLogger(__name__)

DEFAULT_CHORD = "major"

# ---------------------------------------------------------------------------
# Chord templates (semitones from root)
# ---------------------------------------------------------------------------

CHORD_TEMPLATES: MappingProxyType[str, ChordTemplate] = MappingProxyType(
    {
        # Triads
        "major": ChordTemplate(
            name="Major",
            intervals=(0, 4, 7),
            symbol="",
            quality="major",
            note_count=3,
            description="Happy, bright, resolved",
        ),
        "minor": ChordTemplate(
            name="Minor",
            intervals=(0, 3, 7),
            symbol="m",
            quality="minor",
            note_count=3,
            description="Sad, dark, introspective",
        ),
        "diminished": ChordTemplate(
            name="Diminished",
            intervals=(0, 3, 6),
            symbol="°",
            quality="diminished",
            note_count=3,
            description="Unstable, needs resolution",
        ),
        "augmented": ChordTemplate(
            name="Augmented",
            intervals=(0, 4, 8),
            symbol="+",
            quality="augmented",
            note_count=3,
            description="Tense, unusual, exotic",
        ),
        # Sevenths
        "maj7": ChordTemplate(
            name="Major 7th",
            intervals=(0, 4, 7, 11),
            symbol="maj7",
            quality="maj7",
            note_count=4,
            description="Jazz, sophisticated, bright",
        ),
        "dom7": ChordTemplate(
            name="Dominant 7th",
            intervals=(0, 4, 7, 10),
            symbol="7",
            quality="dom7",
            note_count=4,
            description="Blues, funk, dominant tension",
        ),
        "min7": ChordTemplate(
            name="Minor 7th",
            intervals=(0, 3, 7, 10),
            symbol="m7",
            quality="min7",
            note_count=4,
            description="Jazz, funk, dark and smooth",
        ),
        "minMaj7": ChordTemplate(
            name="Minor Major 7th",
            intervals=(0, 3, 7, 11),
            symbol="m(maj7)",
            quality="minMaj7",
            note_count=4,
            description="Jazz, mysterious",
        ),
        "halfDim7": ChordTemplate(
            name="Half Diminished 7th",
            intervals=(0, 3, 6, 10),
            symbol="ø7",
            quality="halfDim7",
            note_count=4,
            description="Jazz, pre-dominant tension",
        ),
    }
)

# ---------------------------------------------------------------------------
# Diatonic chord qualities per scale degree
# ---------------------------------------------------------------------------


def _table(*rows: tuple[str, str, str]) -> tuple[DiatonicQuality, ...]:
    return tuple(
        DiatonicQuality(degree=i, quality=q, roman_numeral=r, harmonic_function=f)
        for i, (q, r, f) in enumerate(rows, start=1)
    )


DIATONIC_CHORD_QUALITIES: MappingProxyType[str, tuple[DiatonicQuality, ...]] = MappingProxyType(
    {
        "major": _table(
            ("major", "I", "tonic"),
            ("minor", "ii", "pre-dominant"),
            ("minor", "iii", "relative"),
            ("major", "IV", "subdominant"),
            ("major", "V", "dominant"),
            ("minor", "vi", "relative"),
            ("diminished", "vii°", "diminished"),
        ),
        "minorNatural": _table(
            ("minor", "i", "tonic"),
            ("diminished", "ii°", "diminished"),
            ("major", "III", "relative"),
            ("minor", "iv", "subdominant"),
            ("minor", "v", "dominant"),
            ("major", "VI", "subdominant"),
            ("major", "VII", "dominant-like"),
        ),
        "minorHarmonic": _table(
            ("minor", "i", "tonic"),
            ("diminished", "ii°", "diminished"),
            ("augmented", "III+", "relative"),
            ("minor", "iv", "subdominant"),
            ("major", "V", "dominant"),
            ("major", "VI", "subdominant"),
            ("diminished", "vii°", "diminished"),
        ),
    }
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def resolve_chord_key(
    chord_key: str,
    *,
    on_warning: WarningHandler | None = None,
) -> str:
    """Return chord_key if it is defined, otherwise DEFAULT_CHORD with a warning."""
    if chord_key in CHORD_TEMPLATES:
        return chord_key
    warn(logger, on_warning, f"Unknown chord type: {chord_key!r}, defaulting to major")
    return DEFAULT_CHORD


def _resolve_chord(chord_key: str, on_warning: WarningHandler | None) -> ChordTemplate:
    return CHORD_TEMPLATES[resolve_chord_key(chord_key, on_warning=on_warning)]


def get_chord_info(
    chord_key: str,
    *,
    on_warning: WarningHandler | None = None,
) -> ChordTemplate:
    """Return the ChordTemplate for a key, or the major template if unknown."""
    return _resolve_chord(chord_key, on_warning)


def get_available_chords() -> tuple[str, ...]:
    """Return all chord keys in declaration order."""
    return tuple(CHORD_TEMPLATES)


def get_chord_name(
    root_note: int,
    chord_key: str = DEFAULT_CHORD,
    use_sharps: bool = True,
    *,
    on_warning: WarningHandler | None = None,
) -> str:
    """Build a chord symbol from a root note and chord key.

    Examples:
        >>> get_chord_name(57, "min7")
        'Am7'
        >>> get_chord_name(70, "major", use_sharps=False)
        'Bb'
    """
    template = _resolve_chord(chord_key, on_warning)
    names = NOTE_NAMES_SHARP if use_sharps else NOTE_NAMES_FLAT
    return f"{names[root_note % 12]}{template.symbol}"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_chord(
    root_note: int,
    chord_key: str = DEFAULT_CHORD,
    *,
    on_warning: WarningHandler | None = None,
) -> tuple[int, ...]:
    """Build a chord by adding the template's intervals to the root.

    Results are not clamped: a high root can produce notes above 127.

    Args:
        root_note: Root MIDI note
        chord_key: Key from CHORD_TEMPLATES. Unknown keys fall back to
                   major with a warning.

    Examples:
        >>> generate_chord(60, "major")
        (60, 64, 67)
        >>> generate_chord(60, "dom7")
        (60, 64, 67, 70)
    """
    template = _resolve_chord(chord_key, on_warning)
    return tuple(root_note + interval for interval in template.intervals)


def generate_diatonic_chords(
    root_note: int,
    scale_key: str = DEFAULT_SCALE,
    *,
    on_warning: WarningHandler | None = None,
) -> tuple[DiatonicChord, ...]:
    """Build the seven diatonic triads of a scale.

    Algorithm:
        1. Generate the scale over two octaves, so stacking thirds past
           the fifth degree stays inside the sequence
        2. Look up the quality table for the scale (major table if none)
        3. For each degree index d: notes = scale[d], scale[d+2], scale[d+4]

    Near the top of the MIDI range the generated scale is shorter than two
    octaves; triad members past its end are omitted and ``root`` becomes
    None if the degree itself is missing. The result always has 7 chords.

    Examples:
        >>> chords = generate_diatonic_chords(60, "major")
        >>> [c.roman_numeral for c in chords]
        ['I', 'ii', 'iii', 'IV', 'V', 'vi', 'vii°']
        >>> chords[1].notes
        (62, 65, 69)
    """
    scale_notes = generate_scale(root_note, scale_key, 2, on_warning=on_warning)
    qualities = DIATONIC_CHORD_QUALITIES.get(scale_key)
    if qualities is None:
        logger.debug("No diatonic table for %r, using the major table", scale_key)
        qualities = DIATONIC_CHORD_QUALITIES[DEFAULT_SCALE]

    chords: list[DiatonicChord] = []
    for row in qualities:
        index = row.degree - 1
        notes = tuple(scale_notes[i] for i in (index, index + 2, index + 4) if i < len(scale_notes))
        chords.append(
            DiatonicChord(
                degree=row.degree,
                roman_numeral=row.roman_numeral,
                root=scale_notes[index] if index < len(scale_notes) else None,
                notes=notes,
                quality=row.quality,
                harmonic_function=row.harmonic_function,
                name=row.roman_numeral,
            )
        )
    return tuple(chords)
