"""
core/music_theory/progressions.py — Chord progressions and harmonic function.

generate_progression() is the main algorithm:
    1. Build the seven diatonic chords of the key once
    2. Match each requested roman numeral against them (exact string match)
    3. Voice-lead every chord after the first against the previous output
       chord, so inversions chain through the whole progression
    4. Return ProgressionChord values carrying the chosen inversion and
       the movement from the preceding chord

YAML Progression Templates
--------------------------
Located in core/music_theory/templates/progressions.yaml.
Loaded lazily on first access and cached as a read-only mapping.

Design decisions:
    - Unmatched numerals are skipped with a warning, never replaced by a
      placeholder chord.
    - analyze_chord_function() consults one fixed numeral table. Its
      scale_key argument is accepted for call-site symmetry and ignored.
    - get_progression_template() returns None for an unknown key: there is
      no sensible default progression to substitute.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

import yaml

from core.music_theory.chords import generate_diatonic_chords
from core.music_theory.config import DEFAULT_THRESHOLDS, VoiceLeadingThresholds
from core.music_theory.diagnostics import WarningHandler, warn
from core.music_theory.midi import midi_to_note_name
from core.music_theory.scales import DEFAULT_SCALE, get_scale_info
from core.music_theory.types import (
    ChordFunction,
    CompleteProgression,
    DiatonicChord,
    HarmonicFunction,
    ProgressionChord,
    ProgressionTemplate,
    VoiceLeadingAnalysis,
)
from core.music_theory.voicing import calculate_voice_leading, positional_distance

logger = logging.getLogger(__name__)

_TEMPLATES_PATH: Path = Path(__file__).parent / "templates" / "progressions.yaml"

VOICE_LEADING_SUGGESTION = "Consider applying voice leading inversions"

# ---------------------------------------------------------------------------
# Harmonic functions
# ---------------------------------------------------------------------------

HARMONIC_FUNCTIONS: MappingProxyType[str, HarmonicFunction] = MappingProxyType(
    {
        "tonic": HarmonicFunction(
            name="Tonic",
            symbol="T",
            description="Home, rest, resolution",
            stability="stable",
            examples=("I", "i"),
        ),
        "subdominant": HarmonicFunction(
            name="Subdominant",
            symbol="S",
            description="Moves away from the tonic",
            stability="stable",
            examples=("IV", "iv", "VI"),
        ),
        "dominant": HarmonicFunction(
            name="Dominant",
            symbol="D",
            description="Tension, wants to resolve",
            stability="unstable",
            examples=("V", "v", "vii°"),
        ),
        "pre-dominant": HarmonicFunction(
            name="Pre-dominant",
            symbol="PD",
            description="Leads to the dominant",
            stability="stable",
            examples=("ii", "ii°"),
        ),
        "relative": HarmonicFunction(
            name="Relative",
            symbol="R",
            description="Shares most notes with the tonic, substitutes for it",
            stability="stable",
            examples=("iii", "vi", "III"),
        ),
        "diminished": HarmonicFunction(
            name="Diminished",
            symbol="dim",
            description="Diminished triad, pulls toward resolution",
            stability="unstable",
            examples=("vii°", "ii°"),
        ),
        "dominant-like": HarmonicFunction(
            name="Dominant-like",
            symbol="DL",
            description="Dominant colour without a leading tone",
            stability="unstable",
            examples=("VII",),
        ),
    }
)

_UNKNOWN_FUNCTION = ChordFunction(primary="unknown")

CHORD_FUNCTIONS: MappingProxyType[str, ChordFunction] = MappingProxyType(
    {
        "I": ChordFunction("tonic", (), ("stable", "resolved")),
        "i": ChordFunction("tonic", (), ("stable", "resolved")),
        "ii": ChordFunction("pre-dominant", ("subdominant",), ("stable", "smooth")),
        "ii°": ChordFunction("pre-dominant", (), ("unstable", "darkens")),
        "iii": ChordFunction("relative", ("tonic",), ("stable", "warm")),
        "III": ChordFunction("relative", ("subdominant",), ("stable", "bright")),
        "IV": ChordFunction("subdominant", (), ("stable", "moving-away")),
        "iv": ChordFunction("subdominant", (), ("stable", "dark")),
        "V": ChordFunction("dominant", (), ("unstable", "tension")),
        "v": ChordFunction("dominant", (), ("unstable", "dark-tension")),
        "VI": ChordFunction("subdominant", ("tonic-alternative",), ("stable", "peaceful")),
        "vi": ChordFunction("relative", ("tonic-alternative",), ("stable", "sad")),
        "VII": ChordFunction("dominant-like", ("dominant",), ("unstable", "unusual")),
        "vii°": ChordFunction("dominant", (), ("unstable", "very-tense")),
    }
)


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


@functools.cache
def progression_templates() -> Mapping[str, ProgressionTemplate]:
    """Load and cache every progression template, in file order.

    Returns:
        Read-only mapping of template key → ProgressionTemplate
    """
    with _TEMPLATES_PATH.open(encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    templates: dict[str, ProgressionTemplate] = {}
    for key, raw in data.get("progressions", {}).items():
        templates[key] = ProgressionTemplate(
            name=raw["name"],
            roman_numerals=tuple(str(numeral) for numeral in raw["roman_numerals"]),
            description=raw.get("description", ""),
            genre=raw.get("genre", ""),
            feel=raw.get("feel", ""),
            difficulty=raw.get("difficulty", "beginner"),
            repeatable=bool(raw.get("repeatable", False)),
            bars=raw.get("bars"),
        )
    logger.debug("Loaded %d progression templates from %s", len(templates), _TEMPLATES_PATH)
    return MappingProxyType(templates)


def get_progression_template(
    template_key: str,
    *,
    on_warning: WarningHandler | None = None,
) -> ProgressionTemplate | None:
    """Return a progression template by key, or None if it does not exist."""
    template = progression_templates().get(template_key)
    if template is None:
        warn(logger, on_warning, f"Unknown progression template: {template_key!r}")
    return template


def get_available_progressions() -> tuple[str, ...]:
    """Return all progression template keys in declaration order."""
    return tuple(progression_templates())


def get_progressions_by_genre(genre: str) -> tuple[ProgressionTemplate, ...]:
    """Return templates whose genre tags contain ``genre`` (case-insensitive).

    Examples:
        >>> [t.name for t in get_progressions_by_genre("JAZZ")][:2]
        ['Circle of Fifths', 'Jazz Turnaround']
    """
    return tuple(template for _, template in filter_progressions(genre))


def filter_progressions(
    genre: str | None = None,
) -> tuple[tuple[str, ProgressionTemplate], ...]:
    """Return (key, template) pairs in declaration order.

    With a genre, only templates whose genre tags contain it
    (case-insensitive) are kept; without one, every template is returned.
    """
    wanted = genre.lower() if genre else None
    return tuple(
        (key, template)
        for key, template in progression_templates().items()
        if wanted is None or wanted in template.genre.lower()
    )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_progression(
    root_note: int,
    scale_key: str,
    roman_numerals: Sequence[str],
    *,
    on_warning: WarningHandler | None = None,
) -> tuple[ProgressionChord, ...]:
    """Build a voice-led chord progression from roman numerals.

    Args:
        root_note:      Tonic MIDI note of the key
        scale_key:      Scale key, e.g. "major", "minorNatural"
        roman_numerals: Numerals to realise, e.g. ["I", "IV", "V", "I"].
                        Matched exactly against the key's diatonic chords;
                        numerals with no match are skipped with a warning.
        on_warning:     Optional warning callback

    Returns:
        Tuple of ProgressionChord. The first keeps root position with
        distance 0; every later chord uses the inversion closest to the
        previous output chord.

    Examples:
        >>> prog = generate_progression(60, "major", ["I", "IV", "V", "I"])
        >>> [c.notes for c in prog]
        [(60, 64, 67), (65, 69, 72), (67, 71, 74), (67, 72, 76)]
    """
    diatonic = generate_diatonic_chords(root_note, scale_key, on_warning=on_warning)
    by_numeral: dict[str, DiatonicChord] = {}
    for chord in diatonic:
        by_numeral.setdefault(chord.roman_numeral, chord)

    progression: list[ProgressionChord] = []
    for numeral in roman_numerals:
        chord = by_numeral.get(numeral)
        if chord is None:
            warn(logger, on_warning, f"Chord not found: {numeral!r}")
            continue

        if not progression:
            progression.append(ProgressionChord(chord=chord, notes=chord.notes))
            continue

        leading = calculate_voice_leading(progression[-1].notes, chord.notes)
        progression.append(
            ProgressionChord(
                chord=chord,
                notes=leading.suggested_notes,
                voice_leading_inversion=leading.best_inversion,
                voice_leading_distance=leading.min_distance,
            )
        )

    return tuple(progression)


def generate_complete_progression(
    root_note: int,
    scale_key: str,
    roman_numerals: Sequence[str],
    *,
    thresholds: VoiceLeadingThresholds = DEFAULT_THRESHOLDS,
    on_warning: WarningHandler | None = None,
) -> CompleteProgression:
    """Generate a progression and analyse it in one call.

    Bundles the key name, scale metadata, voice-led chords and the
    voice-leading analysis, which is everything a UI needs to display
    and play a progression.
    """
    progression = generate_progression(
        root_note, scale_key, roman_numerals, on_warning=on_warning
    )
    return CompleteProgression(
        key=midi_to_note_name(root_note, on_warning=on_warning),
        scale_key=scale_key,
        scale_info=get_scale_info(scale_key, on_warning=on_warning),
        progression=progression,
        voice_leading_analysis=analyze_voice_leading(progression, thresholds=thresholds),
        roman_numerals=tuple(roman_numerals),
    )


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


def analyze_chord_function(
    roman_numeral: str,
    scale_key: str = DEFAULT_SCALE,
) -> ChordFunction:
    """Describe the harmonic function of a roman numeral.

    The lookup is not scale-aware: ``scale_key`` is ignored and the same
    numeral table is used for every scale.

    Examples:
        >>> analyze_chord_function("V").primary
        'dominant'
        >>> analyze_chord_function("bVII").primary
        'unknown'
    """
    return CHORD_FUNCTIONS.get(roman_numeral, _UNKNOWN_FUNCTION)


def analyze_voice_leading(
    progression: Sequence[ProgressionChord | DiatonicChord],
    *,
    thresholds: VoiceLeadingThresholds = DEFAULT_THRESHOLDS,
) -> VoiceLeadingAnalysis:
    """Grade how smoothly a progression moves from chord to chord.

    Uses the stored notes as they are (no inversion search), with the same
    positional distance metric as calculate_voice_leading().

    Args:
        progression: Chords in order, each with a ``notes`` tuple
        thresholds:  Average-distance grading thresholds

    Returns:
        VoiceLeadingAnalysis. A progression with fewer than two chords has
        no transitions and grades as "excellent" with zero distance.
    """
    distances = tuple(
        positional_distance(prev.notes, curr.notes)
        for prev, curr in zip(progression, progression[1:])
    )
    total = sum(distances)
    average = total / len(distances) if distances else 0.0

    if average < thresholds.excellent_below:
        quality = "excellent"
    elif average < thresholds.good_below:
        quality = "good"
    else:
        quality = "fair"

    return VoiceLeadingAnalysis(
        total_distance=total,
        average_distance=average,
        quality=quality,
        distances=distances,
        suggestions=() if quality == "excellent" else (VOICE_LEADING_SUGGESTION,),
    )
