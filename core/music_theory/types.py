"""
core/music_theory/types.py — Frozen value objects for the music theory engine.

All types are frozen dataclasses and hashable. Sequences are stored as
tuples. Validation happens in __post_init__ and raises ValueError.

Types:
    ScaleDefinition      — a named scale interval pattern
    ScaleDegree          — metadata for one degree of a scale
    ChordTemplate        — a named chord interval pattern
    DiatonicQuality      — one row of a diatonic quality table
    DiatonicChord        — a triad built from a generated scale
    InversionDistance    — the voice-leading cost of one inversion
    VoiceLeadingResult   — best inversion between two chords
    ProgressionTemplate  — a named roman-numeral sequence
    ProgressionChord     — a diatonic chord placed in a voice-led progression
    HarmonicFunction     — descriptive metadata for a harmonic role
    ChordFunction        — function analysis of a roman numeral
    VoiceLeadingAnalysis — aggregate voice-leading quality of a progression
    NoteRange            — an inclusive MIDI note range
    CompleteProgression  — a progression bundled with its analysis
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScaleDefinition:
    """A named scale expressed as semitone offsets from the root.

    The pattern repeats every octave (12 semitones), so offsets stay in
    [0, 11] and the octave itself is implicit.

    Attributes:
        name:          Human-readable name, e.g. "Minor (Harmonic)"
        intervals:     Ascending semitone offsets, first is always 0
        degree_labels: One label per interval, e.g. ("I", "II", "IIIb", ...)
        description:   Short character description
    """

    name: str
    intervals: tuple[int, ...]
    degree_labels: tuple[str, ...]
    description: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ScaleDefinition.name must not be empty")
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(
                f"ScaleDefinition.intervals must start at 0, got {self.intervals}"
            )
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(
                f"ScaleDefinition.intervals must be strictly ascending, got {self.intervals}"
            )
        if self.intervals[-1] > 11:
            raise ValueError(
                f"ScaleDefinition.intervals must be in [0, 11], got {self.intervals}"
            )
        if len(self.degree_labels) != len(self.intervals):
            raise ValueError(
                f"ScaleDefinition.degree_labels has {len(self.degree_labels)} entries, "
                f"expected {len(self.intervals)}"
            )


@dataclass(frozen=True)
class ScaleDegree:
    """Metadata for one scale degree.

    ``roman_numeral`` and ``interval`` are None when the scale has fewer
    degrees than requested (e.g. degree 7 of a pentatonic scale).
    """

    degree: int
    roman_numeral: str | None
    degree_name: str
    interval: int | None


# ---------------------------------------------------------------------------
# Chords
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordTemplate:
    """A named chord expressed as semitone offsets from its root.

    Attributes:
        name:        Human-readable name, e.g. "Dominant 7th"
        intervals:   Semitone offsets from the root, first is always 0
        symbol:      Chord symbol suffix, e.g. "m7", "°"
        quality:     Quality tag, e.g. "minor", "dom7"
        note_count:  Number of notes (== len(intervals))
        description: Short character description
    """

    name: str
    intervals: tuple[int, ...]
    symbol: str
    quality: str
    note_count: int
    description: str = ""

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(
                f"ChordTemplate.intervals must start at 0, got {self.intervals}"
            )
        if self.note_count != len(self.intervals):
            raise ValueError(
                f"ChordTemplate.note_count is {self.note_count}, "
                f"but intervals has {len(self.intervals)} entries"
            )


@dataclass(frozen=True)
class DiatonicQuality:
    """One row of a diatonic chord quality table (one per scale degree)."""

    degree: int  # 1–7
    quality: str  # a CHORD_TEMPLATES key: "major", "minor", "diminished", "augmented"
    roman_numeral: str  # e.g. "vii°"
    harmonic_function: str  # a HARMONIC_FUNCTIONS key

    def __post_init__(self) -> None:
        if not (1 <= self.degree <= 7):
            raise ValueError(f"DiatonicQuality.degree must be in [1, 7], got {self.degree}")
        if not self.roman_numeral:
            raise ValueError("DiatonicQuality.roman_numeral must not be empty")


@dataclass(frozen=True)
class DiatonicChord:
    """A triad built from scale notes by stacking every other degree.

    Attributes:
        degree:            1-based scale degree (1 = tonic)
        roman_numeral:     Roman numeral label, e.g. "ii", "vii°"
        root:              MIDI root note, or None if the scale has no note
                           at this degree (roots near the top of the range)
        notes:             MIDI notes of the triad, lowest first. Members that
                           fall outside the generated scale are omitted.
        quality:           Chord quality, e.g. "minor"
        harmonic_function: Harmonic role, e.g. "pre-dominant"
        name:              Display name (same as the roman numeral)
    """

    degree: int
    roman_numeral: str
    root: int | None
    notes: tuple[int, ...]
    quality: str
    harmonic_function: str
    name: str

    def __post_init__(self) -> None:
        if not (1 <= self.degree <= 7):
            raise ValueError(f"DiatonicChord.degree must be in [1, 7], got {self.degree}")


# ---------------------------------------------------------------------------
# Voice leading
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InversionDistance:
    """Total positional movement when moving to one inversion of a chord."""

    inversion: int
    distance: int


@dataclass(frozen=True)
class VoiceLeadingResult:
    """The smoothest inversion of a target chord relative to a source chord.

    Attributes:
        best_inversion:  Inversion index with the smallest movement
                         (lowest index wins ties)
        min_distance:    Movement of the best inversion, in semitones
        suggested_notes: Target chord notes in the best inversion
        all_distances:   Movement for every inversion tried, in order
    """

    best_inversion: int
    min_distance: int
    suggested_notes: tuple[int, ...]
    all_distances: tuple[InversionDistance, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.min_distance < 0:
            raise ValueError(
                f"VoiceLeadingResult.min_distance must be >= 0, got {self.min_distance}"
            )


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProgressionTemplate:
    """A named chord progression stored as roman numerals (key-independent).

    Attributes:
        name:           Human-readable name, e.g. "Jazz Turnaround"
        roman_numerals: Ordered roman numerals, e.g. ("ii", "V", "I")
        description:    What the progression does
        genre:          Comma-joined genre tags, e.g. "jazz, standards"
        feel:           Character of the progression
        difficulty:     "beginner", "intermediate" or "advanced"
        repeatable:     True if the progression is meant to loop
        bars:           Fixed bar count for form-based progressions (12-bar blues)
    """

    name: str
    roman_numerals: tuple[str, ...]
    description: str
    genre: str
    feel: str
    difficulty: str
    repeatable: bool = False
    bars: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ProgressionTemplate.name must not be empty")
        if not self.roman_numerals:
            raise ValueError("ProgressionTemplate.roman_numerals must not be empty")
        if self.bars is not None and self.bars <= 0:
            raise ValueError(f"ProgressionTemplate.bars must be > 0, got {self.bars}")


@dataclass(frozen=True)
class ProgressionChord:
    """A DiatonicChord placed in a progression, with voice-led notes.

    Attributes:
        chord:                   Diatonic chord in root position
        notes:                   Voice-led MIDI notes (the chord's notes
                                 in the chosen inversion)
        voice_leading_inversion: Inversion applied relative to root position
        voice_leading_distance:  Movement from the preceding chord (0 for first)
    """

    chord: DiatonicChord
    notes: tuple[int, ...]
    voice_leading_inversion: int = 0
    voice_leading_distance: int = 0

    @property
    def degree(self) -> int:
        return self.chord.degree

    @property
    def roman_numeral(self) -> str:
        return self.chord.roman_numeral

    @property
    def root(self) -> int | None:
        return self.chord.root

    @property
    def quality(self) -> str:
        return self.chord.quality

    @property
    def harmonic_function(self) -> str:
        return self.chord.harmonic_function

    @property
    def name(self) -> str:
        return self.chord.name


@dataclass(frozen=True)
class HarmonicFunction:
    """Descriptive metadata for a harmonic role. Never used for control flow."""

    name: str
    symbol: str
    description: str
    stability: str  # "stable" | "unstable"
    examples: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.stability not in ("stable", "unstable"):
            raise ValueError(
                f"HarmonicFunction.stability must be 'stable' or 'unstable', "
                f"got {self.stability!r}"
            )


@dataclass(frozen=True)
class ChordFunction:
    """Function analysis of a roman numeral."""

    primary: str
    secondary: tuple[str, ...] = field(default_factory=tuple)
    qualities: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VoiceLeadingAnalysis:
    """Aggregate voice-leading quality across a progression.

    Attributes:
        total_distance:   Sum of all chord-to-chord movements
        average_distance: Mean movement per transition
        quality:          "excellent", "good" or "fair"
        distances:        Movement for each consecutive pair, in order
        suggestions:      Improvement hints (empty when excellent)
    """

    total_distance: int
    average_distance: float
    quality: str
    distances: tuple[int, ...] = field(default_factory=tuple)
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CompleteProgression:
    """A generated progression bundled with everything a UI needs to show it."""

    key: str
    scale_key: str
    scale_info: ScaleDefinition
    progression: tuple[ProgressionChord, ...]
    voice_leading_analysis: VoiceLeadingAnalysis
    roman_numerals: tuple[str, ...]

    @property
    def progression_label(self) -> str:
        """Human-readable progression, e.g. 'I - IV - V - I'."""
        return " - ".join(c.roman_numeral for c in self.progression)


# ---------------------------------------------------------------------------
# Note ranges
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteRange:
    """An inclusive MIDI note range."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"NoteRange.low ({self.low}) must be <= high ({self.high})")

    def __contains__(self, note: object) -> bool:
        return isinstance(note, int) and self.low <= note <= self.high
