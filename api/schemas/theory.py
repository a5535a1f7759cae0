"""
api/schemas/theory.py — Pydantic request/response schemas for theory endpoints.

Covers:
    /theory/scales                — ScaleSummaryOut / ScaleResponse
    /theory/chords                — ChordSummaryOut / ChordResponse
    /theory/diatonic              — DiatonicResponse
    /theory/voice-leading         — VoiceLeadingRequest / VoiceLeadingResponse
    /theory/notes, /theory/frequency — NoteResponse
    /theory/progressions          — ProgressionTemplateOut
    /theory/progressions/generate — ProgressionRequest / ProgressionResponse

Every response that can involve a lenient fallback carries a ``warnings``
list with the messages the engine reported while serving the request.
"""

from pydantic import BaseModel, Field, model_validator

from core.music_theory.scales import DEFAULT_SCALE

# ---------------------------------------------------------------------------
# Shared sub-schemas
# ---------------------------------------------------------------------------


class ChordOut(BaseModel):
    """A diatonic chord, optionally voice-led inside a progression."""

    degree: int = Field(..., ge=1, le=7)
    roman_numeral: str
    root: int | None
    quality: str
    harmonic_function: str
    midi_notes: list[int]
    note_names: list[str]
    inversion: int = 0
    distance: int = 0


class VoiceLeadingAnalysisOut(BaseModel):
    """Aggregate movement across a progression."""

    total_distance: int = Field(..., ge=0)
    average_distance: float = Field(..., ge=0.0)
    quality: str
    distances: list[int]
    suggestions: list[str]


# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------


class ScaleSummaryOut(BaseModel):
    """One entry of the scale catalogue."""

    key: str
    name: str
    intervals: list[int]
    degree_labels: list[str]
    description: str


class ScaleResponse(BaseModel):
    """A generated scale."""

    scale: ScaleSummaryOut
    root: int
    midi_notes: list[int]
    note_names: list[str]
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Chords
# ---------------------------------------------------------------------------


class ChordSummaryOut(BaseModel):
    """One entry of the chord catalogue."""

    key: str
    name: str
    symbol: str
    quality: str
    intervals: list[int]
    description: str


class ChordResponse(BaseModel):
    """A generated chord, optionally inverted."""

    chord: ChordSummaryOut
    root: int
    symbol: str
    inversion: int
    midi_notes: list[int]
    note_names: list[str]
    warnings: list[str] = Field(default_factory=list)


class DiatonicResponse(BaseModel):
    """The seven diatonic triads of a key."""

    key: str
    scale_key: str
    chords: list[ChordOut]
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Voice leading
# ---------------------------------------------------------------------------


class VoiceLeadingRequest(BaseModel):
    """Request body for POST /theory/voice-leading."""

    from_chord: list[int] = Field(..., min_length=1)
    to_chord: list[int] = Field(..., min_length=1)


class InversionDistanceOut(BaseModel):
    inversion: int
    distance: int


class VoiceLeadingResponse(BaseModel):
    """Best inversion of ``to_chord`` relative to ``from_chord``."""

    best_inversion: int
    min_distance: int = Field(..., ge=0)
    suggested_notes: list[int]
    all_distances: list[InversionDistanceOut]


# ---------------------------------------------------------------------------
# Notes and frequency
# ---------------------------------------------------------------------------


class NoteResponse(BaseModel):
    """A single MIDI note with its name and frequency."""

    midi: int = Field(..., ge=0, le=127)
    name: str
    frequency_hz: float
    octave: int
    in_piano_range: bool


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


class ProgressionTemplateOut(BaseModel):
    """One entry of the progression template catalogue."""

    key: str
    name: str
    roman_numerals: list[str]
    description: str
    genre: str
    feel: str
    difficulty: str
    repeatable: bool
    bars: int | None


class ProgressionRequest(BaseModel):
    """Request body for POST /theory/progressions/generate.

    Exactly one of ``roman_numerals`` or ``template`` must be given.
    """

    root: int = Field(60, ge=0, le=127, description="Tonic MIDI note")
    scale: str = Field(DEFAULT_SCALE, min_length=1)
    roman_numerals: list[str] | None = Field(None, min_length=1)
    template: str | None = Field(None, min_length=1)

    @model_validator(mode="after")
    def exactly_one_source(self) -> "ProgressionRequest":
        if (self.roman_numerals is None) == (self.template is None):
            raise ValueError("Provide exactly one of 'roman_numerals' or 'template'")
        return self


class ProgressionResponse(BaseModel):
    """A generated, voice-led progression with its analysis."""

    key: str
    scale_key: str
    scale_name: str
    label: str
    roman_numerals: list[str]
    chords: list[ChordOut]
    voice_leading: VoiceLeadingAnalysisOut
    warnings: list[str] = Field(default_factory=list)
