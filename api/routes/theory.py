"""
api/routes/theory.py — Music theory endpoints.

Endpoints:
    GET  /theory/scales                 — Scale catalogue
    GET  /theory/scales/{scale_key}     — Generate a scale from a root note
    GET  /theory/chords                 — Chord catalogue
    GET  /theory/chords/{chord_key}     — Generate (and invert) a chord
    GET  /theory/diatonic               — Seven diatonic triads of a key
    POST /theory/voice-leading          — Smoothest inversion between two chords
    GET  /theory/notes/{name}           — Parse a note name ("A4", "Db3")
    GET  /theory/frequency              — Nearest MIDI note for a frequency
    GET  /theory/progressions           — Progression templates (optionally by genre)
    POST /theory/progressions/generate  — Voice-led progression with analysis

Pure computation: every endpoint delegates to core.music_theory and only
shapes the output. Lenient engine fallbacks are collected per request and
returned in the ``warnings`` field; null results become 422.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_tuning
from api.schemas.theory import (
    ChordOut,
    ChordResponse,
    ChordSummaryOut,
    DiatonicResponse,
    InversionDistanceOut,
    NoteResponse,
    ProgressionRequest,
    ProgressionResponse,
    ProgressionTemplateOut,
    ScaleResponse,
    ScaleSummaryOut,
    VoiceLeadingAnalysisOut,
    VoiceLeadingRequest,
    VoiceLeadingResponse,
)
from core.music_theory import (
    CHORD_TEMPLATES,
    DEFAULT_OCTAVES,
    DEFAULT_SCALE,
    SCALE_DEFINITIONS,
    DiatonicChord,
    ProgressionChord,
    TuningConfig,
    calculate_voice_leading,
    filter_progressions,
    frequency_to_midi,
    generate_chord,
    generate_complete_progression,
    generate_diatonic_chords,
    generate_scale,
    get_chord_name,
    get_note_name,
    get_octave,
    get_progression_template,
    invert,
    is_in_piano_range,
    midi_to_frequency,
    midi_to_note_name,
    note_name_to_midi,
    resolve_chord_key,
    resolve_scale_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/theory", tags=["theory"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _chord_out(chord: DiatonicChord | ProgressionChord) -> ChordOut:
    if isinstance(chord, ProgressionChord):
        inversion, distance = chord.voice_leading_inversion, chord.voice_leading_distance
    else:
        inversion, distance = 0, 0
    return ChordOut(
        degree=chord.degree,
        roman_numeral=chord.roman_numeral,
        root=chord.root,
        quality=chord.quality,
        harmonic_function=chord.harmonic_function,
        midi_notes=list(chord.notes),
        note_names=[get_note_name(n) for n in chord.notes],
        inversion=inversion,
        distance=distance,
    )


def _scale_summary(scale_key: str) -> ScaleSummaryOut:
    definition = SCALE_DEFINITIONS[scale_key]
    return ScaleSummaryOut(
        key=scale_key,
        name=definition.name,
        intervals=list(definition.intervals),
        degree_labels=list(definition.degree_labels),
        description=definition.description,
    )


def _chord_summary(chord_key: str) -> ChordSummaryOut:
    template = CHORD_TEMPLATES[chord_key]
    return ChordSummaryOut(
        key=chord_key,
        name=template.name,
        symbol=template.symbol,
        quality=template.quality,
        intervals=list(template.intervals),
        description=template.description,
    )


def _note_response(midi: int, tuning: TuningConfig) -> NoteResponse:
    frequency = midi_to_frequency(midi, tuning=tuning)
    if frequency is None:
        raise HTTPException(status_code=422, detail=f"MIDI note out of range: {midi}")
    return NoteResponse(
        midi=midi,
        name=midi_to_note_name(midi),
        frequency_hz=round(frequency, 4),
        octave=get_octave(midi),
        in_piano_range=is_in_piano_range(midi),
    )


# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------


@router.get("/scales", response_model=list[ScaleSummaryOut])
def list_scales() -> list[ScaleSummaryOut]:
    """Return every scale definition in declaration order."""
    return [_scale_summary(key) for key in SCALE_DEFINITIONS]


@router.get("/scales/{scale_key}", response_model=ScaleResponse)
def get_scale(
    scale_key: str,
    root: int = Query(60, ge=0, le=127),
    octaves: int = Query(DEFAULT_OCTAVES, ge=1, le=10),
    use_sharps: bool = True,
) -> ScaleResponse:
    """Generate a scale. Unknown scale keys fall back to major with a warning."""
    warnings: list[str] = []
    resolved_key = resolve_scale_key(scale_key, on_warning=warnings.append)
    notes = generate_scale(root, resolved_key, octaves)
    return ScaleResponse(
        scale=_scale_summary(resolved_key),
        root=root,
        midi_notes=list(notes),
        note_names=[get_note_name(n, use_sharps) for n in notes],
        warnings=warnings,
    )


# ---------------------------------------------------------------------------
# Chords
# ---------------------------------------------------------------------------


@router.get("/chords", response_model=list[ChordSummaryOut])
def list_chords() -> list[ChordSummaryOut]:
    """Return every chord template in declaration order."""
    return [_chord_summary(key) for key in CHORD_TEMPLATES]


@router.get("/chords/{chord_key}", response_model=ChordResponse)
def get_chord(
    chord_key: str,
    root: int = Query(60, ge=0, le=127),
    inversion: int = Query(0, ge=0, le=3),
) -> ChordResponse:
    """Generate a chord from a root note, then apply an inversion."""
    warnings: list[str] = []
    resolved_key = resolve_chord_key(chord_key, on_warning=warnings.append)
    notes = invert(generate_chord(root, resolved_key), inversion)
    return ChordResponse(
        chord=_chord_summary(resolved_key),
        root=root,
        symbol=get_chord_name(root, resolved_key),
        inversion=inversion,
        midi_notes=list(notes),
        note_names=[get_note_name(n) for n in notes],
        warnings=warnings,
    )


@router.get("/diatonic", response_model=DiatonicResponse)
def get_diatonic(
    root: int = Query(60, ge=0, le=127),
    scale: str = DEFAULT_SCALE,
) -> DiatonicResponse:
    """Return the seven diatonic triads of a key."""
    warnings: list[str] = []
    chords = generate_diatonic_chords(root, scale, on_warning=warnings.append)
    return DiatonicResponse(
        key=midi_to_note_name(root),
        scale_key=scale,
        chords=[_chord_out(c) for c in chords],
        warnings=warnings,
    )


@router.post("/voice-leading", response_model=VoiceLeadingResponse)
def voice_leading(request: VoiceLeadingRequest) -> VoiceLeadingResponse:
    """Find the inversion of ``to_chord`` that moves least from ``from_chord``."""
    result = calculate_voice_leading(request.from_chord, request.to_chord)
    return VoiceLeadingResponse(
        best_inversion=result.best_inversion,
        min_distance=result.min_distance,
        suggested_notes=list(result.suggested_notes),
        all_distances=[
            InversionDistanceOut(inversion=d.inversion, distance=d.distance)
            for d in result.all_distances
        ],
    )


# ---------------------------------------------------------------------------
# Notes and frequency
# ---------------------------------------------------------------------------


@router.get("/notes/{name}", response_model=NoteResponse)
def get_note(name: str, tuning: TuningConfig = Depends(get_tuning)) -> NoteResponse:
    """Parse a scientific pitch name into MIDI, name and frequency."""
    midi = note_name_to_midi(name)
    if midi is None:
        raise HTTPException(status_code=422, detail=f"Cannot parse note name {name!r}")
    return _note_response(midi, tuning)


@router.get("/frequency", response_model=NoteResponse)
def get_frequency(
    hz: float = Query(..., gt=0.0),
    tuning: TuningConfig = Depends(get_tuning),
) -> NoteResponse:
    """Return the MIDI note nearest to a frequency."""
    midi = frequency_to_midi(hz, tuning=tuning)
    if midi is None:
        raise HTTPException(status_code=422, detail=f"Frequency {hz} Hz is out of MIDI range")
    return _note_response(midi, tuning)


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


@router.get("/progressions", response_model=list[ProgressionTemplateOut])
def list_progressions(genre: str | None = None) -> list[ProgressionTemplateOut]:
    """Return progression templates, optionally filtered by a genre tag."""
    return [
        ProgressionTemplateOut(
            key=key,
            name=t.name,
            roman_numerals=list(t.roman_numerals),
            description=t.description,
            genre=t.genre,
            feel=t.feel,
            difficulty=t.difficulty,
            repeatable=t.repeatable,
            bars=t.bars,
        )
        for key, t in filter_progressions(genre)
    ]


@router.post("/progressions/generate", response_model=ProgressionResponse)
def generate_progression_route(request: ProgressionRequest) -> ProgressionResponse:
    """Generate a voice-led progression from numerals or a template key.

    Raises:
        HTTPException(404): Unknown template key.
    """
    warnings: list[str] = []
    if request.template is not None:
        template = get_progression_template(request.template, on_warning=warnings.append)
        if template is None:
            raise HTTPException(
                status_code=404, detail=f"Unknown progression template {request.template!r}"
            )
        numerals = list(template.roman_numerals)
    else:
        numerals = request.roman_numerals or []

    complete = generate_complete_progression(
        request.root, request.scale, numerals, on_warning=warnings.append
    )
    analysis = complete.voice_leading_analysis
    logger.info(
        "Generated %d-chord progression in %s %s (%s)",
        len(complete.progression),
        complete.key,
        request.scale,
        analysis.quality,
    )
    return ProgressionResponse(
        key=complete.key,
        scale_key=complete.scale_key,
        scale_name=complete.scale_info.name,
        label=complete.progression_label,
        roman_numerals=list(complete.roman_numerals),
        chords=[_chord_out(c) for c in complete.progression],
        voice_leading=VoiceLeadingAnalysisOut(
            total_distance=analysis.total_distance,
            average_distance=analysis.average_distance,
            quality=analysis.quality,
            distances=list(analysis.distances),
            suggestions=list(analysis.suggestions),
        ),
        warnings=warnings,
    )
