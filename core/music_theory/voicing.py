"""
core/music_theory/voicing.py — Chord inversions and voice leading.

calculate_voice_leading() picks the inversion of a target chord that moves
least from a source chord. This is what keeps a generated progression from
jumping around the keyboard.

Distance metric (shared with progressions.analyze_voice_leading):
    Sum of |from[i] - to[i]| over positionally paired notes, up to the
    length of the shorter chord. Notes are paired by position, not by
    nearest neighbour.

Inversion search:
    Inversions 0 .. len(to_chord) - 1 are tried in order. Each inversion
    moves the lowest note up an octave, so the search only ever raises the
    target chord. The first strict minimum wins, i.e. the lowest inversion
    index among ties.
"""

from __future__ import annotations

from collections.abc import Sequence

from core.music_theory.types import InversionDistance, VoiceLeadingResult


def invert(chord_notes: Sequence[int], inversion: int = 0) -> tuple[int, ...]:
    """Return an inversion of a chord.

    Each step removes the first (lowest) note and appends it an octave
    higher. Inversion numbers beyond the chord length keep cycling into
    higher octaves.

    Args:
        chord_notes: Chord notes, lowest first
        inversion:   0 = root position, 1 = first inversion, ...

    Returns:
        Inverted chord notes (same length as the input)

    Examples:
        >>> invert((60, 64, 67), 1)
        (64, 67, 72)
        >>> invert((60, 64, 67), 2)
        (67, 72, 76)
    """
    notes = list(chord_notes)
    if not notes:
        return ()
    for _ in range(inversion):
        lowest = notes.pop(0)
        notes.append(lowest + 12)
    return tuple(notes)


def positional_distance(from_notes: Sequence[int], to_notes: Sequence[int]) -> int:
    """Sum of absolute semitone differences between positionally paired notes."""
    return sum(abs(a - b) for a, b in zip(from_notes, to_notes))


def calculate_voice_leading(
    from_chord: Sequence[int],
    to_chord: Sequence[int],
) -> VoiceLeadingResult:
    """Find the inversion of to_chord that moves least from from_chord.

    Args:
        from_chord: Notes of the chord being left
        to_chord:   Notes of the chord being approached, root position

    Returns:
        VoiceLeadingResult with the best inversion, its distance, the
        suggested notes and the distance of every inversion tried.
        An empty to_chord yields inversion 0, distance 0 and no notes.

    Examples:
        >>> result = calculate_voice_leading((65, 69, 72), (60, 64, 67))
        >>> result.best_inversion, result.min_distance
        (1, 3)
        >>> result.suggested_notes
        (64, 67, 72)
    """
    best_inversion = 0
    min_distance: int | None = None
    distances: list[InversionDistance] = []

    for inversion in range(len(to_chord)):
        candidate = invert(to_chord, inversion)
        distance = positional_distance(from_chord, candidate)
        distances.append(InversionDistance(inversion=inversion, distance=distance))
        if min_distance is None or distance < min_distance:
            min_distance = distance
            best_inversion = inversion

    return VoiceLeadingResult(
        best_inversion=best_inversion,
        min_distance=min_distance or 0,
        suggested_notes=invert(to_chord, best_inversion),
        all_distances=tuple(distances),
    )
