"""
Configuration dataclasses for the music theory engine.

These immutable config objects keep tuning and scoring parameters out of
function signatures, so the same presets can be reused by the engine, the
HTTP facade and the tests.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class TuningConfig:
    """
    Equal-temperament reference pitch.

    Attributes:
        reference_midi: MIDI note that sounds at ``reference_hz``.
            Defaults to 69 (A4).
        reference_hz: Frequency of the reference note in Hz.
            Defaults to 440.0 (ISO 16 concert pitch).

    Example:
        >>> tuning = TuningConfig(reference_hz=432.0)
        >>> midi_to_frequency(69, tuning=tuning)
        432.0
    """

    reference_midi: int = 69
    reference_hz: float = 440.0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not (0 <= self.reference_midi <= 127):
            raise ValueError(f"reference_midi must be in [0, 127], got {self.reference_midi}")
        if not math.isfinite(self.reference_hz) or self.reference_hz <= 0:
            raise ValueError(f"reference_hz must be positive and finite, got {self.reference_hz}")


@dataclass(frozen=True)
class VoiceLeadingThresholds:
    """
    Average-movement thresholds used to grade a progression.

    A progression whose average chord-to-chord movement is below
    ``excellent_below`` is "excellent", below ``good_below`` is "good",
    anything else is "fair".
    """

    excellent_below: float = 5.0
    good_below: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.excellent_below < 0:
            raise ValueError(f"excellent_below must be non-negative, got {self.excellent_below}")
        if self.good_below < self.excellent_below:
            raise ValueError(
                f"good_below ({self.good_below}) must be >= "
                f"excellent_below ({self.excellent_below})"
            )


# Pre-defined configurations

DEFAULT_TUNING = TuningConfig()
"""A4 = 440 Hz."""

BAROQUE_TUNING = TuningConfig(reference_hz=415.0)
"""A4 = 415 Hz, common for historically informed performance."""

DEFAULT_THRESHOLDS = VoiceLeadingThresholds()
"""excellent < 5 semitones, good < 10 semitones."""
