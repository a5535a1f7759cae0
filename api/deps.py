"""
FastAPI dependency providers.

The tuning reference is read once from the environment (``.env`` files are
honoured through python-dotenv) and reused across requests. Tests override
it with ``app.dependency_overrides[get_tuning]``.
"""

import functools
import logging
import math
import os

from dotenv import load_dotenv

from core.music_theory.config import DEFAULT_TUNING, TuningConfig

logger = logging.getLogger(__name__)

REFERENCE_HZ_ENV = "MUSIC_THEORY_REFERENCE_HZ"


@functools.cache
def get_tuning() -> TuningConfig:
    """
    Return the process-wide ``TuningConfig``.

    Reads ``MUSIC_THEORY_REFERENCE_HZ`` on first call. A missing, unparseable,
    non-finite or non-positive value falls back to A4 = 440 Hz with a warning.
    """
    load_dotenv()
    raw = os.getenv(REFERENCE_HZ_ENV)
    if not raw:
        return DEFAULT_TUNING

    try:
        reference_hz = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", REFERENCE_HZ_ENV, raw)
        return DEFAULT_TUNING

    if not math.isfinite(reference_hz) or reference_hz <= 0:
        logger.warning("Ignoring %s=%r: must be positive and finite", REFERENCE_HZ_ENV, raw)
        return DEFAULT_TUNING

    logger.info("Using A4 = %.2f Hz from %s", reference_hz, REFERENCE_HZ_ENV)
    return TuningConfig(reference_hz=reference_hz)
