"""
core/music_theory/diagnostics.py — Warning channel for lenient engine functions.

Engine functions never raise on bad input. They either substitute a default
or return None, and report what happened through a warning. Callers that
want to see those warnings (tests, the HTTP facade) pass an ``on_warning``
callback; everyone else gets them on the calling module's logger.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

WarningHandler = Callable[[str], None]


def warn(log: logging.Logger, on_warning: WarningHandler | None, message: str) -> None:
    """Route a diagnostic message to the injected handler or the module logger.

    Args:
        log:        Logger of the module emitting the warning
        on_warning: Optional callback receiving the formatted message
        message:    Human-readable description of the substitution
    """
    if on_warning is not None:
        on_warning(message)
    else:
        log.warning(message)
