# src/errors.py
"""
Exceptions raised by the SOS engine.

Only contract violations by the caller raise. Gameplay rule rejections
(tapping an occupied cell, ending a turn before placing) come back as an
Outcome instead, see engine.py.
"""
from __future__ import annotations
from typing import Optional


class SOSError(Exception):
    """Base class for every engine error."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({details})"
        return self.message


class OutOfBoundsError(SOSError, IndexError):
    """A coordinate outside the grid reached the engine."""


class PhaseError(SOSError):
    """A phase transition was requested from a phase that does not allow it."""


class InvalidLetterError(SOSError, ValueError):
    """Only 'S' and 'O' can be written into the grid."""


class InvalidSettingError(SOSError, ValueError):
    """Bad grid size, player count or rules configuration."""
