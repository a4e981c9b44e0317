"""Data models for pets.

This module exports the core data structures used throughout the application.
"""

from pets.models.action import Action, ActionResult, Cause
from pets.models.spec import DeclarationError, DesiredFileSpec, Principal, parse_mode

__all__ = [
    "Action",
    "ActionResult",
    "Cause",
    "DeclarationError",
    "DesiredFileSpec",
    "Principal",
    "parse_mode",
]
