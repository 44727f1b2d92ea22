"""
Models Module

Exports the persisted models of the self-healing loop.

Usage:
    from app.models import TeamMapping, MatchFailure
"""
from app.models.models import (
    Base,
    TeamMapping,
    MatchFailure,
)

__all__ = [
    "Base",
    "TeamMapping",
    "MatchFailure",
]
