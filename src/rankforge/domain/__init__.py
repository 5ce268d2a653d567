"""Domain model for rank hierarchies.

This package exposes:

* Dataclasses describing ranks, pay bands and station assignments
  (see :mod:`models`).
* Read-only catalog entry types for stations, vehicles and outfits.
* Enumerations shared by validation and the editor session.
"""

from . import enums, models
from .enums import Gender, IssueCategory, Severity, ValidationContext
from .models import (
    OutfitVariation,
    Rank,
    RankHierarchy,
    RankID,
    Station,
    StationAssignment,
    Vehicle,
    flatten,
    new_rank_id,
    roman_numeral,
)

__all__ = [
    "Gender",
    "IssueCategory",
    "OutfitVariation",
    "Rank",
    "RankHierarchy",
    "RankID",
    "Severity",
    "Station",
    "StationAssignment",
    "ValidationContext",
    "Vehicle",
    "enums",
    "flatten",
    "models",
    "new_rank_id",
    "roman_numeral",
]
