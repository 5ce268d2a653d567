"""Enumerations shared by the rank editor core."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Severity(IntEnum):
    """Validation severity; higher values are more serious."""

    NONE = 0
    ADVISORY = 1
    WARNING = 2
    ERROR = 3


class IssueCategory(StrEnum):
    """What part of a rank an issue is about."""

    RANK = "Rank"
    VEHICLE = "Vehicle"
    STATION = "Station"
    OUTFIT = "Outfit"


class ValidationContext(StrEnum):
    """When a validation pass runs, which selects the applicable rules."""

    FULL = "full"
    REAL_TIME = "real_time"
    PRE_GENERATE = "pre_generate"
    STARTUP = "startup"
    ADVISORY_ONLY = "advisory_only"


class Gender(StrEnum):
    """Gender inferred from an outfit script name."""

    MALE = "Male"
    FEMALE = "Female"
    UNISEX = "Unisex"
