"""
Models package for the ACM Claim Calculator
"""

from .training import (
    Scheme,
    ProgrammeVariant,
    TrainerType,
    Venue,
    CourseCategory,
    Duration,
    DistanceTier,
    ParticipantRole,
    DevelopmentLevel,
    StudyLocation,
    ParticipantGroup,
    Participant,
    DevelopmentDetails,
    TrainingEventInput
)

from .acm import (
    RateTable,
    SchemeConfig,
    CostMatrixRow,
    CourseFeeBasis,
    SlbCostMode,
    PaymentFlow,
    TrainerRequirement,
    ClaimDocKey,
    GrantDocument,
    DocumentTable,
    VersionStamp,
    AcmSnapshot
)

from .result import (
    GroupShare,
    CostItem,
    DocumentRequirement,
    DocumentChecklist,
    EligibilityResult
)

__all__ = [
    # Training event models
    "Scheme",
    "ProgrammeVariant",
    "TrainerType",
    "Venue",
    "CourseCategory",
    "Duration",
    "DistanceTier",
    "ParticipantRole",
    "DevelopmentLevel",
    "StudyLocation",
    "ParticipantGroup",
    "Participant",
    "DevelopmentDetails",
    "TrainingEventInput",

    # ACM configuration models
    "RateTable",
    "SchemeConfig",
    "CostMatrixRow",
    "CourseFeeBasis",
    "SlbCostMode",
    "PaymentFlow",
    "TrainerRequirement",
    "ClaimDocKey",
    "GrantDocument",
    "DocumentTable",
    "VersionStamp",
    "AcmSnapshot",

    # Result models
    "GroupShare",
    "CostItem",
    "DocumentRequirement",
    "DocumentChecklist",
    "EligibilityResult"
]
