"""
Per-calculation state: derived predicates, ordered warnings and the context
passed to every cost component
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

from ..models.acm import AcmSnapshot, ClaimDocKey, CostMatrixRow, RateTable
from ..models.training import (
    CourseCategory,
    Duration,
    ParticipantRole,
    Participant,
    ProgrammeVariant,
    Scheme,
    TrainerType,
    TrainingEventInput,
    Venue,
)


class WarningStage(IntEnum):
    """Output order of advisory warnings"""
    SCHEME = 10
    THRESHOLD = 20
    CAP = 30
    ESTIMATE = 40
    COST_SHARING = 50
    REMOTE = 60
    DOCUMENTS = 70
    ATTENDANCE = 80


class WarningLog:
    """
    Collects warnings and emits them grouped by stage, insertion order within a
    stage. A message already collected is not added again.
    """

    def __init__(self):
        self._entries: List[Tuple[WarningStage, int, str]] = []

    def add(self, stage: WarningStage, message: str) -> None:
        if any(entry[2] == message for entry in self._entries):
            return
        self._entries.append((stage, len(self._entries), message))

    def has_stage(self, stage: WarningStage) -> bool:
        return any(entry[0] == stage for entry in self._entries)

    def ordered(self) -> List[str]:
        return [message for _, _, message in sorted(self._entries)]

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class EventProfile:
    """Predicates derived once from a training event"""
    variant: ProgrammeVariant
    is_inhouse_family: bool
    is_rot_inhouse: bool
    is_rot_public: bool
    is_public: bool
    is_local_seminar: bool
    is_overseas_seminar: bool
    is_elearning: bool
    is_overseas_training: bool
    is_development: bool
    is_hotel: bool
    is_half_day: bool
    is_general_course: bool
    is_technical: bool
    has_actual_fee: bool
    host_pax: int
    branch_pax: int
    other_pax: int
    other_employer_count: int

    @property
    def is_rot(self) -> bool:
        return self.is_rot_inhouse or self.is_rot_public

    @property
    def is_seminar(self) -> bool:
        return self.is_local_seminar or self.is_overseas_seminar

    @property
    def is_any_overseas(self) -> bool:
        return self.is_overseas_training or self.is_overseas_seminar

    @property
    def is_as_charged(self) -> bool:
        return not self.is_general_course

    @property
    def total_pax(self) -> int:
        return self.host_pax + self.branch_pax + self.other_pax

    @property
    def has_other_employers(self) -> bool:
        return self.other_employer_count > 0

    @classmethod
    def classify(cls, event: TrainingEventInput) -> "EventProfile":
        variant = event.programme_variant
        return cls(
            variant=variant,
            is_inhouse_family=variant.is_inhouse_family,
            is_rot_inhouse=variant is ProgrammeVariant.ROT_INHOUSE,
            is_rot_public=variant is ProgrammeVariant.ROT_PUBLIC,
            is_public=variant is ProgrammeVariant.PUBLIC,
            is_local_seminar=variant is ProgrammeVariant.SEMINAR_CONFERENCE,
            is_overseas_seminar=variant is ProgrammeVariant.OVERSEAS_SEMINAR,
            is_elearning=variant in (ProgrammeVariant.ELEARNING, ProgrammeVariant.MOBILE_ELEARNING),
            is_overseas_training=variant is ProgrammeVariant.OVERSEAS,
            is_development=variant is ProgrammeVariant.DEVELOPMENT,
            is_hotel=event.venue is Venue.EXTERNAL_HOTEL,
            is_half_day=event.duration is Duration.HALF_DAY,
            is_general_course=event.course_category.is_general,
            is_technical=event.course_category is CourseCategory.GENERAL_TECHNICAL,
            has_actual_fee=event.actual_fee_per_head > 0,
            host_pax=event.host.pax,
            branch_pax=sum(g.pax for g in event.branches),
            other_pax=sum(g.pax for g in event.other_employers),
            other_employer_count=len(event.other_employers),
        )


@dataclass
class CalculationContext:
    """Everything a cost component may read; built once per calculation"""
    event: TrainingEventInput
    snapshot: AcmSnapshot
    profile: EventProfile
    warnings: WarningLog = field(default_factory=WarningLog)
    row: Optional[CostMatrixRow] = None
    participants: List[Participant] = field(default_factory=list)

    def __post_init__(self):
        if not self.participants:
            self.participants = self.event.participants()

    @property
    def rates(self) -> RateTable:
        return self.snapshot.rates

    @property
    def scheme(self) -> Scheme:
        return self.event.scheme

    @property
    def days(self) -> int:
        return self.event.days

    @property
    def trainer(self) -> TrainerType:
        return self.event.trainer_type

    @property
    def course_fee_doc(self) -> str:
        key = ClaimDocKey.COURSE_FEE_HCC if self.scheme is Scheme.HCC else ClaimDocKey.COURSE_FEE_OTHER
        return self.snapshot.documents.claim_doc(key)

    def claim_doc(self, key: ClaimDocKey, **placeholders: str) -> str:
        return self.snapshot.documents.claim_doc(key, **placeholders)

    def groups(self, *roles: ParticipantRole) -> List[Participant]:
        """Participant groups with pax > 0, optionally filtered by role"""
        return [
            p for p in self.participants
            if p.pax > 0 and (not roles or p.role in roles)
        ]

    def employer_units(self) -> List[Participant]:
        """
        Billing units for per-head public rates: host and branches form one
        unit (same legal entity), each other employer is its own unit
        """
        units = []
        host_unit_pax = self.profile.host_pax + self.profile.branch_pax
        if host_unit_pax > 0:
            host = self.participants[0]
            label = host.label
            if self.profile.branch_pax > 0:
                label = (
                    f"{host.label} + Branches "
                    f"({self.profile.host_pax} + {self.profile.branch_pax} pax)"
                )
            units.append(Participant(
                role=ParticipantRole.HOST,
                label=label,
                pax=host_unit_pax,
                distance=host.distance,
            ))
        units.extend(self.groups(ParticipantRole.OTHER_EMPLOYER))
        return units
