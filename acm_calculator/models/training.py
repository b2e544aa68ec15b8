"""
Pydantic models describing a training event submitted for an ACM estimate
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


class Scheme(str, Enum):
    HCC = "hcc"  # HRD Corp Claimable Courses, direct payment to the training provider
    SBL = "sbl"  # Skim Bantuan Latihan, reimbursement
    SLB = "slb"  # Skim Latihan Bersama, joint in-house training


class ProgrammeVariant(str, Enum):
    INHOUSE = "inhouse"
    ROT_INHOUSE = "rot_inhouse"
    COACHING_MENTORING = "coaching_mentoring"
    ROT_PUBLIC = "rot_public"
    PUBLIC = "public"
    SEMINAR_CONFERENCE = "seminar_conference"
    OVERSEAS_SEMINAR = "overseas_seminar"
    ELEARNING = "elearning"
    MOBILE_ELEARNING = "mobile_elearning"
    OVERSEAS = "overseas"
    DEVELOPMENT = "development"

    @property
    def is_inhouse_family(self) -> bool:
        return self in INHOUSE_FAMILY


INHOUSE_FAMILY = frozenset({
    ProgrammeVariant.INHOUSE,
    ProgrammeVariant.ROT_INHOUSE,
    ProgrammeVariant.COACHING_MENTORING,
})


class TrainerType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    OVERSEAS = "overseas"


class Venue(str, Enum):
    EMPLOYER_PREMISES = "employer_premises"
    EXTERNAL_HOTEL = "external_hotel"


class CourseCategory(str, Enum):
    GENERAL = "general"  # legacy alias of general_non_technical
    GENERAL_NON_TECHNICAL = "general_non_technical"
    GENERAL_TECHNICAL = "general_technical"
    FOCUS_AREA = "focus_area"
    INDUSTRY_SPECIFIC = "industry_specific"
    CERTIFICATION = "certification"

    @property
    def is_general(self) -> bool:
        return self in (
            CourseCategory.GENERAL,
            CourseCategory.GENERAL_NON_TECHNICAL,
            CourseCategory.GENERAL_TECHNICAL,
        )

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    CourseCategory.GENERAL: "General Course",
    CourseCategory.GENERAL_NON_TECHNICAL: "General (Non-Technical) Course",
    CourseCategory.GENERAL_TECHNICAL: "General (Technical) Course",
    CourseCategory.FOCUS_AREA: "Focus Area Course",
    CourseCategory.INDUSTRY_SPECIFIC: "Industry Specific Course",
    CourseCategory.CERTIFICATION: "Professional Certification Course",
}


class Duration(str, Enum):
    FULL_DAY = "full_day"
    HALF_DAY = "half_day"


class DistanceTier(str, Enum):
    UNDER_100 = "under_100"
    OVER_100 = "over_100"

    @property
    def label(self) -> str:
        return ">=100km" if self is DistanceTier.OVER_100 else "<100km"


class ParticipantRole(str, Enum):
    HOST = "host"
    BRANCH = "branch"
    OTHER_EMPLOYER = "other_employer"

    @property
    def default_label(self) -> str:
        return {
            ParticipantRole.HOST: "Host Company",
            ParticipantRole.BRANCH: "Branch",
            ParticipantRole.OTHER_EMPLOYER: "Participating Employer",
        }[self]


class DevelopmentLevel(str, Enum):
    PHD = "phd"
    MASTERS = "masters"
    DEGREE = "degree"
    DIPLOMA = "diploma"
    SKM = "skm"

    @property
    def is_postgraduate(self) -> bool:
        return self in (DevelopmentLevel.MASTERS, DevelopmentLevel.PHD)

    @property
    def label(self) -> str:
        return {
            DevelopmentLevel.PHD: "Doctoral / PhD",
            DevelopmentLevel.MASTERS: "Master's Programme",
            DevelopmentLevel.DEGREE: "Degree Programme",
            DevelopmentLevel.DIPLOMA: "Diploma Programme",
            DevelopmentLevel.SKM: "Sijil Kemahiran Malaysia (SKM)",
        }[self]


class StudyLocation(str, Enum):
    LOCAL = "local"
    OVERSEAS = "overseas"


class ParticipantGroup(BaseModel):
    """A group of trainees from one location"""
    label: str = Field("", description="Display label; defaults by role")
    pax: int = Field(..., ge=0, description="Number of trainees")
    distance: DistanceTier = Field(DistanceTier.UNDER_100, description="Distance from the group to the venue")


class Participant(BaseModel):
    """A participant group tagged with its billing role"""
    model_config = ConfigDict(frozen=True)

    role: ParticipantRole
    label: str
    pax: int
    distance: DistanceTier


class DevelopmentDetails(BaseModel):
    """Inputs that only apply to development programmes"""
    level: DevelopmentLevel = DevelopmentLevel.DEGREE
    skm_level: int = Field(3, ge=1, le=5)
    location: StudyLocation = StudyLocation.LOCAL
    private_institution: bool = Field(False, description="Overseas private higher education institution")
    months: int = Field(3, ge=1)
    full_time: bool = True


class TrainingEventInput(BaseModel):
    """Description of a training engagement to estimate"""
    scheme: Scheme = Field(..., description="Financial scheme")
    programme_variant: ProgrammeVariant = Field(ProgrammeVariant.INHOUSE, description="Type of training")
    trainer_type: TrainerType = Field(TrainerType.EXTERNAL)
    number_of_trainers: int = Field(1, ge=1)
    venue: Venue = Field(Venue.EMPLOYER_PREMISES)
    course_category: CourseCategory = Field(CourseCategory.GENERAL)
    duration: Duration = Field(Duration.FULL_DAY)
    days: int = Field(1, ge=1, description="Training days")
    extra_days: int = Field(0, ge=0, le=2, description="Extra travel days, overseas only")
    elearning_hours: int = Field(7, ge=1, description="Total e-learning programme hours")
    trainer_from_branch: bool = Field(False, description="Internal trainer travels from a branch")
    number_of_speakers: int = Field(1, ge=0, description="Seminar / conference speakers")
    has_licensed_materials: bool = Field(False, description="Licensed training materials (LTM) used")
    ltm_actual_cost: float = Field(0, ge=0, description="Actual LTM cost, 0 = as charged")
    actual_fee_per_head: float = Field(0, ge=0, description="Actual course fee per pax for the whole course, 0 = unset")
    host: ParticipantGroup = Field(..., description="Host company staff")
    branches: List[ParticipantGroup] = Field(default_factory=list, description="Branches of the same legal entity")
    other_employers: List[ParticipantGroup] = Field(default_factory=list, description="Separate participating employers")
    development: DevelopmentDetails = Field(default_factory=DevelopmentDetails)

    @field_validator('branches', 'other_employers')
    @classmethod
    def validate_group_count(cls, v):
        if len(v) > 50:
            raise ValueError('at most 50 participant groups per list')
        return v

    @model_validator(mode='after')
    def validate_other_employers(self):
        if self.other_employers and not self.programme_variant.is_inhouse_family:
            raise ValueError(
                f"other_employers are only accepted for in-house training, "
                f"not {self.programme_variant.value}"
            )
        return self

    @property
    def total_pax(self) -> int:
        return sum(p.pax for p in self.participants())

    def participants(self) -> List[Participant]:
        """Host, branches and other employers in billing order"""
        tagged = [(ParticipantRole.HOST, self.host)]
        tagged += [(ParticipantRole.BRANCH, g) for g in self.branches]
        tagged += [(ParticipantRole.OTHER_EMPLOYER, g) for g in self.other_employers]
        return [
            Participant(role=role, label=g.label or role.default_label, pax=g.pax, distance=g.distance)
            for role, g in tagged
        ]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scheme": "hcc",
                "programme_variant": "inhouse",
                "trainer_type": "external",
                "number_of_trainers": 1,
                "venue": "employer_premises",
                "course_category": "general",
                "duration": "full_day",
                "days": 2,
                "host": {"pax": 10, "distance": "under_100"},
                "branches": [{"label": "Penang Branch", "pax": 4, "distance": "over_100"}],
                "other_employers": []
            }
        }
    )
