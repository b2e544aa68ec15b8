"""
Pydantic models for the ACM configuration snapshot: rates, schemes, cost
matrix rows and document requirements
"""
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Dict, FrozenSet, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

from .training import Scheme, ProgrammeVariant, TrainerType, Venue


FROZEN = ConfigDict(frozen=True)


def _read_only(value):
    return MappingProxyType(dict(value))


def _plain_dict(value):
    return dict(value)


def ReadOnlyDict(key_type, value_type):
    """Dict field stored as a read-only view and dumped as a plain dict"""
    return Annotated[
        Dict[key_type, value_type],
        AfterValidator(_read_only),
        PlainSerializer(_plain_dict, return_type=Dict[key_type, value_type]),
    ]


class PaymentFlow(str, Enum):
    DIRECT_TO_TP = "direct_to_tp"
    REIMBURSEMENT = "reimbursement"


class TrainerRequirement(str, Enum):
    ACCREDITED = "accredited"
    NON_REGISTERED_ALLOWED = "non_registered_allowed"
    ANY = "any"


class SlbCostMode(str, Enum):
    """How an SLB joint course fee is split between employers"""
    GROUP_RATE_DIVIDED_BY_TOTAL_PAX = "group_rate_divided_by_total_pax"


class CourseFeeBasis(str, Enum):
    """Rate family used for a matrix-driven course fee"""
    INHOUSE_GROUP = "inhouse_group"
    PUBLIC_PER_HEAD = "public_per_head"


# ---------------------------------------------------------------------------
# Rate table
# ---------------------------------------------------------------------------

class InhouseRates(BaseModel):
    model_config = FROZEN

    full_day: float = Field(10500, ge=0, description="RM per group per day (full day)")
    half_day: float = Field(6000, ge=0, description="RM per group per day (half day)")
    prorate_threshold: int = Field(5, ge=1, description="Course fee and trainer allowance prorated below this pax")
    min_pax_f2f: int = Field(2, ge=0)
    min_pax_rot: int = Field(1, ge=0)
    max_pax_soft: int = Field(50, ge=1, description="Maximum pax per trainer, non-technical")
    max_pax_tech: int = Field(25, ge=1, description="Maximum pax per trainer, technical")


class PublicTrainingRates(BaseModel):
    model_config = FROZEN

    full_day: float = Field(1750, ge=0, description="RM per pax per day (full day)")
    half_day: float = Field(1000, ge=0, description="RM per pax per day (half day)")
    max_pax_per_employer: int = Field(9, ge=1)


class ElearningRates(BaseModel):
    model_config = FROZEN

    hour_table: ReadOnlyDict(int, float) = Field(
        default_factory=lambda: {1: 125, 2: 250, 3: 375, 4: 500, 5: 625, 6: 750, 7: 875},
        validate_default=True,
        description="RM per pax per programme by total hours"
    )
    half_day_block_hours: int = Field(4, ge=1)
    full_day_block_hours: int = Field(7, ge=1)

    @field_validator('hour_table')
    @classmethod
    def validate_hour_table(cls, v):
        for hours, rate in v.items():
            if hours < 1 or rate < 0:
                raise ValueError("hour_table keys must be >= 1 and rates >= 0")
        return v

    @model_validator(mode='after')
    def validate_blocks_priced(self):
        if self.half_day_block_hours > self.full_day_block_hours:
            raise ValueError("half_day_block_hours cannot exceed full_day_block_hours")
        missing = [h for h in range(1, self.full_day_block_hours + 1) if h not in self.hour_table]
        if missing:
            raise ValueError(f"hour_table has no rate for hours {missing}")
        return self


class OverseasRates(BaseModel):
    model_config = FROZEN

    daily_allowance: float = Field(1500, ge=0, description="RM per pax per day")
    extra_days_max: int = Field(2, ge=0)
    assistance_rate: float = Field(0.50, ge=0, le=1)


class AllowanceRates(BaseModel):
    model_config = FROZEN

    internal_trainer_full: float = Field(1400, ge=0)
    internal_trainer_half: float = Field(800, ge=0)
    travel_under_100: float = Field(250, ge=0)
    travel_over_100: float = Field(500, ge=0)
    meal_full: float = Field(100, ge=0)
    meal_half: float = Field(50, ge=0)
    overseas_trainer: float = Field(500, ge=0)
    consumable: float = Field(100, ge=0)


class DevelopmentRates(BaseModel):
    model_config = FROZEN

    study_local: float = Field(900, ge=0, description="RM per month")
    study_overseas: float = Field(5000, ge=0, description="RM per month")
    thesis_masters: float = Field(600, ge=0, description="RM per month")
    thesis_phd: float = Field(1000, ge=0, description="RM per month")
    min_months: int = Field(3, ge=1)
    days_per_month: int = Field(30, ge=1)
    overseas_masters_phd_study_rate: float = Field(0.50, ge=0, le=1)
    overseas_fee_assistance_rate: float = Field(0.50, ge=0, le=1)


class SeminarRates(BaseModel):
    model_config = FROZEN

    min_pax_inhouse: int = Field(51, ge=0)
    min_pax_public_per_tp: int = Field(51, ge=0)
    min_speakers_half_day: int = Field(1, ge=0)
    min_speakers_full_day: int = Field(2, ge=0)
    overseas_assistance: float = Field(0.50, ge=0, le=1)


class RateTable(BaseModel):
    """All numeric ACM constants, grouped by cost category"""
    model_config = FROZEN

    inhouse: InhouseRates = Field(default_factory=InhouseRates)
    public_training: PublicTrainingRates = Field(default_factory=PublicTrainingRates)
    elearning: ElearningRates = Field(default_factory=ElearningRates)
    overseas: OverseasRates = Field(default_factory=OverseasRates)
    allowances: AllowanceRates = Field(default_factory=AllowanceRates)
    development: DevelopmentRates = Field(default_factory=DevelopmentRates)
    seminar: SeminarRates = Field(default_factory=SeminarRates)
    as_charged_estimate: float = Field(10000, ge=0, description="RM per pax per day for 'as charged' estimates")
    dev_estimate: float = Field(20000, ge=0, description="RM per pax for development programme estimates")
    audit_risk_pax: int = Field(25, ge=0, description="In-house pax above which audit documentation may be requested")


# ---------------------------------------------------------------------------
# Scheme configuration and cost matrix
# ---------------------------------------------------------------------------

class SchemeConfig(BaseModel):
    """Per-scheme eligibility metadata"""
    model_config = FROZEN

    scheme: Scheme
    label: str
    payment_flow: PaymentFlow
    trainer_requirement: TrainerRequirement = TrainerRequirement.ANY
    allowed_variants: FrozenSet[ProgrammeVariant]
    allowed_trainer_types: FrozenSet[TrainerType] = frozenset(TrainerType)
    requires_other_employers: bool = False
    note: Optional[str] = None


class CostMatrixRow(BaseModel):
    """One ACM scenario (variant set x venue x trainer) and the components it enables"""
    model_config = FROZEN

    id: str
    variants: FrozenSet[ProgrammeVariant]
    venue: Optional[Venue] = Field(None, description="None matches any venue")
    trainer: Optional[TrainerType] = Field(None, description="None matches any trainer type")
    schemes: FrozenSet[Scheme]

    course_fee: bool = True
    course_fee_basis: CourseFeeBasis = CourseFeeBasis.INHOUSE_GROUP
    trainer_allowance: bool = False
    meal_trainees: bool = False
    meal_includes_trainer: bool = False
    travel_host: bool = False
    travel_branches: bool = False
    air_host: bool = False
    air_branches: bool = False
    air_trainer: bool = False
    chartered_transport: bool = False
    consumable: bool = False
    consumable_slb_organiser_only: bool = False
    overseas_trainer_daily: bool = False
    licensed_materials: bool = False
    public_pax_cap: Optional[int] = Field(None, ge=1)
    slb_cost_mode: Optional[SlbCostMode] = None

    def matches(self, variant: ProgrammeVariant, venue: Venue, trainer: TrainerType) -> bool:
        if variant not in self.variants:
            return False
        if self.venue is not None and self.venue != venue:
            return False
        if self.trainer is not None and self.trainer != trainer:
            return False
        return True


# ---------------------------------------------------------------------------
# Documents and version stamp
# ---------------------------------------------------------------------------

class ClaimDocKey(str, Enum):
    COURSE_FEE_HCC = "course_fee_hcc"
    COURSE_FEE_OTHER = "course_fee_other"
    AIR_TICKET = "air_ticket"
    TRANSPORT = "transport"
    CONSUMABLE = "consumable"
    LICENSED_MATERIALS = "licensed_materials"
    NONE = "none"


class GrantDocument(BaseModel):
    """One grant-submission entry; a bare string is accepted as the text"""
    model_config = FROZEN

    text: str
    sub_items: Tuple[str, ...] = ()

    @model_validator(mode='before')
    @classmethod
    def accept_plain_text(cls, data):
        if isinstance(data, str):
            return {"text": data}
        return data


class DocumentTable(BaseModel):
    """
    Supporting documents.

    grant_docs lists the scheme-level grant-submission entries, emitted ahead of
    the entries driven by the programme variant and the cost items. claim_docs
    maps each claim document key to its text; "{limit}" in a text is replaced
    with the applicable RM limit.
    """
    model_config = FROZEN

    grant_docs: ReadOnlyDict(Scheme, Tuple[GrantDocument, ...]) = Field(
        default_factory=dict, validate_default=True
    )
    claim_docs: ReadOnlyDict(ClaimDocKey, str) = Field(default_factory=dict, validate_default=True)

    def claim_doc(self, key: ClaimDocKey, **placeholders: str) -> str:
        text = self.claim_docs.get(key, self.claim_docs.get(ClaimDocKey.NONE, ""))
        for name, value in placeholders.items():
            text = text.replace("{" + name + "}", value)
        return text

    def scheme_docs(self, scheme: Scheme) -> Tuple[GrantDocument, ...]:
        return self.grant_docs.get(scheme, ())


class VersionStamp(BaseModel):
    """Human-readable ACM edition information"""
    acm_guide_edition: str = Field(..., description="Edition of the ACM guide")
    acm_table_edition: str = Field(..., description="Edition of the ACM table")
    last_reviewed: date = Field(..., description="Date the encoded rules were last reviewed")
    guide_uploaded_at: Optional[str] = None
    table_uploaded_at: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "acm_guide_edition": "September 2025",
                "acm_table_edition": "November 2025",
                "last_reviewed": "2025-11-01"
            }
        }
    )


class AcmSnapshot(BaseModel):
    """Immutable, versioned bundle of everything a calculation reads"""
    model_config = FROZEN

    version: VersionStamp
    rates: RateTable
    schemes: ReadOnlyDict(Scheme, SchemeConfig)
    matrix: Tuple[CostMatrixRow, ...]
    documents: DocumentTable

    @model_validator(mode='after')
    def validate_consistency(self):
        missing = [s.value for s in Scheme if s not in self.schemes]
        if missing:
            raise ValueError(f"schemes missing configuration: {missing}")
        for variant in ProgrammeVariant:
            for venue in Venue:
                for trainer in TrainerType:
                    hits = [row.id for row in self.matrix if row.matches(variant, venue, trainer)]
                    if len(hits) > 1:
                        raise ValueError(
                            f"ambiguous cost matrix for ({variant.value}, {venue.value}, "
                            f"{trainer.value}): {hits}"
                        )
        return self

    def find_row(
        self,
        variant: ProgrammeVariant,
        venue: Venue,
        trainer: TrainerType
    ) -> Optional[CostMatrixRow]:
        """Return the first matrix row matching the triple, or None"""
        for row in self.matrix:
            if row.matches(variant, venue, trainer):
                return row
        return None

    def scheme_config(self, scheme: Scheme) -> SchemeConfig:
        return self.schemes[scheme]

    def with_overrides(
        self,
        rates: Optional[RateTable] = None,
        documents: Optional[DocumentTable] = None
    ) -> "AcmSnapshot":
        """Copy of this snapshot with a replaced rate and/or document table"""
        update = {}
        if rates is not None:
            update["rates"] = rates
        if documents is not None:
            update["documents"] = documents
        if not update:
            return self
        return self.model_copy(update=update)
