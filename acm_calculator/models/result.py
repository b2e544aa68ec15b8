"""
Pydantic models for ACM estimate results
"""
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .acm import VersionStamp
from .training import ParticipantRole


class GroupShare(BaseModel):
    """One participant group's portion of a cost item"""
    label: str = Field(..., description="Group label")
    role: Optional[ParticipantRole] = Field(None, description="Billing role; None for merged or synthetic rows")
    pax: int = Field(..., ge=0)
    amount: int = Field(..., ge=0, description="Claimable amount for this group (RM)")
    note: str = Field("", description="How the amount was derived")
    deficit: int = Field(0, ge=0, description="Portion above the ACM ceiling, funded by the employer")


class CostItem(BaseModel):
    """A single claimable cost component"""
    key: str = Field(..., description="Stable component identifier")
    label: str = Field(..., description="Display label")
    note: str = Field("", description="Explanation of the computation")
    amount: Optional[int] = Field(None, description="Claimable RM; None means actual cost with no computed ceiling")
    entitled_headcount: Optional[int] = Field(None, ge=0, description="Persons entitled (air ticket)")
    breakdown: List[GroupShare] = Field(default_factory=list, description="Per-group breakdown")
    is_estimate: bool = Field(False, description="Amount uses an 'as charged' proxy")
    deficit: int = Field(0, ge=0, description="Amount above ceiling or co-payment borne by the employer")
    required_document: str = Field("", description="Supporting document needed at claim stage")


class DocumentRequirement(BaseModel):
    """A grant-submission checklist entry"""
    text: str
    sub_items: List[str] = Field(default_factory=list)


class DocumentChecklist(BaseModel):
    grant_submission: List[DocumentRequirement] = Field(default_factory=list)


class EligibilityResult(BaseModel):
    """Complete ACM estimate for one training event"""
    items: List[CostItem] = Field(default_factory=list)
    total_claimable: int = Field(0, ge=0, description="Sum of numeric item amounts (RM)")
    total_deficit: int = Field(0, ge=0, description="Sum of employer-funded deficits (RM)")
    air_ticket_entitled: int = Field(0, ge=0)
    warnings: List[str] = Field(default_factory=list)
    document_checklist: DocumentChecklist = Field(default_factory=DocumentChecklist)
    acm_edition: str = Field("", description="ACM table edition used for this estimate")
    version: Optional[VersionStamp] = Field(None, description="Full edition stamp of the snapshot used")

    def item(self, key: str) -> Optional[CostItem]:
        """First item with the given key, or None"""
        for cost_item in self.items:
            if cost_item.key == key:
                return cost_item
        return None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [
                    {
                        "key": "course_fee",
                        "label": "B) Course Fee",
                        "note": "In-house group rate - RM10,500/group/day x 1 day(s)",
                        "amount": 10500,
                        "required_document": "Invoice issued to HRD Corp"
                    }
                ],
                "total_claimable": 10600,
                "air_ticket_entitled": 0,
                "warnings": ["Attendance must be >=75% of total training hours. Allowances are prorated by attendance."],
                "acm_edition": "November 2025"
            }
        }
    )
