"""
Grant-submission document checklist, tailored to the scheme, the programme
variant and the cost items present in a result
"""
import logging
from typing import List

from ..models.acm import ClaimDocKey
from ..models.result import CostItem, DocumentChecklist, DocumentRequirement
from ..models.training import Scheme, TrainerType
from ..utils.formatting import format_rm
from .context import CalculationContext

logger = logging.getLogger(__name__)


COURSE_FEE_KEYS = {"course_fee"}

SUBSIDIARY_LETTER_ITEMS = [
    "Name and HRD Corp Employer Code of each participating employer (if registered)",
    "Confirmation that the participating employer is a related company under the same group",
    "Course title, training date, and number of participants from each participating employer",
    "Signed by an authorised representative of the Host Company",
]

ATTENDANCE_REPORT_ITEMS = [
    "Training title (optional)",
    "Training date (mandatory)",
    "Trainee's name",
    "Precise timestamps: clock-in and clock-out times, or total duration attended",
    "Signed and declared by Training Provider and Employer, with company stamp, name, position and date",
]

SPECIAL_APPROVAL_ITEMS = [
    "i.  Licensed physical and/or digital training material",
    "ii. Any other variations requiring prior approval",
]


class DocumentService:
    """Builds the supporting-document checklist for an estimate"""

    def build_checklist(self, ctx: CalculationContext, items: List[CostItem]) -> DocumentChecklist:
        """
        Assemble grant-submission requirements

        Args:
            ctx: Calculation context of the estimate
            items: Cost items produced for the event

        Returns:
            DocumentChecklist in submission order
        """
        profile = ctx.profile
        scheme = ctx.scheme
        keys = {item.key for item in items}
        docs: List[DocumentRequirement] = []

        documents = ctx.snapshot.documents

        def add(text: str, sub_items: List[str] = None):
            docs.append(DocumentRequirement(text=text, sub_items=list(sub_items or [])))

        if profile.is_development:
            add("Complete course syllabus (if claiming by semester, attach syllabus for ALL semesters)")
        else:
            for entry in documents.scheme_docs(scheme):
                add(entry.text, entry.sub_items)

        if keys & COURSE_FEE_KEYS or profile.is_development:
            if scheme is Scheme.SLB:
                add("Invoice or quotation for course fees (ONE invoice per training course only)")
            else:
                add("Invoice or quotation for course fees")

        if profile.is_development:
            add("Confirmation letter from college / university")
            if scheme is Scheme.SBL:
                add(
                    "MQA Certificate for the course (programme must be MQA accredited, "
                    "verify at https://www2.mqa.gov.my/mqr/)"
                )

        if profile.has_other_employers and scheme in (Scheme.HCC, Scheme.SBL):
            add(
                "Letter from the Host Company confirming participating employers in the training",
                SUBSIDIARY_LETTER_ITEMS
            )

        if scheme is Scheme.SBL and ctx.trainer is not TrainerType.INTERNAL and not profile.is_development:
            add(
                "Service or sales agreement between vendor and employer, or receipt / invoice of "
                "item purchase (if vendor conducts the training)"
            )

        if profile.is_rot:
            add("System Generated Attendance Report (mandatory for Remote Online Training)", ATTENDANCE_REPORT_ITEMS)

        if profile.is_hotel and not profile.is_elearning and not profile.is_any_overseas:
            add("Invoice or quotation for chartered transportation (if any)")

        if profile.is_inhouse_family:
            if ctx.event.has_licensed_materials:
                text = "HRD Corp Special Approval Letter (REQUIRED - Licensed Training Materials selected)"
            else:
                text = "HRD Corp Special Approval Letter (if any)"
            add(text, SPECIAL_APPROVAL_ITEMS)

        if profile.is_as_charged and not profile.is_development:
            add("Acknowledgement Letter for Industry Specific or Focus Area courses (case-by-case basis)")

        # Per-item claim documents
        if "air_ticket" in keys:
            add(f"Air Ticket: {documents.claim_doc(ClaimDocKey.AIR_TICKET)}")
        if "chartered_transport" in keys:
            add(f"Chartered Transport: {documents.claim_doc(ClaimDocKey.TRANSPORT)}")
        if "consumable_materials" in keys:
            limit = format_rm(ctx.rates.allowances.consumable)
            add(f"Consumable Training Materials: {documents.claim_doc(ClaimDocKey.CONSUMABLE, limit=limit)}")
        if "licensed_materials" in keys:
            add(f"Licensed Training Materials (LTM): {documents.claim_doc(ClaimDocKey.LICENSED_MATERIALS)}")

        logger.debug(f"Document checklist built with {len(docs)} entries for {scheme.value}")
        return DocumentChecklist(grant_submission=docs)


# Global document service instance
document_service = DocumentService()
