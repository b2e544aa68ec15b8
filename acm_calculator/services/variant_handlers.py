"""
Programme variant handlers.

Every ProgrammeVariant maps to exactly one handler. Generic scenarios
(in-house family, public, ROT public) are driven by the cost-matrix row found
for the event; irregular variants have dedicated handlers.
"""
from typing import Dict, List, Optional

from ..models.acm import CourseFeeBasis
from ..models.result import CostItem
from ..models.training import ProgrammeVariant
from . import cost_components as components
from .context import CalculationContext


class VariantHandler:
    """Computes the ordered cost items for one family of programme variants"""

    # Whether the handler reads ctx.row; matrix lookup is skipped otherwise
    uses_matrix = False

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        raise NotImplementedError

    @staticmethod
    def _collect(*items: Optional[CostItem]) -> List[CostItem]:
        return [item for item in items if item is not None]


class MatrixScenarioHandler(VariantHandler):
    """In-house family, public and ROT public: components gated by the matrix row flags"""

    uses_matrix = True

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        row = ctx.row
        return self._collect(
            components.trainer_allowance(ctx) if row.trainer_allowance else None,
            self._course_fee(ctx) if row.course_fee else None,
            components.meal_allowance(ctx, row.meal_includes_trainer) if row.meal_trainees else None,
            components.travel_allowance(ctx, row.travel_host, row.travel_branches),
            components.overseas_trainer_allowance(ctx) if row.overseas_trainer_daily else None,
            components.air_ticket(ctx, row.air_host, row.air_branches, row.air_trainer),
            components.chartered_transport(ctx) if row.chartered_transport else None,
            components.consumable_materials(ctx, row.consumable_slb_organiser_only) if row.consumable else None,
            components.licensed_materials(ctx) if row.licensed_materials else None,
        )

    @staticmethod
    def _course_fee(ctx: CalculationContext) -> Optional[CostItem]:
        row = ctx.row
        if row.course_fee_basis is CourseFeeBasis.PUBLIC_PER_HEAD:
            if not ctx.profile.is_general_course:
                return components.as_charged_course_fee(ctx)
            return components.public_per_head_fee(ctx, ctx.employer_units(), cap=row.public_pax_cap)
        return components.inhouse_course_fee(ctx)


class LocalSeminarHandler(VariantHandler):
    """Local seminar / conference: public per-head rate without a pax cap, everyone travels"""

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        if ctx.profile.is_general_course:
            course_fee = components.public_per_head_fee(ctx, ctx.employer_units(), cap=None)
        else:
            course_fee = components.as_charged_course_fee(ctx)
        return self._collect(
            course_fee,
            components.travel_allowance(ctx, include_host=True, include_visitors=True),
            components.air_ticket(ctx, include_host=True, include_visitors=True, include_trainer=False),
            components.chartered_transport(ctx),
        )


class OverseasHandler(VariantHandler):
    """Overseas training and overseas seminar: 50% co-assistance on fee, daily allowance and airfare"""

    def __init__(self, seminar: bool):
        self.seminar = seminar

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        return self._collect(
            components.overseas_course_fee(ctx, seminar=self.seminar),
            components.air_ticket(ctx, include_host=True, include_visitors=True, include_trainer=False),
            components.chartered_transport(ctx),
            components.overseas_daily_allowance(ctx, capped=not self.seminar),
        )


class ElearningHandler(VariantHandler):
    """E-learning and mobile e-learning: hour-table course fee only"""

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        return [components.elearning_course_fee(ctx)]


class DevelopmentHandler(VariantHandler):
    """Development programmes: course fee plus monthly study and thesis allowances"""

    def compute_items(self, ctx: CalculationContext) -> List[CostItem]:
        return self._collect(
            components.development_course_fee(ctx),
            components.chartered_transport(ctx),
            components.study_allowance(ctx),
            components.thesis_allowance(ctx),
            components.development_air_ticket(ctx),
        )


_matrix = MatrixScenarioHandler()
_elearning = ElearningHandler()

HANDLERS: Dict[ProgrammeVariant, VariantHandler] = {
    ProgrammeVariant.INHOUSE: _matrix,
    ProgrammeVariant.ROT_INHOUSE: _matrix,
    ProgrammeVariant.COACHING_MENTORING: _matrix,
    ProgrammeVariant.PUBLIC: _matrix,
    ProgrammeVariant.ROT_PUBLIC: _matrix,
    ProgrammeVariant.SEMINAR_CONFERENCE: LocalSeminarHandler(),
    ProgrammeVariant.OVERSEAS_SEMINAR: OverseasHandler(seminar=True),
    ProgrammeVariant.OVERSEAS: OverseasHandler(seminar=False),
    ProgrammeVariant.ELEARNING: _elearning,
    ProgrammeVariant.MOBILE_ELEARNING: _elearning,
    ProgrammeVariant.DEVELOPMENT: DevelopmentHandler(),
}

_unhandled = set(ProgrammeVariant) - set(HANDLERS)
if _unhandled:
    raise RuntimeError(f"No cost handler registered for {sorted(v.value for v in _unhandled)}")


def handler_for(variant: ProgrammeVariant) -> VariantHandler:
    return HANDLERS[variant]
