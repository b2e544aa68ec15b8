"""
Eligibility service: estimates the claimable cost of a training event under
the current ACM snapshot
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..exceptions import BlockedError, InputValidationError
from ..models.acm import AcmSnapshot, DocumentTable, RateTable
from ..models.result import CostItem, EligibilityResult
from ..models.training import (
    CourseCategory,
    DevelopmentLevel,
    Scheme,
    StudyLocation,
    TrainerType,
    TrainingEventInput,
)
from ..utils.formatting import format_rm, percent_label, round_currency
from .context import CalculationContext, EventProfile, WarningStage
from .document_service import document_service
from .snapshot_service import snapshot_service
from .variant_handlers import handler_for

logger = logging.getLogger(__name__)


def _format_validation_errors(error: ValidationError) -> List[str]:
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "event"
        messages.append(f"{location}: {err.get('msg', 'invalid value')}")
    return messages


class EligibilityService:
    """Service for estimating ACM-claimable training costs"""

    def calculate(
        self,
        event: Union[TrainingEventInput, Dict[str, Any]],
        snapshot: Optional[AcmSnapshot] = None,
        rates: Optional[RateTable] = None,
        documents: Optional[DocumentTable] = None
    ) -> EligibilityResult:
        """
        Estimate the claimable cost of a training event

        Args:
            event: Training event, as a model or raw dictionary
            snapshot: ACM snapshot to use (defaults to the published one)
            rates: Rate table replacing the snapshot's for this call
            documents: Document table replacing the snapshot's for this call

        Returns:
            EligibilityResult with items, totals, warnings and document checklist

        Raises:
            InputValidationError: If the event is malformed
            BlockedError: If an in-house group exceeds the participant cap
        """
        event = self._parse_event(event)

        # Captured once; a concurrent publish does not affect this calculation
        snapshot = (snapshot or snapshot_service.current()).with_overrides(rates=rates, documents=documents)

        profile = EventProfile.classify(event)
        self._enforce_participant_cap(event, profile, snapshot)

        ctx = CalculationContext(event=event, snapshot=snapshot, profile=profile)
        self._scheme_warnings(ctx)
        self._threshold_warnings(ctx)

        handler = handler_for(profile.variant)
        if handler.uses_matrix:
            ctx.row = self._lookup_row(ctx)

        items = handler.compute_items(ctx)
        self._contextual_warnings(ctx, items)

        air_item = next((item for item in items if item.key == "air_ticket"), None)
        result = EligibilityResult(
            items=items,
            total_claimable=sum(item.amount for item in items if item.amount is not None),
            total_deficit=sum(item.deficit for item in items),
            air_ticket_entitled=(air_item.entitled_headcount or 0) if air_item else 0,
            warnings=ctx.warnings.ordered(),
            document_checklist=document_service.build_checklist(ctx, items),
            acm_edition=snapshot.version.acm_table_edition,
            version=snapshot.version,
        )

        logger.info(
            f"ACM estimate: {event.scheme.value}/{profile.variant.value}, {profile.total_pax} pax, "
            f"{len(items)} item(s), total {format_rm(result.total_claimable)}"
        )
        return result

    @staticmethod
    def _parse_event(event: Union[TrainingEventInput, Dict[str, Any]]) -> TrainingEventInput:
        if isinstance(event, TrainingEventInput):
            return event
        try:
            return TrainingEventInput.model_validate(event)
        except ValidationError as e:
            errors = _format_validation_errors(e)
            raise InputValidationError(f"Invalid training event: {'; '.join(errors)}", errors) from e

    @staticmethod
    def _enforce_participant_cap(
        event: TrainingEventInput,
        profile: EventProfile,
        snapshot: AcmSnapshot
    ) -> None:
        """Maximum pax per group for general in-house courses (Employer's Circular No. 3/2024)"""
        if not (profile.is_inhouse_family and profile.is_general_course):
            return
        inhouse = snapshot.rates.inhouse
        per_trainer = inhouse.max_pax_tech if profile.is_technical else inhouse.max_pax_soft
        cap = per_trainer * event.number_of_trainers
        if profile.total_pax > cap:
            category = "Technical" if profile.is_technical else "Non-Technical"
            logger.warning(
                f"Blocked ACM estimate: {profile.total_pax} pax exceeds {category} cap of {cap} "
                f"for {event.number_of_trainers} trainer(s)"
            )
            raise BlockedError(category, cap, profile.total_pax, event.number_of_trainers)

    @staticmethod
    def _lookup_row(ctx: CalculationContext):
        event = ctx.event
        row = ctx.snapshot.find_row(event.programme_variant, event.venue, event.trainer_type)
        if row is None:
            raise InputValidationError(
                f"No ACM scenario covers {event.programme_variant.value} training at "
                f"{event.venue.value} with a(n) {event.trainer_type.value} trainer"
            )
        if ctx.scheme not in row.schemes and not ctx.warnings.has_stage(WarningStage.SCHEME):
            ctx.warnings.add(
                WarningStage.SCHEME,
                f"This scenario is not claimable under {ctx.scheme.value.upper()}."
            )
        return row

    @staticmethod
    def _scheme_warnings(ctx: CalculationContext) -> None:
        config = ctx.snapshot.scheme_config(ctx.scheme)
        name = ctx.scheme.value.upper()

        if ctx.trainer not in config.allowed_trainer_types:
            ctx.warnings.add(
                WarningStage.SCHEME,
                f"{name} scheme does not support {ctx.trainer.value} trainers. "
                f"A(n) {ctx.trainer.value} trainer is not applicable under {name}."
            )

        if ctx.event.programme_variant not in config.allowed_variants:
            ctx.warnings.add(
                WarningStage.SCHEME,
                f"{config.label} does not cover the selected training type "
                f"({ctx.event.programme_variant.value}). It is not claimable under {name}."
            )

        if config.requires_other_employers and not ctx.profile.has_other_employers:
            ctx.warnings.add(
                WarningStage.SCHEME,
                f"{config.label} is joint training between employers and requires at least one "
                f"participating employer besides the host company."
            )

    @staticmethod
    def _threshold_warnings(ctx: CalculationContext) -> None:
        profile = ctx.profile
        rates = ctx.rates
        total_pax = profile.total_pax
        add = ctx.warnings.add

        if profile.is_inhouse_family and total_pax > rates.audit_risk_pax:
            add(
                WarningStage.THRESHOLD,
                f"Medium audit risk: Group size ({total_pax} pax) exceeds the standard threshold of "
                f"{rates.audit_risk_pax} pax. Ensure trainer adequacy is documented. HRD Corp may "
                f"request justification during audit."
            )

        if profile.is_inhouse_family and profile.is_general_course and total_pax < rates.inhouse.prorate_threshold:
            add(
                WarningStage.THRESHOLD,
                f"Compliance note: Less than {rates.inhouse.prorate_threshold} participants - course fee "
                f"and trainer allowance are prorated by ACM rules."
            )

        if profile.is_inhouse_family and not profile.is_rot and total_pax < rates.inhouse.min_pax_f2f:
            add(
                WarningStage.THRESHOLD,
                f"Minimum {rates.inhouse.min_pax_f2f} participants required for face-to-face in-house "
                f"training. Current group size ({total_pax} pax) does not meet the ACM eligibility threshold."
            )

        if profile.is_rot and total_pax < rates.inhouse.min_pax_rot:
            add(
                WarningStage.THRESHOLD,
                f"Minimum {rates.inhouse.min_pax_rot} participant required for ROT (Remote Online Training)."
            )

        if profile.is_seminar:
            seminar = rates.seminar
            minimum = seminar.min_speakers_half_day if profile.is_half_day else seminar.min_speakers_full_day
            if ctx.event.number_of_speakers < minimum:
                add(
                    WarningStage.THRESHOLD,
                    f"Seminar / Conference requires a minimum of {minimum} speaker(s) for a "
                    f"{'half-day' if profile.is_half_day else 'full-day'} event. "
                    f"Current: {ctx.event.number_of_speakers} speaker(s)."
                )

        if profile.is_local_seminar:
            add(
                WarningStage.THRESHOLD,
                f"Seminar / Conference eligibility requirement: The event must have a minimum of "
                f"{rates.seminar.min_pax_inhouse} total attendees (in-house) or "
                f"{rates.seminar.min_pax_public_per_tp} attendees per Training Provider (public). "
                f"HRD Corp may request attendance records during audit."
            )

        if ctx.event.course_category is CourseCategory.FOCUS_AREA:
            add(
                WarningStage.THRESHOLD,
                "Focus Area Courses cover 9 key sectors: Industry 4.0, Green Technology & Renewable "
                "Energy, Fintech, Smart Construction, Smart Farming, Aerospace, Blockchain, "
                "Micro-credential and Future Technology. Costs are \"as charged\" and quoted on a "
                "per-pax basis, prorated by attendance completion."
            )

        if ctx.event.has_licensed_materials and not profile.is_inhouse_family:
            add(
                WarningStage.THRESHOLD,
                "Licensed Training Materials (LTM) are only eligible for in-house training programmes "
                "and are not included in this estimate."
            )

        if profile.is_development:
            dev = ctx.event.development
            dev_rates = rates.development
            if dev.months < dev_rates.min_months:
                add(
                    WarningStage.THRESHOLD,
                    f"Minimum course duration for Development Programmes is {dev_rates.min_months} months "
                    f"({dev_rates.min_months * dev_rates.days_per_month} training days). Current input: "
                    f"{dev.months} month(s) = {dev.months * dev_rates.days_per_month} days - does not "
                    f"meet the ACM eligibility threshold."
                )
            if dev.level is DevelopmentLevel.SKM:
                add(
                    WarningStage.THRESHOLD,
                    f"Sijil Kemahiran Malaysia (SKM) has 5 levels (selected: SKM Level {dev.skm_level}). "
                    f"Courses are offered by technical and vocational institutions accredited by the "
                    f"Department of Skills Development (JPK), Ministry of Human Resources."
                )

    @staticmethod
    def _contextual_warnings(ctx: CalculationContext, items: List[CostItem]) -> None:
        profile = ctx.profile
        rates = ctx.rates
        add = ctx.warnings.add

        if any(item.is_estimate for item in items):
            if profile.is_development:
                proxy = f"{format_rm(rates.dev_estimate)}/pax"
            else:
                proxy = f"{format_rm(rates.as_charged_estimate)}/pax/day"
            add(
                WarningStage.ESTIMATE,
                f"Items marked as estimates use {proxy} as proxy for \"as charged\" fees. "
                f"The actual invoice determines the final claimable amount."
            )

        if (
            profile.is_inhouse_family
            and profile.has_other_employers
            and profile.is_general_course
            and ctx.scheme is not Scheme.SLB
            and ctx.trainer is not TrainerType.INTERNAL
        ):
            rate = rates.public_training.half_day if profile.is_half_day else rates.public_training.full_day
            add(
                WarningStage.COST_SHARING,
                f"{profile.other_employer_count} participating employer(s) involved - public rate "
                f"({format_rm(rate)}/pax/day) applied. Cost shared between Host Company + Branches and "
                f"each participating employer based on pax."
            )

        if profile.has_other_employers:
            add(
                WarningStage.COST_SHARING,
                "Participating employers: travel allowance and air ticket entitlement above include "
                "their staff; meal allowance covers host company staff only."
            )

        if ctx.scheme is Scheme.SLB and profile.is_inhouse_family and profile.is_general_course:
            rate = rates.inhouse.half_day if profile.is_half_day else rates.inhouse.full_day
            per_pax = round_currency(rate / (profile.total_pax or 1))
            add(
                WarningStage.COST_SHARING,
                f"SLB - Cost Sharing: In-house group rate ({format_rm(rate)}/day) is divided equally across "
                f"all {profile.total_pax} participants = {format_rm(per_pax)}/pax/day. Each employer pays "
                f"only for their own participants."
            )

        if profile.is_development:
            EligibilityService._development_notes(ctx)

        if profile.is_any_overseas:
            add(
                WarningStage.COST_SHARING,
                f"Overseas training/seminar: {percent_label(rates.overseas.assistance_rate)} financial "
                f"assistance rate applies on course fee, daily allowance, and air ticket."
            )

        if profile.is_rot:
            add(
                WarningStage.REMOTE,
                "ROT (Remote Online Training): Air ticket is NOT claimable. Travel allowance IS claimable "
                "(own premise: branch and participating employer trainees only; external venue: all "
                "trainees). Chartered transport IS claimable at external venues."
            )

        if any(item.key == "air_ticket" for item in items):
            add(
                WarningStage.DOCUMENTS,
                "Air ticket (actual cost) must be supported by ticket stub / e-Ticket and travel agent invoice."
            )

        add(
            WarningStage.ATTENDANCE,
            "Attendance must be >=75% of total training hours. Allowances are prorated by attendance."
        )

    @staticmethod
    def _development_notes(ctx: CalculationContext) -> None:
        dev_rates = ctx.rates.development
        overseas = ctx.event.development.location is StudyLocation.OVERSEAS
        study_rate = dev_rates.study_overseas if overseas else dev_rates.study_local

        if ctx.scheme is Scheme.HCC:
            ctx.warnings.add(
                WarningStage.COST_SHARING,
                "HCC - Development Programme Notes: All modules must be registered with HRD Corp. "
                "Can be claimed on a modular, semester, or whole duration basis."
            )
        elif ctx.scheme is Scheme.SBL:
            ctx.warnings.add(
                WarningStage.COST_SHARING,
                "SBL - Development Programme Notes: Course must be locally or overseas accredited "
                "(cross-check MQA accreditation at https://www2.mqa.gov.my/mqr/). Can be claimed on a "
                "modular, semester, or whole duration basis."
            )

        ctx.warnings.add(
            WarningStage.COST_SHARING,
            f"Development Programme - Key Rules: minimum {dev_rates.min_months} months "
            f"(1 month = {dev_rates.days_per_month} training days). Course fees are claimable as per "
            f"quotation and must be entirely borne by the employer. Study allowance "
            f"({format_rm(study_rate)}/month) is for full-time students only. Overseas Masters/PhD: "
            f"100% course fees, {percent_label(dev_rates.overseas_masters_phd_study_rate)} study "
            f"allowance and airfare."
        )


# Global eligibility service instance
eligibility_service = EligibilityService()
