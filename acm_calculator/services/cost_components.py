"""
ACM cost components.

Each function computes one claimable component from a CalculationContext and
returns a CostItem, or None when the component does not apply. Gating by
scenario (matrix row flags or dedicated variant handlers) happens in the
caller; the functions only check conditions intrinsic to the component.
"""
import logging
from typing import List, Optional, Tuple

from ..models.acm import ClaimDocKey, SlbCostMode
from ..models.result import CostItem, GroupShare
from ..models.training import (
    DevelopmentLevel,
    DistanceTier,
    Participant,
    ParticipantRole,
    Scheme,
    StudyLocation,
    TrainerType,
)
from ..utils.formatting import days_label, format_rm, percent_label, round_currency
from .context import CalculationContext, WarningStage

logger = logging.getLogger(__name__)

VISITOR_ROLES = (ParticipantRole.BRANCH, ParticipantRole.OTHER_EMPLOYER)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def prorate(rate: float, pax: int, threshold: int) -> float:
    """Group rate scaled linearly below the prorate threshold"""
    if pax < threshold:
        return rate * pax / threshold
    return rate


def _inhouse_rate(ctx: CalculationContext) -> float:
    rates = ctx.rates.inhouse
    return rates.half_day if ctx.profile.is_half_day else rates.full_day


def _public_rate(ctx: CalculationContext) -> float:
    rates = ctx.rates.public_training
    return rates.half_day if ctx.profile.is_half_day else rates.full_day


def _prorate_suffix(ctx: CalculationContext) -> str:
    threshold = ctx.rates.inhouse.prorate_threshold
    if ctx.profile.total_pax < threshold:
        return f" (prorated - less than {threshold} pax)"
    return ""


def _ceiling_note(prefix: str, ceiling_text: str, claim: int, deficit: int) -> str:
    note = f"{prefix} - ACM ceiling {ceiling_text}"
    if deficit > 0:
        return (
            f"{note} - ceiling applied - HRD Corp pays {format_rm(claim)} / "
            f"Deficit {format_rm(deficit)} to be funded from employer's own budget"
        )
    return f"{note} - within ceiling - HRD Corp pays {format_rm(claim)}"


def _sum_shares(shares: List[GroupShare]) -> Tuple[int, int]:
    return sum(s.amount for s in shares), sum(s.deficit for s in shares)


# ---------------------------------------------------------------------------
# A) Internal trainer allowance
# ---------------------------------------------------------------------------

def trainer_allowance(ctx: CalculationContext) -> Optional[CostItem]:
    if ctx.trainer is not TrainerType.INTERNAL:
        return None
    allowances = ctx.rates.allowances
    rate = allowances.internal_trainer_half if ctx.profile.is_half_day else allowances.internal_trainer_full
    day_rate = prorate(rate, ctx.profile.total_pax, ctx.rates.inhouse.prorate_threshold)
    return CostItem(
        key="trainer_allowance",
        label="A) Internal Trainer Allowance",
        amount=round_currency(day_rate * ctx.days),
        note=f"{format_rm(rate)}/day/group x {days_label(ctx.days)}" + _prorate_suffix(ctx),
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


# ---------------------------------------------------------------------------
# B) Course fee
# ---------------------------------------------------------------------------

def inhouse_course_fee(ctx: CalculationContext) -> Optional[CostItem]:
    """Course fee for in-house family scenarios; an internal trainer claims A) instead"""
    if ctx.trainer is TrainerType.INTERNAL:
        return None
    if not ctx.profile.is_general_course:
        return as_charged_course_fee(ctx)
    if ctx.scheme is Scheme.SLB and ctx.row is not None and ctx.row.slb_cost_mode is SlbCostMode.GROUP_RATE_DIVIDED_BY_TOTAL_PAX:
        if ctx.profile.has_actual_fee:
            return slb_shared_actual_fee(ctx)
        return slb_shared_group_fee(ctx)
    if ctx.profile.has_other_employers:
        return public_per_head_fee(ctx, ctx.employer_units(), cap=None)
    return inhouse_group_fee(ctx)


def inhouse_group_fee(ctx: CalculationContext) -> CostItem:
    """Flat in-house group rate, prorated below the threshold, with actual-fee override"""
    profile = ctx.profile
    rate = _inhouse_rate(ctx)
    ceiling = round_currency(prorate(rate, profile.total_pax, ctx.rates.inhouse.prorate_threshold) * ctx.days)

    if profile.has_actual_fee:
        actual = ctx.event.actual_fee_per_head
        total_actual = round_currency(actual * profile.total_pax)
        claim = min(total_actual, ceiling)
        deficit = max(0, total_actual - ceiling)
        note = _ceiling_note(
            f"Actual {format_rm(actual)}/pax x {profile.total_pax} pax = {format_rm(total_actual)}",
            format_rm(ceiling), claim, deficit
        )
    else:
        claim, deficit = ceiling, 0
        note = (
            f"In-house group rate - {format_rm(rate)}/group/day x {days_label(ctx.days)}"
            + _prorate_suffix(ctx)
        )

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=claim,
        deficit=deficit,
        note=note,
        required_document=ctx.course_fee_doc,
    )


def slb_shared_group_fee(ctx: CalculationContext) -> CostItem:
    """SLB: group rate divided by total pax, each group billed for its own heads"""
    total_pax = ctx.profile.total_pax
    rate = _inhouse_rate(ctx)
    per_pax_rate = rate / total_pax if total_pax > 0 else rate

    shares = []
    for group in ctx.groups():
        shares.append(GroupShare(
            label=group.label,
            role=group.role,
            pax=group.pax,
            amount=round_currency(per_pax_rate * group.pax * ctx.days),
            note=(
                f"{format_rm(rate)}/day / {total_pax} pax x {group.pax} pax x "
                f"{days_label(ctx.days)}"
            ),
        ))
    amount, _ = _sum_shares(shares)

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=amount,
        note=(
            f"SLB - Group rate {format_rm(rate)}/day / {total_pax} pax = "
            f"{format_rm(round_currency(per_pax_rate))}/pax/day (shared proportionally per employer)"
        ),
        breakdown=shares,
        required_document=ctx.course_fee_doc,
    )


def slb_shared_actual_fee(ctx: CalculationContext) -> CostItem:
    """SLB with an actual fee: claim capped at the group ceiling, shared pro rata by pax"""
    total_pax = ctx.profile.total_pax
    actual = ctx.event.actual_fee_per_head
    rate = _inhouse_rate(ctx)
    ceiling = round_currency(prorate(rate, total_pax, ctx.rates.inhouse.prorate_threshold) * ctx.days)
    total_actual = round_currency(actual * total_pax)
    claim_total = min(total_actual, ceiling)
    deficit_total = max(0, total_actual - ceiling)

    shares = []
    for group in ctx.groups():
        share = round_currency(claim_total * group.pax / total_pax)
        shares.append(GroupShare(
            label=group.label,
            role=group.role,
            pax=group.pax,
            amount=share,
            deficit=round_currency(deficit_total * group.pax / total_pax),
            note=(
                f"Actual {format_rm(actual)}/pax x {group.pax} pax"
                + (" [ACM ceiling applied]" if deficit_total > 0 else "")
            ),
        ))
    amount, deficit = _sum_shares(shares)

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=amount,
        deficit=deficit,
        note=_ceiling_note(
            f"Actual {format_rm(actual)}/pax x {total_pax} pax = {format_rm(total_actual)}",
            format_rm(ceiling), claim_total, deficit_total
        ) + " (shared proportionally per employer)",
        breakdown=shares,
        required_document=ctx.course_fee_doc,
    )


def public_per_head_fee(
    ctx: CalculationContext,
    units: List[Participant],
    cap: Optional[int]
) -> CostItem:
    """
    Per-head public rate billed per employer unit, with actual-fee override

    Args:
        ctx: Calculation context
        units: Billing units (see CalculationContext.employer_units)
        cap: Maximum eligible pax per unit, None for no cap

    Returns:
        Course fee item
    """
    sys_rate = _public_rate(ctx)
    ceiling_per_pax = sys_rate * ctx.days
    has_actual = ctx.profile.has_actual_fee
    actual = ctx.event.actual_fee_per_head
    claim_per_pax = min(actual, ceiling_per_pax) if has_actual else ceiling_per_pax
    deficit_per_pax = max(0, actual - ceiling_per_pax) if has_actual else 0

    shares = []
    eligible_total = 0
    for unit in units:
        eligible = min(unit.pax, cap) if cap is not None else unit.pax
        excess = unit.pax - eligible
        eligible_total += eligible
        if excess > 0:
            ctx.warnings.add(
                WarningStage.CAP,
                f"Pax cap applied: Only {eligible} of {unit.pax} pax from {unit.label} are eligible "
                f"for financial assistance (maximum {cap} pax per employer). "
                f"The remaining {excess} pax must be self-funded by the employer."
            )
        share = round_currency(claim_per_pax * eligible)
        unit_deficit = round_currency(deficit_per_pax * eligible)
        note = (
            f"{format_rm(round_currency(claim_per_pax / ctx.days))}/pax/day x {eligible} pax x "
            f"{days_label(ctx.days)}"
        )
        if unit_deficit > 0:
            note += (
                f" - HRD Corp pays {format_rm(share)} / Deficit {format_rm(unit_deficit)} "
                f"to be funded from employer's own budget"
            )
        shares.append(GroupShare(
            label=unit.label,
            role=unit.role,
            pax=eligible,
            amount=share,
            deficit=unit_deficit,
            note=note,
        ))
    amount, deficit = _sum_shares(shares)

    if has_actual:
        note = _ceiling_note(f"Actual {format_rm(actual)}/pax", f"{format_rm(ceiling_per_pax)}/pax", amount, deficit)
    elif len(units) > 1:
        note = f"Public rate - shared by {len(units)} companies ({format_rm(sys_rate)}/pax/day)"
    else:
        note = f"ACM rate: {format_rm(sys_rate)}/pax/day x {eligible_total} pax x {days_label(ctx.days)}"

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=amount,
        deficit=deficit,
        note=note,
        breakdown=shares,
        required_document=ctx.course_fee_doc,
    )


def as_charged_course_fee(ctx: CalculationContext) -> CostItem:
    """Focus area / industry specific / certification: actual fee or per-head estimate"""
    has_actual = ctx.profile.has_actual_fee
    actual = ctx.event.actual_fee_per_head
    estimate = ctx.rates.as_charged_estimate
    per_pax = actual if has_actual else estimate * ctx.days
    category = ctx.event.course_category.label

    shares = []
    for group in ctx.groups():
        if has_actual:
            note = f"Actual {format_rm(actual)}/pax x {group.pax} pax"
        else:
            note = f"{format_rm(estimate)}/pax/day x {group.pax} pax x {days_label(ctx.days)} (est.)"
        shares.append(GroupShare(
            label=group.label,
            role=group.role,
            pax=group.pax,
            amount=round_currency(per_pax * group.pax),
            note=note,
        ))
    amount, _ = _sum_shares(shares)

    if has_actual:
        note = f"{category} - actual {format_rm(actual)}/pax x {ctx.profile.total_pax} pax"
    else:
        note = f"{category} - estimated at {format_rm(estimate)}/pax/day (actual invoice as charged)"

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=amount,
        note=note,
        breakdown=shares,
        is_estimate=not has_actual,
        required_document=ctx.course_fee_doc,
    )


def elearning_rate_per_pax(hours: int, ctx: CalculationContext) -> Tuple[float, List[str]]:
    """
    Per-pax e-learning fee for a programme of the given hours

    Up to a full-day block of hours is read from the hour table. Beyond that,
    each remaining chunk of at most a half-day block is priced as a half-day
    block; a longer remainder consumes a full-day block at the full-day price.
    """
    table = ctx.rates.elearning.hour_table
    full_block = ctx.rates.elearning.full_day_block_hours
    half_block = ctx.rates.elearning.half_day_block_hours

    first = min(hours, full_block)
    rate = table[first]
    blocks = [f"{first}hr = {format_rm(table[first])}"]
    remaining = hours - first

    while remaining > 0:
        if remaining <= half_block:
            rate += table[half_block]
            blocks.append(f"+{remaining}hr [half-day block] = {format_rm(table[half_block])}")
            remaining = 0
        else:
            block = min(remaining, full_block)
            rate += table[full_block]
            blocks.append(f"+{block}hr [full-day block] = {format_rm(table[full_block])}")
            remaining -= block

    return rate, blocks


def elearning_course_fee(ctx: CalculationContext) -> CostItem:
    rate, blocks = elearning_rate_per_pax(ctx.event.elearning_hours, ctx)
    shares = [
        GroupShare(
            label=g.label,
            role=g.role,
            pax=g.pax,
            amount=round_currency(rate * g.pax),
            note=f"{format_rm(rate)}/pax x {g.pax} pax",
        )
        for g in ctx.groups()
    ]
    return CostItem(
        key="course_fee",
        label="B) Course Fee (E-Learning)",
        amount=round_currency(rate * ctx.profile.total_pax),
        note=f"{' | '.join(blocks)} - {format_rm(rate)}/pax x {ctx.profile.total_pax} pax",
        breakdown=shares,
        required_document=ctx.course_fee_doc,
    )


def overseas_eligible_pax(ctx: CalculationContext, capped: bool) -> int:
    """Heads eligible for overseas assistance; capped per employer for overseas training"""
    if not capped:
        return ctx.profile.total_pax
    cap = ctx.rates.public_training.max_pax_per_employer
    return sum(min(unit.pax, cap) for unit in ctx.employer_units())


def overseas_course_fee(ctx: CalculationContext, seminar: bool) -> CostItem:
    """As-charged or actual fee per head x co-assistance rate; remainder is employer co-payment"""
    total_pax = ctx.profile.total_pax
    eligible = overseas_eligible_pax(ctx, capped=not seminar)
    excess = total_pax - eligible
    if excess > 0:
        cap = ctx.rates.public_training.max_pax_per_employer
        ctx.warnings.add(
            WarningStage.CAP,
            f"Overseas training pax cap: Only {eligible} of {total_pax} pax are eligible for financial "
            f"assistance (maximum {cap} pax per employer). The remaining {excess} pax must be "
            f"self-funded by the employer."
        )

    has_actual = ctx.profile.has_actual_fee
    assistance = ctx.rates.seminar.overseas_assistance if seminar else ctx.rates.overseas.assistance_rate
    base_per_pax = ctx.event.actual_fee_per_head if has_actual else ctx.rates.as_charged_estimate * ctx.days
    total_actual = base_per_pax * eligible
    claimable = round_currency(total_actual * assistance)
    co_payment = round_currency(total_actual) - claimable
    pct = percent_label(assistance)

    if has_actual:
        note = (
            f"Actual {format_rm(base_per_pax)}/pax x {eligible} pax = {format_rm(round_currency(total_actual))} - "
            f"{pct} assistance = {format_rm(claimable)} / Co-payment {format_rm(co_payment)} "
            f"to be funded from employer's own budget"
        )
    else:
        note = (
            f"As charged (est. {format_rm(base_per_pax)}/pax) x {eligible} pax - {pct} assistance = "
            f"{format_rm(claimable)} / employer co-pays the remainder"
        )

    return CostItem(
        key="course_fee",
        label="Seminar / Conference Fee (Overseas)" if seminar else "B) Course Fee (Overseas)",
        amount=claimable,
        deficit=max(0, co_payment),
        note=note,
        is_estimate=not has_actual,
        required_document=ctx.course_fee_doc,
    )


def development_course_fee(ctx: CalculationContext) -> CostItem:
    dev = ctx.event.development
    dev_rates = ctx.rates.development
    overseas = dev.location is StudyLocation.OVERSEAS
    total_pax = ctx.profile.total_pax

    if not overseas:
        assistance, basis = 1.0, "100% (local)"
    elif dev.level.is_postgraduate:
        assistance, basis = 1.0, "100% (overseas Masters/PhD)"
    elif dev.private_institution:
        assistance, basis = 1.0, "100% (overseas - private higher education institution)"
    else:
        assistance = dev_rates.overseas_fee_assistance_rate
        basis = f"{percent_label(assistance)} (overseas)"

    has_actual = ctx.profile.has_actual_fee
    base_per_pax = ctx.event.actual_fee_per_head if has_actual else ctx.rates.dev_estimate
    total_fee = base_per_pax * total_pax
    claimable = round_currency(total_fee * assistance)
    co_payment = round_currency(total_fee) - claimable

    note = (
        f"{dev.level.label} - "
        + (f"actual {format_rm(base_per_pax)}/pax" if has_actual else f"est. {format_rm(base_per_pax)}/pax")
        + f" x {total_pax} pax x {basis}"
        + (" (convert fees to RM at time of claim)" if overseas else "")
        + " - includes registration & examination fees"
    )
    if co_payment > 0:
        note += (
            f" / Co-payment {format_rm(co_payment)} not covered by HRD Corp, "
            f"to be funded from employer's own budget"
        )

    return CostItem(
        key="course_fee",
        label="B) Course Fee",
        amount=claimable,
        deficit=max(0, co_payment),
        note=note,
        is_estimate=not has_actual,
        required_document=ctx.course_fee_doc,
    )


# ---------------------------------------------------------------------------
# C) Travel, D) Meal, E) Overseas trainer
# ---------------------------------------------------------------------------

def _travel_rate(ctx: CalculationContext, distance: DistanceTier) -> float:
    allowances = ctx.rates.allowances
    return allowances.travel_over_100 if distance is DistanceTier.OVER_100 else allowances.travel_under_100


def _travel_days(ctx: CalculationContext, distance: DistanceTier) -> int:
    # +1 travel day for staff >= 100km on full-day training
    if distance is DistanceTier.OVER_100 and not ctx.profile.is_half_day:
        return ctx.days + 1
    return ctx.days


def travel_allowance(ctx: CalculationContext, include_host: bool, include_visitors: bool) -> Optional[CostItem]:
    roles = []
    if include_host:
        roles.append(ParticipantRole.HOST)
    if include_visitors:
        roles.extend(VISITOR_ROLES)
    if not roles:
        return None

    shares = []
    for group in ctx.groups(*roles):
        rate = _travel_rate(ctx, group.distance)
        travel_days = _travel_days(ctx, group.distance)
        shares.append(GroupShare(
            label=group.label,
            role=group.role,
            pax=group.pax,
            amount=round_currency(rate * group.pax * travel_days),
            note=(
                f"{format_rm(rate)}/pax/day x {group.pax} pax x {days_label(travel_days)} "
                f"({group.distance.label})"
                + (" [+1 extra travel day for >=100km]" if travel_days > ctx.days else "")
            ),
        ))
    amount, _ = _sum_shares(shares)
    if amount <= 0:
        return None

    note = (
        "All participants travel to external venue" if include_host
        else "Branch / participating employer staff travelling to training venue"
    )
    return CostItem(
        key="travel_allowance",
        label="C) Travel Allowance",
        amount=amount,
        note=note,
        breakdown=shares,
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


def meal_allowance(ctx: CalculationContext, include_trainer: bool) -> Optional[CostItem]:
    """Host trainees at own premises; +1 for an on-site internal trainer who is not from a branch"""
    allowances = ctx.rates.allowances
    meal_rate = allowances.meal_half if ctx.profile.is_half_day else allowances.meal_full
    trainer_bonus = 1 if (
        include_trainer
        and ctx.trainer is TrainerType.INTERNAL
        and not ctx.event.trainer_from_branch
        and not ctx.profile.is_rot
    ) else 0
    host_pax = ctx.profile.host_pax
    meal_pax = host_pax + trainer_bonus
    if meal_pax <= 0:
        return None

    host = ctx.participants[0]
    amount = round_currency(meal_rate * meal_pax * ctx.days)
    half_day = " (half-day rate)" if ctx.profile.is_half_day else ""
    share = GroupShare(
        label=host.label + (" + Internal Trainer" if trainer_bonus else ""),
        role=ParticipantRole.HOST,
        pax=meal_pax,
        amount=amount,
        note=(
            f"{format_rm(meal_rate)}/pax/day x {meal_pax} pax"
            + (f" ({host_pax} staff + 1 trainer)" if trainer_bonus else "")
            + f" x {days_label(ctx.days)}"
        ),
    )
    return CostItem(
        key="meal_allowance",
        label="D) Meal Allowance",
        amount=amount,
        note=f"{format_rm(meal_rate)}/pax/day - host company staff at employer premises{half_day}",
        breakdown=[share],
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


def overseas_trainer_allowance(ctx: CalculationContext) -> Optional[CostItem]:
    if ctx.trainer is not TrainerType.OVERSEAS:
        return None
    rate = ctx.rates.allowances.overseas_trainer
    trainers = ctx.event.number_of_trainers
    return CostItem(
        key="overseas_trainer_allowance",
        label="E) Overseas Trainer Daily Allowance",
        amount=round_currency(rate * trainers * ctx.days),
        note=f"{format_rm(rate)}/trainer/day x {trainers} trainer(s) x {days_label(ctx.days)}",
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


def overseas_daily_allowance(ctx: CalculationContext, capped: bool) -> CostItem:
    """Daily allowance for trainees abroad over training plus extra travel days"""
    overseas = ctx.rates.overseas
    extra = min(overseas.extra_days_max, ctx.event.extra_days)
    total_days = ctx.days + extra
    eligible = overseas_eligible_pax(ctx, capped=capped)
    claimable = round_currency(overseas.daily_allowance * eligible * total_days * overseas.assistance_rate)
    return CostItem(
        key="overseas_daily_allowance",
        label="Overseas Daily Allowance",
        amount=claimable,
        note=(
            f"{format_rm(overseas.daily_allowance)}/pax/day x {eligible} pax x {days_label(total_days)} "
            f"({ctx.days} training + {extra} travel) - {percent_label(overseas.assistance_rate)} "
            f"assistance = {format_rm(claimable)}"
        ),
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


# ---------------------------------------------------------------------------
# G) Air ticket, H) Chartered transport
# ---------------------------------------------------------------------------

def air_ticket_entitlement(
    ctx: CalculationContext,
    include_host: bool,
    include_visitors: bool,
    include_trainer: bool
) -> Tuple[int, List[str]]:
    """Count persons entitled to an air ticket and describe where they come from"""
    count = 0
    sources = []

    if include_visitors:
        for group in ctx.groups(*VISITOR_ROLES):
            count += group.pax
            sources.append(f"{group.label}: {group.pax} pax")

    if include_host and ctx.profile.host_pax > 0:
        count += ctx.profile.host_pax
        sources.append(f"{ctx.participants[0].label}: {ctx.profile.host_pax} pax")

    if include_trainer:
        visitors_present = ctx.profile.branch_pax + ctx.profile.other_pax > 0
        if ctx.trainer is TrainerType.EXTERNAL and (ctx.profile.is_hotel or visitors_present):
            count += 1
            sources.append("External trainer: 1")
        elif ctx.trainer is TrainerType.OVERSEAS:
            count += 1
            sources.append("Overseas trainer: 1")
        elif ctx.trainer is TrainerType.INTERNAL and ctx.event.trainer_from_branch:
            count += 1
            sources.append("Internal trainer (from branch): 1")

    return count, sources


def air_ticket(
    ctx: CalculationContext,
    include_host: bool,
    include_visitors: bool,
    include_trainer: bool
) -> Optional[CostItem]:
    # Trainer delivers online for ROT; nobody flies for e-learning
    if ctx.profile.is_elearning or ctx.profile.is_rot:
        return None
    count, sources = air_ticket_entitlement(ctx, include_host, include_visitors, include_trainer)
    if count <= 0:
        return None
    assistance = ""
    if ctx.profile.is_any_overseas:
        assistance = f" x {percent_label(ctx.rates.overseas.assistance_rate)} assistance"
    return CostItem(
        key="air_ticket",
        label="G) Air Ticket",
        amount=None,
        entitled_headcount=count,
        note=f"{count} person(s) entitled - actual airfare cost{assistance} ({', '.join(sources)})",
        required_document=ctx.claim_doc(ClaimDocKey.AIR_TICKET),
    )


def chartered_transport(ctx: CalculationContext) -> Optional[CostItem]:
    if ctx.profile.is_elearning or not ctx.profile.is_hotel:
        return None
    return CostItem(
        key="chartered_transport",
        label="H) Chartered Transportation",
        amount=None,
        note="As per quotation",
        required_document=ctx.claim_doc(ClaimDocKey.TRANSPORT),
    )


# ---------------------------------------------------------------------------
# I) Consumables, LTM, development allowances
# ---------------------------------------------------------------------------

def consumable_materials(ctx: CalculationContext, slb_organiser_only: bool) -> CostItem:
    amount = ctx.rates.allowances.consumable
    if ctx.scheme is Scheme.SLB and slb_organiser_only:
        note = f"{format_rm(amount)}/group - SLB: only the organising employer may claim consumable materials"
        ctx.warnings.add(
            WarningStage.COST_SHARING,
            "SLB - Consumable Materials: Only the organising employer may claim consumable/printed "
            "materials. Other participating employers are not entitled to claim this item."
        )
    else:
        note = f"{format_rm(amount)}/group (no receipt needed up to this amount)"
    return CostItem(
        key="consumable_materials",
        label="I) Consumable Training Materials",
        amount=round_currency(amount),
        note=note,
        required_document=ctx.claim_doc(ClaimDocKey.CONSUMABLE, limit=format_rm(amount)),
    )


def licensed_materials(ctx: CalculationContext) -> Optional[CostItem]:
    if not ctx.event.has_licensed_materials:
        return None
    cost = ctx.event.ltm_actual_cost
    ctx.warnings.add(
        WarningStage.DOCUMENTS,
        "Licensed Training Materials (LTM): Pre-approval from HRD Corp is required. Submit the "
        "Special Approval Letter together with your grant application. LTM is only eligible for "
        "in-house training programmes."
    )
    if cost > 0:
        return CostItem(
            key="licensed_materials",
            label="LTM) Licensed Training Materials",
            amount=round_currency(cost),
            note=f"Actual cost {format_rm(cost)} - requires HRD Corp Special Approval Letter",
            required_document=ctx.claim_doc(ClaimDocKey.LICENSED_MATERIALS),
        )
    return CostItem(
        key="licensed_materials",
        label="LTM) Licensed Training Materials",
        amount=None,
        note="As charged - requires HRD Corp Special Approval Letter prior to grant submission",
        required_document=ctx.claim_doc(ClaimDocKey.LICENSED_MATERIALS),
    )


def study_allowance(ctx: CalculationContext) -> Optional[CostItem]:
    dev = ctx.event.development
    if not dev.full_time:
        return None
    dev_rates = ctx.rates.development
    overseas = dev.location is StudyLocation.OVERSEAS
    rate = dev_rates.study_overseas if overseas else dev_rates.study_local
    assistance = dev_rates.overseas_masters_phd_study_rate if (overseas and dev.level.is_postgraduate) else 1.0
    total_pax = ctx.profile.total_pax
    amount = round_currency(rate * dev.months * total_pax * assistance)
    return CostItem(
        key="study_allowance",
        label="Study Allowance",
        amount=amount,
        deficit=round_currency(rate * dev.months * total_pax) - amount,
        note=(
            f"{format_rm(rate)}/month x {dev.months} month(s) x {total_pax} pax"
            + (f" x {percent_label(assistance)} assistance" if assistance < 1 else "")
        ),
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


def thesis_allowance(ctx: CalculationContext) -> Optional[CostItem]:
    dev = ctx.event.development
    if not (dev.full_time and dev.level.is_postgraduate):
        return None
    dev_rates = ctx.rates.development
    rate = dev_rates.thesis_phd if dev.level is DevelopmentLevel.PHD else dev_rates.thesis_masters
    total_pax = ctx.profile.total_pax
    return CostItem(
        key="thesis_allowance",
        label="Thesis Allowance",
        amount=round_currency(rate * dev.months * total_pax),
        note=f"{format_rm(rate)}/month x {dev.months} month(s) x {total_pax} pax",
        required_document=ctx.claim_doc(ClaimDocKey.NONE),
    )


def development_air_ticket(ctx: CalculationContext) -> Optional[CostItem]:
    """Air ticket for development programmes: overseas study, or a far institution at a hotel"""
    total_pax = ctx.profile.total_pax
    if total_pax <= 0:
        return None
    if ctx.event.development.location is StudyLocation.OVERSEAS:
        note = (
            f"{total_pax} trainee(s) - as per quotation - "
            f"{percent_label(ctx.rates.overseas.assistance_rate)} financial assistance on airfare"
        )
    elif ctx.profile.is_hotel and ctx.event.host.distance is DistanceTier.OVER_100:
        note = f"{total_pax} trainee(s) - >=100km to institution, air ticket may be claimable (actual cost)"
    else:
        return None
    return CostItem(
        key="air_ticket",
        label="G) Air Ticket",
        amount=None,
        entitled_headcount=total_pax,
        note=note,
        required_document=ctx.claim_doc(ClaimDocKey.AIR_TICKET),
    )
