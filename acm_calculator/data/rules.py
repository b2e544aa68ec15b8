"""
Baseline scheme configuration and cost matrix.

Source: ACM Table (November 2025 Edition) and ACM Guide (September 2025).

COST_MATRIX holds one row per generic scenario (variant set x venue x
trainer). Seminar, e-learning, overseas and development programmes have
dedicated handlers and no row here.

Flags:
  course_fee               course fee component evaluated (non-internal trainer)
  course_fee_basis         inhouse_group or public_per_head rate family
  trainer_allowance        internal trainer daily allowance
  meal_trainees            meal for host trainees
  meal_includes_trainer    +1 meal pax for an internal trainer on site
  travel_host              travel allowance for host trainees
  travel_branches          travel allowance for branch / other-employer trainees
  air_host                 host trainees counted for air ticket
  air_branches             branch / other-employer trainees counted for air ticket
  air_trainer              trainer counted for air ticket
  chartered_transport      chartered transport claimable
  consumable               consumable / printed materials
  consumable_slb_organiser_only
  overseas_trainer_daily   overseas trainer daily allowance
  licensed_materials       LTM surcharge allowed
  public_pax_cap           eligible pax per employer for public billing
  slb_cost_mode            how SLB splits the course fee
"""

ALL_SCHEMES = ["hcc", "sbl", "slb"]
HCC_SBL = ["hcc", "sbl"]

ALL_VARIANTS = [
    "inhouse", "rot_inhouse", "rot_public", "public",
    "seminar_conference", "overseas_seminar", "elearning", "mobile_elearning",
    "overseas", "development", "coaching_mentoring",
]

SCHEME_CONFIG = {
    "hcc": {
        "scheme": "hcc",
        "label": "HRD Corp Claimable Courses (HCC)",
        "payment_flow": "direct_to_tp",
        "trainer_requirement": "accredited",
        "allowed_variants": ALL_VARIANTS,
        "allowed_trainer_types": ["internal", "external", "overseas"],
    },
    "sbl": {
        "scheme": "sbl",
        "label": "Skim Bantuan Latihan (SBL)",
        "payment_flow": "reimbursement",
        "trainer_requirement": "non_registered_allowed",
        "allowed_variants": ALL_VARIANTS,
        "allowed_trainer_types": ["internal", "external", "overseas"],
    },
    "slb": {
        "scheme": "slb",
        "label": "Skim Latihan Bersama (SLB)",
        "payment_flow": "reimbursement",
        "trainer_requirement": "any",
        "allowed_variants": ["inhouse", "rot_inhouse", "coaching_mentoring"],
        "allowed_trainer_types": ["internal", "external"],
        "requires_other_employers": True,
        "note": "In-house only. Minimum 2 participating employers. Cost prorated by pax count across all employers.",
    },
}

F2F_INHOUSE = ["inhouse", "coaching_mentoring"]
PUBLIC = ["public", "rot_public"]
SLB_SPLIT = "group_rate_divided_by_total_pax"

COST_MATRIX = [
    # In-house, own premises, internal trainer
    {
        "id": "inhouse_own_internal",
        "variants": F2F_INHOUSE,
        "venue": "employer_premises",
        "trainer": "internal",
        "schemes": ALL_SCHEMES,
        "course_fee": False,
        "trainer_allowance": True,
        "meal_trainees": True,
        "meal_includes_trainer": True,
        "travel_branches": True,
        "air_branches": True,
        "air_trainer": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # In-house, hotel / external venue, internal trainer
    {
        "id": "inhouse_hotel_internal",
        "variants": F2F_INHOUSE,
        "venue": "external_hotel",
        "trainer": "internal",
        "schemes": ALL_SCHEMES,
        "course_fee": False,
        "trainer_allowance": True,
        "travel_host": True,
        "travel_branches": True,
        "air_host": True,
        "air_branches": True,
        "air_trainer": True,
        "chartered_transport": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # In-house, own premises, external trainer
    {
        "id": "inhouse_own_external",
        "variants": F2F_INHOUSE,
        "venue": "employer_premises",
        "trainer": "external",
        "schemes": ALL_SCHEMES,
        "meal_trainees": True,
        "travel_branches": True,
        "air_branches": True,
        "air_trainer": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # In-house, hotel / external venue, external trainer
    {
        "id": "inhouse_hotel_external",
        "variants": F2F_INHOUSE,
        "venue": "external_hotel",
        "trainer": "external",
        "schemes": ALL_SCHEMES,
        "travel_host": True,
        "travel_branches": True,
        "air_host": True,
        "air_branches": True,
        "air_trainer": True,
        "chartered_transport": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # In-house, own premises, overseas trainer (not under SLB)
    {
        "id": "inhouse_own_overseas",
        "variants": F2F_INHOUSE,
        "venue": "employer_premises",
        "trainer": "overseas",
        "schemes": HCC_SBL,
        "meal_trainees": True,
        "travel_branches": True,
        "air_branches": True,
        "air_trainer": True,
        "consumable": True,
        "overseas_trainer_daily": True,
        "licensed_materials": True,
    },
    # In-house, hotel / external venue, overseas trainer (not under SLB)
    {
        "id": "inhouse_hotel_overseas",
        "variants": F2F_INHOUSE,
        "venue": "external_hotel",
        "trainer": "overseas",
        "schemes": HCC_SBL,
        "travel_host": True,
        "travel_branches": True,
        "air_host": True,
        "air_branches": True,
        "air_trainer": True,
        "chartered_transport": True,
        "consumable": True,
        "overseas_trainer_daily": True,
        "licensed_materials": True,
    },
    # ROT in-house at own premises; any trainer, trainer is remote
    {
        "id": "rot_inhouse_own",
        "variants": ["rot_inhouse"],
        "venue": "employer_premises",
        "trainer": None,
        "schemes": ALL_SCHEMES,
        "trainer_allowance": True,
        "meal_trainees": True,
        "travel_branches": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "overseas_trainer_daily": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # ROT in-house at a hotel / external venue
    {
        "id": "rot_inhouse_hotel",
        "variants": ["rot_inhouse"],
        "venue": "external_hotel",
        "trainer": None,
        "schemes": ALL_SCHEMES,
        "trainer_allowance": True,
        "travel_host": True,
        "travel_branches": True,
        "chartered_transport": True,
        "consumable": True,
        "consumable_slb_organiser_only": True,
        "overseas_trainer_daily": True,
        "licensed_materials": True,
        "slb_cost_mode": SLB_SPLIT,
    },
    # Public / ROT public, training provider's venue
    {
        "id": "public_provider_venue",
        "variants": PUBLIC,
        "venue": "employer_premises",
        "trainer": None,
        "schemes": HCC_SBL,
        "course_fee_basis": "public_per_head",
        "travel_host": True,
        "travel_branches": True,
        "air_host": True,
        "air_branches": True,
        "public_pax_cap": 9,
    },
    # Public / ROT public at a hotel / external venue
    {
        "id": "public_hotel",
        "variants": PUBLIC,
        "venue": "external_hotel",
        "trainer": None,
        "schemes": HCC_SBL,
        "course_fee_basis": "public_per_head",
        "travel_host": True,
        "travel_branches": True,
        "air_host": True,
        "air_branches": True,
        "chartered_transport": True,
        "public_pax_cap": 9,
    },
]
