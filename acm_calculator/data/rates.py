"""
Baseline ACM rates and thresholds.

Source: Allowable Cost Matrix Guide (September 2025) and ACM Table
(November 2025 Edition). Update when a new ACM edition is published; rules
belong in rules.py, not here.
"""

RATES = {
    "inhouse": {
        "full_day": 10500,        # RM per group per day (full day >= 7 hrs)
        "half_day": 6000,         # RM per group per day (half day 4-6 hrs)
        "prorate_threshold": 5,   # course fee & trainer allowance prorated when pax < 5
        "min_pax_f2f": 2,
        "min_pax_rot": 1,
        "max_pax_soft": 50,       # per trainer, Employer's Circular No. 3/2024
        "max_pax_tech": 25,       # per trainer, Employer's Circular No. 3/2024
    },
    "public_training": {
        "full_day": 1750,         # RM per pax per day
        "half_day": 1000,
        "max_pax_per_employer": 9,
    },
    "elearning": {
        "hour_table": {1: 125, 2: 250, 3: 375, 4: 500, 5: 625, 6: 750, 7: 875},
        "half_day_block_hours": 4,
        "full_day_block_hours": 7,
    },
    "overseas": {
        "daily_allowance": 1500,  # RM per pax per day (accommodation + subsistence)
        "extra_days_max": 2,
        "assistance_rate": 0.50,
    },
    "allowances": {
        "internal_trainer_full": 1400,
        "internal_trainer_half": 800,
        "travel_under_100": 250,
        "travel_over_100": 500,
        "meal_full": 100,
        "meal_half": 50,
        "overseas_trainer": 500,
        "consumable": 100,        # RM per group, no receipt needed up to this amount
    },
    "development": {
        "study_local": 900,       # RM per month
        "study_overseas": 5000,
        "thesis_masters": 600,
        "thesis_phd": 1000,
        "min_months": 3,
        "days_per_month": 30,
        "overseas_masters_phd_study_rate": 0.50,
        "overseas_fee_assistance_rate": 0.50,
    },
    "seminar": {
        "min_pax_inhouse": 51,
        "min_pax_public_per_tp": 51,
        "min_speakers_half_day": 1,
        "min_speakers_full_day": 2,
        "overseas_assistance": 0.50,
    },
    "as_charged_estimate": 10000,  # RM per pax per day proxy for "as charged" items
    "dev_estimate": 20000,         # RM per pax proxy for development programme fees
    "audit_risk_pax": 25,
}

VERSION = {
    "acm_guide_edition": "September 2025",
    "acm_table_edition": "November 2025",
    "last_reviewed": "2025-11-01",
}
