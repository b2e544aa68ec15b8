"""
Baseline grant-submission and claim document requirements.

Source: Allowable Cost Matrix Guide (September 2025).

GRANT_DOCS holds the scheme-level entries of the grant-submission checklist;
entries that depend on the programme variant or the cost items are added by
the document service after these.
"""

GRANT_DOCS = {
    "hcc": [
        "Course content with training schedule, including date and time",
        "Accredited trainer profile",
    ],
    "sbl": [
        "Course content with training schedule, including date and time",
        "Trainer profile",
    ],
    "slb": [
        "Course content with training schedule, including date and time",
        "Trainer profile",
        {
            "text": "Joint Training Letter from the organising employer, must include:",
            "sub_items": [
                "i.  Organiser and participants from each employer, with each participating employer's "
                "name and HRD Corp Employer Code (if registered)",
                "ii.  Name of organiser",
                "iii. Course title and training date",
                "iv.  Training venue",
                "v.   Number of pax from each employer",
                "vi.  Cost breakdown",
                "vii. Signature by the organising employer",
            ],
        },
    ],
}

CLAIM_DOCS = {
    "course_fee_hcc": "Invoice issued to HRD Corp",
    "course_fee_other": "Official receipt and proof of payment",
    "air_ticket": "Ticket stub / e-Ticket evidence or receipt, and invoice from the travel agent",
    "transport": "Receipt from the transport provider",
    "consumable": (
        "No receipt needed if total <= {limit}. If total exceeds {limit}, attach itemised "
        "quotation or invoice with price per item"
    ),
    "licensed_materials": (
        "HRD Corp Special Approval Letter, official letter authorising use of the licensed "
        "materials, invoice(s) from the principal supplier showing the ACTUAL purchase price "
        "(not resale price), and a soft copy of the materials"
    ),
    "none": "No supporting document needed",
}
