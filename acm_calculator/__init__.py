"""
ACM Claim Calculator

Estimates the maximum grant-claimable cost of an employee-training event under
the HRD Corp Allowable Cost Matrix (ACM).
"""

__version__ = "1.0.0"
__author__ = "ACM Calculator Team"
__description__ = "Allowable Cost Matrix eligibility and claim estimation service"
