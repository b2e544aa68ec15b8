"""
API routes for the ACM Claim Calculator
"""

from .eligibility import router as eligibility_router
from .acm import router as acm_router

__all__ = [
    "eligibility_router",
    "acm_router"
]
