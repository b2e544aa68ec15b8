"""
Services package for the ACM Claim Calculator
"""

from .snapshot_service import SnapshotService, SnapshotStore, snapshot_service
from .document_service import DocumentService, document_service
from .eligibility_service import EligibilityService, eligibility_service
from .variant_handlers import HANDLERS, VariantHandler, handler_for

__all__ = [
    "SnapshotService",
    "SnapshotStore",
    "snapshot_service",
    "DocumentService",
    "document_service",
    "EligibilityService",
    "eligibility_service",
    "HANDLERS",
    "VariantHandler",
    "handler_for"
]
