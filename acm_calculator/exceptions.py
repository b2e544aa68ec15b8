"""
Exception hierarchy for the ACM Claim Calculator.

Only two conditions abort a calculation: malformed input and a hard
participant-cap violation. Everything else is reported as an advisory warning
on the result.
"""
from typing import Any, Dict, List, Optional


class AcmError(Exception):
    """Base class for calculator errors"""

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": str(self)}


class InputValidationError(AcmError, ValueError):
    """Training event description is malformed"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = list(self.errors)
        return data


class BlockedError(AcmError):
    """In-house group exceeds the maximum participants per group"""

    def __init__(self, category: str, cap: int, total_pax: int, number_of_trainers: int = 1):
        self.category = category
        self.cap = cap
        self.total_pax = total_pax
        self.number_of_trainers = number_of_trainers
        super().__init__(
            f"Pax limit exceeded: General ({category}) in-house courses allow a maximum of "
            f"{cap} pax for {number_of_trainers} trainer(s). Current group: {total_pax} pax."
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "category": self.category,
            "cap": self.cap,
            "total_pax": self.total_pax,
            "number_of_trainers": self.number_of_trainers,
        })
        return data


class SnapshotLoadError(AcmError):
    """ACM configuration snapshot could not be read or parsed"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load ACM snapshot from {source}: {reason}")
