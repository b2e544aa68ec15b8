"""
Built-in baseline ACM edition
"""
from typing import Any, Dict

from .rates import RATES, VERSION
from .rules import SCHEME_CONFIG, COST_MATRIX
from .documents import GRANT_DOCS, CLAIM_DOCS


def baseline_document() -> Dict[str, Any]:
    """Baseline snapshot as a plain JSON-compatible dictionary"""
    return {
        "version": dict(VERSION),
        "rates": RATES,
        "schemes": SCHEME_CONFIG,
        "matrix": COST_MATRIX,
        "documents": {"grant_docs": GRANT_DOCS, "claim_docs": CLAIM_DOCS},
    }


__all__ = [
    "RATES",
    "VERSION",
    "SCHEME_CONFIG",
    "COST_MATRIX",
    "GRANT_DOCS",
    "CLAIM_DOCS",
    "baseline_document"
]
