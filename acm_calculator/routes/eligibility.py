"""
API routes for ACM claim estimation
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from ..exceptions import BlockedError, InputValidationError
from ..models.result import EligibilityResult
from ..models.training import TrainingEventInput
from ..services.eligibility_service import eligibility_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/calculate", response_model=EligibilityResult)
async def calculate(
    event: Dict[str, Any] = Body(
        ...,
        description="Training event to estimate",
        examples=[TrainingEventInput.model_config["json_schema_extra"]["example"]]
    )
):
    """
    Estimate the HRD Corp claimable cost of a training event

    Input errors return 400; an in-house group above the participant cap
    returns 422 with the cap details.
    """
    try:
        return eligibility_service.calculate(event)

    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except BlockedError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error calculating ACM estimate: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to calculate estimate: {str(e)}"
        )
