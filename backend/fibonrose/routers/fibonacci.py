"""
FibonRose - Fibonacci Calculations API Router

Stateless math endpoints: sequence, ratios, retracement and extension levels.
"""
from typing import Dict, List

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..services.fibonacci import fibonacci, retracement_levels, extension_levels
from ..services.fibonacci import constants


router = APIRouter(prefix="/fibonacci", tags=["fibonacci"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class RetracementRequest(BaseModel):
    high: float
    low: float


class ExtensionRequest(BaseModel):
    start: float
    end: float


class LevelsResponse(BaseModel):
    success: bool
    levels: Dict[str, float]
    interpretation: Dict[str, str]


class SequenceResponse(BaseModel):
    success: bool
    sequence: List[int]
    ratios: Dict[str, Dict[str, float]]
    golden_ratio: float


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("/sequence", response_model=SequenceResponse)
async def get_sequence(count: int = Query(20, ge=1, le=200)):
    """Sequence values and the ratios used across the engine."""
    return SequenceResponse(
        success=True,
        sequence=[fibonacci(i) for i in range(count)],
        ratios={
            "retracement": {
                "23.6%": constants.RETRACEMENT_236,
                "38.2%": constants.RETRACEMENT_382,
                "50.0%": constants.RETRACEMENT_500,
                "61.8%": constants.RETRACEMENT_618,
                "78.6%": constants.RETRACEMENT_786,
            },
            "extension": {
                "100%": constants.EXTENSION_100,
                "161.8%": constants.EXTENSION_1618,
                "261.8%": constants.EXTENSION_2618,
                "423.6%": constants.EXTENSION_4236,
            },
        },
        golden_ratio=constants.GOLDEN_RATIO,
    )


@router.post("/retracement", response_model=LevelsResponse)
async def calculate_retracement(request: RetracementRequest):
    if request.high < request.low:
        raise HTTPException(status_code=400, detail="high must be greater than or equal to low")

    return LevelsResponse(
        success=True,
        levels=retracement_levels(request.high, request.low),
        interpretation=constants.RETRACEMENT_INTERPRETATION,
    )


@router.post("/extension", response_model=LevelsResponse)
async def calculate_extension(request: ExtensionRequest):
    return LevelsResponse(
        success=True,
        levels=extension_levels(request.start, request.end),
        interpretation=constants.EXTENSION_INTERPRETATION,
    )
