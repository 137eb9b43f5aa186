"""
FibonRose - Generative Units API Router

Create ledger entries, consume units behind overspending protection,
and report pathway milestone progress.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..models.trust import EntityType, PathwayType
from ..services.errors import EntryNotFound
from ..services.ledger import GenerativeUnitService, milestones_for
from .dependencies import get_unit_service


router = APIRouter(prefix="/units", tags=["generative-units"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class CreateUnitRequest(BaseModel):
    entity_id: str
    entity_type: str  # USER, ORGANIZATION, PROJECT, DEVICE, API_CLIENT, WORKFLOW, RESOURCE
    pathway: str  # JOB, BUSINESS, DEVELOPER, CREATIVE
    initial_units: float = Field(..., gt=0)


class ConsumeRequest(BaseModel):
    amount: float = Field(..., ge=0)
    reason: str = Field(..., min_length=1)


class ProgressRequest(BaseModel):
    milestone: str
    progress: float


def _parse_enum(enum_cls, value: str, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = [e.value for e in enum_cls]
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field_name}. Must be one of: {valid}",
        )


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("", status_code=201)
async def create_units(
    request: CreateUnitRequest,
    service: GenerativeUnitService = Depends(get_unit_service),
) -> Dict[str, Any]:
    pathway = _parse_enum(PathwayType, request.pathway, "pathway")
    entity_type = _parse_enum(EntityType, request.entity_type, "entity_type")

    unit = service.create(request.entity_id, entity_type, pathway, request.initial_units)
    service.store.commit()

    return {
        "success": True,
        "unit": unit.to_dict(),
        "message": f"GENERATIVE UNITS created for {pathway.value} pathway",
    }


@router.get("/pathways")
async def list_pathways() -> Dict[str, Any]:
    """Milestones for every pathway, in completion order."""
    return {
        "success": True,
        "pathways": {
            pathway.value: milestones_for(pathway)
            for pathway in PathwayType
        },
    }


@router.get("/{unit_id}")
async def get_unit(
    unit_id: str,
    service: GenerativeUnitService = Depends(get_unit_service),
) -> Dict[str, Any]:
    try:
        unit = service.get(unit_id)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "unit": unit.to_dict()}


@router.post("/{unit_id}/consume")
async def consume_units(
    unit_id: str,
    request: ConsumeRequest,
    service: GenerativeUnitService = Depends(get_unit_service),
):
    """
    Consume units with overspending protection.

    A blocked consumption is answered with 403 and the full result body.
    """
    try:
        result = service.consume(unit_id, request.amount, request.reason)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    service.store.commit()

    body = result.to_dict()
    if result.blocked:
        body["message"] = "Consumption blocked to prevent overspending"
        return JSONResponse(status_code=403, content=body)

    body["message"] = (
        "Units consumed with warnings" if result.warnings else "Units consumed successfully"
    )
    return body


@router.post("/{unit_id}/progress")
async def update_progress(
    unit_id: str,
    request: ProgressRequest,
    service: GenerativeUnitService = Depends(get_unit_service),
) -> Dict[str, Any]:
    try:
        result = service.update_pathway_progress(unit_id, request.milestone, request.progress)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    service.store.commit()
    return result.to_dict()
