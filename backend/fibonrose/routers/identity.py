"""
FibonRose - Security Identity API Router

Create identities, report activity, adjust accessibility settings and award
catalog badges/certifications.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..models.trust import ActivityUpdate, EntityType, InteractionType
from ..services.errors import EntryNotFound
from ..services.identity import (
    BadgeRegistry,
    SecurityIdentityService,
    find_badge_template,
    find_certification_template,
)
from .dependencies import get_badge_registry, get_identity_service


router = APIRouter(prefix="/identity", tags=["security-identity"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class CreateIdentityRequest(BaseModel):
    entity_id: str
    entity_type: str


class ActivityRequest(BaseModel):
    verification_added: bool = False
    interaction_type: Optional[str] = None  # positive, negative, neutral


class AccessibilityRequest(BaseModel):
    accessibility_score: Optional[float] = Field(None, ge=0, le=100)
    deaf_first_compliance: Optional[bool] = None
    visual_feedback_enabled: Optional[bool] = None
    haptic_feedback_enabled: Optional[bool] = None


class AwardRequest(BaseModel):
    template_id: str


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("/catalog")
async def list_catalog(
    registry: BadgeRegistry = Depends(get_badge_registry),
) -> Dict[str, Any]:
    """Badge and certification templates available for award."""
    templates = registry.list_available()
    return {
        "success": True,
        "templates": [t.to_dict() for t in templates],
        "total": len(templates),
    }


@router.post("", status_code=201)
async def create_identity(
    request: CreateIdentityRequest,
    service: SecurityIdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    try:
        entity_type = EntityType(request.entity_type)
    except ValueError:
        valid = [e.value for e in EntityType]
        raise HTTPException(status_code=400, detail=f"Invalid entity_type. Must be one of: {valid}")

    identity = service.create(request.entity_id, entity_type)
    service.store.commit()

    return {
        "success": True,
        "identity": identity.to_dict(),
        "message": "Security identity created with Deaf-first compliance",
    }


@router.get("/{identity_id}")
async def get_identity(
    identity_id: str,
    service: SecurityIdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    try:
        identity = service.get(identity_id)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "identity": identity.to_dict()}


@router.put("/{identity_id}")
async def record_activity(
    identity_id: str,
    request: ActivityRequest,
    service: SecurityIdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    interaction = None
    if request.interaction_type is not None:
        try:
            interaction = InteractionType(request.interaction_type)
        except ValueError:
            valid = [e.value for e in InteractionType]
            raise HTTPException(status_code=400, detail=f"Invalid interaction_type. Must be one of: {valid}")

    try:
        identity = service.record_activity(
            identity_id,
            ActivityUpdate(verification_added=request.verification_added, interaction_type=interaction),
        )
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    service.store.commit()
    return {"success": True, "identity": identity.to_dict(), "message": "Security identity updated"}


@router.put("/{identity_id}/accessibility")
async def update_accessibility(
    identity_id: str,
    request: AccessibilityRequest,
    service: SecurityIdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    try:
        identity = service.set_accessibility(
            identity_id,
            accessibility_score=request.accessibility_score,
            deaf_first_compliance=request.deaf_first_compliance,
            visual_feedback_enabled=request.visual_feedback_enabled,
            haptic_feedback_enabled=request.haptic_feedback_enabled,
        )
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    service.store.commit()
    return {"success": True, "identity": identity.to_dict()}


@router.post("/{identity_id}/badges", status_code=201)
async def award_badge(
    identity_id: str,
    request: AwardRequest,
    registry: BadgeRegistry = Depends(get_badge_registry),
) -> Dict[str, Any]:
    template = find_badge_template(request.template_id)
    if template is None:
        raise HTTPException(status_code=400, detail=f"Unknown badge template: {request.template_id}")

    try:
        badge = registry.award_badge(identity_id, template)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    registry.identities.store.commit()
    return {"success": True, "badge": badge.to_dict(), "message": f"Badge '{badge.name}' awarded"}


@router.post("/{identity_id}/certifications", status_code=201)
async def award_certification(
    identity_id: str,
    request: AwardRequest,
    registry: BadgeRegistry = Depends(get_badge_registry),
) -> Dict[str, Any]:
    template = find_certification_template(request.template_id)
    if template is None:
        raise HTTPException(status_code=400, detail=f"Unknown certification template: {request.template_id}")

    try:
        certification = registry.award_certification(identity_id, template)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    registry.identities.store.commit()
    return {
        "success": True,
        "certification": certification.to_dict(),
        "message": f"Certification '{certification.name}' issued",
    }
