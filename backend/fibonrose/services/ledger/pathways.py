"""
Pathway Milestones

Four fixed pathways with six milestones each: the fixed milestone order,
milestone validation and next-milestone selection.
"""
from typing import Dict, List

from ...models.trust import PathwayType
from ..errors import InvalidMilestone


PATHWAY_MILESTONES: Dict[PathwayType, List[str]] = {
    PathwayType.JOB: [
        "resume_ready",
        "skills_verified",
        "applications_sent",
        "interviews_completed",
        "offers_received",
        "employment_secured",
    ],
    PathwayType.BUSINESS: [
        "idea_validated",
        "business_plan",
        "legal_setup",
        "funding_secured",
        "first_customer",
        "sustainable_revenue",
    ],
    PathwayType.DEVELOPER: [
        "skills_assessed",
        "portfolio_built",
        "contributions_made",
        "projects_deployed",
        "community_engaged",
        "expertise_recognized",
    ],
    PathwayType.CREATIVE: [
        "vision_defined",
        "skills_developed",
        "portfolio_created",
        "audience_built",
        "work_monetized",
        "sustainable_practice",
    ],
}


def milestones_for(pathway: PathwayType) -> List[str]:
    return list(PATHWAY_MILESTONES[PathwayType(pathway)])


def initialize_progress(pathway: PathwayType) -> Dict[str, float]:
    return {name: 0.0 for name in milestones_for(pathway)}


def validate_milestone(pathway: PathwayType, milestone: str) -> None:
    """Unknown names are rejected, never silently created."""
    if milestone not in PATHWAY_MILESTONES[PathwayType(pathway)]:
        raise InvalidMilestone(PathwayType(pathway).value, milestone)


def next_milestone(pathway: PathwayType, progress: Dict[str, float]) -> str:
    """First milestone below 1.0 in pathway order; the last one once all are complete."""
    ordered = PATHWAY_MILESTONES[PathwayType(pathway)]
    for name in ordered:
        if progress.get(name, 0.0) < 1:
            return name
    return ordered[-1]


def completed_count(progress: Dict[str, float]) -> int:
    return sum(1 for value in progress.values() if value >= 1)
