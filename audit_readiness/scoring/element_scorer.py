"""
Element Scorer — reconciles located evidence against one element's rubric.

Per requirement:
  found ≥ required      → full points, a sample of the evidence kept
  0 < found < required  → proportional points (half-up), gap by shortfall ratio
  found = 0             → no points, critical gap
  not configured        → no points, critical configuration gap
  recommended (0 pts)   → observation gap when unmet, score unaffected

The percentage is always taken against the element's declared max, so a
partial rubric can never report 100%.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

from audit_readiness.catalog.elements import element_definition, element_name, max_points_for
from audit_readiness.config import Settings, get_settings
from audit_readiness.locators.base import EvidenceSource
from audit_readiness.locators.merge import merge_evidence
from audit_readiness.models.enums import ScoreStatus
from audit_readiness.models.schemas import (
    ElementScore,
    Evidence,
    Gap,
    Requirement,
    RequirementMatch,
)
from audit_readiness.scoring.effort import EffortEstimator
from audit_readiness.scoring.gaps import (
    configuration_gap,
    observation_gap,
    shortfall_gap,
    sort_gaps,
)
from audit_readiness.utils.rounding import clamp_percentage, round_half_up

logger = logging.getLogger(__name__)


def status_for(percentage: float) -> ScoreStatus:
    if percentage >= 90:
        return ScoreStatus.EXCELLENT
    if percentage >= 80:
        return ScoreStatus.GOOD
    if percentage >= 60:
        return ScoreStatus.NEEDS_IMPROVEMENT
    return ScoreStatus.CRITICAL


@dataclass
class ScoringProfile:
    """A rubric catalog paired with the store it is judged against."""
    name: str
    catalog: Callable[[int], list[Requirement]]
    source: EvidenceSource
    effort: EffortEstimator
    max_points: Callable[[int], int] = field(default=max_points_for)


class ElementScorer:

    def __init__(self, profile: ScoringProfile, settings: Settings | None = None):
        self.profile = profile
        self.settings = settings or get_settings()

    async def score(self, organization_id: str, element_number: int) -> ElementScore:
        if element_definition(element_number) is None:
            logger.debug(f"[{self.profile.name}] element {element_number} is not a COR element")
            return ElementScore(element_number=element_number, element_name=element_name(element_number))

        requirements = self.profile.catalog(element_number)
        source = self.profile.source
        tagged, matches = await asyncio.gather(
            source.locate_tagged(organization_id, element_number),
            source.locate_all(organization_id, element_number, requirements),
        )
        return self.assemble(element_number, requirements, matches, tagged)

    def assemble(
        self,
        element_number: int,
        requirements: list[Requirement],
        matches: dict[str, RequirementMatch],
        tagged: list[Evidence] | None = None,
    ) -> ElementScore:
        """Pure scoring step over already-located evidence."""
        max_points = self.profile.max_points(element_number)
        sample_limit = self.settings.evidence_sample_limit
        earned = 0
        gaps: list[Gap] = []
        kept: list[list[Evidence]] = [tagged or []]

        for requirement in requirements:
            match = matches.get(requirement.id) or RequirementMatch(requirement_id=requirement.id)
            required = match.required if match.required is not None else requirement.minimum_samples
            found = match.found

            if requirement.recommended:
                if not match.configured or found < required:
                    gaps.append(observation_gap(requirement, element_number, found, required))
                else:
                    kept.append(match.evidence[:sample_limit])
                continue

            if not match.configured:
                gaps.append(configuration_gap(requirement, element_number, self.profile.source.source))
                continue

            if found >= required:
                earned += requirement.point_value
                kept.append(match.evidence[:sample_limit])
                continue

            if found > 0:
                earned += round_half_up(requirement.point_value * found / required)
                kept.append(match.evidence)
            shortfall = required - found
            gaps.append(shortfall_gap(
                requirement,
                element_number,
                found,
                required,
                self.profile.effort.estimate(requirement, shortfall),
            ))

        percentage = clamp_percentage(100 * earned / max_points) if max_points > 0 else 0.0
        score = ElementScore(
            element_number=element_number,
            element_name=element_name(element_number),
            max_points=max_points,
            earned_points=earned,
            percentage=percentage,
            status=status_for(percentage),
            requirements=requirements,
            evidence=merge_evidence(kept),
            gaps=sort_gaps(gaps),
        )
        logger.debug(
            f"[{self.profile.name}] element {element_number}: {earned}/{max_points} "
            f"({percentage:.1f}%), {len(gaps)} gaps"
        )
        return score
