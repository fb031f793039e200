"""
Form-submission locator.

A requirement's form codes resolve to the organization's templates; each
submitted or approved submission of those templates inside the window counts
once. No template at all means the category was never configured.
"""

from __future__ import annotations

import logging
from datetime import datetime

from audit_readiness.catalog.elements import lookback_days_for
from audit_readiness.locators.base import EvidenceSource, has_any_keyword, keyword_relevance
from audit_readiness.locators.merge import TAG_MATCH_ID
from audit_readiness.models.enums import MatchStrategy, SourceKind
from audit_readiness.models.records import FormSubmission, FormTemplate
from audit_readiness.models.schemas import Evidence, Requirement, RequirementMatch
from audit_readiness.persistence.stores import (
    COUNTED_SUBMISSION_STATUSES,
    FormStore,
    wildcard_match,
)
from audit_readiness.utils.dates import lookback_cutoff, timeframe_cutoff

logger = logging.getLogger(__name__)

TYPE_CONFIDENCE = 90
TAG_CONFIDENCE = 90
IDENTIFIER_CONFIDENCE = 100


class FormSubmissionLocator(EvidenceSource):
    source = SourceKind.FORMS

    def __init__(self, store: FormStore, **kwargs):
        super().__init__(**kwargs)
        self.store = store

    def _window_start(self, requirement: Requirement, element_number: int, now: datetime) -> datetime:
        matchers = requirement.matchers
        if matchers.timeframe is not None:
            return timeframe_cutoff(matchers.timeframe, now)
        days = matchers.lookback_days or lookback_days_for(element_number)
        return lookback_cutoff(days, now)

    def _to_evidence(
        self,
        submission: FormSubmission,
        template: FormTemplate | None,
        requirement: Requirement | None,
    ) -> Evidence:
        relevance = TYPE_CONFIDENCE
        strategy = MatchStrategy.TYPE
        if requirement is not None:
            matchers = requirement.matchers
            if matchers.identifier_pattern and wildcard_match(
                matchers.identifier_pattern, submission.form_number
            ):
                relevance, strategy = IDENTIFIER_CONFIDENCE, MatchStrategy.IDENTIFIER_PATTERN
            elif matchers.keywords and template and has_any_keyword(template.name, matchers.keywords):
                relevance = keyword_relevance(template.name, matchers.keywords)
                strategy = MatchStrategy.KEYWORD
        else:
            relevance, strategy = TAG_CONFIDENCE, MatchStrategy.TAG

        if template is not None:
            description = template.name
        elif requirement is not None:
            description = requirement.description
        else:
            description = ""
        return Evidence(
            id=self._evidence_id(submission.id),
            source=self.source,
            date=submission.submitted_at or submission.created_at,
            description=description,
            reference=submission.form_number,
            relevance=relevance,
            matched_by=strategy,
            satisfied_requirements=[requirement.id if requirement else TAG_MATCH_ID],
        )

    def _match(self, organization_id, element_number, requirement, now):
        codes = list(requirement.matchers.type_codes)
        if not codes:
            return RequirementMatch(requirement_id=requirement.id)

        templates = self._query(
            f"templates for {requirement.id}",
            self.store.templates_by_codes, organization_id, codes,
        )
        if templates is None:
            return RequirementMatch(requirement_id=requirement.id, failed=True)
        if not templates:
            logger.debug(f"No templates configured for {requirement.id}: {codes}")
            return RequirementMatch(requirement_id=requirement.id, configured=False)

        by_id = {t.id: t for t in templates}
        submissions = self._query(
            f"submissions for {requirement.id}",
            self.store.submissions,
            organization_id,
            list(by_id),
            COUNTED_SUBMISSION_STATUSES,
            self._window_start(requirement, element_number, now),
        )
        if submissions is None:
            return RequirementMatch(requirement_id=requirement.id, failed=True)

        evidence = [self._to_evidence(s, by_id.get(s.template_id), requirement) for s in submissions]
        return RequirementMatch(
            requirement_id=requirement.id,
            evidence=evidence,
            found=len(submissions),
        )

    def _tagged(self, organization_id, element_number, now):
        templates = self._query(
            f"tagged templates for element {element_number}",
            self.store.templates_tagged, organization_id, element_number,
        )
        if not templates:
            return []
        by_id = {t.id: t for t in templates}
        submissions = self._query(
            f"tagged submissions for element {element_number}",
            self.store.submissions,
            organization_id,
            list(by_id),
            COUNTED_SUBMISSION_STATUSES,
            lookback_cutoff(lookback_days_for(element_number), now),
        ) or []
        return [self._to_evidence(s, by_id.get(s.template_id), None) for s in submissions]
