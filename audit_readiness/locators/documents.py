"""
Document-registry locator.

Strategies per requirement, each independently fail-open:
  identifier pattern (control number, 100) → type code (90, or keyword-scaled
  when title keywords are set) → folder membership (same scaling) →
  full-text phrases (60, with a snippet). Element tags are searched once per
  element (90).

Located documents are reported as evidence even when they only partially fit;
only documents passing `satisfies()` count toward the requirement.
"""

from __future__ import annotations

import logging
from datetime import datetime

from audit_readiness.locators.base import EvidenceSource, has_any_keyword, keyword_relevance
from audit_readiness.locators.merge import TAG_MATCH_ID, merge_evidence
from audit_readiness.models.enums import MatchStrategy, SourceKind
from audit_readiness.models.records import DocumentFolder, DocumentRecord
from audit_readiness.models.schemas import Evidence, Requirement, RequirementMatch
from audit_readiness.persistence.stores import ACTIVE_DOCUMENT_STATUSES, DocumentStore
from audit_readiness.utils.dates import lookback_cutoff, timeframe_cutoff

logger = logging.getLogger(__name__)

IDENTIFIER_CONFIDENCE = 100
TYPE_CONFIDENCE = 90
TAG_CONFIDENCE = 90
FULL_TEXT_CONFIDENCE = 60
SNIPPET_BEFORE = 50
SNIPPET_AFTER = 100


def extract_snippet(text: str | None, term: str) -> str | None:
    """Context around the first case-insensitive occurrence of ``term``."""
    if not text:
        return None
    index = text.lower().find(term.lower())
    if index == -1:
        return None
    start = max(0, index - SNIPPET_BEFORE)
    end = min(len(text), index + len(term) + SNIPPET_AFTER)
    snippet = text[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."
    return snippet


class DocumentLocator(EvidenceSource):
    source = SourceKind.DOCUMENTS

    def __init__(self, store: DocumentStore, **kwargs):
        super().__init__(**kwargs)
        self.store = store

    # ── Requirement filter ───────────────────────────────

    @staticmethod
    def window_start(requirement: Requirement, now: datetime) -> datetime | None:
        matchers = requirement.matchers
        if matchers.timeframe is not None:
            return timeframe_cutoff(matchers.timeframe, now)
        if matchers.lookback_days:
            return lookback_cutoff(matchers.lookback_days, now)
        return None

    @staticmethod
    def satisfies(
        document: DocumentRecord,
        requirement: Requirement,
        folder_code: str | None,
        since: datetime | None,
    ) -> bool:
        matchers = requirement.matchers
        if matchers.type_codes and document.document_type_code not in matchers.type_codes:
            return False
        if matchers.folder_code and folder_code != matchers.folder_code:
            return False
        if matchers.keywords and not has_any_keyword(document.title, matchers.keywords):
            return False
        if since is not None and document.created_at < since:
            return False
        return True

    # ── Evidence construction ────────────────────────────

    def _to_evidence(
        self,
        document: DocumentRecord,
        requirement_id: str,
        relevance: int,
        strategy: MatchStrategy,
        snippet: str | None = None,
    ) -> Evidence:
        return Evidence(
            id=self._evidence_id(document.id),
            source=self.source,
            date=document.updated_at or document.created_at,
            description=document.title,
            reference=document.control_number,
            relevance=relevance,
            snippet=snippet,
            matched_by=strategy,
            satisfied_requirements=[requirement_id],
        )

    def _scaled(self, documents: list[DocumentRecord], requirement: Requirement,
                strategy: MatchStrategy) -> list[tuple[DocumentRecord, Evidence]]:
        """Apply the title-keyword filter and confidence used by type and folder matches."""
        keywords = requirement.matchers.keywords
        rows = []
        for doc in documents:
            if keywords:
                if not has_any_keyword(doc.title, keywords):
                    continue
                rows.append((doc, self._to_evidence(
                    doc, requirement.id, keyword_relevance(doc.title, keywords), MatchStrategy.KEYWORD,
                )))
            else:
                rows.append((doc, self._to_evidence(doc, requirement.id, TYPE_CONFIDENCE, strategy)))
        return rows

    # ── Hooks ────────────────────────────────────────────

    def _match(self, organization_id, element_number, requirement, now):
        matchers = requirement.matchers
        statuses = ACTIVE_DOCUMENT_STATUSES
        since = self.window_start(requirement, now)
        failed = False
        located: list[tuple[DocumentRecord, Evidence]] = []

        folders: list[DocumentFolder] | None = self._query(
            "folders", self.store.folders, organization_id
        )
        if folders is None:
            failed = True
            folders = []
        code_by_folder_id = {f.id: f.folder_code for f in folders}
        folder = next((f for f in folders if f.folder_code == matchers.folder_code), None)

        if matchers.identifier_pattern:
            docs = self._query(
                f"control number {matchers.identifier_pattern}",
                self.store.by_control_number, organization_id, matchers.identifier_pattern, statuses,
            )
            failed |= docs is None
            located += [
                (d, self._to_evidence(d, requirement.id, IDENTIFIER_CONFIDENCE,
                                      MatchStrategy.IDENTIFIER_PATTERN))
                for d in docs or []
            ]

        for type_code in matchers.type_codes:
            docs = self._query(
                f"type {type_code}", self.store.by_type, organization_id, type_code, statuses, since,
            )
            failed |= docs is None
            located += self._scaled(docs or [], requirement, MatchStrategy.TYPE)

        if folder is not None:
            docs = self._query(
                f"folder {folder.folder_code}",
                self.store.in_folder, organization_id, folder.id, statuses, since,
            )
            failed |= docs is None
            located += self._scaled(docs or [], requirement, MatchStrategy.TYPE)

        seen_full_text: set[str] = set()
        for phrase in matchers.content_phrases:
            docs = self._query(
                f"full text '{phrase}'", self.store.containing, organization_id, phrase, statuses,
            )
            failed |= docs is None
            for doc in docs or []:
                if doc.id in seen_full_text:
                    continue
                seen_full_text.add(doc.id)
                located.append((doc, self._to_evidence(
                    doc, requirement.id, FULL_TEXT_CONFIDENCE, MatchStrategy.FULL_TEXT,
                    snippet=extract_snippet(doc.extracted_text, phrase),
                )))

        documents = {doc.id: doc for doc, _ in located}
        evidence = merge_evidence([[ev for _, ev in located]])
        found = sum(
            1 for doc in documents.values()
            if self.satisfies(doc, requirement, code_by_folder_id.get(doc.folder_id or ""), since)
        )

        configured = True
        if matchers.folder_code and folder is None and found == 0 and not failed:
            logger.debug(f"Folder {matchers.folder_code} not set up for {requirement.id}")
            configured = False

        return RequirementMatch(
            requirement_id=requirement.id,
            evidence=evidence,
            found=found,
            configured=configured,
            failed=failed,
        )

    def _tagged(self, organization_id, element_number, now):
        docs = self._query(
            f"element {element_number} tags",
            self.store.tagged, organization_id, element_number, ACTIVE_DOCUMENT_STATUSES,
        )
        return [
            self._to_evidence(d, TAG_MATCH_ID, TAG_CONFIDENCE, MatchStrategy.TAG)
            for d in docs or []
        ]
