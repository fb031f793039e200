"""
Evidence merging — one entry per underlying record.

Batches are folded left to right. The first sighting of a record is kept as
is. A later sighting that brings requirement ids not yet on the entry adds
them and raises relevance by 10 per new id (capped at 100). A sighting with
nothing new keeps the higher relevance and fills a missing snippet.
"""

from __future__ import annotations

from functools import reduce
from itertools import chain
from typing import Iterable

from audit_readiness.models.schemas import Evidence

RELEVANCE_BOOST = 10
MAX_RELEVANCE = 100

# pseudo requirement id carried by element-tag matches
TAG_MATCH_ID = "element_tag"


def absorb(existing: Evidence, sighting: Evidence) -> Evidence:
    """Combine two sightings of the same record."""
    new_ids = [
        rid for rid in sighting.satisfied_requirements
        if rid not in existing.satisfied_requirements
    ]
    if new_ids:
        return existing.model_copy(update={
            "satisfied_requirements": existing.satisfied_requirements + new_ids,
            "relevance": min(MAX_RELEVANCE, existing.relevance + RELEVANCE_BOOST * len(new_ids)),
            "snippet": existing.snippet or sighting.snippet,
        })

    if sighting.relevance > existing.relevance:
        return existing.model_copy(update={
            "relevance": sighting.relevance,
            "matched_by": sighting.matched_by,
            "snippet": existing.snippet or sighting.snippet,
        })
    if existing.snippet is None and sighting.snippet is not None:
        return existing.model_copy(update={"snippet": sighting.snippet})
    return existing


def _fold(merged: dict[str, Evidence], sighting: Evidence) -> dict[str, Evidence]:
    current = merged.get(sighting.id)
    merged[sighting.id] = sighting if current is None else absorb(current, sighting)
    return merged


def merge_evidence(batches: Iterable[Iterable[Evidence]]) -> list[Evidence]:
    """Deduplicate located evidence by identity, most relevant first."""
    merged = reduce(_fold, chain.from_iterable(batches), {})
    return sorted(merged.values(), key=lambda e: e.relevance, reverse=True)
