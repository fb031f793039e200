"""
Tests: Requirement catalogs and element definitions.

Run with:
    pytest audit_readiness/tests/test_catalog.py -v
"""

import pytest
from pydantic import ValidationError

from audit_readiness.catalog.document_requirements import document_requirements_for
from audit_readiness.catalog.elements import (
    ELEMENTS,
    element_name,
    element_weight,
    lookback_days_for,
    max_points_for,
)
from audit_readiness.catalog.maintenance_requirements import maintenance_requirements_for
from audit_readiness.catalog.requirements import all_requirements, requirements_for
from audit_readiness.models.schemas import MatcherCriteria


class TestElements:
    def test_fourteen_elements(self):
        assert sorted(ELEMENTS) == list(range(1, 15))

    def test_weights(self):
        assert element_weight(1) == 1.2
        assert element_weight(3) == 1.2
        assert element_weight(4) == 1.1
        assert element_weight(10) == 1.1
        assert element_weight(7) == 1.0

    def test_unknown_element_defaults(self):
        assert max_points_for(0) == 0
        assert max_points_for(15) == 0
        assert element_weight(99) == 1.0
        assert element_name(99) == "Element 99"

    def test_short_lookback_for_field_elements(self):
        assert lookback_days_for(2) == 90
        assert lookback_days_for(9) == 90
        assert lookback_days_for(1) == 365


class TestFormCatalog:
    @pytest.mark.parametrize("element", range(1, 15))
    def test_every_element_has_requirements(self, element):
        assert len(requirements_for(element)) > 0

    @pytest.mark.parametrize("element", [0, -1, 15, 100])
    def test_out_of_range_is_empty(self, element):
        assert requirements_for(element) == []

    def test_requirement_ids_unique(self):
        ids = [r.id for reqs in all_requirements().values() for r in reqs]
        assert len(ids) == len(set(ids))

    def test_deterministic(self):
        assert requirements_for(2) == requirements_for(2)

    def test_requirements_are_immutable(self):
        requirement = requirements_for(1)[0]
        with pytest.raises(ValidationError):
            requirement.point_value = 99

    def test_every_requirement_tagged_with_its_element(self):
        for element, reqs in all_requirements().items():
            for r in reqs:
                assert element in r.matchers.tags


class TestDocumentCatalog:
    def test_recommended_items_carry_no_points(self):
        recommended = [
            r for n in range(1, 15) for r in document_requirements_for(n) if r.recommended
        ]
        assert recommended
        assert all(r.point_value == 0 for r in recommended)

    def test_policy_pattern(self):
        policy = next(r for r in document_requirements_for(1) if r.id == "elem1_hs_policy")
        assert policy.matchers.identifier_pattern == "*-POL-001"
        assert policy.matchers.type_codes == ("POL",)

    def test_out_of_range_is_empty(self):
        assert document_requirements_for(15) == []


class TestMaintenanceCatalog:
    def test_only_element_seven(self):
        assert len(maintenance_requirements_for(7)) == 5
        assert maintenance_requirements_for(6) == []
        assert maintenance_requirements_for(8) == []

    def test_points(self):
        points = [r.point_value for r in maintenance_requirements_for(7)]
        assert points == [10, 10, 10, 10, 5]


class TestMatcherCriteria:
    def test_requires_a_criterion(self):
        with pytest.raises(ValidationError):
            MatcherCriteria()

    def test_single_criterion_is_enough(self):
        assert MatcherCriteria(keywords=("policy",)).keywords == ("policy",)
