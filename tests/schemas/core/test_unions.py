"""
Tests for ordered first-match unions.
"""

from typing import Literal

import pytest
from pydantic import BaseModel, Field

from wacloud.core.exceptions import ValidationError
from wacloud.schemas.core.base_models import RequestModel
from wacloud.schemas.core.unions import ordered_union
from wacloud.schemas.core.validation import validate_request


class ById(RequestModel):
    id: str = Field(..., min_length=1)
    name: str


class ByName(RequestModel):
    name: str


class Note(RequestModel):
    kind: Literal["NOTE"]
    text: str = Field(..., max_length=10)


class Link(RequestModel):
    kind: Literal["LINK"]
    url: str


class Anything(RequestModel):
    text: str


Selector = ordered_union(ById, ByName)
Tagged = ordered_union(Note, Link, tag="kind")
TaggedWithFallback = ordered_union(Note, Anything, tag="kind")


class Holder(BaseModel):
    items: list[Tagged]


class TestOrderedUnion:
    def test_first_full_match_wins(self):
        assert isinstance(validate_request(Selector, {"id": "1", "name": "x"}), ById)

    def test_falls_through_to_later_candidate(self):
        assert isinstance(validate_request(Selector, {"name": "x"}), ByName)

    def test_invalid_specific_field_falls_through(self):
        # ById rejects the empty id, ByName ignores it
        result = validate_request(Selector, {"id": "", "name": "x"})

        assert isinstance(result, ByName)

    def test_instances_pass_through(self):
        value = ByName(name="x")

        assert validate_request(Selector, value) is value

    def test_no_match_reports_union_mismatch(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(Selector, {"id": "1"}, name="Selector")

        issue = exc_info.value.issues[0]
        assert issue.rule == "union_mismatch"
        assert "ById" in issue.message
        assert "ByName" in issue.message

    def test_tag_narrows_candidates(self):
        assert isinstance(validate_request(Tagged, {"kind": "LINK", "url": "u"}), Link)

    def test_tag_narrowing_does_not_fall_back_to_other_tags(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(Tagged, {"kind": "NOTE", "text": "x" * 11, "url": "u"})

        issue = exc_info.value.issues[0]
        assert issue.rule == "union_mismatch"
        assert "Link" not in issue.message

    def test_unknown_tag(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(Tagged, {"kind": "VIDEO"})

        issue = exc_info.value.issues[0]
        assert issue.rule == "union_tag_invalid"
        assert "'VIDEO'" in issue.message

    def test_untagged_candidate_admits_any_tag(self):
        result = validate_request(TaggedWithFallback, {"kind": "OTHER", "text": "hello"})

        assert isinstance(result, Anything)

    def test_error_path_inside_container(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(Holder, {"items": [{"kind": "LINK", "url": "u"}, {"kind": "LINK"}]})

        assert exc_info.value.paths == ["items.1"]

    def test_requires_candidates(self):
        with pytest.raises(ValueError):
            ordered_union()
