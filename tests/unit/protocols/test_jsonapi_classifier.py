"""Unit tests for JSON:API document classification.

This module tests:
- classify_document() outcomes for each document kind
- Purity of the predicates (repeatable, no mutation)
- Placeholder checks for jsonapi, links and included members
- HTTP status range helpers
"""

import copy
from typing import Any

import pytest

from jsonapi_gateway.protocols import jsonapi
from jsonapi_gateway.protocols.jsonapi import (
    DocumentKind,
    classify_document,
    is_http_client_error,
    is_http_server_error,
    is_valid_included,
    is_valid_jsonapi_member,
    is_valid_links,
)

PREDICATES = [
    jsonapi.is_envelope,
    jsonapi.is_data_document,
    jsonapi.is_collection_document,
    jsonapi.is_single_resource_document,
    jsonapi.is_error_document,
    jsonapi.is_meta_document,
]


class TestClassifyDocument:
    """Tests for classify_document()."""

    def test_single_resource(self, resource_object: dict[str, Any]) -> None:
        assert classify_document({"data": resource_object}) == DocumentKind.SINGLE_RESOURCE

    def test_collection(self, collection_document: dict[str, Any]) -> None:
        assert classify_document(collection_document) == DocumentKind.COLLECTION

    def test_error_set(self, error_document: dict[str, Any]) -> None:
        assert classify_document(error_document) == DocumentKind.ERROR_SET

    def test_meta_only(self) -> None:
        assert classify_document({"meta": {"count": 3}}) == DocumentKind.META_ONLY

    @pytest.mark.parametrize(
        "doc",
        [
            None,
            "text",
            [],
            {},
            {"links": {"self": "/"}},
            {"data": None},
            {"data": [], "errors": [{"status": "500"}]},
            {"errors": []},
            {"meta": {}, "unexpected": True},
        ],
    )
    def test_invalid(self, doc: Any) -> None:
        assert classify_document(doc) == DocumentKind.INVALID

    def test_kind_values_are_strings(self) -> None:
        assert {kind.value for kind in DocumentKind} == {
            "single_resource",
            "collection",
            "error_set",
            "meta_only",
            "invalid",
        }


class TestPredicatePurity:
    """The predicates are deterministic and never modify their input."""

    @pytest.mark.parametrize("predicate", PREDICATES)
    def test_repeated_calls_agree(self, predicate, collection_document: dict[str, Any]) -> None:
        assert predicate(collection_document) == predicate(collection_document)

    @pytest.mark.parametrize("predicate", PREDICATES)
    def test_input_not_mutated(self, predicate, error_document: dict[str, Any]) -> None:
        before = copy.deepcopy(error_document)
        predicate(error_document)
        assert error_document == before

    @pytest.mark.parametrize("predicate", PREDICATES)
    def test_never_raises_on_odd_values(self, predicate) -> None:
        for value in (None, 0, "", [], [None], {"data": [None]}, {"errors": [1, 2]}):
            assert predicate(value) in (True, False)


class TestPlaceholderChecks:
    """The jsonapi, links and included checks are not implemented yet."""

    @pytest.mark.parametrize("value", [None, {}, {"version": "9.9"}, "anything"])
    def test_always_true(self, value: Any) -> None:
        assert is_valid_jsonapi_member(value) is True
        assert is_valid_links(value) is True
        assert is_valid_included(value) is True


class TestHttpStatusRanges:
    """Tests for the status range helpers."""

    @pytest.mark.parametrize("code,expected", [(399, False), (400, True), (451, True), (499, True), (500, False)])
    def test_client_error(self, code: int, expected: bool) -> None:
        assert is_http_client_error(code) is expected

    @pytest.mark.parametrize("code,expected", [(499, False), (500, True), (503, True), (599, True), (600, False)])
    def test_server_error(self, code: int, expected: bool) -> None:
        assert is_http_server_error(code) is expected
