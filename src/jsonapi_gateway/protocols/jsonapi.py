"""JSON:API document conformance checks.

This module classifies parsed JSON values against the shape grammar of the
JSON:API wire protocol. Every check is a pure, total predicate: it never
raises and never looks at values beyond the structure it needs.

Features:
- Allow-listed member sets for the top-level envelope, resource objects
  and error objects (unknown members always fail, missing ones never do)
- Predicates for data documents (singular, collection, either), error
  documents and meta-only documents
- classify_document() to map a value to a DocumentKind
- HTTP status range helpers used when interpreting error documents

Known incompleteness: the ``jsonapi``, ``links`` and ``included`` members are
not inspected yet; their checks always succeed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeGuard, Union

JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]

TOP_LEVEL_MEMBERS: frozenset[str] = frozenset(
    {"jsonapi", "links", "data", "included", "errors", "meta"}
)
RESOURCE_OBJECT_MEMBERS: frozenset[str] = frozenset(
    {"type", "id", "attributes", "relationships", "links", "meta"}
)
ERROR_OBJECT_MEMBERS: frozenset[str] = frozenset(
    {"id", "links", "status", "code", "title", "detail", "source", "meta"}
)


class DocumentKind(str, Enum):
    """Structural classification of a JSON:API document."""

    SINGLE_RESOURCE = "single_resource"
    COLLECTION = "collection"
    ERROR_SET = "error_set"
    META_ONLY = "meta_only"
    INVALID = "invalid"


def _has_only_members(
    value: JSONValue, members: frozenset[str]
) -> TypeGuard[dict[str, Any]]:
    if not isinstance(value, dict) or not value:
        return False
    return all(key in members for key in value)


def is_envelope(doc: JSONValue) -> TypeGuard[dict[str, Any]]:
    """Return True when doc is a non-empty object using only top-level members."""
    return _has_only_members(doc, TOP_LEVEL_MEMBERS)


def is_resource_object(obj: JSONValue) -> TypeGuard[dict[str, Any]]:
    """Return True when obj is a non-empty object using only resource members."""
    return _has_only_members(obj, RESOURCE_OBJECT_MEMBERS)


def is_error_object(obj: JSONValue) -> TypeGuard[dict[str, Any]]:
    """Return True when obj is a non-empty object using only error members."""
    return _has_only_members(obj, ERROR_OBJECT_MEMBERS)


def is_valid_jsonapi_member(doc: JSONValue) -> bool:
    """Check the ``jsonapi`` member. Not implemented yet, always True."""
    return True


def is_valid_links(doc: JSONValue) -> bool:
    """Check a ``links`` member. Not implemented yet, always True."""
    return True


def is_valid_included(doc: JSONValue) -> bool:
    """Check the ``included`` member. Not implemented yet, always True."""
    return True


def _is_data_envelope(doc: JSONValue) -> TypeGuard[dict[str, Any]]:
    return is_envelope(doc) and "data" in doc and "errors" not in doc


def _is_resource_list(value: JSONValue) -> bool:
    return isinstance(value, list) and all(is_resource_object(item) for item in value)


def is_data_document(doc: JSONValue) -> bool:
    """
    Return True for a document carrying primary data and no errors.

    ``data`` must be either a single resource object or a list of resource
    objects; any other type (null, string, number) is rejected.
    """
    if not _is_data_envelope(doc):
        return False
    data = doc["data"]
    if isinstance(data, dict):
        return is_resource_object(data)
    return _is_resource_list(data)


def is_collection_document(doc: JSONValue) -> bool:
    """Return True when ``data`` is a list of resource objects."""
    if not _is_data_envelope(doc):
        return False
    return _is_resource_list(doc["data"])


def is_single_resource_document(doc: JSONValue) -> bool:
    """Return True when ``data`` is exactly one resource object."""
    if not _is_data_envelope(doc):
        return False
    data = doc["data"]
    return isinstance(data, dict) and is_resource_object(data)


def is_error_document(doc: JSONValue) -> bool:
    """
    Return True for a document reporting errors.

    The envelope must carry ``errors`` but not ``data``, and ``errors`` must
    be a non-empty list of error objects.
    """
    if not is_envelope(doc):
        return False
    if "errors" not in doc or "data" in doc:
        return False
    errors = doc["errors"]
    if not isinstance(errors, list) or not errors:
        return False
    return all(is_error_object(error) for error in errors)


def is_meta_document(doc: JSONValue) -> bool:
    """Return True for a document with ``meta`` and neither data nor errors."""
    if not is_envelope(doc):
        return False
    return "meta" in doc and "data" not in doc and "errors" not in doc


def classify_document(doc: JSONValue) -> DocumentKind:
    """
    Map a parsed document to its structural kind.

    Args:
        doc: Any parsed JSON value

    Returns:
        The first matching DocumentKind, or DocumentKind.INVALID
    """
    if is_single_resource_document(doc):
        return DocumentKind.SINGLE_RESOURCE
    if is_collection_document(doc):
        return DocumentKind.COLLECTION
    if is_error_document(doc):
        return DocumentKind.ERROR_SET
    if is_meta_document(doc):
        return DocumentKind.META_ONLY
    return DocumentKind.INVALID


def is_http_client_error(code: int) -> bool:
    """Return True for 4xx status codes."""
    return 400 <= code <= 499


def is_http_server_error(code: int) -> bool:
    """Return True for 5xx status codes."""
    return 500 <= code <= 599
