"""Protocol handlers for JSON:API documents."""

from .jsonapi import (
    DocumentKind,
    classify_document,
    is_collection_document,
    is_data_document,
    is_error_document,
    is_meta_document,
    is_single_resource_document,
)

__all__ = [
    "DocumentKind",
    "classify_document",
    "is_collection_document",
    "is_data_document",
    "is_error_document",
    "is_meta_document",
    "is_single_resource_document",
]
