"""pytest fixtures for JSON:API Gateway tests."""

import os

# Set environment variables BEFORE any imports
os.environ.setdefault("DATABASE_URL", "postgresql://localhost/test")
os.environ.setdefault("SKIP_DB_POOL", "1")

import json
from typing import Any

import pytest


class StaticEngine:
    """Engine stub returning a fixed document and recording its calls."""

    def __init__(self, document: str) -> None:
        self.document = document
        self.calls: list[tuple[str, str, str]] = []

    async def produce(self, method: str, url: str, body: str) -> str:
        self.calls.append((method, url, body))
        return self.document


class FailingEngine:
    """Engine stub raising the given exception on every call."""

    def __init__(self, exc: BaseException) -> None:
        self.exc = exc
        self.calls = 0

    async def produce(self, method: str, url: str, body: str) -> str:
        self.calls += 1
        raise self.exc


@pytest.fixture
def resource_object() -> dict[str, Any]:
    """Provide a valid resource object."""
    return {
        "type": "users",
        "id": "1",
        "attributes": {"name": "Ana", "email": "ana@example.com"},
        "relationships": {"company": {"data": {"type": "companies", "id": "7"}}},
        "links": {"self": "/users/1"},
    }


@pytest.fixture
def collection_document(resource_object: dict[str, Any]) -> dict[str, Any]:
    """Provide a collection document with two users."""
    second = dict(resource_object, id="2")
    return {
        "data": [resource_object, second],
        "links": {"self": "/users"},
        "jsonapi": {"version": "1.0"},
    }


@pytest.fixture
def error_document() -> dict[str, Any]:
    """Provide an engine-reported error document."""
    return {
        "errors": [
            {"status": "404", "code": "JA001", "detail": "resource not found"},
        ],
        "links": {"self": "/oops"},
        "jsonapi": {"version": "1.0"},
    }


@pytest.fixture
def data_engine(collection_document: dict[str, Any]) -> StaticEngine:
    """Engine returning a collection document."""
    return StaticEngine(json.dumps(collection_document, separators=(",", ":")))


@pytest.fixture
def error_engine(error_document: dict[str, Any]) -> StaticEngine:
    """Engine returning an error document."""
    return StaticEngine(json.dumps(error_document, separators=(",", ":")))


@pytest.fixture
def make_static_engine() -> type[StaticEngine]:
    """Provide the fixed-document engine stub for tests that build their own."""
    return StaticEngine


@pytest.fixture
def make_failing_engine() -> type[FailingEngine]:
    """Provide the raising engine stub."""
    return FailingEngine
