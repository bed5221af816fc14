"""Database clients for the JSON:API Gateway."""

from .postgres import PostgresDocumentEngine

__all__ = [
    "PostgresDocumentEngine",
]
