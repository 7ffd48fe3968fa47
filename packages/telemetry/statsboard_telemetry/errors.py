"""Telemetry error types."""

from __future__ import annotations


class CollectionError(Exception):
    """A host metrics query failed or returned data the snapshot cannot use."""

    def __init__(self, query: str, message: str) -> None:
        super().__init__(f"{query}: {message}")
        self.query = query
