"""Ingestion layer.

Helpers that turn persisted or hand-written JSON into typed snapshots
before they reach the state store.
"""

__all__: list[str] = []
