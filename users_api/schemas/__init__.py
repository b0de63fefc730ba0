"""Pydantic Schemas: response contracts for API endpoints.

Invariants:
    - Field names on the wire are camelCase (aliases), Python names are snake_case
"""
