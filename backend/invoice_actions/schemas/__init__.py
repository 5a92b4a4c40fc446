"""Pydantic Schemas — response validation for API endpoints.

Invariants:
    - Schemas describe what leaves the API; form input is validated in core/
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
