"""Pydantic Schemas: request/view contracts for API endpoints.

Invariants:
    - Create/update schemas never carry id or audit fields
    - Views are built from ORM entities (from_attributes)
"""
