"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - Store faults surface as DatabaseError (core/errors.py), never as raw SQLAlchemy errors
"""
