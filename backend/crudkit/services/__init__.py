"""Services Layer: generic CRUD workflow and per-entity hook implementations.

Invariants:
    - CrudService is entity-agnostic; entity specifics live in *_hooks.py modules
"""
