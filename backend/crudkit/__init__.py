"""crudkit: generic CRUD scaffolding with a uniform result/error model.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
