"""API Layer: generic CRUD controller/router, transport mapping and the error boundary.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Route handlers render envelopes through api/responses.py only
"""
