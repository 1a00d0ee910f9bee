"""API Layer: FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {"status", "data"} envelope or the error envelope

Design Decisions:
    - Thin routes: authenticate, validate, delegate to a service, render
"""
