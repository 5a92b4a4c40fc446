"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes turn pipeline outcomes into HTTP: Redirect → 303, form state → 400/503

Design Decisions:
    - Thin routes delegate to services
"""
