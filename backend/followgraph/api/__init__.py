"""API Layer — FastAPI routes, response envelope and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response uses the status/message/success envelope

Design Decisions:
    - Thin routes delegate to services; no query building in api/
"""
