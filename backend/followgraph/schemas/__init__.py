"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; domain rules stay in core/
    - Request field names follow the wire format (camelCase aliases)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
