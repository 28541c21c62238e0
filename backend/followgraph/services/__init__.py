"""Services Layer — user accounts, edge mutation, graph queries, edge repair.

Invariants:
    - Services depend on the UserRepository protocol, never on a concrete session
    - Pure computation delegated to core/; services only orchestrate IO around it

Design Decisions:
    - One service class per concern for locality (ADR: no god objects)
"""
