"""Functional Core: request model, route table, handler outcomes, time payload.

Invariants:
    - Core NEVER imports from services, api or infrastructure
    - No framework types (FastAPI/Starlette) cross into core
"""
