"""Imperative Shell services: handlers, fallbacks, the dispatcher and site assembly.

Invariants:
    - Services may do filesystem IO; core modules may not
    - Nothing here knows about FastAPI/Starlette
"""
