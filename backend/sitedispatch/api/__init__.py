"""API Layer: FastAPI adapter around the dispatcher, plus last-resort error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - The only FastAPI route is the dispatch catch-all; ordering lives in core
"""
