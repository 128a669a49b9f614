"""Route Modules: one file per concern.

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
