"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass a plain recorder
"""

from typing import Protocol

from sitedispatch.core.outcomes import FaultDetail


class FaultSink(Protocol):
    """Observability sink that receives each handler fault exactly once."""
    def record(self, fault: FaultDetail) -> None: ...
