"""Route Table: ordered (method, pattern) -> handler mapping, first match wins.

Invariants:
    - Insertion order is the only disambiguation rule among non-catch-all entries
    - Duplicate (method, pattern) pairs are accepted; later ones are unreachable
    - GET entries also answer HEAD; every other method must match exactly
    - Catch-all entries are considered only after every other entry missed,
      regardless of where they were registered
    - Once frozen, the table rejects registration (read-only after startup)
    - match() is a pure lookup: it never invokes a handler

Design Decisions:
    - Linear scan over a tuple: route sets are tiny, order must be explicit
    - Mounted groups keep their own order and are entered by prefix; a miss
      inside a group continues the outer scan
"""

from dataclasses import dataclass
from typing import Iterator

from sitedispatch.core.domain_types import ANY_METHOD, Handler, RouteKind
from sitedispatch.core.errors import RouteRegistrationError

CATCH_ALL_PATTERN = "*"


@dataclass(frozen=True)
class RouteEntry:
    method: str
    pattern: str
    kind: RouteKind
    handler: Handler | None = None
    group: "RouteTable | None" = None

    def accepts_method(self, method: str) -> bool:
        if self.method in (ANY_METHOD, method):
            return True
        return self.method == "GET" and method == "HEAD"

    def accepts_path(self, path: str) -> bool:
        if self.kind is RouteKind.CATCH_ALL:
            return True
        if self.kind is RouteKind.EXACT:
            return path == self.pattern
        return _under_prefix(path, self.pattern)


def _under_prefix(path: str, prefix: str) -> bool:
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix + "/")


def _strip_prefix(path: str, prefix: str) -> str:
    if prefix == "/":
        return path
    return path[len(prefix):] or "/"


def _check_pattern(pattern: str) -> str:
    if not pattern.startswith("/"):
        raise RouteRegistrationError(
            f"Route pattern must start with '/': {pattern!r}", pattern,
        )
    if pattern != "/" and pattern.endswith("/"):
        raise RouteRegistrationError(
            f"Route pattern must not end with '/': {pattern!r}", pattern,
        )
    return pattern


class RouteTable:
    """Ordered route registry."""

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []
        self._frozen = False

    # ─── Registration ────────────────────────────────────────────

    def register(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        kind: RouteKind = RouteKind.EXACT,
    ) -> None:
        """Append a route. Exact-string match unless kind says otherwise."""
        if kind not in (RouteKind.EXACT, RouteKind.PREFIX):
            raise RouteRegistrationError(
                f"register() accepts EXACT or PREFIX routes, got {kind.value}",
                pattern,
            )
        self._append(RouteEntry(
            _check_method(method), _check_pattern(pattern), kind, handler,
        ))

    def register_prefix(self, method: str, prefix: str, handler: Handler) -> None:
        self.register(method, prefix, handler, RouteKind.PREFIX)

    def register_catch_all(self, handler: Handler) -> None:
        """Register the terminal route matching any otherwise-unmatched request."""
        self._append(RouteEntry(
            ANY_METHOD, CATCH_ALL_PATTERN, RouteKind.CATCH_ALL, handler,
        ))

    def include(self, prefix: str, group: "RouteTable") -> None:
        """Mount a sub-group; its patterns are relative to prefix."""
        if group is self:
            raise RouteRegistrationError("A route table cannot include itself", prefix)
        group.freeze()
        self._append(RouteEntry(
            ANY_METHOD, _check_pattern(prefix), RouteKind.MOUNT, group=group,
        ))

    def freeze(self) -> "RouteTable":
        self._frozen = True
        return self

    def _append(self, entry: RouteEntry) -> None:
        if self._frozen:
            raise RouteRegistrationError(
                "Route table is frozen; routes are fixed at startup", entry.pattern,
            )
        self._entries.append(entry)

    # ─── Lookup ──────────────────────────────────────────────────

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._entries)

    def match(self, method: str, path: str) -> Handler | None:
        """First matching handler in registration order, then the catch-all."""
        method = method.upper()
        for entry in self._entries:
            if entry.kind is RouteKind.CATCH_ALL:
                continue
            if not (entry.accepts_method(method) and entry.accepts_path(path)):
                continue
            if entry.kind is RouteKind.MOUNT:
                handler = entry.group.match(method, _strip_prefix(path, entry.pattern))
                if handler is not None:
                    return handler
                continue
            return entry.handler
        for entry in self._entries:
            if entry.kind is RouteKind.CATCH_ALL:
                return entry.handler
        return None

    def describe(self) -> list[tuple[str, str]]:
        """(method, pattern) pairs in lookup order, mounted groups flattened."""
        return list(self._describe(""))

    def _describe(self, base: str) -> Iterator[tuple[str, str]]:
        catch_alls = []
        for entry in self._entries:
            if entry.kind is RouteKind.CATCH_ALL:
                catch_alls.append(entry)
            elif entry.kind is RouteKind.MOUNT:
                yield from entry.group._describe(_join(base, entry.pattern))
            else:
                pattern = _join(base, entry.pattern)
                if entry.kind is RouteKind.PREFIX:
                    pattern = pattern.rstrip("/") + "/*"
                yield entry.method, pattern
        for entry in catch_alls:
            yield entry.method, f"{base}/*" if base else CATCH_ALL_PATTERN


def _join(base: str, pattern: str) -> str:
    if not base:
        return pattern
    if pattern == "/":
        return base
    return base + pattern


def _check_method(method: str) -> str:
    method = method.strip().upper()
    if not method:
        raise RouteRegistrationError("Route method must not be empty")
    return method
