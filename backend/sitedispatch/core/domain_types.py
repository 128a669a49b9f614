"""Domain Types: request, reply and pipeline vocabulary shared by core and shell.

Invariants:
    - Request and Reply are frozen: immutable for the duration of dispatch
    - Request.path is always normalized (leading '/', no '.'/'..' segments,
      no duplicate or trailing slashes except the root itself)
    - Reply.kind alone decides how the shell renders the body
    - DEFER is an enum member: handlers signal "not mine" by returning it

Design Decisions:
    - str Enums: log extras and debug traces serialize without custom encoders
    - Reply factories over public constructor use: media type is derived once,
      from the file extension, at construction
"""

import mimetypes
import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Literal, Union


# ─── Constants ───────────────────────────────────────────────────

SAFE_METHODS = frozenset({"GET", "HEAD"})
ANY_METHOD = "*"
DEFAULT_MEDIA_TYPE = "application/octet-stream"


# ─── Enums ───────────────────────────────────────────────────────

class BodyKind(str, Enum):
    """How a reply body is carried to the client."""
    FILE = "file"            # Path streamed from disk
    DOCUMENT = "document"    # bytes already read into memory
    JSON = "json"
    TEXT = "text"


class RouteKind(str, Enum):
    """How a route entry's pattern is compared against a request path."""
    EXACT = "exact"
    PREFIX = "prefix"
    MOUNT = "mount"
    CATCH_ALL = "catch_all"


class DispatchState(str, Enum):
    """States of the dispatch pipeline, in the order they can be visited."""
    START = "start"
    TRY_STATIC = "try_static"
    TRY_ROUTES = "try_routes"
    NOT_FOUND = "not_found"
    FAULT = "fault"
    RESPOND = "respond"
    TERMINAL = "terminal"


# ─── Request ─────────────────────────────────────────────────────

def normalize_path(path: str) -> str:
    """Collapse a decoded URL path into its canonical absolute form."""
    if not path.startswith("/"):
        path = "/" + path
    normalized = posixpath.normpath(path)
    # POSIX keeps exactly two leading slashes
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


@dataclass(frozen=True)
class Request:
    """An incoming request as the pipeline sees it."""
    method: str
    path: str

    @classmethod
    def from_raw(cls, method: str, path: str) -> "Request":
        """Build from an already URL-decoded method/path pair."""
        return cls(method=method.upper(), path=normalize_path(path))

    @property
    def is_safe(self) -> bool:
        return self.method in SAFE_METHODS


# ─── Reply ───────────────────────────────────────────────────────

def guess_media_type(path: Path) -> str:
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or DEFAULT_MEDIA_TYPE


@dataclass(frozen=True)
class Reply:
    """The single response produced for a request."""
    status_code: int
    kind: BodyKind
    body: Any
    media_type: str

    @classmethod
    def file(cls, path: Path, status_code: int = 200) -> "Reply":
        return cls(status_code, BodyKind.FILE, path, guess_media_type(path))

    @classmethod
    def document(
        cls, content: bytes, source: Path, status_code: int,
    ) -> "Reply":
        return cls(status_code, BodyKind.DOCUMENT, content, guess_media_type(source))

    @classmethod
    def json(cls, payload: Any, status_code: int = 200) -> "Reply":
        return cls(status_code, BodyKind.JSON, payload, "application/json")

    @classmethod
    def text(cls, text: str, status_code: int) -> "Reply":
        return cls(status_code, BodyKind.TEXT, text, "text/plain")


class Signal(Enum):
    """Non-reply results a handler may return."""
    DEFER = "defer"


DEFER = Signal.DEFER

Handler = Callable[[Request], Union[Reply, Literal[Signal.DEFER]]]
