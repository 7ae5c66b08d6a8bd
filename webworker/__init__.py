"""Single-request web worker: one request line in, one file (or 404) out."""
from .config import ServerConfig
from .http_content import Found, NotFound, ResolvedContent, resolve_content
from .http_request import NOT_FOUND_TARGET, read_request_target
from .http_response import status_for_target, write_content, write_header
from .worker import handle_connection, handle_streams

__all__ = [
    "ServerConfig",
    "Found",
    "NotFound",
    "ResolvedContent",
    "NOT_FOUND_TARGET",
    "read_request_target",
    "resolve_content",
    "status_for_target",
    "write_header",
    "write_content",
    "handle_streams",
    "handle_connection",
]
