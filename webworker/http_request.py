"""
Responsibility: read the request line off the connection and pull out the
request target (the second space-delimited token).

Error cases: EOF, timeout or a malformed line -> NOT_FOUND_TARGET, which later
phases treat as a path that never resolves.
"""
from typing import Final, Optional, TextIO

from .errors import RequestParseError
from .logging_conf import get_logger

logger = get_logger(__name__)

# Sentinel target; no request line can produce None
NOT_FOUND_TARGET: Final[None] = None
# Longest request line read before giving up on the client
MAX_REQUEST_LINE: Final[int] = 8192


def parse_request_line(line: str) -> str:
    # Single spaces only, so "GET  /a" yields an empty target
    parts = line.rstrip("\r\n").split(" ")
    if len(parts) < 2:
        raise RequestParseError(f"Malformed request-line: {line!r}")
    return parts[1]


def read_request_target(reader: TextIO) -> Optional[str]:
    """
    Block until the first line arrives and return its target.

    Only one line is consumed; headers and body are left unread. The wait is
    bounded by whatever timeout the underlying socket carries.
    """
    try:
        line = reader.readline(MAX_REQUEST_LINE)
        if line == "":
            raise RequestParseError("Connection closed before a request-line arrived")
        if len(line) >= MAX_REQUEST_LINE and not line.endswith(("\n", "\r")):
            raise RequestParseError(f"Request-line longer than {MAX_REQUEST_LINE} characters")
        target = parse_request_line(line)
    except TimeoutError as e:
        logger.warning("request.error", extra={"event": "request_timeout", "error": str(e)})
        return NOT_FOUND_TARGET
    except (RequestParseError, OSError, UnicodeDecodeError) as e:
        logger.warning("request.error", extra={"event": "request_error", "error": str(e)})
        return NOT_FOUND_TARGET

    logger.info("request.line", extra={"event": "request_line", "line": line.rstrip("\r\n")})
    return target
