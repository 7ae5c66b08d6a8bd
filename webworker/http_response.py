"""
Responsibility: build the status line, header fields and body for one request
and write them to the client.

The status comes from its own existence probe on the requested target, not
from the content resolution result, so an existing file that cannot be read is
sent as 200 OK with the not-found body.
"""
import os
from datetime import datetime
from typing import BinaryIO, Final, Optional

from .errors import ContentNotFound, ResponseWriteError
from .http_content import Found, ResolvedContent, format_http_date, resolve_file_path
from .logging_conf import get_logger

logger = get_logger(__name__)

HTTP_VERSION: Final[str] = "HTTP/1.1"
STATUS_OK: Final[tuple[int, str]] = (200, "OK")
STATUS_ERROR: Final[tuple[int, str]] = (404, "Error")

NOT_FOUND_BODY: Final[str] = "404: File not found"
CONTENTS_PREFIX: Final[str] = "The contents are: "


def status_for_target(target: Optional[str], web_root: str) -> tuple[int, str]:
    try:
        file_path = resolve_file_path(target, web_root)
    except ContentNotFound:
        return STATUS_ERROR

    return STATUS_OK if os.path.isfile(file_path) else STATUS_ERROR


def create_header(
    status: tuple[int, str],
    content_type: str,
    server_header: str,
    now: Optional[datetime] = None,
) -> str:
    status_code, status_message = status

    # Header block ends with an empty line
    return (
        f"{HTTP_VERSION} {status_code} {status_message}\n"
        f"Date: {format_http_date(now)}\n"
        f"Server: {server_header}\n"
        "Connection: close\n"
        f"Content-Type: {content_type}\n"
        "\n"
    )


def create_body(content: ResolvedContent) -> str:
    if isinstance(content, Found):
        return CONTENTS_PREFIX + content.body
    return NOT_FOUND_BODY


def _write(writer: BinaryIO, text: str) -> None:
    try:
        writer.write(text.encode("utf-8"))
    except OSError as e:
        raise ResponseWriteError(f"Failed to write response: {e}") from e


def write_header(
    writer: BinaryIO,
    status: tuple[int, str],
    content_type: str,
    server_header: str,
    now: Optional[datetime] = None,
) -> None:
    logger.info(
        "response.status",
        extra={"event": "response_status", "status_code": status[0]},
    )
    _write(writer, create_header(status, content_type, server_header, now))


def write_content(writer: BinaryIO, content: ResolvedContent) -> None:
    """Write the body; must come after write_header."""
    _write(writer, create_body(content))
