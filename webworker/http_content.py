"""
Responsibility: map a request target to the text served back, substituting the
date and server markers line by line.

A marker anywhere on a line replaces the whole line, not just the marker.
"""
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final, Optional, Union

from .config import ServerConfig
from .errors import ContentNotFound
from .http_request import NOT_FOUND_TARGET
from .logging_conf import get_logger

logger = get_logger(__name__)

DATE_MARKER: Final[str] = "<cs371date>"
SERVER_MARKER: Final[str] = "cs371server>"
# RFC 9110 IMF-fixdate
HTTP_DATE_FORMAT: Final[str] = "%a, %d %b %Y %H:%M:%S GMT"


@dataclass(frozen=True)
class Found:
    body: str


@dataclass(frozen=True)
class NotFound:
    reason: str = ""


ResolvedContent = Union[Found, NotFound]


def format_http_date(now: Optional[datetime] = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(HTTP_DATE_FORMAT)


def substitute_line(line: str, server_name: str, now: Optional[datetime] = None) -> str:
    # Date marker wins when a line carries both
    if DATE_MARKER in line:
        return format_http_date(now)
    elif SERVER_MARKER in line:
        return server_name
    return line


def resolve_file_path(target: Optional[str], web_root: str) -> str:
    if target is NOT_FOUND_TARGET:
        raise ContentNotFound("No request target")

    if not target.startswith("/"):
        raise ContentNotFound(f"Target is not rooted: {target!r}")

    # Drop the leading separator and join with web_root
    web_root_abs = os.path.abspath(web_root)
    file_path = os.path.normpath(os.path.join(web_root_abs, target[1:]))

    # Refuse anything that climbs out of web_root, e.g. GET /../../etc/passwd
    try:
        inside = os.path.commonpath([file_path, web_root_abs]) == web_root_abs
    except ValueError:
        inside = False
    if not inside:
        raise ContentNotFound(f"Target escapes the web root: {target!r}")

    return file_path


def resolve_content(
    target: Optional[str], config: ServerConfig, now: Optional[datetime] = None
) -> ResolvedContent:
    """
    Read the file behind target and return its substituted text.

    Lines are read one at a time with their terminators stripped; every
    processed line is appended followed by "\\n". The body starts with a single
    space, which is what clients of this server have always received.

    now pins the substituted date; by default each date line gets the current
    time.
    """
    try:
        file_path = resolve_file_path(target, config.web_root)
        lines = [" "]
        with open(file_path, "r", encoding="utf-8") as f:
            for line in f:
                if line.endswith("\n"):
                    line = line[:-1]
                lines.append(substitute_line(line, config.server_name, now))
                lines.append("\n")
    except (ContentNotFound, OSError, ValueError) as e:
        logger.info(
            "content.not_found",
            extra={"event": "content_not_found", "target": target, "error": str(e)},
        )
        return NotFound(reason=str(e))

    return Found(body="".join(lines))
