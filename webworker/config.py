from dataclasses import dataclass
from typing import Final, Optional

HOST: Final[str] = "127.0.0.1"
PORT: Final[int] = 8080
# Files are served relative to the process working directory by default
WEB_ROOT: Final[str] = "."
LISTEN_BACKLOG: Final[int] = 5

CONTENT_TYPE: Final[str] = "text/html"
SERVER_HEADER: Final[str] = "Jon's very own server"
# Substituted for lines carrying the server marker
SERVER_NAME: Final[str] = "Luke's Server"


@dataclass(frozen=True)
class ServerConfig:
    """
    Per-server settings handed to every connection worker

    read_timeout is in seconds; None blocks until the client sends a line
    """
    web_root: str = WEB_ROOT
    content_type: str = CONTENT_TYPE
    server_header: str = SERVER_HEADER
    server_name: str = SERVER_NAME
    read_timeout: Optional[float] = None
