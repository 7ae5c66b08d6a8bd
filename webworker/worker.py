"""
One worker per accepted connection: read the request line, resolve the file,
write header and body, close. A worker never raises; failures are logged and
the connection is dropped.
"""
import socket
from typing import IO, BinaryIO, TextIO

from .config import ServerConfig
from .errors import ResponseWriteError
from .http_content import resolve_content
from .http_request import read_request_target
from .http_response import status_for_target, write_content, write_header
from .logging_conf import get_logger

logger = get_logger(__name__)


def _close_quietly(stream: IO, name: str) -> None:
    try:
        stream.close()
    except OSError as e:
        logger.warning(
            "connection.close_error",
            extra={"event": "close_error", "stream": name, "error": str(e)},
        )


def handle_streams(reader: TextIO, writer: BinaryIO, config: ServerConfig) -> None:
    """
    Serve exactly one request over the reader/writer pair, then close both.

    Both streams are closed on every exit path, including when a phase raises.
    """
    try:
        target = read_request_target(reader)
        content = resolve_content(target, config)

        # Status is probed from the target again rather than taken from content
        status = status_for_target(target, config.web_root)

        write_header(writer, status, config.content_type, config.server_header)
        write_content(writer, content)
        try:
            writer.flush()
        except OSError as e:
            raise ResponseWriteError(f"Failed to flush response: {e}") from e

    except Exception:
        logger.exception("connection.error", extra={"event": "connection_error"})
    finally:
        _close_quietly(writer, "writer")
        _close_quietly(reader, "reader")


def handle_connection(client_socket: socket.socket, client_address, config: ServerConfig) -> None:
    logger.info(
        "connection.start",
        extra={"event": "connection_start", "client": str(client_address)},
    )

    try:
        client_socket.settimeout(config.read_timeout)
        reader = client_socket.makefile("r", encoding="utf-8", newline="")
        writer = client_socket.makefile("wb")
        handle_streams(reader, writer, config)
    except Exception:
        logger.exception("connection.error", extra={"event": "connection_error"})
    finally:
        client_socket.close()

    logger.info(
        "connection.end",
        extra={"event": "connection_end", "client": str(client_address)},
    )
