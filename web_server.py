import argparse
import os
import socket
import threading
from typing import Optional

from webworker.config import HOST, LISTEN_BACKLOG, PORT, WEB_ROOT, ServerConfig
from webworker.logging_conf import get_logger, setup_logging
from webworker.worker import handle_connection

logger = get_logger("web_server")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve files one request per connection")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--web-root", default=WEB_ROOT, dest="web_root")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        dest="read_timeout",
        help="seconds to wait for the request line (default: wait forever)",
    )
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    return parser.parse_args(argv)


def run_server(host: str = HOST, port: int = PORT, config: Optional[ServerConfig] = None) -> None:
    if config is None:
        config = ServerConfig()

    server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server_socket.bind((host, port))
    server_socket.listen(LISTEN_BACKLOG)

    logger.info(
        "server.listening",
        extra={"event": "server_listening", "url": f"http://{host}:{port}", "web_root": config.web_root},
    )

    try:
        while True:
            client_socket, client_address = server_socket.accept()
            # Each worker serves one request and exits, so threads are never joined
            worker = threading.Thread(
                target=handle_connection,
                args=(client_socket, client_address, config),
                daemon=True,
            )
            worker.start()

    except KeyboardInterrupt:
        logger.info("server.shutdown", extra={"event": "server_shutdown"})
    finally:
        server_socket.close()


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level)
    config = ServerConfig(web_root=args.web_root, read_timeout=args.read_timeout)
    run_server(args.host, args.port, config)


if __name__ == "__main__":
    main()
