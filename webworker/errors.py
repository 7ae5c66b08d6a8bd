class WebWorkerError(RuntimeError):
    """Base class for errors raised while serving one connection."""


class RequestParseError(WebWorkerError):
    """The request line was missing, malformed, or never arrived."""


class ContentNotFound(WebWorkerError):
    """The requested target does not map to a readable file under the web root."""


class ResponseWriteError(WebWorkerError):
    """Writing the header or body back to the client failed."""
