"""Errors raised while building or sending a metrics submission."""

from typing import Optional


class MetricsSubmissionError(Exception):
    """Base class for metrics submission errors."""
    pass


class PayloadEncodingError(MetricsSubmissionError):
    """The submission payload could not be serialized."""
    pass


class HTTPClientError(MetricsSubmissionError):
    """The request failed at the transport level or returned a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None, body: bytes = b""):
        super().__init__(message)
        self.status = status
        self.body = body
