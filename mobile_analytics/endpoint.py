"""
Metric Submission Endpoint

Turns a MetricsInfo into the POST request for the analytics endpoint.
Sending is left to the HTTP client; the response body is not used.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

import structlog

from .exceptions import PayloadEncodingError
from .payloads import MetricsInfo
from .submission import SubmissionPayload

logger = structlog.get_logger("Metrics")

SUBMISSION_PATH = "/submission/mobile-analytics"


@dataclass
class HTTPRequest:
    method: str
    path: str
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def post(cls, path: str, json_body: bytes) -> 'HTTPRequest':
        return cls("POST", path, json_body, {"Content-Type": "application/json"})


@dataclass
class HTTPResponse:
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)


def iso8601(date: datetime) -> str:
    """Format a date as ISO-8601 in UTC with second precision (naive dates are UTC)"""
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    utc = date.astimezone(timezone.utc).replace(microsecond=0, tzinfo=None)
    return utc.isoformat() + "Z"


def payload_document(payload: SubmissionPayload) -> Dict[str, Any]:
    """
    JSON-ready document for a submission payload, dates already formatted

    Raises:
        PayloadEncodingError: If a date cannot be represented in UTC
    """
    try:
        return payload.to_dict(encode_date=iso8601)
    except (TypeError, ValueError, OverflowError, AttributeError) as e:
        raise PayloadEncodingError(f"Could not encode metrics payload: {e}") from e


def dump_document(document: Dict[str, Any]) -> bytes:
    """
    Serialize a payload document to pretty printed JSON

    Raises:
        PayloadEncodingError: If the document cannot be serialized
    """
    try:
        text = json.dumps(document, indent=2, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise PayloadEncodingError(f"Could not encode metrics payload: {e}") from e
    return text.encode('utf-8')


def encode_payload(payload: SubmissionPayload) -> bytes:
    """
    Serialize a submission payload to pretty printed JSON

    Raises:
        PayloadEncodingError: If the payload cannot be serialized
    """
    return dump_document(payload_document(payload))


class MetricSubmissionEndpoint:
    """Endpoint for posting one analytics window"""

    path = SUBMISSION_PATH

    def request(self, info: MetricsInfo) -> HTTPRequest:
        payload = SubmissionPayload.from_metrics_info(info)
        document = payload_document(payload)
        logger.info("Submitting metrics", **document)
        return HTTPRequest.post(self.path, dump_document(document))

    def parse(self, response: HTTPResponse) -> None:
        """Submission is fire-and-forget; the response body is ignored"""
        return None
