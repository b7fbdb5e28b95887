"""
HTTP Client

Sends endpoint requests to the analytics server with urllib, verifying TLS
against the certifi CA bundle.
"""

import http.client
import ssl
import urllib.error
import urllib.request
from typing import Any, Optional

import certifi
import structlog

from ..endpoint import HTTPRequest, HTTPResponse, MetricSubmissionEndpoint
from ..exceptions import HTTPClientError
from ..payloads import MetricsInfo

logger = structlog.get_logger(__name__)

SSL_CONTEXT = ssl.create_default_context(cafile=certifi.where())

DEFAULT_TIMEOUT = 5  # seconds
DEFAULT_USER_AGENT = "Mobile-Analytics-Submission/1.0"


class HTTPClient:
    """HTTP client bound to the analytics server base URL"""

    def __init__(self, base_url: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize HTTP client

        Args:
            base_url: Server root (e.g., https://analytics.example.com), request paths are appended
            timeout: Socket timeout in seconds for each request
            user_agent: User-Agent header sent with every request
        """
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.timeout = timeout
        self.user_agent = user_agent

    def is_configured(self) -> bool:
        """Check if client is properly configured"""
        return bool(self.base_url)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def perform(self, request: HTTPRequest) -> HTTPResponse:
        """
        Send a request and return the response

        Raises:
            HTTPClientError: If not configured, the server cannot be reached,
                or the response status is outside 2xx
        """
        if not self.is_configured():
            raise HTTPClientError("HTTP client not configured (base URL missing)")

        headers = {"User-Agent": self.user_agent}
        headers.update(request.headers)

        url = self.url_for(request.path)
        req = urllib.request.Request(
            url,
            data=request.body or None,
            headers=headers,
            method=request.method,
        )

        logger.debug("Sending request", method=request.method, url=url, body_size=len(request.body))
        try:
            context = SSL_CONTEXT if url.startswith("https://") else None
            with urllib.request.urlopen(req, timeout=self.timeout, context=context) as response:
                status = response.status
                body = response.read()
                response_headers = dict(response.headers.items())
        except urllib.error.HTTPError as e:
            try:
                error_body = e.read()
            except (OSError, http.client.HTTPException):
                error_body = b""
            logger.warning("HTTP error response", url=url, status=e.code, reason=str(e.reason))
            raise HTTPClientError(f"HTTP error: {e.code} - {e.reason}", status=e.code, body=error_body) from e
        except urllib.error.URLError as e:
            logger.warning("Connection error", url=url, reason=str(e.reason))
            raise HTTPClientError(f"Connection error: {e.reason}") from e
        except OSError as e:
            logger.warning("Connection error", url=url, reason=str(e))
            raise HTTPClientError(f"Connection error: {e}") from e
        except http.client.HTTPException as e:
            logger.warning("Malformed response", url=url, error=repr(e))
            raise HTTPClientError(f"Malformed response: {e!r}") from e

        logger.debug("Response received", url=url, status=status)
        if not 200 <= status < 300:
            raise HTTPClientError(f"HTTP error: {status}", status=status, body=body)

        return HTTPResponse(status=status, body=body, headers=response_headers)

    def fetch(self, endpoint: MetricSubmissionEndpoint, info: MetricsInfo) -> Any:
        """Build the endpoint's request for info, send it, and parse the response"""
        request = endpoint.request(info)
        response = self.perform(request)
        return endpoint.parse(response)
