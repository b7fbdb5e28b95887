"""
Metrics Reporter

Submits one analytics window per call through the configured HTTP client.
Privacy-first: reporting can be switched off, and nothing is sent or kept
while it is.
"""

from typing import Optional

import structlog

from .backends.http import DEFAULT_TIMEOUT, HTTPClient
from .endpoint import MetricSubmissionEndpoint
from .log_utils import apply_debug_setting
from .payloads import MetricsInfo

logger = structlog.get_logger(__name__)


class MetricsReporter:
    """Sends metrics submissions to the analytics endpoint"""

    def __init__(self, client: HTTPClient, enabled: bool = True,
                 endpoint: Optional[MetricSubmissionEndpoint] = None):
        """
        Initialize metrics reporter

        Args:
            client: HTTP client that performs the request (HTTPClient or compatible)
            enabled: Whether submissions are sent at all
            endpoint: Endpoint used to build requests (default: MetricSubmissionEndpoint)
        """
        self.client = client
        self.enabled = enabled
        self.endpoint = endpoint or MetricSubmissionEndpoint()

    def submit(self, info: MetricsInfo) -> bool:
        """
        Submit one metrics window

        Returns:
            True if the submission was sent, False if reporting is disabled

        Raises:
            PayloadEncodingError: If the payload cannot be serialized
            HTTPClientError: If the request fails
        """
        if not self.enabled:
            logger.info("Metrics reporting disabled, submission skipped")
            return False

        self.client.fetch(self.endpoint, info)
        logger.debug("Metrics submitted")
        return True

    def set_enabled(self, enabled: bool):
        """Enable or disable metrics reporting"""
        self.enabled = enabled
        logger.info("Metrics reporting toggled", enabled=enabled)


def get_client() -> Optional[HTTPClient]:
    """
    Load and return the HTTP client configured in analytics_config.py

    Returns:
        HTTPClient instance, or None if analytics_config is missing or has no base URL
    """
    try:
        import analytics_config as config
    except ImportError as e:
        logger.warning("analytics_config.py not found - metrics submission disabled", error=str(e))
        return None

    base_url = getattr(config, 'ANALYTICS_BASE_URL', None)
    if not base_url:
        logger.warning("ANALYTICS_BASE_URL not set - metrics submission disabled")
        return None

    timeout = getattr(config, 'ANALYTICS_TIMEOUT', DEFAULT_TIMEOUT)
    logger.debug("HTTP client configured", base_url=base_url, timeout=timeout)
    return HTTPClient(base_url, timeout=timeout)


def get_reporter() -> Optional[MetricsReporter]:
    """
    Reporter for the configured client, honouring TELEMETRY_ENABLED_BY_DEFAULT

    With TELEMETRY_DEBUG set, logging switches to DEBUG and writes the debug log file.
    """
    apply_debug_setting()
    client = get_client()
    if client is None:
        return None

    import analytics_config as config
    enabled = getattr(config, 'TELEMETRY_ENABLED_BY_DEFAULT', True)
    return MetricsReporter(client, enabled=enabled)
