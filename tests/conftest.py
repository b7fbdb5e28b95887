"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
import os
import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import structlog

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mobile_analytics.payloads import (
    DataUnit,
    DeviceMetadata,
    Measurement,
    MetricsInfo,
    NetworkTransferMetric,
    SystemPayload,
    TriggeredPayload,
)

from fixtures.analytics_server import analytics_server  # noqa: F401


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog configuration and root handlers added by a test"""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    structlog.reset_defaults()
    for handler in list(root_logger.handlers):
        if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def window_start():
    return datetime(2020, 8, 24, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def window_end():
    return datetime(2020, 8, 25, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def network_transfer():
    """Wifi up 100 B, cellular up 50 B, wifi down 200 B, cellular down 0"""
    return NetworkTransferMetric(
        cumulative_wifi_upload=Measurement(100, DataUnit.bytes),
        cumulative_wifi_download=Measurement(200, DataUnit.bytes),
        cumulative_cellular_upload=Measurement(50, DataUnit.bytes),
        cumulative_cellular_download=Measurement(0, DataUnit.bytes),
    )


@pytest.fixture
def system_payload(window_start, window_end, network_transfer):
    """OS-collected window with device metadata and network transfer"""
    return SystemPayload(
        time_stamp_begin=window_start,
        time_stamp_end=window_end,
        latest_application_version="3.7.1",
        includes_multiple_application_versions=False,
        meta_data=DeviceMetadata(device_type="iPhone12,1", os_version="iPhone OS 14.0 (18A373)"),
        network_transfer_metrics=network_transfer,
    )


@pytest.fixture
def triggered_payload(window_start, window_end):
    """On-demand window"""
    return TriggeredPayload(
        start_date=window_start,
        end_date=window_end,
        device_model="iPhone11,8",
        operating_system_version="13.6",
        latest_application_version="3.7.1",
        includes_multiple_application_versions=True,
    )


@pytest.fixture
def make_info():
    """Build a MetricsInfo for a payload"""
    def _make_info(payload, recorded_metrics=None, postal_district="SW12"):
        return MetricsInfo(
            payload=payload,
            postal_district=postal_district,
            recorded_metrics=recorded_metrics or {},
        )
    return _make_info


@pytest.fixture
def mock_http_client():
    """HTTP client double that runs the endpoint without a network"""
    from mobile_analytics.endpoint import HTTPResponse

    client = MagicMock()
    client.requests = []

    def _fetch(endpoint, info):
        request = endpoint.request(info)
        client.requests.append(request)
        return endpoint.parse(HTTPResponse(status=200))

    client.fetch.side_effect = _fetch
    return client
