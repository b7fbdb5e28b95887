"""
Unit tests for the metrics reporter and its configuration
"""
import logging
import sys
import types

import pytest

from mobile_analytics import log_utils
from mobile_analytics.backends.http import DEFAULT_TIMEOUT, HTTPClient
from mobile_analytics.endpoint import SUBMISSION_PATH
from mobile_analytics.exceptions import HTTPClientError, PayloadEncodingError
from mobile_analytics.metrics import Metric
from mobile_analytics.reporter import MetricsReporter, get_client, get_reporter


@pytest.fixture
def analytics_config(monkeypatch):
    """Install an analytics_config module with the given settings"""
    def _install(**settings):
        module = types.ModuleType("analytics_config")
        for name, value in settings.items():
            setattr(module, name, value)
        monkeypatch.setitem(sys.modules, "analytics_config", module)
        return module
    return _install


@pytest.fixture
def no_analytics_config(monkeypatch):
    # None in sys.modules makes the import raise ImportError
    monkeypatch.setitem(sys.modules, "analytics_config", None)


class TestMetricsReporter:
    """Test submitting through the reporter"""

    def test_submit_sends_one_request(self, mock_http_client, system_payload, make_info):
        reporter = MetricsReporter(mock_http_client)

        assert reporter.submit(make_info(system_payload, {Metric.checkedIn: 3})) is True

        assert mock_http_client.fetch.call_count == 1
        request = mock_http_client.requests[0]
        assert request.method == "POST"
        assert request.path == SUBMISSION_PATH

    def test_disabled_sends_nothing(self, mock_http_client, system_payload, make_info):
        reporter = MetricsReporter(mock_http_client, enabled=False)

        assert reporter.submit(make_info(system_payload)) is False
        mock_http_client.fetch.assert_not_called()

    def test_set_enabled(self, mock_http_client, triggered_payload, make_info):
        reporter = MetricsReporter(mock_http_client)

        reporter.set_enabled(False)
        assert reporter.submit(make_info(triggered_payload)) is False

        reporter.set_enabled(True)
        assert reporter.submit(make_info(triggered_payload)) is True

    def test_transport_error_propagates(self, mock_http_client, triggered_payload, make_info):
        mock_http_client.fetch.side_effect = HTTPClientError("HTTP error: 503", status=503)
        reporter = MetricsReporter(mock_http_client)

        with pytest.raises(HTTPClientError):
            reporter.submit(make_info(triggered_payload))

    def test_encoding_error_propagates(self, mock_http_client, triggered_payload, make_info):
        reporter = MetricsReporter(mock_http_client)

        with pytest.raises(PayloadEncodingError):
            reporter.submit(make_info(triggered_payload, {Metric.pauseTick: float("inf")}))

        assert mock_http_client.requests == []


class TestGetClient:
    """Test loading the client from analytics_config"""

    def test_missing_config(self, no_analytics_config):
        assert get_client() is None
        assert get_reporter() is None

    def test_missing_base_url(self, analytics_config):
        analytics_config(TELEMETRY_DEBUG=False)
        assert get_client() is None

    def test_configured(self, analytics_config):
        analytics_config(ANALYTICS_BASE_URL="https://analytics.example.com", ANALYTICS_TIMEOUT=10)

        client = get_client()

        assert isinstance(client, HTTPClient)
        assert client.base_url == "https://analytics.example.com"
        assert client.timeout == 10

    def test_default_timeout(self, analytics_config):
        analytics_config(ANALYTICS_BASE_URL="https://analytics.example.com")
        assert get_client().timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("enabled", [True, False])
    def test_reporter_enabled_by_default_setting(self, analytics_config, enabled):
        analytics_config(ANALYTICS_BASE_URL="https://analytics.example.com",
                         TELEMETRY_ENABLED_BY_DEFAULT=enabled)

        reporter = get_reporter()

        assert reporter.enabled is enabled
        assert reporter.client.base_url == "https://analytics.example.com"


class TestGetReporterDebug:
    """Test TELEMETRY_DEBUG takes effect when the reporter is loaded"""

    def test_debug_enables_debug_logging(self, analytics_config, monkeypatch, tmp_path):
        debug_file = tmp_path / "debug.log"
        monkeypatch.setattr(log_utils, "DEBUG_LOG_FILE", debug_file)
        analytics_config(ANALYTICS_BASE_URL="https://analytics.example.com", TELEMETRY_DEBUG=True)

        reporter = get_reporter()

        assert reporter is not None
        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
        for handler in root_logger.handlers:
            handler.flush()
        assert "HTTP client configured" in debug_file.read_text()

    def test_debug_applies_without_client(self, analytics_config, monkeypatch, tmp_path):
        monkeypatch.setattr(log_utils, "DEBUG_LOG_FILE", tmp_path / "debug.log")
        analytics_config(TELEMETRY_DEBUG=True)

        assert get_reporter() is None
        assert logging.getLogger().level == logging.DEBUG

    def test_logging_untouched_without_debug(self, analytics_config):
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.WARNING)
        handlers = list(root_logger.handlers)
        analytics_config(ANALYTICS_BASE_URL="https://analytics.example.com")

        get_reporter()

        assert root_logger.level == logging.WARNING
        assert root_logger.handlers == handlers
