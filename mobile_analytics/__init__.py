"""
Mobile Analytics Submission

Maps collected usage metrics into the analytics submission payload and
posts it to the analytics endpoint.
"""

from .metrics import Metric, SignpostMetric, recorded_metrics_from_signposts
from .payloads import (
    DataUnit,
    DeviceMetadata,
    Measurement,
    MetricsInfo,
    NetworkTransferMetric,
    SystemPayload,
    TriggeredPayload,
)
from .submission import SubmissionPayload
from .endpoint import MetricSubmissionEndpoint, HTTPRequest, HTTPResponse
from .exceptions import MetricsSubmissionError, PayloadEncodingError, HTTPClientError
from .reporter import MetricsReporter, get_client, get_reporter

__all__ = [
    'Metric',
    'SignpostMetric',
    'recorded_metrics_from_signposts',
    'DataUnit',
    'DeviceMetadata',
    'Measurement',
    'MetricsInfo',
    'NetworkTransferMetric',
    'SystemPayload',
    'TriggeredPayload',
    'SubmissionPayload',
    'MetricSubmissionEndpoint',
    'HTTPRequest',
    'HTTPResponse',
    'MetricsSubmissionError',
    'PayloadEncodingError',
    'HTTPClientError',
    'MetricsReporter',
    'get_client',
    'get_reporter',
]
