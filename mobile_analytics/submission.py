"""
Submission Payload

The canonical document posted to the analytics endpoint, and the mapping
from a MetricsInfo into it.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Callable, Dict

from .metrics import Metric
from .payloads import MetricsInfo, NetworkTransferMetric, SystemPayload, TriggeredPayload


def _wire(name: str, **kwargs):
    """Dataclass field serialized under the given JSON key"""
    return field(metadata={"json": name}, **kwargs)


def _to_dict(instance, encode_date: Callable[[datetime], Any]) -> Dict[str, Any]:
    result = {}
    for f in fields(instance):
        value = getattr(instance, f.name)
        if is_dataclass(value):
            value = _to_dict(value, encode_date)
        elif isinstance(value, datetime):
            value = encode_date(value)
        result[f.metadata["json"]] = value
    return result


@dataclass
class Period:
    start_date: datetime = _wire("startDate")
    end_date: datetime = _wire("endDate")


@dataclass
class Metadata:
    postal_district: str = _wire("postalDistrict")
    device_model: str = _wire("deviceModel")
    operating_system_version: str = _wire("operatingSystemVersion")
    latest_application_version: str = _wire("latestApplicationVersion")


@dataclass
class SubmissionMetrics:
    # Networking
    cumulative_wifi_upload_bytes: int = _wire("cumulativeWifiUploadBytes", default=0)
    cumulative_wifi_download_bytes: int = _wire("cumulativeWifiDownloadBytes", default=0)
    cumulative_cellular_upload_bytes: int = _wire("cumulativeCellularUploadBytes", default=0)
    cumulative_cellular_download_bytes: int = _wire("cumulativeCellularDownloadBytes", default=0)
    cumulative_download_bytes: int = _wire("cumulativeDownloadBytes", default=0)
    cumulative_upload_bytes: int = _wire("cumulativeUploadBytes", default=0)

    # Events triggered
    completed_onboarding: int = _wire("completedOnboarding", default=0)
    checked_in: int = _wire("checkedIn", default=0)
    canceled_check_in: int = _wire("canceledCheckIn", default=0)
    completed_questionnaire_and_started_isolation: int = _wire(
        "completedQuestionnaireAndStartedIsolation", default=0)
    completed_questionnaire_but_did_not_start_isolation: int = _wire(
        "completedQuestionnaireButDidNotStartIsolation", default=0)
    received_positive_test_result: int = _wire("receivedPositiveTestResult", default=0)
    received_negative_test_result: int = _wire("receivedNegativeTestResult", default=0)
    received_void_test_result: int = _wire("receivedVoidTestResult", default=0)

    # How many times background tasks ran
    total_background_tasks: int = _wire("totalBackgroundTasks", default=0)

    # Background task runs while the app was running normally (max: total_background_tasks)
    running_normally_background_tick: int = _wire("runningNormallyBackgroundTick", default=0)

    # Background ticks (max: running_normally_background_tick)
    is_isolating_background_tick: int = _wire("isIsolatingBackgroundTick", default=0)
    has_had_risky_contact_background_tick: int = _wire("hasHadRiskyContactBackgroundTick", default=0)
    has_self_diagnosed_positive_background_tick: int = _wire(
        "hasSelfDiagnosedPositiveBackgroundTick", default=0)
    encounter_detection_paused_background_tick: int = _wire(
        "encounterDetectionPausedBackgroundTick", default=0)

    def set_network_transfer(self, network: NetworkTransferMetric):
        self.cumulative_wifi_upload_bytes = network.cumulative_wifi_upload.whole_bytes()
        self.cumulative_wifi_download_bytes = network.cumulative_wifi_download.whole_bytes()
        self.cumulative_cellular_upload_bytes = network.cumulative_cellular_upload.whole_bytes()
        self.cumulative_cellular_download_bytes = network.cumulative_cellular_download.whole_bytes()
        self.cumulative_download_bytes = self.cumulative_wifi_download_bytes + self.cumulative_cellular_download_bytes
        self.cumulative_upload_bytes = self.cumulative_wifi_upload_bytes + self.cumulative_cellular_upload_bytes

    def set_recorded_metrics(self, recorded_metrics: Dict[Metric, int]):
        for metric in Metric:
            setattr(self, METRIC_FIELDS[metric], recorded_metrics.get(metric, 0))


# Field written for each recorded metric
METRIC_FIELDS: Dict[Metric, str] = {
    Metric.backgroundTasks: "total_background_tasks",
    Metric.completedOnboarding: "completed_onboarding",
    Metric.checkedIn: "checked_in",
    Metric.deletedLastCheckIn: "canceled_check_in",
    Metric.completedQuestionnaireAndStartedIsolation: "completed_questionnaire_and_started_isolation",
    Metric.completedQuestionnaireButDidNotStartIsolation: "completed_questionnaire_but_did_not_start_isolation",
    Metric.receivedPositiveTestResult: "received_positive_test_result",
    Metric.receivedNegativeTestResult: "received_negative_test_result",
    Metric.receivedVoidTestResult: "received_void_test_result",
    Metric.contactCaseBackgroundTick: "has_had_risky_contact_background_tick",
    Metric.indexCaseBackgroundTick: "has_self_diagnosed_positive_background_tick",
    Metric.isolationBackgroundTick: "is_isolating_background_tick",
    Metric.pauseTick: "encounter_detection_paused_background_tick",
    Metric.runningNormallyTick: "running_normally_background_tick",
}


def check_metric_fields(metric_fields: Dict[Metric, str]):
    """
    Check every metric is written to its own submission field

    Raises:
        RuntimeError: If a metric has no field, a field is unknown, or two metrics share one
    """
    field_names = {f.name for f in fields(SubmissionMetrics)}
    missing = set(Metric) - set(metric_fields)
    if missing:
        raise RuntimeError(f"Metrics without a submission field: {sorted(m.name for m in missing)}")
    unknown = set(metric_fields.values()) - field_names
    if unknown:
        raise RuntimeError(f"Unknown submission fields: {sorted(unknown)}")
    if len(set(metric_fields.values())) != len(metric_fields):
        raise RuntimeError("Metrics must not share a submission field")


check_metric_fields(METRIC_FIELDS)


@dataclass
class SubmissionPayload:
    includes_multiple_application_versions: bool = _wire("includesMultipleApplicationVersions")
    analytics_window: Period = _wire("analyticsWindow")
    metadata: Metadata = _wire("metadata")
    metrics: SubmissionMetrics = _wire("metrics")

    @classmethod
    def from_metrics_info(cls, info: MetricsInfo) -> 'SubmissionPayload':
        """
        Build the submission for one metrics window

        Missing device metadata becomes an empty string, missing network
        transfer metrics count as zero, and metrics absent from
        info.recorded_metrics are submitted as 0.
        """
        payload = info.payload
        metrics = SubmissionMetrics()

        if isinstance(payload, SystemPayload):
            meta_data = payload.meta_data
            window = Period(payload.time_stamp_begin, payload.time_stamp_end)
            metadata = Metadata(
                postal_district=info.postal_district,
                device_model=(meta_data.device_type if meta_data else None) or "",
                operating_system_version=(meta_data.os_version if meta_data else None) or "",
                latest_application_version=payload.latest_application_version,
            )
            metrics.set_network_transfer(payload.network_transfer_metrics or NetworkTransferMetric())
        elif isinstance(payload, TriggeredPayload):
            window = Period(payload.start_date, payload.end_date)
            metadata = Metadata(
                postal_district=info.postal_district,
                device_model=payload.device_model,
                operating_system_version=payload.operating_system_version,
                latest_application_version=payload.latest_application_version,
            )
            # Triggered windows carry no network transfer data
            metrics.set_network_transfer(NetworkTransferMetric())
        else:
            raise TypeError(f"Unsupported metrics payload: {type(payload).__name__}")

        metrics.set_recorded_metrics(info.recorded_metrics)

        return cls(
            includes_multiple_application_versions=payload.includes_multiple_application_versions,
            analytics_window=window,
            metadata=metadata,
            metrics=metrics,
        )

    def to_dict(self, encode_date: Callable[[datetime], Any] = datetime.isoformat) -> Dict[str, Any]:
        """JSON-ready dictionary keyed by wire names, in declaration order"""
        return _to_dict(self, encode_date)
