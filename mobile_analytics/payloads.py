"""
Metrics Input Types

Values handed over by the metrics collection subsystem for one submission
cycle: either an OS-collected window or a triggered (on-demand) window.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from .metrics import Metric, SignpostMetric, signpost_counts


class DataUnit(Enum):
    """Units of information storage, valued in bytes"""

    bits = 1 / 8
    kilobits = 1000 / 8
    megabits = 1000 ** 2 / 8
    bytes = 1
    kilobytes = 1000
    megabytes = 1000 ** 2
    gigabytes = 1000 ** 3
    kibibytes = 1024
    mebibytes = 1024 ** 2
    gibibytes = 1024 ** 3


@dataclass(frozen=True)
class Measurement:
    """An amount of information storage in a given unit"""

    value: float = 0
    unit: DataUnit = DataUnit.bytes

    def value_in(self, unit: DataUnit) -> float:
        """Convert the measurement to another unit"""
        if unit is self.unit:
            return self.value
        return self.value * self.unit.value / unit.value

    def whole_bytes(self) -> int:
        """Byte count with any fractional part truncated"""
        return int(self.value_in(DataUnit.bytes))


@dataclass(frozen=True)
class NetworkTransferMetric:
    """Cumulative network transfer over the window; every field defaults to zero"""

    cumulative_wifi_upload: Measurement = field(default_factory=Measurement)
    cumulative_wifi_download: Measurement = field(default_factory=Measurement)
    cumulative_cellular_upload: Measurement = field(default_factory=Measurement)
    cumulative_cellular_download: Measurement = field(default_factory=Measurement)


@dataclass(frozen=True)
class DeviceMetadata:
    device_type: Optional[str] = None
    os_version: Optional[str] = None


@dataclass
class SystemPayload:
    """Metrics window collected by the OS"""

    time_stamp_begin: datetime
    time_stamp_end: datetime
    latest_application_version: str
    includes_multiple_application_versions: bool = False
    meta_data: Optional[DeviceMetadata] = None
    network_transfer_metrics: Optional[NetworkTransferMetric] = None
    signpost_metrics: Optional[List[SignpostMetric]] = None

    @property
    def metric_counts(self) -> Dict[str, int]:
        """App metric signpost totals keyed by signpost name"""
        return signpost_counts(self.signpost_metrics)


@dataclass
class TriggeredPayload:
    """Metrics window produced on demand by the app rather than the OS"""

    start_date: datetime
    end_date: datetime
    device_model: str
    operating_system_version: str
    latest_application_version: str
    includes_multiple_application_versions: bool = False


MetricsInfoPayload = Union[SystemPayload, TriggeredPayload]


@dataclass
class MetricsInfo:
    """Everything needed to build one submission"""

    payload: MetricsInfoPayload
    postal_district: str
    recorded_metrics: Dict[Metric, int] = field(default_factory=dict)
