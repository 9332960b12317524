from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Optional, Tuple, Union

NAMESPACE = "AWS/DX"
PERIOD_SECONDS = 60
# Three periods, so at least one completed datapoint is in range.
WINDOW_SECONDS = 180


class Statistic(str, Enum):
    """CloudWatch standard statistics."""

    SAMPLE_COUNT = "SampleCount"
    AVERAGE = "Average"
    SUM = "Sum"
    MINIMUM = "Minimum"
    MAXIMUM = "Maximum"


def statistic_name(statistic: Union[Statistic, str]) -> str:
    if isinstance(statistic, Statistic):
        return statistic.value
    return str(statistic)


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    statistic: Union[Statistic, str] = Statistic.AVERAGE

    def __str__(self) -> str:
        return f"{self.name}({statistic_name(self.statistic)})"


# https://docs.aws.amazon.com/directconnect/latest/UserGuide/monitoring-cloudwatch.html
DEFAULT_METRICS: Tuple[MetricDescriptor, ...] = (
    # bitrate for outbound data from the AWS side of the virtual interface
    MetricDescriptor("VirtualInterfaceBpsEgress"),
    # bitrate for inbound data to the AWS side of the virtual interface
    MetricDescriptor("VirtualInterfaceBpsIngress"),
    MetricDescriptor("VirtualInterfacePpsEgress"),
    MetricDescriptor("VirtualInterfacePpsIngress"),
)


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    @classmethod
    def trailing(cls, now: datetime, seconds: int = WINDOW_SECONDS) -> "TimeWindow":
        return cls(start=now - timedelta(seconds=seconds), end=now)


@dataclass
class Sample:
    """
    One CloudWatch datapoint. ``values`` maps statistic names
    (e.g. "Average") to the numbers the service returned.
    """

    timestamp: datetime
    values: Dict[str, float] = field(default_factory=dict)
    unit: Optional[str] = None

    @classmethod
    def from_datapoint(cls, datapoint: dict) -> "Sample":
        values = {
            stat.value: float(datapoint[stat.value])
            for stat in Statistic
            if datapoint.get(stat.value) is not None
        }
        return cls(
            timestamp=datapoint["Timestamp"],
            values=values,
            unit=datapoint.get("Unit"),
        )
