from __future__ import annotations

from datetime import datetime, timezone
from operator import attrgetter
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from botocore.exceptions import BotoCoreError, ClientError

from agent.errors import (
    MetricFetchError,
    NoDataError,
    QueryError,
    UnsupportedStatisticError,
)
from common.settings import MonitoredResource
from common.utils.logging_setup import setup_logger
from common.utils.timer import BlockTimer

from .models import (
    DEFAULT_METRICS,
    NAMESPACE,
    PERIOD_SECONDS,
    MetricDescriptor,
    Sample,
    Statistic,
    TimeWindow,
    statistic_name,
)

logger = setup_logger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_dimensions(resource: MonitoredResource) -> List[dict]:
    # https://docs.aws.amazon.com/directconnect/latest/UserGuide/monitoring-cloudwatch.html#metrics-dimensions
    return [
        {"Name": "ConnectionId", "Value": resource.connection_id},
        {"Name": "VirtualInterfaceId", "Value": resource.virtual_interface_id},
    ]


def fetch_samples(
    client,
    descriptor: MetricDescriptor,
    resource: MonitoredResource,
    window: TimeWindow,
) -> List[Sample]:
    """Issue one GetMetricStatistics request and return its datapoints."""
    try:
        response = client.get_metric_statistics(
            Namespace=NAMESPACE,
            MetricName=descriptor.name,
            Dimensions=build_dimensions(resource),
            StartTime=window.start,
            EndTime=window.end,
            Period=PERIOD_SECONDS,
            Statistics=[statistic_name(descriptor.statistic)],
        )
    except (BotoCoreError, ClientError) as exc:
        raise QueryError(f"GetMetricStatistics failed: {exc}") from exc

    datapoints = response.get("Datapoints") or []
    if not datapoints:
        raise NoDataError(f"fetch no datapoints : {resource.virtual_interface_id}")

    return [Sample.from_datapoint(dp) for dp in datapoints]


def _extractor(statistic: str) -> Callable[[Sample], Optional[float]]:
    return lambda sample: sample.values.get(statistic)


_EXTRACTORS: Dict[str, Callable[[Sample], Optional[float]]] = {
    stat.value: _extractor(stat.value) for stat in Statistic
}


def select_value(
    samples: Sequence[Sample], statistic: Union[Statistic, str]
) -> float:
    """
    Return the value of the least recent sample.

    The newest period may still be accumulating data, so the oldest one in
    the window is the one most likely to be final. Samples sharing the
    earliest timestamp resolve to the first one in response order.
    """
    if not samples:
        raise NoDataError("no samples to select from")

    name = statistic_name(statistic)
    extract = _EXTRACTORS.get(name)
    if extract is None:
        raise UnsupportedStatisticError(f"no extraction rule for statistic {name!r}")

    # min() keeps the first of equal keys
    earliest = min(samples, key=attrgetter("timestamp"))
    value = extract(earliest)
    if value is None:
        raise NoDataError(
            f"datapoint at {earliest.timestamp.isoformat()} has no {name} value"
        )
    return value


class DxVifCollector:
    """
    Fetches the Direct Connect virtual interface metrics, one request per
    metric, and assembles them into a report keyed by metric name.
    """

    def __init__(
        self,
        client,
        resource: MonitoredResource,
        metrics: Iterable[MetricDescriptor] = DEFAULT_METRICS,
        clock: Clock = _utc_now,
    ) -> None:
        self._client = client
        self._resource = resource
        self._metrics = tuple(metrics)
        self._clock = clock

    def fetch_metric(self, descriptor: MetricDescriptor) -> float:
        window = TimeWindow.trailing(self._clock())
        samples = fetch_samples(self._client, descriptor, self._resource, window)
        return select_value(samples, descriptor.statistic)

    def fetch_metrics(self) -> Dict[str, float]:
        """
        Always returns every metric key. A metric that fails is logged and
        reported as 0.0; the rest of the batch carries on.
        """
        stat: Dict[str, float] = {}
        with BlockTimer("fetch_metrics", logger):
            for descriptor in self._metrics:
                try:
                    value = self.fetch_metric(descriptor)
                except MetricFetchError as exc:
                    logger.warning("%s : %s", descriptor, exc)
                    value = 0.0
                stat[descriptor.name] = value
        return stat
