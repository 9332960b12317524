from .collector import DxVifCollector, fetch_samples, select_value
from .models import (
    DEFAULT_METRICS,
    NAMESPACE,
    PERIOD_SECONDS,
    WINDOW_SECONDS,
    MetricDescriptor,
    Sample,
    Statistic,
    TimeWindow,
)

__all__ = [
    "DEFAULT_METRICS",
    "NAMESPACE",
    "PERIOD_SECONDS",
    "WINDOW_SECONDS",
    "DxVifCollector",
    "MetricDescriptor",
    "Sample",
    "Statistic",
    "TimeWindow",
    "fetch_samples",
    "select_value",
]
