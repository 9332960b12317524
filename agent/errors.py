from __future__ import annotations


class DxVifError(Exception):
    """Base class for every error raised by the plugin."""


class ConfigurationError(DxVifError):
    """Credentials or region could not be resolved; the run cannot continue."""


class MetricFetchError(DxVifError):
    """A single metric could not be fetched. The report substitutes zero."""


class QueryError(MetricFetchError):
    """Transport or service-side failure of GetMetricStatistics."""


class NoDataError(MetricFetchError):
    """The service returned no usable datapoint for the window."""


class UnsupportedStatisticError(MetricFetchError):
    """No extraction rule exists for the requested statistic."""
