"""Exceptions raised by the monitoring pipeline."""


class MonitorError(Exception):
    """Base class for all monitor errors."""


class ConfigLoadFailure(MonitorError):
    """URL list or configuration could not be loaded. Fatal before sampling."""


class ScorerError(MonitorError):
    """A single Lighthouse invocation failed or produced unusable output."""


class SamplingFailure(MonitorError):
    """Every sampling run for a URL failed."""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(f"All {attempts} Lighthouse runs failed for {url}")


class EmptySampleSet(MonitorError):
    """Aggregation was asked to average zero samples."""


class PersistenceFailure(MonitorError):
    """A snapshot or report could not be written."""


class DeserializationFailure(MonitorError):
    """A stored snapshot record is corrupt or malformed."""
