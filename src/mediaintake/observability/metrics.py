"""Metrics hook protocol and no-op default implementation.

mediaintake emits counters and timings around every transfer.  By
default a :class:`NoopMetricsHook` is used; supply any object satisfying
:class:`MetricsHook` through ``IntakeConfig(metrics=...)`` to forward
them to StatsD, Prometheus, or similar.

Emitted metric names:

* ``mediaintake.upload_success_total``    -- counter
* ``mediaintake.upload_failure_total``    -- counter (tag ``code``)
* ``mediaintake.upload_duration_ms``      -- timing
* ``mediaintake.bytes_uploaded_total``    -- counter
* ``mediaintake.rejected_total``          -- counter (tag ``code``)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
