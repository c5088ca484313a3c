"""Prometheus counters for the keyguard device shim."""

from __future__ import annotations

from typing import Final

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, generate_latest

METRICS_CONTENT_TYPE: Final[str] = CONTENT_TYPE_LATEST


class DeviceMetrics:
    """Request and rejection counters, kept on a private registry."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self._requests = Counter(
            "keyguard_requests",
            "Enroll/verify requests handled by the keyguard device",
            ["operation"],
            registry=self.registry,
        )
        self._rejections = Counter(
            "keyguard_rejections",
            "Enroll/verify requests rejected by the keyguard device",
            ["operation", "reason"],
            registry=self.registry,
        )

    def record_request(self, operation: str) -> None:
        self._requests.labels(operation=operation).inc()

    def record_rejection(self, operation: str, reason: str) -> None:
        self._rejections.labels(operation=operation, reason=reason).inc()

    def value(self, name: str, **labels: str) -> float:
        """Return the current sample value for *name*, or 0.0 if unset."""
        sample = self.registry.get_sample_value(name, labels)
        return sample if sample is not None else 0.0

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)


__all__ = ["METRICS_CONTENT_TYPE", "DeviceMetrics"]
