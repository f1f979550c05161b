"""Shared test configuration for gateway-composer.

Fixtures here:
- Reset structlog and the cached tracers after every test, so a test that
  configures logging (e.g. via the CLI) cannot leak a closed stream or a
  test tracer into the next one.
- Build configurers, registries, descriptors and base configurations
  without relying on installed entry points.
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable
from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations import builtin_configurers
from gateway_composer.loader import default_base_config
from gateway_composer.registry import ConfigurerRegistry
from gateway_composer.schemas.collector_config import CollectorConfig
from gateway_composer.schemas.destination import DestinationDescriptor
from gateway_composer.signals import Signal
from gateway_composer.telemetry.tracing import reset_tracer


class MyDestConfigurer(DestinationConfigurer):
    """Minimal configurer: one OTLP exporter, one pipeline per signal."""

    @property
    def destination_type(self) -> str:
        return "mydest"

    def modify_config(self, descriptor: Any, config: CollectorConfig) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return
        exporter = self.exporter_name("otlp")
        config.add_exporter(exporter, {"endpoint": "https://mydest.com:4317"})
        self.add_signal_pipelines(config, exporter, signals)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers.

    Registers the requirement marker for test traceability.
    """
    config.addinivalue_line(
        "markers",
        "requirement(id): Link test to a requirement ID (e.g., FR-001)",
    )


@pytest.fixture(autouse=True)
def reset_telemetry() -> Generator[None, None, None]:
    """Restore default structlog configuration and clear cached tracers."""
    yield
    structlog.reset_defaults()
    reset_tracer()


@pytest.fixture
def mydest_configurer() -> MyDestConfigurer:
    """Configurer for the ``mydest`` destination type."""
    return MyDestConfigurer()


@pytest.fixture
def mydest_registry(mydest_configurer: MyDestConfigurer) -> ConfigurerRegistry:
    """Frozen registry holding only the ``mydest`` configurer."""
    registry = ConfigurerRegistry([mydest_configurer])
    registry.freeze()
    return registry


@pytest.fixture
def builtin_registry() -> ConfigurerRegistry:
    """Frozen registry holding every built-in configurer."""
    registry = ConfigurerRegistry(builtin_configurers())
    registry.freeze()
    return registry


@pytest.fixture
def base_config() -> CollectorConfig:
    """Base topology: ``otlp`` receiver and ``batch`` processor, nothing else."""
    return default_base_config()


@pytest.fixture
def make_descriptor() -> Callable[..., DestinationDescriptor]:
    """Factory fixture for destination descriptors.

    Usage:
        def test_x(make_descriptor: Callable[..., DestinationDescriptor]) -> None:
            d = make_descriptor("jaeger", [Signal.TRACES], data={"JAEGER_URL": "j:4317"})
    """

    def _make(
        destination_type: str,
        signals: Iterable[Signal] = (),
        *,
        data: dict[str, str] | None = None,
        secret_data: dict[str, str] | None = None,
        destination_id: str | None = None,
    ) -> DestinationDescriptor:
        return DestinationDescriptor(
            type=destination_type,
            id=destination_id,
            signals=frozenset(signals),
            data=data or {},
            secret_data=secret_data or {},
        )

    return _make


@pytest.fixture
def mock_entry_point() -> Callable[[str, str, str], MagicMock]:
    """Factory fixture to create mock entry points.

    Usage:
        def test_discovery(mock_entry_point: Callable) -> None:
            ep = mock_entry_point("mydest", "gateway_composer.destinations", "pkg:MyDest")
            ep.load.return_value = MyDest
    """

    def _create_entry_point(name: str, group: str, value: str) -> MagicMock:
        ep = MagicMock(spec=["name", "group", "value", "load"])
        ep.name = name
        ep.group = group
        ep.value = value
        return ep

    return _create_entry_point
