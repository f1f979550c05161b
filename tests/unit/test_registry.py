"""Unit tests for ConfigurerRegistry and load_registry().

Entry point discovery is exercised with mocked entry points; no installed
distribution metadata is required.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations import JaegerConfigurer, LokiConfigurer
from gateway_composer.errors import (
    ConfigurerLoadError,
    RegistrationConflictError,
    RegistryFrozenError,
    UnknownDestinationTypeError,
)
from gateway_composer.registry import ENTRY_POINT_GROUP, ConfigurerRegistry, load_registry
from gateway_composer.schemas.collector_config import CollectorConfig


class OtherJaegerConfigurer(DestinationConfigurer):
    """Second configurer claiming the ``jaeger`` type."""

    @property
    def destination_type(self) -> str:
        return "jaeger"

    def modify_config(self, descriptor: Any, config: CollectorConfig) -> None:
        pass


class TestRegister:
    """Tests for register() and resolve()."""

    def test_register_and_resolve(self) -> None:
        """Test a registered configurer is resolved by type."""
        registry = ConfigurerRegistry()
        jaeger = JaegerConfigurer()

        registry.register(jaeger)

        assert registry.resolve("jaeger") is jaeger
        assert "jaeger" in registry
        assert len(registry) == 1

    def test_types_in_registration_order(self) -> None:
        """Test types() and iteration follow registration order."""
        registry = ConfigurerRegistry([LokiConfigurer(), JaegerConfigurer()])

        assert registry.types() == ["loki", "jaeger"]
        assert [c.destination_type for c in registry] == ["loki", "jaeger"]

    @pytest.mark.requirement("FR-009")
    def test_duplicate_type_conflicts(self) -> None:
        """Test two configurers for one type fail at registration."""
        registry = ConfigurerRegistry([JaegerConfigurer()])

        with pytest.raises(RegistrationConflictError) as exc_info:
            registry.register(OtherJaegerConfigurer())

        assert exc_info.value.destination_type == "jaeger"
        assert exc_info.value.existing == "JaegerConfigurer"
        assert exc_info.value.rejected == "OtherJaegerConfigurer"
        assert isinstance(registry.resolve("jaeger"), JaegerConfigurer)

    @pytest.mark.requirement("FR-009")
    def test_duplicate_in_constructor_conflicts(self) -> None:
        """Test the constructor applies the same conflict rule."""
        with pytest.raises(RegistrationConflictError):
            ConfigurerRegistry([JaegerConfigurer(), JaegerConfigurer()])

    def test_register_rejects_non_configurer(self) -> None:
        """Test only DestinationConfigurer instances can be registered."""
        with pytest.raises(TypeError, match="Expected a DestinationConfigurer"):
            ConfigurerRegistry().register(object())  # type: ignore[arg-type]

    @pytest.mark.requirement("FR-006")
    def test_resolve_unknown_type(self) -> None:
        """Test resolving an unbound type names the type and destination."""
        registry = ConfigurerRegistry()

        with pytest.raises(UnknownDestinationTypeError) as exc_info:
            registry.resolve("mydest", "mydest-prod")

        assert exc_info.value.destination_type == "mydest"
        assert exc_info.value.destination_id == "mydest-prod"

    @pytest.mark.requirement("FR-009")
    def test_frozen_registry_rejects_registration(self) -> None:
        """Test registration after freeze() fails."""
        registry = ConfigurerRegistry([JaegerConfigurer()])
        registry.freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(LokiConfigurer())
        assert registry.resolve("jaeger").display_name == "Jaeger"


class TestDiscover:
    """Tests for entry point discovery."""

    def test_discover_registers_sorted_by_name(
        self, mock_entry_point: Callable[[str, str, str], MagicMock]
    ) -> None:
        """Test configurer classes are instantiated and registered by name order."""
        loki_ep = mock_entry_point("loki", ENTRY_POINT_GROUP, "pkg.loki:LokiConfigurer")
        loki_ep.load.return_value = LokiConfigurer
        jaeger_ep = mock_entry_point("jaeger", ENTRY_POINT_GROUP, "pkg.jaeger:JaegerConfigurer")
        jaeger_ep.load.return_value = JaegerConfigurer

        registry = ConfigurerRegistry()
        with patch("gateway_composer.registry.entry_points") as mock_entry_points:
            mock_entry_points.return_value = [loki_ep, jaeger_ep]
            count = registry.discover()

        mock_entry_points.assert_called_once_with(group=ENTRY_POINT_GROUP)
        assert count == 2
        assert registry.types() == ["jaeger", "loki"]

    def test_discover_accepts_instances(
        self, mock_entry_point: Callable[[str, str, str], MagicMock]
    ) -> None:
        """Test an entry point may point at a configurer instance."""
        instance = JaegerConfigurer()
        ep = mock_entry_point("jaeger", ENTRY_POINT_GROUP, "pkg:JAEGER")
        ep.load.return_value = instance

        registry = ConfigurerRegistry()
        with patch("gateway_composer.registry.entry_points", return_value=[ep]):
            registry.discover()

        assert registry.resolve("jaeger") is instance

    def test_load_failure_is_fatal(
        self, mock_entry_point: Callable[[str, str, str], MagicMock]
    ) -> None:
        """Test a broken entry point stops discovery instead of being skipped."""
        ep = mock_entry_point("broken", ENTRY_POINT_GROUP, "missing.module:Broken")
        ep.load.side_effect = ImportError("No module named 'missing'")

        registry = ConfigurerRegistry()
        with patch("gateway_composer.registry.entry_points", return_value=[ep]):
            with pytest.raises(ConfigurerLoadError) as exc_info:
                registry.discover()

        assert exc_info.value.entry_point == "broken"
        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_non_configurer_is_load_error(
        self, mock_entry_point: Callable[[str, str, str], MagicMock]
    ) -> None:
        """Test an entry point resolving to something else fails."""
        ep = mock_entry_point("notone", ENTRY_POINT_GROUP, "pkg:thing")
        ep.load.return_value = {"not": "a configurer"}

        with patch("gateway_composer.registry.entry_points", return_value=[ep]):
            with pytest.raises(ConfigurerLoadError, match="not a DestinationConfigurer"):
                ConfigurerRegistry().discover()

    @pytest.mark.requirement("FR-009")
    def test_duplicate_discovered_type_conflicts(
        self, mock_entry_point: Callable[[str, str, str], MagicMock]
    ) -> None:
        """Test two packages advertising one type fail discovery."""
        first = mock_entry_point("jaeger", ENTRY_POINT_GROUP, "a:JaegerConfigurer")
        first.load.return_value = JaegerConfigurer
        second = mock_entry_point("jaeger-alt", ENTRY_POINT_GROUP, "b:OtherJaegerConfigurer")
        second.load.return_value = OtherJaegerConfigurer

        with patch("gateway_composer.registry.entry_points", return_value=[first, second]):
            with pytest.raises(RegistrationConflictError):
                ConfigurerRegistry().discover()


class TestLoadRegistry:
    """Tests for load_registry()."""

    def test_discovers_registers_extra_and_freezes(
        self,
        mock_entry_point: Callable[[str, str, str], MagicMock],
        mydest_configurer: DestinationConfigurer,
    ) -> None:
        """Test load_registry() combines discovery with extra configurers."""
        ep = mock_entry_point("jaeger", ENTRY_POINT_GROUP, "pkg:JaegerConfigurer")
        ep.load.return_value = JaegerConfigurer

        with patch("gateway_composer.registry.entry_points", return_value=[ep]):
            registry = load_registry([mydest_configurer])

        assert registry.types() == ["jaeger", "mydest"]
        assert registry.frozen

    def test_custom_group(self) -> None:
        """Test the entry point group can be overridden."""
        with patch("gateway_composer.registry.entry_points", return_value=[]) as mock_eps:
            registry = load_registry(group="acme.destinations")

        mock_eps.assert_called_once_with(group="acme.destinations")
        assert len(registry) == 0
