"""Unit tests for the gateway-composer CLI.

Commands run through click's CliRunner with a registry passed in the
context object, so no installed entry points are needed.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from gateway_composer.cli import ExitCode, cli
from gateway_composer.registry import ConfigurerRegistry

DESTINATIONS_YAML = """
destinations:
  - type: jaeger
    enabledSignals: [traces]
    data:
      JAEGER_URL: jaeger-collector:4317
  - type: loki
    id: loki-eu
    enabledSignals: [logs]
    data:
      LOKI_URL: http://loki:3100
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def destinations_file(tmp_path: Path) -> Path:
    path = tmp_path / "destinations.yaml"
    path.write_text(DESTINATIONS_YAML, encoding="utf-8")
    return path


class TestCliGroup:
    """Tests for the root command group."""

    def test_help(self, runner: CliRunner) -> None:
        """Test --help lists the commands."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "compose" in result.output
        assert "destinations" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """Test --version prints the program name."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("gateway-composer ")


class TestDestinationsCommand:
    """Tests for ``gateway-composer destinations``."""

    def test_lists_types_and_signals(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry
    ) -> None:
        """Test one sorted line per registered type."""
        result = runner.invoke(cli, ["destinations"], obj={"registry": builtin_registry})

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "datadog\tDatadog\ttraces,metrics,logs"
        assert "jaeger\tJaeger\ttraces" in lines
        assert "loki\tLoki\tlogs" in lines
        assert len(lines) == len(builtin_registry)


class TestComposeCommand:
    """Tests for ``gateway-composer compose``."""

    def test_compose_to_stdout(
        self,
        runner: CliRunner,
        builtin_registry: ConfigurerRegistry,
        destinations_file: Path,
    ) -> None:
        """Test the default base plus destinations are written as YAML."""
        result = runner.invoke(
            cli,
            ["compose", "--destinations", str(destinations_file)],
            obj={"registry": builtin_registry},
        )

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(result.output)
        assert set(document["exporters"]) == {"otlp/jaeger", "loki/loki"}
        assert set(document["service"]["pipelines"]) == {"traces/jaeger", "logs/loki"}
        assert "otlp" in document["receivers"]

    def test_compose_to_file_with_base_and_settings(
        self,
        runner: CliRunner,
        builtin_registry: ConfigurerRegistry,
        destinations_file: Path,
        tmp_path: Path,
    ) -> None:
        """Test --base, --settings and --output."""
        base = tmp_path / "base.yaml"
        base.write_text(
            "receivers:\n  otlp: {}\nprocessors:\n  memory_limiter: {}\n  batch: {}\n",
            encoding="utf-8",
        )
        settings = tmp_path / "settings.yaml"
        settings.write_text("shared_processors: [memory_limiter, batch]\n", encoding="utf-8")
        output = tmp_path / "out" / "collector.yaml"

        result = runner.invoke(
            cli,
            [
                "compose",
                "-b", str(base),
                "-d", str(destinations_file),
                "-s", str(settings),
                "-o", str(output),
            ],
            obj={"registry": builtin_registry},
        )

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert document["service"]["pipelines"]["traces/jaeger"]["processors"] == [
            "memory_limiter",
            "batch",
        ]

    def test_missing_destinations_option(self, runner: CliRunner) -> None:
        """Test --destinations is required."""
        result = runner.invoke(cli, ["compose"])

        assert result.exit_code == ExitCode.USAGE_ERROR

    def test_missing_file(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test a missing input file exits with FILE_NOT_FOUND."""
        result = runner.invoke(
            cli,
            ["compose", "-d", str(tmp_path / "missing.yaml")],
            obj={"registry": builtin_registry},
        )

        assert result.exit_code == ExitCode.FILE_NOT_FOUND
        assert "Error: File not found" in result.output

    @pytest.mark.requirement("FR-015")
    def test_invalid_input(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test a malformed destinations file exits with VALIDATION_ERROR."""
        path = tmp_path / "destinations.yaml"
        path.write_text("- type: jaeger\n  enabledSignals: [events]\n", encoding="utf-8")

        result = runner.invoke(
            cli, ["compose", "-d", str(path)], obj={"registry": builtin_registry}
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "destinations.0.enabledSignals" in result.output

    @pytest.mark.requirement("FR-015")
    def test_invalid_encoding(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test a non-UTF-8 destinations file exits with VALIDATION_ERROR."""
        path = tmp_path / "destinations.yaml"
        path.write_bytes(b"- type: jaeger\n  id: \xff\xfe\n")

        result = runner.invoke(
            cli, ["compose", "-d", str(path)], obj={"registry": builtin_registry}
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "invalid encoding" in result.output

    @pytest.mark.requirement("FR-015")
    def test_single_descriptor_mapping(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test a destinations file holding one bare mapping fails instead of composing nothing."""
        path = tmp_path / "destinations.yaml"
        path.write_text(
            "type: jaeger\nenabledSignals: [traces]\ndata: {JAEGER_URL: 'j:4317'}\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            cli, ["compose", "-d", str(path)], obj={"registry": builtin_registry}
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR

    def test_unknown_destination_type(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test composition failures exit with COMPOSITION_ERROR and name the destination."""
        path = tmp_path / "destinations.yaml"
        path.write_text("- type: acme\n  id: acme-prod\n  enabledSignals: [traces]\n", encoding="utf-8")

        result = runner.invoke(
            cli, ["compose", "-d", str(path)], obj={"registry": builtin_registry}
        )

        assert result.exit_code == ExitCode.COMPOSITION_ERROR
        assert "destination_type=acme" in result.output
        assert "destination_id=acme-prod" in result.output

    def test_missing_required_field(
        self, runner: CliRunner, builtin_registry: ConfigurerRegistry, tmp_path: Path
    ) -> None:
        """Test a destination missing required data fails the whole run."""
        path = tmp_path / "destinations.yaml"
        path.write_text("- type: jaeger\n  enabledSignals: [traces]\n", encoding="utf-8")
        output = tmp_path / "collector.yaml"

        result = runner.invoke(
            cli,
            ["compose", "-d", str(path), "-o", str(output)],
            obj={"registry": builtin_registry},
        )

        assert result.exit_code == ExitCode.COMPOSITION_ERROR
        assert "JAEGER_URL" in result.output
        assert not output.exists()
