"""apidrift CLI - Drift auditing of captured traffic against an OpenAPI contract."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click

from apidrift import __version__
from apidrift.comparison.spec_loader import extract_endpoints, load_spec
from apidrift.config import ApiDriftConfig, get_config
from apidrift.errors import ApiDriftError
from apidrift.ingestion.traffic_reader import load_traffic_file
from apidrift.logger import configure_logging
from apidrift.pipeline import analyze_traffic
from apidrift.report.export import EXPORT_FORMATS, export_report
from apidrift.report.longitudinal import build_report_v2
from apidrift.storage import StorageType, calculate_spec_hash, get_storage
from apidrift.storage.base import BaseReportStorage

LOG_LEVELS = ("debug", "info", "warning", "error")


def _load_config(storage_dir: Optional[str], log_level: Optional[str]) -> ApiDriftConfig:
    overrides: dict[str, Any] = {}
    if storage_dir:
        overrides["storage_dir"] = storage_dir
    if log_level:
        overrides["log_level"] = log_level
    config = get_config(**overrides)
    configure_logging(level=config.log_level, fmt=config.log_format)
    return config


def _open_storage(config: ApiDriftConfig) -> BaseReportStorage:
    if StorageType(config.storage_type) == StorageType.FILE:
        return get_storage(
            StorageType.FILE,
            base_dir=config.get_storage_path(),
            index_limit=config.index_limit,
        )
    return get_storage(config.storage_type)


def _echo(text: str) -> None:
    click.echo(text, nl=not text.endswith("\n"))


@click.group()
@click.version_option(version=__version__, prog_name="apidrift")
def main():
    """apidrift - Observed-behaviour drift auditing for HTTP services."""
    pass


@main.command("check")
@click.argument("spec_file", type=click.Path(dir_okay=False))
@click.argument("traffic_file", type=click.Path(dir_okay=False))
@click.option("--v2", "longitudinal", is_flag=True, help="Build, store and print a longitudinal report")
@click.option("--service-name", help="Service name (required with --v2)")
@click.option("--environment", help="Environment name (required with --v2)")
@click.option("--no-filter", is_flag=True, help="Report every finding, not only medium+ with enough samples")
@click.option("--storage-dir", type=click.Path(file_okay=False), help="Report history directory")
@click.option(
    "--format", "output_format",
    type=click.Choice(EXPORT_FORMATS),
    default="json-pretty",
    show_default=True,
    help="Output format",
)
@click.option("--log-level", type=click.Choice(LOG_LEVELS), help="Log level (logs go to stderr)")
def check_cmd(
    spec_file: str,
    traffic_file: str,
    longitudinal: bool,
    service_name: Optional[str],
    environment: Optional[str],
    no_filter: bool,
    storage_dir: Optional[str],
    output_format: str,
    log_level: Optional[str],
):
    """Compare captured traffic against an OpenAPI contract.

    TRAFFIC_FILE is a JSON array of samples with timestamp, method, path,
    statusCode and optional requestBody/responseBody.

    Example:
        apidrift check openapi.yaml traffic.json

    Track changes across runs:
        apidrift check openapi.yaml traffic.json --v2 \\
            --service-name users-api --environment staging
    """
    if longitudinal and not (service_name and environment):
        raise click.UsageError("--service-name and --environment are required with --v2")

    config = _load_config(storage_dir, log_level)

    try:
        spec_path = Path(spec_file)
        endpoints = extract_endpoints(load_spec(spec_path))
        samples = load_traffic_file(Path(traffic_file))
        report = analyze_traffic(samples, endpoints, apply_default_filter=not no_filter)

        if not longitudinal:
            _echo(export_report(report, output_format))
            return

        storage = _open_storage(config)
        v2_report = build_report_v2(
            report,
            service_name=service_name,
            environment=environment,
            spec_hash=calculate_spec_hash(spec_path),
            tool_version=__version__,
            storage=storage,
            history_limit=config.history_limit,
        )
        storage.save_report(v2_report)
    except ApiDriftError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Cannot access file: {e}") from e

    _echo(export_report(v2_report, output_format))


@main.command("history")
@click.option("--service-name", required=True, help="Service name")
@click.option("--environment", required=True, help="Environment name")
@click.option("--limit", default=10, show_default=True, type=click.IntRange(min=1), help="Maximum runs to list")
@click.option("--storage-dir", type=click.Path(file_okay=False), help="Report history directory")
@click.option("--log-level", type=click.Choice(LOG_LEVELS), help="Log level (logs go to stderr)")
def history_cmd(
    service_name: str,
    environment: str,
    limit: int,
    storage_dir: Optional[str],
    log_level: Optional[str],
):
    """List stored runs for a service and environment, newest first."""
    config = _load_config(storage_dir, log_level)
    storage = _open_storage(config)

    runs = storage.list_recent_runs(service_name, environment, limit)
    if not runs:
        click.echo(f"No stored runs for {service_name} ({environment})")
        return

    for run in runs:
        click.echo(f"{run.run_id}  {run.executed_at}")


if __name__ == "__main__":
    main()
