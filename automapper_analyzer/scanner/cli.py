"""Click CLI for the AutoMapper breaking-change analyzer."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from automapper_analyzer.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    AnalyzerConfigError,
    load_config,
)
from automapper_analyzer.models import AnalysisReport
from automapper_analyzer.scanner.scanner import Analyzer


def _format_text(report: AnalysisReport) -> str:
    lines = [
        f"{f.location.file}:{f.location.span.start_line}:{f.location.span.start_column}: "
        f"{f.severity.value} {f.rule_id} {f.message}"
        for f in report.findings
    ]
    lines.append(f"{len(report.findings)} finding(s) in {report.files_analyzed} file(s)")
    return "\n".join(lines)


@click.group()
@click.option(
    "--config", "config_path", default=DEFAULT_CONFIG_PATH, envvar=CONFIG_ENV_VAR,
    help=f"Path to analyzer config JSON. Defaults to {DEFAULT_CONFIG_PATH} when present.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool, quiet: bool) -> None:
    """Detect AutoMapper usages that break across major versions."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    if (
        ctx.get_parameter_source("config_path") is click.core.ParameterSource.DEFAULT
        and not Path(config_path).is_file()
    ):
        config_path = None
    try:
        config = load_config(config_path)
        ctx.obj["analyzer"] = Analyzer(config=config)
    except AnalyzerConfigError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.option(
    "--format", "output_format", type=click.Choice(["json", "text"]), default="json",
    help="Output format.",
)
@click.option("--fail-on-findings", is_flag=True, help="Exit with status 1 when findings exist.")
@click.pass_context
def scan(ctx: click.Context, paths: tuple[str, ...], output_format: str, fail_on_findings: bool) -> None:
    """Scan C# files or directories for breaking AutoMapper usages."""
    analyzer: Analyzer = ctx.obj["analyzer"]
    report = analyzer.analyze_paths(paths)
    if output_format == "json":
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(_format_text(report))
    if fail_on_findings and report.findings:
        ctx.exit(1)


@cli.command("rules")
@click.pass_context
def list_rules(ctx: click.Context) -> None:
    """List the enabled detection rules.

    AR001 to AR010 follow the published AutoMapper analyzer ids. AR011 (static
    Mapper.CreateMap) is specific to this tool: the published analyzer reports
    that usage under AR003.
    """
    analyzer: Analyzer = ctx.obj["analyzer"]
    output = [d.model_dump(mode="json") for d in analyzer.supported_rules()]
    click.echo(json.dumps(output, indent=2))
