"""Command line entry point for the Nginx operator."""
from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from rich import print as rich_print
from rich.console import Console
from rich.logging import RichHandler

from .codec import extract_nginx_spec
from .config import OperatorConfig
from .errors import AnnotationCorrupt, AnnotationMissing, NginxOperatorError
from .reconcile import has_drifted, reconcile
from .resources.nginx import Nginx

app = typer.Typer(help="Render and inspect the objects generated for Nginx resources.")


class OutputFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, log_time_format="%X")],
    )


def _load_config(config_path: Optional[Path]) -> OperatorConfig:
    if config_path is None:
        return OperatorConfig()
    return OperatorConfig.from_file(config_path)


def _load_manifest_metadata(manifest_path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(manifest_path.read_text())
    if not isinstance(data, dict):
        raise typer.BadParameter("Manifest file must contain a mapping at the top level.")
    return data.get("metadata") or {}


@app.command("render")
def render(
    nginx_path: Path = typer.Argument(..., help="Path to the Nginx resource document."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to the operator configuration file."),
    output: OutputFormat = typer.Option(OutputFormat.YAML, "--format", help="Output format."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Print the Deployment and Service generated for an Nginx resource."""

    _configure_logging(verbose)
    config = _load_config(config_path)
    nginx = Nginx.from_file(nginx_path)
    try:
        result = reconcile(nginx, config)
    except NginxOperatorError as exc:
        rich_print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    documents = [definition.to_dict() for definition in result.objects()]
    if output is OutputFormat.JSON:
        typer.echo(json.dumps(documents, indent=2))
    else:
        typer.echo(yaml.safe_dump_all(documents, sort_keys=False), nl=False)


@app.command("extract")
def extract(
    manifest_path: Path = typer.Argument(..., help="Path to a generated Deployment manifest."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to the operator configuration file."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Print the Nginx spec a Deployment was generated from."""

    _configure_logging(verbose)
    config = _load_config(config_path)
    metadata = _load_manifest_metadata(manifest_path)
    try:
        spec = extract_nginx_spec(metadata, config.defaults)
    except AnnotationMissing as exc:
        rich_print(f"[yellow]{exc}; not generated by the nginx operator.[/yellow]")
        raise typer.Exit(code=1)
    except AnnotationCorrupt as exc:
        rich_print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    serialized = spec.model_dump(mode="json", by_alias=True, exclude_none=True)
    typer.echo(yaml.safe_dump(serialized, sort_keys=False), nl=False)


@app.command("drift")
def drift(
    nginx_path: Path = typer.Argument(..., help="Path to the Nginx resource document."),
    manifest_path: Path = typer.Argument(..., help="Path to the live Deployment manifest."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to the operator configuration file."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Check whether a live Deployment still matches its Nginx resource."""

    _configure_logging(verbose)
    config = _load_config(config_path)
    nginx = Nginx.from_file(nginx_path)
    metadata = _load_manifest_metadata(manifest_path)
    try:
        drifted = has_drifted(metadata, nginx, config)
    except AnnotationCorrupt as exc:
        rich_print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    if drifted:
        rich_print(f"[yellow]Deployment {metadata.get('name', '(unnamed)')} has drifted.[/yellow]")
        raise typer.Exit(code=1)
    rich_print(f"[green]Deployment {metadata.get('name', '(unnamed)')} is in sync.[/green]")


def main() -> None:  # pragma: no cover - console script entry point
    app()
