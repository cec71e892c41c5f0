#!/usr/bin/env python3
"""
CLI Compat Main Entry Point

Inspection commands for a deprecation registry: the state of one feature,
the whole registry at a release, what can be deleted, and file validation.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.loader import load_registry
from .config.settings import TrackerConfig
from .dependencies import DependencyTransitionTracker
from .errors import CompatError
from .evaluator import LifecycleState
from .registry import DeprecationRegistry
from .utils.json_logger import configure_logging

app = typer.Typer(
    name="cli-compat",
    help="Deprecation lifecycle tracker for CLI commands, arguments and dependencies",
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)

STATE_STYLES = {
    LifecycleState.active.value: "green",
    LifecycleState.warn_and_allow.value: "yellow",
    LifecycleState.refused.value: "red",
}


def _error(message: str, label: str = "Error:") -> None:
    err_console.print(f"[red]{label}[/red] {escape(message)}", soft_wrap=True)


def _settings(
    registry_file: Optional[Path],
    release: Optional[int],
    host_version: Optional[str],
    flags: Optional[List[str]],
    log_format: Optional[str],
) -> TrackerConfig:
    try:
        config = TrackerConfig.from_env()
    except CompatError as e:
        _error(str(e))
        raise typer.Exit(code=2)
    if registry_file is not None:
        config.registry_file = str(registry_file)
    if host_version is not None:
        config.version = host_version
        config.release = None
    if release is not None:
        config.release = release
    for name in flags or []:
        config.flags[name] = True
    if log_format is not None:
        config.log_format = log_format

    errors = config.validate()
    if errors:
        for problem in errors:
            _error(problem)
        raise typer.Exit(code=2)

    configure_logging(level=getattr(logging, config.log_level.upper()), fmt=config.log_format)
    return config


def _load(config: TrackerConfig) -> tuple:
    try:
        registry = load_registry(Path(config.registry_file))
        release = config.resolve_release()
    except CompatError as e:
        _error(str(e))
        raise typer.Exit(code=2)
    return registry, release


RegistryOption = typer.Option(
    None, "--registry", "-R", help="Registry file (YAML or JSON)"
)
ReleaseOption = typer.Option(None, "--release", "-r", help="Current release number")
VersionOption = typer.Option(
    None, "--host-version", help="Host version string to derive the release from"
)
FlagOption = typer.Option(None, "--flag", help="Enabled gate flag (repeatable)")
LogFormatOption = typer.Option(None, "--log-format", help="Log format: text or json")


@app.command("status")
def status(
    feature_id: str = typer.Argument(..., help="Feature id to evaluate"),
    registry_file: Optional[Path] = RegistryOption,
    release: Optional[int] = ReleaseOption,
    host_version: Optional[str] = VersionOption,
    flag: Optional[List[str]] = FlagOption,
    log_format: Optional[str] = LogFormatOption,
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
):
    """Show the lifecycle state of one feature at the current release."""
    config = _settings(registry_file, release, host_version, flag, log_format)
    registry, current = _load(config)

    decision = DependencyTransitionTracker(registry).resolve(
        feature_id, current, config.flags
    )
    evaluation = decision.evaluation

    if as_json:
        payload = evaluation.to_dict()
        payload.update(
            {"allowed": decision.allowed, "via_gate": decision.via_gate,
             "warnings": decision.warnings, "error": decision.error}
        )
        typer.echo(json.dumps(payload, indent=2))
    else:
        style = STATE_STYLES[evaluation.state.value]
        console.print(
            f"{escape(feature_id)} @ release {current}: "
            f"[{style}]{evaluation.state.value}[/{style}]",
            soft_wrap=True,
        )
        for warning in decision.warnings:
            err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}", soft_wrap=True)
        if decision.via_gate:
            console.print(
                f"Reachable through gate {escape(evaluation.gated_behind)}", soft_wrap=True
            )
        if decision.error:
            _error(decision.error)

    if not decision.allowed:
        raise typer.Exit(code=1)


@app.command("list")
def list_records(
    registry_file: Optional[Path] = RegistryOption,
    release: Optional[int] = ReleaseOption,
    host_version: Optional[str] = VersionOption,
    log_format: Optional[str] = LogFormatOption,
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
):
    """List every registered record and its state."""
    config = _settings(registry_file, release, host_version, None, log_format)
    registry, current = _load(config)
    rows = registry.snapshot(current)

    if as_json:
        typer.echo(json.dumps({"release": current, "records": rows}, indent=2))
        return

    table = Table(title=f"Deprecations at release {current}")
    table.add_column("Feature", style="cyan")
    table.add_column("Kind")
    table.add_column("Tier")
    table.add_column("Deprecated", justify="right")
    table.add_column("Removal", justify="right")
    table.add_column("Replacement")
    table.add_column("Gate")
    table.add_column("State")
    for row in rows:
        style = STATE_STYLES[row["state"]]
        table.add_row(
            escape(row["id"]),
            row["kind"],
            row["tier"],
            str(row["deprecated_at"]),
            str(row["removal_at"]),
            escape(row["replacement"] or "-"),
            escape(row["gated_behind"] or "-"),
            f"[{style}]{row['state']}[/{style}]",
        )
    console.print(table)


@app.command("removable")
def removable(
    registry_file: Optional[Path] = RegistryOption,
    release: Optional[int] = ReleaseOption,
    host_version: Optional[str] = VersionOption,
    log_format: Optional[str] = LogFormatOption,
):
    """List features whose code can be deleted at the current release."""
    config = _settings(registry_file, release, host_version, None, log_format)
    registry, current = _load(config)
    ids = registry.removable(current)
    if not ids:
        console.print(f"Nothing to remove at release {current}")
        return
    for feature_id in ids:
        typer.echo(feature_id)


@app.command("validate")
def validate(
    registry_file: Path = typer.Argument(..., help="Registry file to check"),
):
    """Load a registry file and report configuration errors."""
    try:
        registry: DeprecationRegistry = load_registry(registry_file)
    except CompatError as e:
        _error(str(e), label="FAIL:")
        raise typer.Exit(code=1)
    console.print(f"[green]OK:[/green] {len(registry)} records in {escape(str(registry_file))}")


if __name__ == "__main__":
    app()
