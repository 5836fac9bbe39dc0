from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_outcome
from services.self_test import build_synthetic_reading


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor collector service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Collector API base URL (defaults to API_BASE_URL env or http://localhost:8080).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    terminal: str = typer.Option(..., "--terminal", "-t", help="Reporting terminal id."),
    value: float = typer.Option(..., "--value", "-v", help="Measured value."),
    sensor: str = typer.Option("temperature", "--sensor", "-s", help="Sensor kind."),
    timestamp: Optional[int] = typer.Option(
        None,
        "--timestamp",
        help="Seconds since the epoch (defaults to now).",
    ),
) -> None:
    """Submit a single reading."""
    state = _get_state(ctx)
    reading = {
        "timestamp": int(time.time()) if timestamp is None else timestamp,
        "terminal": terminal,
        "sensor": sensor,
        "value": value,
    }
    payload = state.client.send_reading(reading)
    if not render_outcome(payload, reading):
        raise typer.Exit(code=1)


@app.command("simulate")
def simulate_command(
    ctx: typer.Context,
    count: int = typer.Option(10, "--count", "-n", min=1, help="Readings to send."),
    interval: float = typer.Option(1.0, "--interval", min=0.0, help="Seconds between readings."),
    terminal: str = typer.Option("Test Terminal", "--terminal", "-t", help="Terminal id."),
) -> None:
    """Send synthetic temperature readings with random values."""
    state = _get_state(ctx)
    accepted = 0
    for index in range(count):
        reading = build_synthetic_reading(terminal)
        payload = state.client.send_reading(reading)
        if "error" in payload:
            typer.secho(f"[{index + 1}/{count}] rejected: {payload['error']}", fg=typer.colors.RED)
        else:
            accepted += 1
            typer.echo(f"[{index + 1}/{count}] value={payload.get('value')}")
        if interval and index + 1 < count:
            time.sleep(interval)
    typer.secho(f"Accepted {accepted} of {count} readings.", bold=True)


@app.command("metrics")
def metrics_command(ctx: typer.Context) -> None:
    """Print the raw Prometheus scrape output."""
    state = _get_state(ctx)
    typer.echo(state.client.get_metrics())
