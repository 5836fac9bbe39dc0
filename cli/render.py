from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_outcome(payload: Dict[str, Any], reading: Dict[str, Any]) -> bool:
    """Print a submission outcome and return whether it was accepted."""
    echo_heading("Reading")
    echo_key_values(
        [
            ("timestamp", reading.get("timestamp")),
            ("terminal", reading.get("terminal")),
            ("sensor", reading.get("sensor")),
            ("value", reading.get("value")),
        ]
    )
    typer.echo()
    error = payload.get("error")
    if error:
        typer.secho(f"Rejected: {error}", fg=typer.colors.RED)
        return False
    typer.secho(
        f"Accepted: {payload.get('message')} value={payload.get('value')}",
        fg=typer.colors.GREEN,
    )
    return True
