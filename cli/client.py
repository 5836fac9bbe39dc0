from __future__ import annotations

from typing import Any, Dict

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the collector service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_reading(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Post one reading; rejected readings come back as ``{"error": ...}``."""
        try:
            response = self._client.post("/value", json=payload)
            if response.status_code == 400:
                return response.json()
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            self._handle_transport_error(exc)
        return response.json()

    def get_metrics(self) -> str:
        try:
            response = self._client.get("/metrics")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            self._handle_transport_error(exc)
        return response.text

    def _handle_transport_error(self, exc: httpx.TransportError) -> None:
        typer.secho(
            f"Could not reach {self._config.base_url}: {exc}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("error") or data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
