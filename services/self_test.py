"""Synthetic traffic generator posting random readings to the service."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Dict, Optional

import httpx

from models.readings import TEMPERATURE

logger = logging.getLogger(__name__)


def build_synthetic_reading(terminal: str) -> Dict[str, Any]:
    """Return a JSON-ready temperature reading with a random value."""
    return {
        "timestamp": int(time.time()),
        "terminal": terminal,
        "sensor": TEMPERATURE,
        "value": random.random(),
    }


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or f"status {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"status {response.status_code}"


class SelfTestPoster:
    """Periodically submits synthetic readings through the public endpoint."""

    def __init__(
        self,
        url: str,
        terminal: str,
        interval: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.terminal = terminal
        self.interval = interval
        self._client = client or httpx.AsyncClient(timeout=5.0)
        self._task: Optional[asyncio.Task[None]] = None

    async def send_once(self) -> Optional[httpx.Response]:
        payload = build_synthetic_reading(self.terminal)
        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning(
                "Synthetic reading could not be sent",
                extra={"url": self.url, "error": str(exc)},
            )
            return None
        if response.is_error:
            logger.warning(
                "Synthetic reading rejected",
                extra={"url": self.url, "error": _error_detail(response)},
            )
            return response
        logger.debug(
            "Synthetic reading sent",
            extra={"url": self.url, "value": payload["value"]},
        )
        return response

    async def run(self) -> None:
        while True:
            await self.send_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self._client.aclose()
