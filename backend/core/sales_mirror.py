"""
Flat-file mirror of the sales log.

The mirror is a JSON array in a single file, kept only loosely in sync with the
sales store. Scans publish events to ``MirrorPublisher``; a background task
applies them to the file so the request path never waits on (or fails because
of) the mirror. Failed writes are logged and counted, not retried.
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Request

from core.errors import MirrorError

logger = logging.getLogger(__name__)


class SalesMirror:
    def __init__(self, path: str):
        self.path = path
        self._lock = asyncio.Lock()

    def _read_sync(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise MirrorError(f"Failed to read sales data: {e}") from e
        try:
            sales = json.loads(raw)
        except ValueError as e:
            raise MirrorError(f"Failed to parse sales data: {e}") from e
        if not isinstance(sales, list):
            raise MirrorError("Sales data is not a list")
        return sales

    def _write_sync(self, sales: List[Dict[str, Any]]) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(sales, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise MirrorError(f"Failed to write sales data: {e}") from e

    async def read(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._read_sync)

    async def append(self, record: Dict[str, Any]) -> None:
        async with self._lock:
            # an unreadable file starts over, matching a missing one
            try:
                sales = await asyncio.to_thread(self._read_sync)
            except MirrorError:
                logger.warning("Sales mirror %s unreadable; starting a new log", self.path)
                sales = []
            sales.append(record)
            await asyncio.to_thread(self._write_sync, sales)

    async def clear(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write_sync, [])


@dataclass
class MirrorEvent:
    kind: str  # "sale" | "clear"
    record: Optional[Dict[str, Any]] = None


class MirrorPublisher:
    """Queue of mirror writes drained by one background task."""

    def __init__(self, mirror: SalesMirror):
        self.mirror = mirror
        self.failures = 0
        self.applied = 0
        self._queue: "asyncio.Queue[MirrorEvent]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="sales-mirror")

    async def stop(self) -> None:
        """Apply everything already published, then stop the task."""
        if self._task is None:
            return
        await self._queue.join()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def publish_sale(self, record: Dict[str, Any]) -> None:
        self._queue.put_nowait(MirrorEvent(kind="sale", record=record))

    def publish_clear(self) -> None:
        self._queue.put_nowait(MirrorEvent(kind="clear"))

    async def flush(self) -> None:
        await self._queue.join()

    async def _apply(self, event: MirrorEvent) -> None:
        if event.kind == "sale":
            await self.mirror.append(event.record or {})
        elif event.kind == "clear":
            await self.mirror.clear()
        else:
            raise ValueError(f"unknown mirror event {event.kind!r}")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._apply(event)
                self.applied += 1
            except Exception:
                self.failures += 1
                logger.exception("Sales mirror %s failed; mirror now diverges from the sales store", event.kind)
            finally:
                self._queue.task_done()


def get_sales_mirror(request: Request) -> SalesMirror:
    return request.app.state.sales_mirror


def get_mirror_publisher(request: Request) -> MirrorPublisher:
    return request.app.state.mirror_publisher
