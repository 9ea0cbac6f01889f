# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Background asyncio maintenance of the image cache.

Expired entries are swept every five minutes; a file-backed cache is also
snapshotted to disk every thirty seconds. Both run blocking work in the
default executor so the event loop is never stalled.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from core.cache.exceptions import CacheError
from core.cache.repositories import Cache

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 300
DEFAULT_PERSIST_INTERVAL_SECONDS = 30


class CacheMaintenanceWorker:
    """Background asyncio task that sweeps and persists a cache.

    This infrastructure service runs within the FastAPI application
    lifecycle. Failures of a single round are logged and the loop goes on.
    """

    def __init__(
        self,
        cache: Cache,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        persist_interval: float = DEFAULT_PERSIST_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the worker.

        Args:
            cache: Cache to maintain.
            sweep_interval: Seconds between expired-entry sweeps.
            persist_interval: Seconds between snapshots to disk.
            clock: Monotonic clock, replaceable in tests.
        """
        self._cache = cache
        self._sweep_interval = sweep_interval
        self._persist_interval = persist_interval
        self._clock = clock
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._last_sweep = 0.0
        self._swept_count = 0

    async def start(self) -> None:
        """Start the background maintenance task."""
        if self._running:
            logger.warning("Cache maintenance worker is already running")
            return

        self._running = True
        self._last_sweep = self._clock()
        self._task = asyncio.create_task(self._loop())
        logger.info(
            "Cache maintenance started: sweep every %ss, persist every %ss",
            self._sweep_interval,
            self._persist_interval,
        )

    async def stop(self) -> None:
        """Stop the background maintenance task."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info(
            "Cache maintenance stopped. Swept %d expired entries total",
            self._swept_count,
        )

    async def run_once(self) -> None:
        """Persist, and sweep when the sweep interval has elapsed."""
        loop = asyncio.get_running_loop()
        now = self._clock()
        if now - self._last_sweep >= self._sweep_interval:
            self._last_sweep = now
            removed = await loop.run_in_executor(None, self._cache.cleanup_expired)
            if removed > 0:
                self._swept_count += removed
                logger.info("Swept %d expired cache entries", removed)
        await loop.run_in_executor(None, self._cache.persist)

    async def _loop(self) -> None:
        """Main maintenance loop that runs as a background task."""
        interval = min(self._sweep_interval, self._persist_interval)
        while self._running:
            await asyncio.sleep(interval)
            try:
                await self.run_once()
            except CacheError as exc:
                logger.warning("Cache maintenance round failed: %s", exc.message)
            except Exception as exc:  # pylint: disable=broad-except
                logger.error(
                    "Error in cache maintenance: %s",
                    exc,
                    exc_info=True,
                )

    @property
    def is_running(self) -> bool:
        """Check if the worker is currently running."""
        return self._running

    @property
    def swept_count(self) -> int:
        """Get the total number of swept entries."""
        return self._swept_count
