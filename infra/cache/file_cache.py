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

"""File-backed TTL cache for development.

Keeps the memory cache's behaviour and snapshots it to a JSON file, so
digests survive server restarts. Snapshots are written to ``<path>.tmp`` and
renamed over the target.
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Callable, Dict, Union

from core.cache.exceptions import CacheError
from infra.cache.memory_cache import CacheEntry, MemoryCache

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1.0"


class FileCache(MemoryCache):
    """Memory cache persisted to ``file_path``."""

    def __init__(self, file_path: Union[str, Path], clock: Callable[[], float] = time.time):
        """Load any previous snapshot from ``file_path``.

        Raises:
            CacheError: If the cache directory cannot be created.
        """
        super().__init__(clock=clock)
        self._path = Path(file_path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(f"Failed to create cache directory: {exc}") from exc

        try:
            loaded = self._load()
        except (OSError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Failed to load cache from %s, starting empty: %s", self._path, exc
            )
        else:
            logger.info("Loaded %d cache entries from %s", loaded, self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> int:
        if not self._path.exists():
            return 0
        with open(self._path, "r", encoding="utf-8") as snapshot_file:
            data = json.load(snapshot_file)

        now = self._clock()
        entries: Dict[str, CacheEntry] = {}
        for key, raw in (data.get("entries") or {}).items():
            expires_at = float(raw["expires_at"])
            if now >= expires_at:
                continue
            entries[key] = CacheEntry(value=raw["value"], expires_at=expires_at)
        self._restore(entries)
        return len(entries)

    def persist(self) -> None:
        """Write every live entry to disk atomically.

        Raises:
            CacheError: If the snapshot cannot be written.
        """
        now = self._clock()
        entries = {
            key: {"value": entry.value, "expires_at": entry.expires_at}
            for key, entry in self._snapshot().items()
            if now < entry.expires_at
        }
        payload = {"version": SNAPSHOT_VERSION, "entries": entries}

        temp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as temp_file:
                json.dump(payload, temp_file, indent=2)
            os.replace(temp_path, self._path)
        except OSError as exc:
            raise CacheError(f"Failed to save cache to {self._path}: {exc}") from exc
        logger.debug("Saved %d cache entries to %s", len(entries), self._path)

    def close(self) -> None:
        """Save a final snapshot."""
        self.persist()
