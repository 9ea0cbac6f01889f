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

"""Cache port shared by the digest cache and the prepare-result store."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any


class Cache(ABC):
    """Key/value store with per-entry time-to-live.

    Values must be JSON serializable. Implementations must be safe to use
    from concurrent request threads.
    """

    @abstractmethod
    def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store ``value`` under ``key`` for ``ttl``.

        Raises:
            CacheSerializationError: If the value cannot be encoded.
        """
        ...

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value stored under ``key``.

        Raises:
            CacheNotFoundError: If the key is unknown.
            CacheExpiredError: If the entry expired; it is evicted on the way out.
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...

    @abstractmethod
    def cleanup_expired(self) -> int:
        """Evict every expired entry and return how many were removed."""
        ...

    def persist(self) -> None:
        """Write a snapshot to durable storage, if the backend has one."""

    def close(self) -> None:
        """Release resources; durable backends save a final snapshot."""
