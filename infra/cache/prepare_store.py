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

"""Prepare results kept in a TTL cache."""

import logging
from datetime import timedelta
from typing import Optional

from core.cache.exceptions import CacheError, CacheExpiredError, CacheNotFoundError
from core.cache.repositories import Cache
from core.stack.entities import PrepareResult
from core.stack.repositories import PrepareResultStore

logger = logging.getLogger(__name__)

PREPARE_RESULT_TTL = timedelta(minutes=15)
KEY_PREFIX = "prepare:"


class CachePrepareResultStore(PrepareResultStore):
    """Stores prepare results for 15 minutes.

    Store failures are logged; a lost result only means the caller has to
    run prepare again.
    """

    def __init__(self, cache: Cache, ttl: timedelta = PREPARE_RESULT_TTL):
        self._cache = cache
        self._ttl = ttl

    def save(self, request_id: str, result: PrepareResult) -> None:
        try:
            self._cache.set(KEY_PREFIX + request_id, result.to_dict(), self._ttl)
        except CacheError as exc:
            logger.warning("Failed to cache prepare result %s: %s", request_id, exc.message)

    def load(self, request_id: str) -> Optional[PrepareResult]:
        try:
            return PrepareResult.from_dict(self._cache.get(KEY_PREFIX + request_id))
        except (CacheNotFoundError, CacheExpiredError):
            return None
        except CacheError as exc:
            logger.warning("Failed to read prepare result %s: %s", request_id, exc.message)
        except (KeyError, TypeError, AttributeError) as exc:
            logger.warning("Discarding malformed prepare result %s: %s", request_id, exc)
        return None
