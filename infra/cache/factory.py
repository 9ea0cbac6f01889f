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

"""Digest cache selection."""

import logging
import os
from typing import Optional

from core.cache.exceptions import CacheError
from core.cache.repositories import Cache
from infra.cache.file_cache import FileCache
from infra.cache.memory_cache import MemoryCache

logger = logging.getLogger(__name__)

IMAGE_CACHE_FILE_PATH_ENV = "IMAGE_CACHE_FILE_PATH"


def create_image_cache(file_path: Optional[str] = None) -> Cache:
    """Return a file cache when a path is configured, else a memory cache.

    ``IMAGE_CACHE_FILE_PATH`` overrides ``file_path``. A file cache that
    cannot be created falls back to memory.
    """
    path = os.getenv(IMAGE_CACHE_FILE_PATH_ENV) or file_path
    if path:
        try:
            cache = FileCache(path)
        except CacheError as exc:
            logger.warning(
                "Failed to create file image cache at %s, using memory: %s", path, exc.message
            )
            return MemoryCache()
        logger.info("Initialized file-based image cache at %s", path)
        return cache

    logger.info("Initialized in-memory image cache")
    return MemoryCache()
