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

"""Cache exceptions."""


class CacheError(Exception):
    """Base exception for cache operations."""

    def __init__(self, message: str, key: str = ""):
        """Initialize cache error.

        Args:
            message: Error message.
            key: Cache key involved, if any.
        """
        super().__init__(message)
        self.message = message
        self.key = key


class CacheNotFoundError(CacheError):
    """Raised when a key is not present in the cache."""


class CacheExpiredError(CacheError):
    """Raised when a key was present but its TTL elapsed."""


class CacheSerializationError(CacheError):
    """Raised when a value cannot be encoded or decoded."""
