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

"""Manifest generation exceptions."""


class ManifestDomainError(Exception):
    """Base exception for manifest generation errors."""

    def __init__(self, message: str, correlation_id: str = ""):
        """Initialize domain error.

        Args:
            message: Error message.
            correlation_id: Request correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ManifestConversionError(ManifestDomainError):
    """Raised when a compose project cannot be converted to Kubernetes objects."""


class ManifestTooLargeError(ManifestDomainError):
    """Raised when the serialized manifests do not fit in a ConfigMap."""

    def __init__(self, size: int, limit: int, correlation_id: str = ""):
        super().__init__(
            f"generated manifests are {size} bytes, above the {limit} byte limit",
            correlation_id,
        )
        self.size = size
        self.limit = limit
