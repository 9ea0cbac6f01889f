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

"""Compose domain exceptions."""

from typing import List


class ComposeDomainError(Exception):
    """Base exception for compose domain errors."""

    def __init__(self, message: str, correlation_id: str = ""):
        """Initialize domain error.

        Args:
            message: Error message.
            correlation_id: Request correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class InvalidComposeError(ComposeDomainError):
    """Raised when a compose document cannot be parsed or is structurally invalid."""


class ComposeValidationError(InvalidComposeError):
    """Raised when a submitted compose document fails validation.

    Attributes:
        errors: Every validation error found.
    """

    def __init__(self, errors: List[str], correlation_id: str = ""):
        super().__init__("; ".join(errors) or "invalid compose document", correlation_id)
        self.errors = list(errors)
