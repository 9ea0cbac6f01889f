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

"""Exposure domain exceptions."""


class ExposeDomainError(Exception):
    """Base exception for exposure errors."""

    def __init__(self, message: str, correlation_id: str = ""):
        """Initialize domain error.

        Args:
            message: Error message.
            correlation_id: Request correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ExposeConfigurationError(ExposeDomainError):
    """Raised when a service asks for a tier that has no ingress configured."""

    def __init__(self, service: str, tier: str, correlation_id: str = ""):
        super().__init__(
            f"service {service} requests '{tier}' exposure but the {tier} "
            "ingress tier is not configured",
            correlation_id,
        )
        self.service = service
        self.tier = tier
