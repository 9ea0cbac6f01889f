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

"""Stack domain exceptions."""


class StackDomainError(Exception):
    """Base exception for stack, blueprint and env errors."""

    def __init__(self, message: str, correlation_id: str = ""):
        """Initialize domain error.

        Args:
            message: Error message.
            correlation_id: Request correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class InvalidReferenceError(StackDomainError):
    """Raised when a scoped identifier cannot be parsed."""


class PermissionDeniedError(StackDomainError):
    """Raised when the caller may not act on the target namespace."""


class ResourceNotFoundError(StackDomainError):
    """Raised when a namespaced resource does not exist."""

    def __init__(self, kind: str, name: str, correlation_id: str = ""):
        super().__init__(f"{kind} '{name}' not found", correlation_id)
        self.kind = kind
        self.name = name


class StackNotFoundError(ResourceNotFoundError):
    """Raised when a stack does not exist."""

    def __init__(self, name: str, correlation_id: str = ""):
        super().__init__("Stack", name, correlation_id)


class BlueprintNotFoundError(ResourceNotFoundError):
    """Raised when a blueprint does not exist."""

    def __init__(self, name: str, correlation_id: str = ""):
        super().__init__("Blueprint", name, correlation_id)


class EnvNotFoundError(ResourceNotFoundError):
    """Raised when an env does not exist."""

    def __init__(self, name: str, correlation_id: str = ""):
        super().__init__("Env", name, correlation_id)


class ConfigMapNotFoundError(ResourceNotFoundError):
    """Raised when a ConfigMap does not exist."""

    def __init__(self, name: str, correlation_id: str = ""):
        super().__init__("ConfigMap", name, correlation_id)


class ResourceAlreadyExistsError(StackDomainError):
    """Raised when creating a resource whose name is taken."""

    def __init__(self, kind: str, name: str, correlation_id: str = ""):
        super().__init__(f"{kind} '{name}' already exists", correlation_id)
        self.kind = kind
        self.name = name


class PrepareResultExpiredError(StackDomainError):
    """Raised when a request id is unknown or its prepare result expired."""


class PrepareResultNotFoundError(StackDomainError):
    """Raised when a request id belongs to another namespace."""


class StackValidationError(StackDomainError):
    """Raised when a stack request is rejected before any cluster mutation."""


class MissingServiceImageError(StackValidationError):
    """Raised when a compose service has no prepared image."""

    def __init__(self, service: str, correlation_id: str = ""):
        super().__init__(f"Missing image for service: {service}", correlation_id)
        self.service = service


class InvalidImageDigestError(StackValidationError):
    """Raised when a bound image is not pinned by digest."""

    def __init__(self, service: str, image: str, correlation_id: str = ""):
        super().__init__(
            f"Image for service {service} must contain digest (@sha256:...), got: {image}",
            correlation_id,
        )
        self.service = service
        self.image = image


class ClusterError(StackDomainError):
    """Raised when the cluster rejects or fails an operation."""


class MaterializationError(StackDomainError):
    """Raised when stack creation failed after cluster mutation began."""
