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

"""Image domain exceptions."""

from typing import Optional

from core.image.entities import ImageResolution


class ImageDomainError(Exception):
    """Base exception for image domain errors."""

    def __init__(self, message: str, correlation_id: str = ""):
        """Initialize domain error.

        Args:
            message: Error message.
            correlation_id: Request correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ImageNotFoundError(ImageDomainError):
    """Raised when a single image reference does not exist for the platform."""

    def __init__(self, image_url: str, correlation_id: str = ""):
        super().__init__(f"image not found: {image_url}", correlation_id)
        self.image_url = image_url


class ImageResolutionError(ImageDomainError):
    """Base for failures that resolve no image for a service.

    The partial resolution, with every attempted candidate, is kept on the
    exception so callers can report the trail.
    """

    def __init__(
        self,
        message: str,
        service: str,
        resolution: Optional[ImageResolution] = None,
        correlation_id: str = "",
    ):
        super().__init__(message, correlation_id)
        self.service = service
        self.resolution = resolution or ImageResolution()


class ImageOverrideNotFoundError(ImageResolutionError):
    """Raised when the ``lissto.dev/image`` override cannot be verified."""

    def __init__(
        self,
        image_url: str,
        service: str,
        resolution: Optional[ImageResolution] = None,
        correlation_id: str = "",
    ):
        super().__init__(
            f"image override '{image_url}' for service {service} not found",
            service,
            resolution,
            correlation_id,
        )
        self.image_url = image_url


class DeclaredImageNotFoundError(ImageResolutionError):
    """Raised when the image declared by an infra service does not exist."""

    def __init__(
        self,
        image_url: str,
        service: str,
        resolution: Optional[ImageResolution] = None,
        correlation_id: str = "",
    ):
        super().__init__(f"image not found: {image_url}", service, resolution, correlation_id)
        self.image_url = image_url


class NoImageFoundError(ImageResolutionError):
    """Raised when every candidate of a service was tried without success."""

    def __init__(
        self,
        service: str,
        resolution: Optional[ImageResolution] = None,
        correlation_id: str = "",
    ):
        super().__init__(
            f"no existing image found for service {service}",
            service,
            resolution,
            correlation_id,
        )


class RegistryError(ImageDomainError):
    """Raised when a registry cannot be reached or answers unexpectedly."""


class InvalidPlatformError(ImageDomainError):
    """Raised when platform labels hold an invalid OS or architecture."""
