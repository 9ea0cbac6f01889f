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

"""Port interfaces for the image domain."""

from abc import ABC, abstractmethod

from core.image.entities import ImageMetadata


class ImageChecker(ABC):
    """Checks whether an image exists in its registry."""

    @abstractmethod
    def check_image_exists_for_platform(
        self, image_url: str, os: str, arch: str
    ) -> ImageMetadata:
        """Look up ``image_url`` for one platform.

        Args:
            image_url: Image reference, with tag or digest.
            os: Target operating system.
            arch: Target architecture.

        Returns:
            Metadata with ``exists=False`` when the registry has no such image.

        Raises:
            RegistryError: If the registry cannot be queried.
        """
        ...
