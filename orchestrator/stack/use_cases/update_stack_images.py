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

"""UpdateStackImages use case implementation."""

import logging
from typing import Any, Dict

from core.stack.entities import ImageInfo
from core.stack.exceptions import InvalidImageDigestError, StackValidationError
from core.stack.repositories import StackRepository
from core.stack.services import ResourceLocator
from orchestrator.stack.commands import UpdateStackImagesCommand

logger = logging.getLogger(__name__)

DIGEST_MARKER = "@sha256:"


def merge_image(service: str, existing: ImageInfo, value: Any) -> ImageInfo:
    """Apply one requested image change on top of ``existing``.

    A string value replaces the digest only. A mapping replaces the digest and,
    when given, the human readable image. The exposed URL and the container
    name always carry over.

    Raises:
        StackValidationError: If the value has an unsupported shape.
    """
    if isinstance(value, str):
        digest, image = value, existing.image
    elif isinstance(value, dict):
        digest = value.get("digest") or ""
        image = value.get("image") or existing.image
    else:
        raise StackValidationError(
            f"Image for service {service} must be a digest string or an object"
        )
    return ImageInfo(
        digest=digest,
        image=image,
        url=existing.url,
        container_name=existing.container_name,
    )


class UpdateStackImagesUseCase:  # pylint: disable=too-few-public-methods
    """Replaces image digests of an existing stack.

    Services not named in the request keep their current image.
    """

    def __init__(self, locator: ResourceLocator, stack_repo: StackRepository) -> None:
        self._locator = locator
        self._stack_repo = stack_repo

    def execute(self, command: UpdateStackImagesCommand) -> str:
        """Update the images and return the stack's scoped id.

        Raises:
            StackValidationError: If no images are given or a digest is not pinned.
            StackNotFoundError: If the stack is missing or not writable.
            ClusterError: If the update is rejected.
        """
        if not command.images:
            raise StackValidationError("No images provided", command.correlation_id)

        stack = self._locator.find_stack(command.stack_id, command.caller, write=True)
        images: Dict[str, ImageInfo] = dict(stack.spec.images)
        for service, value in command.images.items():
            existing = images.get(service) or ImageInfo(digest="")
            updated = merge_image(service, existing, value)
            if DIGEST_MARKER not in updated.digest:
                raise InvalidImageDigestError(service, updated.digest, command.correlation_id)
            images[service] = updated

        stack.spec.images = images
        self._stack_repo.update(stack)
        logger.info(
            "Updated %d images of stack %s/%s", len(command.images), stack.namespace, stack.name
        )
        return self._locator.scoped_id(stack.namespace, stack.name)
