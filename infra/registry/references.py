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

"""Registry coordinates of an image reference."""

from dataclasses import dataclass

DOCKER_HUB_REGISTRY = "registry-1.docker.io"
DOCKER_HUB_ALIASES = ("docker.io", "index.docker.io", DOCKER_HUB_REGISTRY)
DEFAULT_TAG = "latest"


@dataclass(frozen=True)
class RegistryReference:
    """Where to fetch a manifest from.

    Attributes:
        registry: Registry host, with port when present.
        repository: Repository path inside the registry.
        reference: Tag or ``sha256:`` digest.
    """

    registry: str
    repository: str
    reference: str

    @classmethod
    def parse(cls, image_url: str) -> "RegistryReference":
        """Split an image reference into registry, repository and tag or digest.

        Docker Hub images without a namespace get the ``library/`` prefix.

        Raises:
            ValueError: If the reference is empty or has no repository.
        """
        image_url = (image_url or "").strip()
        if not image_url:
            raise ValueError("Image reference cannot be empty")

        name, _, digest = image_url.partition("@")
        first, _, rest = name.partition("/")
        if rest and ("." in first or ":" in first or first == "localhost"):
            registry, path = first, rest
        else:
            registry, path = DOCKER_HUB_REGISTRY, name

        reference = digest
        if not reference:
            colon = path.rfind(":")
            if colon != -1:
                path, reference = path[:colon], path[colon + 1:]
            else:
                reference = DEFAULT_TAG
        elif ":" in path:
            path = path[:path.rfind(":")]

        if registry in DOCKER_HUB_ALIASES:
            registry = DOCKER_HUB_REGISTRY
            if "/" not in path:
                path = f"library/{path}"

        if not path:
            raise ValueError(f"Image reference '{image_url}' has no repository")
        return cls(registry=registry, repository=path, reference=reference)

    @property
    def is_docker_hub(self) -> bool:
        return self.registry == DOCKER_HUB_REGISTRY
