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

"""Label keys understood by Lissto and a typed view over a service's labels.

Compose services steer image resolution, exposure and command overrides
through free-form labels. ``ServiceLabels`` reads them once into a small
immutable value so downstream code never pokes at raw dictionaries.
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Mapping, Optional

LABEL_PREFIX = "lissto.dev/"

IMAGE_LABEL = "lissto.dev/image"
REGISTRY_LABEL = "lissto.dev/registry"
REPOSITORY_LABEL = "lissto.dev/repository"
TAG_LABEL = "lissto.dev/tag"
PLATFORM_OS_LABEL = "lissto.dev/platform-os"
PLATFORM_ARCH_LABEL = "lissto.dev/platform-arch"
EXPOSE_LABEL = "lissto.dev/expose"
GROUP_LABEL = "lissto.dev/group"
COMMAND_LABEL = "lissto.dev/command"
ENTRYPOINT_LABEL = "lissto.dev/entrypoint"
STACK_LABEL = "lissto.dev/stack"
CLASS_ANNOTATION = "lissto.dev/class"

KOMPOSE_SERVICE_LABEL = "io.kompose.service"
KOMPOSE_EXPOSE_LABEL = "kompose.service.expose"
KOMPOSE_INGRESS_CLASS_LABEL = "kompose.service.expose.ingress-class-name"
KOMPOSE_TLS_SECRET_LABEL = "kompose.service.expose.tls-secret"

DEFAULT_PLATFORM_OS = "linux"
DEFAULT_PLATFORM_ARCH = "amd64"


def _non_empty(labels: Mapping[str, str], key: str) -> Optional[str]:
    value = labels.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class ServiceLabels:
    """Typed view of the Lissto labels declared on one compose service.

    Attributes:
        image_override: Complete image reference that bypasses resolution.
        registry: Registry host override.
        repository: Repository (image name) override.
        tag: Preferred tag.
        platform_os: Target OS for multi-arch images.
        platform_arch: Target architecture for multi-arch images.
        expose: Raw expose value (``true``, ``internal`` or ``internet``).
        group: Raw categorization override (``service`` or ``infra``).
        command: Raw ``args`` override.
        entrypoint: Raw ``command`` override.
    """

    image_override: Optional[str] = None
    registry: Optional[str] = None
    repository: Optional[str] = None
    tag: Optional[str] = None
    platform_os: str = DEFAULT_PLATFORM_OS
    platform_arch: str = DEFAULT_PLATFORM_ARCH
    expose: Optional[str] = None
    group: Optional[str] = None
    command: Optional[str] = None
    entrypoint: Optional[str] = None

    OVERRIDE_KEYS: ClassVar[tuple] = (COMMAND_LABEL, ENTRYPOINT_LABEL)

    @classmethod
    def from_labels(cls, labels: Optional[Mapping[str, str]]) -> "ServiceLabels":
        """Extract the Lissto labels from a raw label mapping."""
        labels = labels or {}
        return cls(
            image_override=_non_empty(labels, IMAGE_LABEL),
            registry=_non_empty(labels, REGISTRY_LABEL),
            repository=_non_empty(labels, REPOSITORY_LABEL),
            tag=_non_empty(labels, TAG_LABEL),
            platform_os=_non_empty(labels, PLATFORM_OS_LABEL) or DEFAULT_PLATFORM_OS,
            platform_arch=_non_empty(labels, PLATFORM_ARCH_LABEL) or DEFAULT_PLATFORM_ARCH,
            expose=_non_empty(labels, EXPOSE_LABEL),
            group=_non_empty(labels, GROUP_LABEL),
            command=_non_empty(labels, COMMAND_LABEL),
            entrypoint=_non_empty(labels, ENTRYPOINT_LABEL),
        )

    @property
    def is_exposed(self) -> bool:
        """Check if the service asks to be exposed through an ingress."""
        return self.expose is not None

    @property
    def has_command_override(self) -> bool:
        """Check if the service overrides its command or entrypoint."""
        return self.command is not None or self.entrypoint is not None


def command_override_labels(labels: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return only the command/entrypoint override labels of a service."""
    labels = labels or {}
    return {
        key: str(labels[key])
        for key in ServiceLabels.OVERRIDE_KEYS
        if _non_empty(labels, key)
    }
