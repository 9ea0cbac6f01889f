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

"""Compose domain entities.

A ``ComposeProject`` is the parsed, mutable form of a compose document. The
stack pipeline binds digests and rewrites labels on it before handing it to
the manifest converter.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from core.compose.labels import ServiceLabels

EXTENSION_KEY = "x-lissto"
DEFAULT_PROJECT_NAME = "stack"


@dataclass(frozen=True)
class LisstoExtension:
    """Document-level ``x-lissto`` extension block.

    Attributes:
        registry: Registry applied to every service without a registry label.
        repository: Single repository shared by all services (monorepo).
        repository_prefix: Prefix joined with the service name.
        title: Human readable blueprint title.
    """

    registry: Optional[str] = None
    repository: Optional[str] = None
    repository_prefix: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LisstoExtension":
        """Build the extension from the raw ``x-lissto`` mapping."""
        if not isinstance(data, dict):
            return cls()

        def _get(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None or str(value).strip() == "":
                return None
            return str(value).strip()

        return cls(
            registry=_get("registry"),
            repository=_get("repository"),
            repository_prefix=_get("repositoryPrefix"),
            title=_get("title"),
        )


@dataclass
class ComposeService:  # pylint: disable=too-many-instance-attributes
    """One service of a compose project."""

    name: str
    image: Optional[str] = None
    build: Optional[Union[str, Dict[str, Any]]] = None
    labels: Dict[str, str] = field(default_factory=dict)
    deploy: Dict[str, Any] = field(default_factory=dict)
    environment: Dict[str, Optional[str]] = field(default_factory=dict)
    ports: List[Any] = field(default_factory=list)
    volumes: List[Any] = field(default_factory=list)
    command: Optional[Union[str, List[str]]] = None
    entrypoint: Optional[Union[str, List[str]]] = None
    container_name: Optional[str] = None
    restart: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_build(self) -> bool:
        """Check if the service is built from source."""
        return self.build is not None

    @property
    def is_infra(self) -> bool:
        """Infra images declare an image and no build step."""
        return bool(self.image) and not self.has_build

    @property
    def lissto_labels(self) -> ServiceLabels:
        """Typed view over this service's Lissto labels."""
        return ServiceLabels.from_labels(self.labels)

    @property
    def deploy_labels(self) -> Dict[str, str]:
        """Return the mutable ``deploy.labels`` mapping, creating it if absent."""
        labels = self.deploy.get("labels")
        if not isinstance(labels, dict):
            labels = {}
            self.deploy["labels"] = labels
        return labels


@dataclass
class ComposeProject:
    """Parsed compose document."""

    name: str = DEFAULT_PROJECT_NAME
    services: Dict[str, ComposeService] = field(default_factory=dict)
    volumes: Dict[str, Any] = field(default_factory=dict)
    networks: Dict[str, Any] = field(default_factory=dict)
    extension: LisstoExtension = field(default_factory=LisstoExtension)
    extra: Dict[str, Any] = field(default_factory=dict)

    def service_names(self) -> List[str]:
        """Return service names in sorted order."""
        return sorted(self.services)


@dataclass(frozen=True)
class RepoConfig:
    """Source repository context used to title a blueprint."""

    url: str = ""
    name: str = ""


@dataclass
class BlueprintMetadata:
    """Metadata derived from a compose document."""

    title: str = ""
    services: List[str] = field(default_factory=list)
    infra: List[str] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    networks: List[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Outcome of validating a compose document."""

    valid: bool
    metadata: Optional[BlueprintMetadata] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
