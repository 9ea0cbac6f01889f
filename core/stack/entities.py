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

"""Stack domain entities.

These mirror the cluster resources the API manages: Blueprints and Envs are
custom resources owned by a namespace, a Stack references both plus the
ConfigMap holding its generated manifests.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
MANAGED_BY_VALUE = "lissto"
MANIFESTS_KEY = "manifests.yaml"

BLUEPRINT_TITLE_ANNOTATION = "lissto.dev/title"
BLUEPRINT_SERVICES_ANNOTATION = "lissto.dev/services"
BLUEPRINT_REPOSITORY_ANNOTATION = "lissto.dev/repository"
BLUEPRINT_HASH_ANNOTATION = "lissto.dev/hash"
STACK_BLUEPRINT_TITLE_ANNOTATION = "lissto.dev/blueprint-title"
CREATED_BY_ANNOTATION = "lissto.dev/created-by"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Blueprint:  # pylint: disable=too-many-instance-attributes
    """Stored compose document with derived metadata.

    Attributes:
        name: Resource name, ``YYYYMMDD-HHMMSS-<hash[:8]>``.
        namespace: Owning namespace.
        compose: Raw compose YAML.
        content_hash: sha256 of ``compose``.
        title: Human readable title.
        services: Services built from source.
        infra: Infrastructure services.
        repository: Source repository URL, if known.
        created_by: Username of the creator.
        created_at: Creation timestamp.
    """

    name: str
    namespace: str
    compose: str
    content_hash: str = ""
    title: str = ""
    services: List[str] = field(default_factory=list)
    infra: List[str] = field(default_factory=list)
    repository: str = ""
    created_by: str = ""
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Env:
    """Named deployment target inside a developer namespace."""

    name: str
    namespace: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class ImageInfo:
    """Image bound to one service of a stack."""

    digest: str
    image: str = ""
    url: str = ""
    container_name: str = ""

    def to_dict(self) -> Dict[str, str]:
        data = {"digest": self.digest, "image": self.image}
        if self.url:
            data["url"] = self.url
        if self.container_name:
            data["containerName"] = self.container_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageInfo":
        return cls(
            digest=data.get("digest", ""),
            image=data.get("image", ""),
            url=data.get("url", ""),
            container_name=data.get("containerName", ""),
        )


@dataclass
class SuspensionSpec:
    """Services to scale down; ``*`` means all of them."""

    services: List[str] = field(default_factory=lambda: ["*"])
    timeout: Optional[timedelta] = None


@dataclass
class PhaseTransition:
    """One entry of a stack's phase history."""

    phase: str
    transition_time: datetime
    reason: str = ""
    message: str = ""


@dataclass
class ServiceStatus:
    """Controller-reported state of one service."""

    phase: str = ""
    suspended_at: Optional[datetime] = None


@dataclass
class StackStatus:
    """Status written by the stack controller."""

    phase: str = ""
    phase_history: List[PhaseTransition] = field(default_factory=list)
    services: Dict[str, ServiceStatus] = field(default_factory=dict)


@dataclass
class StackSpec:
    """Desired state of a stack."""

    blueprint_reference: str
    env: str
    manifests_config_map: str
    images: Dict[str, ImageInfo] = field(default_factory=dict)
    suspension: Optional[SuspensionSpec] = None


@dataclass
class OwnerReference:
    """Link from a dependent object to the stack that owns it."""

    kind: str
    name: str
    uid: str
    api_version: str = "env.lissto.dev/v1alpha1"
    controller: bool = True
    block_owner_deletion: bool = True


@dataclass
class Stack:
    """Materialized deployment of a blueprint into an env."""

    name: str
    namespace: str
    spec: StackSpec
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    uid: str = ""
    status: StackStatus = field(default_factory=StackStatus)
    created_at: datetime = field(default_factory=_utcnow)

    def owner_reference(self) -> OwnerReference:
        """Return the owner reference dependents of this stack carry.

        Raises:
            ValueError: If the stack has not been persisted yet.
        """
        if not self.uid:
            raise ValueError(f"Stack {self.name} has no uid; create it first")
        return OwnerReference(kind="Stack", name=self.name, uid=self.uid)


@dataclass
class ConfigMap:
    """ConfigMap holding the generated manifests of a stack."""

    name: str
    namespace: str
    data: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    owner_references: List[OwnerReference] = field(default_factory=list)

    def set_owner(self, owner: OwnerReference) -> None:
        """Attach ``owner`` as the controller reference, replacing any other."""
        self.owner_references = [
            ref for ref in self.owner_references if ref.uid != owner.uid and not ref.controller
        ]
        self.owner_references.append(owner)


@dataclass
class PrepareResult:
    """Resolved images cached between prepare and create.

    Attributes:
        namespace: Namespace of the caller that ran prepare.
        images: Resolved image per service.
        commit: Commit the images were resolved for.
        tag: Tag the caller asked for; names the stack.
    """

    namespace: str
    images: Dict[str, ImageInfo] = field(default_factory=dict)
    commit: str = ""
    tag: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "images": {name: info.to_dict() for name, info in self.images.items()},
            "commit": self.commit,
            "tag": self.tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrepareResult":
        """Rebuild a prepare result from its cached form.

        Raises:
            KeyError: If the namespace is missing.
        """
        return cls(
            namespace=data["namespace"],
            images={
                name: ImageInfo.from_dict(info)
                for name, info in (data.get("images") or {}).items()
            },
            commit=data.get("commit", ""),
            tag=data.get("tag", ""),
        )
