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

"""Kubernetes objects produced by the converter.

Postprocessing only understands a small closed set of kinds. ``ObjectKind``
enumerates them with ``OTHER`` as the default arm, and ``KubernetesObject``
gives typed access to the parts of an object the passes touch.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

MAX_NAME_LENGTH = 63
_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]+")


def object_name(name: str) -> str:
    """Return ``name`` as a DNS-1123 label, lowercased with ``_`` and other
    invalid characters turned into ``-`` the way kompose names its objects.
    """
    normalized = _INVALID_NAME_CHARS.sub("-", name.strip().lower()).strip("-")
    return normalized[:MAX_NAME_LENGTH].rstrip("-")


class ObjectKind(str, Enum):
    """Object kinds known to the manifest pipeline."""

    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    POD = "Pod"
    SERVICE = "Service"
    PERSISTENT_VOLUME_CLAIM = "PersistentVolumeClaim"
    INGRESS = "Ingress"
    OTHER = "Other"

    @classmethod
    def of(cls, kind: Optional[str]) -> "ObjectKind":
        """Map a raw ``kind`` to a known kind, defaulting to ``OTHER``."""
        for member in cls:
            if member is not cls.OTHER and member.value == kind:
                return member
        return cls.OTHER

    @property
    def has_pod_template(self) -> bool:
        """Check if objects of this kind wrap a pod template."""
        return self in (ObjectKind.DEPLOYMENT, ObjectKind.STATEFUL_SET)


@dataclass
class KubernetesObject:
    """One Kubernetes object as a mutable mapping with typed accessors."""

    body: Dict[str, Any]

    @property
    def kind(self) -> ObjectKind:
        return ObjectKind.of(self.body.get("kind"))

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.body.setdefault("metadata", {})

    @property
    def name(self) -> str:
        return self.metadata.get("name", "")

    @property
    def labels(self) -> Dict[str, str]:
        labels = self.metadata.get("labels")
        if labels is None:
            labels = self.metadata["labels"] = {}
        return labels

    @property
    def annotations(self) -> Dict[str, str]:
        annotations = self.metadata.get("annotations")
        if annotations is None:
            annotations = self.metadata["annotations"] = {}
        return annotations

    @property
    def spec(self) -> Dict[str, Any]:
        return self.body.setdefault("spec", {})

    def pod_template_labels(self) -> Optional[Dict[str, str]]:
        """Return the pod template labels of a Deployment or StatefulSet."""
        if not self.kind.has_pod_template:
            return None
        template = self.spec.setdefault("template", {})
        metadata = template.setdefault("metadata", {})
        labels = metadata.get("labels")
        if labels is None:
            labels = metadata["labels"] = {}
        return labels

    def containers(self) -> List[Dict[str, Any]]:
        """Return the containers of a Pod, Deployment or StatefulSet."""
        if self.kind is ObjectKind.POD:
            return self.spec.setdefault("containers", [])
        if self.kind.has_pod_template:
            pod_spec = self.spec.setdefault("template", {}).setdefault("spec", {})
            return pod_spec.setdefault("containers", [])
        return []

    def to_dict(self) -> Dict[str, Any]:
        return self.body
