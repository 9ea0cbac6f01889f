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

"""Postprocessing passes over converted Kubernetes objects.

Each pass takes the object list and returns it, mutated in place. The chain
runs them in a fixed order: claim access modes, stack labels, command
overrides, then lifecycle classes.
"""

import json
import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from core.compose.labels import (
    CLASS_ANNOTATION,
    COMMAND_LABEL,
    ENTRYPOINT_LABEL,
    KOMPOSE_SERVICE_LABEL,
    STACK_LABEL,
)
from core.manifest.kinds import KubernetesObject, ObjectKind, object_name

logger = logging.getLogger(__name__)

READ_WRITE_ONCE = "ReadWriteOnce"

RESOURCE_CLASS_STATE = "state"
RESOURCE_CLASS_WORKLOAD = "workload"

STATE_KINDS = (ObjectKind.PERSISTENT_VOLUME_CLAIM, ObjectKind.INGRESS)

Pass = Callable[[List[KubernetesObject]], List[KubernetesObject]]


class PVCAccessModeNormalizer:
    """Forces every PersistentVolumeClaim to ``ReadWriteOnce``.

    The converter derives ``ReadOnlyMany`` from ``:ro`` mounts, which most
    storage classes cannot provision.
    """

    def __call__(self, objects: List[KubernetesObject]) -> List[KubernetesObject]:
        for obj in objects:
            if obj.kind is ObjectKind.PERSISTENT_VOLUME_CLAIM:
                obj.spec["accessModes"] = [READ_WRITE_ONCE]
        return objects


class StackLabelInjector:
    """Puts the stack label on every Deployment and StatefulSet pod template."""

    def __init__(self, stack_name: str):
        self._stack_name = stack_name

    def __call__(self, objects: List[KubernetesObject]) -> List[KubernetesObject]:
        if not self._stack_name:
            return objects
        for obj in objects:
            labels = obj.pod_template_labels()
            if labels is not None:
                labels[STACK_LABEL] = self._stack_name
        return objects


def parse_command_label(value: str) -> List[str]:
    """Parse a command label as a JSON string array or whitespace-split words.

    ``$(VAR)`` references are returned verbatim.
    """
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except ValueError:
        parsed = None
    if isinstance(parsed, list) and all(isinstance(item, str) for item in parsed):
        return parsed
    return value.split()


class CommandOverrider:
    """Applies ``lissto.dev/entrypoint`` and ``lissto.dev/command`` to containers.

    ``entrypoint`` replaces the container ``command`` and ``command``
    replaces ``args``. Workloads are matched to services by their normalized
    object name; Pods by their ``io.kompose.service`` label, falling back to
    their name.
    """

    def __init__(self, service_labels: Optional[Mapping[str, Mapping[str, str]]] = None):
        """Initialize with the command override labels of each service."""
        self._service_labels = {
            object_name(name): labels for name, labels in (service_labels or {}).items()
        }

    def _service_for(self, obj: KubernetesObject) -> Optional[str]:
        if obj.kind.has_pod_template:
            return obj.name
        if obj.kind is ObjectKind.POD:
            return obj.labels.get(KOMPOSE_SERVICE_LABEL) or obj.name
        return None

    def __call__(self, objects: List[KubernetesObject]) -> List[KubernetesObject]:
        if not self._service_labels:
            return objects
        for obj in objects:
            service = self._service_for(obj)
            labels = self._service_labels.get(service) if service else None
            if labels:
                self._override(obj.containers(), labels, service)
        return objects

    @staticmethod
    def _override(containers: List[Dict], labels: Mapping[str, str], service: str) -> None:
        for label, field_name in ((ENTRYPOINT_LABEL, "command"), (COMMAND_LABEL, "args")):
            words = parse_command_label(labels.get(label, ""))
            if not words:
                continue
            for container in containers:
                container[field_name] = list(words)
                logger.info(
                    "Overriding %s of container %s in service %s",
                    field_name,
                    container.get("name"),
                    service,
                )


class ResourceClassifier:
    """Annotates objects with their lifecycle class.

    Claims and Ingresses are ``state`` and survive suspension; every other
    kind is ``workload``.
    """

    @staticmethod
    def resource_class(obj: KubernetesObject) -> str:
        if obj.kind in STATE_KINDS:
            return RESOURCE_CLASS_STATE
        return RESOURCE_CLASS_WORKLOAD

    def __call__(self, objects: List[KubernetesObject]) -> List[KubernetesObject]:
        for obj in objects:
            obj.annotations[CLASS_ANNOTATION] = self.resource_class(obj)
        return objects


class PostprocessingChain:
    """Runs passes in order over an object list."""

    def __init__(self, passes: Sequence[Pass]):
        self._passes = list(passes)

    def run(self, objects: List[KubernetesObject]) -> List[KubernetesObject]:
        for postprocess in self._passes:
            objects = postprocess(objects)
        return objects


def build_postprocessing_chain(
    stack_name: str, service_labels: Optional[Mapping[str, Mapping[str, str]]] = None
) -> PostprocessingChain:
    """Return the standard chain for one stack."""
    return PostprocessingChain([
        PVCAccessModeNormalizer(),
        StackLabelInjector(stack_name),
        CommandOverrider(service_labels),
        ResourceClassifier(),
    ])
