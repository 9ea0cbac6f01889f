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

"""Compose to Kubernetes conversion.

Follows the object layout ``kompose convert`` produces with Deployments and
PersistentVolumeClaims enabled: one workload per service, a Service for
published ports, a claim per named volume or bind mount and an Ingress for
services carrying ``kompose.service.expose``.
"""

import logging
import shlex
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from core.compose.entities import ComposeProject, ComposeService
from core.compose.labels import (
    KOMPOSE_EXPOSE_LABEL,
    KOMPOSE_INGRESS_CLASS_LABEL,
    KOMPOSE_SERVICE_LABEL,
    KOMPOSE_TLS_SECRET_LABEL,
)
from core.manifest.exceptions import ManifestConversionError
from core.manifest.kinds import KubernetesObject, object_name

logger = logging.getLogger(__name__)

DEFAULT_CLAIM_SIZE = "100Mi"
READ_WRITE_ONCE = "ReadWriteOnce"
READ_ONLY_MANY = "ReadOnlyMany"

# compose restart policies that run as a bare Pod instead of a Deployment
POD_RESTART_POLICIES = {"no": "Never", "on-failure": "OnFailure"}


def _split_command(value: Optional[Union[str, List[Any]]]) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return shlex.split(value)
    return [str(item) for item in value]


def _parse_port(entry: Any, service: str) -> Tuple[int, int, str]:
    """Return ``(published, target, protocol)`` for one compose port entry."""
    try:
        if isinstance(entry, int):
            return entry, entry, "TCP"
        if isinstance(entry, dict):
            target = int(entry["target"])
            published = int(entry.get("published") or target)
            return published, target, str(entry.get("protocol", "tcp")).upper()

        text = str(entry)
        protocol = "TCP"
        if "/" in text:
            text, proto = text.rsplit("/", 1)
            protocol = proto.upper()
        parts = text.split(":")
        target = parts[-1]
        published = parts[-2] if len(parts) >= 2 and parts[-2] else target
        if "-" in target or "-" in published:
            raise ManifestConversionError(
                f"service {service}: port ranges are not supported ({entry})"
            )
        return int(published), int(target), protocol
    except (KeyError, TypeError, ValueError) as exc:
        raise ManifestConversionError(
            f"service {service}: invalid port '{entry}'"
        ) from exc


@dataclass(frozen=True)
class _Mount:
    """A service volume resolved to a claim."""

    claim: str
    target: str
    read_only: bool
    named: bool


class ComposeConverter:
    """Converts compose projects into Kubernetes objects for one namespace."""

    def __init__(self, namespace: str = ""):
        self._namespace = namespace

    def convert_to_objects(self, project: ComposeProject) -> List[KubernetesObject]:
        """Convert every service of ``project``.

        Raises:
            ManifestConversionError: If a service has no image or an invalid
                port or volume definition.
        """
        objects: List[KubernetesObject] = []
        claims: Dict[str, KubernetesObject] = {}

        for name in project.service_names():
            service = project.services[name]
            if not service.image:
                raise ManifestConversionError(f"service {name} has no image")

            mounts = self._mounts(service, project)
            ports = [_parse_port(entry, name) for entry in service.ports]

            if ports:
                objects.append(self._service(service, ports))
            objects.append(self._workload(service, ports, mounts))
            if service.labels.get(KOMPOSE_EXPOSE_LABEL):
                objects.append(self._ingress(service, ports))

            for mount in mounts:
                if mount.claim not in claims:
                    claims[mount.claim] = self._claim(mount)

        objects.extend(claims.values())
        logger.info(
            "Converted %d services into %d objects for namespace %s",
            len(project.services),
            len(objects),
            self._namespace,
        )
        return objects

    def _metadata(self, name: str, labels: Dict[str, str], annotations=None) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {"name": name}
        if self._namespace:
            metadata["namespace"] = self._namespace
        metadata["labels"] = dict(labels)
        if annotations:
            metadata["annotations"] = dict(annotations)
        return metadata

    @staticmethod
    def _selector(service: ComposeService) -> Dict[str, str]:
        return {KOMPOSE_SERVICE_LABEL: object_name(service.name)}

    def _object_labels(self, service: ComposeService) -> Dict[str, str]:
        labels = self._selector(service)
        deploy_labels = service.deploy.get("labels")
        if isinstance(deploy_labels, dict):
            labels.update({key: str(value) for key, value in deploy_labels.items()})
        return labels

    @staticmethod
    def _mounts(service: ComposeService, project: ComposeProject) -> List[_Mount]:
        mounts = []
        for index, entry in enumerate(service.volumes):
            if isinstance(entry, dict):
                source = entry.get("source") or ""
                target = entry.get("target") or ""
                read_only = bool(entry.get("read_only", False))
                named = entry.get("type", "volume") == "volume" and bool(source)
            else:
                parts = str(entry).split(":")
                if len(parts) == 1:
                    source, target, mode = "", parts[0], ""
                else:
                    source, target = parts[0], parts[1]
                    mode = parts[2] if len(parts) > 2 else ""
                read_only = "ro" in mode.split(",")
                named = bool(source) and (
                    source in project.volumes or not source.startswith((".", "/", "~"))
                )
            if not target:
                raise ManifestConversionError(
                    f"service {service.name}: volume '{entry}' has no target"
                )
            claim = object_name(source if named else f"{service.name}-claim{index}")
            mounts.append(_Mount(claim, target, read_only, named))
        return mounts

    @staticmethod
    def _container(
        service: ComposeService, ports: List[Tuple[int, int, str]], mounts: List[_Mount]
    ) -> Dict[str, Any]:
        container: Dict[str, Any] = {
            "name": object_name(service.container_name or service.name),
            "image": service.image,
        }
        entrypoint = _split_command(service.entrypoint)
        if entrypoint:
            container["command"] = entrypoint
        args = _split_command(service.command)
        if args:
            container["args"] = args
        if service.environment:
            container["env"] = [
                {"name": key, "value": "" if value is None else str(value)}
                for key, value in sorted(service.environment.items())
            ]
        if ports:
            container["ports"] = [
                {"containerPort": target, "protocol": protocol}
                for _, target, protocol in ports
            ]
        if mounts:
            container["volumeMounts"] = []
            for mount in mounts:
                volume_mount = {"name": mount.claim, "mountPath": mount.target}
                if mount.read_only:
                    volume_mount["readOnly"] = True
                container["volumeMounts"].append(volume_mount)
        return container

    @staticmethod
    def _pod_volumes(mounts: List[_Mount]) -> List[Dict[str, Any]]:
        volumes = []
        seen = set()
        for mount in mounts:
            if mount.claim in seen:
                continue
            seen.add(mount.claim)
            claim: Dict[str, Any] = {"claimName": mount.claim}
            if mount.read_only:
                claim["readOnly"] = True
            volumes.append({"name": mount.claim, "persistentVolumeClaim": claim})
        return volumes

    def _workload(
        self, service: ComposeService, ports: List[Tuple[int, int, str]], mounts: List[_Mount]
    ) -> KubernetesObject:
        labels = self._object_labels(service)
        pod_spec: Dict[str, Any] = {"containers": [self._container(service, ports, mounts)]}
        if mounts:
            pod_spec["volumes"] = self._pod_volumes(mounts)

        restart = (service.restart or "").strip().lower()
        if restart in POD_RESTART_POLICIES:
            pod_spec["restartPolicy"] = POD_RESTART_POLICIES[restart]
            return KubernetesObject({
                "apiVersion": "v1",
                "kind": "Pod",
                "metadata": self._metadata(object_name(service.name), labels, service.labels),
                "spec": pod_spec,
            })

        pod_spec["restartPolicy"] = "Always"
        spec: Dict[str, Any] = {
            "replicas": 1,
            "selector": {"matchLabels": self._selector(service)},
            "template": {
                "metadata": {"labels": dict(labels)},
                "spec": pod_spec,
            },
        }
        if mounts:
            spec["strategy"] = {"type": "Recreate"}
        return KubernetesObject({
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": self._metadata(object_name(service.name), labels, service.labels),
            "spec": spec,
        })

    def _service(
        self, service: ComposeService, ports: List[Tuple[int, int, str]]
    ) -> KubernetesObject:
        return KubernetesObject({
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": self._metadata(object_name(service.name), self._object_labels(service)),
            "spec": {
                "ports": [
                    {
                        "name": str(published),
                        "port": published,
                        "targetPort": target,
                        "protocol": protocol,
                    }
                    for published, target, protocol in ports
                ],
                "selector": self._selector(service),
            },
        })

    def _ingress(
        self, service: ComposeService, ports: List[Tuple[int, int, str]]
    ) -> KubernetesObject:
        if not ports:
            raise ManifestConversionError(
                f"service {service.name} is exposed but publishes no ports"
            )
        backend = {
            "service": {"name": object_name(service.name), "port": {"number": ports[0][0]}}
        }

        rules = []
        hosts = []
        for raw in service.labels[KOMPOSE_EXPOSE_LABEL].split(","):
            raw = raw.strip()
            if not raw:
                continue
            path = {"path": "/", "pathType": "Prefix", "backend": backend}
            if raw.lower() == "true":
                rules.append({"http": {"paths": [path]}})
                continue
            host, _, suffix = raw.partition("/")
            path["path"] = "/" + suffix
            hosts.append(host)
            rules.append({"host": host, "http": {"paths": [path]}})

        spec: Dict[str, Any] = {"rules": rules}
        ingress_class = service.labels.get(KOMPOSE_INGRESS_CLASS_LABEL)
        if ingress_class:
            spec["ingressClassName"] = ingress_class
        tls_secret = service.labels.get(KOMPOSE_TLS_SECRET_LABEL)
        if tls_secret and hosts:
            spec["tls"] = [{"hosts": hosts, "secretName": tls_secret}]

        return KubernetesObject({
            "apiVersion": "networking.k8s.io/v1",
            "kind": "Ingress",
            "metadata": self._metadata(object_name(service.name), self._object_labels(service)),
            "spec": spec,
        })

    def _claim(self, mount: _Mount) -> KubernetesObject:
        return KubernetesObject({
            "apiVersion": "v1",
            "kind": "PersistentVolumeClaim",
            "metadata": self._metadata(mount.claim, {KOMPOSE_SERVICE_LABEL: mount.claim}),
            "spec": {
                "accessModes": [READ_ONLY_MANY if mount.read_only else READ_WRITE_ONCE],
                "resources": {"requests": {"storage": DEFAULT_CLAIM_SIZE}},
            },
        })
