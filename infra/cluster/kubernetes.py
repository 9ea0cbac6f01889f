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

"""Cluster repositories backed by the Kubernetes REST API.

Blueprints, Envs and Stacks are custom resources of the
``env.lissto.dev/v1alpha1`` group; manifests live in core ConfigMaps.
Updates read the current object and write it back with its
``resourceVersion`` so concurrent writers get a conflict instead of a
silent overwrite.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from core.stack.entities import (
    BLUEPRINT_HASH_ANNOTATION,
    BLUEPRINT_REPOSITORY_ANNOTATION,
    BLUEPRINT_SERVICES_ANNOTATION,
    BLUEPRINT_TITLE_ANNOTATION,
    CREATED_BY_ANNOTATION,
    MANAGED_BY_LABEL,
    MANAGED_BY_VALUE,
    Blueprint,
    ConfigMap,
    Env,
    ImageInfo,
    OwnerReference,
    PhaseTransition,
    ServiceStatus,
    Stack,
    StackSpec,
    StackStatus,
    SuspensionSpec,
)
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ClusterError,
    ConfigMapNotFoundError,
    EnvNotFoundError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    StackNotFoundError,
)
from core.stack.repositories import (
    BlueprintRepository,
    ConfigMapRepository,
    EnvRepository,
    NamespaceRepository,
    StackRepository,
)
from core.stack.value_objects import format_duration, parse_duration

logger = logging.getLogger(__name__)

API_GROUP = "env.lissto.dev"
API_VERSION = "v1alpha1"
GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

IN_CLUSTER_API_SERVER = "https://kubernetes.default.svc"
IN_CLUSTER_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
IN_CLUSTER_CA_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"


def build_kubernetes_client(
    api_server: str = IN_CLUSTER_API_SERVER,
    token_path: str = IN_CLUSTER_TOKEN_PATH,
    ca_path: str = IN_CLUSTER_CA_PATH,
    timeout_seconds: float = 10.0,
) -> httpx.Client:
    """Create an httpx client authenticated with a service account token.

    Raises:
        ClusterError: If the token cannot be read.
    """
    try:
        token = Path(token_path).read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ClusterError(f"Cannot read service account token {token_path}: {exc}") from exc

    verify: Any = ca_path if ca_path and Path(ca_path).exists() else True
    return httpx.Client(
        base_url=api_server,
        headers={"Authorization": f"Bearer {token}"},
        verify=verify,
        timeout=timeout_seconds,
    )


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class KubernetesApi:
    """Thin JSON wrapper over the Kubernetes REST API.

    404 maps to ``ResourceNotFoundError``, 409 to
    ``ResourceAlreadyExistsError`` and any other failure to ``ClusterError``.
    """

    def __init__(self, http_client: httpx.Client):
        self._client = http_client

    @staticmethod
    def custom_path(plural: str, namespace: Optional[str] = None, name: str = "") -> str:
        path = f"/apis/{GROUP_VERSION}"
        if namespace is not None:
            path += f"/namespaces/{namespace}"
        path += f"/{plural}"
        if name:
            path += f"/{name}"
        return path

    @staticmethod
    def core_path(plural: str, namespace: Optional[str] = None, name: str = "") -> str:
        path = "/api/v1"
        if namespace is not None:
            path += f"/namespaces/{namespace}"
        path += f"/{plural}"
        if name:
            path += f"/{name}"
        return path

    def request(
        self, method: str, path: str, kind: str, name: str = "", body: Optional[dict] = None
    ) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, json=body)
        except httpx.HTTPError as exc:
            raise ClusterError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404:
            raise ResourceNotFoundError(kind, name)
        if response.status_code == 409:
            raise ResourceAlreadyExistsError(kind, name)
        if response.status_code >= 400:
            message = response.text
            try:
                message = response.json().get("message", message)
            except ValueError:
                pass
            raise ClusterError(
                f"{method} {path} returned HTTP {response.status_code}: {message}"
            )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ClusterError(f"{method} {path} returned invalid JSON") from exc

    def replace(self, path: str, kind: str, name: str, mutate) -> Dict[str, Any]:
        """Read the object at ``path``, apply ``mutate`` and write it back."""
        current = self.request("GET", path, kind, name)
        mutate(current)
        return self.request("PUT", path, kind, name, current)


class KubernetesNamespaceRepository(NamespaceRepository):
    def __init__(self, api: KubernetesApi):
        self._api = api

    def ensure_namespace(self, name: str) -> None:
        try:
            self._api.request("GET", self._api.core_path("namespaces", name=name), "Namespace", name)
            return
        except ResourceNotFoundError:
            pass
        body = {
            "apiVersion": "v1",
            "kind": "Namespace",
            "metadata": {"name": name, "labels": {MANAGED_BY_LABEL: MANAGED_BY_VALUE}},
        }
        try:
            self._api.request("POST", self._api.core_path("namespaces"), "Namespace", name, body)
            logger.info("Created namespace %s", name)
        except ResourceAlreadyExistsError:
            logger.debug("Namespace %s created concurrently", name)


class KubernetesBlueprintRepository(BlueprintRepository):
    def __init__(self, api: KubernetesApi):
        self._api = api

    @staticmethod
    def to_resource(blueprint: Blueprint) -> Dict[str, Any]:
        annotations = {
            BLUEPRINT_TITLE_ANNOTATION: blueprint.title,
            BLUEPRINT_SERVICES_ANNOTATION: json.dumps(
                {"services": blueprint.services, "infra": blueprint.infra}
            ),
            BLUEPRINT_HASH_ANNOTATION: blueprint.content_hash,
        }
        if blueprint.repository:
            annotations[BLUEPRINT_REPOSITORY_ANNOTATION] = blueprint.repository
        if blueprint.created_by:
            annotations[CREATED_BY_ANNOTATION] = blueprint.created_by
        return {
            "apiVersion": GROUP_VERSION,
            "kind": "Blueprint",
            "metadata": {
                "name": blueprint.name,
                "namespace": blueprint.namespace,
                "labels": {MANAGED_BY_LABEL: MANAGED_BY_VALUE},
                "annotations": annotations,
            },
            "spec": {"dockerCompose": blueprint.compose, "hash": blueprint.content_hash},
        }

    @staticmethod
    def from_resource(body: Dict[str, Any]) -> Blueprint:
        metadata = body.get("metadata") or {}
        annotations = metadata.get("annotations") or {}
        spec = body.get("spec") or {}
        try:
            groups = json.loads(annotations.get(BLUEPRINT_SERVICES_ANNOTATION) or "{}")
        except ValueError:
            groups = {}
        blueprint = Blueprint(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            compose=spec.get("dockerCompose", ""),
            content_hash=spec.get("hash") or annotations.get(BLUEPRINT_HASH_ANNOTATION, ""),
            title=annotations.get(BLUEPRINT_TITLE_ANNOTATION, ""),
            services=list(groups.get("services") or []),
            infra=list(groups.get("infra") or []),
            repository=annotations.get(BLUEPRINT_REPOSITORY_ANNOTATION, ""),
            created_by=annotations.get(CREATED_BY_ANNOTATION, ""),
        )
        created_at = _parse_time(metadata.get("creationTimestamp"))
        if created_at:
            blueprint.created_at = created_at
        return blueprint

    def create(self, blueprint: Blueprint) -> Blueprint:
        path = self._api.custom_path("blueprints", blueprint.namespace)
        body = self._api.request("POST", path, "Blueprint", blueprint.name, self.to_resource(blueprint))
        return self.from_resource(body) if body else blueprint

    def get(self, namespace: str, name: str) -> Blueprint:
        try:
            body = self._api.request(
                "GET", self._api.custom_path("blueprints", namespace, name), "Blueprint", name
            )
        except ResourceNotFoundError as exc:
            raise BlueprintNotFoundError(name) from exc
        return self.from_resource(body)

    def list(self, namespace: Optional[str] = None) -> List[Blueprint]:
        body = self._api.request("GET", self._api.custom_path("blueprints", namespace), "Blueprint")
        return [self.from_resource(item) for item in body.get("items") or []]

    def find_by_hash(self, namespace: str, content_hash: str) -> Optional[Blueprint]:
        for blueprint in self.list(namespace):
            if blueprint.content_hash == content_hash:
                return blueprint
        return None

    def delete(self, namespace: str, name: str) -> None:
        try:
            self._api.request(
                "DELETE", self._api.custom_path("blueprints", namespace, name), "Blueprint", name
            )
        except ResourceNotFoundError as exc:
            raise BlueprintNotFoundError(name) from exc


class KubernetesEnvRepository(EnvRepository):
    def __init__(self, api: KubernetesApi):
        self._api = api

    @staticmethod
    def from_resource(body: Dict[str, Any]) -> Env:
        metadata = body.get("metadata") or {}
        env = Env(name=metadata.get("name", ""), namespace=metadata.get("namespace", ""))
        created_at = _parse_time(metadata.get("creationTimestamp"))
        if created_at:
            env.created_at = created_at
        return env

    def create(self, env: Env) -> Env:
        body = {
            "apiVersion": GROUP_VERSION,
            "kind": "Env",
            "metadata": {
                "name": env.name,
                "namespace": env.namespace,
                "labels": {MANAGED_BY_LABEL: MANAGED_BY_VALUE},
            },
            "spec": {},
        }
        created = self._api.request("POST", self._api.custom_path("envs", env.namespace), "Env", env.name, body)
        return self.from_resource(created) if created else env

    def get(self, namespace: str, name: str) -> Env:
        try:
            body = self._api.request("GET", self._api.custom_path("envs", namespace, name), "Env", name)
        except ResourceNotFoundError as exc:
            raise EnvNotFoundError(name) from exc
        return self.from_resource(body)

    def list(self, namespace: str) -> List[Env]:
        body = self._api.request("GET", self._api.custom_path("envs", namespace), "Env")
        return [self.from_resource(item) for item in body.get("items") or []]


def _spec_to_dict(spec: StackSpec) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "blueprintReference": spec.blueprint_reference,
        "env": spec.env,
        "manifestsConfigMapRef": spec.manifests_config_map,
        "images": {name: info.to_dict() for name, info in spec.images.items()},
    }
    if spec.suspension is not None:
        suspension: Dict[str, Any] = {"services": list(spec.suspension.services)}
        if spec.suspension.timeout is not None:
            suspension["timeout"] = format_duration(spec.suspension.timeout)
        data["suspension"] = suspension
    return data


def _suspension_from_dict(data: Optional[Dict[str, Any]]) -> Optional[SuspensionSpec]:
    if not data:
        return None
    timeout = None
    if data.get("timeout"):
        try:
            timeout = parse_duration(data["timeout"])
        except ValueError:
            logger.warning("Ignoring invalid suspension timeout %s", data["timeout"])
    return SuspensionSpec(services=list(data.get("services") or ["*"]), timeout=timeout)


def _status_from_dict(data: Optional[Dict[str, Any]]) -> StackStatus:
    data = data or {}
    history = [
        PhaseTransition(
            phase=item.get("phase", ""),
            transition_time=_parse_time(item.get("transitionTime")) or datetime.now(timezone.utc),
            reason=item.get("reason", ""),
            message=item.get("message", ""),
        )
        for item in data.get("phaseHistory") or []
    ]
    services = {
        name: ServiceStatus(
            phase=item.get("phase", ""), suspended_at=_parse_time(item.get("suspendedAt"))
        )
        for name, item in (data.get("services") or {}).items()
    }
    return StackStatus(phase=data.get("phase", ""), phase_history=history, services=services)


class KubernetesStackRepository(StackRepository):
    def __init__(self, api: KubernetesApi):
        self._api = api

    @staticmethod
    def to_resource(stack: Stack) -> Dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION,
            "kind": "Stack",
            "metadata": {
                "name": stack.name,
                "namespace": stack.namespace,
                "labels": dict(stack.labels),
                "annotations": dict(stack.annotations),
            },
            "spec": _spec_to_dict(stack.spec),
        }

    @staticmethod
    def from_resource(body: Dict[str, Any]) -> Stack:
        metadata = body.get("metadata") or {}
        spec = body.get("spec") or {}
        stack = Stack(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            spec=StackSpec(
                blueprint_reference=spec.get("blueprintReference", ""),
                env=spec.get("env", ""),
                manifests_config_map=spec.get("manifestsConfigMapRef", ""),
                images={
                    name: ImageInfo.from_dict(info)
                    for name, info in (spec.get("images") or {}).items()
                },
                suspension=_suspension_from_dict(spec.get("suspension")),
            ),
            labels=dict(metadata.get("labels") or {}),
            annotations=dict(metadata.get("annotations") or {}),
            uid=metadata.get("uid", ""),
            status=_status_from_dict(body.get("status")),
        )
        created_at = _parse_time(metadata.get("creationTimestamp"))
        if created_at:
            stack.created_at = created_at
        return stack

    def create(self, stack: Stack) -> Stack:
        body = self._api.request(
            "POST", self._api.custom_path("stacks", stack.namespace), "Stack", stack.name,
            self.to_resource(stack),
        )
        return self.from_resource(body)

    def get(self, namespace: str, name: str) -> Stack:
        try:
            body = self._api.request("GET", self._api.custom_path("stacks", namespace, name), "Stack", name)
        except ResourceNotFoundError as exc:
            raise StackNotFoundError(name) from exc
        return self.from_resource(body)

    def list(self, namespace: Optional[str] = None) -> List[Stack]:
        body = self._api.request("GET", self._api.custom_path("stacks", namespace), "Stack")
        return [self.from_resource(item) for item in body.get("items") or []]

    def update(self, stack: Stack) -> Stack:
        def mutate(current: Dict[str, Any]) -> None:
            current["spec"] = _spec_to_dict(stack.spec)
            metadata = current.setdefault("metadata", {})
            metadata["labels"] = dict(stack.labels)
            metadata["annotations"] = dict(stack.annotations)

        try:
            body = self._api.replace(
                self._api.custom_path("stacks", stack.namespace, stack.name), "Stack", stack.name, mutate
            )
        except ResourceNotFoundError as exc:
            raise StackNotFoundError(stack.name) from exc
        return self.from_resource(body)

    def delete(self, namespace: str, name: str) -> None:
        try:
            self._api.request("DELETE", self._api.custom_path("stacks", namespace, name), "Stack", name)
        except ResourceNotFoundError as exc:
            raise StackNotFoundError(name) from exc


def _owner_to_dict(owner: OwnerReference) -> Dict[str, Any]:
    return {
        "apiVersion": owner.api_version,
        "kind": owner.kind,
        "name": owner.name,
        "uid": owner.uid,
        "controller": owner.controller,
        "blockOwnerDeletion": owner.block_owner_deletion,
    }


class KubernetesConfigMapRepository(ConfigMapRepository):
    def __init__(self, api: KubernetesApi):
        self._api = api

    @staticmethod
    def to_resource(config_map: ConfigMap) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "name": config_map.name,
            "namespace": config_map.namespace,
            "labels": dict(config_map.labels),
        }
        if config_map.owner_references:
            metadata["ownerReferences"] = [_owner_to_dict(o) for o in config_map.owner_references]
        return {"apiVersion": "v1", "kind": "ConfigMap", "metadata": metadata, "data": dict(config_map.data)}

    @staticmethod
    def from_resource(body: Dict[str, Any]) -> ConfigMap:
        metadata = body.get("metadata") or {}
        return ConfigMap(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            data=dict(body.get("data") or {}),
            labels=dict(metadata.get("labels") or {}),
            owner_references=[
                OwnerReference(
                    kind=ref.get("kind", ""),
                    name=ref.get("name", ""),
                    uid=ref.get("uid", ""),
                    api_version=ref.get("apiVersion", GROUP_VERSION),
                    controller=bool(ref.get("controller")),
                    block_owner_deletion=bool(ref.get("blockOwnerDeletion")),
                )
                for ref in metadata.get("ownerReferences") or []
            ],
        )

    def create(self, config_map: ConfigMap) -> ConfigMap:
        body = self._api.request(
            "POST", self._api.core_path("configmaps", config_map.namespace), "ConfigMap",
            config_map.name, self.to_resource(config_map),
        )
        return self.from_resource(body) if body else config_map

    def get(self, namespace: str, name: str) -> ConfigMap:
        try:
            body = self._api.request(
                "GET", self._api.core_path("configmaps", namespace, name), "ConfigMap", name
            )
        except ResourceNotFoundError as exc:
            raise ConfigMapNotFoundError(name) from exc
        return self.from_resource(body)

    def update(self, config_map: ConfigMap) -> ConfigMap:
        desired = self.to_resource(config_map)

        def mutate(current: Dict[str, Any]) -> None:
            current["data"] = desired["data"]
            metadata = current.setdefault("metadata", {})
            metadata["labels"] = desired["metadata"]["labels"]
            metadata["ownerReferences"] = desired["metadata"].get("ownerReferences", [])

        try:
            body = self._api.replace(
                self._api.core_path("configmaps", config_map.namespace, config_map.name),
                "ConfigMap", config_map.name, mutate,
            )
        except ResourceNotFoundError as exc:
            raise ConfigMapNotFoundError(config_map.name) from exc
        return self.from_resource(body)

    def delete(self, namespace: str, name: str) -> None:
        try:
            self._api.request(
                "DELETE", self._api.core_path("configmaps", namespace, name), "ConfigMap", name
            )
        except ResourceNotFoundError as exc:
            raise ConfigMapNotFoundError(name) from exc
