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

"""Unit tests for the Kubernetes cluster repositories over a fake API server."""

import json
from datetime import timedelta

import httpx
import pytest

from core.stack.entities import (
    Blueprint,
    ConfigMap,
    Env,
    ImageInfo,
    OwnerReference,
    Stack,
    StackSpec,
    SuspensionSpec,
)
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ClusterError,
    ConfigMapNotFoundError,
    EnvNotFoundError,
    ResourceAlreadyExistsError,
    StackNotFoundError,
)
from infra.cluster.kubernetes import (
    KubernetesApi,
    KubernetesBlueprintRepository,
    KubernetesConfigMapRepository,
    KubernetesEnvRepository,
    KubernetesNamespaceRepository,
    KubernetesStackRepository,
    build_kubernetes_client,
)


class FakeApiServer:
    """Stores objects by path and answers like the Kubernetes API."""

    def __init__(self):
        self.objects = {}
        self.requests = []
        self._uids = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        path = request.url.path
        if request.method == "POST":
            body = json.loads(request.content)
            item_path = f"{path}/{body['metadata']['name']}"
            if item_path in self.objects:
                return httpx.Response(409, json={"message": "exists"})
            self._uids += 1
            body["metadata"]["uid"] = f"uid-{self._uids}"
            body["metadata"]["creationTimestamp"] = "2026-01-02T03:04:05Z"
            self.objects[item_path] = body
            return httpx.Response(201, json=body)
        if request.method == "GET":
            if path in self.objects:
                return httpx.Response(200, json=self.objects[path])
            items = [
                obj for key, obj in sorted(self.objects.items())
                if key.rsplit("/", 1)[0] == path
            ]
            if path.endswith(("blueprints", "envs", "stacks", "configmaps")):
                return httpx.Response(200, json={"items": items})
            return httpx.Response(404, json={"message": "not found"})
        if request.method == "PUT":
            if path not in self.objects:
                return httpx.Response(404)
            self.objects[path] = json.loads(request.content)
            return httpx.Response(200, json=self.objects[path])
        if request.method == "DELETE":
            if self.objects.pop(path, None) is None:
                return httpx.Response(404)
            return httpx.Response(200, json={})
        return httpx.Response(405)


@pytest.fixture(name="server")
def server_fixture():
    """Empty fake API server."""
    return FakeApiServer()


@pytest.fixture(name="api")
def api_fixture(server):
    """KubernetesApi wired to the fake server."""
    client = httpx.Client(base_url="https://k8s.test", transport=httpx.MockTransport(server))
    return KubernetesApi(client)


class TestKubernetesApi:
    """Tests for path building and error mapping."""

    def test_paths(self):
        assert KubernetesApi.custom_path("stacks", "dev-a", "s1") == (
            "/apis/env.lissto.dev/v1alpha1/namespaces/dev-a/stacks/s1"
        )
        assert KubernetesApi.custom_path("stacks") == "/apis/env.lissto.dev/v1alpha1/stacks"
        assert KubernetesApi.core_path("configmaps", "dev-a") == "/api/v1/namespaces/dev-a/configmaps"

    def test_server_error_message(self):
        client = httpx.Client(
            base_url="https://k8s.test",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(422, json={"message": "bad spec"})
            ),
        )
        with pytest.raises(ClusterError, match="bad spec"):
            KubernetesApi(client).request("POST", "/x", "Stack", "s", {})

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        client = httpx.Client(base_url="https://k8s.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ClusterError):
            KubernetesApi(client).request("GET", "/x", "Stack")

    def test_client_requires_token(self, tmp_path):
        with pytest.raises(ClusterError):
            build_kubernetes_client(token_path=str(tmp_path / "missing"))

    def test_client_with_token(self, tmp_path):
        token = tmp_path / "token"
        token.write_text("abc\n", encoding="utf-8")

        client = build_kubernetes_client(
            api_server="https://k8s.test", token_path=str(token), ca_path=""
        )

        assert client.headers["Authorization"] == "Bearer abc"
        client.close()


class TestNamespaceRepository:
    """Tests for namespace creation."""

    def test_creates_missing_namespace(self, api, server):
        KubernetesNamespaceRepository(api).ensure_namespace("dev-alice")

        body = server.objects["/api/v1/namespaces/dev-alice"]
        assert body["metadata"]["labels"] == {"app.kubernetes.io/managed-by": "lissto"}

    def test_existing_namespace_is_left_alone(self, api, server):
        repo = KubernetesNamespaceRepository(api)
        repo.ensure_namespace("dev-alice")
        repo.ensure_namespace("dev-alice")

        assert [r for r in server.requests if r[0] == "POST"] == [
            ("POST", "/api/v1/namespaces")
        ]


class TestBlueprintRepository:
    """Tests for blueprint resources."""

    def test_round_trip(self, api, server):
        repo = KubernetesBlueprintRepository(api)
        repo.create(Blueprint(
            name="bp1", namespace="dev-a", compose="services: {}", content_hash="h1",
            title="Shop", services=["web"], infra=["db"], repository="github.com/a/b",
            created_by="alice",
        ))

        stored = server.objects["/apis/env.lissto.dev/v1alpha1/namespaces/dev-a/blueprints/bp1"]
        assert stored["spec"] == {"dockerCompose": "services: {}", "hash": "h1"}
        assert json.loads(stored["metadata"]["annotations"]["lissto.dev/services"]) == {
            "services": ["web"], "infra": ["db"],
        }

        blueprint = repo.get("dev-a", "bp1")
        assert blueprint.title == "Shop"
        assert blueprint.infra == ["db"]
        assert blueprint.created_by == "alice"
        assert blueprint.created_at.year == 2026
        assert repo.find_by_hash("dev-a", "h1").name == "bp1"
        assert repo.find_by_hash("dev-a", "other") is None

    def test_missing_and_duplicate(self, api):
        repo = KubernetesBlueprintRepository(api)
        with pytest.raises(BlueprintNotFoundError):
            repo.get("dev-a", "nope")
        with pytest.raises(BlueprintNotFoundError):
            repo.delete("dev-a", "nope")

        repo.create(Blueprint(name="bp1", namespace="dev-a", compose="c"))
        with pytest.raises(ResourceAlreadyExistsError):
            repo.create(Blueprint(name="bp1", namespace="dev-a", compose="c"))

    def test_malformed_services_annotation(self):
        blueprint = KubernetesBlueprintRepository.from_resource({
            "metadata": {"name": "b", "annotations": {"lissto.dev/services": "{"}},
        })
        assert blueprint.services == []


class TestEnvRepository:
    """Tests for env resources."""

    def test_create_get_list(self, api):
        repo = KubernetesEnvRepository(api)
        repo.create(Env(name="e1", namespace="dev-a"))
        repo.create(Env(name="e2", namespace="dev-a"))

        assert repo.get("dev-a", "e1").name == "e1"
        assert [env.name for env in repo.list("dev-a")] == ["e1", "e2"]
        with pytest.raises(EnvNotFoundError):
            repo.get("dev-a", "e3")


def _stack():
    return Stack(
        name="s1",
        namespace="dev-a",
        spec=StackSpec(
            blueprint_reference="a/bp1",
            env="e1",
            manifests_config_map="s1",
            images={"web": ImageInfo(digest="web@sha256:1", image="web:main")},
            suspension=SuspensionSpec(["web"], timedelta(minutes=30)),
        ),
        labels={"lissto.dev/env": "e1"},
    )


class TestStackRepository:
    """Tests for stack resources."""

    def test_round_trip(self, api, server):
        repo = KubernetesStackRepository(api)
        created = repo.create(_stack())

        assert created.uid == "uid-1"
        spec = server.objects["/apis/env.lissto.dev/v1alpha1/namespaces/dev-a/stacks/s1"]["spec"]
        assert spec["suspension"] == {"services": ["web"], "timeout": "30m0s"}
        assert spec["images"]["web"] == {"digest": "web@sha256:1", "image": "web:main"}

        stack = repo.get("dev-a", "s1")
        assert stack.spec.suspension.timeout == timedelta(minutes=30)
        assert stack.spec.images["web"].image == "web:main"

    def test_update_keeps_status(self, api, server):
        repo = KubernetesStackRepository(api)
        repo.create(_stack())
        path = "/apis/env.lissto.dev/v1alpha1/namespaces/dev-a/stacks/s1"
        server.objects[path]["status"] = {
            "phase": "Running",
            "phaseHistory": [{"phase": "Running", "transitionTime": "2026-01-02T03:05:00Z"}],
            "services": {"web": {"phase": "Running"}},
        }

        stack = repo.get("dev-a", "s1")
        stack.spec.suspension = None
        updated = repo.update(stack)

        assert "suspension" not in server.objects[path]["spec"]
        assert updated.status.phase == "Running"
        assert updated.status.services["web"].phase == "Running"
        assert updated.status.phase_history[0].transition_time.minute == 5

    def test_missing_stack(self, api):
        repo = KubernetesStackRepository(api)
        with pytest.raises(StackNotFoundError):
            repo.get("dev-a", "nope")
        with pytest.raises(StackNotFoundError):
            repo.update(_stack())
        with pytest.raises(StackNotFoundError):
            repo.delete("dev-a", "s1")

    def test_invalid_suspension_timeout_is_ignored(self):
        stack = KubernetesStackRepository.from_resource({
            "metadata": {"name": "s"},
            "spec": {"suspension": {"timeout": "soon"}},
        })
        assert stack.spec.suspension.services == ["*"]
        assert stack.spec.suspension.timeout is None


class TestConfigMapRepository:
    """Tests for ConfigMaps."""

    def test_owner_references(self, api, server):
        repo = KubernetesConfigMapRepository(api)
        repo.create(ConfigMap(name="s1", namespace="dev-a", data={"manifests.yaml": "x"}))

        config_map = repo.get("dev-a", "s1")
        config_map.set_owner(OwnerReference(kind="Stack", name="s1", uid="uid-9"))
        repo.update(config_map)

        stored = server.objects["/api/v1/namespaces/dev-a/configmaps/s1"]
        assert stored["metadata"]["ownerReferences"][0]["uid"] == "uid-9"
        assert stored["metadata"]["ownerReferences"][0]["controller"] is True
        assert repo.get("dev-a", "s1").owner_references[0].kind == "Stack"

    def test_missing_config_map(self, api):
        repo = KubernetesConfigMapRepository(api)
        with pytest.raises(ConfigMapNotFoundError):
            repo.get("dev-a", "x")
        with pytest.raises(ConfigMapNotFoundError):
            repo.delete("dev-a", "x")
