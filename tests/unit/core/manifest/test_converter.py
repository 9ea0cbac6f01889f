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

"""Unit tests for ComposeConverter."""

import pytest

from core.compose.parser import parse_compose
from core.manifest.converter import ComposeConverter
from core.manifest.exceptions import ManifestConversionError

COMPOSE = """
services:
  web:
    image: ghcr.io/acme/web@sha256:aaaa
    ports:
      - "8080:80"
    environment:
      MODE: prod
      EMPTY:
    command: serve --port 80
    labels:
      kompose.service.expose: web-alice.dev.internal
      kompose.service.expose.ingress-class-name: nginx-internal
      kompose.service.expose.tls-secret: internal-tls
    deploy:
      labels:
        lissto.dev/stack: shop
  db:
    image: postgres@sha256:bbbb
    volumes:
      - pgdata:/var/lib/postgresql/data
      - ./conf:/etc/postgresql:ro
  migrate:
    image: migrate@sha256:cccc
    restart: "no"
volumes:
  pgdata: {}
"""


def _by_kind_and_name(objects):
    return {(obj.kind.value, obj.name): obj for obj in objects}


@pytest.fixture(name="objects")
def objects_fixture():
    """Objects converted from the sample project."""
    return _by_kind_and_name(ComposeConverter("dev-alice").convert_to_objects(parse_compose(COMPOSE)))


class TestConvertToObjects:
    """Tests for ComposeConverter.convert_to_objects."""

    def test_object_set(self, objects):
        assert set(objects) == {
            ("Deployment", "web"),
            ("Service", "web"),
            ("Ingress", "web"),
            ("Deployment", "db"),
            ("Pod", "migrate"),
            ("PersistentVolumeClaim", "pgdata"),
            ("PersistentVolumeClaim", "db-claim1"),
        }

    def test_namespace_is_set(self, objects):
        assert all(obj.metadata["namespace"] == "dev-alice" for obj in objects.values())

    def test_deployment_container(self, objects):
        deployment = objects[("Deployment", "web")]
        container = deployment.containers()[0]

        assert container["image"] == "ghcr.io/acme/web@sha256:aaaa"
        assert container["args"] == ["serve", "--port", "80"]
        assert container["ports"] == [{"containerPort": 80, "protocol": "TCP"}]
        assert container["env"] == [
            {"name": "EMPTY", "value": ""},
            {"name": "MODE", "value": "prod"},
        ]
        assert deployment.spec["selector"] == {"matchLabels": {"io.kompose.service": "web"}}
        assert deployment.pod_template_labels()["lissto.dev/stack"] == "shop"

    def test_service_ports(self, objects):
        service = objects[("Service", "web")]
        assert service.spec["ports"] == [
            {"name": "8080", "port": 8080, "targetPort": 80, "protocol": "TCP"}
        ]

    def test_ingress(self, objects):
        ingress = objects[("Ingress", "web")]

        assert ingress.spec["ingressClassName"] == "nginx-internal"
        assert ingress.spec["tls"] == [
            {"hosts": ["web-alice.dev.internal"], "secretName": "internal-tls"}
        ]
        rule = ingress.spec["rules"][0]
        assert rule["host"] == "web-alice.dev.internal"
        assert rule["http"]["paths"][0]["backend"] == {
            "service": {"name": "web", "port": {"number": 8080}}
        }

    def test_volumes_become_claims(self, objects):
        deployment = objects[("Deployment", "db")]

        assert deployment.spec["strategy"] == {"type": "Recreate"}
        mounts = deployment.containers()[0]["volumeMounts"]
        assert mounts == [
            {"name": "pgdata", "mountPath": "/var/lib/postgresql/data"},
            {"name": "db-claim1", "mountPath": "/etc/postgresql", "readOnly": True},
        ]
        claim = objects[("PersistentVolumeClaim", "db-claim1")]
        assert claim.spec["accessModes"] == ["ReadOnlyMany"]

    def test_restart_no_gives_pod(self, objects):
        pod = objects[("Pod", "migrate")]
        assert pod.spec["restartPolicy"] == "Never"

    def test_no_namespace(self):
        objects = ComposeConverter().convert_to_objects(
            parse_compose("services:\n  a:\n    image: nginx\n")
        )
        assert "namespace" not in objects[0].metadata

    def test_object_names_are_dns_labels(self):
        project = parse_compose(
            "services:\n"
            "  My_Api:\n"
            "    image: api@sha256:dddd\n"
            "    ports: ['8000:8000']\n"
            "    volumes: ['pg_data:/var/lib/data']\n"
            "    labels:\n"
            "      kompose.service.expose: api.example.com\n"
            "volumes:\n"
            "  pg_data: {}\n"
        )

        objects = ComposeConverter().convert_to_objects(project)
        by_kind = {obj.kind.value: obj for obj in objects}

        assert {obj.name for obj in objects} == {"my-api", "pg-data"}
        deployment = by_kind["Deployment"]
        assert deployment.spec["selector"]["matchLabels"] == {"io.kompose.service": "my-api"}
        assert deployment.containers()[0]["name"] == "my-api"
        assert deployment.spec["template"]["spec"]["volumes"][0]["persistentVolumeClaim"] == {
            "claimName": "pg-data"
        }
        assert by_kind["Service"].spec["selector"] == {"io.kompose.service": "my-api"}
        backend = by_kind["Ingress"].spec["rules"][0]["http"]["paths"][0]["backend"]
        assert backend["service"]["name"] == "my-api"


class TestConversionErrors:
    """Invalid inputs."""

    def test_service_without_image(self):
        project = parse_compose("services:\n  api:\n    build: .\n")
        with pytest.raises(ManifestConversionError, match="has no image"):
            ComposeConverter().convert_to_objects(project)

    @pytest.mark.parametrize("port", ["abc", "8000-8010:80"])
    def test_invalid_port(self, port):
        project = parse_compose(f"services:\n  a:\n    image: x\n    ports: ['{port}']\n")
        with pytest.raises(ManifestConversionError):
            ComposeConverter().convert_to_objects(project)

    def test_exposed_without_ports(self):
        project = parse_compose(
            "services:\n  a:\n    image: x\n    labels:\n"
            "      kompose.service.expose: a.example.com\n"
        )
        with pytest.raises(ManifestConversionError, match="publishes no ports"):
            ComposeConverter().convert_to_objects(project)
