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

"""Unit tests for registry references and docker config credentials."""

import base64
import json

import pytest

from infra.registry.credentials import DockerConfigCredentials
from infra.registry.references import RegistryReference


class TestRegistryReference:
    """Tests for RegistryReference.parse."""

    @pytest.mark.parametrize(
        "image_url,expected",
        [
            ("nginx", ("registry-1.docker.io", "library/nginx", "latest")),
            ("nginx:1.25", ("registry-1.docker.io", "library/nginx", "1.25")),
            ("bitnami/redis:7", ("registry-1.docker.io", "bitnami/redis", "7")),
            ("docker.io/nginx:1", ("registry-1.docker.io", "library/nginx", "1")),
            ("ghcr.io/acme/web:main", ("ghcr.io", "acme/web", "main")),
            ("localhost:5000/app", ("localhost:5000", "app", "latest")),
            ("localhost/app:dev", ("localhost", "app", "dev")),
            ("ghcr.io/acme/web@sha256:abc", ("ghcr.io", "acme/web", "sha256:abc")),
            ("ghcr.io/acme/web:1.0@sha256:abc", ("ghcr.io", "acme/web", "sha256:abc")),
        ],
    )
    def test_parse(self, image_url, expected):
        ref = RegistryReference.parse(image_url)
        assert (ref.registry, ref.repository, ref.reference) == expected

    def test_docker_hub_flag(self):
        assert RegistryReference.parse("nginx").is_docker_hub
        assert not RegistryReference.parse("ghcr.io/a/b").is_docker_hub

    @pytest.mark.parametrize("image_url", ["", "   ", "ghcr.io/:tag"])
    def test_invalid(self, image_url):
        with pytest.raises(ValueError):
            RegistryReference.parse(image_url)


def _write_config(directory, auths):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "config.json"
    path.write_text(json.dumps({"auths": auths}), encoding="utf-8")
    return path


class TestDockerConfigCredentials:
    """Tests for DockerConfigCredentials."""

    def test_auth_field_is_decoded(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DOCKER_CONFIG", raising=False)
        encoded = base64.b64encode(b"bot:s3cr:et").decode()
        path = _write_config(tmp_path, {"https://ghcr.io": {"auth": encoded}})

        credentials = DockerConfigCredentials(str(path))

        assert credentials.get("ghcr.io") == ("bot", "s3cr:et")

    def test_docker_hub_aliases(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DOCKER_CONFIG", raising=False)
        path = _write_config(
            tmp_path,
            {"https://index.docker.io/v1/": {"username": "me", "password": "pw"}},
        )

        credentials = DockerConfigCredentials(str(path))

        assert credentials.get("registry-1.docker.io") == ("me", "pw")
        assert credentials.get("docker.io") == ("me", "pw")

    def test_docker_config_env_wins(self, tmp_path, monkeypatch):
        _write_config(tmp_path / "env", {"env.io": {"username": "a", "password": "b"}})
        configured = _write_config(tmp_path / "cfg", {"cfg.io": {"username": "c", "password": "d"}})
        monkeypatch.setenv("DOCKER_CONFIG", str(tmp_path / "env"))

        credentials = DockerConfigCredentials(str(configured))

        assert credentials.get("env.io") == ("a", "b")
        assert credentials.get("cfg.io") is None

    def test_missing_or_broken_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DOCKER_CONFIG", raising=False)
        assert DockerConfigCredentials(str(tmp_path / "missing.json")).get("ghcr.io") is None

        broken = tmp_path / "broken.json"
        broken.write_text("not json", encoding="utf-8")
        assert DockerConfigCredentials(str(broken)).get("ghcr.io") is None

    def test_unusable_entries_are_skipped(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DOCKER_CONFIG", raising=False)
        path = _write_config(
            tmp_path,
            {
                "a.io": {"auth": "!!!"},
                "b.io": {},
                "c.io": "oops",
                "d.io": {"auth": base64.b64encode(b":nouser").decode()},
            },
        )

        credentials = DockerConfigCredentials(str(path))

        for host in ("a.io", "b.io", "c.io", "d.io"):
            assert credentials.get(host) is None
