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

"""Unit tests for container wiring helpers."""

# pylint: disable=protected-access

import pytest

import container as container_module
from common.config import ClusterConfig, IngressConfig, LisstoConfig
from core.expose.value_objects import ExposeTier


class TestClusterBackend:
    """Tests for backend selection."""

    def test_configured_backend_wins(self, monkeypatch):
        monkeypatch.setenv("ENV", "prod")
        config = LisstoConfig(cluster=ClusterConfig(backend="memory"))
        assert container_module._cluster_backend(config) == "memory"

    @pytest.mark.parametrize("env,expected", [("prod", "kubernetes"), ("PROD", "kubernetes"), ("dev", "memory")])
    def test_env_profile_default(self, monkeypatch, env, expected):
        monkeypatch.setenv("ENV", env)
        assert container_module._cluster_backend(LisstoConfig.defaults()) == expected

    def test_unset_env_means_memory(self, monkeypatch):
        monkeypatch.delenv("ENV", raising=False)
        assert container_module._cluster_backend(LisstoConfig.defaults()) == "memory"


class TestExposeTiers:
    """Tests for ingress tier mapping."""

    def test_tiers_follow_config(self):
        config = LisstoConfig(
            internal_ingress=IngressConfig("nginx-int", ".int.example.com", "int-tls"),
        )

        tiers = container_module._expose_tiers(config)

        assert tiers[ExposeTier.INTERNAL].is_configured
        assert tiers[ExposeTier.INTERNAL].host_suffix == ".int.example.com"
        assert not tiers[ExposeTier.INTERNET].is_configured


class TestLoadConfig:
    """Tests for configuration fallback."""

    def test_missing_file_falls_back_to_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LISSTO_CONFIG_PATH", str(tmp_path / "absent.ini"))
        assert container_module._load_config() == LisstoConfig.defaults()

    def test_invalid_file_falls_back_to_defaults(self, monkeypatch, tmp_path):
        path = tmp_path / "lissto.ini"
        path.write_text("[cluster]\nbackend = docker\n")
        monkeypatch.setenv("LISSTO_CONFIG_PATH", str(path))
        assert container_module._load_config() == LisstoConfig.defaults()
