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

"""Integration tests for the Envs API."""

import pytest


class TestEnvsApi:
    """Tests for /api/v1/envs."""

    def test_create_and_get(self, test_client, auth_headers, dev_env):
        assert dev_env == "alice/dev"

        response = test_client.get(f"/api/v1/envs/{dev_env}", headers=auth_headers("alice"))

        assert response.status_code == 200
        assert response.json()["namespace"] == "dev-alice"

    def test_get_by_bare_name(self, test_client, auth_headers, dev_env):
        response = test_client.get("/api/v1/envs/dev", headers=auth_headers("alice"))
        assert response.status_code == 200
        assert response.json()["id"] == "alice/dev"

    def test_duplicate_env(self, test_client, auth_headers, dev_env):
        response = test_client.post("/api/v1/envs", json={"name": "dev"}, headers=auth_headers("alice"))
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "ALREADY_EXISTS"

    @pytest.mark.parametrize("name", ["Dev", "under_score", "-edge"])
    def test_invalid_name(self, test_client, auth_headers, name):
        response = test_client.post("/api/v1/envs", json={"name": name}, headers=auth_headers("alice"))
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "VALIDATION_ERROR"

    def test_list_only_own(self, test_client, auth_headers, dev_env):
        test_client.post("/api/v1/envs", json={"name": "qa"}, headers=auth_headers("bob"))

        response = test_client.get("/api/v1/envs", headers=auth_headers("alice"))

        assert [env["id"] for env in response.json()["envs"]] == ["alice/dev"]

    def test_foreign_env_is_not_found(self, test_client, auth_headers, dev_env):
        response = test_client.get(f"/api/v1/envs/{dev_env}", headers=auth_headers("bob"))
        assert response.status_code == 404
