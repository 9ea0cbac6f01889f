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

"""Integration tests for the Blueprints API."""

from tests.mocks.cluster_world import SHOP_COMPOSE


class TestCreateBlueprintApi:
    """Tests for POST /api/v1/blueprints."""

    def test_create_returns_201(self, test_client, auth_headers):
        response = test_client.post(
            "/api/v1/blueprints",
            json={"compose": SHOP_COMPOSE, "repository": "https://github.com/acme/shop.git"},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["created"] is True
        assert body["data"]["id"].startswith("alice/")
        assert body["warnings"] == []

    def test_identical_compose_returns_200(self, test_client, auth_headers, shop_blueprint):
        response = test_client.post(
            "/api/v1/blueprints", json={"compose": SHOP_COMPOSE}, headers=auth_headers("alice")
        )

        assert response.status_code == 200
        assert response.json()["created"] is False
        assert response.json()["data"]["id"] == shop_blueprint

    def test_invalid_compose(self, test_client, auth_headers):
        response = test_client.post(
            "/api/v1/blueprints", json={"compose": "services: 42"}, headers=auth_headers("alice")
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "INVALID_COMPOSE"
        assert detail["errors"]

    def test_empty_compose_fails_request_validation(self, test_client, auth_headers):
        response = test_client.post(
            "/api/v1/blueprints", json={"compose": ""}, headers=auth_headers("alice")
        )
        assert response.status_code == 422

    def test_deploy_role_publishes_global_blueprint(self, test_client, auth_headers):
        response = test_client.post(
            "/api/v1/blueprints",
            json={"compose": SHOP_COMPOSE, "branch": "main", "author": "alice"},
            headers=auth_headers("ci", role="deploy"),
        )

        assert response.status_code == 201
        assert response.json()["data"]["id"].startswith("global/")

    def test_user_cannot_publish_for_another_author(self, test_client, auth_headers):
        response = test_client.post(
            "/api/v1/blueprints",
            json={"compose": SHOP_COMPOSE, "author": "bob"},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "PERMISSION_DENIED"


class TestReadAndDeleteBlueprintApi:
    """Tests for GET and DELETE on blueprints."""

    def test_get_returns_compose(self, test_client, auth_headers, shop_blueprint):
        response = test_client.get(f"/api/v1/blueprints/{shop_blueprint}", headers=auth_headers("alice"))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == shop_blueprint
        assert body["compose"] == SHOP_COMPOSE
        assert body["title"] == "shop"
        assert body["services"] == ["web"]
        assert body["infra"] == ["db"]

    def test_list(self, test_client, auth_headers, shop_blueprint):
        response = test_client.get("/api/v1/blueprints", headers=auth_headers("alice"))

        assert response.status_code == 200
        assert [bp["id"] for bp in response.json()["blueprints"]] == [shop_blueprint]
        assert test_client.get("/api/v1/blueprints", headers=auth_headers("bob")).json() == {
            "blueprints": []
        }

    def test_foreign_blueprint_is_not_found(self, test_client, auth_headers, shop_blueprint):
        response = test_client.get(f"/api/v1/blueprints/{shop_blueprint}", headers=auth_headers("bob"))
        assert response.status_code == 404

    def test_malformed_identifier(self, test_client, auth_headers):
        response = test_client.get("/api/v1/blueprints/a/b/c", headers=auth_headers("alice"))
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_REFERENCE"

    def test_delete(self, test_client, auth_headers, shop_blueprint):
        headers = auth_headers("alice")

        response = test_client.delete(f"/api/v1/blueprints/{shop_blueprint}", headers=headers)

        assert response.status_code == 204
        assert test_client.get(f"/api/v1/blueprints/{shop_blueprint}", headers=headers).status_code == 404
