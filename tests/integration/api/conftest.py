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

"""Shared fixtures for API integration tests."""

import uuid
from typing import Callable, Dict, List, Optional

import pytest

from tests.mocks.cluster_world import SHOP_COMPOSE

AuthHeaders = Callable[..., Dict[str, str]]


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(mock_jwt_handler) -> AuthHeaders:
    """Factory for bearer headers of a user with an optional role scope."""

    def _headers(username: str = "alice", role: Optional[str] = None) -> Dict[str, str]:
        scopes: List[str] = [f"lissto:{role}"] if role else []
        token, _ = mock_jwt_handler.create_access_token(username, scopes)
        return {
            "Authorization": f"Bearer {token}",
            "X-Correlation-Id": f"test-{uuid.uuid4()}",
        }

    return _headers


@pytest.fixture(name="shop_blueprint")
def shop_blueprint_fixture(test_client, auth_headers) -> str:
    """Create the shop blueprint for alice and return its id."""
    response = test_client.post(
        "/api/v1/blueprints",
        json={"compose": SHOP_COMPOSE, "repository": "https://github.com/acme/shop.git"},
        headers=auth_headers("alice"),
    )
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.fixture(name="dev_env")
def dev_env_fixture(test_client, auth_headers) -> str:
    """Create env ``dev`` for alice and return its id."""
    response = test_client.post("/api/v1/envs", json={"name": "dev"}, headers=auth_headers("alice"))
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.fixture(name="shop_images")
def shop_images_fixture(image_checker) -> Dict[str, str]:
    """Publish the shop images for commit abc1234; returns digest per reference."""
    return {
        "web": image_checker.add("ghcr.io/acme/web:abc1234"),
        "db": image_checker.add("postgres:15"),
    }
