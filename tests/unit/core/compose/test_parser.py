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

"""Unit tests for compose parsing."""

import pytest

from core.compose.exceptions import InvalidComposeError
from core.compose.parser import parse_compose

COMPOSE = """
name: shop
x-lissto:
  registry: ghcr.io/acme
  repositoryPrefix: shop-
  title: Shop
services:
  web:
    build: .
    ports:
      - "8080:80"
    labels:
      - lissto.dev/expose=internet
      - lissto.dev/tag=v1.2.0
    environment:
      - DEBUG=1
      - TOKEN
  db:
    image: postgres:15
    labels:
      tier: data
    healthcheck:
      test: ["CMD", "pg_isready"]
volumes:
  data: {}
"""


class TestParseCompose:
    """Tests for parse_compose."""

    def test_parses_services_and_extension(self):
        project = parse_compose(COMPOSE)

        assert project.name == "shop"
        assert project.service_names() == ["db", "web"]
        assert project.extension.registry == "ghcr.io/acme"
        assert project.extension.repository_prefix == "shop-"
        assert project.extension.title == "Shop"
        assert list(project.volumes) == ["data"]

    def test_list_labels_are_normalized(self):
        web = parse_compose(COMPOSE).services["web"]

        assert web.labels == {
            "lissto.dev/expose": "internet",
            "lissto.dev/tag": "v1.2.0",
        }
        assert web.lissto_labels.tag == "v1.2.0"
        assert web.has_build
        assert not web.is_infra

    def test_environment_without_value_is_none(self):
        web = parse_compose(COMPOSE).services["web"]
        assert web.environment == {"DEBUG": "1", "TOKEN": None}

    def test_unknown_service_keys_are_kept(self):
        db = parse_compose(COMPOSE).services["db"]

        assert db.is_infra
        assert db.extra == {"healthcheck": {"test": ["CMD", "pg_isready"]}}

    def test_default_project_name(self):
        project = parse_compose("services:\n  app:\n    image: nginx\n")
        assert project.name == "stack"

    def test_boolean_label_values_are_lowercased(self):
        project = parse_compose(
            "services:\n  app:\n    image: nginx\n    labels:\n      lissto.dev/expose: true\n"
        )
        assert project.services["app"].labels["lissto.dev/expose"] == "true"

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "   ",
            "services: [unclosed",
            "- just\n- a list\n",
            "name: nothing\n",
            "services: {}\n",
            "services:\n  app:\n    labels: {}\n",
            "services:\n  app:\n    image: 42\n",
        ],
    )
    def test_invalid_documents(self, content):
        with pytest.raises(InvalidComposeError):
            parse_compose(content)

    def test_schema_error_reports_location(self):
        with pytest.raises(InvalidComposeError) as exc_info:
            parse_compose("services:\n  app:\n    image: 42\n")
        assert "services/app/image" in exc_info.value.message

