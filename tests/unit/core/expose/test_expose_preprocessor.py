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

"""Unit tests for ExposePreprocessor."""

import pytest

from core.compose.entities import ComposeService
from core.expose.exceptions import ExposeConfigurationError
from core.expose.services import ExposePreprocessor, strip_ingress_labels
from core.expose.value_objects import ExposeTier, IngressTierConfig

INTERNAL = IngressTierConfig("nginx-internal", ".dev.internal", "internal-tls")
INTERNET = IngressTierConfig("nginx-public", ".dev.example.com", "public-tls")


@pytest.fixture(name="preprocessor")
def preprocessor_fixture():
    """Preprocessor with both tiers configured."""
    return ExposePreprocessor({ExposeTier.INTERNAL: INTERNAL, ExposeTier.INTERNET: INTERNET})


def _service(name, expose=None, **labels):
    if expose is not None:
        labels["lissto.dev/expose"] = expose
    return ComposeService(name=name, image="nginx", labels=dict(labels))


class TestExposeTier:
    """Tests for tier mapping."""

    @pytest.mark.parametrize(
        "value,tier",
        [
            ("true", ExposeTier.INTERNAL),
            ("internal", ExposeTier.INTERNAL),
            (" Internal ", ExposeTier.INTERNAL),
            ("internet", ExposeTier.INTERNET),
            (" Internet", ExposeTier.INTERNET),
            ("public", ExposeTier.INTERNAL),
            ("false", ExposeTier.INTERNAL),
            ("yes", ExposeTier.INTERNAL),
        ],
    )
    def test_from_label(self, value, tier):
        assert ExposeTier.from_label(value) == tier

    def test_incomplete_config_is_not_configured(self):
        assert not IngressTierConfig("nginx", ".x", "").is_configured
        assert INTERNAL.is_configured


class TestProcess:
    """Tests for ExposePreprocessor.process."""

    def test_internal_service_gets_ingress_labels(self, preprocessor):
        services = {"web": _service("web", "true")}

        processed = preprocessor.process(services, env="alice", stack="shop-alice")

        labels = processed["web"].labels
        assert "lissto.dev/expose" not in labels
        assert labels["kompose.service.expose"] == "web-alice.dev.internal"
        assert labels["kompose.service.expose.ingress-class-name"] == "nginx-internal"
        assert labels["kompose.service.expose.tls-secret"] == "internal-tls"

    def test_internet_tier(self, preprocessor):
        processed = preprocessor.process({"web": _service("web", "internet")}, "prod", "s")
        assert processed["web"].labels["kompose.service.expose"] == "web-prod.dev.example.com"

    def test_unrecognized_value_falls_back_to_internal(self):
        preprocessor = ExposePreprocessor({ExposeTier.INTERNAL: INTERNAL})

        processed = preprocessor.process({"web": _service("web", "yes")}, "dev-1", "s1")

        assert processed["web"].labels["kompose.service.expose"] == "web-dev-1.dev.internal"

    def test_every_service_gets_stack_label(self, preprocessor):
        services = {"web": _service("web", "true"), "db": _service("db")}

        processed = preprocessor.process(services, "alice", "shop")

        for service in processed.values():
            assert service.deploy["labels"]["lissto.dev/stack"] == "shop"

    def test_existing_ingress_labels_are_stripped(self, preprocessor):
        services = {"db": _service("db", **{"kompose.service.expose": "evil.example.com"})}

        processed = preprocessor.process(services, "alice", "shop")

        assert "kompose.service.expose" not in processed["db"].labels

    def test_input_is_not_mutated(self, preprocessor):
        original = _service("web", "true")
        preprocessor.process({"web": original}, "alice", "shop")

        assert original.labels == {"lissto.dev/expose": "true"}
        assert original.deploy == {}

    def test_unconfigured_tier_fails_before_rewriting(self):
        preprocessor = ExposePreprocessor({ExposeTier.INTERNAL: INTERNAL})
        services = {"a": _service("a", "true"), "b": _service("b", "internet")}

        with pytest.raises(ExposeConfigurationError) as exc_info:
            preprocessor.process(services, "alice", "shop")

        assert exc_info.value.service == "b"
        assert exc_info.value.tier == "internet"


class TestExposedServiceUrl:
    """Tests for get_exposed_service_url."""

    def test_preview(self, preprocessor):
        assert preprocessor.get_exposed_service_url(_service("web", "true"), "bob") == (
            "web-bob.dev.internal"
        )

    def test_not_exposed_or_no_env(self, preprocessor):
        assert preprocessor.get_exposed_service_url(_service("db"), "bob") == ""
        assert preprocessor.get_exposed_service_url(_service("web", "true"), "") == ""

    def test_unconfigured_tier_previews_nothing(self):
        preprocessor = ExposePreprocessor()
        assert preprocessor.get_exposed_service_url(_service("web", "true"), "bob") == ""


def test_strip_ingress_labels():
    labels = {
        "kompose.service.expose": "x",
        "kompose.service.expose.tls-secret": "y",
        "tier": "web",
    }
    assert strip_ingress_labels(labels) == {"tier": "web"}
