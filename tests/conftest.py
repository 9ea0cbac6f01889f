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

"""Shared pytest fixtures for Lissto API tests.

The application and its container are imported lazily so that pure unit
tests never build the FastAPI app.
"""

# pylint: disable=redefined-outer-name,global-statement,import-outside-toplevel

from typing import Generator

import pytest

_APP = None
_CONTAINER = None


def _get_app():
    """Lazy import of FastAPI app."""
    global _APP
    if _APP is None:
        from main import app  # noqa: PLC0415
        _APP = app
    return _APP


def _get_container():
    """Lazy import of the application container."""
    global _CONTAINER
    if _CONTAINER is None:
        from container import container  # noqa: PLC0415
        _CONTAINER = container
    return _CONTAINER


@pytest.fixture
def mock_jwt_handler():
    """Create a fresh MockJWTHandler instance.

    Returns:
        MockJWTHandler for testing JWT operations.
    """
    from tests.mocks.mock_jwt_handler import MockJWTHandler  # noqa: PLC0415
    return MockJWTHandler()


@pytest.fixture
def image_checker():
    """Registry stand-in; tests register the images that exist."""
    from tests.mocks.mock_image_checker import MockImageChecker  # noqa: PLC0415
    return MockImageChecker()


@pytest.fixture
def test_client(mock_jwt_handler, image_checker, monkeypatch) -> Generator:  # noqa: W0621
    """Create a FastAPI TestClient over an in-memory cluster.

    Registry access goes to ``image_checker``, tokens are validated by
    ``mock_jwt_handler`` and the internal expose tier is configured.

    Yields:
        TestClient configured for testing.
    """
    from dependency_injector import providers  # noqa: PLC0415
    from fastapi.testclient import TestClient  # noqa: PLC0415

    from api.dependencies import get_jwt_handler  # noqa: PLC0415
    from core.expose.services import ExposePreprocessor  # noqa: PLC0415
    from core.expose.value_objects import ExposeTier, IngressTierConfig  # noqa: PLC0415
    from infra.cache.memory_cache import MemoryCache  # noqa: PLC0415

    monkeypatch.setenv("ENV", "dev")
    monkeypatch.delenv("IMAGE_CACHE_FILE_PATH", raising=False)

    app = _get_app()
    container = _get_container()

    overridden = [
        (container.cluster_backend, providers.Object("memory")),
        (container.image_checker, providers.Object(image_checker)),
        (container.image_cache, providers.Singleton(MemoryCache)),
        (container.expose_preprocessor, providers.Object(
            ExposePreprocessor(
                {
                    ExposeTier.INTERNAL: IngressTierConfig(
                        "nginx-internal", ".dev.internal", "internal-tls"
                    )
                }
            )
        )),
    ]
    container.reset_singletons()
    for provider, replacement in overridden:
        provider.override(replacement)
    app.dependency_overrides[get_jwt_handler] = lambda: mock_jwt_handler

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    for provider, _ in overridden:
        provider.reset_override()
    container.reset_singletons()
