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

"""Unit tests for domain error mapping."""

import pytest

from api.errors import build_error_response, http_error, map_domain_error
from core.compose.exceptions import ComposeValidationError, InvalidComposeError
from core.expose.exceptions import ExposeConfigurationError
from core.image.exceptions import NoImageFoundError, RegistryError
from core.manifest.exceptions import ManifestConversionError, ManifestTooLargeError
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ClusterError,
    InvalidImageDigestError,
    InvalidReferenceError,
    MaterializationError,
    PermissionDeniedError,
    PrepareResultExpiredError,
    PrepareResultNotFoundError,
    ResourceAlreadyExistsError,
    StackNotFoundError,
)


class TestMapDomainError:
    """Tests for map_domain_error."""

    @pytest.mark.parametrize(
        "exc,status_code,code",
        [
            (InvalidComposeError("bad yaml"), 400, "INVALID_COMPOSE"),
            (InvalidReferenceError("a/b/c"), 400, "INVALID_REFERENCE"),
            (PrepareResultExpiredError("expired"), 400, "INVALID_REQUEST_ID"),
            (PrepareResultNotFoundError("other namespace"), 404, "REQUEST_ID_NOT_FOUND"),
            (InvalidImageDigestError("web", "web:latest"), 400, "VALIDATION_ERROR"),
            (ExposeConfigurationError("web", "internet"), 400, "EXPOSE_CONFIGURATION_ERROR"),
            (ManifestTooLargeError(2_000_000, 1_000_000), 400, "MANIFEST_TOO_LARGE"),
            (PermissionDeniedError("nope"), 403, "PERMISSION_DENIED"),
            (StackNotFoundError("s1"), 404, "NOT_FOUND"),
            (BlueprintNotFoundError("bp"), 404, "NOT_FOUND"),
            (ResourceAlreadyExistsError("Env", "dev"), 409, "ALREADY_EXISTS"),
            (RegistryError("registry down"), 502, "REGISTRY_ERROR"),
            (NoImageFoundError("web"), 400, "IMAGE_RESOLUTION_FAILED"),
            (ManifestConversionError("bad port"), 500, "MANIFEST_GENERATION_FAILED"),
            (MaterializationError("no uid"), 500, "STACK_CREATION_FAILED"),
            (ClusterError("api server down"), 500, "CLUSTER_ERROR"),
        ],
    )
    def test_mapping(self, exc, status_code, code):
        error = map_domain_error(exc, "corr-1")

        assert error.status_code == status_code
        assert error.detail["error"] == code
        assert error.detail["message"] == exc.message
        assert error.detail["correlation_id"] == "corr-1"
        assert "errors" not in error.detail

    def test_validation_errors_are_listed(self):
        exc = ComposeValidationError(["services must be a mapping", "name must be a string"])

        error = map_domain_error(exc, "corr-2")

        assert error.status_code == 400
        assert error.detail["errors"] == exc.errors
        assert error.detail["message"] == "services must be a mapping; name must be a string"

    def test_unmapped_error_is_internal(self):
        error = map_domain_error(RuntimeError("boom"), "corr-3")
        assert error.status_code == 500
        assert error.detail["error"] == "INTERNAL_ERROR"
        assert error.detail["message"] == "boom"


class TestErrorResponse:
    """Tests for the error body helpers."""

    def test_build_error_response(self):
        body = build_error_response("NOT_FOUND", "missing", "corr")
        assert body.error == "NOT_FOUND"
        assert body.timestamp
        assert body.errors is None

    def test_http_error_drops_empty_fields(self):
        error = http_error(404, "NOT_FOUND", "missing", "corr")
        assert set(error.detail) == {"error", "message", "correlation_id", "timestamp"}
