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

"""Error response model and domain error mapping shared by the routers."""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from core.compose.exceptions import ComposeDomainError, ComposeValidationError
from core.expose.exceptions import ExposeDomainError
from core.image.exceptions import ImageDomainError, RegistryError
from core.manifest.exceptions import ManifestConversionError, ManifestTooLargeError
from core.stack.exceptions import (
    ClusterError,
    InvalidReferenceError,
    MaterializationError,
    PermissionDeniedError,
    PrepareResultExpiredError,
    PrepareResultNotFoundError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    StackValidationError,
)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    correlation_id: str = Field(..., description="Request correlation ID")
    timestamp: str = Field(..., description="Error timestamp (ISO 8601)")
    errors: Optional[List[str]] = Field(None, description="Validation errors, when any")


def build_error_response(
    error_code: str,
    message: str,
    correlation_id: str,
    errors: Optional[List[str]] = None,
) -> ErrorResponse:
    return ErrorResponse(
        error=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
        errors=errors,
    )


def http_error(
    status_code: int,
    error_code: str,
    message: str,
    correlation_id: str,
    errors: Optional[List[str]] = None,
) -> HTTPException:
    """Build an HTTPException carrying an ErrorResponse body."""
    return HTTPException(
        status_code=status_code,
        detail=build_error_response(
            error_code, message, correlation_id, errors
        ).model_dump(exclude_none=True),
    )


# Order matters: subclasses before their bases.
_DOMAIN_ERRORS = (
    (ComposeValidationError, status.HTTP_400_BAD_REQUEST, "INVALID_COMPOSE"),
    (ComposeDomainError, status.HTTP_400_BAD_REQUEST, "INVALID_COMPOSE"),
    (InvalidReferenceError, status.HTTP_400_BAD_REQUEST, "INVALID_REFERENCE"),
    (PrepareResultExpiredError, status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST_ID"),
    (PrepareResultNotFoundError, status.HTTP_404_NOT_FOUND, "REQUEST_ID_NOT_FOUND"),
    (StackValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (ExposeDomainError, status.HTTP_400_BAD_REQUEST, "EXPOSE_CONFIGURATION_ERROR"),
    (ManifestTooLargeError, status.HTTP_400_BAD_REQUEST, "MANIFEST_TOO_LARGE"),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN, "PERMISSION_DENIED"),
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (ResourceAlreadyExistsError, status.HTTP_409_CONFLICT, "ALREADY_EXISTS"),
    (RegistryError, status.HTTP_502_BAD_GATEWAY, "REGISTRY_ERROR"),
    (ImageDomainError, status.HTTP_400_BAD_REQUEST, "IMAGE_RESOLUTION_FAILED"),
    (ManifestConversionError, status.HTTP_500_INTERNAL_SERVER_ERROR, "MANIFEST_GENERATION_FAILED"),
    (MaterializationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "STACK_CREATION_FAILED"),
    (ClusterError, status.HTTP_500_INTERNAL_SERVER_ERROR, "CLUSTER_ERROR"),
)


def map_domain_error(exc: Exception, correlation_id: str) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Errors without a mapping surface as 500 INTERNAL_ERROR.
    """
    for error_type, status_code, error_code in _DOMAIN_ERRORS:
        if isinstance(exc, error_type):
            errors = exc.errors if isinstance(exc, ComposeValidationError) else None
            return http_error(
                status_code, error_code, getattr(exc, "message", str(exc)), correlation_id, errors
            )
    return http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        getattr(exc, "message", str(exc)),
        correlation_id,
    )
