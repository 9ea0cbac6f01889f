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

"""Common dependencies for API endpoints.

Authentication, caller identity and correlation ids shared by every router.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.auth.jwt_handler import (
    JWTExpiredError,
    JWTHandler,
    JWTInvalidSignatureError,
    JWTValidationError,
)
from api.logging_utils import log_secure_info
from core.stack.value_objects import Caller, Role

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)
_jwt_handler = JWTHandler()


def _get_container():
    """Lazy import of container to avoid circular imports."""
    from container import container  # pylint: disable=import-outside-toplevel
    return container


# ------------------------------------------------------------------
# Authentication
# ------------------------------------------------------------------
def get_jwt_handler() -> JWTHandler:
    """Get the JWT handler instance."""
    return _jwt_handler


def _unauthorized(error: str, description: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "error_description": description},
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
) -> dict:
    """Verify JWT token from Authorization header.

    Returns:
        Token data dictionary with username, scopes and role.

    Raises:
        HTTPException: If token is missing, invalid, or expired.
    """
    if credentials is None:
        logger.warning("Request missing Authorization header")
        raise _unauthorized("missing_token", "Authorization header is required")

    try:
        token_data = jwt_handler.validate_token(credentials.credentials)
    except JWTExpiredError:
        logger.warning("Token validation failed - token expired")
        raise _unauthorized("token_expired", "Access token has expired") from None
    except JWTInvalidSignatureError:
        logger.warning("Token validation failed - invalid signature")
        raise _unauthorized("invalid_token", "Invalid token signature") from None
    except JWTValidationError:
        logger.warning("Token validation failed: Invalid token format or content")
        raise _unauthorized("invalid_token", "Invalid access token") from None

    log_secure_info("info", "Token validated successfully", token_data.username)
    return {
        "username": token_data.username,
        "scopes": token_data.scopes,
        "role": token_data.role.value,
        "token_id": token_data.token_id,
    }


def get_caller(token_data: Annotated[dict, Depends(verify_token)]) -> Caller:
    """Build the caller identity from validated token data."""
    try:
        return Caller(username=token_data["username"], role=Role.parse(token_data.get("role")))
    except ValueError:
        raise _unauthorized("invalid_token", "Token carries no usable subject") from None


def get_correlation_id(
    x_correlation_id: Optional[str] = Header(
        default=None,
        alias="X-Correlation-Id",
        description="Request tracing ID",
    ),
) -> str:
    """Return provided correlation ID or generate one."""
    if x_correlation_id and x_correlation_id.strip():
        return x_correlation_id.strip()[:128]
    return _get_container().request_id_generator().generate()
