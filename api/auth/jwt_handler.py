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

"""JWT access token validation.

Tokens are issued by the identity provider in front of Lissto:
- Algorithm: RS256 (RSA signature with SHA-256)
- Claims: iss, sub, aud, iat, exp, jti, scope
- ``sub`` is the username; the ``lissto:<role>`` scope carries the role.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidTokenError,
)

from core.stack.value_objects import Role

logger = logging.getLogger(__name__)

ROLE_SCOPE_PREFIX = "lissto:"


class JWTHandlerError(Exception):
    """Base exception for JWT operations."""


class JWTValidationError(JWTHandlerError):
    """Exception raised when JWT validation fails."""


class JWTExpiredError(JWTValidationError):
    """Exception raised when JWT has expired."""


class JWTInvalidSignatureError(JWTValidationError):
    """Exception raised when JWT signature is invalid."""


@dataclass
class JWTConfig:
    """Configuration for JWT token handling."""

    public_key_path: str
    algorithm: str = "RS256"
    issuer: str = "lissto"
    audience: str = "lissto-api"

    @classmethod
    def from_env(cls) -> "JWTConfig":
        """Create JWTConfig from environment variables."""
        return cls(
            public_key_path=os.getenv("JWT_PUBLIC_KEY_PATH", "/etc/lissto/keys/jwt_public.pem"),
            algorithm=os.getenv("JWT_ALGORITHM", "RS256"),
            issuer=os.getenv("JWT_ISSUER", "lissto"),
            audience=os.getenv("JWT_AUDIENCE", "lissto-api"),
        )


@dataclass
class TokenData:
    """Decoded JWT token claims."""

    username: str
    scopes: List[str]
    issued_at: datetime
    expires_at: datetime
    token_id: str

    @property
    def role(self) -> Role:
        """Highest role granted by a ``lissto:<role>`` scope, else ``user``."""
        granted = {
            scope[len(ROLE_SCOPE_PREFIX):]
            for scope in self.scopes
            if scope.startswith(ROLE_SCOPE_PREFIX)
        }
        for role in (Role.ADMIN, Role.DEPLOY):
            if role.value in granted:
                return role
        return Role.USER


class JWTHandler:
    """Validates access tokens against the identity provider's public key."""

    def __init__(self, config: Optional[JWTConfig] = None):
        self.config = config or JWTConfig.from_env()
        self._public_key: Optional[str] = None

    def _load_public_key(self) -> str:
        if self._public_key is not None:
            return self._public_key
        path = self.config.public_key_path
        try:
            with open(path, "r", encoding="utf-8") as f:
                self._public_key = f.read()
        except FileNotFoundError:
            logger.error("JWT public key not found: %s", path)
            raise JWTValidationError(f"JWT public key not found: {path}") from None
        except OSError:
            logger.error("Failed to read JWT public key")
            raise JWTValidationError("Failed to read JWT public key") from None
        return self._public_key

    def validate_token(self, token: str) -> TokenData:
        """Validate a JWT access token and extract claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenData with decoded claims.

        Raises:
            JWTExpiredError: If token has expired.
            JWTInvalidSignatureError: If signature is invalid.
            JWTValidationError: If token is otherwise invalid.
        """
        public_key = self._load_public_key()
        try:
            payload = jwt.decode(
                token,
                public_key,
                algorithms=[self.config.algorithm],
                audience=self.config.audience,
                issuer=self.config.issuer,
                options={"require": ["exp", "sub"]},
            )
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise JWTExpiredError("Token has expired") from None
        except (InvalidAudienceError, InvalidIssuerError):
            logger.warning("Invalid token claims")
            raise JWTValidationError("Invalid token claims") from None
        except InvalidSignatureError:
            logger.warning("Invalid token signature")
            raise JWTInvalidSignatureError("Invalid token signature") from None
        except DecodeError:
            logger.warning("Invalid token format")
            raise JWTValidationError("Invalid token format") from None
        except InvalidTokenError:
            logger.warning("Token validation failed")
            raise JWTValidationError("Token validation failed") from None

        username = payload.get("sub")
        if not username:
            raise JWTValidationError("Token has no subject")

        return TokenData(
            username=username,
            scopes=payload.get("scope", "").split(),
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            token_id=payload.get("jti", ""),
        )
