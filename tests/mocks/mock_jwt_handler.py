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

"""Mock implementation of JWTHandler for testing."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Sequence, Tuple

import jwt

from api.auth.jwt_handler import JWTExpiredError, JWTValidationError, TokenData


def sign_test_token(
    private_key_pem: str,
    username: str,
    scopes: Sequence[str] = (),
    expires_in: timedelta = timedelta(minutes=60),
    issuer: str = "lissto",
    audience: str = "lissto-api",
) -> str:
    """Sign an RS256 token the way the identity provider issues them."""
    now = datetime.now(timezone.utc)
    claims = {
        "iss": issuer,
        "sub": username,
        "aud": audience,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        "jti": str(uuid.uuid4()),
        "scope": " ".join(scopes),
    }
    return jwt.encode(claims, private_key_pem, algorithm="RS256")


class MockJWTHandler:
    """In-memory mock implementation of JWTHandler for testing.

    Tokens are opaque strings remembered by the mock, so no RSA keys are
    needed.
    """

    DEFAULT_EXPIRE_MINUTES = 60

    def __init__(self, access_token_expire_minutes: int = DEFAULT_EXPIRE_MINUTES):
        self.access_token_expire_minutes = access_token_expire_minutes
        self._tokens: Dict[str, TokenData] = {}

    def create_access_token(self, username: str, scopes: List[str]) -> Tuple[str, int]:
        """Create a mock access token for ``username``."""
        now = datetime.now(timezone.utc)
        expires_delta = timedelta(minutes=self.access_token_expire_minutes)
        token_id = str(uuid.uuid4())
        token = f"mock-token-{token_id}"
        self._tokens[token] = TokenData(
            username=username,
            scopes=list(scopes),
            issued_at=now,
            expires_at=now + expires_delta,
            token_id=token_id,
        )
        return token, int(expires_delta.total_seconds())

    def validate_token(self, token: str) -> TokenData:
        """Return the claims of a token created by this mock.

        Raises:
            JWTValidationError: If the token is unknown.
            JWTExpiredError: If the token has expired.
        """
        if token not in self._tokens:
            raise JWTValidationError("Invalid token")
        data = self._tokens[token]
        if datetime.now(timezone.utc) > data.expires_at:
            raise JWTExpiredError("Token has expired")
        return data

    def reset(self) -> None:
        """Reset the mock to initial state (clear all tokens)."""
        self._tokens.clear()
