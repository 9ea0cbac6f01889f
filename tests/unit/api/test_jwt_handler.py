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

"""Unit tests for JWTHandler token validation."""

from datetime import timedelta

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from api.auth.jwt_handler import (
    JWTConfig,
    JWTExpiredError,
    JWTHandler,
    JWTInvalidSignatureError,
    JWTValidationError,
)
from core.stack.value_objects import Role
from tests.mocks.mock_jwt_handler import sign_test_token


def _key_pair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture(name="private_key", scope="module")
def private_key_fixture():
    """Identity provider key pair, shared across the module."""
    return _key_pair()


@pytest.fixture(name="handler")
def handler_fixture(private_key, tmp_path) -> JWTHandler:
    """Handler trusting the identity provider's public key."""
    public_key_path = tmp_path / "jwt_public.pem"
    public_key_path.write_text(private_key[1])
    return JWTHandler(JWTConfig(public_key_path=str(public_key_path)))


class TestValidateToken:
    """Tests for JWTHandler.validate_token."""

    def test_valid_token(self, handler, private_key):
        token = sign_test_token(private_key[0], "alice", ["lissto:deploy"])

        data = handler.validate_token(token)

        assert data.username == "alice"
        assert data.role is Role.DEPLOY
        assert data.token_id

    def test_expired_token(self, handler, private_key):
        token = sign_test_token(private_key[0], "alice", expires_in=timedelta(minutes=-5))
        with pytest.raises(JWTExpiredError):
            handler.validate_token(token)

    def test_foreign_signature(self, handler):
        other_private, _ = _key_pair()
        with pytest.raises(JWTInvalidSignatureError):
            handler.validate_token(sign_test_token(other_private, "alice"))

    def test_wrong_audience(self, handler, private_key):
        token = sign_test_token(private_key[0], "alice", audience="other-api")
        with pytest.raises(JWTValidationError, match="claims"):
            handler.validate_token(token)

    def test_malformed_token(self, handler):
        with pytest.raises(JWTValidationError):
            handler.validate_token("not-a-jwt")

    def test_missing_public_key(self, tmp_path, private_key):
        handler = JWTHandler(JWTConfig(public_key_path=str(tmp_path / "missing.pem")))
        with pytest.raises(JWTValidationError, match="not found"):
            handler.validate_token(sign_test_token(private_key[0], "alice"))


def test_handler_only_verifies():
    """Tokens are issued by the identity provider, never by the API."""
    assert not hasattr(JWTHandler, "create_access_token")
    assert "private_key_path" not in JWTConfig.__dataclass_fields__
