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

"""Unit tests for stack value objects."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from core.stack.value_objects import (
    Caller,
    Role,
    ScopedId,
    compose_hash,
    format_duration,
    generate_blueprint_name,
    generate_stack_name,
    parse_duration,
    sanitize_name_suffix,
    validate_resource_name,
)

NOW = datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)


class TestRole:
    """Tests for Role parsing."""

    def test_known_roles(self):
        assert Role.parse("admin") is Role.ADMIN
        assert Role.parse("deploy") is Role.DEPLOY

    @pytest.mark.parametrize("value", [None, "", "root", "ADMIN"])
    def test_unknown_falls_back_to_user(self, value):
        assert Role.parse(value) is Role.USER


class TestCaller:
    """Tests for Caller."""

    def test_default_role(self):
        assert Caller("alice").role is Role.USER

    def test_empty_username_rejected(self):
        with pytest.raises(ValueError):
            Caller("  ")


class TestScopedId:
    """Tests for ScopedId parsing."""

    def test_scoped(self):
        scoped = ScopedId.parse("alice/20260304-050607-abc")
        assert scoped.scope == "alice"
        assert scoped.name == "20260304-050607-abc"
        assert not scoped.is_legacy
        assert str(scoped) == "alice/20260304-050607-abc"

    def test_global(self):
        assert ScopedId.parse("global/x").is_global

    def test_legacy(self):
        scoped = ScopedId.parse("my-stack")
        assert scoped.is_legacy
        assert str(scoped) == "my-stack"

    @pytest.mark.parametrize("value", ["", "  ", "/name", "alice/", "a/b/c"])
    def test_malformed(self, value):
        with pytest.raises(ValueError):
            ScopedId.parse(value)


class TestValidateResourceName:
    """Tests for DNS-1123 name validation."""

    @pytest.mark.parametrize("name", ["a", "dev-alice", "x" * 63, "20260304-050607-ab12cd34"])
    def test_valid(self, name):
        assert validate_resource_name(name) == name

    @pytest.mark.parametrize("name", ["", "-a", "a-", "Alice", "a_b", "x" * 64, "a.b"])
    def test_invalid(self, name):
        with pytest.raises(ValueError):
            validate_resource_name(name)


class TestNameGeneration:
    """Tests for stack and blueprint names."""

    def test_stack_name_from_tag(self):
        assert generate_stack_name(commit="abc", tag="Release/1.0", now=NOW) == (
            "20260304-050607-release-1-0"
        )

    def test_stack_name_from_commit(self):
        assert generate_stack_name(commit="0123456789abcdef", now=NOW) == (
            "20260304-050607-01234567"
        )

    def test_stack_name_random_suffix(self):
        with patch("core.stack.value_objects.secrets.token_hex", return_value="deadbeef"):
            assert generate_stack_name(now=NOW) == "20260304-050607-deadbeef"

    def test_suffix_is_capped(self):
        assert sanitize_name_suffix("a" * 30) == "a" * 20

    def test_unusable_suffix_is_random(self):
        with patch("core.stack.value_objects.secrets.token_hex", return_value="cafebabe"):
            assert sanitize_name_suffix("___") == "cafebabe"

    def test_blueprint_name(self):
        content_hash = compose_hash("services: {}")
        assert len(content_hash) == 64
        assert generate_blueprint_name(content_hash, now=NOW) == (
            f"20260304-050607-{content_hash[:8]}"
        )

    def test_generated_names_are_valid_resource_names(self):
        assert validate_resource_name(generate_stack_name(tag="Feature_X", now=NOW))


class TestDurations:
    """Tests for duration parsing and formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("30s", timedelta(seconds=30)),
            ("5m", timedelta(minutes=5)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("1.5h", timedelta(minutes=90)),
            ("250ms", timedelta(milliseconds=250)),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "10", "m5", "5x", "5m junk"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    def test_format(self):
        assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m0s"
        assert format_duration(timedelta(minutes=2, seconds=5)) == "2m5s"
        assert format_duration(timedelta(seconds=45)) == "45s"
