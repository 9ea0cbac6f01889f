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

"""Value objects for stacks, blueprints and envs."""

import hashlib
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import ClassVar, Optional


class Role(str, Enum):
    """Caller role carried by the access token."""

    ADMIN = "admin"
    DEPLOY = "deploy"
    USER = "user"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Parse a role name, falling back to the lowest privilege."""
        for role in cls:
            if role.value == value:
                return role
        return cls.USER


@dataclass(frozen=True)
class Caller:
    """Authenticated identity a request acts on behalf of."""

    username: str
    role: Role = Role.USER

    def __post_init__(self) -> None:
        """Validate username."""
        if not self.username or not self.username.strip():
            raise ValueError("Caller username cannot be empty")


@dataclass(frozen=True)
class ScopedId:
    """Public identifier ``<scope>/<name>`` of a namespaced resource.

    ``scope`` is ``global`` or a developer handle. Legacy identifiers carry
    only a name and have an empty scope.
    """

    scope: str
    name: str

    GLOBAL_SCOPE: ClassVar[str] = "global"

    @classmethod
    def parse(cls, value: str) -> "ScopedId":
        """Parse ``scope/name`` or a bare legacy ``name``.

        Raises:
            ValueError: If the identifier is empty or malformed.
        """
        value = (value or "").strip()
        if not value:
            raise ValueError("Identifier cannot be empty")
        if "/" not in value:
            return cls(scope="", name=value)
        scope, name = value.split("/", 1)
        if not scope or not name or "/" in name:
            raise ValueError(f"Invalid identifier '{value}': expected <scope>/<name>")
        return cls(scope=scope, name=name)

    @property
    def is_legacy(self) -> bool:
        """Check if the identifier has no scope."""
        return not self.scope

    @property
    def is_global(self) -> bool:
        return self.scope == self.GLOBAL_SCOPE

    def __str__(self) -> str:
        if self.is_legacy:
            return self.name
        return f"{self.scope}/{self.name}"


RESOURCE_NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
MAX_RESOURCE_NAME_LENGTH = 63


def validate_resource_name(name: str) -> str:
    """Return ``name`` if it is a valid DNS-1123 label.

    Raises:
        ValueError: If the name is empty, too long or has invalid characters.
    """
    if not name:
        raise ValueError("Name cannot be empty")
    if len(name) > MAX_RESOURCE_NAME_LENGTH:
        raise ValueError(f"Name '{name}' exceeds {MAX_RESOURCE_NAME_LENGTH} characters")
    if not RESOURCE_NAME_PATTERN.match(name):
        raise ValueError(
            f"Name '{name}' must consist of lowercase letters, digits and dashes"
        )
    return name


TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
MAX_TAG_SUFFIX_LENGTH = 20
SHORT_HASH_LENGTH = 8


def _random_suffix() -> str:
    return secrets.token_hex(4)


def _timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)


def sanitize_name_suffix(value: str) -> str:
    """Lowercase, keep ASCII letters, digits and dashes; cap at 20 characters.

    Falls back to a random suffix when nothing usable remains.
    """
    cleaned = re.sub(r"[^a-z0-9-]", "-", value.lower())[:MAX_TAG_SUFFIX_LENGTH].strip("-")
    return cleaned or _random_suffix()


def generate_stack_name(
    commit: str = "", tag: str = "", now: Optional[datetime] = None
) -> str:
    """Return ``YYYYMMDD-HHMMSS-<suffix>``.

    The suffix is the sanitized tag, else the first 8 characters of the
    commit, else 8 random hex characters.
    """
    if tag:
        suffix = sanitize_name_suffix(tag)
    elif commit:
        suffix = commit[:SHORT_HASH_LENGTH]
    else:
        suffix = _random_suffix()
    return f"{_timestamp(now)}-{suffix}"


def compose_hash(content: str) -> str:
    """Return the sha256 hex digest of a compose document."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def generate_blueprint_name(content_hash: str, now: Optional[datetime] = None) -> str:
    """Return ``YYYYMMDD-HHMMSS-<hash[:8]>``."""
    return f"{_timestamp(now)}-{content_hash[:SHORT_HASH_LENGTH]}"


DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
DURATION_UNITS = {
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``30m``, ``1h30m`` or ``45s``.

    Raises:
        ValueError: If ``value`` is not a sequence of ``<number><unit>`` parts.
    """
    text = (value or "").strip()
    if not text:
        raise ValueError("Duration cannot be empty")
    position = 0
    total = timedelta(0)
    for match in DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text):
        raise ValueError(f"Invalid duration '{value}'")
    return total


def format_duration(duration: timedelta) -> str:
    """Format a duration the way ``parse_duration`` reads it, e.g. ``1h30m0s``."""
    seconds = int(duration.total_seconds())
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"
