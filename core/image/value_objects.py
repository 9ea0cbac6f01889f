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

"""Value objects for the image domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class CandidateSource(str, Enum):
    """Where a tag candidate came from, in resolution priority order."""

    ORIGINAL = "original"
    LABEL = "label"
    COMMIT = "commit"
    BRANCH = "branch"
    LATEST = "latest"


class ResolutionMethod(str, Enum):
    """How the final image of a service was chosen.

    Candidate resolution reports the winning candidate source instead.
    """

    OVERRIDE = "override"
    ORIGINAL = "original"


class ImageType(str, Enum):
    """Cache classification of an image."""

    INFRA = "infra"
    SERVICE = "service"


@dataclass(frozen=True)
class Platform:
    """Target OS/architecture pair of an image.

    Attributes:
        os: Operating system, e.g. ``linux``.
        arch: CPU architecture, e.g. ``amd64``.

    Raises:
        ValueError: If either part is empty or malformed.
    """

    os: str = "linux"
    arch: str = "amd64"

    PART_PATTERN: ClassVar[str] = r"^[A-Za-z0-9_.\-]+$"

    def __post_init__(self) -> None:
        """Validate platform parts."""
        for part_name, part in (("os", self.os), ("arch", self.arch)):
            if not part or not part.strip():
                raise ValueError(f"Platform {part_name} cannot be empty")
            if not re.match(self.PART_PATTERN, part):
                raise ValueError(f"Invalid platform {part_name}: {part}")

    def __str__(self) -> str:
        """Return ``os/arch``."""
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class TagCandidate:
    """One tag hypothesis tried during resolution.

    Attributes:
        tag: Tag to try.
        source: Where the tag came from.
    """

    tag: str
    source: CandidateSource

    def __post_init__(self) -> None:
        """Validate tag."""
        if not self.tag or not self.tag.strip():
            raise ValueError("Candidate tag cannot be empty")
