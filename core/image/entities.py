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

"""Image domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs to image resolution that are not part of the service itself.

    Attributes:
        commit: Source-control commit hash, tried as a tag.
        branch: Source-control branch, tried as a tag.
        compose_registry: ``x-lissto.registry`` of the compose document.
        compose_repository: ``x-lissto.repository`` of the compose document.
        compose_repository_prefix: ``x-lissto.repositoryPrefix`` of the document.
    """

    commit: str = ""
    branch: str = ""
    compose_registry: str = ""
    compose_repository: str = ""
    compose_repository_prefix: str = ""


@dataclass
class ImageMetadata:
    """What a registry reported about one image reference."""

    exists: bool
    digest: str = ""
    manifest_type: str = ""
    architectures: List[str] = field(default_factory=list)
    platform_digests: Dict[str, str] = field(default_factory=dict)
    is_multi_arch: bool = False
    manifest: Optional[Dict[str, Any]] = None


@dataclass
class CandidateAttempt:
    """Outcome of checking one candidate image URL."""

    image_url: str
    tag: str
    source: str
    success: bool = False
    digest: str = ""
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation."""
        data: Dict[str, Any] = {
            "image_url": self.image_url,
            "tag": self.tag,
            "source": self.source,
            "success": self.success,
        }
        if self.digest:
            data["digest"] = self.digest
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ImageResolution:
    """Result of resolving the image of one service.

    Attributes:
        final_image: Digest-pinned reference, empty when resolution failed.
        method: ``override``, ``original`` or the winning candidate source.
        selected: Human readable reference that produced the digest.
        registry: Registry used for candidate URLs.
        image_name: Repository used for candidate URLs.
        candidates: Every candidate tried, in order.
    """

    final_image: str = ""
    method: str = ""
    selected: str = ""
    registry: str = ""
    image_name: str = ""
    candidates: List[CandidateAttempt] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        """Check if a digest was found."""
        return bool(self.final_image)


@dataclass(frozen=True)
class DigestCacheEntry:
    """Cached outcome of a successful digest lookup."""

    image_url: str
    digest: str
    platform: str
    image_type: str
    cached_at: datetime

    def to_dict(self) -> Dict[str, str]:
        """Return the cache payload."""
        return {
            "image_url": self.image_url,
            "digest": self.digest,
            "platform": self.platform,
            "image_type": self.image_type,
            "cached_at": self.cached_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "DigestCacheEntry":
        """Rebuild an entry from its cache payload.

        Raises:
            KeyError: If a field is missing.
            ValueError: If ``cached_at`` is not ISO 8601.
        """
        return cls(
            image_url=data["image_url"],
            digest=data["digest"],
            platform=data["platform"],
            image_type=data["image_type"],
            cached_at=datetime.fromisoformat(data["cached_at"]),
        )
