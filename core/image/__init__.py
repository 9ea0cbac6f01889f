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

"""Image domain module.

Resolution of compose service images to digest-pinned references.
"""

from core.image.entities import (
    CandidateAttempt,
    DigestCacheEntry,
    ImageMetadata,
    ImageResolution,
    ResolutionContext,
)
from core.image.exceptions import (
    DeclaredImageNotFoundError,
    ImageDomainError,
    ImageNotFoundError,
    ImageOverrideNotFoundError,
    ImageResolutionError,
    InvalidPlatformError,
    NoImageFoundError,
    RegistryError,
)
from core.image.references import format_image_with_digest, has_digest
from core.image.repositories import ImageChecker
from core.image.services import ImageResolver
from core.image.value_objects import CandidateSource, ImageType, Platform, TagCandidate

__all__ = [
    "CandidateAttempt",
    "DigestCacheEntry",
    "ImageMetadata",
    "ImageResolution",
    "ResolutionContext",
    "DeclaredImageNotFoundError",
    "ImageDomainError",
    "ImageNotFoundError",
    "ImageOverrideNotFoundError",
    "ImageResolutionError",
    "InvalidPlatformError",
    "NoImageFoundError",
    "RegistryError",
    "format_image_with_digest",
    "has_digest",
    "ImageChecker",
    "ImageResolver",
    "CandidateSource",
    "ImageType",
    "Platform",
    "TagCandidate",
]
